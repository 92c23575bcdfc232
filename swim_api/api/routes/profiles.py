"""API routes for swimmer profiles."""
from typing import List

from fastapi import APIRouter, HTTPException

from swim_api.schemas.profile import LevelInfo, ProfileResponse
from swim_engine.models.profile import Profile, SwimmerLevel

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/levels", response_model=List[LevelInfo])
async def get_levels() -> List[LevelInfo]:
    """Get all swimmer levels."""
    return [
        LevelInfo(level=level, label=level.label, description=level.description)
        for level in SwimmerLevel
    ]


@router.get("/{level}", response_model=ProfileResponse)
async def get_default_profile(level: str) -> ProfileResponse:
    """Get the default thresholds and weights for a swimmer level."""
    try:
        swimmer_level = SwimmerLevel(level)
    except ValueError:
        raise HTTPException(status_code=404, detail="Unknown swimmer level")
    return ProfileResponse.from_profile(Profile.for_level(swimmer_level))
