"""Pydantic schemas for condition reports."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from swim_engine.models.conditions import TideState
from swim_engine.models.profile import SwimmerLevel
from swim_engine.models.score import SafetyWarning, ScoreRating, WarningSeverity
from swim_api.schemas.profile import ProfileSchema


class ReportRequest(BaseModel):
    """Raw provider payloads plus the swimmer to score them for."""

    marine: Dict[str, Any] = Field(description="Marine response or its 'hourly' block")
    atmospheric_hourly: Dict[str, Any] = Field(description="Weather forecast response or its 'hourly' block")
    atmospheric_current: Optional[Dict[str, Any]] = Field(
        default=None, description="Current weather response or its 'current' block"
    )
    daily: Optional[Dict[str, Any]] = Field(default=None, description="Daily sunrise/sunset block")
    profile: Optional[ProfileSchema] = None
    level: Optional[SwimmerLevel] = Field(default=None, description="Used when no profile is given")
    now: Optional[datetime] = Field(default=None, description="Reference time (UTC)")
    min_duration_hours: Optional[int] = Field(default=None, ge=1, le=24)
    location_id: Optional[str] = Field(default=None, description="Cache the report under this ID")
    location_name: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class ConditionsSchema(BaseModel):
    timestamp: datetime
    wave_height: float
    wave_direction: float
    wave_period: float
    swell_height: float
    water_temperature: float
    sea_level: float
    wind_speed: float
    wind_gusts: float
    wind_direction: float
    wind_direction_cardinal: str
    weather_code: int
    weather_description: str
    uv_index: float
    air_temperature: float
    precipitation: float
    tide_phase: Optional[TideState] = None
    tide_state: TideState


class WarningSchema(BaseModel):
    kind: SafetyWarning
    message: str
    severity: WarningSeverity


class BreakdownSchema(BaseModel):
    temperature_score: float
    wave_score: float
    wind_score: float
    direction_score: float
    weather_score: float
    tide_score: float


class TimeWindowSchema(BaseModel):
    start: datetime
    end: datetime  # exclusive
    average_score: float
    duration_string: str


class ScoreSchema(BaseModel):
    value: float
    display_value: int
    rating: ScoreRating
    rating_label: str
    rating_message: str
    warnings: List[WarningSchema]
    breakdown: BreakdownSchema
    optimal_window: Optional[TimeWindowSchema] = None


class ForecastHourSchema(BaseModel):
    timestamp: datetime
    is_daylight: Optional[bool] = None
    conditions: ConditionsSchema
    score: ScoreSchema


class AlertsSchema(BaseModel):
    daily_summary: str
    location_update: str
    optimal_window: Optional[str] = None
    safety: Optional[str] = None


class ReportResponse(BaseModel):
    """Current conditions, scored forecast and optimal window for a location."""

    location_id: Optional[str] = None
    location_name: Optional[str] = None
    level: SwimmerLevel
    generated_at: datetime
    conditions: ConditionsSchema
    score: ScoreSchema
    forecast: List[ForecastHourSchema]
    optimal_window: Optional[TimeWindowSchema] = None
    alerts: AlertsSchema


class CachedReportResponse(ReportResponse):
    cached_at: datetime
    expires_at: datetime
    is_stale: bool
