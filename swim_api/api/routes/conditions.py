"""API routes for condition reports."""
from fastapi import APIRouter, Depends, HTTPException

from swim_api.schemas.conditions import CachedReportResponse, ReportRequest, ReportResponse
from swim_api.services.report_service import ReportService
from swim_api.api.dependencies import get_report_service

router = APIRouter(prefix="/conditions", tags=["conditions"])


@router.post("/report", response_model=ReportResponse)
async def create_report(
    request: ReportRequest,
    report_service: ReportService = Depends(get_report_service),
) -> ReportResponse:
    """
    Score raw marine and weather payloads for a swimmer.

    Returns the current score with warnings and breakdown, a score for every
    forecast hour, the optimal swim window and ready-to-send alert texts.
    The report is cached when a location_id is given.
    """
    return report_service.build_report(request)


@router.get("/{location_id}", response_model=CachedReportResponse)
async def get_cached_report(
    location_id: str,
    report_service: ReportService = Depends(get_report_service),
) -> CachedReportResponse:
    """Get the last report for a location. Reports expire after an hour."""
    report = report_service.get_cached_report(location_id)
    if report is None:
        raise HTTPException(status_code=404, detail="No current report for location")
    return report
