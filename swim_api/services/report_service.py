"""Service for building condition reports from raw provider payloads."""
from typing import Optional

from swim_api.config import settings
from swim_api.data.report_cache import ReportCache
from swim_api.schemas.conditions import (
    AlertsSchema,
    BreakdownSchema,
    CachedReportResponse,
    ConditionsSchema,
    ForecastHourSchema,
    ReportRequest,
    ReportResponse,
    ScoreSchema,
    TimeWindowSchema,
    WarningSchema,
)
from swim_engine.models.conditions import Conditions
from swim_engine.models.profile import Profile
from swim_engine.models.score import SwimScore, TimeWindow
from swim_engine.services.alert_composer import AlertComposer
from swim_engine.services.assessment_service import AssessmentService
from swim_engine.utils.time_utils import to_naive_utc, utc_now


def conditions_schema(conditions: Conditions) -> ConditionsSchema:
    return ConditionsSchema(
        timestamp=conditions.timestamp,
        wave_height=conditions.wave_height,
        wave_direction=conditions.wave_direction,
        wave_period=conditions.wave_period,
        swell_height=conditions.swell_height,
        water_temperature=conditions.water_temperature,
        sea_level=conditions.sea_level,
        wind_speed=conditions.wind_speed,
        wind_gusts=conditions.wind_gusts,
        wind_direction=conditions.wind_direction,
        wind_direction_cardinal=conditions.wind_direction_cardinal,
        weather_code=conditions.weather_code,
        weather_description=conditions.weather_description,
        uv_index=conditions.uv_index,
        air_temperature=conditions.air_temperature,
        precipitation=conditions.precipitation,
        tide_phase=conditions.tide_phase,
        tide_state=conditions.tide_state,
    )


def window_schema(window: Optional[TimeWindow]) -> Optional[TimeWindowSchema]:
    if window is None:
        return None
    return TimeWindowSchema(
        start=window.start,
        end=window.end,
        average_score=window.average_score,
        duration_string=window.duration_string,
    )


def score_schema(score: SwimScore) -> ScoreSchema:
    b = score.breakdown
    return ScoreSchema(
        value=score.value,
        display_value=score.display_value,
        rating=score.rating,
        rating_label=score.rating.label,
        rating_message=score.rating.message,
        warnings=[
            WarningSchema(kind=w, message=w.message, severity=w.severity)
            for w in score.warnings
        ],
        breakdown=BreakdownSchema(
            temperature_score=b.temperature_score,
            wave_score=b.wave_score,
            wind_score=b.wind_score,
            direction_score=b.direction_score,
            weather_score=b.weather_score,
            tide_score=b.tide_score,
        ),
        optimal_window=window_schema(score.optimal_window),
    )


class ReportService:
    """Builds, caches and serves condition reports."""

    def __init__(
        self,
        assessment_service: AssessmentService = None,
        report_cache: ReportCache = None,
        alert_composer: AlertComposer = None,
    ):
        """Initialize service with its collaborators."""
        self.assessment_service = assessment_service or AssessmentService()
        self.report_cache = report_cache or ReportCache()
        self.alert_composer = alert_composer or AlertComposer()

    def resolve_profile(self, request: ReportRequest) -> Profile:
        """Use the request's profile, else the defaults for its level, else the configured level."""
        if request.profile is not None:
            return request.profile.to_profile()
        return Profile.for_level(request.level or settings.default_level)

    def build_report(self, request: ReportRequest) -> ReportResponse:
        """
        Assess the payloads in a request and cache the report when a location ID is given.

        Args:
            request: Raw payloads, profile and options

        Returns:
            ReportResponse with current score, scored forecast, window and alert texts
        """
        profile = self.resolve_profile(request)
        assessment = self.assessment_service.assess(
            profile,
            request.marine,
            request.atmospheric_current,
            request.atmospheric_hourly,
            daily=request.daily,
            now=to_naive_utc(request.now) if request.now else None,
            min_duration_hours=request.min_duration_hours or settings.default_window_hours,
            latitude=request.latitude,
            longitude=request.longitude,
        )

        location = request.location_name or "your location"
        score = assessment.score
        window = assessment.optimal_window
        alerts = AlertsSchema(
            daily_summary=self.alert_composer.daily_summary(score),
            location_update=self.alert_composer.location_update(score, request.location_name),
            optimal_window=(
                self.alert_composer.optimal_window(window, request.location_name)
                if window is not None else None
            ),
            safety=self.alert_composer.safety_alert(score.warnings, location),
        )

        report = ReportResponse(
            location_id=request.location_id,
            location_name=request.location_name,
            level=profile.level,
            generated_at=utc_now(),
            conditions=conditions_schema(assessment.conditions),
            score=score_schema(score),
            forecast=[
                ForecastHourSchema(
                    timestamp=hour.timestamp,
                    is_daylight=hour.is_daylight,
                    conditions=conditions_schema(hour.conditions),
                    score=score_schema(hour_score),
                )
                for hour, (_, hour_score) in zip(assessment.forecast, assessment.forecast_scores)
            ],
            optimal_window=window_schema(window),
            alerts=alerts,
        )

        if request.location_id:
            self.report_cache.put(request.location_id, report)

        return report

    def get_cached_report(self, location_id: str) -> Optional[CachedReportResponse]:
        """Get the cached report for a location, or None if missing or expired."""
        now = utc_now()
        entry = self.report_cache.get(location_id, now)
        if entry is None:
            return None
        return CachedReportResponse(
            **entry.report.model_dump(),
            cached_at=entry.cached_at,
            expires_at=entry.expires_at,
            is_stale=entry.is_stale(now),
        )
