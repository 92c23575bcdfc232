"""Service that runs normalization, scoring and window search end to end."""
import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from attrs import evolve

from swim_engine.config import DEFAULT_WINDOW_HOURS
from swim_engine.models.assessment import Assessment
from swim_engine.models.profile import Profile
from swim_engine.services.forecast_normalizer import ForecastNormalizer
from swim_engine.services.scoring_service import ScoringService
from swim_engine.services.window_finder import WindowFinder

logger = logging.getLogger(__name__)


class AssessmentService:
    """Assesses raw provider payloads for a swimmer profile."""

    def __init__(
        self,
        normalizer: ForecastNormalizer = None,
        scoring_service: ScoringService = None,
        window_finder: WindowFinder = None,
    ):
        self.normalizer = normalizer or ForecastNormalizer()
        self.scoring_service = scoring_service or ScoringService()
        self.window_finder = window_finder or WindowFinder(scoring_service=self.scoring_service)

    def assess(
        self,
        profile: Profile,
        marine: Optional[Mapping[str, Any]],
        atmospheric_current: Optional[Mapping[str, Any]],
        atmospheric_hourly: Optional[Mapping[str, Any]],
        daily: Optional[Mapping[str, Any]] = None,
        now: Optional[datetime] = None,
        min_duration_hours: int = DEFAULT_WINDOW_HOURS,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Assessment:
        """
        Normalize payloads, score the current conditions and every forecast hour,
        and find the optimal window.

        The optimal window is returned on the assessment and also attached to
        the current score unless the current conditions are disqualifying.
        """
        conditions, forecast = self.normalizer.normalize(
            marine,
            atmospheric_current,
            atmospheric_hourly,
            daily=daily,
            now=now,
            latitude=latitude,
            longitude=longitude,
        )

        forecast_scores = self.window_finder.score_forecast(forecast, profile)
        window = self.window_finder.find_in_scores(forecast_scores, min_duration_hours)

        score = self.scoring_service.calculate_score(conditions, profile)
        # Disqualified scores never carry a window
        if window is not None and self.scoring_service.disqualifying_warning(conditions) is None:
            score = evolve(score, optimal_window=window)

        logger.info(
            "Assessed %d forecast hours: now=%.1f (%s), window=%s",
            len(forecast),
            score.value,
            score.rating.value,
            "none" if window is None else window.time_range_string,
        )

        return Assessment(
            conditions=conditions,
            score=score,
            forecast=forecast,
            forecast_scores=forecast_scores,
            optimal_window=window,
        )
