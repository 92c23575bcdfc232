"""Service for finding the best contiguous swim window in a forecast."""
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from swim_engine.config import DEFAULT_WINDOW_HOURS, MIN_WINDOW_SCORE
from swim_engine.models.conditions import Conditions, HourlyForecast
from swim_engine.models.profile import Profile
from swim_engine.models.score import SwimScore, TimeWindow
from swim_engine.services.scoring_service import ScoringService

ForecastPoint = Union[HourlyForecast, Tuple[datetime, Conditions]]


def _unpack(point: ForecastPoint) -> Tuple[datetime, Conditions]:
    if isinstance(point, HourlyForecast):
        return point.timestamp, point.conditions
    timestamp, conditions = point
    return timestamp, conditions


class WindowFinder:
    """Finds the best-scoring block of consecutive forecast hours.

    Assumes hourly sampling: a window's end is its last hour plus one hour.
    """

    def __init__(
        self,
        scoring_service: ScoringService = None,
        min_score: float = MIN_WINDOW_SCORE,
    ):
        """
        Initialize the window finder.

        Args:
            scoring_service: Scorer applied to each forecast point
            min_score: Minimum window average for a window to qualify
        """
        self.scoring_service = scoring_service or ScoringService()
        self.min_score = min_score

    def score_forecast(
        self,
        forecast: Sequence[ForecastPoint],
        profile: Profile,
    ) -> List[Tuple[datetime, SwimScore]]:
        """Score every forecast point."""
        scored = []
        for point in forecast:
            timestamp, conditions = _unpack(point)
            scored.append((timestamp, self.scoring_service.calculate_score(conditions, profile)))
        return scored

    def find_optimal_window(
        self,
        forecast: Sequence[ForecastPoint],
        profile: Profile,
        min_duration_hours: int = DEFAULT_WINDOW_HOURS,
    ) -> Optional[TimeWindow]:
        """
        Find the best window of exactly ``min_duration_hours`` consecutive points.

        Every start offset is tried. A window qualifies when its mean score is at
        least ``min_score``; among qualifying windows the highest mean wins and
        the earliest window wins a tie.

        Args:
            forecast: Ordered HourlyForecast records or (timestamp, Conditions) pairs
            profile: Swimmer profile
            min_duration_hours: Window length in points (hours)

        Returns:
            Best TimeWindow, or None if there are fewer than 2 points or no
            window qualifies
        """
        return self.find_in_scores(self.score_forecast(forecast, profile), min_duration_hours)

    def find_in_scores(
        self,
        scored: Sequence[Tuple[datetime, SwimScore]],
        min_duration_hours: int = DEFAULT_WINDOW_HOURS,
    ) -> Optional[TimeWindow]:
        """
        Find the best window in an already scored forecast.

        Applies the same rules as ``find_optimal_window`` without rescoring.

        Args:
            scored: Ordered (timestamp, SwimScore) pairs, as from ``score_forecast``
            min_duration_hours: Window length in points (hours)

        Returns:
            Best TimeWindow, or None if there are fewer than 2 points or no
            window qualifies
        """
        if len(scored) < 2 or min_duration_hours < 1:
            return None

        return self.best_window(
            [timestamp for timestamp, _ in scored],
            [score.value for _, score in scored],
            min_duration_hours,
        )

    def best_window(
        self,
        timestamps: Sequence[datetime],
        scores: Sequence[float],
        window_size: int,
    ) -> Optional[TimeWindow]:
        """Slide a fixed-size window over precomputed scores and keep the best."""
        values = np.asarray(scores, dtype=float)
        if window_size < 1 or len(values) < window_size:
            return None

        best_window = None
        best_average = 0.0

        for start in range(len(values) - window_size + 1):
            average = float(values[start:start + window_size].mean())
            if average >= self.min_score and average > best_average:
                best_average = average
                best_window = TimeWindow(
                    start=timestamps[start],
                    end=timestamps[start + window_size - 1] + timedelta(hours=1),
                    average_score=average,
                )

        return best_window
