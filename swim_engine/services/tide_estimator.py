"""Service for inferring tidal phase from sea level samples."""
from datetime import datetime
from typing import List, Optional, Sequence

import numpy as np

from swim_engine.config import TIDE_EXTREMA_THRESHOLD, TIDE_WINDOW_HALF_WIDTH
from swim_engine.models.conditions import TideState


class TideEstimator:
    """
    Classifies each sample of a sea level series as high, low, rising or falling.

    This is a local extrema/slope heuristic over a sliding window, not a tidal
    harmonics model. It only sees the samples it is given, so phases near the
    edges of a forecast are less reliable than those in the middle.
    """

    def __init__(
        self,
        half_width: int = TIDE_WINDOW_HALF_WIDTH,
        extrema_threshold: float = TIDE_EXTREMA_THRESHOLD,
    ):
        """
        Initialize the estimator.

        Args:
            half_width: Samples on each side of the index included in the window
            extrema_threshold: Fraction of the detrended range within which a
                               sample counts as a local high or low
        """
        self.half_width = half_width
        self.extrema_threshold = extrema_threshold

    def estimate(
        self,
        times: Sequence[datetime],
        sea_levels: Sequence[float],
        index: int,
    ) -> Optional[TideState]:
        """
        Estimate the tide phase at one index.

        Args:
            times: Timestamps aligned 1:1 with sea_levels
            sea_levels: Sea level samples (meters)
            index: Position to classify

        Returns:
            TideState, or None if there are fewer than 3 samples, the series are
            misaligned, or the index is out of range
        """
        count = len(sea_levels)
        if count < 3 or len(times) != count or not 0 <= index < count:
            return None

        levels = np.asarray(sea_levels, dtype=float)

        window_start = max(0, index - self.half_width)
        window_end = min(count, index + self.half_width + 1)
        window = levels[window_start:window_end]

        detrended = window - window.mean()
        max_level = detrended.max()
        min_level = detrended.min()
        level_range = max_level - min_level
        if level_range == 0:
            return TideState.MID

        threshold = self.extrema_threshold * level_range
        current = detrended[index - window_start]

        if abs(current - max_level) <= threshold:
            return TideState.HIGH
        if abs(current - min_level) <= threshold:
            return TideState.LOW

        if 0 < index < count - 1:
            slope = levels[index + 1] - levels[index - 1]
        elif index > 0:
            slope = levels[index] - levels[index - 1]
        else:
            slope = levels[index + 1] - levels[index]

        return TideState.RISING if slope > 0 else TideState.FALLING

    def estimate_series(
        self,
        times: Sequence[datetime],
        sea_levels: Sequence[float],
    ) -> List[Optional[TideState]]:
        """Estimate the tide phase at every index of a series."""
        return [self.estimate(times, sea_levels, i) for i in range(len(sea_levels))]
