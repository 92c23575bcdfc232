"""Tests for tide phase estimation."""
from datetime import datetime, timedelta

import numpy as np
import pytest

from swim_engine.models.conditions import Conditions, TideState
from swim_engine.services.tide_estimator import TideEstimator

START = datetime(2025, 7, 1, 0, 0)


def hours(count):
    return [START + timedelta(hours=i) for i in range(count)]


@pytest.fixture
def estimator():
    return TideEstimator()


class TestTideEstimator:
    """Tests for TideEstimator.estimate."""

    def test_too_few_samples(self, estimator):
        assert estimator.estimate(hours(2), [0.1, 0.2], 0) is None

    def test_misaligned_series(self, estimator):
        assert estimator.estimate(hours(4), [0.1, 0.2, 0.3], 1) is None

    @pytest.mark.parametrize("index", [-1, 5])
    def test_index_out_of_range(self, estimator, index):
        assert estimator.estimate(hours(5), [0.0, 1.0, 2.0, 1.0, 0.0], index) is None

    def test_flat_series_is_mid(self, estimator):
        assert estimator.estimate(hours(5), [0.3] * 5, 2) == TideState.MID

    def test_triangle_wave(self, estimator):
        """Peak is high, troughs are low, flanks rise and fall."""
        levels = [0.0, 1.0, 2.0, 3.0, 4.0, 3.0, 2.0, 1.0, 0.0]
        times = hours(len(levels))

        assert estimator.estimate(times, levels, 4) == TideState.HIGH
        assert estimator.estimate(times, levels, 0) == TideState.LOW
        assert estimator.estimate(times, levels, 8) == TideState.LOW
        assert estimator.estimate(times, levels, 2) == TideState.RISING
        assert estimator.estimate(times, levels, 6) == TideState.FALLING

    @pytest.mark.parametrize("levels,index,state", [
        ([0, 0, 0, 1, 2, 3, 2, 1, 0, 0, 0], 5, TideState.HIGH),
        ([0, 1, 2, 3, 2, 1, 0], 1, TideState.RISING),
        ([0, 1, 2, 3, 2, 1, 0], 5, TideState.FALLING),
        ([3, 3, 3, 2, 1, 0, 1, 2, 3, 3, 3], 5, TideState.LOW),
    ])
    def test_reference_series(self, estimator, levels, index, state):
        assert estimator.estimate(hours(len(levels)), levels, index) == state

    def test_near_extreme_counts_as_high(self, estimator):
        """Within 5% of the window range of the maximum is high."""
        levels = [0.0, 1.0, 1.97, 2.0, 1.0, 0.0]

        assert estimator.estimate(hours(len(levels)), levels, 2) == TideState.HIGH

    def test_forward_difference_at_start(self, estimator):
        levels = [2.0, 3.0, 5.0, 0.0]

        assert estimator.estimate(hours(4), levels, 0) == TideState.RISING

    def test_backward_difference_at_end(self, estimator):
        levels = [0.0, 5.0, 3.0, 2.0]

        assert estimator.estimate(hours(4), levels, 3) == TideState.FALLING

    def test_zero_slope_is_falling(self, estimator):
        levels = [1.0, 2.0, 1.0, 5.0, 0.0]

        assert estimator.estimate(hours(5), levels, 1) == TideState.FALLING

    def test_window_includes_twelve_samples_after(self, estimator):
        """A spike 12 samples ahead is inside the window and dominates the range."""
        levels = np.zeros(40)
        levels[20] = 1.0
        levels[32] = 5.0

        assert estimator.estimate(hours(40), levels.tolist(), 20) == TideState.FALLING

    def test_window_excludes_thirteen_samples_after(self, estimator):
        levels = np.zeros(40)
        levels[20] = 1.0
        levels[33] = 5.0

        assert estimator.estimate(hours(40), levels.tolist(), 20) == TideState.HIGH

    def test_window_includes_twelve_samples_before(self, estimator):
        levels = np.zeros(40)
        levels[20] = 1.0
        levels[8] = 5.0

        assert estimator.estimate(hours(40), levels.tolist(), 20) == TideState.FALLING

    def test_semidiurnal_cycle(self, estimator):
        """A 12.42 h sinusoid is high at its crest and low at its trough."""
        t = np.arange(48)
        levels = np.cos(2 * np.pi * t / 12.42).tolist()
        times = hours(48)

        assert estimator.estimate(times, levels, 25) == TideState.HIGH
        assert estimator.estimate(times, levels, 19) == TideState.LOW
        assert estimator.estimate(times, levels, 22) == TideState.RISING
        assert estimator.estimate(times, levels, 28) == TideState.FALLING

    def test_estimate_series(self, estimator):
        levels = [0.0, 1.0, 2.0, 1.0, 0.0]

        phases = estimator.estimate_series(hours(5), levels)

        assert phases == [TideState.LOW, TideState.RISING, TideState.HIGH, TideState.FALLING, TideState.LOW]


class TestTideStateFallback:
    """Tests for the sea level sign fallback on Conditions."""

    @pytest.mark.parametrize("sea_level,state", [
        (0.6, TideState.HIGH),
        (0.5, TideState.MID),
        (0.0, TideState.MID),
        (-0.5, TideState.MID),
        (-0.6, TideState.LOW),
    ])
    def test_from_sea_level(self, sea_level, state):
        assert Conditions(timestamp=START, sea_level=sea_level).tide_state == state

    def test_estimated_phase_takes_precedence(self):
        conditions = Conditions(timestamp=START, sea_level=0.9, tide_phase=TideState.FALLING)
        assert conditions.tide_state == TideState.FALLING
