"""Tests for the optimal window finder."""
from datetime import datetime, timedelta

import pytest

from swim_engine.models.conditions import Conditions, HourlyForecast
from swim_engine.models.profile import Profile, SwimmerLevel
from swim_engine.models.score import ScoreRating, SwimScore
from swim_engine.services.window_finder import WindowFinder

START = datetime(2025, 7, 1, 6, 0)


class FixedScorer:
    """Scores each point with the value carried in its wave_height field."""

    def calculate_score(self, conditions, profile):
        return SwimScore(value=conditions.wave_height, rating=ScoreRating.from_score(conditions.wave_height))


def make_forecast(scores):
    forecast = []
    for i, value in enumerate(scores):
        timestamp = START + timedelta(hours=i)
        forecast.append(HourlyForecast(
            timestamp=timestamp,
            conditions=Conditions(timestamp=timestamp, wave_height=value),
        ))
    return forecast


@pytest.fixture
def finder():
    return WindowFinder(scoring_service=FixedScorer())


@pytest.fixture
def profile():
    return Profile.for_level()


class TestFindOptimalWindow:
    """Tests for WindowFinder.find_optimal_window."""

    def test_picks_highest_average(self, finder, profile):
        """The window with the highest mean wins."""
        forecast = make_forecast([50, 70, 80, 40, 90, 90])

        window = finder.find_optimal_window(forecast, profile, min_duration_hours=2)

        assert window.start == START + timedelta(hours=4)
        assert window.end == START + timedelta(hours=6)
        assert window.average_score == pytest.approx(90.0)

    def test_end_is_last_hour_plus_one(self, finder, profile):
        forecast = make_forecast([80, 80, 80])

        window = finder.find_optimal_window(forecast, profile, min_duration_hours=3)

        assert window.start == START
        assert window.end == START + timedelta(hours=3)
        assert window.duration_string == "3 hours"

    def test_earliest_window_wins_tie(self, finder, profile):
        """Equal averages keep the earliest window."""
        forecast = make_forecast([70, 70, 50, 70, 70])

        window = finder.find_optimal_window(forecast, profile, min_duration_hours=2)

        assert window.start == START
        assert window.average_score == pytest.approx(70.0)

    def test_no_window_below_minimum(self, finder, profile):
        forecast = make_forecast([50, 55, 59, 58])

        assert finder.find_optimal_window(forecast, profile) is None

    def test_average_of_exactly_60_qualifies(self, finder, profile):
        forecast = make_forecast([50, 70])

        window = finder.find_optimal_window(forecast, profile)

        assert window is not None
        assert window.average_score == pytest.approx(60.0)

    def test_window_mean_not_individual_hours(self, finder, profile):
        """One poor hour can sit inside a qualifying window."""
        forecast = make_forecast([30, 95, 95])

        window = finder.find_optimal_window(forecast, profile, min_duration_hours=3)

        assert window.average_score == pytest.approx(220.0 / 3)

    def test_fewer_than_two_points(self, finder, profile):
        """A single point never produces a window, even for a 1-hour window."""
        forecast = make_forecast([95])

        assert finder.find_optimal_window(forecast, profile, min_duration_hours=1) is None

    def test_window_longer_than_forecast(self, finder, profile):
        forecast = make_forecast([90, 90, 90])

        assert finder.find_optimal_window(forecast, profile, min_duration_hours=4) is None

    def test_zero_duration(self, finder, profile):
        forecast = make_forecast([90, 90, 90])

        assert finder.find_optimal_window(forecast, profile, min_duration_hours=0) is None

    def test_accepts_timestamp_condition_pairs(self, finder, profile):
        """Forecast points may be plain (timestamp, Conditions) pairs."""
        pairs = [(point.timestamp, point.conditions) for point in make_forecast([40, 85, 85])]

        window = finder.find_optimal_window(pairs, profile)

        assert window.start == START + timedelta(hours=1)

    def test_custom_min_score(self, profile):
        finder = WindowFinder(scoring_service=FixedScorer(), min_score=80)
        forecast = make_forecast([75, 75, 75])

        assert finder.find_optimal_window(forecast, profile) is None


class TestScoreForecast:
    """Tests for WindowFinder.score_forecast."""

    def test_scores_every_point_in_order(self, finder, profile):
        forecast = make_forecast([10, 20, 30])

        scored = finder.score_forecast(forecast, profile)

        assert [timestamp for timestamp, _ in scored] == [p.timestamp for p in forecast]
        assert [score.value for _, score in scored] == [10, 20, 30]

    def test_real_scorer_default(self, profile):
        """Without an injected scorer the real scoring service is used."""
        finder = WindowFinder()
        forecast = make_forecast([0.1, 0.1])

        scored = finder.score_forecast(forecast, profile)

        assert all(score.value > 0 for _, score in scored)


class TestFindInScores:
    """Tests for WindowFinder.find_in_scores."""

    def test_matches_find_optimal_window(self, finder, profile):
        forecast = make_forecast([50, 70, 80, 40, 90, 90])

        scored = finder.score_forecast(forecast, profile)

        assert finder.find_in_scores(scored, 2) == finder.find_optimal_window(forecast, profile, 2)

    @pytest.mark.parametrize("scores,duration", [
        ([95], 1),
        ([], 2),
        ([90, 90, 90], 0),
    ])
    def test_guards(self, finder, profile, scores, duration):
        scored = finder.score_forecast(make_forecast(scores), profile)

        assert finder.find_in_scores(scored, duration) is None


def real_forecast(conditions_by_hour):
    forecast = []
    for i, overrides in enumerate(conditions_by_hour):
        timestamp = START + timedelta(hours=i)
        forecast.append(HourlyForecast(timestamp=timestamp, conditions=Conditions(timestamp=timestamp, **overrides)))
    return forecast


PERFECT = dict(water_temperature=23.0, wave_height=0.1, wind_speed=5.0, wind_gusts=6.0, wind_direction=90.0)
FAIR = dict(water_temperature=16.0, wave_height=0.4, wind_speed=5.0, wind_gusts=6.0, wind_direction=90.0, weather_code=61)
STORM = dict(PERFECT, weather_code=95)


class TestWindowWithScoringService:
    """Window search over scores from the real scoring service."""

    @pytest.fixture
    def finder(self):
        return WindowFinder()

    @pytest.fixture
    def profile(self):
        return Profile.for_level(SwimmerLevel.INTERMEDIATE)

    def test_only_qualifying_three_hour_block(self, finder, profile):
        """A fair block surrounded by storms is the only window averaging 60+."""
        forecast = real_forecast([STORM, STORM, STORM, FAIR, FAIR, FAIR, STORM, STORM])

        window = finder.find_optimal_window(forecast, profile, min_duration_hours=3)

        # 0.25*0.7 + 0.25*0.6 + 0.2 + 0.1 + 0.1*0.2 + 0.1
        assert window.average_score == pytest.approx(74.5)
        assert window.start == START + timedelta(hours=3)
        assert window.end == START + timedelta(hours=6)

    @pytest.mark.parametrize("hours,expected_average", [
        ([PERFECT, PERFECT], 100.0),
        ([PERFECT, FAIR], 87.25),
        ([PERFECT, STORM], None),
    ])
    def test_two_points_single_window(self, finder, profile, hours, expected_average):
        """Two points and a 2-hour window evaluate exactly one window."""
        window = finder.find_optimal_window(real_forecast(hours), profile, min_duration_hours=2)

        if expected_average is None:
            assert window is None
        else:
            assert window.start == START
            assert window.end == START + timedelta(hours=2)
            assert window.average_score == pytest.approx(expected_average)


class TestTimeWindow:
    """Tests for TimeWindow display helpers."""

    def test_duration_strings(self, finder):
        two_hours = finder.best_window([START, START + timedelta(hours=1)], [80, 80], 2)
        assert two_hours.duration_string == "2 hours"
        assert two_hours.time_range_string == "06:00-08:00"
