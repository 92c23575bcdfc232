"""Tests for the daylight service."""
from datetime import date, datetime, timezone

import numpy as np
import pytest

from swim_engine.services.daylight_service import DaylightService


class TestDaylightService:
    """Tests for DaylightService."""

    def test_get_sunrise_sunset_mid_latitude_summer(self):
        """Test sunrise/sunset for mid-latitude location in summer."""
        service = DaylightService(depression_angle=0)

        # Amsterdam, Netherlands (52.37°N) on June 21 (summer solstice)
        sunrise, sunset = service.get_sunrise_sunset_utc(52.37, 4.89, date(2024, 6, 21))

        # Summer in Amsterdam: sunrise around 3:15-3:30 UTC, sunset around 20:00-20:30 UTC
        assert sunrise.hour < 5
        assert sunset.hour > 19
        assert sunrise.tzinfo is None

    def test_get_sunrise_sunset_mid_latitude_winter(self):
        """Test sunrise/sunset for mid-latitude location in winter."""
        service = DaylightService(depression_angle=0)

        sunrise, sunset = service.get_sunrise_sunset_utc(52.37, 4.89, date(2024, 12, 21))

        assert sunrise.hour >= 7
        assert sunset.hour < 17

    def test_civil_twilight_extends_window(self):
        """Test sunrise/sunset with civil twilight (6 degree depression)."""
        day = date(2024, 6, 21)
        sunrise, sunset = DaylightService(depression_angle=6).get_sunrise_sunset_utc(52.37, 4.89, day)
        sunrise_geo, sunset_geo = DaylightService(depression_angle=0).get_sunrise_sunset_utc(52.37, 4.89, day)

        assert sunrise < sunrise_geo
        assert sunset > sunset_geo

    def test_polar_day_is_full_day(self):
        """Svalbard in midsummer has daylight all day."""
        service = DaylightService()

        sunrise, sunset = service.get_sunrise_sunset_utc(78.22, 15.65, date(2024, 6, 21))

        assert sunrise == datetime(2024, 6, 21, 0, 0)
        assert sunset == datetime(2024, 6, 21, 23, 59, 59)

    def test_polar_night_has_no_window(self):
        service = DaylightService()

        assert service.get_sunrise_sunset_utc(78.22, 15.65, date(2024, 12, 21)) is None
        assert service.windows_for_location(78.22, 15.65, [date(2024, 12, 21)]) == []

    def test_windows_for_location_one_per_day(self):
        service = DaylightService()
        days = [date(2024, 6, 21), date(2024, 6, 22), date(2024, 6, 21)]

        windows = service.windows_for_location(52.37, 4.89, days)

        assert len(windows) == 2
        assert windows[0][0].date() == date(2024, 6, 21)

    def test_cache(self):
        """Repeated calls give the same result and the cache can be cleared."""
        service = DaylightService()

        result1 = service.get_sunrise_sunset_utc(52.37, 4.89, date(2024, 6, 21))
        result2 = service.get_sunrise_sunset_utc(52.37, 4.89, date(2024, 6, 21))

        assert result1 == result2
        assert len(service._cache) == 1

        service.clear_cache()
        assert len(service._cache) == 0


class TestDaylightWindows:
    """Tests for provider windows and daylight flags."""

    def test_build_windows_pairs_strings(self):
        service = DaylightService()

        windows = service.build_windows(
            ["2025-07-01T05:12", "2025-07-02T05:13", "2025-07-03T05:14"],
            ["2025-07-01T21:40", "2025-07-02T21:39"],
        )

        assert windows == [
            (datetime(2025, 7, 1, 5, 12), datetime(2025, 7, 1, 21, 40)),
            (datetime(2025, 7, 2, 5, 13), datetime(2025, 7, 2, 21, 39)),
        ]

    def test_build_windows_missing_arrays(self):
        assert DaylightService().build_windows(None, ["2025-07-01T21:40"]) == []

    def test_is_daylight_inclusive_bounds(self):
        service = DaylightService()
        windows = [(datetime(2025, 7, 1, 5, 0), datetime(2025, 7, 1, 21, 0))]

        assert service.is_daylight(datetime(2025, 7, 1, 5, 0), windows) is True
        assert service.is_daylight(datetime(2025, 7, 1, 21, 0), windows) is True
        assert service.is_daylight(datetime(2025, 7, 1, 22, 0), windows) is False

    def test_is_daylight_unknown_without_windows(self):
        assert DaylightService().is_daylight(datetime(2025, 7, 1, 12, 0), []) is None

    def test_is_daylight_aware_timestamp(self):
        service = DaylightService()
        windows = [(datetime(2025, 7, 1, 5, 0), datetime(2025, 7, 1, 21, 0))]

        assert service.is_daylight(datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc), windows) is True

    def test_create_daylight_mask_filters_nighttime(self):
        """Test create_daylight_mask properly filters nighttime hours."""
        service = DaylightService(depression_angle=0)
        windows = service.windows_for_location(52.37, 4.89, [date(2024, 6, 21)])
        timestamps = [datetime(2024, 6, 21, h, 0) for h in range(24)]

        mask = service.create_daylight_mask(timestamps, windows)

        assert 0 < mask.sum() < len(mask)
        assert mask[12]
        # Early morning (00:00-02:00 UTC) is night in Amsterdam
        assert not mask[0:3].any()

    def test_create_daylight_mask_without_windows(self):
        mask = DaylightService().create_daylight_mask([datetime(2024, 6, 21, 12, 0)], [])

        assert isinstance(mask, np.ndarray)
        assert not mask.any()
