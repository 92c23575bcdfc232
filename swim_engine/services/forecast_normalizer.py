"""Service for merging raw marine and atmospheric forecasts into Conditions."""
import logging
import math
from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from swim_engine.config import (
    FALLBACK_AIR_TEMPERATURE,
    FALLBACK_NUMERIC,
    FALLBACK_WEATHER_CODE,
)
from swim_engine.models.conditions import Conditions, HourlyForecast
from swim_engine.services.daylight_service import DaylightService, DaylightWindow
from swim_engine.services.tide_estimator import TideEstimator
from swim_engine.utils.time_utils import nearest_index, parse_timestamps, to_naive_utc, utc_now

logger = logging.getLogger(__name__)

# Provider key -> Conditions attribute
MARINE_FIELDS = {
    "wave_height": "wave_height",
    "wave_direction": "wave_direction",
    "wave_period": "wave_period",
    "swell_wave_height": "swell_height",
    "sea_surface_temperature": "water_temperature",
    "sea_level_height_msl": "sea_level",
}

ATMOSPHERIC_FIELDS = {
    "wind_speed_10m": "wind_speed",
    "wind_gusts_10m": "wind_gusts",
    "wind_direction_10m": "wind_direction",
    "weather_code": "weather_code",
    "uv_index": "uv_index",
    "temperature_2m": "air_temperature",
    "precipitation": "precipitation",
}

FALLBACKS = {
    "air_temperature": FALLBACK_AIR_TEMPERATURE,
    "weather_code": FALLBACK_WEATHER_CODE,
}

Series = Optional[List[float]]


def _unwrap(payload: Optional[Mapping[str, Any]], key: str) -> Mapping[str, Any]:
    """Return payload[key] for a full provider response, or the payload itself if already a block."""
    if not payload:
        return {}
    block = payload.get(key)
    if isinstance(block, Mapping):
        return block
    return payload


def _fallback(attr: str) -> float:
    return FALLBACKS.get(attr, FALLBACK_NUMERIC)


def _is_number(value: Any) -> bool:
    """A finite int or float. Booleans and NaN/inf do not count as readings."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _coerce(attr: str, value: float):
    if attr == "weather_code":
        return int(round(value))
    return float(value)


class ForecastNormalizer:
    """
    Merges independently sampled marine and atmospheric series into Conditions.

    Missing data never raises: absent series and out-of-range indices take
    fallback values, and null hours inside a series are forward/backward filled.
    """

    def __init__(
        self,
        tide_estimator: TideEstimator = None,
        daylight_service: DaylightService = None,
    ):
        self.tide_estimator = tide_estimator or TideEstimator()
        self.daylight_service = daylight_service or DaylightService()

    def _filled_series(self, block: Mapping[str, Any], key: str) -> Series:
        """
        Extract a numeric series with null hours filled from their neighbours.

        Returns:
            List of floats, or None if the series is absent or entirely null
        """
        values = block.get(key)
        if not isinstance(values, (list, tuple)) or len(values) == 0:
            return None

        series = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce")
        if series.isna().all():
            logger.debug("Series '%s' has no values, using fallback", key)
            return None

        return series.ffill().bfill().astype(float).tolist()

    def _value_at(self, series: Series, index: Optional[int], attr: str):
        if series is None or index is None or index >= len(series):
            return _coerce(attr, _fallback(attr))
        return _coerce(attr, series[index])

    def _extract(self, block: Mapping[str, Any], fields: Dict[str, str]) -> Dict[str, Series]:
        return {attr: self._filled_series(block, key) for key, attr in fields.items()}

    def _daylight_windows(
        self,
        daily: Mapping[str, Any],
        times: List[datetime],
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> List[DaylightWindow]:
        windows = self.daylight_service.build_windows(daily.get("sunrise"), daily.get("sunset"))
        if windows or latitude is None or longitude is None or not times:
            return windows

        # Include neighbouring days so windows that straddle UTC midnight are covered
        days = set()
        for t in times:
            days.update({(t - timedelta(days=1)).date(), t.date(), (t + timedelta(days=1)).date()})
        return self.daylight_service.windows_for_location(latitude, longitude, days)

    def combine_conditions(
        self,
        marine: Mapping[str, Any],
        current: Mapping[str, Any],
        atmospheric_hourly: Mapping[str, Any],
        now: Optional[datetime] = None,
    ) -> Conditions:
        """
        Build the conditions for the sample closest to ``now``.

        Atmospheric fields prefer the explicit current value, then the hourly
        value at the matching time, then the fallback.
        """
        now = to_naive_utc(now) if now is not None else utc_now()

        marine_times = parse_timestamps(marine.get("time"))
        marine_index = nearest_index(marine_times, now)
        timestamp = marine_times[marine_index] if marine_index is not None else now

        atmospheric_times = parse_timestamps(atmospheric_hourly.get("time"))
        if atmospheric_times:
            atmospheric_index = nearest_index(atmospheric_times, timestamp)
        else:
            atmospheric_index = marine_index

        marine_series = self._extract(marine, MARINE_FIELDS)
        hourly_series = self._extract(atmospheric_hourly, ATMOSPHERIC_FIELDS)

        values: Dict[str, Any] = {
            attr: self._value_at(series, marine_index, attr)
            for attr, series in marine_series.items()
        }

        for key, attr in ATMOSPHERIC_FIELDS.items():
            current_value = current.get(key)
            if _is_number(current_value):
                values[attr] = _coerce(attr, current_value)
            else:
                values[attr] = self._value_at(hourly_series[attr], atmospheric_index, attr)

        tide_phase = None
        sea_levels = marine_series["sea_level"]
        if marine_index is not None and sea_levels is not None:
            tide_phase = self.tide_estimator.estimate(marine_times, sea_levels, marine_index)

        return Conditions(timestamp=timestamp, tide_phase=tide_phase, **values)

    def combine_forecast(
        self,
        marine: Mapping[str, Any],
        atmospheric_hourly: Mapping[str, Any],
        daily: Optional[Mapping[str, Any]] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> List[HourlyForecast]:
        """
        Build one HourlyForecast per aligned index.

        The number of points is the shortest of the marine times, the wave
        height series and the air temperature series.
        """
        marine_times = parse_timestamps(marine.get("time"))
        count = min(
            len(marine_times),
            len(marine.get("wave_height") or []),
            len(atmospheric_hourly.get("temperature_2m") or []),
        )
        if count == 0:
            return []

        marine_series = self._extract(marine, MARINE_FIELDS)
        hourly_series = self._extract(atmospheric_hourly, ATMOSPHERIC_FIELDS)

        sea_levels = marine_series["sea_level"]
        if sea_levels is not None:
            tide_phases = self.tide_estimator.estimate_series(marine_times, sea_levels)
        else:
            tide_phases = []

        windows = self._daylight_windows(daily or {}, marine_times[:count], latitude, longitude)

        forecasts = []
        for index in range(count):
            timestamp = marine_times[index]
            values = {attr: self._value_at(series, index, attr) for attr, series in marine_series.items()}
            values.update(
                {attr: self._value_at(series, index, attr) for attr, series in hourly_series.items()}
            )
            conditions = Conditions(
                timestamp=timestamp,
                tide_phase=tide_phases[index] if index < len(tide_phases) else None,
                **values,
            )
            forecasts.append(HourlyForecast(
                timestamp=timestamp,
                conditions=conditions,
                is_daylight=self.daylight_service.is_daylight(timestamp, windows),
            ))

        return forecasts

    def normalize(
        self,
        marine: Optional[Mapping[str, Any]],
        atmospheric_current: Optional[Mapping[str, Any]],
        atmospheric_hourly: Optional[Mapping[str, Any]],
        daily: Optional[Mapping[str, Any]] = None,
        now: Optional[datetime] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Tuple[Conditions, List[HourlyForecast]]:
        """
        Normalize raw provider payloads.

        Each payload may be a full provider response or just its
        ``hourly``/``current``/``daily`` block.

        Args:
            marine: Marine hourly data (waves, sea level, water temperature)
            atmospheric_current: Current atmospheric values
            atmospheric_hourly: Hourly atmospheric data (wind, weather, UV, air temperature)
            daily: Daily sunrise/sunset arrays for daylight flags
            now: Reference instant for the "now" conditions (default: current UTC time)
            latitude: Used to compute daylight windows when ``daily`` has none
            longitude: Used to compute daylight windows when ``daily`` has none

        Returns:
            Tuple of (conditions now, hourly forecast)
        """
        marine_block = _unwrap(marine, "hourly")
        current_block = _unwrap(atmospheric_current, "current")
        hourly_block = _unwrap(atmospheric_hourly, "hourly")
        daily_block = _unwrap(daily, "daily")
        if not daily_block and atmospheric_hourly and isinstance(atmospheric_hourly.get("daily"), Mapping):
            # Forecast responses carry the daily block alongside the hourly one
            daily_block = atmospheric_hourly["daily"]

        conditions = self.combine_conditions(marine_block, current_block, hourly_block, now)
        forecast = self.combine_forecast(marine_block, hourly_block, daily_block, latitude, longitude)

        logger.debug(
            "Normalized forecast: %d points, now=%s",
            len(forecast),
            conditions.timestamp.isoformat(),
        )
        return conditions, forecast
