"""Normalized marine and atmospheric conditions at a single timestamp."""
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional

from attrs import frozen

from swim_engine.config import SEA_LEVEL_HIGH, SEA_LEVEL_LOW


class TideState(str, Enum):
    """Tidal phase at a point in time."""

    HIGH = "high"
    MID = "mid"
    LOW = "low"
    RISING = "rising"
    FALLING = "falling"

    @classmethod
    def from_sea_level(cls, sea_level: float) -> "TideState":
        """Coarse phase from the sign of the sea level anomaly."""
        if sea_level > SEA_LEVEL_HIGH:
            return cls.HIGH
        if sea_level < SEA_LEVEL_LOW:
            return cls.LOW
        return cls.MID


class WeatherCode(IntEnum):
    """WMO weather interpretation codes emitted by the forecast provider."""

    CLEAR_SKY = 0
    MAINLY_CLEAR = 1
    PARTLY_CLOUDY = 2
    OVERCAST = 3
    FOG = 45
    DEPOSITING_FOG = 48
    DRIZZLE_LIGHT = 51
    DRIZZLE_MODERATE = 53
    DRIZZLE_DENSE = 55
    FREEZING_DRIZZLE_LIGHT = 56
    FREEZING_DRIZZLE_DENSE = 57
    RAIN_SLIGHT = 61
    RAIN_MODERATE = 63
    RAIN_HEAVY = 65
    FREEZING_RAIN_LIGHT = 66
    FREEZING_RAIN_HEAVY = 67
    SNOW_SLIGHT = 71
    SNOW_MODERATE = 73
    SNOW_HEAVY = 75
    SNOW_GRAINS = 77
    RAIN_SHOWERS_SLIGHT = 80
    RAIN_SHOWERS_MODERATE = 81
    RAIN_SHOWERS_VIOLENT = 82
    SNOW_SHOWERS_SLIGHT = 85
    SNOW_SHOWERS_HEAVY = 86
    THUNDERSTORM = 95
    THUNDERSTORM_WITH_HAIL_SLIGHT = 96
    THUNDERSTORM_WITH_HAIL_HEAVY = 99

    @classmethod
    def lookup(cls, code: int) -> Optional["WeatherCode"]:
        """Return the enum member for a raw code, or None if unrecognised."""
        try:
            return cls(int(code))
        except ValueError:
            return None

    @property
    def description(self) -> str:
        return _WEATHER_DESCRIPTIONS[self]


THUNDERSTORM_CODES = frozenset({
    WeatherCode.THUNDERSTORM,
    WeatherCode.THUNDERSTORM_WITH_HAIL_SLIGHT,
    WeatherCode.THUNDERSTORM_WITH_HAIL_HEAVY,
})
FOG_CODES = frozenset({WeatherCode.FOG, WeatherCode.DEPOSITING_FOG})


def is_thunderstorm(code: int) -> bool:
    return code in THUNDERSTORM_CODES


def is_fog(code: int) -> bool:
    return code in FOG_CODES


_WEATHER_DESCRIPTIONS = {
    WeatherCode.CLEAR_SKY: "Clear sky",
    WeatherCode.MAINLY_CLEAR: "Mainly clear",
    WeatherCode.PARTLY_CLOUDY: "Partly cloudy",
    WeatherCode.OVERCAST: "Overcast",
    WeatherCode.FOG: "Foggy",
    WeatherCode.DEPOSITING_FOG: "Foggy",
    WeatherCode.DRIZZLE_LIGHT: "Drizzle",
    WeatherCode.DRIZZLE_MODERATE: "Drizzle",
    WeatherCode.DRIZZLE_DENSE: "Drizzle",
    WeatherCode.FREEZING_DRIZZLE_LIGHT: "Freezing drizzle",
    WeatherCode.FREEZING_DRIZZLE_DENSE: "Freezing drizzle",
    WeatherCode.RAIN_SLIGHT: "Light rain",
    WeatherCode.RAIN_MODERATE: "Moderate rain",
    WeatherCode.RAIN_HEAVY: "Heavy rain",
    WeatherCode.FREEZING_RAIN_LIGHT: "Freezing rain",
    WeatherCode.FREEZING_RAIN_HEAVY: "Freezing rain",
    WeatherCode.SNOW_SLIGHT: "Snow",
    WeatherCode.SNOW_MODERATE: "Snow",
    WeatherCode.SNOW_HEAVY: "Snow",
    WeatherCode.SNOW_GRAINS: "Snow",
    WeatherCode.RAIN_SHOWERS_SLIGHT: "Rain showers",
    WeatherCode.RAIN_SHOWERS_MODERATE: "Rain showers",
    WeatherCode.RAIN_SHOWERS_VIOLENT: "Rain showers",
    WeatherCode.SNOW_SHOWERS_SLIGHT: "Snow showers",
    WeatherCode.SNOW_SHOWERS_HEAVY: "Snow showers",
    WeatherCode.THUNDERSTORM: "Thunderstorm",
    WeatherCode.THUNDERSTORM_WITH_HAIL_SLIGHT: "Thunderstorm",
    WeatherCode.THUNDERSTORM_WITH_HAIL_HEAVY: "Thunderstorm",
}

_CARDINALS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


@frozen
class Conditions:
    """Swim-relevant conditions at one timestamp (naive UTC)."""

    timestamp: datetime
    wave_height: float = 0.0  # meters
    wave_direction: float = 0.0  # degrees
    wave_period: float = 0.0  # seconds
    swell_height: float = 0.0  # meters
    water_temperature: float = 0.0  # °C
    sea_level: float = 0.0  # meters, relative to MSL
    wind_speed: float = 0.0  # km/h
    wind_gusts: float = 0.0  # km/h
    wind_direction: float = 0.0  # degrees, direction the wind comes from
    weather_code: int = 0  # WMO
    uv_index: float = 0.0
    air_temperature: float = 20.0  # °C
    precipitation: float = 0.0  # mm
    tide_phase: Optional[TideState] = None

    @property
    def tide_state(self) -> TideState:
        """Tide phase, falling back to the sea level sign when no phase was estimated."""
        if self.tide_phase is not None:
            return self.tide_phase
        return TideState.from_sea_level(self.sea_level)

    @property
    def weather_description(self) -> str:
        code = WeatherCode.lookup(self.weather_code)
        return code.description if code is not None else "Unknown"

    @property
    def wind_direction_cardinal(self) -> str:
        index = int((self.wind_direction % 360 + 11.25) / 22.5) % 16
        return _CARDINALS[index]


@frozen
class HourlyForecast:
    """A forecast point: conditions plus an informational daylight flag."""

    timestamp: datetime
    conditions: Conditions
    is_daylight: Optional[bool] = None
