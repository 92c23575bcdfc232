"""Swimmer profile: level, condition thresholds and factor weights."""
from enum import Enum

from attrs import define, field

from swim_engine.config import ABSOLUTE_MAX_WAVE, ABSOLUTE_MAX_WIND


class SwimmerLevel(str, Enum):
    """Experience level of a swimmer. Drives the default thresholds and weights."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERIENCED = "experienced"
    COLD_WATER = "cold_water"

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]

    @property
    def description(self) -> str:
        return _LEVEL_DESCRIPTIONS[self]


_LEVEL_LABELS = {
    SwimmerLevel.BEGINNER: "Beginner",
    SwimmerLevel.INTERMEDIATE: "Intermediate",
    SwimmerLevel.EXPERIENCED: "Experienced",
    SwimmerLevel.COLD_WATER: "Cold Water Specialist",
}

_LEVEL_DESCRIPTIONS = {
    SwimmerLevel.BEGINNER: "New to open water swimming. Requires calm, warm conditions.",
    SwimmerLevel.INTERMEDIATE: "Comfortable in varied conditions. Can handle moderate waves.",
    SwimmerLevel.EXPERIENCED: "Skilled in challenging conditions and cold water.",
    SwimmerLevel.COLD_WATER: "Acclimatized to cold water. Focused on wave/wind safety.",
}


class TidePreference(str, Enum):
    """Preferred tide state for swimming."""

    ANY = "any"
    HIGH = "high"
    LOW = "low"
    SLACK_OR_HIGH = "slack_or_high"


def _cap_wave_height(value) -> float:
    return min(float(value), ABSOLUTE_MAX_WAVE)


def _cap_wind_speed(value) -> float:
    return min(float(value), ABSOLUTE_MAX_WIND)


@define
class ConditionThresholds:
    """
    User-tunable limits for scoring.

    Wave height and wind speed limits are capped at the absolute safety limits.
    The minimum water temperature is kept as given.
    """

    min_water_temp: float  # °C
    max_wave_height: float = field(converter=_cap_wave_height)  # meters
    max_wind_speed: float = field(converter=_cap_wind_speed)  # km/h
    max_wind_gusts: float  # km/h
    preferred_tide: TidePreference = field(default=TidePreference.ANY, converter=TidePreference)
    accept_onshore_wind: bool = True

    @classmethod
    def defaults(cls, level: SwimmerLevel) -> "ConditionThresholds":
        """Default thresholds for a swimmer level."""
        return cls(**_DEFAULT_THRESHOLDS[SwimmerLevel(level)])


@define
class FactorWeights:
    """Relative importance of each scoring factor. Intended, not required, to sum to 1."""

    temperature: float
    wave: float
    wind: float
    direction: float
    weather: float
    tide: float

    @property
    def total(self) -> float:
        """Sum of all weights (informational; scoring does not renormalize)."""
        return self.temperature + self.wave + self.wind + self.direction + self.weather + self.tide

    @classmethod
    def defaults(cls, level: SwimmerLevel) -> "FactorWeights":
        """Default weights for a swimmer level."""
        return cls(*_DEFAULT_WEIGHTS[SwimmerLevel(level)])


@define
class Profile:
    """A swimmer's personal scoring profile."""

    level: SwimmerLevel = field(converter=SwimmerLevel)
    thresholds: ConditionThresholds
    weights: FactorWeights

    @classmethod
    def for_level(cls, level: SwimmerLevel = SwimmerLevel.INTERMEDIATE) -> "Profile":
        """Create a profile populated with the defaults for a level."""
        level = SwimmerLevel(level)
        return cls(
            level=level,
            thresholds=ConditionThresholds.defaults(level),
            weights=FactorWeights.defaults(level),
        )


_DEFAULT_THRESHOLDS = {
    SwimmerLevel.BEGINNER: dict(
        min_water_temp=20.0,
        max_wave_height=0.3,
        max_wind_speed=15.0,
        max_wind_gusts=20.0,
        preferred_tide=TidePreference.SLACK_OR_HIGH,
        accept_onshore_wind=False,
    ),
    SwimmerLevel.INTERMEDIATE: dict(
        min_water_temp=16.0,
        max_wave_height=0.6,
        max_wind_speed=20.0,
        max_wind_gusts=30.0,
        preferred_tide=TidePreference.ANY,
        accept_onshore_wind=True,
    ),
    SwimmerLevel.EXPERIENCED: dict(
        min_water_temp=12.0,
        max_wave_height=1.0,
        max_wind_speed=30.0,
        max_wind_gusts=45.0,
        preferred_tide=TidePreference.ANY,
        accept_onshore_wind=True,
    ),
    SwimmerLevel.COLD_WATER: dict(
        min_water_temp=8.0,
        max_wave_height=1.0,
        max_wind_speed=30.0,
        max_wind_gusts=45.0,
        preferred_tide=TidePreference.ANY,
        accept_onshore_wind=True,
    ),
}

# (temperature, wave, wind, direction, weather, tide)
_DEFAULT_WEIGHTS = {
    SwimmerLevel.BEGINNER: (0.30, 0.25, 0.20, 0.10, 0.10, 0.05),
    SwimmerLevel.INTERMEDIATE: (0.25, 0.25, 0.20, 0.10, 0.10, 0.10),
    SwimmerLevel.EXPERIENCED: (0.15, 0.25, 0.20, 0.15, 0.10, 0.15),
    SwimmerLevel.COLD_WATER: (0.10, 0.30, 0.25, 0.15, 0.10, 0.10),
}
