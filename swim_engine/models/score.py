"""Score, rating, warning and time window structures."""
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from attrs import frozen

from swim_engine.config import RATING_EXCELLENT, RATING_FAIR, RATING_GOOD, RATING_POOR


class ScoreRating(str, Enum):
    """Rating tier derived from a 0-100 score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DANGEROUS = "dangerous"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> str:
        return _RATING_COLORS[self]

    @property
    def message(self) -> str:
        return _RATING_MESSAGES[self]

    @classmethod
    def from_score(cls, score: float) -> "ScoreRating":
        if RATING_EXCELLENT <= score <= 100:
            return cls.EXCELLENT
        if RATING_GOOD <= score < RATING_EXCELLENT:
            return cls.GOOD
        if RATING_FAIR <= score < RATING_GOOD:
            return cls.FAIR
        if RATING_POOR <= score < RATING_FAIR:
            return cls.POOR
        return cls.DANGEROUS


_RATING_COLORS = {
    ScoreRating.EXCELLENT: "green",
    ScoreRating.GOOD: "green",
    ScoreRating.FAIR: "yellow",
    ScoreRating.POOR: "orange",
    ScoreRating.DANGEROUS: "red",
}

_RATING_MESSAGES = {
    ScoreRating.EXCELLENT: "Perfect conditions for swimming!",
    ScoreRating.GOOD: "Good conditions for swimming",
    ScoreRating.FAIR: "Proceed with caution",
    ScoreRating.POOR: "Not recommended for swimming",
    ScoreRating.DANGEROUS: "Do not swim - dangerous conditions",
}


class WarningSeverity(str, Enum):
    CRITICAL = "critical"  # do not swim
    WARNING = "warning"  # proceed with caution
    INFO = "info"  # be aware


class SafetyWarning(str, Enum):
    """Safety warning kinds attached to a score."""

    DANGEROUS_WAVES = "dangerous_waves"
    DANGEROUS_WIND = "dangerous_wind"
    STORM_WARNING = "storm_warning"
    COLD_WATER_SHOCK = "cold_water_shock"
    STRONG_CURRENTS = "strong_currents"
    LOW_VISIBILITY = "low_visibility"
    HIGH_UV = "high_uv"
    RAPID_TEMP_DROP = "rapid_temp_drop"
    ONSHORE_WIND = "onshore_wind"
    GUSTY_CONDITIONS = "gusty_conditions"

    @property
    def message(self) -> str:
        return _WARNING_MESSAGES[self]

    @property
    def severity(self) -> WarningSeverity:
        if self in (
            SafetyWarning.DANGEROUS_WAVES,
            SafetyWarning.DANGEROUS_WIND,
            SafetyWarning.STORM_WARNING,
            SafetyWarning.COLD_WATER_SHOCK,
            SafetyWarning.STRONG_CURRENTS,
        ):
            return WarningSeverity.CRITICAL
        if self in (
            SafetyWarning.LOW_VISIBILITY,
            SafetyWarning.RAPID_TEMP_DROP,
            SafetyWarning.GUSTY_CONDITIONS,
        ):
            return WarningSeverity.WARNING
        return WarningSeverity.INFO


_WARNING_MESSAGES = {
    SafetyWarning.DANGEROUS_WAVES: "Dangerous wave conditions",
    SafetyWarning.DANGEROUS_WIND: "High wind speeds",
    SafetyWarning.STORM_WARNING: "Storm warning in effect",
    SafetyWarning.COLD_WATER_SHOCK: "Cold water shock risk",
    SafetyWarning.STRONG_CURRENTS: "Strong currents expected",
    SafetyWarning.LOW_VISIBILITY: "Reduced visibility",
    SafetyWarning.HIGH_UV: "High UV - sun protection needed",
    SafetyWarning.RAPID_TEMP_DROP: "Water temperature dropping",
    SafetyWarning.ONSHORE_WIND: "Onshore wind creating choppy conditions",
    SafetyWarning.GUSTY_CONDITIONS: "Gusty conditions expected",
}


@frozen
class ScoreBreakdown:
    """Per-factor scores on a 0-100 scale."""

    temperature_score: float = 0.0
    wave_score: float = 0.0
    wind_score: float = 0.0
    direction_score: float = 0.0
    weather_score: float = 0.0
    tide_score: float = 0.0

    @property
    def factors(self) -> List[Tuple[str, float]]:
        """(display name, score) pairs in display order."""
        return [
            ("Water Temp", self.temperature_score),
            ("Waves", self.wave_score),
            ("Wind", self.wind_score),
            ("Wind Dir", self.direction_score),
            ("Weather", self.weather_score),
            ("Tide", self.tide_score),
        ]


@frozen
class TimeWindow:
    """A block of forecast hours. ``end`` is exclusive (last hour + 1h)."""

    start: datetime
    end: datetime
    average_score: float

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_string(self) -> str:
        total_minutes = int(self.duration.total_seconds() // 60)
        hours, minutes = divmod(total_minutes, 60)
        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        if hours > 0:
            return f"{hours} hours"
        return f"{minutes} minutes"

    @property
    def time_range_string(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"


@frozen
class SwimScore:
    """Suitability score for one set of conditions."""

    value: float
    rating: ScoreRating
    warnings: Tuple[SafetyWarning, ...] = ()
    breakdown: ScoreBreakdown = ScoreBreakdown()
    optimal_window: Optional[TimeWindow] = None

    @property
    def display_value(self) -> int:
        # Round half up
        return int(math.floor(self.value + 0.5))

    @property
    def color(self) -> str:
        return self.rating.color
