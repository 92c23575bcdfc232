"""Service for scoring swim conditions against a swimmer profile."""
import math
from typing import List

from swim_engine.config import (
    ABSOLUTE_MAX_WAVE,
    ABSOLUTE_MAX_WIND,
    ABSOLUTE_MIN_TEMP,
    BEYOND_THRESHOLD_FLOOR,
    BEYOND_THRESHOLD_SCALE,
    COLD_WATER_SHOCK_TEMP,
    GUST_OVER_LIMIT_FACTOR,
    GUST_RATIO,
    GUSTY_FACTOR,
    HIGH_UV_INDEX,
    NEAR_LIMIT_RATIO,
    ONSHORE_DIRECTION_SCORE,
    ONSHORE_MAX_DEG,
    ONSHORE_MIN_DEG,
    ONSHORE_WARNING_MIN_SPEED,
    PERFECT_TEMP_MAX,
    PERFECT_TEMP_MIN,
    PERFECT_WAVE_MAX,
    PERFECT_WIND_MAX,
    TEMP_DECAY_PER_DEGREE,
    WITHIN_THRESHOLD_FLOOR,
)
from swim_engine.models.conditions import Conditions, TideState, WeatherCode, is_fog, is_thunderstorm
from swim_engine.models.profile import ConditionThresholds, Profile, TidePreference
from swim_engine.models.score import SafetyWarning, ScoreBreakdown, ScoreRating, SwimScore

_WEATHER_SCORES = {
    WeatherCode.CLEAR_SKY: 1.0,
    WeatherCode.MAINLY_CLEAR: 0.95,
    WeatherCode.PARTLY_CLOUDY: 0.9,
    WeatherCode.OVERCAST: 0.75,
    WeatherCode.DRIZZLE_LIGHT: 0.6,
    WeatherCode.DRIZZLE_MODERATE: 0.4,
    WeatherCode.DRIZZLE_DENSE: 0.4,
    WeatherCode.FOG: 0.3,
    WeatherCode.DEPOSITING_FOG: 0.3,
}
_DEFAULT_WEATHER_SCORE = 0.2


def is_onshore(wind_direction: float) -> bool:
    """Onshore heuristic: wind from the southern to northern half through west.

    No coastline orientation is modelled, so this is the same compass range
    for every location.
    """
    return ONSHORE_MIN_DEG <= wind_direction <= ONSHORE_MAX_DEG


def _three_tier(value: float, perfect_max: float, user_max: float, absolute_max: float) -> float:
    """Shared curve for wave height and wind speed: perfect, within threshold, beyond, disqualified."""
    if value <= perfect_max:
        return 1.0
    if value <= user_max:
        ratio = 1.0 - (value - perfect_max) / (user_max - perfect_max)
        return max(WITHIN_THRESHOLD_FLOOR, ratio)
    if value <= absolute_max:
        ratio = 1.0 - (value - user_max) / (absolute_max - user_max)
        return max(BEYOND_THRESHOLD_FLOOR, ratio * BEYOND_THRESHOLD_SCALE)
    return 0.0


class ScoringService:
    """
    Converts one set of conditions and a profile into a 0-100 swim score.

    Pure and deterministic: the same inputs always yield the same score.
    """

    def calculate_score(self, conditions: Conditions, profile: Profile) -> SwimScore:
        """
        Score conditions for a swimmer.

        Args:
            conditions: Conditions at one timestamp
            profile: Swimmer profile (thresholds and weights)

        Returns:
            SwimScore with value, rating, warnings and per-factor breakdown
        """
        disqualification = self.disqualifying_warning(conditions)
        if disqualification is not None:
            return SwimScore(
                value=0.0,
                rating=ScoreRating.DANGEROUS,
                warnings=(disqualification,),
                breakdown=ScoreBreakdown(),
            )

        thresholds = profile.thresholds
        weights = profile.weights

        temperature = self.temperature_score(conditions.water_temperature, thresholds)
        wave = self.wave_score(conditions.wave_height, thresholds)
        wind = self.wind_score(conditions.wind_speed, conditions.wind_gusts, thresholds)
        direction = self.direction_score(conditions.wind_direction, thresholds.accept_onshore_wind)
        weather = self.weather_score(conditions.weather_code)
        tide = self.tide_score(conditions.tide_state, thresholds.preferred_tide)

        weighted = math.fsum([
            temperature * weights.temperature,
            wave * weights.wave,
            wind * weights.wind,
            direction * weights.direction,
            weather * weights.weather,
            tide * weights.tide,
        ])
        value = min(100.0, max(0.0, weighted * 100))

        return SwimScore(
            value=value,
            rating=ScoreRating.from_score(value),
            warnings=tuple(self.generate_warnings(conditions, thresholds)),
            breakdown=ScoreBreakdown(
                temperature_score=temperature * 100,
                wave_score=wave * 100,
                wind_score=wind * 100,
                direction_score=direction * 100,
                weather_score=weather * 100,
                tide_score=tide * 100,
            ),
        )

    def disqualifying_warning(self, conditions: Conditions):
        """Return the warning for the first hard safety limit exceeded, or None."""
        if conditions.wave_height > ABSOLUTE_MAX_WAVE:
            return SafetyWarning.DANGEROUS_WAVES
        if conditions.wind_speed > ABSOLUTE_MAX_WIND:
            return SafetyWarning.DANGEROUS_WIND
        if is_thunderstorm(conditions.weather_code):
            return SafetyWarning.STORM_WARNING
        return None

    def temperature_score(self, temperature: float, thresholds: ConditionThresholds) -> float:
        if PERFECT_TEMP_MIN <= temperature <= PERFECT_TEMP_MAX:
            return 1.0
        if temperature >= thresholds.min_water_temp:
            distance = min(abs(temperature - PERFECT_TEMP_MIN), abs(temperature - PERFECT_TEMP_MAX))
            return max(WITHIN_THRESHOLD_FLOOR, 1.0 - distance * TEMP_DECAY_PER_DEGREE)
        if temperature >= ABSOLUTE_MIN_TEMP:
            ratio = (temperature - ABSOLUTE_MIN_TEMP) / (thresholds.min_water_temp - ABSOLUTE_MIN_TEMP)
            return max(BEYOND_THRESHOLD_FLOOR, ratio * BEYOND_THRESHOLD_SCALE)
        return 0.0

    def wave_score(self, height: float, thresholds: ConditionThresholds) -> float:
        return _three_tier(height, PERFECT_WAVE_MAX, thresholds.max_wave_height, ABSOLUTE_MAX_WAVE)

    def wind_score(self, speed: float, gusts: float, thresholds: ConditionThresholds) -> float:
        score = _three_tier(speed, PERFECT_WIND_MAX, thresholds.max_wind_speed, ABSOLUTE_MAX_WIND)

        if gusts > thresholds.max_wind_gusts:
            score *= GUST_OVER_LIMIT_FACTOR
        elif gusts > speed * GUST_RATIO:
            score *= GUSTY_FACTOR

        return score

    def direction_score(self, wind_direction: float, accept_onshore: bool) -> float:
        if is_onshore(wind_direction) and not accept_onshore:
            return ONSHORE_DIRECTION_SCORE
        return 1.0

    def weather_score(self, code: int) -> float:
        """Lookup by WMO code; rain, snow, showers, thunder and unknown codes all score 0.2."""
        weather = WeatherCode.lookup(code)
        return _WEATHER_SCORES.get(weather, _DEFAULT_WEATHER_SCORE)

    def tide_score(self, state: TideState, preference: TidePreference) -> float:
        if state in (TideState.RISING, TideState.FALLING):
            state = TideState.MID

        if preference == TidePreference.HIGH:
            return {TideState.HIGH: 1.0, TideState.MID: 0.7}.get(state, 0.5)
        if preference == TidePreference.LOW:
            return {TideState.LOW: 1.0, TideState.MID: 0.7}.get(state, 0.5)
        if preference == TidePreference.SLACK_OR_HIGH:
            return 1.0 if state in (TideState.HIGH, TideState.MID) else 0.6
        return 1.0

    def generate_warnings(self, conditions: Conditions, thresholds: ConditionThresholds) -> List[SafetyWarning]:
        """Collect advisory warnings in a fixed order, independent of the rating."""
        warnings = []

        if conditions.water_temperature < COLD_WATER_SHOCK_TEMP:
            warnings.append(SafetyWarning.COLD_WATER_SHOCK)

        if conditions.wave_height > thresholds.max_wave_height * NEAR_LIMIT_RATIO:
            warnings.append(SafetyWarning.DANGEROUS_WAVES)

        if conditions.wind_speed > thresholds.max_wind_speed * NEAR_LIMIT_RATIO:
            warnings.append(SafetyWarning.DANGEROUS_WIND)

        if conditions.wind_gusts > conditions.wind_speed * GUST_RATIO:
            warnings.append(SafetyWarning.GUSTY_CONDITIONS)

        if conditions.uv_index >= HIGH_UV_INDEX:
            warnings.append(SafetyWarning.HIGH_UV)

        if is_fog(conditions.weather_code):
            warnings.append(SafetyWarning.LOW_VISIBILITY)

        if (
            is_onshore(conditions.wind_direction)
            and not thresholds.accept_onshore_wind
            and conditions.wind_speed > ONSHORE_WARNING_MIN_SPEED
        ):
            warnings.append(SafetyWarning.ONSHORE_WIND)

        return warnings
