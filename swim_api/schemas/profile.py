"""Pydantic schemas for swimmer profiles."""
from pydantic import BaseModel, Field

from swim_engine.models.profile import (
    ConditionThresholds,
    FactorWeights,
    Profile,
    SwimmerLevel,
    TidePreference,
)


class ThresholdsSchema(BaseModel):
    """Condition thresholds. Wave and wind limits are capped at the absolute safety limits."""

    min_water_temp: float = Field(description="Minimum water temperature (°C)")
    max_wave_height: float = Field(ge=0, description="Maximum wave height (m)")
    max_wind_speed: float = Field(ge=0, description="Maximum wind speed (km/h)")
    max_wind_gusts: float = Field(ge=0, description="Maximum wind gusts (km/h)")
    preferred_tide: TidePreference = TidePreference.ANY
    accept_onshore_wind: bool = True


class WeightsSchema(BaseModel):
    """Factor weights, intended to sum to 1 (not enforced)."""

    temperature: float = Field(ge=0)
    wave: float = Field(ge=0)
    wind: float = Field(ge=0)
    direction: float = Field(ge=0)
    weather: float = Field(ge=0)
    tide: float = Field(ge=0)


class ProfileSchema(BaseModel):
    """A swimmer profile."""

    level: SwimmerLevel
    thresholds: ThresholdsSchema
    weights: WeightsSchema

    def to_profile(self) -> Profile:
        return Profile(
            level=self.level,
            thresholds=ConditionThresholds(**self.thresholds.model_dump()),
            weights=FactorWeights(**self.weights.model_dump()),
        )


class ProfileResponse(ProfileSchema):
    """A profile with its informational weight total."""

    weights_total: float

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        t = profile.thresholds
        w = profile.weights
        return cls(
            level=profile.level,
            thresholds=ThresholdsSchema(
                min_water_temp=t.min_water_temp,
                max_wave_height=t.max_wave_height,
                max_wind_speed=t.max_wind_speed,
                max_wind_gusts=t.max_wind_gusts,
                preferred_tide=t.preferred_tide,
                accept_onshore_wind=t.accept_onshore_wind,
            ),
            weights=WeightsSchema(
                temperature=w.temperature,
                wave=w.wave,
                wind=w.wind,
                direction=w.direction,
                weather=w.weather,
                tide=w.tide,
            ),
            weights_total=w.total,
        )


class LevelInfo(BaseModel):
    """Swimmer level with display text."""

    level: SwimmerLevel
    label: str
    description: str
