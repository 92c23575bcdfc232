"""Result of assessing one location's forecast for a swimmer."""
from datetime import datetime
from typing import List, Optional, Tuple

from attrs import frozen

from swim_engine.models.conditions import Conditions, HourlyForecast
from swim_engine.models.score import SwimScore, TimeWindow


@frozen
class Assessment:
    """Current conditions and score, the scored forecast and the best window."""

    conditions: Conditions
    score: SwimScore
    forecast: List[HourlyForecast]
    forecast_scores: List[Tuple[datetime, SwimScore]]
    optimal_window: Optional[TimeWindow] = None
