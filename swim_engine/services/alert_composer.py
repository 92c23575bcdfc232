"""Service for composing alert texts from scores and windows."""
from typing import Optional, Sequence

from swim_engine.models.score import SafetyWarning, SwimScore, TimeWindow, WarningSeverity


class AlertComposer:
    """Builds the short texts used by notification and display collaborators."""

    def daily_summary(self, score: SwimScore) -> str:
        """Daily alert body, e.g. ``Score 72/100 - Good``."""
        return f"Score {int(score.value)}/100 - {score.rating.label}"

    def location_update(self, score: SwimScore, location_name: Optional[str] = None) -> str:
        text = f"Current score: {score.display_value}/100 - {score.rating.message}"
        if location_name:
            return f"{location_name}: {text}"
        return text

    def optimal_window(self, window: TimeWindow, location_name: Optional[str] = None) -> str:
        """Optimal window text, e.g. ``Optimal window 09:00-11:00, avg 78``."""
        text = f"Optimal window {window.time_range_string}, avg {int(window.average_score)}"
        if location_name:
            return f"{location_name}: {text}"
        return text

    def safety_alert(self, warnings: Sequence[SafetyWarning], location_name: str) -> Optional[str]:
        """
        Safety alert text leading with the first critical warning.

        Returns:
            Alert text, or None if there are no warnings
        """
        if not warnings:
            return None

        critical = [w for w in warnings if w.severity == WarningSeverity.CRITICAL]
        if critical:
            return f"Dangerous conditions at {location_name}: {critical[0].message}"
        return f"Conditions at {location_name} require caution: {warnings[0].message}"
