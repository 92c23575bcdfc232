"""
Command line entry point for assessing swim conditions.

Reads saved provider responses and prints the current score, warnings and the
optimal swim window:

  python -m swim_engine.main marine.json weather.json --level beginner

``weather.json`` is a forecast response with ``hourly`` (and optionally
``current`` and ``daily``) blocks; ``--current`` may point to a separate
current-conditions response.
"""
import argparse
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from attrs import asdict

from swim_engine.models.assessment import Assessment
from swim_engine.models.profile import Profile, SwimmerLevel
from swim_engine.services.alert_composer import AlertComposer
from swim_engine.services.assessment_service import AssessmentService
from swim_engine.utils.file_utils import load_json, save_json
from swim_engine.utils.time_utils import format_timestamp, parse_timestamps


def _serialize(inst, field, value):
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, Enum):
        return value.value
    return value


def assessment_to_dict(assessment: Assessment) -> dict:
    """Convert an assessment to plain JSON-serializable data."""
    return asdict(assessment, value_serializer=_serialize)


def print_assessment(assessment: Assessment, location_name: Optional[str] = None) -> None:
    composer = AlertComposer()
    score = assessment.score
    conditions = assessment.conditions

    print("=" * 60)
    print(f"Conditions at {format_timestamp(conditions.timestamp)}"
          + (f" - {location_name}" if location_name else ""))
    print("=" * 60)
    print(f"  Water: {conditions.water_temperature:.1f} °C, waves {conditions.wave_height:.2f} m, "
          f"tide {conditions.tide_state.value}")
    print(f"  Wind: {conditions.wind_speed:.0f} km/h {conditions.wind_direction_cardinal} "
          f"(gusts {conditions.wind_gusts:.0f}), {conditions.weather_description}")
    print(f"\n{composer.daily_summary(score)}")
    for name, value in score.breakdown.factors:
        print(f"  {name:<11}{value:6.1f}")

    if score.warnings:
        print("\nWarnings:")
        for warning in score.warnings:
            print(f"  [{warning.severity.value}] {warning.message}")

    if assessment.optimal_window is not None:
        print(f"\n{composer.optimal_window(assessment.optimal_window, location_name)}"
              f" ({assessment.optimal_window.duration_string})")
    else:
        print(f"\nNo swim window scoring 60+ in the next {len(assessment.forecast)} hours")


def main():
    parser = argparse.ArgumentParser(description="Assess open-water swim conditions")
    parser.add_argument("marine", type=Path, help="Marine forecast response (JSON)")
    parser.add_argument("weather", type=Path, help="Weather forecast response (JSON)")
    parser.add_argument(
        "--current",
        type=Path,
        default=None,
        help="Separate current-weather response (JSON); defaults to the weather file",
    )
    parser.add_argument(
        "--level",
        choices=[level.value for level in SwimmerLevel],
        default=SwimmerLevel.INTERMEDIATE.value,
        help="Swimmer level used for default thresholds and weights",
    )
    parser.add_argument(
        "--now",
        default=None,
        help="Reference time (yyyy-MM-ddTHH:mm, UTC); defaults to the current time",
    )
    parser.add_argument(
        "--min-hours",
        type=int,
        default=2,
        help="Optimal window length in hours",
    )
    parser.add_argument("--location", default=None, help="Location name for alert texts")
    parser.add_argument("--lat", type=float, default=None, help="Latitude for computed daylight")
    parser.add_argument("--lon", type=float, default=None, help="Longitude for computed daylight")
    parser.add_argument("--output", type=Path, default=None, help="Write the full assessment as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log debug output")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        marine = load_json(args.marine)
        weather = load_json(args.weather)
        current = load_json(args.current) if args.current else weather
    except (OSError, ValueError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        sys.exit(1)

    now = None
    if args.now:
        parsed = parse_timestamps([args.now])
        if not parsed:
            print(f"Error: invalid --now value '{args.now}'", file=sys.stderr)
            sys.exit(1)
        now = parsed[0]

    assessment = AssessmentService().assess(
        Profile.for_level(args.level),
        marine,
        current,
        weather,
        now=now,
        min_duration_hours=args.min_hours,
        latitude=args.lat,
        longitude=args.lon,
    )

    print_assessment(assessment, args.location)

    if args.output:
        save_json(assessment_to_dict(assessment), args.output)
        print(f"\nSaved assessment to {args.output}")


if __name__ == "__main__":
    main()
