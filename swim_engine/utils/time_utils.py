"""Timestamp parsing and lookup helpers."""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from swim_engine.config import TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Drop timezone info, converting aware datetimes to UTC first."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_timestamps(values: Optional[Sequence]) -> List[datetime]:
    """
    Parse provider timestamp strings into naive UTC datetimes.

    Accepts ``yyyy-MM-ddTHH:mm`` as well as full ISO-8601 strings (with or
    without an offset). Entries that cannot be parsed are skipped.

    Args:
        values: Sequence of timestamp strings (or datetimes)

    Returns:
        List of naive UTC datetimes, in input order
    """
    if values is None or len(values) == 0:
        return []

    parsed = pd.to_datetime(pd.Series(list(values), dtype=object), utc=True, errors="coerce", format="ISO8601")
    valid = parsed.dropna()
    if len(valid) < len(parsed):
        logger.warning("Skipped %d unparseable timestamps", len(parsed) - len(valid))

    return [ts.tz_localize(None).to_pydatetime() for ts in valid]


def nearest_index(times: Sequence[datetime], target: datetime) -> Optional[int]:
    """
    Index of the timestamp closest to target. Ties resolve to the earliest index.

    Returns:
        Index, or None if times is empty
    """
    if len(times) == 0:
        return None

    target = to_naive_utc(target)
    distances = np.array([abs((t - target).total_seconds()) for t in times])
    # argmin returns the first occurrence of the minimum
    return int(distances.argmin())


def format_timestamp(value: datetime) -> str:
    """Format a datetime in the provider's ``yyyy-MM-ddTHH:mm`` form."""
    return value.strftime(TIMESTAMP_FORMAT)
