"""In-memory cache of the latest report per location."""
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Optional

from attrs import define

from swim_api.config import settings
from swim_api.schemas.conditions import ReportResponse
from swim_engine.utils.time_utils import utc_now


@define
class CachedReport:
    """A report with its cache timestamps."""

    report: ReportResponse
    cached_at: datetime
    expires_at: datetime
    stale_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def is_stale(self, now: datetime) -> bool:
        return now > self.stale_at


class ReportCache:
    """LRU cache of reports keyed by location ID, with expiry and staleness."""

    def __init__(
        self,
        expiry_minutes: int = None,
        stale_minutes: int = None,
        max_size: int = None,
    ):
        self.expiry = timedelta(
            minutes=settings.cache_expiry_minutes if expiry_minutes is None else expiry_minutes
        )
        self.stale_after = timedelta(
            minutes=settings.cache_stale_minutes if stale_minutes is None else stale_minutes
        )
        self.max_size = settings.max_cached_locations if max_size is None else max_size
        self._cache: OrderedDict[str, CachedReport] = OrderedDict()

    def put(self, location_id: str, report: ReportResponse, now: datetime = None) -> CachedReport:
        """Store a report, replacing any previous one for the location."""
        now = now or utc_now()
        entry = CachedReport(
            report=report,
            cached_at=now,
            expires_at=now + self.expiry,
            stale_at=now + self.stale_after,
        )
        self._cache[location_id] = entry
        self._cache.move_to_end(location_id)
        if len(self._cache) > self.max_size:
            self._cache.popitem(last=False)
        return entry

    def get(self, location_id: str, now: datetime = None) -> Optional[CachedReport]:
        """
        Get the cached report for a location.

        Returns:
            CachedReport, or None if missing or expired (expired entries are dropped)
        """
        entry = self._cache.get(location_id)
        if entry is None:
            return None

        now = now or utc_now()
        if entry.is_expired(now):
            del self._cache[location_id]
            return None

        self._cache.move_to_end(location_id)
        return entry

    def clear_expired(self, now: datetime = None) -> int:
        """Drop all expired entries. Returns the number removed."""
        now = now or utc_now()
        expired = [key for key, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired:
            del self._cache[key]
        return len(expired)

    def clear(self) -> None:
        self._cache.clear()
