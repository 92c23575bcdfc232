"""Service for sunrise/sunset windows and daylight flags."""
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from astral import Observer
from astral.sun import sun

from swim_engine.config import DAYLIGHT_DEPRESSION_ANGLE
from swim_engine.utils.time_utils import parse_timestamps, to_naive_utc

DaylightWindow = Tuple[datetime, datetime]


class DaylightService:
    """
    Builds daylight windows and flags forecast timestamps that fall inside them.

    Windows normally come from the provider's daily sunrise/sunset arrays. When
    those are missing they can be computed for a location with the astral
    library. All datetimes are naive UTC.
    """

    def __init__(self, depression_angle: float = DAYLIGHT_DEPRESSION_ANGLE):
        """
        Initialize the daylight service.

        Args:
            depression_angle: Sun depression angle used for astral windows.
                             0 = geometric sunrise/sunset
                             6 = civil twilight
        """
        self.depression_angle = depression_angle

        # (lat, lon, date) -> window or None for polar night
        self._cache: dict = {}

    def build_windows(
        self,
        sunrises: Optional[Sequence[str]],
        sunsets: Optional[Sequence[str]],
    ) -> List[DaylightWindow]:
        """
        Pair provider sunrise and sunset strings into windows.

        Only the first min(len(sunrises), len(sunsets)) pairs are used.
        """
        rises = parse_timestamps(sunrises)
        sets = parse_timestamps(sunsets)
        return list(zip(rises, sets))

    def get_sunrise_sunset_utc(
        self,
        latitude: float,
        longitude: float,
        day: date,
    ) -> Optional[DaylightWindow]:
        """
        Compute the daylight window for a location and date.

        Returns:
            (sunrise, sunset) as naive UTC datetimes, a full-day window for
            polar day, or None for polar night
        """
        cache_key = (round(latitude, 2), round(longitude, 2), day)
        if cache_key in self._cache:
            return self._cache[cache_key]

        observer = Observer(latitude=latitude, longitude=longitude)

        try:
            sun_times = sun(
                observer,
                date=day,
                tzinfo=timezone.utc,
                dawn_dusk_depression=self.depression_angle,
            )
            if self.depression_angle > 0:
                start, end = sun_times["dawn"], sun_times["dusk"]
            else:
                start, end = sun_times["sunrise"], sun_times["sunset"]
            result = (to_naive_utc(start), to_naive_utc(end))
        except ValueError:
            # Sun never rises or never sets on this date
            day_of_year = day.timetuple().tm_yday
            is_northern_summer = 80 < day_of_year < 265
            is_polar_day = (latitude > 60 and is_northern_summer) or \
                           (latitude < -60 and not is_northern_summer)
            if is_polar_day:
                result = (
                    datetime.combine(day, datetime.min.time()),
                    datetime.combine(day, datetime.max.time().replace(microsecond=0)),
                )
            else:
                result = None

        self._cache[cache_key] = result
        return result

    def windows_for_location(
        self,
        latitude: float,
        longitude: float,
        days: Iterable[date],
    ) -> List[DaylightWindow]:
        """Compute daylight windows for each distinct day, skipping polar nights."""
        windows = []
        for day in sorted(set(days)):
            window = self.get_sunrise_sunset_utc(latitude, longitude, day)
            if window is not None:
                windows.append(window)
        return windows

    def is_daylight(
        self,
        timestamp: datetime,
        windows: Sequence[DaylightWindow],
    ) -> Optional[bool]:
        """
        Check whether a timestamp falls within any daylight window.

        Returns:
            True/False, or None when no windows are available
        """
        if not windows:
            return None
        timestamp = to_naive_utc(timestamp)
        return any(sunrise <= timestamp <= sunset for sunrise, sunset in windows)

    def create_daylight_mask(
        self,
        timestamps: Sequence[datetime],
        windows: Sequence[DaylightWindow],
    ) -> np.ndarray:
        """
        Boolean mask of timestamps that fall within daylight windows.

        With no windows the mask is all False.
        """
        ts = np.array([np.datetime64(to_naive_utc(t)) for t in timestamps], dtype="datetime64[s]")
        mask = np.zeros(len(ts), dtype=bool)

        for sunrise, sunset in windows:
            mask |= (ts >= np.datetime64(sunrise, "s")) & (ts <= np.datetime64(sunset, "s"))

        return mask

    def clear_cache(self) -> None:
        """Clear the sunrise/sunset cache."""
        self._cache.clear()
