"""Calendar-day windows over naive UTC timestamps.

Every date-scoped query builds its bounds through one of these constructors.
The call sites do not agree on where a day ends, so each rule has its own
named constructor instead of ad-hoc arithmetic in the services:

- ``utc_day_exclusive``: [day 00:00:00Z, day 23:59:59Z)   registration lookup
- ``utc_day_inclusive``: [day 00:00:00.000Z, day 23:59:59.999Z]   daily report
- ``shifted_day``: local day bounds moved by a fixed offset, exclusive end
- ``shifted_day_inclusive``: same, inclusive end
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass(frozen=True)
class DayWindow:
    start: datetime
    end: datetime
    end_inclusive: bool = False

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        if self.end_inclusive:
            return moment <= self.end
        return moment < self.end

    @property
    def end_operator(self) -> str:
        return "<=" if self.end_inclusive else "<"


def utc_day_exclusive(day: date) -> DayWindow:
    return DayWindow(
        start=datetime.combine(day, time(0, 0, 0)),
        end=datetime.combine(day, time(23, 59, 59)),
        end_inclusive=False,
    )


def utc_day_inclusive(day: date) -> DayWindow:
    return DayWindow(
        start=datetime.combine(day, time(0, 0, 0)),
        end=datetime.combine(day, time(23, 59, 59, 999000)),
        end_inclusive=True,
    )


def shifted_day(day: date, *, offset_hours: int) -> DayWindow:
    shift = timedelta(hours=offset_hours)
    return DayWindow(
        start=datetime.combine(day, time(0, 0, 0)) + shift,
        end=datetime.combine(day, time(23, 59, 59)) + shift,
        end_inclusive=False,
    )


def shifted_day_inclusive(day: date, *, offset_hours: int) -> DayWindow:
    shift = timedelta(hours=offset_hours)
    return DayWindow(
        start=datetime.combine(day, time(0, 0, 0)) + shift,
        end=datetime.combine(day, time(23, 59, 59)) + shift,
        end_inclusive=True,
    )
