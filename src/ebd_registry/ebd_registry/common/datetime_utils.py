from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (the store keeps naive UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_date(moment: datetime, *, offset_hours: int) -> date:
    """Calendar date at a fixed UTC-offset_hours zone for a naive UTC moment."""
    return (moment - timedelta(hours=offset_hours)).date()


def last_sunday(day: date) -> date:
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def format_br_date(value: datetime | date) -> str:
    return value.strftime("%d/%m/%Y")
