from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start: date
    end: date

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def week_range(day: date) -> DateRange:
    """Monday..Sunday week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return DateRange(start=start, end=start + timedelta(days=6))


def month_range(day: date) -> DateRange:
    last = calendar.monthrange(day.year, day.month)[1]
    return DateRange(start=day.replace(day=1), end=day.replace(day=last))


def year_range(day: date) -> DateRange:
    return DateRange(start=date(day.year, 1, 1), end=date(day.year, 12, 31))


def as_date(value: Any) -> date:
    """Normalize DATE values coming back from the store.

    The MySQL connector returns ``datetime.date``; other backends may hand
    back ISO strings or full datetimes.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported DATE value type: {type(value)!r}")


def as_datetime(value: Any) -> Optional[datetime]:
    """Normalize DATETIME/TIMESTAMP values coming back from the store."""

    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str):
        v = value.strip()
        if v.endswith("Z"):
            v = v[:-1] + "+00:00"
        parsed = datetime.fromisoformat(v)
    else:
        raise TypeError(f"Unsupported DATETIME value type: {type(value)!r}")

    # Everything in the app compares against now_local(), which is naive local time.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
