from __future__ import annotations

from ...attendance.model import AttendanceRecord
from ...core.constants import MONTH_NAMES, WEEKDAY_NAMES
from .base import BucketPolicy


class CalendarDatePolicy(BucketPolicy):
    """One bucket per calendar date (ISO ``YYYY-MM-DD`` sorts chronologically)."""

    def key_for(self, record: AttendanceRecord) -> str:
        return record.date.isoformat()


class WeekdayPolicy(BucketPolicy):
    """Seven fixed buckets, Sunday first."""

    fixed_labels = WEEKDAY_NAMES

    def key_for(self, record: AttendanceRecord) -> str:
        # date.weekday() is Monday=0; shift so Sunday=0.
        return WEEKDAY_NAMES[(record.date.weekday() + 1) % 7]


class MonthOfYearPolicy(BucketPolicy):
    """Twelve fixed buckets, Jan..Dec."""

    fixed_labels = MONTH_NAMES

    def key_for(self, record: AttendanceRecord) -> str:
        return MONTH_NAMES[record.date.month - 1]
