from __future__ import annotations

from ...attendance.model import AttendanceRecord
from ...core.constants import MIDDAY_END_HOUR, MORNING_END_HOUR
from ...core.enums import DayPeriod
from .base import BucketPolicy


class TimeOfDayPolicy(BucketPolicy):
    """Morning / Midday / Afternoon, keyed off when the record was created, not its date."""

    fixed_labels = tuple(p.value for p in DayPeriod)

    def key_for(self, record: AttendanceRecord) -> str:
        hour = record.created_at.hour
        if hour < MORNING_END_HOUR:
            return DayPeriod.MORNING.value
        if hour < MIDDAY_END_HOUR:
            return DayPeriod.MIDDAY.value
        return DayPeriod.AFTERNOON.value
