from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for access checks."""

    ADMIN = "admin"
    TEACHER = "teacher"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the attendance table."""

    PRESENT = "Present"
    ABSENT = "Absent"


class DayPeriod(str, Enum):
    """Time-of-day bucket derived from a record's creation time."""

    MORNING = "Morning"
    MIDDAY = "Midday"
    AFTERNOON = "Afternoon"


class SummaryPeriod(str, Enum):
    """Which bucketing an analytics summary uses."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    TIME_OF_DAY = "time_of_day"


class ReportPeriod(str, Enum):
    TODAY = "today"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class SubmissionOutcome(str, Enum):
    COMMITTED = "COMMITTED"
    COOLDOWN_ACTIVE = "COOLDOWN_ACTIVE"
