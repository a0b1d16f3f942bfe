from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import SummaryPeriod
from .bucketing.base import BucketPolicy
from .bucketing.calendar_policy import CalendarDatePolicy, MonthOfYearPolicy, WeekdayPolicy
from .bucketing.time_of_day_policy import TimeOfDayPolicy


@dataclass
class BucketPolicyFactory:
    """Factory Pattern: choose the bucketing for a summary period."""

    def for_period(self, period: SummaryPeriod) -> BucketPolicy:
        if period == SummaryPeriod.WEEK:
            return WeekdayPolicy()
        if period == SummaryPeriod.YEAR:
            return MonthOfYearPolicy()
        if period == SummaryPeriod.TIME_OF_DAY:
            return TimeOfDayPolicy()
        # Day and month summaries both bucket by calendar date; only the range differs.
        return CalendarDatePolicy()
