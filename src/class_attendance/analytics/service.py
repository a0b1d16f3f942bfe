from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateRange, month_range, now_local, week_range, year_range
from ..core.enums import SummaryPeriod
from ..core.exceptions import StoreError
from ..students.repository import StudentRepository
from .factory import BucketPolicyFactory
from .fold import empty_buckets, fold_records
from .model import AbsenceRunBucket, BucketSummary, Selection
from .streaks import empty_absence_runs, summarize_absence_runs

logger = logging.getLogger(__name__)


def default_range(period: SummaryPeriod, today: date) -> Optional[DateRange]:
    """Range a summary covers when the caller gives none.

    Time-of-day looks at every record of the class.
    """
    if period == SummaryPeriod.DAY:
        return DateRange(start=today, end=today)
    if period == SummaryPeriod.WEEK:
        return week_range(today)
    if period == SummaryPeriod.MONTH:
        return month_range(today)
    if period == SummaryPeriod.YEAR:
        return year_range(today)
    return None


@dataclass(frozen=True)
class ClassAnalytics:
    today: BucketSummary
    week: list[BucketSummary]
    month: list[BucketSummary]
    year: list[BucketSummary]
    time_of_day: list[BucketSummary]
    consecutive_absences: list[AbsenceRunBucket]
    computed_at: datetime

    def to_dict(self) -> dict:
        return {
            "today": self.today.to_dict(),
            "week": [b.to_dict() for b in self.week],
            "month": [b.to_dict() for b in self.month],
            "year": [b.to_dict() for b in self.year],
            "time_of_day": [b.to_dict() for b in self.time_of_day],
            "consecutive_absences": [b.to_dict() for b in self.consecutive_absences],
            "computed_at": self.computed_at.isoformat(),
        }


class AnalyticsService:
    """Use case: attendance summaries behind the analytics charts.

    Analytics are advisory. A store failure is logged and the summary comes
    back zero-filled (or empty, for per-date summaries) instead of raising.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        *,
        policy_factory: Optional[BucketPolicyFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._factory = policy_factory or BucketPolicyFactory()
        self._clock = clock

    def _fold(self, period: SummaryPeriod, selection: Selection) -> list[BucketSummary]:
        policy = self._factory.for_period(period)
        try:
            records = self._attendance.list_for_class(
                class_id=selection.class_id,
                subject_name=selection.subject_name,
                date_range=selection.date_range,
            )
        except StoreError:
            logger.exception(
                "Could not load attendance for %s summary (class=%s subject=%s)",
                period.value,
                selection.class_id,
                selection.subject_name,
            )
            return empty_buckets(policy)
        return fold_records(records, policy)

    def summarize(
        self,
        period: SummaryPeriod,
        class_id: str,
        subject_name: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> list[BucketSummary]:
        if date_range is None:
            date_range = default_range(period, self._clock().date())
        return self._fold(period, Selection(class_id=class_id, subject_name=subject_name, date_range=date_range))

    def summarize_day(self, class_id: str, subject_name: Optional[str] = None, on_date: Optional[date] = None) -> BucketSummary:
        """Single bucket for ``on_date`` (default today).

        For per-date buckets over several days use
        ``summarize(SummaryPeriod.DAY, class_id, subject_name, date_range)``.
        """

        day = on_date or self._clock().date()
        buckets = self.summarize(SummaryPeriod.DAY, class_id, subject_name, DateRange(start=day, end=day))
        return buckets[0] if buckets else BucketSummary(label=day.isoformat())

    def summarize_weekdays(self, class_id: str, subject_name: Optional[str] = None, date_range: Optional[DateRange] = None):
        return self.summarize(SummaryPeriod.WEEK, class_id, subject_name, date_range)

    def summarize_month(self, class_id: str, subject_name: Optional[str] = None, date_range: Optional[DateRange] = None):
        return self.summarize(SummaryPeriod.MONTH, class_id, subject_name, date_range)

    def summarize_year(self, class_id: str, subject_name: Optional[str] = None, date_range: Optional[DateRange] = None):
        return self.summarize(SummaryPeriod.YEAR, class_id, subject_name, date_range)

    def summarize_time_of_day(self, class_id: str, subject_name: Optional[str] = None, date_range: Optional[DateRange] = None):
        return self.summarize(SummaryPeriod.TIME_OF_DAY, class_id, subject_name, date_range)

    def summarize_consecutive_absences(self, class_id: str, subject_name: Optional[str] = None) -> list[AbsenceRunBucket]:
        # One class-wide query instead of one per student; records come back in date order.
        try:
            roster = self._students.list_by_class(class_id)
            records = self._attendance.list_for_class(class_id=class_id, subject_name=subject_name)
        except StoreError:
            logger.exception("Could not load consecutive absences (class=%s subject=%s)", class_id, subject_name)
            return empty_absence_runs()

        return summarize_absence_runs(records, [s.student_id for s in roster])

    def class_analytics(self, class_id: str, subject_name: Optional[str] = None) -> ClassAnalytics:
        return ClassAnalytics(
            today=self.summarize_day(class_id, subject_name),
            week=self.summarize_weekdays(class_id, subject_name),
            month=self.summarize_month(class_id, subject_name),
            year=self.summarize_year(class_id, subject_name),
            time_of_day=self.summarize_time_of_day(class_id, subject_name),
            consecutive_absences=self.summarize_consecutive_absences(class_id, subject_name),
            computed_at=self._clock(),
        )
