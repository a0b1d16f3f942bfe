from __future__ import annotations

from datetime import date, datetime

import pytest

from class_attendance.analytics.bucketing.calendar_policy import CalendarDatePolicy, MonthOfYearPolicy, WeekdayPolicy
from class_attendance.analytics.bucketing.time_of_day_policy import TimeOfDayPolicy
from class_attendance.analytics.factory import BucketPolicyFactory
from class_attendance.analytics.fold import empty_buckets, fold_records
from class_attendance.analytics.model import BucketSummary, present_percentage
from class_attendance.attendance.model import AttendanceRecord
from class_attendance.core.enums import AttendanceStatus, SummaryPeriod


def _rec(n: int, status, on: date, *, created_at: datetime = None, student_id: str = "stu-1") -> AttendanceRecord:
    return AttendanceRecord(
        record_id=f"att-{n}",
        student_id=student_id,
        class_id="c1",
        subject_name="Physics",
        date=on,
        status=status,
        created_at=created_at or datetime.combine(on, datetime.min.time()).replace(hour=9),
    )


@pytest.mark.parametrize(
    "present,total,expected",
    [
        (0, 0, 0),
        (7, 10, 70),
        (1, 3, 33),
        (2, 3, 67),
        (5, 8, 63),
        (1, 8, 13),
        (10, 10, 100),
        (0, 4, 0),
    ],
)
def test_present_percentage_rounds_half_up(present, total, expected):
    assert present_percentage(present, total) == expected


def test_bucket_summary_totals():
    b = BucketSummary(label="Monday", present=3, absent=1)

    assert b.total == 4
    assert b.present_percentage == 75
    assert b.to_dict() == {"label": "Monday", "present": 3, "absent": 1, "total": 4, "present_percentage": 75}


def test_factory_picks_policy_per_period():
    factory = BucketPolicyFactory()

    assert isinstance(factory.for_period(SummaryPeriod.DAY), CalendarDatePolicy)
    assert isinstance(factory.for_period(SummaryPeriod.WEEK), WeekdayPolicy)
    assert isinstance(factory.for_period(SummaryPeriod.MONTH), CalendarDatePolicy)
    assert isinstance(factory.for_period(SummaryPeriod.YEAR), MonthOfYearPolicy)
    assert isinstance(factory.for_period(SummaryPeriod.TIME_OF_DAY), TimeOfDayPolicy)


def test_weekday_fold_zero_fills_sunday_first():
    records = [
        _rec(1, AttendanceStatus.PRESENT, date(2025, 3, 10)),  # Monday
        _rec(2, AttendanceStatus.ABSENT, date(2025, 3, 10)),
        _rec(3, AttendanceStatus.PRESENT, date(2025, 3, 16)),  # Sunday
    ]

    buckets = fold_records(records, WeekdayPolicy())

    assert [b.label for b in buckets] == ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    by_label = {b.label: b for b in buckets}
    assert (by_label["Monday"].present, by_label["Monday"].absent) == (1, 1)
    assert (by_label["Sunday"].present, by_label["Sunday"].absent) == (1, 0)
    assert by_label["Friday"].total == 0
    assert by_label["Friday"].present_percentage == 0


def test_year_fold_has_twelve_months_in_order():
    records = [
        _rec(1, AttendanceStatus.PRESENT, date(2025, 1, 6)),
        _rec(2, AttendanceStatus.ABSENT, date(2025, 12, 1)),
    ]

    buckets = fold_records(records, MonthOfYearPolicy())

    assert [b.label for b in buckets][:3] == ["Jan", "Feb", "Mar"]
    assert len(buckets) == 12
    assert buckets[0].present == 1
    assert buckets[11].absent == 1
    assert sum(b.total for b in buckets) == 2


def test_calendar_fold_lists_only_dates_seen_in_order():
    records = [
        _rec(1, AttendanceStatus.PRESENT, date(2025, 3, 12)),
        _rec(2, AttendanceStatus.ABSENT, date(2025, 3, 3)),
        _rec(3, AttendanceStatus.PRESENT, date(2025, 3, 12)),
    ]

    buckets = fold_records(records, CalendarDatePolicy())

    assert [b.label for b in buckets] == ["2025-03-03", "2025-03-12"]
    assert buckets[1].present == 2


def test_time_of_day_uses_created_hour_not_date():
    on = date(2025, 3, 12)
    records = [
        _rec(1, AttendanceStatus.PRESENT, on, created_at=datetime(2025, 3, 12, 11, 59)),
        _rec(2, AttendanceStatus.PRESENT, on, created_at=datetime(2025, 3, 12, 12, 0)),
        _rec(3, AttendanceStatus.ABSENT, on, created_at=datetime(2025, 3, 12, 15, 59)),
        _rec(4, AttendanceStatus.ABSENT, on, created_at=datetime(2025, 3, 12, 16, 0)),
        # marked for an earlier date, but recorded in the afternoon
        _rec(5, AttendanceStatus.PRESENT, date(2025, 3, 1), created_at=datetime(2025, 3, 12, 17, 30)),
    ]

    buckets = {b.label: b for b in fold_records(records, TimeOfDayPolicy())}

    assert list(buckets) == ["Morning", "Midday", "Afternoon"]
    assert (buckets["Morning"].present, buckets["Morning"].absent) == (1, 0)
    assert (buckets["Midday"].present, buckets["Midday"].absent) == (1, 1)
    assert (buckets["Afternoon"].present, buckets["Afternoon"].absent) == (1, 1)


def test_each_record_counts_exactly_once():
    records = [_rec(i, AttendanceStatus.PRESENT if i % 3 else AttendanceStatus.ABSENT, date(2025, 3, 1 + i % 20)) for i in range(40)]

    for policy in (CalendarDatePolicy(), WeekdayPolicy(), MonthOfYearPolicy(), TimeOfDayPolicy()):
        buckets = fold_records(records, policy)
        assert sum(b.total for b in buckets) == len(records)
        assert sum(b.present for b in buckets) == sum(1 for r in records if r.status == AttendanceStatus.PRESENT)


def test_unknown_status_is_skipped_and_logged(caplog):
    records = [
        _rec(1, AttendanceStatus.PRESENT, date(2025, 3, 10)),
        _rec(2, "Late", date(2025, 3, 10)),
        _rec(3, "Absent", date(2025, 3, 10)),
    ]

    with caplog.at_level("WARNING"):
        buckets = {b.label: b for b in fold_records(records, WeekdayPolicy())}

    assert (buckets["Monday"].present, buckets["Monday"].absent) == (1, 1)
    assert "att-2" in caplog.text


def test_empty_buckets_follow_fixed_labels():
    assert [b.label for b in empty_buckets(TimeOfDayPolicy())] == ["Morning", "Midday", "Afternoon"]
    assert all(b.total == 0 for b in empty_buckets(WeekdayPolicy()))
    assert empty_buckets(CalendarDatePolicy()) == []
