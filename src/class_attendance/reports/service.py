from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..analytics.model import present_percentage
from ..classes.repository import ClassRepository
from ..common.datetime_utils import DateRange, month_range, now_local, week_range
from ..common.validators import coerce_stored_status
from ..core.enums import AttendanceStatus, ReportPeriod
from ..core.exceptions import DataIntegrityWarning, ValidationError
from ..students.model import Student, roll_sort_key
from ..students.repository import StudentRepository

logger = logging.getLogger(__name__)

UNKNOWN_CLASS = "Unknown Class"


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    total_days: int
    date_range: DateRange


def _status_label(record: AttendanceRecord) -> str:
    status = record.status
    return status.value if isinstance(status, AttendanceStatus) else str(status)


class ReportService:
    """Use case: detailed attendance reports for export and printing."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._clock = clock

    def resolve_range(
        self,
        period: ReportPeriod,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> DateRange:
        today = self._clock().date()
        if period == ReportPeriod.TODAY:
            return DateRange(start=today, end=today)
        if period == ReportPeriod.WEEKLY:
            return week_range(today)
        if period == ReportPeriod.MONTHLY:
            return month_range(today)

        if start is None or end is None:
            raise ValidationError("A custom report needs both a start and an end date")
        if start > end:
            raise ValidationError("Start date must not be after end date")
        return DateRange(start=start, end=end)

    def _roster(self, class_id: str) -> dict[str, Student]:
        return {s.student_id: s for s in self._students.list_by_class(class_id)}

    def _class_name(self, class_id: str) -> str:
        school_class = self._classes.get_by_id(class_id)
        return school_class.class_name if school_class else UNKNOWN_CLASS

    def _to_row(self, record: AttendanceRecord, student: Optional[Student], class_section: str) -> dict:
        return {
            "id": record.record_id,
            "student_id": record.student_id,
            "roll_no": student.roll_no if student else "",
            "name": student.full_name if student else "Unknown",
            "class_section": class_section,
            "date": record.date.isoformat(),
            "subject": record.subject_name,
            "status": _status_label(record),
            "created_at": record.created_at.isoformat(),
        }

    def build_attendance_report(
        self,
        *,
        class_id: str,
        date_range: DateRange,
        subject_name: Optional[str] = None,
    ) -> ReportData:
        records = self._attendance.list_for_class(class_id=class_id, subject_name=subject_name, date_range=date_range)
        roster = self._roster(class_id)
        class_section = self._class_name(class_id)

        rows = [self._to_row(r, roster.get(r.student_id), class_section) for r in records]
        rows.sort(key=lambda x: (x["date"], roll_sort_key(x["roll_no"]), x["created_at"]))

        summary_map: dict[str, dict] = {}
        for r in records:
            try:
                status = coerce_stored_status(r.status)
            except DataIntegrityWarning as e:
                logger.warning("Skipping attendance record %s in report summary: %s", r.record_id, e)
                continue

            s = summary_map.get(r.student_id)
            if not s:
                student = roster.get(r.student_id)
                s = {
                    "student_id": r.student_id,
                    "roll_no": student.roll_no if student else "",
                    "name": student.full_name if student else "Unknown",
                    "present": 0,
                    "absent": 0,
                }
                summary_map[r.student_id] = s
            if status == AttendanceStatus.PRESENT:
                s["present"] += 1
            else:
                s["absent"] += 1

        summary = []
        for s in summary_map.values():
            total = s["present"] + s["absent"]
            summary.append({**s, "total": total, "percentage": present_percentage(s["present"], total)})
        summary.sort(key=lambda x: roll_sort_key(x["roll_no"]))

        return ReportData(
            rows=rows,
            summary=summary,
            total_days=len({r.date for r in records}),
            date_range=date_range,
        )

    def attendance_sheet(self, *, class_id: str, on_date: date) -> list[dict]:
        """A class's marks on one date, with student names."""

        roster = self._roster(class_id)
        class_section = self._class_name(class_id)
        rows = [self._to_row(r, roster.get(r.student_id), class_section) for r in self._attendance.list_for_date(class_id=class_id, on_date=on_date)]
        rows.sort(key=lambda x: (roll_sort_key(x["roll_no"]), x["subject"]))
        return rows
