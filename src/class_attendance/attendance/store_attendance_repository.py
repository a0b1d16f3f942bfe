from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import DateRange, as_date, as_datetime
from ..core.enums import AttendanceStatus
from ..store.model import Ordering, eq, gte, lte
from ..store.repository import RecordStore
from .model import AttendanceRecord
from .repository import AttendanceRepository

ATTENDANCE_TABLE = "attendance"


def _status(value):
    try:
        return AttendanceStatus(value)
    except ValueError:
        return value


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["id"]),
        student_id=str(r["student_id"]),
        class_id=str(r["class_id"]),
        subject_name=r["subject_name"],
        date=as_date(r["date"]),
        status=_status(r["status"]),
        created_at=as_datetime(r["created_at"]),
        recorded_by=r.get("recorded_by"),
    )


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def latest_created_at(self, *, class_id: str, subject_name: str) -> Optional[datetime]:
        rows = self._store.select(
            ATTENDANCE_TABLE,
            columns=["created_at"],
            filters=[eq("class_id", class_id), eq("subject_name", subject_name)],
            order_by=[Ordering("created_at", descending=True)],
            limit=1,
        )
        if not rows:
            return None
        return as_datetime(rows[0]["created_at"])

    def add_many(self, records: Sequence[AttendanceRecord]) -> None:
        self._store.insert(ATTENDANCE_TABLE, [r.to_row() for r in records])

    def list_for_class(
        self,
        *,
        class_id: str,
        subject_name: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> Sequence[AttendanceRecord]:
        filters = [eq("class_id", class_id)]
        if subject_name:
            filters.append(eq("subject_name", subject_name))
        if date_range is not None:
            filters.append(gte("date", date_range.start))
            filters.append(lte("date", date_range.end))

        rows = self._store.select(
            ATTENDANCE_TABLE,
            filters=filters,
            order_by=[Ordering("date"), Ordering("created_at")],
        )
        return [_to_record(r) for r in rows]

    def list_for_date(self, *, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        rows = self._store.select(
            ATTENDANCE_TABLE,
            filters=[eq("class_id", class_id), eq("date", on_date)],
            order_by=[Ordering("created_at")],
        )
        return [_to_record(r) for r in rows]
