from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def latest_created_at(self, *, class_id: str, subject_name: str) -> Optional[datetime]:
        """Creation time of the newest record for (class, subject), if any."""

        raise NotImplementedError

    def add_many(self, records: Sequence[AttendanceRecord]) -> None:
        """Persist all records in one batch; all-or-nothing."""

        raise NotImplementedError

    def list_for_class(
        self,
        *,
        class_id: str,
        subject_name: Optional[str] = None,
        date_range: Optional[DateRange] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by date, then creation time."""

        raise NotImplementedError

    def list_for_date(self, *, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
