from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus, SubmissionOutcome


@dataclass(frozen=True)
class AttendanceMark:
    """One student's status as marked by the teacher, before submission."""

    student_id: str
    status: AttendanceStatus
    date: date


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a persisted attendance row. Never mutated.

    ``status`` is kept as read from the store; a value outside
    Present/Absent stays a plain string so aggregation can flag it.
    """

    record_id: str
    student_id: str
    class_id: str
    subject_name: str
    date: date
    status: Union[AttendanceStatus, str]
    created_at: datetime
    recorded_by: Optional[str] = None

    def to_row(self) -> dict:
        return {
            "id": self.record_id,
            "student_id": self.student_id,
            "class_id": self.class_id,
            "subject_name": self.subject_name,
            "date": self.date,
            "status": self.status.value if isinstance(self.status, AttendanceStatus) else self.status,
            "recorded_by": self.recorded_by,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class CooldownDecision:
    allowed: bool
    last_submitted_at: Optional[datetime] = None

    @property
    def blocked(self) -> bool:
        return not self.allowed


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    message: str
    recorded_count: int = 0
    last_submitted_at: Optional[datetime] = None

    @property
    def committed(self) -> bool:
        return self.outcome == SubmissionOutcome.COMMITTED

    def to_dict(self) -> dict:
        return {
            "success": self.committed,
            "outcome": self.outcome.value,
            "message": self.message,
            "recorded_count": self.recorded_count,
            "last_submitted_at": self.last_submitted_at.isoformat() if self.last_submitted_at else None,
            "can_force": self.outcome == SubmissionOutcome.COOLDOWN_ACTIVE,
        }
