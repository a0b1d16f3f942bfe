from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_status
from ..core.constants import SUBMISSION_COOLDOWN_SECONDS
from ..core.enums import SubmissionOutcome
from ..core.exceptions import EmptyInputError, StoreError
from .model import AttendanceMark, AttendanceRecord, CooldownDecision, SubmissionResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _new_record_id() -> str:
    return str(uuid.uuid4())


class AttendanceService:
    """Use case: record a class's attendance for one subject.

    Business rule:
    - At most one submission per (class, subject) per cooldown window (one hour).
    - The window is read back from stored ``created_at`` values on every check;
      nothing is cached in memory.
    - ``force=True`` skips the window so a teacher can correct a bad submission.

    The check and the insert are not atomic. Two sessions submitting at the
    same moment can both pass the check.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        cooldown_seconds: int = SUBMISSION_COOLDOWN_SECONDS,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._attendance = attendance
        self._cooldown = timedelta(seconds=int(cooldown_seconds))
        self._new_id = id_factory or _new_record_id

    def can_submit(
        self,
        *,
        class_id: str,
        subject_name: str,
        now: Optional[datetime] = None,
        force: bool = False,
    ) -> CooldownDecision:
        if force:
            return CooldownDecision(allowed=True)

        now = now or now_local()
        try:
            last = self._attendance.latest_created_at(class_id=class_id, subject_name=subject_name)
        except StoreError:
            # fail open
            logger.exception("Could not check recent attendance for class=%s subject=%s", class_id, subject_name)
            return CooldownDecision(allowed=True)

        if last is None:
            return CooldownDecision(allowed=True)
        if now - last < self._cooldown:
            return CooldownDecision(allowed=False, last_submitted_at=last)
        return CooldownDecision(allowed=True, last_submitted_at=last)

    def submit_attendance(
        self,
        marks: Iterable[AttendanceMark],
        *,
        class_id: str,
        subject_name: str,
        recorded_by: Optional[str] = None,
        force: bool = False,
        now: Optional[datetime] = None,
    ) -> SubmissionResult:
        marks = list(marks)
        if not marks:
            raise EmptyInputError("No attendance marks to submit")

        class_id = require_non_empty(class_id, "Class")
        subject_name = require_non_empty(subject_name, "Subject")
        now = now or now_local()

        decision = self.can_submit(class_id=class_id, subject_name=subject_name, now=now, force=force)
        if decision.blocked:
            logger.info(
                "Attendance for class=%s subject=%s blocked by cooldown (last at %s)",
                class_id,
                subject_name,
                decision.last_submitted_at,
            )
            return SubmissionResult(
                outcome=SubmissionOutcome.COOLDOWN_ACTIVE,
                message=(
                    f"Attendance for {subject_name} was already recorded within the last hour "
                    f"(last recorded at {decision.last_submitted_at:%Y-%m-%d %H:%M})."
                ),
                last_submitted_at=decision.last_submitted_at,
            )

        records = [
            AttendanceRecord(
                record_id=self._new_id(),
                student_id=require_non_empty(m.student_id, "Student"),
                class_id=class_id,
                subject_name=subject_name,
                date=m.date,
                status=require_status(m.status),
                created_at=now,
                recorded_by=recorded_by,
            )
            for m in marks
        ]

        # StoreError propagates untouched: nothing was written and the caller decides on a retry.
        self._attendance.add_many(records)

        logger.info(
            "Recorded %d attendance row(s) for class=%s subject=%s force=%s",
            len(records),
            class_id,
            subject_name,
            force,
        )
        return SubmissionResult(
            outcome=SubmissionOutcome.COMMITTED,
            message=f"Successfully recorded attendance for {subject_name} ({len(records)} students)",
            recorded_count=len(records),
        )
