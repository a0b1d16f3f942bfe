from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.validators import coerce_stored_status
from ..core.constants import ABSENCE_RUN_LABELS
from ..core.enums import AttendanceStatus
from ..core.exceptions import DataIntegrityWarning
from .model import AbsenceRunBucket

logger = logging.getLogger(__name__)


def longest_absence_run(records: Iterable[AttendanceRecord]) -> int:
    """Length of the longest unbroken Absent streak, records taken in the given order."""

    current = 0
    longest = 0
    for record in records:
        try:
            status = coerce_stored_status(record.status)
        except DataIntegrityWarning as e:
            logger.warning("Skipping attendance record %s: %s", record.record_id, e)
            continue

        if status == AttendanceStatus.ABSENT:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def run_label(longest_run: int) -> Optional[str]:
    if longest_run <= 0:
        return None
    return ABSENCE_RUN_LABELS[min(longest_run, len(ABSENCE_RUN_LABELS)) - 1]


def summarize_absence_runs(
    records: Iterable[AttendanceRecord],
    student_ids: Sequence[str],
) -> list[AbsenceRunBucket]:
    """Put each rostered student into at most one bucket by their longest absence run.

    ``records`` must already be in date order. Records of students outside the
    roster are ignored.
    """

    by_student: dict[str, list[AttendanceRecord]] = defaultdict(list)
    for record in records:
        by_student[record.student_id].append(record)

    counts = dict.fromkeys(ABSENCE_RUN_LABELS, 0)
    for student_id in student_ids:
        label = run_label(longest_absence_run(by_student.get(student_id, ())))
        if label:
            counts[label] += 1

    return [AbsenceRunBucket(label=label, count=counts[label]) for label in ABSENCE_RUN_LABELS]


def empty_absence_runs() -> list[AbsenceRunBucket]:
    return [AbsenceRunBucket(label=label) for label in ABSENCE_RUN_LABELS]
