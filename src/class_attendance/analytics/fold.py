from __future__ import annotations

import logging
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..common.validators import coerce_stored_status
from ..core.enums import AttendanceStatus
from ..core.exceptions import DataIntegrityWarning
from .bucketing.base import BucketPolicy
from .model import BucketSummary

logger = logging.getLogger(__name__)


def empty_buckets(policy: BucketPolicy) -> list[BucketSummary]:
    return [BucketSummary(label=label) for label in (policy.fixed_labels or ())]


def fold_records(records: Iterable[AttendanceRecord], policy: BucketPolicy) -> list[BucketSummary]:
    """Count each record once, as present or absent, in the bucket its policy picks.

    Records with an unrecognised status are logged and left out of every bucket.
    """

    counts: dict[str, list[int]] = {label: [0, 0] for label in (policy.fixed_labels or ())}

    for record in records:
        try:
            status = coerce_stored_status(record.status)
        except DataIntegrityWarning as e:
            logger.warning("Skipping attendance record %s: %s", record.record_id, e)
            continue

        bucket = counts.setdefault(policy.key_for(record), [0, 0])
        if status == AttendanceStatus.PRESENT:
            bucket[0] += 1
        else:
            bucket[1] += 1

    labels = list(policy.fixed_labels) if policy.fixed_labels else sorted(counts)
    return [BucketSummary(label=label, present=counts[label][0], absent=counts[label][1]) for label in labels]
