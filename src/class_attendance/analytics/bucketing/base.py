from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...attendance.model import AttendanceRecord


class BucketPolicy(ABC):
    """Strategy Pattern: decide which summary bucket a record counts toward.

    A policy with ``fixed_labels`` always reports every bucket (zero-filled,
    in that order). A policy without them reports only buckets that received
    a record, ordered by label.
    """

    fixed_labels: Optional[Sequence[str]] = None

    @abstractmethod
    def key_for(self, record: AttendanceRecord) -> str:
        raise NotImplementedError
