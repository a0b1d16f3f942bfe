from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import DateRange


def present_percentage(present: int, total: int) -> int:
    """``round(present / total * 100)`` with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    # Integer form of floor(x + 0.5) so 62.5 -> 63 (Python's round() would give 62).
    return (present * 200 + total) // (2 * total)


@dataclass(frozen=True)
class Selection:
    """Which records a summary folds over."""

    class_id: str
    subject_name: Optional[str] = None
    date_range: Optional[DateRange] = None


@dataclass(frozen=True)
class BucketSummary:
    """Read-model for one chart bucket (a weekday, a month, a date, ...)."""

    label: str
    present: int = 0
    absent: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent

    @property
    def present_percentage(self) -> int:
        return present_percentage(self.present, self.total)

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "present": self.present,
            "absent": self.absent,
            "total": self.total,
            "present_percentage": self.present_percentage,
        }


@dataclass(frozen=True)
class AbsenceRunBucket:
    label: str
    count: int = 0

    def to_dict(self) -> dict:
        return {"label": self.label, "count": self.count}
