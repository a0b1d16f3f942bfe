from __future__ import annotations

from typing import Any

from ..core.enums import AttendanceStatus
from ..core.exceptions import DataIntegrityWarning, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_status(value: Any) -> AttendanceStatus:
    """Parse user-supplied status; unknown values are rejected."""
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid attendance status: {value!r}")


def coerce_stored_status(value: Any) -> AttendanceStatus:
    """Parse a status read back from the store.

    Anything other than Present/Absent means the stored data is bad, not the
    request, so this raises DataIntegrityWarning rather than ValidationError.
    """
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise DataIntegrityWarning(f"unexpected attendance status {value!r}")
