from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolClass:
    """A class section, e.g. "SE MME"."""

    class_id: str
    class_name: str
