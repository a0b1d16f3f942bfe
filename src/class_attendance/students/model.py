from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a student enrolled in one class."""

    student_id: str
    first_name: str
    last_name: str
    roll_no: str
    class_id: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def roll_sort_key(roll_no: str):
    """Numeric roll numbers sort as numbers ("9" before "10"), others after them."""
    roll_no = str(roll_no or "")
    return (0, int(roll_no), "") if roll_no.isdigit() else (1, 0, roll_no)
