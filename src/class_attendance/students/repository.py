from __future__ import annotations

from typing import Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_by_class(self, class_id: str) -> Sequence[Student]:
        """Students of a class ordered by roll number."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError
