from __future__ import annotations

from typing import Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def list_by_class(self, class_id: str) -> Sequence[Subject]:
        """Subjects taught to a class, ordered by name."""

        raise NotImplementedError
