from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        raise NotImplementedError
