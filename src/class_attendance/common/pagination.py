from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def first_index(self) -> int:
        """1-based position of the first item shown (0 when empty)."""
        if not self.items:
            return 0
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self) -> int:
        return min(self.page * self.per_page, self.total) if self.items else 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def caption(self) -> str:
        return f"Showing {self.first_index} to {self.last_index} of {self.total} entries"


def paginate(items: Sequence[T], *, page: int = 1, per_page: int) -> Page[T]:
    """Slice ``items`` into a 1-based page.

    Pages past the end come back empty rather than raising.
    """

    if per_page <= 0:
        raise ValidationError("per_page must be positive")
    if page < 1:
        raise ValidationError("page must be 1 or greater")

    start = (page - 1) * per_page
    return Page(items=list(items[start:start + per_page]), page=page, per_page=per_page, total=len(items))
