from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol, Sequence

from .model import ChangeEvent, Filter, Ordering

ChangeCallback = Callable[[ChangeEvent], None]
Unsubscribe = Callable[[], None]


class RecordStore(Protocol):
    """Narrow interface to the external record store.

    Note (DIP): repositories depend on this interface, never on a concrete backend.
    Every method raises StoreError on failure.
    """

    def insert(self, table: str, rows: Sequence[dict]) -> None:
        """Insert all ``rows`` or none of them."""

        raise NotImplementedError

    def select(
        self,
        table: str,
        *,
        columns: Optional[Sequence[str]] = None,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: Optional[int] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def count(self, table: str, *, filters: Iterable[Filter] = ()) -> int:
        raise NotImplementedError

    def subscribe(self, table: str, callback: ChangeCallback) -> Unsubscribe:
        raise NotImplementedError
