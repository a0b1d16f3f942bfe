from __future__ import annotations

from typing import Optional, Sequence

from ..store.model import Ordering, eq
from ..store.repository import RecordStore
from .model import SchoolClass
from .repository import ClassRepository

CLASSES_TABLE = "classes"


def _to_class(r: dict) -> SchoolClass:
    return SchoolClass(class_id=str(r["id"]), class_name=r["class_name"])


class StoreClassRepository(ClassRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def list_all(self) -> Sequence[SchoolClass]:
        rows = self._store.select(CLASSES_TABLE, columns=["id", "class_name"], order_by=[Ordering("class_name")])
        return [_to_class(r) for r in rows]

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        rows = self._store.select(
            CLASSES_TABLE,
            columns=["id", "class_name"],
            filters=[eq("id", class_id)],
            limit=1,
        )
        return _to_class(rows[0]) if rows else None
