from __future__ import annotations

from typing import Sequence

from ..store.model import Ordering, eq
from ..store.repository import RecordStore
from .model import Subject
from .repository import SubjectRepository

SUBJECTS_TABLE = "subjects"


class StoreSubjectRepository(SubjectRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def list_by_class(self, class_id: str) -> Sequence[Subject]:
        rows = self._store.select(
            SUBJECTS_TABLE,
            columns=["id", "subject_name", "class_id"],
            filters=[eq("class_id", class_id)],
            order_by=[Ordering("subject_name")],
        )
        return [
            Subject(subject_id=str(r["id"]), subject_name=r["subject_name"], class_id=str(r["class_id"]))
            for r in rows
        ]
