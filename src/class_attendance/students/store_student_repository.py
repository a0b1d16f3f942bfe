from __future__ import annotations

from typing import Sequence

from ..store.model import Ordering, eq
from ..store.repository import RecordStore
from .model import Student, roll_sort_key
from .repository import StudentRepository

STUDENTS_TABLE = "students"


class StoreStudentRepository(StudentRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def list_by_class(self, class_id: str) -> Sequence[Student]:
        rows = self._store.select(
            STUDENTS_TABLE,
            columns=["id", "first_name", "last_name", "roll_no", "class_id"],
            filters=[eq("class_id", class_id)],
            order_by=[Ordering("roll_no")],
        )
        students = [
            Student(
                student_id=str(r["id"]),
                first_name=r.get("first_name") or "",
                last_name=r.get("last_name") or "",
                roll_no=str(r.get("roll_no") or ""),
                class_id=str(r["class_id"]),
            )
            for r in rows
        ]
        # VARCHAR ordering puts "10" before "2".
        students.sort(key=lambda s: roll_sort_key(s.roll_no))
        return students

    def count_all(self) -> int:
        return self._store.count(STUDENTS_TABLE)
