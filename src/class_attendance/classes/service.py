from __future__ import annotations

from typing import Optional

from ..students.repository import StudentRepository
from ..subjects.repository import SubjectRepository
from .repository import ClassRepository


class ClassroomService:
    """Use case: what a teacher picks from before marking attendance."""

    def __init__(self, classes: ClassRepository, subjects: SubjectRepository, students: StudentRepository):
        self._classes = classes
        self._subjects = subjects
        self._students = students

    def list_classes(self) -> list[dict]:
        return [{"id": c.class_id, "name": c.class_name} for c in self._classes.list_all()]

    def list_subjects(self, class_id: str) -> list[dict]:
        return [{"subject_name": s.subject_name, "class_id": s.class_id} for s in self._subjects.list_by_class(class_id)]

    def list_students(self, class_id: str) -> list[dict]:
        return [
            {"id": s.student_id, "name": s.full_name, "roll_no": s.roll_no}
            for s in self._students.list_by_class(class_id)
        ]

    def count_students(self) -> int:
        return self._students.count_all()

    def has_selection(self, class_id: str, subject_name: Optional[str] = None) -> bool:
        """True when the class exists and, if given, teaches the subject."""

        if self._classes.get_by_id(class_id) is None:
            return False
        if subject_name is None:
            return True
        return any(s.subject_name == subject_name for s in self._subjects.list_by_class(class_id))
