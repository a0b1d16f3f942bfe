from __future__ import annotations

import itertools
from collections import defaultdict
from datetime import datetime, time
from typing import Iterable, Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from class_attendance.core.exceptions import StoreError
from class_attendance.store.change_feed import ChangeFeed
from class_attendance.store.model import ChangeEvent, ChangeKind, Filter, Ordering

CLASS_ID = "61d3f3cc-748e-49d2-8212-6a3fc97136c8"
OTHER_CLASS_ID = "22935fbd-2565-4dd8-8a14-f766e2c42cc3"


class InMemoryStore:
    """RecordStore fake: rows kept per table, filters evaluated in Python."""

    def __init__(self, tables: Optional[dict] = None):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        for table, rows in (tables or {}).items():
            self.tables[table] = [dict(r) for r in rows]
        self.feed = ChangeFeed()
        self.insert_calls = 0
        self.select_calls = 0
        self.fail_reads = False
        self.fail_writes = False

    def insert(self, table: str, rows: Sequence[dict]) -> None:
        if self.fail_writes:
            raise StoreError(f"Failed to insert into {table}: connection lost")
        rows = [dict(r) for r in rows]
        self.insert_calls += 1
        self.tables[table].extend(rows)
        self.feed.publish(ChangeEvent(table=table, kind=ChangeKind.INSERT, rows=tuple(rows)))

    def select(
        self,
        table: str,
        *,
        columns: Optional[Sequence[str]] = None,
        filters: Iterable[Filter] = (),
        order_by: Iterable[Ordering] = (),
        limit: Optional[int] = None,
    ) -> list[dict]:
        self.select_calls += 1
        if self.fail_reads:
            raise StoreError(f"Failed to read {table}: connection lost")

        filters = list(filters)
        out = [dict(r) for r in self.tables[table] if all(f.matches(r) for f in filters)]
        # Stable sorts applied last-key-first give a multi-column ORDER BY.
        for o in reversed(list(order_by)):
            out.sort(key=lambda r: r[o.column], reverse=o.descending)
        if limit is not None:
            out = out[:limit]
        if columns:
            out = [{c: r.get(c) for c in columns} for r in out]
        return out

    def count(self, table: str, *, filters: Iterable[Filter] = ()) -> int:
        return len(self.select(table, filters=filters))

    def subscribe(self, table: str, callback):
        return self.feed.subscribe(table, callback)


@pytest.fixture
def fixed_now():
    # A Wednesday, mid-morning.
    return datetime(2025, 3, 12, 10, 30, 0)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture(scope="session")
def password_hashes():
    return {"admin": generate_password_hash("admin123"), "teacher": generate_password_hash("teacher123")}


@pytest.fixture
def seeded_store(password_hashes):
    return InMemoryStore(
        {
            "classes": [
                {"id": CLASS_ID, "class_name": "SE MME"},
                {"id": OTHER_CLASS_ID, "class_name": "TE MME"},
            ],
            "subjects": [
                {"id": "sub-2", "subject_name": "Physics", "class_id": CLASS_ID},
                {"id": "sub-1", "subject_name": "Engineering Mathematics III", "class_id": CLASS_ID},
                {"id": "sub-3", "subject_name": "Heat Treatment", "class_id": OTHER_CLASS_ID},
            ],
            "students": [
                {"id": "stu-10", "first_name": "Rohan", "last_name": "Deshmukh", "roll_no": "10", "class_id": CLASS_ID},
                {"id": "stu-1", "first_name": "Aarav", "last_name": "Patil", "roll_no": "1", "class_id": CLASS_ID},
                {"id": "stu-2", "first_name": "Diya", "last_name": "Kulkarni", "roll_no": "2", "class_id": CLASS_ID},
                {"id": "stu-x", "first_name": "Sneha", "last_name": "Joshi", "roll_no": "1", "class_id": OTHER_CLASS_ID},
            ],
            "users": [
                {
                    "id": "user-admin",
                    "full_name": "Admin Demo",
                    "username": "admin",
                    "password_hash": password_hashes["admin"],
                    "role": "admin",
                    "is_active": True,
                },
                {
                    "id": "user-teacher",
                    "full_name": "Teacher Demo",
                    "username": "teacher",
                    "password_hash": password_hashes["teacher"],
                    "role": "teacher",
                    "is_active": True,
                },
                {
                    "id": "user-gone",
                    "full_name": "Former Teacher",
                    "username": "former",
                    "password_hash": password_hashes["teacher"],
                    "role": "teacher",
                    "is_active": False,
                },
            ],
        }
    )


@pytest.fixture
def attendance_row():
    """Factory for raw attendance rows as the store would hold them."""

    counter = itertools.count(1)

    def make(student_id, status, on, *, created_at=None, subject="Physics", class_id=CLASS_ID):
        return {
            "id": f"att-{next(counter)}",
            "student_id": student_id,
            "class_id": class_id,
            "subject_name": subject,
            "date": on,
            "status": status,
            "recorded_by": "user-teacher",
            "created_at": created_at or datetime.combine(on, time(9, 0)),
        }

    return make
