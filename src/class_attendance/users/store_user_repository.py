from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..store.model import eq
from ..store.repository import RecordStore
from .model import User
from .repository import UserRepository

USERS_TABLE = "users"


def _to_user(r: dict) -> User:
    return User(
        user_id=str(r["id"]),
        full_name=r["full_name"],
        username=r["username"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        is_active=bool(r.get("is_active", True)),
    )


class StoreUserRepository(UserRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def _find_one(self, column: str, value: str) -> Optional[User]:
        rows = self._store.select(USERS_TABLE, filters=[eq(column, value)], limit=1)
        return _to_user(rows[0]) if rows else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._find_one("id", user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._find_one("username", username)

    def count_by_role(self, role: Role) -> int:
        return self._store.count(USERS_TABLE, filters=[eq("role", role.value), eq("is_active", True)])
