from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff account (teacher or admin).

    Note: plain data object, no DB access here.
    """

    user_id: str
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
