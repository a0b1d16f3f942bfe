from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate a teacher (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        try:
            username = require_non_empty(username, "Username")
        except ValidationError:
            raise AuthenticationError("Invalid username or password")

        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            logger.warning("Unreadable password hash for user %s", user.user_id)
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)

    def session_user(self, user_id: str) -> SessionUser:
        """Re-read a signed-in account; deactivated accounts lose their session."""

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Your account is no longer active")
        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def count_teachers(self) -> int:
        return self._users.count_by_role(Role.TEACHER)
