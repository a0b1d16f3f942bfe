from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    """JSON flavour of the session check: 401 instead of a login redirect."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def parse_date_arg(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def parse_int_arg(value: Optional[str], field_name: str, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")
