from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_status
from ..common.web import json_error, login_required, parse_date_arg
from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from .model import AttendanceMark

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _parse_marks(data: dict) -> list[AttendanceMark]:
        raw_marks = data.get("marks") or []
        if not isinstance(raw_marks, list):
            raise ValidationError("marks must be a list")

        default_date = parse_date_arg(data.get("date"), "date") or now_local().date()
        marks = []
        for raw in raw_marks:
            if not isinstance(raw, dict):
                raise ValidationError("Each mark must be an object")
            marks.append(
                AttendanceMark(
                    student_id=require_non_empty(str(raw.get("student_id") or ""), "Student"),
                    status=require_status(raw.get("status")),
                    date=parse_date_arg(raw.get("date"), "date") or default_date,
                )
            )
        return marks

    @app.route("/api/attendance/<class_id>/cooldown", methods=["GET"], endpoint="attendance_cooldown")
    @login_required
    def attendance_cooldown(class_id: str):
        try:
            subject_name = require_non_empty(request.args.get("subject", ""), "Subject")
        except ValidationError as e:
            return json_error(str(e), 400)

        decision = container.attendance_service.can_submit(class_id=class_id, subject_name=subject_name)
        return jsonify({
            "success": True,
            "can_submit": decision.allowed,
            "last_submitted_at": decision.last_submitted_at.isoformat() if decision.last_submitted_at else None,
        })

    @app.route("/api/attendance", methods=["POST"], endpoint="submit_attendance")
    @login_required
    def submit_attendance():
        data = request.get_json(silent=True) or {}
        try:
            marks = _parse_marks(data)
            result = container.attendance_service.submit_attendance(
                marks,
                class_id=str(data.get("class_id") or ""),
                subject_name=str(data.get("subject_name") or ""),
                recorded_by=session.get("user_id"),
                force=bool(data.get("force", False)),
            )
        except ValidationError as e:
            # EmptyInputError included
            return json_error(str(e), 400)
        except StoreError:
            logger.exception("Attendance submission failed")
            return json_error("Attendance could not be saved. Nothing was recorded, please try again.", 503)

        if not result.committed:
            return jsonify(result.to_dict()), 409
        return jsonify(result.to_dict())

    @app.route("/api/attendance/<class_id>/<on_date>", methods=["GET"], endpoint="attendance_by_date")
    @login_required
    def attendance_by_date(class_id: str, on_date: str):
        try:
            day = parse_date_arg(on_date, "date")
            rows = container.report_service.attendance_sheet(class_id=class_id, on_date=day)
        except ValidationError as e:
            return json_error(str(e), 400)
        except StoreError:
            logger.exception("Could not load attendance for class=%s date=%s", class_id, on_date)
            return json_error("Could not load attendance", 503)
        return jsonify({"success": True, "date": day.isoformat(), "records": rows})
