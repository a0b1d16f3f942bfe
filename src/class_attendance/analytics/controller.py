from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import DateRange
from ..common.web import json_error, login_required, parse_date_arg
from ..core.enums import SummaryPeriod
from ..core.exceptions import StoreError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

CONSECUTIVE_ABSENCES = "consecutive_absences"


def register(app: Flask, container: Container) -> None:
    def _date_range_from_args():
        start = parse_date_arg(request.args.get("start"), "start")
        end = parse_date_arg(request.args.get("end"), "end")
        if start is None and end is None:
            return None
        if start is None or end is None:
            raise ValidationError("Both start and end are needed for a date range")
        if start > end:
            raise ValidationError("Start date must not be after end date")
        return DateRange(start=start, end=end)

    @app.route("/api/analytics/<class_id>", methods=["GET"], endpoint="class_analytics")
    @login_required
    def class_analytics(class_id: str):
        subject_name = request.args.get("subject") or None
        try:
            known = container.classroom_service.has_selection(class_id, subject_name)
        except StoreError:
            logger.exception("Could not check class=%s subject=%s", class_id, subject_name)
            return json_error("Could not load analytics", 503)
        if not known:
            return json_error("Unknown class or subject", 404)

        analytics = container.live_analytics.current(class_id, subject_name)
        return jsonify({"success": True, "analytics": analytics.to_dict()})

    @app.route("/api/analytics/<class_id>/<period>", methods=["GET"], endpoint="period_analytics")
    @login_required
    def period_analytics(class_id: str, period: str):
        subject_name = request.args.get("subject") or None

        if period == CONSECUTIVE_ABSENCES:
            runs = container.analytics_service.summarize_consecutive_absences(class_id, subject_name)
            return jsonify({"success": True, "period": period, "buckets": [r.to_dict() for r in runs]})

        try:
            summary_period = SummaryPeriod(period)
            date_range = _date_range_from_args()
        except ValueError:
            return json_error(f"Unknown analytics period: {period}", 400)
        except ValidationError as e:
            return json_error(str(e), 400)

        buckets = container.analytics_service.summarize(summary_period, class_id, subject_name, date_range)
        return jsonify({"success": True, "period": summary_period.value, "buckets": [b.to_dict() for b in buckets]})

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            total_students = container.classroom_service.count_students()
            total_teachers = container.user_service.count_teachers()
        except StoreError:
            logger.exception("Could not load dashboard counts")
            return json_error("Could not load dashboard", 503)
        return jsonify({"success": True, "total_students": total_students, "total_teachers": total_teachers})
