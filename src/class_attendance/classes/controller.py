from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import json_error, login_required
from ..core.exceptions import StoreError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @login_required
    def list_classes():
        try:
            classes = container.classroom_service.list_classes()
        except StoreError:
            logger.exception("Could not load classes")
            return json_error("Could not load classes", 503)
        return jsonify({"success": True, "classes": classes})

    @app.route("/api/classes/<class_id>/subjects", methods=["GET"], endpoint="list_subjects")
    @login_required
    def list_subjects(class_id: str):
        try:
            subjects = container.classroom_service.list_subjects(class_id)
        except StoreError:
            logger.exception("Could not load subjects for class=%s", class_id)
            return json_error("Could not load subjects", 503)
        return jsonify({"success": True, "subjects": subjects})

    @app.route("/api/classes/<class_id>/students", methods=["GET"], endpoint="list_students")
    @login_required
    def list_students(class_id: str):
        try:
            students = container.classroom_service.list_students(class_id)
        except StoreError:
            logger.exception("Could not load students for class=%s", class_id)
            return json_error("Could not load students", 503)
        return jsonify({"success": True, "students": students})
