from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import json_error, login_required
from ..core.exceptions import AuthenticationError, StoreError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        username = str(data.get("username", ""))
        password = str(data.get("password", ""))
        remember = bool(data.get("remember_me"))

        try:
            s_user = container.auth_service.authenticate(username, password)
        except AuthenticationError as e:
            return json_error(str(e), 401)
        except StoreError:
            logger.exception("Login failed for %s: store unavailable", username)
            return json_error("Sign-in is temporarily unavailable", 503)

        session.clear()
        session.permanent = remember
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        logger.info("User %s signed in", s_user.user_id)
        return jsonify({
            "success": True,
            "user": {"id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value},
        })

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            s_user = container.auth_service.session_user(session["user_id"])
        except AuthenticationError as e:
            session.clear()
            return json_error(str(e), 401)
        except StoreError:
            logger.exception("Could not load signed-in user %s", session.get("user_id"))
            return json_error("Could not load your account", 503)

        return jsonify({
            "success": True,
            "user": {"id": s_user.user_id, "name": s_user.full_name, "role": s_user.role.value},
        })
