from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.exceptions import AuthenticationError
from .decorators import SESSION_KEY


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(hours=12)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        try:
            account = container.auth_service.authenticate(data.get("password", ""))
        except AuthenticationError as e:
            return jsonify({"success": False, "message": str(e)}), 401

        session.permanent = True
        session[SESSION_KEY] = account
        return jsonify({"success": True, "account": account})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/session", methods=["GET"], endpoint="session_status")
    def session_status():
        return jsonify({"success": True, "authenticated": bool(session.get(SESSION_KEY))})
