from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.decorators import admin_required
from ..container import Container
from ..core.exceptions import PersistenceError

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    gate = container.lock_gate

    @app.route("/api/settings/registrations", methods=["GET"], endpoint="registrations_setting")
    def registrations_setting():
        return jsonify({"success": True, "locked": gate.is_locked()})

    @app.route("/admin/api/settings/registrations", methods=["PUT"], endpoint="admin_registrations_setting")
    @admin_required
    def admin_registrations_setting():
        data = request.get_json(silent=True) or {}
        allow = data.get("allow") if isinstance(data, dict) else None
        if not isinstance(allow, bool):
            return jsonify({"success": False, "message": "Campo 'allow' deve ser true ou false."}), 400
        try:
            gate.set_allow_registrations(allow)
        except PersistenceError:
            log.exception("updating registrations setting failed")
            return jsonify({"success": False, "message": "Erro ao atualizar a configuração."}), 500
        return jsonify({"success": True, "locked": gate.is_locked()})
