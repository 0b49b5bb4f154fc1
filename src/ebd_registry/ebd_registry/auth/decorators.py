from __future__ import annotations

from functools import wraps

from flask import jsonify, session

SESSION_KEY = "admin"


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(SESSION_KEY):
            return jsonify({"success": False, "message": "Acesso restrito. Faça login."}), 401
        return view(*args, **kwargs)

    return wrapper
