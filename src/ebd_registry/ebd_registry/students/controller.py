from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.decorators import admin_required
from ..common.datetime_utils import parse_iso_date
from ..common.serialization import to_jsonable
from ..container import Container
from ..core.exceptions import PersistenceError, ValidationError

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    def _payload() -> dict:
        data = request.get_json(silent=True) or request.form.to_dict()
        birth_date = data.get("birth_date") or None
        if birth_date:
            try:
                birth_date = parse_iso_date(str(birth_date))
            except ValueError:
                raise ValidationError("Data de nascimento inválida")
        return {
            "name": data.get("name", ""),
            "class_id": data.get("class_id"),
            "address": data.get("address"),
            "phone": data.get("phone"),
            "birth_date": birth_date,
        }

    @app.route("/admin/api/students", methods=["GET"], endpoint="admin_students")
    @admin_required
    def admin_students():
        try:
            return jsonify({"success": True, "students": to_jsonable(list(service.list_all()))})
        except PersistenceError:
            log.exception("listing students failed")
            return jsonify({"success": False, "message": "Erro ao carregar dados."}), 500

    @app.route("/admin/api/students", methods=["POST"], endpoint="admin_student_add")
    @admin_required
    def admin_student_add():
        try:
            student_id = service.add_student(**_payload())
            return jsonify({"success": True, "id": student_id, "message": "Aluno adicionado com sucesso!"}), 201
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError:
            log.exception("adding student failed")
            return jsonify({"success": False, "message": "Erro ao adicionar aluno."}), 500

    @app.route("/admin/api/students/<int:student_id>", methods=["PUT"], endpoint="admin_student_update")
    @admin_required
    def admin_student_update(student_id: int):
        try:
            service.update_student(student_id=student_id, **_payload())
            return jsonify({"success": True, "message": "Aluno atualizado com sucesso!"})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except PersistenceError:
            log.exception("updating student %s failed", student_id)
            return jsonify({"success": False, "message": "Erro ao atualizar aluno."}), 500

    @app.route("/admin/api/students/<int:student_id>/toggle", methods=["POST"], endpoint="admin_student_toggle")
    @admin_required
    def admin_student_toggle(student_id: int):
        try:
            active = service.toggle_active(student_id)
            return jsonify({
                "success": True,
                "active": active,
                "message": f"Aluno {'ativado' if active else 'desativado'} com sucesso!",
            })
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError:
            log.exception("toggling student %s failed", student_id)
            return jsonify({"success": False, "message": "Erro ao atualizar status do aluno."}), 500

    @app.route("/admin/api/students/<int:student_id>", methods=["DELETE"], endpoint="admin_student_delete")
    @admin_required
    def admin_student_delete(student_id: int):
        try:
            service.delete_student(student_id)
            return jsonify({"success": True, "message": "Aluno excluído."})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError:
            log.exception("deleting student %s failed", student_id)
            return jsonify({"success": False, "message": "Erro ao excluir aluno."}), 500

    @app.route("/admin/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="admin_student_attendance")
    @admin_required
    def admin_student_attendance(student_id: int):
        try:
            history = container.attendance_history_service.history(student_id)
            return jsonify({"success": True, "history": to_jsonable(history)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError:
            log.exception("attendance history of student %s failed", student_id)
            return jsonify({"success": False, "message": "Erro ao carregar a frequência."}), 500
