from __future__ import annotations

import json
import logging
import queue

from flask import Flask, Response, jsonify, request, stream_with_context

from ..auth.decorators import admin_required
from ..common.datetime_utils import local_date, now_utc, parse_iso_date
from ..common.serialization import to_jsonable
from ..common.validators import parse_count, parse_decimal, require_selected_id
from ..container import Container
from ..core.exceptions import LockedError, PersistenceError, UploadError, ValidationError
from .model import ReceiptUpload, RegistrationForm
from .service import REGISTRATIONS_TABLE

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.registration_service

    def _requested_day():
        value = request.values.get("date")
        if value:
            try:
                return parse_iso_date(value)
            except ValueError:
                raise ValidationError("Data inválida")
        return local_date(now_utc(), offset_hours=app.config.get("TODAY_OFFSET_HOURS", 3))

    def _form_from_request() -> RegistrationForm:
        class_id = request.form.get("class_id")
        return RegistrationForm(
            class_id=int(class_id) if class_id and class_id.strip().isdigit() else None,
            day=_requested_day(),
            present_students=[n for n in request.form.getlist("present_students") if n],
            visitors=parse_count(request.form.get("visitors")),
            bibles=parse_count(request.form.get("bibles")),
            magazines=parse_count(request.form.get("magazines")),
            offering_cash=parse_decimal(request.form.get("offering_cash")),
            offering_pix=parse_decimal(request.form.get("offering_pix")),
            hymn=request.form.get("hymn", ""),
            pix_receipt_urls=[p for p in request.form.getlist("pix_receipt_urls") if p],
            edit_target=request.form.get("edit_target") or None,
        )

    @app.route("/api/classes", methods=["GET"], endpoint="api_classes")
    def api_classes():
        try:
            classes = container.class_service.list_all()
            return jsonify({"success": True, "classes": to_jsonable(list(classes))})
        except PersistenceError:
            log.exception("listing classes failed")
            return jsonify({"success": False, "message": "Erro ao carregar classes."}), 500

    @app.route("/api/classes/<int:class_id>/students", methods=["GET"], endpoint="api_class_students")
    def api_class_students(class_id: int):
        try:
            students = container.student_service.list_for_class(class_id)
            return jsonify({"success": True, "students": [{"id": s.id, "name": s.name} for s in students]})
        except PersistenceError:
            log.exception("listing students of class %s failed", class_id)
            return jsonify({"success": False, "message": "Erro ao carregar alunos."}), 500

    @app.route("/api/registrations/form", methods=["GET"], endpoint="api_registration_form")
    def api_registration_form():
        """Pre-populated form for (class, day) plus the current lock state."""
        try:
            class_id = require_selected_id(request.args.get("class_id"), "uma classe")
            form = service.load_or_init(class_id, _requested_day())
            return jsonify({"success": True, "locked": service.is_locked(), "form": to_jsonable(form)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

    @app.route("/api/registrations", methods=["POST"], endpoint="api_registration_submit")
    def api_registration_submit():
        try:
            form = _form_from_request()
            receipts = [
                ReceiptUpload(data=f.read(), filename=f.filename or "comprovante", content_type=f.mimetype)
                for f in request.files.getlist("receipts")
                if f and f.filename
            ]
            result = service.submit(form, receipts)
            return jsonify({
                "success": True,
                "created": result.created,
                "message": "Registro salvo com sucesso!" if result.created else "Registro atualizado com sucesso!",
                "form": to_jsonable(result.form),
            })
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except LockedError as e:
            return jsonify({"success": False, "message": str(e)}), 423
        except UploadError as e:
            return jsonify({"success": False, "message": str(e)}), 502
        except PersistenceError:
            return jsonify({"success": False, "message": "Erro ao salvar o registro. Tente novamente."}), 500

    @app.route("/api/registrations/today-status", methods=["GET"], endpoint="api_today_status")
    def api_today_status():
        try:
            status = service.today_status()
            return jsonify({"success": True, **to_jsonable(status)})
        except PersistenceError:
            log.exception("today status failed")
            return jsonify({"success": False, "message": "Erro ao carregar o status de hoje."}), 500

    @app.route("/api/choir/hymns", methods=["GET"], endpoint="api_choir_hymns")
    def api_choir_hymns():
        try:
            return jsonify({"success": True, "hymns": to_jsonable(service.choir_hymns())})
        except PersistenceError:
            log.exception("choir hymns failed")
            return jsonify({
                "success": False,
                "message": "Não foi possível carregar os hinos. Tente novamente mais tarde.",
            }), 500

    # ===== ADMIN =====

    @app.route("/admin/api/registrations", methods=["GET"], endpoint="admin_registrations")
    @admin_required
    def admin_registrations():
        try:
            return jsonify({"success": True, "registrations": to_jsonable(list(service.list_all()))})
        except PersistenceError:
            log.exception("listing registrations failed")
            return jsonify({"success": False, "message": "Erro ao carregar registros."}), 500

    @app.route("/admin/api/registrations/<registration_id>", methods=["DELETE"], endpoint="admin_registration_delete")
    @admin_required
    def admin_registration_delete(registration_id: str):
        try:
            service.delete(registration_id)
            return jsonify({"success": True, "message": "Registro excluído."})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError:
            log.exception("deleting registration %s failed", registration_id)
            return jsonify({"success": False, "message": "Erro ao excluir o registro."}), 500

    @app.route("/admin/api/registrations/<registration_id>/receipts", methods=["GET"], endpoint="admin_receipt_links")
    @admin_required
    def admin_receipt_links(registration_id: str):
        try:
            links = service.receipt_links(registration_id)
            return jsonify({"success": True, "urls": links})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except PersistenceError:
            log.exception("signing receipts of %s failed", registration_id)
            return jsonify({"success": False, "message": "Erro ao gerar links dos comprovantes."}), 500

    @app.route("/admin/api/registrations/stream", methods=["GET"], endpoint="admin_registrations_stream")
    @admin_required
    def admin_registrations_stream():
        """Server-sent events: one message per insert/update/delete on registrations."""
        events: queue.Queue = queue.Queue()
        unsubscribe = container.change_feed.subscribe(REGISTRATIONS_TABLE, events.put)

        def generate():
            try:
                yield ": connected\n\n"
                while True:
                    try:
                        event = events.get(timeout=15)
                    except queue.Empty:
                        yield ": keep-alive\n\n"
                        continue
                    payload = {"table": event.table, "type": event.change.value, "id": event.record_id}
                    yield f"data: {json.dumps(payload)}\n\n"
            finally:
                unsubscribe()

        return Response(stream_with_context(generate()), mimetype="text/event-stream")
