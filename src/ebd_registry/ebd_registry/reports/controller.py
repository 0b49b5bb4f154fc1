from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..auth.decorators import admin_required
from ..common.datetime_utils import parse_iso_date
from ..common.serialization import to_jsonable
from ..container import Container
from ..core.exceptions import NoDataError, PersistenceError
from .export import class_report_csv

log = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _day_arg():
        value = request.args.get("date")
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            return None

    @app.route("/admin/api/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        try:
            return jsonify({"success": True, "stats": to_jsonable(service.dashboard_stats())})
        except PersistenceError:
            log.exception("dashboard stats failed")
            return jsonify({"success": False, "message": "Erro ao carregar estatísticas."}), 500

    @app.route("/admin/api/reports/daily", methods=["GET"], endpoint="admin_daily_report")
    @admin_required
    def admin_daily_report():
        day = _day_arg()
        if day is None:
            return jsonify({"success": False, "message": "Informe a data (YYYY-MM-DD)."}), 400
        try:
            report = service.build_report(day)
        except NoDataError as e:
            return jsonify({"success": False, "no_data": True, "message": str(e)}), 404
        return jsonify({"success": True, "date": day.isoformat(), "report": to_jsonable(report)})

    @app.route("/admin/api/reports/classes.csv", methods=["GET"], endpoint="admin_class_report_csv")
    @admin_required
    def admin_class_report_csv():
        day = _day_arg()
        if day is None:
            return jsonify({"success": False, "message": "Informe a data (YYYY-MM-DD)."}), 400
        try:
            report = service.build_report(day)
        except NoDataError as e:
            return jsonify({"success": False, "no_data": True, "message": str(e)}), 404

        filename = f"classificacao_ebd_{day.strftime('%Y%m%d')}.csv"
        return app.response_class(
            class_report_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
