from __future__ import annotations

import io
from dataclasses import replace
import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from src.ebd_registry.ebd_registry.auth.controller import register as register_auth
from src.ebd_registry.ebd_registry.auth.service import AuthService
from src.ebd_registry.ebd_registry.classes.model import SchoolClass
from src.ebd_registry.ebd_registry.classes.service import ClassService
from src.ebd_registry.ebd_registry.common.datetime_utils import now_utc
from src.ebd_registry.ebd_registry.container import Container
from src.ebd_registry.ebd_registry.core.events import ChangeFeed
from src.ebd_registry.ebd_registry.registrations.controller import register as register_registrations
from src.ebd_registry.ebd_registry.registrations.service import RegistrationService
from src.ebd_registry.ebd_registry.reports.controller import register as register_reports
from src.ebd_registry.ebd_registry.reports.service import ReportService
from src.ebd_registry.ebd_registry.settings.controller import register as register_settings
from src.ebd_registry.ebd_registry.settings.model import SystemSetting
from src.ebd_registry.ebd_registry.settings.service import SystemLockGate
from src.ebd_registry.ebd_registry.students.attendance_history import AttendanceHistoryService
from src.ebd_registry.ebd_registry.students.controller import register as register_students
from src.ebd_registry.ebd_registry.students.model import Student
from src.ebd_registry.ebd_registry.students.service import StudentService


class Classes:
    def __init__(self):
        self._classes = [SchoolClass(1, "LAEL"), SchoolClass(2, "RUTE")]

    def list_all(self):
        return list(self._classes)

    def get_by_id(self, class_id):
        return next((c for c in self._classes if c.id == class_id), None)

    def count(self):
        return len(self._classes)


class Students:
    def __init__(self):
        self.by_id = {1: Student(id=1, name="Ana", class_id=1, class_name="LAEL")}

    def get_by_id(self, student_id):
        return self.by_id.get(student_id)

    def list_all(self):
        return list(self.by_id.values())

    def list_active(self):
        return [s for s in self.by_id.values() if s.active]


class Registrations:
    def __init__(self):
        self.rows = {}

    def get_by_id(self, registration_id):
        return self.rows.get(registration_id)

    def find_latest_for_class(self, class_id, window):
        matches = [r for r in self.rows.values() if r.class_id == class_id and window.contains(r.registration_date)]
        return matches[-1] if matches else None

    def list_in_window(self, window):
        return [r for r in self.rows.values() if window.contains(r.registration_date)]

    def recent_for_class(self, class_id, limit):
        return [r for r in self.rows.values() if r.class_id == class_id][:limit]

    def list_all(self):
        return list(self.rows.values())

    def create(self, registration):
        self.rows[registration.id] = replace(registration, class_name="LAEL")

    def update(self, registration):
        current = self.rows.get(registration.id)
        if current is None:
            return False
        self.rows[registration.id] = replace(registration, registration_date=current.registration_date,
                                             class_name=current.class_name)
        return True

    def delete_by_id(self, registration_id):
        return self.rows.pop(registration_id, None) is not None


class Settings:
    def __init__(self):
        self.allow = True

    def get(self, key):
        return SystemSetting(key=key, value=self.allow)

    def upsert(self, key, value):
        self.allow = value


class Storage:
    def __init__(self):
        self.objects = {}

    def put(self, data, name, *, content_type=None):
        self.objects[name] = data
        return f"receipts/{name}"

    def remove(self, paths):
        for p in paths:
            self.objects.pop(p.replace("receipts/", "", 1), None)

    def sign(self, path, ttl_seconds):
        return f"https://files.example/{path}"


@pytest.fixture
def env():
    classes, students, registrations, settings, storage = Classes(), Students(), Registrations(), Settings(), Storage()
    feed = ChangeFeed()
    gate = SystemLockGate(settings)
    container = Container(
        conn=None,
        change_feed=feed,
        classes_repo=classes,
        students_repo=students,
        registrations_repo=registrations,
        settings_repo=settings,
        receipt_storage=storage,
        lock_gate=gate,
        auth_service=AuthService(generate_password_hash("segredo")),
        class_service=ClassService(classes),
        student_service=StudentService(students),
        registration_service=RegistrationService(registrations, classes, gate, storage, change_feed=feed),
        report_service=ReportService(registrations, students, classes),
        attendance_history_service=AttendanceHistoryService(students, registrations, classes),
    )

    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TODAY_OFFSET_HOURS"] = 3
    for register in (register_auth, register_settings, register_registrations, register_students, register_reports):
        register(app, container)

    return app.test_client(), registrations, settings


def _today() -> str:
    return now_utc().date().isoformat()


def _submit(client, **fields):
    data = {"class_id": "1", "date": _today(), "present_students": ["Ana"], "offering_cash": "5,00"}
    data.update(fields)
    return client.post("/api/registrations", data=data, content_type="multipart/form-data")


def test_submit_then_resubmit_keeps_one_registration(env):
    client, registrations, _ = env

    first = _submit(client, receipts=(io.BytesIO(b"img"), "pix.png"))
    assert first.status_code == 200
    assert first.get_json()["created"] is True
    form = first.get_json()["form"]
    edit_target = form["edit_target"]

    second = _submit(client, edit_target=edit_target, present_students=[], pix_receipt_urls=form["pix_receipt_urls"])
    assert second.status_code == 200
    assert second.get_json()["created"] is False
    assert len(registrations.rows) == 1
    assert registrations.rows[edit_target].total_present == 0
    assert len(registrations.rows[edit_target].pix_receipt_urls) == 1


def test_locked_submit_returns_423(env):
    client, registrations, settings = env
    settings.allow = False

    resp = _submit(client)

    assert resp.status_code == 423
    assert registrations.rows == {}


def test_missing_class_returns_400(env):
    client, _, _ = env
    resp = _submit(client, class_id="")
    assert resp.status_code == 400
    assert "selecione" in resp.get_json()["message"]


def test_admin_routes_require_login(env):
    client, _, _ = env
    assert client.get("/admin/api/registrations").status_code == 401

    assert client.post("/api/login", json={"password": "errada"}).status_code == 401
    assert client.post("/api/login", json={"password": "segredo"}).status_code == 200
    assert client.get("/admin/api/registrations").status_code == 200


def test_admin_toggles_lock(env):
    client, _, settings = env
    client.post("/api/login", json={"password": "segredo"})

    resp = client.put("/admin/api/settings/registrations", json={"allow": False})

    assert resp.get_json()["locked"] is True
    assert settings.allow is False
    assert client.get("/api/settings/registrations").get_json()["locked"] is True


def test_daily_report_without_data_is_404(env):
    client, _, _ = env
    client.post("/api/login", json={"password": "segredo"})

    resp = client.get("/admin/api/reports/daily?date=2020-01-05")

    assert resp.status_code == 404
    assert resp.get_json()["no_data"] is True


def test_daily_report_after_submit(env):
    client, _, _ = env
    _submit(client)
    client.post("/api/login", json={"password": "segredo"})

    resp = client.get(f"/admin/api/reports/daily?date={_today()}")

    assert resp.status_code == 200
    report = resp.get_json()["report"]
    assert report["total_present"] == 1
    assert report["total_offering"] == "5.00"
    assert report["top_classes"]["adolescents"][0]["rank"] == "1°"


@pytest.mark.parametrize("payload", [{"allow": "false"}, {"allow": 0}, {"allow": None}, {}, ["allow"]])
def test_lock_toggle_accepts_only_booleans(env, payload):
    client, _, settings = env
    client.post("/api/login", json={"password": "segredo"})

    resp = client.put("/admin/api/settings/registrations", json=payload)

    assert resp.status_code == 400
    assert settings.allow is True


def test_resubmitting_a_deleted_registration_returns_500(env):
    client, registrations, _ = env
    edit_target = _submit(client).get_json()["form"]["edit_target"]
    registrations.delete_by_id(edit_target)

    resp = _submit(client, edit_target=edit_target)

    assert resp.status_code == 500
    assert registrations.rows == {}
