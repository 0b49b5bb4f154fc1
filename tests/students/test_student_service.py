from __future__ import annotations

from dataclasses import replace

import pytest

from src.ebd_registry.ebd_registry.core.exceptions import ValidationError
from src.ebd_registry.ebd_registry.students.model import Student
from src.ebd_registry.ebd_registry.students.service import StudentService


class FakeStudentsRepo:
    def __init__(self, students=()):
        self.by_id = {s.id: s for s in students}
        self._next_id = max(self.by_id, default=0) + 1

    def get_by_id(self, student_id):
        return self.by_id.get(student_id)

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda s: s.name)

    def list_active(self):
        return [s for s in self.list_all() if s.active]

    def create_student(self, *, name, class_id, address, phone, birth_date):
        sid = self._next_id
        self._next_id += 1
        self.by_id[sid] = Student(id=sid, name=name, class_id=class_id, address=address, phone=phone,
                                  birth_date=birth_date)
        return sid

    def update_student(self, *, student_id, name, class_id, address, phone, birth_date):
        current = self.by_id.get(student_id)
        if not current:
            return False
        self.by_id[student_id] = replace(current, name=name, class_id=class_id, address=address, phone=phone,
                                         birth_date=birth_date)
        return True

    def set_active(self, student_id, *, active):
        self.by_id[student_id] = replace(self.by_id[student_id], active=active)
        return True

    def delete_by_id(self, student_id):
        return self.by_id.pop(student_id, None) is not None


def test_add_student_requires_name_and_class():
    svc = StudentService(FakeStudentsRepo())
    with pytest.raises(ValidationError, match="nome e a classe"):
        svc.add_student(name="  ", class_id=1)
    with pytest.raises(ValidationError):
        svc.add_student(name="Ana", class_id="")


def test_add_student_trims_fields():
    repo = FakeStudentsRepo()
    sid = StudentService(repo).add_student(name=" Ana ", class_id="2", address="  ", phone=" 9999 ")

    ana = repo.by_id[sid]
    assert ana.name == "Ana"
    assert ana.class_id == 2
    assert ana.address is None
    assert ana.phone == "9999"


def test_list_for_class_skips_inactive_students():
    repo = FakeStudentsRepo([
        Student(id=1, name="Ana", class_id=1),
        Student(id=2, name="Bia", class_id=1, active=False),
        Student(id=3, name="Caio", class_id=2),
    ])
    svc = StudentService(repo)

    assert [s.name for s in svc.list_for_class(1)] == ["Ana"]
    assert [s.name for s in svc.list_for_class(1, only_active=False)] == ["Ana", "Bia"]


def test_toggle_active_flips_flag():
    repo = FakeStudentsRepo([Student(id=1, name="Ana", class_id=1)])
    svc = StudentService(repo)

    assert svc.toggle_active(1) is False
    assert repo.by_id[1].active is False
    assert svc.toggle_active(1) is True


def test_update_and_delete_unknown_student_raise():
    svc = StudentService(FakeStudentsRepo())
    with pytest.raises(ValidationError):
        svc.update_student(student_id=5, name="Ana", class_id=1)
    with pytest.raises(ValidationError):
        svc.delete_student(5)
