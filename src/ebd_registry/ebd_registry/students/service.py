from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_selected_id
from ..core.exceptions import ValidationError
from .model import Student
from .repository import StudentRepository

log = logging.getLogger(__name__)


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class StudentService:
    """Use case: manage the student roster (admin)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_all(self) -> Sequence[Student]:
        return self._students.list_all()

    def list_for_class(self, class_id: int, *, only_active: bool = True) -> list[Student]:
        source = self._students.list_active() if only_active else self._students.list_all()
        return [s for s in source if s.class_id == int(class_id)]

    def add_student(
        self,
        *,
        name: str,
        class_id,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        birth_date: Optional[date] = None,
    ) -> int:
        if not name or not name.strip() or not class_id:
            raise ValidationError("Preencha pelo menos o nome e a classe.")

        student_id = self._students.create_student(
            name=name.strip(),
            class_id=require_selected_id(class_id, "a classe"),
            address=_clean_optional(address),
            phone=_clean_optional(phone),
            birth_date=birth_date,
        )
        log.info("student created id=%s class_id=%s", student_id, class_id)
        return student_id

    def update_student(
        self,
        *,
        student_id: int,
        name: str,
        class_id,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        birth_date: Optional[date] = None,
    ) -> None:
        # Renaming does not rewrite past registrations; history matches by name.
        ok = self._students.update_student(
            student_id=int(student_id),
            name=require_non_empty(name, "Nome"),
            class_id=require_selected_id(class_id, "a classe"),
            address=_clean_optional(address),
            phone=_clean_optional(phone),
            birth_date=birth_date,
        )
        if not ok:
            raise ValidationError("Aluno não encontrado")

    def toggle_active(self, student_id: int) -> bool:
        """Flip the active flag; returns the new value."""
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Aluno não encontrado")

        new_value = not student.active
        self._students.set_active(student.id, active=new_value)
        log.info("student %s %s", student.id, "activated" if new_value else "deactivated")
        return new_value

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete_by_id(int(student_id)):
            raise ValidationError("Aluno não encontrado")
        log.info("student deleted id=%s", student_id)
