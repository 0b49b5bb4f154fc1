from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        """All students (active or not) ordered by name, with class_name filled."""

        raise NotImplementedError

    def list_active(self) -> Sequence[Student]:
        raise NotImplementedError

    def create_student(
        self,
        *,
        name: str,
        class_id: int,
        address: Optional[str],
        phone: Optional[str],
        birth_date: Optional[date],
    ) -> int:
        raise NotImplementedError

    def update_student(
        self,
        *,
        student_id: int,
        name: str,
        class_id: int,
        address: Optional[str],
        phone: Optional[str],
        birth_date: Optional[date],
    ) -> bool:
        raise NotImplementedError

    def set_active(self, student_id: int, *, active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError
