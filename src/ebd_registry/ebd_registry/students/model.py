from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Entidade de domínio: aluno matriculado numa classe.

    Note: `active=False` removes the student from enrollment counts.
    """

    id: int
    name: str
    class_id: int
    active: bool = True
    address: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    class_name: Optional[str] = None


@dataclass(frozen=True)
class AttendanceEntry:
    date: str
    present: bool
    class_name: str


@dataclass(frozen=True)
class AttendanceHistory:
    student_id: int
    student_name: str
    records: list[AttendanceEntry]
    present_count: int
    absent_count: int
    percentage: int
