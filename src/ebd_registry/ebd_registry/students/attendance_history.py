from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..classes.repository import ClassRepository
from ..common.datetime_utils import format_br_date
from ..core.constants import HISTORY_LIMIT, UNKNOWN_CLASS_NAME_PT
from ..core.exceptions import ValidationError
from ..registrations.repository import RegistrationRepository
from .model import AttendanceEntry, AttendanceHistory
from .repository import StudentRepository


def attendance_percentage(present: int, total: int) -> int:
    """Round-half-up percentage; 0 when there is nothing to divide by."""
    if total <= 0:
        return 0
    value = Decimal(100) * Decimal(present) / Decimal(total)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class AttendanceHistoryService:
    """Presence history of one student across the latest registrations of their class.

    Presence is an exact match of the student's *current* name against the
    names snapshotted in each registration, so a renamed student shows up as
    absent in registrations recorded under the old name.
    """

    def __init__(
        self,
        students: StudentRepository,
        registrations: RegistrationRepository,
        classes: ClassRepository,
        *,
        limit: int = HISTORY_LIMIT,
    ):
        self._students = students
        self._registrations = registrations
        self._classes = classes
        self._limit = int(limit)

    def history(self, student_id: int) -> AttendanceHistory:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise ValidationError("Aluno não encontrado")

        regs = self._registrations.recent_for_class(student.class_id, self._limit)

        class_name = student.class_name
        if class_name is None:
            school_class = self._classes.get_by_id(student.class_id)
            class_name = school_class.name if school_class else UNKNOWN_CLASS_NAME_PT

        records = [
            AttendanceEntry(
                date=format_br_date(r.registration_date),
                present=student.name in r.present_students,
                class_name=r.class_name or class_name,
            )
            for r in regs
        ]

        present_count = sum(1 for r in records if r.present)
        return AttendanceHistory(
            student_id=student.id,
            student_name=student.name,
            records=records,
            present_count=present_count,
            absent_count=len(records) - present_count,
            percentage=attendance_percentage(present_count, len(records)),
        )
