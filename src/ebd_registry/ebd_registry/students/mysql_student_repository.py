from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_SELECT = """
    SELECT s.id, s.name, s.class_id, s.active, s.address, s.phone, s.birth_date,
           c.name AS class_name
    FROM students s
    LEFT JOIN classes c ON c.id = s.class_id
"""


def _to_student(r: Dict[str, Any]) -> Student:
    return Student(
        id=int(r["id"]),
        name=r["name"],
        class_id=int(r["class_id"]),
        active=bool(r["active"]),
        address=r.get("address"),
        phone=r.get("phone"),
        birth_date=r.get("birth_date"),
        class_name=r.get("class_name"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY s.name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.active=1 ORDER BY s.name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def create_student(
        self,
        *,
        name: str,
        class_id: int,
        address: Optional[str],
        phone: Optional[str],
        birth_date: Optional[date],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, class_id, active, address, phone, birth_date)
                VALUES(%s,%s,1,%s,%s,%s)
                """,
                (name, int(class_id), address, phone, birth_date),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, class_id=%s, address=%s, phone=%s, birth_date=%s
                WHERE id=%s
                """,
                (name, int(class_id), address, phone, birth_date, int(student_id)),
            )
            return cur.rowcount > 0

    def set_active(self, student_id: int, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET active=%s WHERE id=%s", (1 if active else 0, int(student_id)))
            return cur.rowcount > 0

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
