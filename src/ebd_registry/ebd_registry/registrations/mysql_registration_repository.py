from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.business_day import DayWindow
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import Registration
from .repository import RegistrationRepository

_SELECT = """
    SELECT r.id, r.class_id, r.registration_date, r.present_students, r.total_present,
           r.visitors, r.bibles, r.magazines, r.offering_cash, r.offering_pix,
           r.hymn, r.pix_receipt_urls, r.created_at,
           c.name AS class_name
    FROM registrations r
    LEFT JOIN classes c ON c.id = r.class_id
"""


def _to_registration(r: Dict[str, Any]) -> Registration:
    return Registration(
        id=str(r["id"]),
        class_id=int(r["class_id"]),
        registration_date=r["registration_date"],
        present_students=[str(n) for n in load_json_list(r.get("present_students"))],
        total_present=int(r.get("total_present") or 0),
        visitors=int(r.get("visitors") or 0),
        bibles=int(r.get("bibles") or 0),
        magazines=int(r.get("magazines") or 0),
        offering_cash=as_decimal(r.get("offering_cash")),
        offering_pix=as_decimal(r.get("offering_pix")),
        hymn=r.get("hymn") or "",
        pix_receipt_urls=[str(p) for p in load_json_list(r.get("pix_receipt_urls"))],
        created_at=r.get("created_at"),
        class_name=r.get("class_name"),
    )


def _window_clause(window: DayWindow) -> tuple[str, tuple]:
    return (
        f"r.registration_date >= %s AND r.registration_date {window.end_operator} %s",
        (window.start, window.end),
    )


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.id=%s", (str(registration_id),))
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def find_latest_for_class(self, class_id: int, window: DayWindow) -> Optional[Registration]:
        clause, params = _window_clause(window)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE r.class_id=%s AND {clause} ORDER BY r.created_at DESC LIMIT 1",
                (int(class_id), *params),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def list_in_window(self, window: DayWindow) -> Sequence[Registration]:
        clause, params = _window_clause(window)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {clause} ORDER BY r.created_at ASC", params)
            return [_to_registration(r) for r in fetchall(cur)]

    def recent_for_class(self, class_id: int, limit: int) -> Sequence[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE r.class_id=%s ORDER BY r.registration_date DESC LIMIT %s",
                (int(class_id), int(limit)),
            )
            return [_to_registration(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY r.registration_date DESC")
            return [_to_registration(r) for r in fetchall(cur)]

    def create(self, registration: Registration) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO registrations(
                    id, class_id, registration_date, present_students, total_present,
                    visitors, bibles, magazines, offering_cash, offering_pix, hymn, pix_receipt_urls
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    registration.id,
                    int(registration.class_id),
                    registration.registration_date,
                    dump_json_list(registration.present_students),
                    int(registration.total_present),
                    int(registration.visitors),
                    int(registration.bibles),
                    int(registration.magazines),
                    registration.offering_cash,
                    registration.offering_pix,
                    registration.hymn,
                    dump_json_list(registration.pix_receipt_urls),
                ),
            )

    def update(self, registration: Registration) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE registrations
                SET class_id=%s, present_students=%s, total_present=%s, visitors=%s, bibles=%s,
                    magazines=%s, offering_cash=%s, offering_pix=%s, hymn=%s, pix_receipt_urls=%s
                WHERE id=%s
                """,
                (
                    int(registration.class_id),
                    dump_json_list(registration.present_students),
                    int(registration.total_present),
                    int(registration.visitors),
                    int(registration.bibles),
                    int(registration.magazines),
                    registration.offering_cash,
                    registration.offering_pix,
                    registration.hymn,
                    dump_json_list(registration.pix_receipt_urls),
                    registration.id,
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, registration_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM registrations WHERE id=%s", (str(registration_id),))
            return cur.rowcount > 0
