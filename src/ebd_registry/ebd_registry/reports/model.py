from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ClassReportRow:
    """One line of the per-class table (landscape report)."""

    name: str
    enrolled: int
    present: int
    visitors: int
    absent: int
    total_present: int
    bibles: int
    magazines: int
    offering: Decimal
    rank: str = ""


@dataclass(frozen=True)
class RankedClass:
    name: str
    rank: str
    offering: Decimal


@dataclass(frozen=True)
class TopClasses:
    children: list[RankedClass] = field(default_factory=list)
    adolescents: list[RankedClass] = field(default_factory=list)
    adults: list[RankedClass] = field(default_factory=list)


@dataclass(frozen=True)
class DailyReport:
    """Everything the printable daily report needs; the presentation layer reads only this."""

    total_enrolled: int
    total_present: int
    total_visitors: int
    total_absent: int
    total_attendance: int
    total_offering: Decimal
    total_magazines: int
    total_bibles: int
    magazines_by_category: dict[str, int]
    top_classes: TopClasses
    classes: list[ClassReportRow]
    cash_total: Decimal
    pix_total: Decimal


@dataclass(frozen=True)
class DashboardStats:
    total_registrations: int
    total_students: int
    total_classes: int
    today_registrations: int
    total_presence: int
    total_visitors: int
    total_offerings: Decimal
