from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.business_day import utc_day_exclusive, utc_day_inclusive
from ..common.datetime_utils import now_utc
from ..common.validators import parse_decimal
from ..core.constants import DEFAULT_MAGAZINES_BY_CATEGORY, UNKNOWN_CLASS_NAME
from ..core.enums import Tier
from ..core.exceptions import NoDataError, PersistenceError
from ..registrations.model import Registration
from ..registrations.repository import RegistrationRepository
from ..students.repository import StudentRepository
from .model import ClassReportRow, DailyReport, DashboardStats, RankedClass, TopClasses
from .ranking import rank_by_offering, top_three
from .tiers import classify

log = logging.getLogger(__name__)


def _offering(row: ClassReportRow) -> Decimal:
    return row.offering


class ReportService:
    """Daily report: totals, per-class table and offering ranking per age tier."""

    def __init__(
        self,
        registrations: RegistrationRepository,
        students: StudentRepository,
        classes: ClassRepository,
        *,
        magazines_by_category: Optional[Mapping[str, int]] = None,
    ):
        self._registrations = registrations
        self._students = students
        self._classes = classes
        self._magazines_by_category = dict(magazines_by_category or DEFAULT_MAGAZINES_BY_CATEGORY)

    def build_report(self, day: date) -> DailyReport:
        try:
            regs = list(self._registrations.list_in_window(utc_day_inclusive(day)))
            if not regs:
                raise NoDataError(f"Nenhum registro encontrado para {day:%d/%m/%Y}")

            active = list(self._students.list_active())
            if not active:
                raise NoDataError("Nenhum aluno ativo cadastrado")
        except PersistenceError as exc:
            log.error("report for %s could not be read: %s", day, exc)
            raise NoDataError("Não foi possível carregar os dados do relatório") from exc

        enrolled_by_class = Counter(s.class_id for s in active)

        cash_total = sum((parse_decimal(r.offering_cash) for r in regs), Decimal("0"))
        pix_total = sum((parse_decimal(r.offering_pix) for r in regs), Decimal("0"))
        total_present = sum(r.total_present for r in regs)
        total_visitors = sum(r.visitors for r in regs)
        total_enrolled = len(active)

        rows = [self._class_row(r, enrolled_by_class) for r in regs]

        by_tier: dict[Tier, list[ClassReportRow]] = {tier: [] for tier in Tier}
        for row in rows:
            by_tier[classify(row.name)].append(row)

        ranked_rows: list[ClassReportRow] = []
        for tier_rows in by_tier.values():
            ranked_rows.extend(replace(row, rank=label) for row, label in rank_by_offering(tier_rows, _offering))
        ranked_rows.sort(key=lambda row: row.name)

        def _top(tier: Tier) -> list[RankedClass]:
            return [
                RankedClass(name=row.name, rank=label, offering=row.offering)
                for row, label in top_three(by_tier[tier], _offering)
            ]

        return DailyReport(
            total_enrolled=total_enrolled,
            total_present=total_present,
            total_visitors=total_visitors,
            # Not clamped: a negative value points at inconsistent data.
            total_absent=total_enrolled - total_present,
            total_attendance=total_present + total_visitors,
            total_offering=cash_total + pix_total,
            total_magazines=sum(r.magazines for r in regs),
            total_bibles=sum(r.bibles for r in regs),
            magazines_by_category=dict(self._magazines_by_category),
            top_classes=TopClasses(
                children=_top(Tier.CHILDREN),
                adolescents=_top(Tier.ADOLESCENTS),
                adults=_top(Tier.ADULTS),
            ),
            classes=ranked_rows,
            cash_total=cash_total,
            pix_total=pix_total,
        )

    def _class_row(self, reg: Registration, enrolled_by_class: Mapping[int, int]) -> ClassReportRow:
        enrolled = int(enrolled_by_class.get(reg.class_id, 0))
        return ClassReportRow(
            name=reg.class_name or UNKNOWN_CLASS_NAME,
            enrolled=enrolled,
            present=reg.total_present,
            visitors=reg.visitors,
            absent=enrolled - reg.total_present,
            total_present=reg.total_present + reg.visitors,
            bibles=reg.bibles,
            magazines=reg.magazines,
            offering=parse_decimal(reg.offering_cash) + parse_decimal(reg.offering_pix),
        )

    def dashboard_stats(self, *, now: Optional[datetime] = None) -> DashboardStats:
        now = now or now_utc()
        regs: Sequence[Registration] = self._registrations.list_all()
        today_window = utc_day_exclusive(now.date())

        return DashboardStats(
            total_registrations=len(regs),
            total_students=len(self._students.list_active()),
            total_classes=len(self._classes.list_all()),
            today_registrations=sum(1 for r in regs if today_window.contains(r.registration_date)),
            total_presence=sum(r.total_present for r in regs),
            total_visitors=sum(r.visitors for r in regs),
            total_offerings=sum((r.offering_total for r in regs), Decimal("0")),
        )
