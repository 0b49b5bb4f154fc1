from __future__ import annotations

import csv
import io
from decimal import Decimal

from ..common.validators import format_brl
from .model import DailyReport

CLASS_REPORT_COLUMNS = [
    "Nome da Classe",
    "Matriculados",
    "Presentes",
    "Visitantes",
    "Ausentes",
    "Total Presentes",
    "Bíblias",
    "Revistas",
    "Ofertas",
    "Rank",
]


def class_report_csv(report: DailyReport) -> bytes:
    """Per-class table with a TOTAL GERAL footer, UTF-8 with BOM so spreadsheets open it cleanly."""
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(CLASS_REPORT_COLUMNS)

    for row in report.classes:
        writer.writerow([
            row.name,
            row.enrolled,
            row.present,
            row.visitors,
            row.absent,
            row.total_present,
            row.bibles,
            row.magazines,
            format_brl(row.offering),
            row.rank,
        ])

    rows = report.classes
    writer.writerow([
        "TOTAL GERAL",
        sum(r.enrolled for r in rows),
        sum(r.present for r in rows),
        sum(r.visitors for r in rows),
        sum(r.absent for r in rows),
        sum(r.total_present for r in rows),
        sum(r.bibles for r in rows),
        sum(r.magazines for r in rows),
        format_brl(sum((r.offering for r in rows), Decimal("0"))),
        "",
    ])
    return out.getvalue().encode("utf-8-sig")
