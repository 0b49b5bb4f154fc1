from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return str(value).strip()


def require_selected_id(value: Any, field_name: str) -> int:
    """Accept an int or a numeric string coming from a <select>; empty means not selected."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Por favor, selecione {field_name}.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválida")


def parse_count(value: Any) -> int:
    """Form counters: blank or invalid input counts as 0."""
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def parse_decimal(value: Any) -> Decimal:
    """Money columns: absent or invalid values count as 0."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        parsed = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation:
        return Decimal("0")
    if not parsed.is_finite():
        return Decimal("0")
    return parsed


def format_brl(value: Decimal) -> str:
    """R$ 1.234,50 style (the printed reports use pt-BR formatting)."""
    text = f"{value.quantize(Decimal('0.01')):,.2f}"
    return "R$ " + text.replace(",", "X").replace(".", ",").replace("X", ".")
