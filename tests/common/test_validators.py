from datetime import date, datetime
from decimal import Decimal

import pytest

from src.ebd_registry.ebd_registry.common.serialization import to_jsonable
from src.ebd_registry.ebd_registry.common.validators import (
    format_brl,
    parse_count,
    parse_decimal,
    require_selected_id,
)
from src.ebd_registry.ebd_registry.core.exceptions import ValidationError
from src.ebd_registry.ebd_registry.registrations.model import RegistrationForm


def test_parse_count_treats_blank_and_invalid_as_zero():
    assert parse_count("") == 0
    assert parse_count(None) == 0
    assert parse_count("abc") == 0
    assert parse_count("-4") == 0
    assert parse_count("7") == 7


def test_parse_decimal_accepts_comma_and_defaults_to_zero():
    assert parse_decimal("12,50") == Decimal("12.50")
    assert parse_decimal(" 3.1 ") == Decimal("3.1")
    assert parse_decimal(None) == Decimal("0")
    assert parse_decimal("NaN") == Decimal("0")
    assert parse_decimal("dez") == Decimal("0")


def test_require_selected_id():
    assert require_selected_id("3", "uma classe") == 3
    with pytest.raises(ValidationError, match="Por favor, selecione uma classe."):
        require_selected_id("", "uma classe")
    with pytest.raises(ValidationError):
        require_selected_id("abc", "uma classe")


def test_format_brl():
    assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_brl(Decimal("0")) == "R$ 0,00"


def test_to_jsonable_form():
    form = RegistrationForm(class_id=1, day=date(2026, 3, 1), offering_cash=Decimal("2.5"))
    data = to_jsonable(form)

    assert data["day"] == "2026-03-01"
    assert data["offering_cash"] == "2.50"
    assert data["edit_target"] is None
    assert to_jsonable(datetime(2026, 3, 1, 12, 0)) == "2026-03-01T12:00:00Z"
