from datetime import datetime
from decimal import Decimal

import pytest

from payplanner.exceptions import DataValidationError, InvalidDateError, InvalidEnumError, InvalidNumberError
from payplanner.models import ClientCaseStatus, PaymentType
from payplanner.utils import (
    fit_column, normalize_optional_string, parse_bool, parse_datetime, parse_decimal, parse_enum,
    parse_int, require, truncate_text
)


def test_parse_datetime_accepts_dates_and_utc_offsets() -> None:
    assert parse_datetime("2024-02-29", "from") == datetime(2024, 2, 29)
    assert parse_datetime("2024-02-29T10:30:00Z", "from") == datetime(2024, 2, 29, 10, 30)
    assert parse_datetime("2024-02-29T12:30:00+02:00", "from") == datetime(2024, 2, 29, 10, 30)
    assert parse_datetime("  ", "from") is None


def test_parse_datetime_rejects_garbage() -> None:
    with pytest.raises(InvalidDateError) as excinfo:
        parse_datetime("31/02/2024", "to")
    assert excinfo.value.field == "to"


def test_parse_numbers() -> None:
    assert parse_int(" 42 ", "page") == 42
    assert parse_int(None, "page") is None
    assert parse_decimal("10.50", "amount") == Decimal("10.50")
    with pytest.raises(InvalidNumberError):
        parse_int("4.2", "page")
    with pytest.raises(InvalidNumberError):
        parse_decimal(True, "amount")


def test_parse_bool_forms() -> None:
    assert parse_bool("TRUE", "isActive") is True
    assert parse_bool("0", "isActive") is False
    assert parse_bool(False, "isActive") is False
    with pytest.raises(DataValidationError):
        parse_bool("maybe", "isActive")


def test_parse_enum_by_name_or_value() -> None:
    assert parse_enum("expense", PaymentType, "type") is PaymentType.Expense
    assert parse_enum(1, PaymentType, "type") is PaymentType.Expense
    assert parse_enum("2", ClientCaseStatus, "status") is ClientCaseStatus.Closed
    with pytest.raises(InvalidEnumError) as excinfo:
        parse_enum("Archived", ClientCaseStatus, "status")
    assert excinfo.value.allowed == ["Open", "OnHold", "Closed"]


def test_string_normalization() -> None:
    assert normalize_optional_string("  ACC-1 ") == "ACC-1"
    assert normalize_optional_string("   ") is None
    assert require("x", "name") == "x"
    with pytest.raises(DataValidationError, match="'name' is required"):
        require(" ", "name")


def test_truncation_helpers() -> None:
    assert truncate_text("abcdef", 3) == "abc…"
    assert truncate_text("abc", 3) == "abc"
    assert fit_column("abcdef", 4) == "abcd"
    assert fit_column(None, 4) is None


def test_parse_int_rejects_values_outside_signed_64_bit_range() -> None:
    assert parse_int(str(2 ** 63 - 1), "clientId") == 2 ** 63 - 1
    assert parse_int(-2 ** 63, "clientId") == -2 ** 63

    with pytest.raises(InvalidNumberError):
        parse_int("99999999999999999999999", "clientId")
    with pytest.raises(InvalidNumberError):
        parse_int(2 ** 63, "page")
