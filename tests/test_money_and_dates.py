from datetime import date
from decimal import Decimal

import pytest

from errors import ValidationError
from money import from_cents, is_negligible, parse_amount, split_cents, to_cents
from utils import add_months, is_valid_date, normalize_date, parse_date, parse_month, today_str


def test_parse_amount_accepts_common_inputs():
    assert parse_amount("120.50") == Decimal("120.50")
    assert parse_amount(0.1) == Decimal("0.10")
    assert parse_amount(7) == Decimal("7.00")
    assert parse_amount(" 3 ") == Decimal("3.00")
    assert parse_amount("0") == Decimal("0.00")


def test_parse_amount_rounds_to_cents():
    assert parse_amount("12.345") == Decimal("12.35")
    assert parse_amount("12.344") == Decimal("12.34")


@pytest.mark.parametrize("bad", [None, "", "  ", "abc", "-1", "NaN", "Infinity", True, "1e30", 1e30, "9" * 40])
def test_parse_amount_rejects_bad_input(bad):
    with pytest.raises(ValidationError):
        parse_amount(bad)


def test_cents_conversion():
    assert to_cents(Decimal("33.34")) == 3334
    assert from_cents(3334) == Decimal("33.34")
    assert from_cents(5) == Decimal("0.05")


def test_split_cents_puts_remainder_last():
    assert split_cents(10000, 3) == [3333, 3333, 3334]
    assert split_cents(1, 4) == [0, 0, 0, 1]
    assert split_cents(500, 1) == [500]


def test_split_cents_rejects_zero_installments():
    with pytest.raises(ValidationError):
        split_cents(100, 0)


def test_is_negligible():
    assert is_negligible(Decimal("0.005"))
    assert is_negligible(Decimal("-0.009"))
    assert not is_negligible(Decimal("0.01"))


def test_add_months_clamps_to_original_day():
    start = date(2024, 1, 31)
    assert add_months(start, 0) == date(2024, 1, 31)
    assert add_months(start, 1) == date(2024, 2, 29)
    assert add_months(start, 2) == date(2024, 3, 31)
    assert add_months(start, 3) == date(2024, 4, 30)
    assert add_months(date(2023, 1, 29), 1) == date(2023, 2, 28)


def test_add_months_rolls_over_year():
    assert add_months(date(2024, 11, 15), 2) == date(2025, 1, 15)
    assert add_months(date(2024, 12, 1), 25) == date(2027, 1, 1)


def test_parse_date_is_strict():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    for bad in ("2024-1-5", "2023-02-29", "not-a-date", "2024/01/05"):
        with pytest.raises(ValueError):
            parse_date(bad)


def test_normalize_date_falls_back_to_today():
    assert normalize_date("2024-05-01") == "2024-05-01"
    assert normalize_date("not-a-date") == today_str()
    assert normalize_date(None) == today_str()
    assert not is_valid_date(20240501)


def test_parse_month():
    assert parse_month("2024-03") == "2024-03"
    for bad in ("2024-13", "2024-3", "2024-03-01", None):
        with pytest.raises(ValidationError):
            parse_month(bad)
