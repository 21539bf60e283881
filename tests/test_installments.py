import itertools
from decimal import Decimal

import pytest

from errors import ValidationError
from installments import expand_intent, validate_intent
from models import ExpenseIntent, Payer, PaymentMethod, SplitType


def _intent(**overrides):
    data = dict(
        amount="100.00",
        description="Sofa",
        category="Shopping",
        date="2024-01-31",
        payer_id=Payer.A,
        split_type=SplitType.EQUAL,
        payment_method=PaymentMethod.CREDIT,
    )
    data.update(overrides)
    return ExpenseIntent(**data)


def _ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


def test_single_installment_keeps_description_and_date():
    records = expand_intent(_intent(), 1, now_ms=1000, id_factory=_ids())

    assert len(records) == 1
    e = records[0]
    assert e.description == "Sofa"
    assert e.date == "2024-01-31"
    assert e.amount == Decimal("100.00")
    assert e.timestamp == 1000
    assert e.id == "id-1"
    assert e.is_settled is False


def test_installments_split_amount_and_suffix_description():
    records = expand_intent(_intent(), 3, now_ms=1000, id_factory=_ids())

    assert [e.amount for e in records] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
    assert [e.description for e in records] == ["Sofa (1/3)", "Sofa (2/3)", "Sofa (3/3)"]
    assert [e.timestamp for e in records] == [1000, 1001, 1002]
    assert len({e.id for e in records}) == 3


def test_installment_dates_clamp_without_drift():
    records = expand_intent(_intent(), 3)
    assert [e.date for e in records] == ["2024-01-31", "2024-02-29", "2024-03-31"]


def test_installment_dates_roll_into_next_year():
    records = expand_intent(_intent(date="2024-11-15"), 3)
    assert [e.date for e in records] == ["2024-11-15", "2024-12-15", "2025-01-15"]


@pytest.mark.parametrize("total", ["0.01", "0.99", "100.00", "1234.56", "999999.99", "1000000.00"])
def test_installments_always_sum_to_total(total):
    for n in range(1, 61):
        records = expand_intent(_intent(amount=total), n)
        amounts = [e.amount for e in records]
        assert sum(amounts) == Decimal(total)
        base = amounts[0]
        assert all(a == base for a in amounts[:-1])
        assert amounts[-1] >= base


def test_fields_are_copied_to_every_record():
    records = expand_intent(_intent(payer_id=Payer.B, split_type=SplitType.FULL_FOR_OTHER,
                                    payment_method=PaymentMethod.DEBIT, notes="store card"), 2)
    for e in records:
        assert e.payer_id is Payer.B
        assert e.split_type is SplitType.FULL_FOR_OTHER
        assert e.payment_method is PaymentMethod.DEBIT
        assert e.category == "Shopping"
        assert e.notes == "store card"


@pytest.mark.parametrize("n", [0, -1, 2.5, "3", True])
def test_bad_installment_count_is_rejected(n):
    with pytest.raises(ValidationError):
        expand_intent(_intent(), n)


@pytest.mark.parametrize("overrides", [
    {"amount": None},
    {"amount": "abc"},
    {"amount": "-5"},
    {"amount": "1e30"},
    {"description": "   "},
    {"date": "2024-02-30"},
    {"payer_id": "user_c"},
    {"split_type": "THIRDS"},
])
def test_bad_intent_is_rejected(overrides):
    with pytest.raises(ValidationError):
        expand_intent(_intent(**overrides), 2)


def test_validate_intent_normalizes_values():
    intent = validate_intent(_intent(amount="10", description=" Taxi ", payer_id="user_b",
                                     split_type="FULL_FOR_OTHER", category=""))
    assert intent.amount == Decimal("10.00")
    assert intent.description == "Taxi"
    assert intent.payer_id is Payer.B
    assert intent.split_type is SplitType.FULL_FOR_OTHER
    assert intent.category == "Other"
