import json
from datetime import date
from decimal import Decimal

import pytest

from config import (
    archive_records,
    backup_filename,
    dumps_backup,
    expense_from_dict,
    expense_to_dict,
    load_household,
    load_ledger,
    loads_backup,
    parse_import_payload,
    save_ledger,
)
from errors import ImportFormatError
from models import Payer, PaymentMethod, SplitType
from utils import today_str

from helpers import make_expense


def _record(**overrides):
    d = {
        "id": "abc",
        "amount": 45.5,
        "description": "Dinner",
        "category": "Dining Out",
        "date": "2024-03-10",
        "payerId": "user_b",
        "splitType": "FULL_FOR_OTHER",
        "timestamp": 1710000000000,
        "paymentMethod": "DEBIT",
    }
    d.update(overrides)
    return d


def test_expense_from_dict_reads_wire_names():
    e = expense_from_dict(_record(notes="anniversary", isSettled=True))
    assert e.amount == Decimal("45.50")
    assert e.payer_id is Payer.B
    assert e.split_type is SplitType.FULL_FOR_OTHER
    assert e.payment_method is PaymentMethod.DEBIT
    assert e.notes == "anniversary"
    assert e.is_settled is True


def test_optional_fields_default():
    d = _record()
    del d["paymentMethod"], d["category"], d["timestamp"]
    e = expense_from_dict(d)
    assert e.payment_method is PaymentMethod.CREDIT
    assert e.category == "Other"
    assert e.timestamp == 0
    assert e.notes is None
    assert e.is_settled is False


def test_expense_to_dict_uses_wire_names():
    d = expense_to_dict(make_expense("x", amount="12.30"))
    assert d["amount"] == 12.3
    assert d["payerId"] == "user_a"
    assert d["splitType"] == "EQUAL"
    assert d["isSettled"] is False
    assert "notes" not in d


@pytest.mark.parametrize("payload", [None, [], {}, "text", [1, 2], [{"id": "only"}]])
def test_parse_import_payload_rejects_non_records(payload):
    with pytest.raises(ImportFormatError):
        parse_import_payload(payload)


@pytest.mark.parametrize("field,value", [("payerId", "user_c"), ("splitType", "HALF"), ("amount", "lots")])
def test_parse_import_payload_rejects_bad_values(field, value):
    with pytest.raises(ImportFormatError):
        parse_import_payload([_record(**{field: value})])


def test_import_coerces_invalid_date_to_today():
    [e] = parse_import_payload([_record(date="not-a-date")])
    assert e.date == today_str()


def test_loads_backup_errors():
    with pytest.raises(ImportFormatError, match="empty"):
        loads_backup("   ")
    with pytest.raises(ImportFormatError, match="parse"):
        loads_backup("{not json")
    with pytest.raises(ImportFormatError):
        loads_backup("[]")


def test_save_and_load_ledger(tmp_path):
    path = str(tmp_path / "ledger.json")
    expenses = [make_expense("a"), make_expense("b", payer=Payer.B, settled=True)]
    save_ledger(expenses, path)

    assert load_ledger(path) == expenses
    assert json.loads(open(path, encoding="utf-8").read())[1]["isSettled"] is True


def test_load_ledger_missing_or_empty(tmp_path):
    assert load_ledger(str(tmp_path / "missing.json")) == []
    empty = tmp_path / "empty.json"
    empty.write_text("[]", encoding="utf-8")
    assert load_ledger(str(empty)) == []


def test_load_household_defaults_and_file(tmp_path):
    household = load_household(str(tmp_path / "none.json"))
    assert household.name_of(Payer.A) == "Djalma"
    assert household.name_of(Payer.B) == "Cassia"

    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": [{"name": "Ana"}, {"name": "Bo", "color": "red"}]}), encoding="utf-8")
    household = load_household(str(path))
    assert household.first.name == "Ana"
    assert household.first.color == "emerald"
    assert household.second.color == "red"


def test_backup_filename():
    assert backup_filename(date(2024, 3, 9)) == "duosplit_backup_2024-03-09.json"


def test_archive_records(tmp_path):
    path = archive_records([make_expense("a")], str(tmp_path))
    assert "Archive_Reset_" in path
    assert loads_backup(open(path, encoding="utf-8").read())[0].id == "a"
    assert dumps_backup([]) == "[]"


def test_import_rejects_unrepresentable_amount():
    with pytest.raises(ImportFormatError):
        loads_backup(json.dumps([_record(amount=1e30)]))


@pytest.mark.parametrize("description", [None, "", "   "])
def test_import_rejects_missing_description(description):
    with pytest.raises(ImportFormatError):
        parse_import_payload([_record(description=description)])
