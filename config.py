"""
Configuration and data loading/saving for DuoSplit
"""
from __future__ import annotations
import json
import os
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Optional

from errors import ImportFormatError, ValidationError
from logging_setup import get_logger
from models import Expense, Household, Payer, PaymentMethod, SplitType, User
from money import parse_amount
from utils import app_dir, normalize_date

logger = get_logger("duosplit.config")

DEFAULT_USERS = {
    Payer.A: ("Djalma", "emerald"),
    Payer.B: ("Cassia", "blue"),
}

# field names as stored on disk and in backups
REQUIRED_FIELDS = ("id", "amount", "description", "date", "payerId", "splitType")


def users_path() -> str:
    return os.path.join(app_dir(), "users.json")


def ledger_path() -> str:
    return os.path.join(app_dir(), "ledger.json")


def load_household(path: Optional[str] = None) -> Household:
    """
    Load the two users from JSON: {"users": [{"name": ..., "color": ...}, {...}]}
    Missing file or entries fall back to the defaults.
    """
    path = path or users_path()
    entries = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        entries = list(data.get("users", []))[:2]
    except FileNotFoundError:
        pass

    users = []
    for payer in (Payer.A, Payer.B):
        name, color = DEFAULT_USERS[payer]
        idx = 0 if payer is Payer.A else 1
        if idx < len(entries):
            name = entries[idx].get("name") or name
            color = entries[idx].get("color") or color
        users.append(User(payer=payer, name=name, color=color))
    return Household(first=users[0], second=users[1])


def expense_to_dict(e: Expense) -> dict:
    """Convert Expense to its stored form"""
    d = {
        "id": e.id,
        "amount": float(e.amount),
        "description": e.description,
        "category": e.category,
        "date": e.date,
        "payerId": e.payer_id.value,
        "splitType": e.split_type.value,
        "timestamp": e.timestamp,
        "paymentMethod": e.payment_method.value,
    }
    if e.notes is not None:
        d["notes"] = e.notes
    d["isSettled"] = e.is_settled
    return d


def _parse_bool(v) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("true", "1", "yes")
    return bool(v)


def expense_from_dict(d: dict) -> Expense:
    """
    Convert a stored/imported record to Expense.
    The date is taken as-is; callers decide whether to normalize it.
    Raises ImportFormatError when the record is not expense-shaped.
    """
    if not isinstance(d, dict):
        raise ImportFormatError(f"Expected an expense object, got {type(d).__name__}.")
    missing = [k for k in REQUIRED_FIELDS if k not in d]
    if missing:
        raise ImportFormatError(f"Expense record is missing {', '.join(missing)}.")
    try:
        amount = parse_amount(d["amount"])
        payer = Payer(d["payerId"])
        split_type = SplitType(d["splitType"])
        method = PaymentMethod(d.get("paymentMethod") or PaymentMethod.CREDIT)
        timestamp = int(d.get("timestamp") or 0)
    except (ValidationError, ValueError, TypeError) as ex:
        raise ImportFormatError(f"Expense {d.get('id')!r}: {ex}") from None

    description = d["description"]
    if description is None or not str(description).strip():
        raise ImportFormatError(f"Expense {d.get('id')!r} has no description.")

    notes = d.get("notes")
    return Expense(
        id=str(d["id"]),
        amount=amount,
        description=str(description),
        category=str(d.get("category") or "Other"),
        date=d["date"] if isinstance(d["date"], str) else "",
        payer_id=payer,
        split_type=split_type,
        timestamp=timestamp,
        payment_method=method,
        notes=notes if notes else None,
        is_settled=_parse_bool(d.get("isSettled", False)),
    )


def parse_import_payload(data) -> List[Expense]:
    """
    Validate an import/restore payload before it touches the ledger.
    Must be a non-empty list of expense records; invalid dates become today.
    """
    if not isinstance(data, list) or not data:
        raise ImportFormatError("Invalid or empty backup file.")
    out = []
    for d in data:
        e = expense_from_dict(d)
        fixed = normalize_date(e.date)
        if fixed != e.date:
            logger.warning("expense %s has invalid date %r, using %s", e.id, e.date, fixed)
            e = replace(e, date=fixed)
        out.append(e)
    return out


def loads_backup(text: str) -> List[Expense]:
    if not text or not text.strip():
        raise ImportFormatError("The selected file is empty.")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        raise ImportFormatError("Failed to parse file.") from None
    return parse_import_payload(data)


def dumps_backup(expenses: Iterable[Expense]) -> str:
    return json.dumps([expense_to_dict(e) for e in expenses], ensure_ascii=False, indent=2)


def backup_filename(day: Optional[date] = None) -> str:
    return f"duosplit_backup_{(day or date.today()).isoformat()}.json"


def load_ledger(path: Optional[str] = None) -> List[Expense]:
    """Load saved expenses; a missing file is an empty ledger"""
    path = path or ledger_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return []
    if data == []:
        return []
    return parse_import_payload(data)


def save_ledger(expenses: Iterable[Expense], path: Optional[str] = None) -> None:
    path = path or ledger_path()
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(dumps_backup(expenses))
    os.replace(tmp, path)
    logger.debug("saved ledger to %s", path)


def archive_records(expenses: Iterable[Expense], directory: Optional[str] = None) -> str:
    """Write a safety copy before a reset; returns its path"""
    directory = directory or app_dir()
    stamp = datetime.now().strftime("%Y%m%dT%H%M%S%f")
    path = os.path.join(directory, f"Archive_Reset_{stamp}.json")
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_backup(expenses))
    logger.info("archived ledger to %s", path)
    return path
