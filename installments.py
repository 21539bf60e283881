"""
Installment expansion: one entered expense -> N monthly expense records
"""
from __future__ import annotations
import time
import uuid
from typing import Callable, List, Optional

from errors import ValidationError
from logging_setup import get_logger
from models import Expense, ExpenseIntent, Payer, PaymentMethod, SplitType
from money import from_cents, parse_amount, split_cents, to_cents
from utils import add_months, parse_date

logger = get_logger("duosplit.installments")


def validate_intent(intent: ExpenseIntent) -> ExpenseIntent:
    """
    Check an intent before expansion and return a normalized copy.
    Raises ValidationError; dates are not coerced here.
    """
    amount = parse_amount(intent.amount)
    description = (intent.description or "").strip()
    if not description:
        raise ValidationError("Description is required.")
    try:
        parse_date(intent.date or "")
    except ValueError:
        raise ValidationError(f"Date {intent.date!r} must be YYYY-MM-DD.") from None
    try:
        payer = Payer(intent.payer_id)
        split_type = SplitType(intent.split_type)
        method = PaymentMethod(intent.payment_method)
    except ValueError as ex:
        raise ValidationError(str(ex)) from None
    return ExpenseIntent(
        amount=amount,
        description=description,
        category=intent.category or "Other",
        date=intent.date.strip(),
        payer_id=payer,
        split_type=split_type,
        payment_method=method,
        notes=intent.notes or None,
    )


def expand_intent(
    intent: ExpenseIntent,
    installments: int = 1,
    *,
    now_ms: Optional[int] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> List[Expense]:
    """
    Expand an intent into `installments` records, one per month.

    Every record gets the truncated per-month amount; the last one also takes
    the leftover cents so the batch sums to the entered amount. Dates step
    month by month from the start date, clamping the original day.
    """
    if isinstance(installments, bool) or not isinstance(installments, int) or installments < 1:
        raise ValidationError(f"Installment count must be a positive integer, got {installments!r}.")
    intent = validate_intent(intent)
    start = parse_date(intent.date)
    base_ms = int(time.time() * 1000) if now_ms is None else now_ms
    new_id = id_factory or (lambda: str(uuid.uuid4()))

    parts = split_cents(to_cents(intent.amount), installments)
    records = []
    for i, cents in enumerate(parts):
        description = intent.description
        if installments > 1:
            description = f"{intent.description} ({i + 1}/{installments})"
        records.append(Expense(
            id=new_id(),
            amount=from_cents(cents),
            description=description,
            category=intent.category,
            date=add_months(start, i).isoformat(),
            payer_id=intent.payer_id,
            split_type=intent.split_type,
            timestamp=base_ms + i,
            payment_method=intent.payment_method,
            notes=intent.notes,
            is_settled=False,
        ))

    logger.debug("expanded %r into %d record(s) totalling %s", intent.description, len(records), intent.amount)
    return records
