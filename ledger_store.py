"""
In-memory ledger: the ordered collection of expense records
"""
from __future__ import annotations
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

import settlement
from computations import compute_summary
from errors import ValidationError
from installments import expand_intent
from logging_setup import get_logger
from models import Expense, ExpenseIntent, ExpenseSummary, Payer, PaymentMethod, SplitType
from money import parse_amount
from utils import is_valid_date, normalize_date

logger = get_logger("duosplit.ledger_store")


def sort_expenses(expenses: Iterable[Expense]) -> List[Expense]:
    """Newest date first; records on the same date keep their relative order"""
    return sorted(expenses, key=lambda e: e.date, reverse=True)


class LedgerStore:
    """
    Owns the expense records and keeps them sorted by date, newest first.
    update/delete match on id and quietly ignore unknown ids.
    `on_change` is called with the new record list after every mutation
    that changed something (used to persist the ledger).
    """

    def __init__(
        self,
        expenses: Optional[Iterable[Expense]] = None,
        on_change: Optional[Callable[[List[Expense]], None]] = None,
    ):
        self._expenses: List[Expense] = sort_expenses(_check_record(e, lenient_date=True) for e in expenses or [])
        self.on_change = on_change

    def __len__(self) -> int:
        return len(self._expenses)

    @property
    def records(self) -> List[Expense]:
        return list(self._expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        for e in self._expenses:
            if e.id == expense_id:
                return e
        return None

    def _commit(self, expenses: List[Expense]) -> None:
        self._expenses = sort_expenses(expenses)
        if self.on_change is not None:
            self.on_change(self.records)

    # ---------- Mutations ----------
    def add_batch(self, expenses: Iterable[Expense]) -> List[Expense]:
        batch = [_check_record(e) for e in expenses]
        if batch:
            # new records go ahead of older ones that share their date
            self._commit(batch + self._expenses)
            logger.info("added %d record(s)", len(batch))
        return batch

    def add_expense(self, intent: ExpenseIntent, installments: int = 1) -> List[Expense]:
        """Expand an entered expense into installments and add them"""
        return self.add_batch(expand_intent(intent, installments))

    def update(self, expense: Expense) -> bool:
        """Replace the record with the same id; False (no-op) when absent"""
        for idx, e in enumerate(self._expenses):
            if e.id == expense.id:
                expense = _check_record(expense)
                updated = list(self._expenses)
                updated[idx] = expense
                self._commit(updated)
                logger.info("updated %s", expense.id)
                return True
        logger.debug("update of unknown id %s ignored", expense.id)
        return False

    def delete(self, expense_id: str) -> bool:
        remaining = [e for e in self._expenses if e.id != expense_id]
        if len(remaining) == len(self._expenses):
            logger.debug("delete of unknown id %s ignored", expense_id)
            return False
        self._commit(remaining)
        logger.info("deleted %s", expense_id)
        return True

    def replace_all(self, expenses: Iterable[Expense]) -> int:
        """Swap in a whole new record set (restore/import); bad dates become today"""
        validated = [_check_record(e, lenient_date=True) for e in expenses]
        self._commit(validated)
        logger.info("replaced ledger with %d record(s)", len(validated))
        return len(validated)

    def clear(self) -> None:
        self._commit([])
        logger.info("cleared ledger")

    def settle_month(self, month: str) -> int:
        """Mark every record of `month` settled; raises NothingToSettle if none is open"""
        before = sum(1 for e in self._expenses if not e.is_settled)
        self._commit(settlement.settle(self._expenses, month))
        return before - sum(1 for e in self._expenses if not e.is_settled)

    # ---------- Queries ----------
    def summary(self, month: Optional[str] = None, exclude_settled: bool = True,
                category: Optional[str] = None) -> ExpenseSummary:
        return compute_summary(self._expenses, month, exclude_settled, category)


def _check_record(e: Expense, lenient_date: bool = False) -> Expense:
    """
    Validate a record before it enters the ledger, coercing enum fields from
    their wire values. With lenient_date a bad date becomes today instead of an error.
    """
    if not e.id:
        raise ValidationError("Expense id is required.")
    if not (e.description or "").strip():
        raise ValidationError("Description is required.")
    if lenient_date and not is_valid_date(e.date):
        e = replace(e, date=normalize_date(e.date))
    if not is_valid_date(e.date):
        raise ValidationError(f"Date {e.date!r} must be YYYY-MM-DD.")
    try:
        return replace(
            e,
            amount=parse_amount(e.amount),
            payer_id=Payer(e.payer_id),
            split_type=SplitType(e.split_type),
            payment_method=PaymentMethod(e.payment_method),
        )
    except ValueError as ex:
        raise ValidationError(str(ex)) from None
