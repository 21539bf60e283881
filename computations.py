"""
Balance computations for DuoSplit
"""
from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from models import BalanceStatement, Expense, ExpenseSummary, Household, Payer, SplitType
from money import ZERO, is_negligible
from utils import in_month, parse_month


def filter_expenses(
    expenses: Iterable[Expense],
    month: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Expense]:
    """Filter expenses by YYYY-MM month and exact category; None means no filter"""
    if month is not None:
        month = parse_month(month)
    out = []
    for e in expenses:
        if month and not in_month(e.date, month):
            continue
        if category and e.category != category:
            continue
        out.append(e)
    return out


def owed_share(e: Expense) -> Decimal:
    """How much of e the non-paying side owes the payer"""
    if e.split_type == SplitType.EQUAL:
        return e.amount / 2
    if e.split_type == SplitType.FULL_FOR_OTHER:
        return e.amount
    raise ValueError(f"unknown split type {e.split_type!r}")


def compute_summary(
    expenses: Iterable[Expense],
    month: Optional[str] = None,
    exclude_settled: bool = True,
    category: Optional[str] = None,
) -> ExpenseSummary:
    """
    Compute totals paid per user and the net balance.
    Totals always include settled records; the net balance skips them
    when exclude_settled is set.
    """
    paid = {Payer.A: ZERO, Payer.B: ZERO}
    net = ZERO

    for e in filter_expenses(expenses, month, category):
        paid[e.payer_id] += e.amount
        if exclude_settled and e.is_settled:
            continue
        share = owed_share(e)
        net += share if e.payer_id == Payer.A else -share

    return ExpenseSummary(total_paid_a=paid[Payer.A], total_paid_b=paid[Payer.B], net_balance=net)


def compute_balance_statement(summary: ExpenseSummary) -> Optional[BalanceStatement]:
    """Who owes whom, or None when the balance is under a cent"""
    if is_negligible(summary.net_balance):
        return None
    creditor = Payer.A if summary.net_balance > 0 else Payer.B
    return BalanceStatement(debtor=creditor.other, creditor=creditor, amount=abs(summary.net_balance))


def describe_balance(summary: ExpenseSummary, household: Household) -> str:
    statement = compute_balance_statement(summary)
    if statement is None:
        return "All settled"
    return (f"{household.name_of(statement.debtor)} owes "
            f"{household.name_of(statement.creditor)} {statement.amount:.2f}")


def compute_category_totals(
    expenses: Iterable[Expense],
    month: Optional[str] = None,
) -> List[Tuple[str, Decimal]]:
    """Spending per category, highest first; empty categories dropped"""
    totals: Dict[str, Decimal] = {}
    for e in filter_expenses(expenses, month):
        totals[e.category] = totals.get(e.category, ZERO) + e.amount
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return [(c, v) for c, v in ranked if v > 0]


def recent_activity(expenses: Iterable[Expense], month: str, limit: int = 5) -> List[Expense]:
    """First `limit` records of the month, in ledger order"""
    return filter_expenses(expenses, month)[:limit]
