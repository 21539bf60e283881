"""
Month settlement: mark a month's expenses as settled without removing them
"""
from __future__ import annotations
from dataclasses import replace
from typing import Iterable, List

from errors import NothingToSettle
from logging_setup import get_logger
from models import Expense
from utils import in_month, parse_month

logger = get_logger("duosplit.settlement")


def has_unsettled(expenses: Iterable[Expense], month: str) -> bool:
    month = parse_month(month)
    return any(in_month(e.date, month) and not e.is_settled for e in expenses)


def settle(expenses: Iterable[Expense], month: str) -> List[Expense]:
    """
    Return a new list where every record dated in `month` has is_settled=True.
    Amounts, dates and payers are never touched.
    Raises NothingToSettle when the month has no unsettled record.
    """
    month = parse_month(month)
    expenses = list(expenses)
    if not has_unsettled(expenses, month):
        logger.info("settle %s: nothing to settle", month)
        raise NothingToSettle(month)

    out = []
    flipped = 0
    for e in expenses:
        if in_month(e.date, month):
            if not e.is_settled:
                flipped += 1
            e = replace(e, is_settled=True)
        out.append(e)
    logger.info("settled %s: %d record(s) marked settled", month, flipped)
    return out
