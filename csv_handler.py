"""
CSV export and import functionality for DuoSplit
"""
from __future__ import annotations
import csv
from typing import Iterable, List

from config import expense_to_dict, parse_import_payload
from errors import ImportFormatError
from models import Expense

COLUMNS = ['id', 'amount', 'description', 'category', 'date', 'payerId', 'splitType',
           'timestamp', 'paymentMethod', 'notes', 'isSettled']


def export_expenses_to_csv(expenses: Iterable[Expense], filepath: str) -> int:
    """
    Export expenses to CSV file, one row per record in ledger order.
    Returns number of rows written.
    """
    count = 0
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=COLUMNS)
        writer.writeheader()
        for e in expenses:
            row = expense_to_dict(e)
            row['amount'] = f"{e.amount:.2f}"
            row.setdefault('notes', '')
            writer.writerow(row)
            count += 1
    return count


def import_expenses_from_csv(filepath: str) -> List[Expense]:
    """
    Import expenses from CSV file.
    Rows are validated like a JSON backup; invalid dates become today.
    """
    with open(filepath, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or 'id' not in reader.fieldnames:
            raise ImportFormatError("CSV file has no expense header row.")
        rows = [dict(row) for row in reader]
    return parse_import_payload(rows)
