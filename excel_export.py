"""
Excel export functionality for DuoSplit
"""
from __future__ import annotations
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from computations import (
    compute_balance_statement,
    compute_category_totals,
    compute_summary,
    describe_balance,
    filter_expenses,
)
from models import Expense, Household, SplitType


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def export_excel(
    expenses: Iterable[Expense],
    household: Household,
    filepath: str,
    month: Optional[str] = None,
) -> None:
    """
    Export the ledger (or one YYYY-MM month of it) to an Excel file:
    - Expenses sheet with every record
    - Summary sheet with totals and who owes whom
    - Categories sheet with spending per category
    """
    wb = Workbook()
    wb.remove(wb.active)
    exps = filter_expenses(expenses, month)

    ws = wb.create_sheet("Expenses")
    ws.append(["Date", "Description", "Category", "Paid by", "Split", "Method", "Amount", "Settled", "Notes"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for e in exps:
        split = "50/50" if e.split_type is SplitType.EQUAL else "Full for other"
        ws.append([
            e.date,
            e.description,
            e.category,
            household.name_of(e.payer_id),
            split,
            e.payment_method.value,
            float(e.amount),
            "yes" if e.is_settled else "",
            e.notes or "",
        ])
        ws.cell(ws.max_row, 7).number_format = "0.00"
        if e.is_settled:
            ws.cell(ws.max_row, 2).font = Font(color="808080")
    if exps:
        ws.append(["TOTAL", "", "", "", "", "", f"=SUM(G2:G{ws.max_row})"])
        trow = ws.max_row
        ws.cell(trow, 1).font = Font(bold=True)
        ws.cell(trow, 7).number_format = "0.00"
    _autosize_columns(ws)

    # Summary sheet: totals include settled rows, the balance does not
    ws = wb.create_sheet("Summary")
    summary = compute_summary(exps)
    statement = compute_balance_statement(summary)
    ws.append(["Item", "Value"])
    _style_header(ws, 1)
    ws.append(["Period", month or "All time"])
    ws.append([f"{household.first.name} paid", float(summary.total_paid_a)])
    ws.append([f"{household.second.name} paid", float(summary.total_paid_b)])
    ws.append(["Net balance", float(summary.net_balance)])
    ws.append(["Owed amount", float(statement.amount) if statement else 0.0])
    ws.append(["Status", describe_balance(summary, household)])
    for r in range(3, 7):
        ws.cell(r, 2).number_format = "0.00"
    _autosize_columns(ws)

    ws = wb.create_sheet("Categories")
    ws.append(["Category", "Total"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for category, total in compute_category_totals(exps):
        ws.append([category, float(total)])
        ws.cell(ws.max_row, 2).number_format = "0.00"
    _autosize_columns(ws)

    wb.save(filepath)
