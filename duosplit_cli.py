"""
DuoSplit command line
- Record who paid what between two people, split 50/50 or in full for the other.
- Spread purchases over monthly installments, check the month's balance and settle it.

Run:
  duosplit --help

Dependencies:
  pip install typer openpyxl
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import typer

from computations import compute_category_totals, describe_balance, filter_expenses
from config import (
    archive_records,
    dumps_backup,
    ledger_path,
    load_household,
    load_ledger,
    loads_backup,
    save_ledger,
)
from csv_handler import export_expenses_to_csv, import_expenses_from_csv
from errors import LedgerError, NothingToSettle
from excel_export import export_excel
from ledger_store import LedgerStore
from logging_setup import configure_logging, get_logger
from models import ExpenseIntent, Household, Payer, PaymentMethod, SplitType
from money import parse_amount
from utils import current_month, today_str

app = typer.Typer(add_completion=False, help="Shared expenses between two people.")
logger = get_logger("duosplit.cli")


@dataclass
class AppState:
    store: LedgerStore
    household: Household
    path: str


@app.callback()
def main(
    ctx: typer.Context,
    ledger: Optional[Path] = typer.Option(None, help="Ledger JSON file (default: in the data directory)."),
    users: Optional[Path] = typer.Option(None, help="users.json with the two names."),
    log_level: Optional[str] = typer.Option(None, help="Logging level, e.g. DEBUG."),
) -> None:
    configure_logging(log_level)
    path = str(ledger) if ledger else ledger_path()
    try:
        records = load_ledger(path)
    except LedgerError as ex:
        typer.echo(f"Could not load {path}: {ex}", err=True)
        raise typer.Exit(1)
    logger.debug("loaded %d expense(s) from %s", len(records), path)
    store = LedgerStore(records, on_change=lambda recs: save_ledger(recs, path))
    ctx.obj = AppState(store=store, household=load_household(str(users) if users else None), path=path)


def _fail(ex: Exception) -> None:
    typer.echo(f"Error: {ex}", err=True)
    raise typer.Exit(1)


def _name(state: AppState, payer: Payer) -> str:
    return state.household.name_of(payer)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Argument(..., help="Total amount, e.g. 120.50"),
    description: str = typer.Argument(...),
    category: str = typer.Option("Other", "--category", "-c"),
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Start date YYYY-MM-DD (default today)."),
    payer: Payer = typer.Option(Payer.A, "--payer", "-p"),
    split: SplitType = typer.Option(SplitType.EQUAL, "--split", "-s"),
    method: PaymentMethod = typer.Option(PaymentMethod.CREDIT, "--method", "-m"),
    notes: Optional[str] = typer.Option(None, "--notes"),
    installments: int = typer.Option(1, "--installments", "-n", help="Number of monthly installments."),
) -> None:
    """Add an expense, optionally spread over monthly installments."""
    state: AppState = ctx.obj
    intent = ExpenseIntent(
        amount=amount,
        description=description,
        category=category,
        date=date or today_str(),
        payer_id=payer,
        split_type=split,
        payment_method=method,
        notes=notes,
    )
    try:
        records = state.store.add_expense(intent, installments)
    except LedgerError as ex:
        _fail(ex)
    for e in records:
        typer.echo(f"{e.id}  {e.date}  {e.amount:>10.2f}  {e.description}")


@app.command()
def edit(
    ctx: typer.Context,
    expense_id: str = typer.Argument(...),
    amount: Optional[str] = typer.Option(None, "--amount"),
    description: Optional[str] = typer.Option(None, "--description"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    date: Optional[str] = typer.Option(None, "--date", "-d"),
    payer: Optional[Payer] = typer.Option(None, "--payer", "-p"),
    split: Optional[SplitType] = typer.Option(None, "--split", "-s"),
    method: Optional[PaymentMethod] = typer.Option(None, "--method", "-m"),
    notes: Optional[str] = typer.Option(None, "--notes"),
) -> None:
    """Edit a single record (installments are not re-expanded)."""
    state: AppState = ctx.obj
    current = state.store.get(expense_id)
    if current is None:
        typer.echo(f"No expense {expense_id}; nothing changed.")
        return
    changes = {k: v for k, v in dict(
        description=description, category=category, date=date, payer_id=payer,
        split_type=split, payment_method=method, notes=notes,
    ).items() if v is not None}
    try:
        if amount is not None:
            changes["amount"] = parse_amount(amount)
        state.store.update(replace(current, **changes))
    except LedgerError as ex:
        _fail(ex)
    typer.echo(f"Updated {expense_id}.")


@app.command()
def delete(ctx: typer.Context, expense_id: str = typer.Argument(...)) -> None:
    """Delete a record by id."""
    state: AppState = ctx.obj
    if state.store.delete(expense_id):
        typer.echo(f"Deleted {expense_id}.")
    else:
        typer.echo(f"No expense {expense_id}; nothing changed.")


@app.command("list")
def list_expenses(
    ctx: typer.Context,
    month: Optional[str] = typer.Option(None, "--month", help="YYYY-MM (default: all)."),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
) -> None:
    """List records, newest first."""
    state: AppState = ctx.obj
    try:
        rows = filter_expenses(state.store.records, month, category)
    except LedgerError as ex:
        _fail(ex)
    for e in rows:
        settled = " (settled)" if e.is_settled else ""
        typer.echo(f"{e.id}  {e.date}  {e.amount:>10.2f}  {_name(state, e.payer_id):<10}  "
                   f"{e.split_type.value:<14}  {e.category:<14}  {e.description}{settled}")
    typer.echo(f"{len(rows)} transaction(s)")


@app.command()
def balance(
    ctx: typer.Context,
    month: Optional[str] = typer.Option(None, "--month", help="YYYY-MM (default: current month)."),
    all_time: bool = typer.Option(False, "--all-time", help="Ignore the month filter."),
    include_settled: bool = typer.Option(False, "--include-settled"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    categories: bool = typer.Option(False, "--categories", help="Also show spending per category."),
) -> None:
    """Show totals paid and who owes whom."""
    state: AppState = ctx.obj
    period = None if all_time else (month or current_month())
    try:
        summary = state.store.summary(period, exclude_settled=not include_settled, category=category)
    except LedgerError as ex:
        _fail(ex)
    h = state.household
    typer.echo(f"Period: {period or 'all time'}")
    typer.echo(f"{h.first.name} paid: {summary.total_paid_a:.2f}")
    typer.echo(f"{h.second.name} paid: {summary.total_paid_b:.2f}")
    typer.echo(describe_balance(summary, h))
    if categories:
        for name, total in compute_category_totals(filter_expenses(state.store.records, period, category)):
            typer.echo(f"  {name:<16} {total:>10.2f}")


@app.command("categories")
def list_categories(ctx: typer.Context) -> None:
    """Show the suggested expense categories."""
    state: AppState = ctx.obj
    for name in state.household.categories():
        typer.echo(name)


@app.command()
def settle(ctx: typer.Context, month: str = typer.Argument(..., help="YYYY-MM")) -> None:
    """Mark every expense of a month as settled."""
    state: AppState = ctx.obj
    try:
        count = state.store.settle_month(month)
    except NothingToSettle as ex:
        typer.echo(f"Nothing to settle: {ex}")
        return
    except LedgerError as ex:
        _fail(ex)
    typer.echo(f"Settled {count} expense(s) for {month}.")


@app.command("import")
def import_backup(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    yes: bool = typer.Option(False, "--yes", "-y", help="Replace without asking."),
) -> None:
    """Restore a JSON backup, replacing every current record."""
    state: AppState = ctx.obj
    try:
        records = loads_backup(file.read_text(encoding="utf-8"))
    except LedgerError as ex:
        _fail(ex)
    if not yes:
        typer.confirm(f"Replace {len(state.store)} expense(s) with {len(records)} from {file.name}?", abort=True)
    count = state.store.replace_all(records)
    typer.echo(f"Successfully restored {count} expenses!")


@app.command("import-csv")
def import_csv(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False),
    yes: bool = typer.Option(False, "--yes", "-y"),
) -> None:
    """Restore records from a CSV export, replacing every current record."""
    state: AppState = ctx.obj
    try:
        records = import_expenses_from_csv(str(file))
    except LedgerError as ex:
        _fail(ex)
    if not yes:
        typer.confirm(f"Replace {len(state.store)} expense(s) with {len(records)} from {file.name}?", abort=True)
    count = state.store.replace_all(records)
    typer.echo(f"Successfully restored {count} expenses!")


@app.command()
def export(ctx: typer.Context, file: Path = typer.Argument(...)) -> None:
    """Write a JSON backup of every record."""
    state: AppState = ctx.obj
    file.write_text(dumps_backup(state.store.records), encoding="utf-8")
    typer.echo(f"Exported {len(state.store)} expense(s) to {file}")


@app.command("export-csv")
def export_csv(ctx: typer.Context, file: Path = typer.Argument(...)) -> None:
    """Write every record to a CSV file."""
    state: AppState = ctx.obj
    count = export_expenses_to_csv(state.store.records, str(file))
    typer.echo(f"Exported {count} expense(s) to {file}")


@app.command("export-xlsx")
def export_xlsx(
    ctx: typer.Context,
    file: Path = typer.Argument(...),
    month: Optional[str] = typer.Option(None, "--month", help="YYYY-MM (default: all)."),
) -> None:
    """Write an Excel workbook with records, summary and categories."""
    state: AppState = ctx.obj
    try:
        export_excel(state.store.records, state.household, str(file), month)
    except LedgerError as ex:
        _fail(ex)
    typer.echo(f"Exported: {file}")


@app.command()
def reset(ctx: typer.Context, yes: bool = typer.Option(False, "--yes", "-y")) -> None:
    """Delete all records, keeping an archive copy next to the ledger."""
    state: AppState = ctx.obj
    if not yes:
        typer.confirm("This will permanently delete ALL expenses. Are you sure?", abort=True)
    archive = archive_records(state.store.records, str(Path(state.path).parent))
    state.store.clear()
    typer.echo(f"Reset complete. A safety backup was saved to {archive}")


if __name__ == "__main__":
    app()
