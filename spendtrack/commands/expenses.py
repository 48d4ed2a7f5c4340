"""Expense management commands (add, edit, delete, list)."""

import sys

import typer
from rich.markup import escape
from rich.table import Table

from spendtrack.commands.shared import (
    build_filters,
    category_label,
    console,
    open_store,
    print_validation_errors,
)
from spendtrack.dates import normalize_date
from spendtrack.domain.expenses import filter_expenses, format_currency, sort_by_date
from spendtrack.domain.models import ExpenseId
from spendtrack.domain.validation import (
    ExpenseFormData,
    create_expense,
    expense_to_form,
    replace_expense,
    validate_expense_form,
)


def _normalize_form_date(raw_date: str) -> str:
    # Unparseable dates are passed through for validation to report
    try:
        return normalize_date(raw_date) if raw_date.strip() else raw_date
    except ValueError:
        return raw_date


def add_command(
    date: str,
    amount: float,
    description: str,
    category: str = "Food",
) -> None:
    """Add an expense.

    Args:
        date: Expense date (YYYY-MM-DD, DD/MM/YYYY, or other formats).
        amount: Amount spent (must be greater than 0).
        description: What the money was spent on.
        category: Category name.
    """
    settings, store = open_store()

    form = ExpenseFormData(
        date=_normalize_form_date(date),
        amount=str(amount),
        category=category,
        description=description,
    )
    errors = validate_expense_form(form)
    if errors:
        print_validation_errors(errors)
        sys.exit(1)

    expense = create_expense(form)
    store.add(expense)

    console.print("[green]✓[/green] Expense added:")
    console.print(f"  ID: {expense.id}")
    console.print(f"  Date: {expense.date}")
    console.print(f"  Description: {escape(expense.description)}")
    console.print(f"  Amount: {format_currency(expense.amount, settings.currency_symbol)}")
    console.print(f"  Category: {category_label(expense.category)}")


def edit_command(
    expense_id: str,
    date: str | None = None,
    amount: float | None = None,
    category: str | None = None,
    description: str | None = None,
) -> None:
    """Replace an existing expense, keeping its id and creation time.

    Args:
        expense_id: Expense ID (from 'spendtrack list').
        date: New date, or None to keep.
        amount: New amount, or None to keep.
        category: New category, or None to keep.
        description: New description, or None to keep.
    """
    settings, store = open_store()

    existing = store.find(ExpenseId(expense_id))
    if existing is None:
        console.print(f"[red]Expense {expense_id} not found[/red]")
        sys.exit(1)

    form = expense_to_form(existing)
    if date is not None:
        form["date"] = _normalize_form_date(date)
    if amount is not None:
        form["amount"] = str(amount)
    if category is not None:
        form["category"] = category
    if description is not None:
        form["description"] = description

    errors = validate_expense_form(form)
    if errors:
        print_validation_errors(errors)
        sys.exit(1)

    updated = replace_expense(existing, form)
    store.update(existing.id, updated)

    console.print(f"[green]✓[/green] Updated expense {expense_id}:")
    console.print(f"  Date: {updated.date}")
    console.print(f"  Description: {escape(updated.description)}")
    console.print(f"  Amount: {format_currency(updated.amount, settings.currency_symbol)}")
    console.print(f"  Category: {category_label(updated.category)}")


def delete_command(expense_id: str, yes: bool = False) -> None:
    """Delete an expense by id.

    Args:
        expense_id: Expense ID (from 'spendtrack list').
        yes: Skip the confirmation prompt.
    """
    settings, store = open_store()

    existing = store.find(ExpenseId(expense_id))
    if existing is None:
        console.print(f"[red]Expense {expense_id} not found[/red]")
        sys.exit(1)

    console.print(
        f"{existing.date}  {escape(existing.description)}  "
        f"{format_currency(existing.amount, settings.currency_symbol)}  {category_label(existing.category)}"
    )
    if not yes and not typer.confirm("Are you sure you want to delete this expense?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    remaining = store.remove(existing.id)
    console.print(f"[green]✓[/green] Deleted expense {expense_id} ({len(remaining)} remaining)")


def list_command(
    start_date: str | None = None,
    end_date: str | None = None,
    category: str | None = None,
    search: str | None = None,
    oldest_first: bool = False,
) -> None:
    """List expenses, filtered and sorted by date."""
    settings, store = open_store()
    filters = build_filters(start_date, end_date, category, search)

    expenses = sort_by_date(filter_expenses(store.load(), filters), newest_first=not oldest_first)

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        console.print("[dim]Add one with 'spendtrack add' or adjust your filters[/dim]")
        return

    order = "oldest first" if oldest_first else "newest first"
    noun = "expense" if len(expenses) == 1 else "expenses"
    table = Table(title=f"Expenses ({len(expenses)} {noun}, {order})")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category")
    table.add_column("Amount", justify="right")

    for expense in expenses:
        table.add_row(
            expense.id,
            expense.date,
            escape(expense.description),
            category_label(expense.category),
            format_currency(expense.amount, settings.currency_symbol),
        )

    console.print(table)
