"""Pure functions for validating expense input and building expense records.

Validation reports problems as field-level messages instead of raising, so
the caller can show all of them at once.
"""

import math
import secrets
import time
from datetime import date, datetime
from typing import TypedDict

from spendtrack.dates import utc_now_iso
from spendtrack.domain.models import (
    ALL_CATEGORIES,
    Amount,
    Category,
    CategoryFilter,
    Description,
    Expense,
    ExpenseId,
)

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class ExpenseFormData(TypedDict):
    """Raw expense input, as typed by the user."""

    date: str
    amount: str
    category: str
    description: str


def parse_category(name: str) -> Category | None:
    """Resolve a category name, ignoring case.

    Args:
        name: Category name (e.g., "food" or "Food").

    Returns:
        Matching Category or None if unknown.
    """
    for category in Category:
        if category.value.lower() == name.strip().lower():
            return category
    return None


def parse_category_filter(name: str) -> CategoryFilter | None:
    """Resolve a category filter value, accepting the "All" sentinel."""
    if name.strip().lower() == ALL_CATEGORIES.lower():
        return ALL_CATEGORIES
    return parse_category(name)


def _require_category(name: str) -> Category:
    category = parse_category(name)
    if category is None:
        raise ValueError(f"Unknown category: {name}")
    return category


def validate_expense_form(form: ExpenseFormData) -> dict[str, str]:
    """Validate raw expense input.

    Args:
        form: Raw input.

    Returns:
        Dictionary of field name to error message. Empty if valid.
    """
    errors: dict[str, str] = {}

    if not form["date"].strip():
        errors["date"] = "Date is required"
    else:
        try:
            date.fromisoformat(form["date"].strip())
        except ValueError:
            errors["date"] = "Date must be in YYYY-MM-DD format"

    try:
        amount = float(form["amount"])
    except ValueError:
        errors["amount"] = "Amount must be a number"
    else:
        if not (math.isfinite(amount) and amount > 0):
            errors["amount"] = "Amount must be greater than 0"

    if parse_category(form["category"]) is None:
        names = ", ".join(category.value for category in Category)
        errors["category"] = f"Category must be one of: {names}"

    if not form["description"].strip():
        errors["description"] = "Description is required"

    return errors


def generate_id(now_ms: int | None = None) -> ExpenseId:
    """Generate a new expense id.

    Args:
        now_ms: Epoch milliseconds to embed. If None, uses the current time.

    Returns:
        Id of the form "<epoch-millis>-<9 random base36 characters>".
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return ExpenseId(f"{now_ms}-{suffix}")


def create_expense(form: ExpenseFormData, now: datetime | None = None) -> Expense:
    """Build a new expense from validated input.

    Args:
        form: Input that passed validate_expense_form.
        now: Creation instant. If None, uses the current time.

    Returns:
        Expense with a fresh id and matching created/updated timestamps.
    """
    timestamp = utc_now_iso(now)
    category = _require_category(form["category"])

    return Expense(
        id=generate_id(int(now.timestamp() * 1000) if now else None),
        date=form["date"].strip(),
        amount=Amount(float(form["amount"])),
        category=category,
        description=Description(form["description"].strip()),
        created_at=timestamp,
        updated_at=timestamp,
    )


def replace_expense(existing: Expense, form: ExpenseFormData, now: datetime | None = None) -> Expense:
    """Build the replacement for an edited expense.

    Args:
        existing: Expense being edited.
        form: Input that passed validate_expense_form.
        now: Update instant. If None, uses the current time.

    Returns:
        Expense with the existing id and created_at, new field values and a
        refreshed updated_at.
    """
    category = _require_category(form["category"])

    return Expense(
        id=existing.id,
        date=form["date"].strip(),
        amount=Amount(float(form["amount"])),
        category=category,
        description=Description(form["description"].strip()),
        created_at=existing.created_at,
        updated_at=utc_now_iso(now),
    )


def expense_to_form(expense: Expense) -> ExpenseFormData:
    """Prefill input fields from an existing expense."""
    return ExpenseFormData(
        date=expense.date,
        amount=str(expense.amount),
        category=expense.category.value,
        description=expense.description,
    )
