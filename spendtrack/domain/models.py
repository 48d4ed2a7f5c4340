"""Domain type definitions for spendtrack.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Expense amount in currency units, exactly as the user entered it
- Month: Month in YYYY-MM format
- ExpenseId: Opaque unique expense identifier
- Description: Expense description text
"""

import math
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, Literal, NewType

# Amounts are kept as entered (int or float); display rounds to two decimals
Amount = NewType("Amount", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

ExpenseId = NewType("ExpenseId", str)

Description = NewType("Description", str)


class Category(StrEnum):
    """Fixed set of expense categories, in display order."""

    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS = "Bills"
    OTHER = "Other"


# Filter sentinel meaning "no category restriction"
ALL_CATEGORIES = "All"

CategoryFilter = Category | Literal["All"]


@dataclass(frozen=True)
class Expense:
    """Immutable expense record.

    Records are never mutated in place; an edit produces a replacement with the
    same id and created_at.
    """

    id: ExpenseId
    date: str
    amount: Amount
    category: Category
    description: Description
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape (camelCase keys)."""
        return {
            "id": self.id,
            "date": self.date,
            "amount": self.amount,
            "category": self.category.value,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Build an Expense from its persisted JSON shape.

        Args:
            data: Mapping with id, date, amount, category and description keys.
                createdAt and updatedAt are optional and default to "".

        Returns:
            Parsed Expense.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If the date, amount or category is invalid.
            TypeError: If a field has the wrong JSON type.
        """
        fields = {**data, "createdAt": data.get("createdAt", ""), "updatedAt": data.get("updatedAt", "")}
        for key in ("id", "date", "description", "createdAt", "updatedAt"):
            if not isinstance(fields[key], str):
                raise TypeError(f"Expense field '{key}' must be a string")

        amount = data["amount"]
        if isinstance(amount, bool) or not isinstance(amount, int | float):
            raise TypeError("Expense field 'amount' must be a number")
        if not math.isfinite(amount):
            raise ValueError("Expense field 'amount' must be finite")

        # Raises ValueError for anything that is not YYYY-MM-DD
        date.fromisoformat(data["date"])

        return cls(
            id=ExpenseId(data["id"]),
            date=data["date"],
            amount=Amount(amount),
            category=Category(data["category"]),
            description=Description(data["description"]),
            created_at=fields["createdAt"],
            updated_at=fields["updatedAt"],
        )


@dataclass(frozen=True)
class ExpenseFilters:
    """View-driven filter settings. Unset fields apply no restriction."""

    start_date: str | None = None
    end_date: str | None = None
    category: CategoryFilter | None = None
    search_term: str | None = None


@dataclass(frozen=True)
class TopCategory:
    """Category with the greatest spending."""

    category: Category
    amount: Amount


@dataclass(frozen=True)
class ExpenseSummary:
    """Derived summary statistics; never persisted."""

    total_spending: Amount
    monthly_spending: Amount
    category_breakdown: dict[Category, Amount]
    top_category: TopCategory | None
    average_daily_spending: float
