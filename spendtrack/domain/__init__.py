"""Domain models and types for spendtrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from spendtrack.domain.models import (
    ALL_CATEGORIES,
    Amount,
    Category,
    Description,
    Expense,
    ExpenseFilters,
    ExpenseId,
    ExpenseSummary,
    Month,
    TopCategory,
)

__all__ = [
    "ALL_CATEGORIES",
    "Amount",
    "Category",
    "Description",
    "Expense",
    "ExpenseFilters",
    "ExpenseId",
    "ExpenseSummary",
    "Month",
    "TopCategory",
]
