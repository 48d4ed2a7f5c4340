"""Pure functions for expense filtering, aggregation and export.

This module contains the functional core for expense operations:
- No I/O operations (no storage, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Dates are YYYY-MM-DD strings, so they are compared as strings.
"""

from dataclasses import dataclass
from datetime import date

from spendtrack.dates import month_of, month_range, trailing_window_start
from spendtrack.domain.models import (
    ALL_CATEGORIES,
    Amount,
    Category,
    Expense,
    ExpenseFilters,
    ExpenseSummary,
    TopCategory,
)

# Header cells are written unquoted; only data cells are wrapped in quotes
CSV_HEADERS = ["Date", "Category", "Description", "Amount"]

# Divisor for the daily average, regardless of how much history exists
AVERAGE_WINDOW_DAYS = 30


@dataclass(frozen=True)
class CategoryShare:
    """Immutable slice of the category breakdown chart."""

    category: Category
    amount: Amount
    percentage: float


def matches_filters(expense: Expense, filters: ExpenseFilters) -> bool:
    """Check whether a single expense passes the filters.

    Checks run in order and stop at the first decision: date range, then
    category, then search term. When a search term is set its result is
    final for any expense that got past the category check.

    Args:
        expense: Expense to check.
        filters: Filter settings.

    Returns:
        True if the expense should be kept.
    """
    if filters.start_date and filters.end_date:
        if not filters.start_date <= expense.date <= filters.end_date:
            return False

    if filters.category and filters.category != ALL_CATEGORIES and expense.category != filters.category:
        return False

    if filters.search_term:
        search_lower = filters.search_term.lower()
        return search_lower in expense.description.lower() or search_lower in expense.category.value.lower()

    return True


def filter_expenses(expenses: list[Expense], filters: ExpenseFilters) -> list[Expense]:
    """Filter expenses by date range, category and search term.

    Args:
        expenses: Expenses to filter.
        filters: Filter settings. A date range applies only when both ends are set.

    Returns:
        Matching expenses, in input order.
    """
    return [expense for expense in expenses if matches_filters(expense, filters)]


def sum_amounts(expenses: list[Expense]) -> Amount:
    """Sum expense amounts."""
    return Amount(sum(expense.amount for expense in expenses))


def calculate_category_breakdown(expenses: list[Expense]) -> dict[Category, Amount]:
    """Sum amounts per category.

    Args:
        expenses: Expenses to aggregate.

    Returns:
        Dictionary with every category as a key (0 when unused), in
        enumeration order.
    """
    breakdown = {category: Amount(0) for category in Category}
    for expense in expenses:
        breakdown[expense.category] = Amount(breakdown[expense.category] + expense.amount)
    return breakdown


def find_top_category(breakdown: dict[Category, Amount]) -> TopCategory | None:
    """Find the category with the greatest total.

    Args:
        breakdown: Category totals.

    Returns:
        TopCategory for the largest total, or None when every total is zero.
        Ties go to the category seen first.
    """
    top: TopCategory | None = None
    for category, amount in breakdown.items():
        if top is None or amount > top.amount:
            top = TopCategory(category=category, amount=amount)

    if top is None or top.amount <= 0:
        return None
    return top


def calculate_summary(expenses: list[Expense], today: date | None = None) -> ExpenseSummary:
    """Calculate summary statistics for a collection of expenses.

    Args:
        expenses: All expenses.
        today: Reference day for the current month and the trailing window.
            If None, uses today's date.

    Returns:
        ExpenseSummary with totals, breakdown, top category and daily average.
    """
    if today is None:
        today = date.today()

    since_date, until_date, _ = month_range(month_of(today))
    monthly = [expense for expense in expenses if since_date <= expense.date < until_date]

    window_start = trailing_window_start(today, AVERAGE_WINDOW_DAYS)
    recent = [expense for expense in expenses if expense.date > window_start]

    breakdown = calculate_category_breakdown(expenses)

    return ExpenseSummary(
        total_spending=sum_amounts(expenses),
        monthly_spending=sum_amounts(monthly),
        category_breakdown=breakdown,
        top_category=find_top_category(breakdown),
        average_daily_spending=sum_amounts(recent) / AVERAGE_WINDOW_DAYS,
    )


def sort_by_date(expenses: list[Expense], newest_first: bool = True) -> list[Expense]:
    """Sort expenses by date.

    Args:
        expenses: Expenses to sort.
        newest_first: Whether to put the most recent expense first.

    Returns:
        New sorted list. Expenses on the same day keep their relative order.
    """
    return sorted(expenses, key=lambda expense: expense.date, reverse=newest_first)


def calculate_category_shares(breakdown: dict[Category, Amount]) -> list[CategoryShare]:
    """Turn a category breakdown into chart slices.

    Args:
        breakdown: Category totals.

    Returns:
        One CategoryShare per category with a positive total, in breakdown
        order. Percentages are 0-100 and sum to 100.
    """
    total = sum(amount for amount in breakdown.values() if amount > 0)
    return [
        CategoryShare(category=category, amount=amount, percentage=(amount / total) * 100)
        for category, amount in breakdown.items()
        if amount > 0
    ]


def calculate_histogram_bar_length(
    amount: Amount,
    max_amount: Amount,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format an amount for display.

    Args:
        amount: Amount in currency units.
        symbol: Currency symbol prefix.

    Returns:
        Formatted string (e.g., "$1,234.50" or "-$3.00").
    """
    formatted = f"{symbol}{abs(amount):,.2f}"
    return f"-{formatted}" if amount < 0 else formatted


def export_to_csv(expenses: list[Expense]) -> str:
    """Render expenses as CSV text.

    Every data field is wrapped in double quotes as-is; embedded quotes are
    not escaped. The header row is not quoted.

    Args:
        expenses: Expenses to export, in output order.

    Returns:
        CSV text with rows joined by newlines and no trailing newline.
    """
    rows = [
        [expense.date, expense.category.value, expense.description, f"{expense.amount:.2f}"] for expense in expenses
    ]
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(f'"{cell}"' for cell in row) for row in rows)
    return "\n".join(lines)


def export_filename(today: date | None = None) -> str:
    """Build the default export filename for a day (expenses-YYYY-MM-DD.csv)."""
    if today is None:
        today = date.today()
    return f"expenses-{today.isoformat()}.csv"
