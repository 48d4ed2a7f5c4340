"""Helpers shared by the CLI commands."""

import sys
import tomllib

from rich.console import Console

from spendtrack.config import Settings, get_config_path, load_settings
from spendtrack.dates import normalize_date
from spendtrack.domain.models import Category, ExpenseFilters
from spendtrack.domain.validation import parse_category_filter
from spendtrack.store.records import RecordStore, get_expense_store

console = Console()

CATEGORY_COLORS: dict[Category, str] = {
    Category.FOOD: "#10b981",
    Category.TRANSPORTATION: "#3b82f6",
    Category.ENTERTAINMENT: "#8b5cf6",
    Category.SHOPPING: "#ec4899",
    Category.BILLS: "#f59e0b",
    Category.OTHER: "#6b7280",
}

CATEGORY_ICONS: dict[Category, str] = {
    Category.FOOD: "🍔",
    Category.TRANSPORTATION: "🚗",
    Category.ENTERTAINMENT: "🎬",
    Category.SHOPPING: "🛍️",
    Category.BILLS: "📄",
    Category.OTHER: "📌",
}


def category_label(category: Category) -> str:
    """Format a category with its icon and color markup."""
    return f"[{CATEGORY_COLORS[category]}]{CATEGORY_ICONS[category]} {category.value}[/]"


def open_store() -> tuple[Settings, RecordStore]:
    """Load settings and open the configured expense store.

    Exits with status 1 if the config file cannot be parsed.
    """
    try:
        settings = load_settings()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file {get_config_path()}: {e}[/red]", style="bold")
        sys.exit(1)

    return settings, get_expense_store(settings.data_path)


def parse_date_option(raw_date: str | None, option_name: str) -> str | None:
    """Normalize an optional date option, exiting on unparseable input."""
    if not raw_date:
        return None
    try:
        return normalize_date(raw_date)
    except ValueError as e:
        console.print(f"[red]Invalid {option_name} date: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)


def build_filters(
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    search: str | None,
) -> ExpenseFilters:
    """Build filters from command options.

    Args:
        start_date: Optional start of date range.
        end_date: Optional end of date range.
        category: Optional category name or "All".
        search: Optional search term.

    Returns:
        ExpenseFilters for the domain filter.
    """
    category_filter = None
    if category:
        category_filter = parse_category_filter(category)
        if category_filter is None:
            names = ", ".join(["All", *(c.value for c in Category)])
            console.print(f"[red]Unknown category '{category}'[/red]")
            console.print(f"[dim]Choose from: {names}[/dim]")
            sys.exit(1)

    since = parse_date_option(start_date, "--from")
    until = parse_date_option(end_date, "--to")
    if bool(since) != bool(until):
        console.print("[yellow]Date range ignored: both --from and --to are required[/yellow]")

    return ExpenseFilters(
        start_date=since,
        end_date=until,
        category=category_filter,
        search_term=search or None,
    )


def print_validation_errors(errors: dict[str, str]) -> None:
    """Print field-level validation messages."""
    console.print("[red]Invalid expense:[/red]", style="bold")
    for field, message in errors.items():
        console.print(f"  {field}: {message}")
