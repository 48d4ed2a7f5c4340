"""CLI entry point for spendtrack."""

import tomllib

import typer

from spendtrack.commands.admin import clear_command, export_command, init_command
from spendtrack.commands.expenses import add_command, delete_command, edit_command, list_command
from spendtrack.commands.report import chart_command, summary_command
from spendtrack.config import DEFAULT_LOG_LEVEL, load_settings
from spendtrack.logs import configure_logging

app = typer.Typer(
    name="spendtrack",
    help="Personal expense tracker - record, summarize and export your spending",
    add_completion=False,
)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Log level (default: from config, else WARNING)"),
) -> None:
    """Personal expense tracker - record, summarize and export your spending."""
    if log_level is None:
        try:
            log_level = load_settings().log_level
        except tomllib.TOMLDecodeError:
            log_level = DEFAULT_LOG_LEVEL
    configure_logging(log_level)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config and storage"),
) -> None:
    """Initialize spendtrack storage and configuration."""
    init_command(force)


@app.command()
def add(
    date: str,
    amount: float,
    description: str,
    category: str = typer.Option("Food", "--category", "-c", help="Expense category"),
) -> None:
    """Record a new expense."""
    add_command(date, amount, description, category)


@app.command()
def edit(
    expense_id: str,
    date: str = typer.Option(None, "--date", help="New date"),
    amount: float = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
) -> None:
    """Edit an existing expense."""
    edit_command(expense_id, date, amount, category, description)


@app.command()
def delete(
    expense_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without asking"),
) -> None:
    """Delete an expense."""
    delete_command(expense_id, yes)


@app.command(name="list")
def list_expenses(
    start_date: str = typer.Option(None, "--from", help="Start of date range (requires --to)"),
    end_date: str = typer.Option(None, "--to", help="End of date range (requires --from)"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category ('All' for any)"),
    search: str = typer.Option(None, "--search", "-s", help="Search descriptions and categories"),
    oldest_first: bool = typer.Option(False, "--oldest-first", help="Show oldest expenses first"),
) -> None:
    """List your expenses."""
    list_command(start_date, end_date, category, search, oldest_first)


@app.command()
def summary() -> None:
    """Show total, monthly, top category and daily average spending."""
    summary_command()


@app.command()
def chart(
    width: int = typer.Option(30, "--width", help="Maximum bar width in characters"),
) -> None:
    """Show your spending breakdown by category."""
    chart_command(width)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: ./expenses-YYYY-MM-DD.csv)"),
    start_date: str = typer.Option(None, "--from", help="Start of date range (requires --to)"),
    end_date: str = typer.Option(None, "--to", help="End of date range (requires --from)"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category ('All' for any)"),
    search: str = typer.Option(None, "--search", "-s", help="Search descriptions and categories"),
) -> None:
    """Export your expenses to CSV."""
    export_command(output, start_date, end_date, category, search)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Clear without asking"),
) -> None:
    """Delete all your expenses."""
    clear_command(yes)


if __name__ == "__main__":
    app()
