"""Summary and chart commands for viewing spending statistics."""

from datetime import date

from rich.columns import Columns
from rich.panel import Panel

from spendtrack.commands.shared import CATEGORY_COLORS, CATEGORY_ICONS, console, open_store
from spendtrack.dates import month_of, month_range
from spendtrack.domain.expenses import (
    calculate_category_shares,
    calculate_histogram_bar_length,
    calculate_summary,
    format_currency,
)
from spendtrack.domain.models import Amount, ExpenseSummary


def render_summary_card(title: str, value: str, icon: str, subtitle: str) -> Panel:
    """Build a single summary card panel."""
    return Panel(
        f"[bold]{value}[/bold]\n[dim]{subtitle}[/dim]",
        title=f"{icon} {title}",
        title_align="left",
        expand=True,
    )


def build_summary_cards(summary: ExpenseSummary, currency_symbol: str, today: date) -> list[Panel]:
    """Build the four summary cards.

    Args:
        summary: Calculated summary.
        currency_symbol: Currency symbol for amounts.
        today: Day used to label the current month.

    Returns:
        Panels for total, this month, top category and daily average.
    """
    _, _, month_label = month_range(month_of(today))

    if summary.top_category:
        top = summary.top_category
        top_value = f"{CATEGORY_ICONS[top.category]} {top.category.value}"
        top_subtitle = format_currency(top.amount, currency_symbol)
    else:
        top_value = "N/A"
        top_subtitle = "No expenses yet"

    return [
        render_summary_card(
            "Total Spending", format_currency(summary.total_spending, currency_symbol), "💵", "All time"
        ),
        render_summary_card(
            "This Month", format_currency(summary.monthly_spending, currency_symbol), "📅", month_label
        ),
        render_summary_card("Top Category", top_value, "📊", top_subtitle),
        render_summary_card(
            "Daily Average",
            format_currency(summary.average_daily_spending, currency_symbol),
            "📈",
            "Last 30 days",
        ),
    ]


def summary_command() -> None:
    """Show summary statistics for all expenses."""
    settings, store = open_store()

    today = date.today()
    summary = calculate_summary(store.load(), today)

    console.print(Columns(build_summary_cards(summary, settings.currency_symbol, today), equal=True))


def chart_command(bar_width: int = 30) -> None:
    """Show spending by category as a histogram."""
    settings, store = open_store()

    summary = calculate_summary(store.load())
    shares = calculate_category_shares(summary.category_breakdown)

    console.print("[bold cyan]Spending by Category[/bold cyan]\n")

    if not shares:
        console.print("[dim]No data to display[/dim]")
        console.print("[dim]Add expenses to see your spending breakdown[/dim]")
        return

    max_amount = Amount(max(share.amount for share in shares))

    for share in shares:
        bar_length = calculate_histogram_bar_length(share.amount, max_amount, bar_width)
        color = CATEGORY_COLORS[share.category]
        label = f"{CATEGORY_ICONS[share.category]} {share.category.value}"
        amount_display = format_currency(share.amount, settings.currency_symbol)
        console.print(
            f"  {label:18} {amount_display:>12} {share.percentage:>4.0f}%  [{color}]{'█' * bar_length}[/]"
        )

    console.print(
        f"\n  [bold]Total:[/bold] {format_currency(summary.total_spending, settings.currency_symbol)}"
    )
