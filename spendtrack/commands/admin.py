"""Admin commands for init, export and clearing expenses."""

import sys
from pathlib import Path

import typer

from spendtrack.commands.shared import build_filters, console, open_store
from spendtrack.config import create_default_config, get_config_path, load_settings
from spendtrack.domain.expenses import export_filename, export_to_csv, filter_expenses
from spendtrack.store.storage import FileStorage


def init_command(force: bool = False) -> None:
    """Initialize spendtrack storage and configuration."""
    config_path = get_config_path()
    config_exists = config_path.exists()

    try:
        if not force and config_exists:
            console.print("[red]Initialization failed:[/red]", style="bold")
            console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'spendtrack init --force' to overwrite[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        storage = FileStorage(load_settings(config_path).data_path)
        if force or not storage.exists():
            console.print(f"[cyan]Initializing storage at {storage.path}...[/cyan]")
            storage.initialize()
            console.print("[green]✓[/green] Storage initialized")
        else:
            console.print(f"[dim]Keeping existing storage at {storage.path}[/dim]")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Storage: {storage.path}[/dim]")
        console.print(f"[dim]Config: {config_path}[/dim]")

    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(
    output: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    category: str | None = None,
    search: str | None = None,
) -> None:
    """Export expenses to a CSV file."""
    _, store = open_store()
    filters = build_filters(start_date, end_date, category, search)

    expenses = filter_expenses(store.load(), filters)

    if not expenses:
        console.print("[yellow]No expenses to export[/yellow]")
        return

    output_path = Path(output).expanduser() if output else Path.cwd() / export_filename()

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(export_to_csv(expenses), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    noun = "expense" if len(expenses) == 1 else "expenses"
    console.print(f"[green]✓[/green] Exported {len(expenses)} {noun} to: {output_path}")


def clear_command(yes: bool = False) -> None:
    """Delete all stored expenses."""
    _, store = open_store()

    count = len(store.load())
    if count == 0:
        console.print("[dim]No expenses stored[/dim]")
        return

    if not yes and not typer.confirm(f"Delete all {count} expenses? This cannot be undone", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    try:
        store.clear()
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted {count} expenses")
