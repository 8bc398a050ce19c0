"""Commands for viewing saved sheets."""

import logging
import sqlite3
import sys
from pathlib import Path

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from goalsheet.domain.amounts import format_currency
from goalsheet.domain.line_items import LineItemList
from goalsheet.domain.models import SheetName
from goalsheet.domain.sheet import GoalStatus, SavingsSheet, describe_projection
from goalsheet.store.kv import SqliteStore
from goalsheet.store.registry import SheetRegistry
from goalsheet.store.schema import database_exists, init_database

logger = logging.getLogger(__name__)
console = Console()

STATUS_STYLES = {
    GoalStatus.REACHED: "green",
    GoalStatus.ON_TRACK: "cyan",
    GoalStatus.UNREACHABLE: "yellow",
}


def open_registry(db_path: Path | None = None, create: bool = False) -> SheetRegistry:
    """Create a registry over the SQLite store and load saved sheets.

    Args:
        db_path: Path to the database file. If None, uses default location.
        create: Create the schema if needed. If that fails the registry still
            works in memory, it just cannot persist. Without it a missing
            database is an error.
    """
    if create:
        try:
            init_database(db_path)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not initialize database: %s", e)
    elif not database_exists(db_path):
        console.print("[red]Database not found. Run 'goalsheet init' first.[/red]", style="bold")
        sys.exit(1)

    registry = SheetRegistry(SqliteStore(db_path))
    registry.load()
    return registry


def build_line_item_table(title: str, items: LineItemList) -> Table:
    """Build a table of numbered line items.

    Args:
        title: Table title.
        items: Line items to show.

    Returns:
        Rich table with one row per item.
    """
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Label", style="white")
    table.add_column("Amount", justify="right")

    for idx, item in enumerate(items, 1):
        label = escape(item.label) or "[dim]-[/dim]"
        amount = format_currency(item.amount) if item.amount else "[dim]-[/dim]"
        table.add_row(str(idx), label, amount)

    return table


def display_sheet(sheet: SavingsSheet) -> None:
    """Display a sheet with its totals and goal projection.

    Args:
        sheet: Sheet to display.
    """
    projection = sheet.projection()
    title = escape(sheet.name) or "Untitled sheet"

    console.print(f"[bold cyan]{title}[/bold cyan]")
    goal_display = format_currency(sheet.goal) or "not set"
    balance_display = format_currency(sheet.current_balance) or "not set"
    console.print(f"[bold]Saving goal:[/bold] {goal_display}    [bold]Current balance:[/bold] {balance_display}\n")

    console.print(
        Columns(
            [
                build_line_item_table("Income", sheet.incomes),
                build_line_item_table("Outgoings", sheet.outgoings),
            ]
        )
    )

    console.print(f"[bold]Total Income:[/bold] {format_currency(projection.total_income)}")
    console.print(f"[bold]Total Outgoings:[/bold] {format_currency(projection.total_outgoings)}")
    difference_style = "green" if projection.difference >= 0 else "red"
    console.print(
        f"[bold]Difference:[/bold] [{difference_style}]{format_currency(projection.difference)}[/{difference_style}]"
    )

    style = STATUS_STYLES.get(projection.status, "white")
    for message in describe_projection(projection):
        console.print(f"[{style}]{message}[/{style}]")
    console.print()


def list_command(db_path: Path | None = None) -> None:
    """List saved sheets."""
    registry = open_registry(db_path)
    names = registry.list_names()

    if not names:
        console.print("[yellow]No saved sheets found[/yellow]")
        return

    table = Table(title=f"Saved sheets ({len(names)})")
    table.add_column("Name", style="cyan")
    table.add_column("Goal", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Monthly surplus", justify="right")
    table.add_column("Months to goal", justify="right")

    for name in names:
        sheet = SavingsSheet()
        sheet.load_from(name, registry.get(name))
        projection = sheet.projection()

        difference = format_currency(projection.difference)
        if projection.difference < 0:
            difference = f"[red]{difference}[/red]"

        if projection.status is GoalStatus.REACHED:
            months = "[green]reached[/green]"
        elif projection.status is GoalStatus.UNREACHABLE:
            months = "[yellow]∞[/yellow]"
        elif projection.status is GoalStatus.ON_TRACK:
            months = str(projection.months_to_goal)
        else:
            months = "[dim]-[/dim]"

        table.add_row(
            escape(name),
            format_currency(sheet.goal) or "[dim]-[/dim]",
            format_currency(sheet.current_balance) or "[dim]-[/dim]",
            difference,
            months,
        )

    console.print(table)


def show_command(name: str, db_path: Path | None = None) -> None:
    """Show a saved sheet."""
    registry = open_registry(db_path)
    snapshot = registry.get(name)

    if snapshot is None:
        console.print(f"[red]No saved sheet named '{escape(name)}'[/red]", style="bold")
        sys.exit(1)

    sheet = SavingsSheet()
    sheet.load_from(SheetName(name), snapshot)
    display_sheet(sheet)


def export_command(output: str | None = None, db_path: Path | None = None) -> None:
    """Export saved sheets as JSON."""
    registry = open_registry(db_path)
    payload = registry.to_json()

    if output is None:
        console.print_json(payload)
        return

    output_path = Path(output).expanduser()
    try:
        output_path.write_text(payload, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(registry.list_names())} sheet(s) to: {output_path}")

