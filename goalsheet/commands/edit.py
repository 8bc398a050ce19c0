"""Interactive editing of a working sheet."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from goalsheet.commands.sheets import display_sheet, open_registry
from goalsheet.domain.line_items import LineItemList
from goalsheet.domain.models import SheetName
from goalsheet.domain.sheet import SavingsSheet
from goalsheet.store.registry import SheetRegistry

console = Console()

MAIN_PROMPT = (
    "Action (n name, g goal, b balance, i income, o outgoings, s save, l load, r reset, q quit)"
)


def warn(message: str) -> None:
    console.print(f"[yellow]{message}[/yellow]\n")


def prompt_row_index(items: LineItemList) -> int | None:
    """Prompt for a 1-based row number.

    Returns:
        0-based index, or None if the input is not a valid row.
    """
    choice: str = typer.prompt(f"Row (1-{len(items)})", type=str)
    try:
        row = int(choice)
    except ValueError:
        console.print("[red]Invalid selection[/red]\n")
        return None

    if not 1 <= row <= len(items):
        console.print("[red]Invalid selection[/red]\n")
        return None

    return row - 1


def prompt_row_values(items: LineItemList, index: int) -> None:
    """Prompt for the label and amount of a row, keeping current values on Enter."""
    item = items[index]
    label: str = typer.prompt("  Label (optional)", default=item.label, show_default=bool(item.label))
    amount: str = typer.prompt("  Amount (£)", default=item.amount, show_default=bool(item.amount))
    items.update_label(index, label)
    items.update_amount(index, amount)


def handle_line_items_action(title: str, items: LineItemList) -> None:
    """Handle 'i'/'o' actions: add, edit or delete a row."""
    action: str = typer.prompt(f"{title} (a add, e edit, d delete)", type=str, default="a")
    action = action.lower()

    if action == "a":
        warning = items.append()
        if warning:
            warn(warning)
            return
        prompt_row_values(items, len(items) - 1)

    elif action == "e":
        index = prompt_row_index(items)
        if index is not None:
            prompt_row_values(items, index)

    elif action == "d":
        index = prompt_row_index(items)
        if index is None:
            return
        warning = items.remove_at(index)
        if warning:
            warn(warning)

    else:
        console.print("[red]Invalid option[/red]\n")


def handle_save_action(sheet: SavingsSheet, registry: SheetRegistry) -> None:
    """Handle 's' action: save the sheet under its name."""
    name: str = typer.prompt("Sheet name", default=sheet.name, show_default=bool(sheet.name))
    sheet.name = SheetName(name)

    warning = registry.save(sheet)
    if warning:
        warn(warning)
        return

    console.print(f"[green]✓ Sheet saved![/green] [dim]({escape(sheet.name)})[/dim]\n")


def resolve_sheet_choice(choice: str, names: list[SheetName]) -> str:
    """Resolve a selection to a sheet name.

    An exact name match wins over a list position, so a sheet named "2" can
    still be picked by name.
    """
    if choice in names:
        return choice
    if choice.isdigit() and 1 <= int(choice) <= len(names):
        return names[int(choice) - 1]
    return choice


def handle_load_action(sheet: SavingsSheet, registry: SheetRegistry) -> None:
    """Handle 'l' action: pick a saved sheet, or blank to start over."""
    names = registry.list_names()
    if not names:
        console.print("[yellow]No saved sheets found[/yellow]\n")
        return

    console.print("[cyan]Saved sheets:[/cyan]")
    for idx, name in enumerate(names, 1):
        marker = " [dim](current)[/dim]" if name == registry.current else ""
        console.print(f"  {idx}. {escape(name)}{marker}")

    choice: str = typer.prompt("Select a sheet (number or name, Enter for blank)", default="", show_default=False)
    registry.open(resolve_sheet_choice(choice, names), sheet)
    if registry.current is None and choice:
        console.print(f"[yellow]No saved sheet named '{escape(choice)}', starting blank[/yellow]\n")


def edit_session(sheet: SavingsSheet, registry: SheetRegistry) -> None:
    """Run the interactive editing loop until the user quits.

    Args:
        sheet: Working sheet, edited in place.
        registry: Registry used for saving and loading.
    """
    while True:
        display_sheet(sheet)
        action: str = typer.prompt(MAIN_PROMPT, type=str)
        action = action.strip().lower()

        if action == "q":
            console.print("[yellow]Exiting[/yellow]")
            return

        if action == "n":
            name: str = typer.prompt("Sheet name", default=sheet.name, show_default=bool(sheet.name))
            sheet.name = SheetName(name)

        elif action == "g":
            goal: str = typer.prompt("Saving goal (£)", default=sheet.goal, show_default=bool(sheet.goal))
            sheet.set_goal(goal)

        elif action == "b":
            balance: str = typer.prompt(
                "Current balance (£)", default=sheet.current_balance, show_default=bool(sheet.current_balance)
            )
            sheet.set_current_balance(balance)

        elif action == "i":
            handle_line_items_action("Income", sheet.incomes)

        elif action == "o":
            handle_line_items_action("Outgoings", sheet.outgoings)

        elif action == "s":
            handle_save_action(sheet, registry)

        elif action == "l":
            handle_load_action(sheet, registry)

        elif action == "r":
            registry.open("", sheet)
            console.print("[dim]Reset to a blank sheet[/dim]\n")

        else:
            console.print("[red]Invalid option[/red]\n")


def edit_command(name: str | None = None, db_path: Path | None = None) -> None:
    """Edit a sheet interactively."""
    registry = open_registry(db_path, create=True)
    sheet = SavingsSheet()

    if name:
        registry.open(name, sheet)
        if registry.current is None:
            console.print(f"[yellow]No saved sheet named '{escape(name)}', starting a new one[/yellow]\n")
            sheet.name = SheetName(name)

    edit_session(sheet, registry)
