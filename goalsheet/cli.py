"""CLI entry point for goalsheet."""

import sys
import tomllib
from pathlib import Path

import typer
from rich.console import Console

from goalsheet.commands.admin import init_command
from goalsheet.commands.edit import edit_command
from goalsheet.commands.sheets import export_command, list_command, show_command
from goalsheet.config import load_config, resolve_db_path, resolve_log_level
from goalsheet.log import configure_logging

app = typer.Typer(
    name="goalsheet",
    help="Saving Goal Calculator - plan how long it takes to reach a savings goal",
    add_completion=False,
)

console = Console()


def get_db_path_option(ctx: typer.Context) -> Path | None:
    """Database path resolved by the callback (None means the default location)."""
    db_path: Path | None = ctx.obj["db_path"] if ctx.obj else None
    return db_path


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Saving Goal Calculator - plan how long it takes to reach a savings goal."""
    try:
        config = load_config()
        level = "DEBUG" if verbose else resolve_log_level(config)
    except (tomllib.TOMLDecodeError, ValueError) as e:
        console.print(f"[red]Invalid config: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not read config: {e}[/red]", style="bold")
        sys.exit(1)

    configure_logging(level)
    ctx.obj = {"db_path": resolve_db_path(config)}


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize goalsheet database and configuration."""
    init_command(force, get_db_path_option(ctx))


@app.command(name="list")
def list_sheets(ctx: typer.Context) -> None:
    """List your saved sheets."""
    list_command(get_db_path_option(ctx))


@app.command()
def show(ctx: typer.Context, name: str) -> None:
    """Show a saved sheet with its totals and goal projection."""
    show_command(name, get_db_path_option(ctx))


@app.command()
def edit(
    ctx: typer.Context,
    name: str = typer.Argument(None, help="Saved sheet to open (default: blank sheet)"),
) -> None:
    """Edit a sheet interactively and save it."""
    edit_command(name, get_db_path_option(ctx))


@app.command()
def export(
    ctx: typer.Context,
    output: str = typer.Option(None, "--output", "-o", help="File to write (default: print to terminal)"),
) -> None:
    """Export your saved sheets as JSON."""
    export_command(output, get_db_path_option(ctx))


if __name__ == "__main__":
    app()
