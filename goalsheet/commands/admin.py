"""Admin commands for initialization."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from goalsheet.config import create_default_config, get_config_path
from goalsheet.store.schema import get_db_path, init_database

console = Console()


def init_command(force: bool = False, db_path: Path | None = None) -> None:
    """Initialize goalsheet database and configuration."""
    if db_path is None:
        db_path = get_db_path()
    config_path = get_config_path()

    try:
        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        console.print("[green]✓[/green] Database initialized")

        # Guard: refuse to overwrite config without force flag
        if config_path.exists() and not force:
            console.print(f"[dim]Config already exists: {config_path}[/dim]")
            console.print("[yellow]Use 'goalsheet init --force' to overwrite it[/yellow]")
            return

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
