"""Admin commands for init and configuration."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from spendwise.config import create_default_config, get_config_path, load_settings, set_setting
from spendwise.store.queries import seed_default_categories, seed_demo_transactions
from spendwise.store.schema import database_exists, get_db_path, init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path, demo: bool) -> None:
    """Initialize new database and config."""
    if db_path.exists():
        db_path.unlink()

    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    added = seed_default_categories(db_path)
    console.print(f"[green]✓[/green] Database initialized with {added} categories")

    if demo:
        count = seed_demo_transactions(db_path)
        console.print(f"[green]✓[/green] Loaded {count} demo expenses")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, demo: bool = False) -> None:
    """Initialize spendwise database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'spendwise init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path, demo)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def config_command(key: str | None = None, value: str | None = None) -> None:
    """Show settings, or set one setting."""
    config_path = get_config_path()

    try:
        if key is not None:
            if value is None:
                console.print("[red]A value is required when setting a key[/red]")
                sys.exit(1)
            error = set_setting(key, value, config_path)
            if error:
                console.print(f"[red]{error}[/red]")
                sys.exit(1)
            console.print(f"[green]✓[/green] {key} updated")

        settings = load_settings(config_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[bold]Config:[/bold] {config_path}")
    console.print(f"  currency: {settings.currency}")
    console.print(f"  conversion_rate: {settings.conversion_rate}")
    console.print(f"  analysis_delay: {settings.analysis_delay}")
    console.print(f"  assistant_model: {settings.assistant_model}")
    console.print(f"  assistant_api_key: {'set' if settings.assistant_api_key else '[dim]not set[/dim]'}")
