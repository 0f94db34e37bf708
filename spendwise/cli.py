"""CLI entry point for spendwise."""

import typer

from spendwise.commands.admin import config_command, init_command
from spendwise.commands.analyze import analyze_command
from spendwise.commands.assistant import ask_command
from spendwise.commands.report import report_command
from spendwise.commands.transactions import (
    add_command,
    categories_command,
    delete_command,
    edit_command,
    list_command,
)
from spendwise.logging_setup import configure_logging

app = typer.Typer(
    name="spendwise",
    help="Track your expenses and find where you can save",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track your expenses and find where you can save."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    demo: bool = typer.Option(False, "--demo", help="Load a small set of demo expenses"),
) -> None:
    """Initialize spendwise database and configuration."""
    init_command(force, demo)


@app.command()
def add(
    date: str,
    description: str,
    amount: float,
    category: str = typer.Option(..., "--category", "-c", help="Expense category"),
    currency: str = typer.Option(None, "--currency", help="Currency the amount is entered in (USD or INR)"),
) -> None:
    """Add an expense."""
    add_command(date, description, amount, category, currency)


@app.command()
def edit(
    txn_id: str = typer.Argument(..., help="Transaction ID (or unique prefix)"),
    date: str = typer.Option(None, "--date", help="New date"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
    amount: float = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    currency: str = typer.Option(None, "--currency", help="Currency the amount is entered in (USD or INR)"),
) -> None:
    """Edit an expense."""
    edit_command(txn_id, date, description, amount, category, currency)


@app.command()
def delete(
    txn_id: str = typer.Argument(..., help="Transaction ID (or unique prefix)"),
) -> None:
    """Delete an expense."""
    delete_command(txn_id)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum expenses to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your expenses"),
    category: str = typer.Option(None, "--category", "-c", help="Only show this category"),
    search: str = typer.Option(None, "--search", "-s", help="Only show expenses whose description contains this text"),
) -> None:
    """List your expenses, newest first."""
    list_command(limit, all, category, search)


@app.command()
def categories(
    add: str = typer.Option(None, "--add", help="Add a new category"),
) -> None:
    """Show or extend your category list."""
    categories_command(add)


@app.command()
def report(
    sort_by: str = typer.Option("value", help="Sort by 'value' or 'alpha'"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your spending by category and by month."""
    report_command(sort_by, histogram)


@app.command()
def analyze(
    delay: float = typer.Option(None, "--delay", help="Seconds to show the progress indicator (overrides config)"),
) -> None:
    """Analyze your spending and suggest savings."""
    analyze_command(delay)


@app.command()
def ask(
    question: str,
) -> None:
    """Ask the assistant about your spending."""
    ask_command(question)


@app.command()
def config(
    key: str = typer.Argument(None, help="Setting to change"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """Show or change your settings."""
    config_command(key, value)


if __name__ == "__main__":
    app()
