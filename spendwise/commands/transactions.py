"""Transaction management commands (add, edit, delete, list, categories)."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from spendwise.config import Settings, load_settings
from spendwise.currency import format_amount, to_base, validate_currency
from spendwise.dates import normalize_date
from spendwise.domain.models import CategoryName, Transaction
from spendwise.domain.summary import compute_summary
from spendwise.domain.transactions import (
    category_exists,
    create_transaction,
    filter_transactions,
    normalize_category_name,
    validate_new_category,
    validate_transaction_input,
)
from spendwise.store.queries import (
    TransactionNotFoundError,
    add_category,
    delete_transaction,
    find_transactions_by_prefix,
    get_categories,
    insert_transaction,
    list_transactions,
    update_transaction,
)
from spendwise.store.schema import database_exists, get_db_path

console = Console()

SHORT_ID_LENGTH = 8


def resolve_transaction(id_or_prefix: str, db_path: Path) -> Transaction:
    """Find exactly one transaction by full id or unique id prefix.

    Args:
        id_or_prefix: Full id or leading characters of it.
        db_path: Path to the database file.

    Returns:
        Matching transaction.

    Raises:
        TransactionNotFoundError: If nothing matches, or the prefix is ambiguous.
    """
    matches = find_transactions_by_prefix(id_or_prefix, db_path)
    exact = [txn for txn in matches if txn.id == id_or_prefix]
    if exact:
        return exact[0]
    if len(matches) != 1:
        raise TransactionNotFoundError(id_or_prefix)
    return matches[0]


def print_summary_line(db_path: Path, settings: Settings) -> None:
    """Recompute the summary from the store and print the new total."""
    summary = compute_summary(list_transactions(db_path))
    total = format_amount(summary.total, settings.currency, settings.conversion_rate)
    console.print(f"[dim]Total spending: {total} across {len(summary.by_category)} categories[/dim]")


def warn_unknown_category(category: CategoryName, db_path: Path) -> None:
    """Tell the user when a transaction uses a category outside the active set."""
    if not category_exists(category, get_categories(db_path)):
        console.print(f"[yellow]Note: '{category}' is not in your category list[/yellow]")


def add_command(
    date: str,
    description: str,
    amount: float,
    category: str,
    currency: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, or other formats).
        description: Transaction description.
        amount: Amount in the entry currency.
        category: Category name.
        currency: Entry currency. Defaults to the configured display currency.
    """
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()
    entry_currency = (currency or settings.currency).upper()

    is_valid, error = validate_currency(entry_currency)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        normalized_date = normalize_date(date)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    base_amount = to_base(amount, entry_currency, settings.conversion_rate)

    is_valid, error = validate_transaction_input(base_amount, category, normalized_date, description)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        txn = create_transaction(base_amount, category, normalized_date, description)
        insert_transaction(txn, db_path)

        console.print("[green]✓[/green] Expense added:")
        console.print(f"  ID: {txn.id[:SHORT_ID_LENGTH]}")
        console.print(f"  Date: {txn.date}")
        console.print(f"  Description: {txn.description}")
        console.print(f"  Amount: {format_amount(txn.amount, settings.currency, settings.conversion_rate)}")
        console.print(f"  Category: {txn.category}")

        warn_unknown_category(txn.category, db_path)
        print_summary_line(db_path, settings)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def edit_command(
    txn_id: str,
    date: str | None = None,
    description: str | None = None,
    amount: float | None = None,
    category: str | None = None,
    currency: str | None = None,
) -> None:
    """Replace a transaction, keeping its id. Omitted fields keep their current value."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()
    entry_currency = (currency or settings.currency).upper()

    is_valid, error = validate_currency(entry_currency)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        current = resolve_transaction(txn_id, db_path)

        try:
            new_date = normalize_date(date) if date else current.date
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            sys.exit(1)

        new_amount = current.amount
        if amount is not None:
            new_amount = to_base(amount, entry_currency, settings.conversion_rate)
        new_category = category if category is not None else current.category
        new_description = description if description is not None else current.description

        is_valid, error = validate_transaction_input(new_amount, new_category, new_date, new_description)
        if not is_valid:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

        updated = create_transaction(new_amount, new_category, new_date, new_description, txn_id=current.id)
        update_transaction(updated, db_path)

        console.print(f"[green]✓[/green] Updated: {updated.description}")
        warn_unknown_category(updated.category, db_path)
        print_summary_line(db_path, settings)

    except TransactionNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_command(txn_id: str) -> None:
    """Delete a transaction."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()

    try:
        txn = resolve_transaction(txn_id, db_path)
        delete_transaction(txn.id, db_path)
        console.print(f"[green]✓[/green] Deleted: {txn.description}")
        print_summary_line(db_path, settings)

    except TransactionNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def list_command(
    limit: int = 50,
    all: bool = False,
    category: str | None = None,
    search: str | None = None,
) -> None:
    """List transactions, most recently added first, optionally filtered."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()

    try:
        filtered = bool(category or search)
        transactions = list_transactions(db_path, None if all or filtered else limit)
        if filtered:
            transactions = filter_transactions(transactions, category, search)
            if not all:
                transactions = transactions[:limit]

        if not transactions:
            console.print("[yellow]No transactions found[/yellow]")
            return

        title = (
            f"Transactions (showing all {len(transactions)})" if all else f"Transactions (showing {len(transactions)})"
        )
        table = Table(title=title)
        table.add_column("ID", style="dim")
        table.add_column("Date", style="cyan")
        table.add_column("Description", style="white")
        table.add_column("Amount", justify="right")
        table.add_column("Category", style="magenta")

        for txn in transactions:
            amount_display = f"[red]{format_amount(txn.amount, settings.currency, settings.conversion_rate)}[/red]"
            table.add_row(txn.id[:SHORT_ID_LENGTH], txn.date, txn.description, amount_display, txn.category)

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def categories_command(new_category: str | None = None) -> None:
    """Show the category list, optionally adding a category first."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        categories = get_categories(db_path)

        if new_category is not None:
            is_valid, error = validate_new_category(new_category, categories)
            if not is_valid:
                console.print(f"[red]{error}[/red]")
                sys.exit(1)
            name = normalize_category_name(new_category)
            add_category(name, db_path)
            console.print(f"[green]✓[/green] Category added: {name}")
            categories = get_categories(db_path)

        if not categories:
            console.print("[yellow]No categories yet. Run 'spendwise init' first.[/yellow]")
            return

        console.print("[bold]Categories:[/bold]")
        for idx, name in enumerate(categories, 1):
            console.print(f"  {idx}. {name}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
