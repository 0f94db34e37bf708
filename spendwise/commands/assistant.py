"""Assistant command for free-form finance questions."""

import sqlite3
import sys

from rich.console import Console
from rich.markdown import Markdown

from spendwise.assistant import ask
from spendwise.config import load_settings
from spendwise.store.queries import list_transactions
from spendwise.store.schema import database_exists, get_db_path

console = Console()


def ask_command(question: str) -> None:
    """Answer a question about your spending."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()

    if not question.strip():
        console.print("[red]Question must not be empty[/red]")
        sys.exit(1)

    try:
        transactions = list_transactions(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    with console.status("Thinking..."):
        answer = ask(question, transactions, settings)

    console.print(Markdown(answer))
