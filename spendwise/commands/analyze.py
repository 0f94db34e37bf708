"""Savings analysis command."""

import sqlite3
import sys
import time

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from spendwise.config import Settings, load_settings
from spendwise.currency import format_amount
from spendwise.domain.analysis import AnalysisSession
from spendwise.domain.insights import AnalysisResult, SavingsInsight
from spendwise.store.queries import list_transactions
from spendwise.store.schema import database_exists, get_db_path

console = Console()


def render_insight(rank: int, insight: SavingsInsight, settings: Settings) -> None:
    """Render one savings recommendation."""

    def money(amount: float) -> str:
        return format_amount(amount, settings.currency, settings.conversion_rate)

    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(justify="right")
    table.add_row("Current", f"{money(insight.current_spending)}/month")
    table.add_row("Suggested budget", money(insight.suggested_budget))
    table.add_row("Potential savings", f"[green]{money(insight.potential_savings)}[/green]")

    if insight.current_spending > 0:
        share = insight.potential_savings / insight.current_spending * 100
        table.add_row("Reduction", f"{share:.0f}%")

    tips = "\n".join(f"[cyan]•[/cyan] {tip}" for tip in insight.tips)
    title = f"{rank}. {insight.category} [dim]({insight.confidence}% confidence)[/dim]"

    console.print(Panel.fit(table, title=title, title_align="left"))
    console.print(tips)
    console.print()


def render_result(result: AnalysisResult, settings: Settings) -> None:
    """Render the analysis result."""
    if not result.insights:
        console.print("[dim]No categories with meaningful monthly spending to analyze yet[/dim]")
        return

    total = format_amount(result.total_potential_savings, settings.currency, settings.conversion_rate)
    console.print(f"[bold green]Total potential monthly savings:[/bold green] {total}\n")

    console.print("[bold]Savings recommendations:[/bold]\n")
    for rank, insight in enumerate(result.insights, 1):
        render_insight(rank, insight, settings)


def analyze_command(delay: float | None = None) -> None:
    """Analyze spending patterns and suggest savings."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()
    wait = settings.analysis_delay if delay is None else max(delay, 0.0)

    session = AnalysisSession()

    try:
        token = session.start(list_transactions(db_path))
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if token is None:
        console.print("[yellow]An analysis is already running[/yellow]")
        return

    # The wait is cosmetic; the snapshot was taken above
    with console.status("Analyzing your spending patterns..."):
        if wait:
            time.sleep(wait)
        result = session.complete(token)

    if result is not None:
        render_result(result, settings)
