"""Report command for the spending summary."""

import sqlite3
import sys

from rich.console import Console

from spendwise.config import Settings, load_settings
from spendwise.currency import format_amount
from spendwise.dates import month_label
from spendwise.domain.models import Money
from spendwise.domain.report import CategoryLine, MonthLine, calculate_histogram_bar_length, create_spending_report
from spendwise.domain.summary import compute_summary
from spendwise.store.queries import list_transactions
from spendwise.store.schema import database_exists, get_db_path

console = Console()


def render_category_line(
    line: CategoryLine,
    histogram: bool,
    max_amount: Money | None,
    bar_width: int,
    settings: Settings,
) -> None:
    """Render single category line.

    Args:
        line: CategoryLine with category total and share.
        histogram: Whether to show histogram bars.
        max_amount: Maximum amount for histogram scaling.
        bar_width: Width of histogram bar in characters.
        settings: Display settings.
    """
    amount_display = format_amount(line.amount, settings.currency, settings.conversion_rate)
    share = f"({line.percentage:.0f}%)"

    if histogram and max_amount:
        bar = "█" * calculate_histogram_bar_length(line.amount, max_amount, bar_width)
        console.print(f"  {line.category:20} {amount_display:>14} {share:>6} {bar}")
    else:
        console.print(f"  {line.category}: {amount_display} {share}")


def render_month_line(
    line: MonthLine,
    histogram: bool,
    max_amount: Money | None,
    bar_width: int,
    settings: Settings,
) -> None:
    """Render single month line."""
    amount_display = format_amount(line.amount, settings.currency, settings.conversion_rate)

    if histogram and max_amount:
        bar = "█" * calculate_histogram_bar_length(line.amount, max_amount, bar_width)
        console.print(f"  {month_label(line.month):20} {amount_display:>14} {bar}")
    else:
        console.print(f"  {month_label(line.month)}: {amount_display}")


def report_command(
    sort_by: str = "value",
    histogram: bool = True,
) -> None:
    """Show spending by category and by month."""
    db_path = get_db_path()
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'spendwise init' first.[/red]", style="bold")
        sys.exit(1)
    settings = load_settings()

    try:
        summary = compute_summary(list_transactions(db_path))

        if not summary.by_category:
            console.print("[dim]No expenses recorded yet[/dim]")
            return

        report = create_spending_report(summary, sort_by)

        console.print("[bold red]Spending by category:[/bold red]\n")
        max_amount = Money(max(line.amount for line in report.categories)) if histogram else None
        for line in report.categories:
            render_category_line(line, histogram, max_amount, 30, settings)

        console.print("\n[bold cyan]Spending by month:[/bold cyan]\n")
        max_amount = Money(max(line.amount for line in report.months)) if histogram else None
        for month_line in report.months:
            render_month_line(month_line, histogram, max_amount, 30, settings)

        total = format_amount(report.total, settings.currency, settings.conversion_rate)
        console.print(f"\n  [bold]Total expenses:[/bold] {total}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
