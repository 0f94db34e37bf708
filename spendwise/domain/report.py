"""Pure functions for report calculations.

Turns a Summary into rows ready for display:
- No I/O operations (no database, no console, no files)
- No side effects

All monetary amounts are in the base currency (Money type).
"""

from dataclasses import dataclass

from spendwise.domain.models import CategoryName, Money, Month
from spendwise.domain.summary import Summary


@dataclass(frozen=True)
class CategoryLine:
    """Immutable category report line."""

    category: CategoryName
    amount: Money
    percentage: float


@dataclass(frozen=True)
class MonthLine:
    """Immutable month report line."""

    month: Month
    amount: Money


@dataclass(frozen=True)
class SpendingReport:
    """Immutable spending report."""

    categories: list[CategoryLine]
    months: list[MonthLine]
    total: Money


def calculate_share(amount: Money, total: Money) -> float:
    """Calculate an amount's share of the total.

    Args:
        amount: Part amount.
        total: Total amount.

    Returns:
        Percentage (0-100). Zero when the total is not positive.
    """
    if total <= 0:
        return 0.0
    return (amount / total) * 100


def sort_categories(by_category: dict[CategoryName, Money], sort_by: str = "value") -> list[tuple[CategoryName, Money]]:
    """Sort categories by amount (largest first) or alphabetically.

    Args:
        by_category: Category totals.
        sort_by: Sort method - "value" or "alpha".

    Returns:
        Sorted list of (category, amount) tuples.
    """
    if sort_by == "alpha":
        return sorted(by_category.items(), key=lambda x: x[0].lower())
    return sorted(by_category.items(), key=lambda x: x[1], reverse=True)


def create_spending_report(summary: Summary, sort_by: str = "value") -> SpendingReport:
    """Create spending report from a summary.

    Args:
        summary: Current summary.
        sort_by: Category sort method - "value" or "alpha".

    Returns:
        SpendingReport with categories sorted and months in calendar order.
    """
    categories = [
        CategoryLine(category=cat, amount=amt, percentage=calculate_share(amt, summary.total))
        for cat, amt in sort_categories(summary.by_category, sort_by)
    ]
    months = [MonthLine(month=month, amount=summary.by_month[month]) for month in sorted(summary.by_month)]

    return SpendingReport(categories=categories, months=months, total=summary.total)


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
