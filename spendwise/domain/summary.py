"""Pure functions for expense aggregation.

This module contains the functional core for summaries:
- No I/O operations (no database, no console, no files)
- No side effects
- A single O(n) pass over the transactions

All monetary amounts are in the base currency (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from spendwise.domain.models import CategoryName, Money, Month, Transaction


@dataclass(frozen=True)
class Summary:
    """Immutable spending summary for a snapshot of transactions."""

    total: Money = Money(0.0)
    by_category: dict[CategoryName, Money] = field(default_factory=dict)
    by_month: dict[Month, Money] = field(default_factory=dict)


def month_of(date: str) -> Month:
    """Extract the month bucket from a transaction date.

    Args:
        date: Date in YYYY-MM-DD format.

    Returns:
        Month in YYYY-MM format.
    """
    return Month(date[:7])


def compute_summary(transactions: Iterable[Transaction]) -> Summary:
    """Compute totals overall, per category and per month.

    Called again after every store mutation; the result always replaces the
    previous summary.

    Args:
        transactions: Snapshot of all transactions.

    Returns:
        Summary. Empty input gives a zero total and empty mappings.
    """
    total = 0.0
    by_category: dict[CategoryName, Money] = {}
    by_month: dict[Month, Money] = {}

    for txn in transactions:
        total += txn.amount
        by_category[txn.category] = Money(by_category.get(txn.category, 0.0) + txn.amount)
        month = month_of(txn.date)
        by_month[month] = Money(by_month.get(month, 0.0) + txn.amount)

    return Summary(total=Money(total), by_category=by_category, by_month=by_month)


def top_category(summary: Summary) -> tuple[CategoryName, Money] | None:
    """Return the category with the highest total, or None when there is no spending."""
    if not summary.by_category:
        return None
    return max(summary.by_category.items(), key=lambda x: x[1])
