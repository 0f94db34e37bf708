"""Pure functions for spending pattern analysis.

Buckets transactions into a month x category matrix and derives, for every
category, the mean monthly spend, its population variance and a coarse trend.

The trend test compares the mean of the first half of the monthly series with
the mean of the second half. It is intentionally not a regression: the savings
scoring thresholds are calibrated against this scale.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from spendwise.domain.models import CategoryName, Money, Month, Transaction, Trend
from spendwise.domain.summary import month_of

TREND_TOLERANCE = 0.1


@dataclass(frozen=True)
class SpendingPattern:
    """Immutable spending pattern for one category."""

    category: CategoryName
    avg_monthly: Money
    variance: float
    trend: Trend


MonthCategoryMatrix = dict[Month, dict[CategoryName, Money]]


def build_month_category_matrix(transactions: Iterable[Transaction]) -> MonthCategoryMatrix:
    """Sum transaction amounts per (month, category) pair.

    Args:
        transactions: Snapshot of all transactions.

    Returns:
        Nested mapping month -> category -> amount.
    """
    matrix: MonthCategoryMatrix = {}
    for txn in transactions:
        row = matrix.setdefault(month_of(txn.date), {})
        row[txn.category] = Money(row.get(txn.category, 0.0) + txn.amount)
    return matrix


def ordered_months(matrix: MonthCategoryMatrix) -> list[Month]:
    """Return the distinct months in calendar order.

    YYYY-MM strings sort lexically in calendar order, so store order never matters.
    """
    return sorted(matrix.keys())


def category_series(matrix: MonthCategoryMatrix, months: Sequence[Month], category: CategoryName) -> list[float]:
    """Build the per-month spend series for a category.

    Args:
        matrix: Month x category amounts.
        months: Ordered months to cover.
        category: Category to extract.

    Returns:
        One amount per month, 0.0 for months without activity in the category.
    """
    return [matrix.get(month, {}).get(category, 0.0) for month in months]


def mean(series: Sequence[float]) -> float:
    """Arithmetic mean.

    Raises:
        ValueError: If the series is empty.
    """
    if not series:
        raise ValueError("cannot average an empty series")
    return sum(series) / len(series)


def population_variance(series: Sequence[float], average: float) -> float:
    """Mean of squared deviations from the average (divides by n, not n - 1).

    Raises:
        ValueError: If the series is empty.
    """
    return mean([(value - average) ** 2 for value in series])


def classify_trend(series: Sequence[float]) -> Trend:
    """Classify a monthly series as increasing, decreasing or stable.

    The series is split in two halves; with an odd length the extra point
    belongs to the second half. A change smaller than 10% of the first-half
    mean is stable.

    Args:
        series: Monthly amounts in calendar order.

    Returns:
        Trend label. Fewer than two points is always "stable".
    """
    if len(series) < 2:
        return "stable"

    midpoint = len(series) // 2
    first_avg = mean(series[:midpoint])
    second_avg = mean(series[midpoint:])

    diff = second_avg - first_avg
    if abs(diff) < first_avg * TREND_TOLERANCE:
        return "stable"
    return "increasing" if diff > 0 else "decreasing"


def analyze_spending_patterns(
    transactions: Sequence[Transaction],
    categories: Iterable[CategoryName],
) -> list[SpendingPattern]:
    """Compute one spending pattern per category.

    Args:
        transactions: Snapshot of all transactions.
        categories: Categories observed in the summary (keys of by_category).

    Returns:
        List of SpendingPattern in the order categories were given.
    """
    matrix = build_month_category_matrix(transactions)
    months = ordered_months(matrix)

    patterns: list[SpendingPattern] = []
    for category in categories:
        series = category_series(matrix, months, category)
        avg_monthly = mean(series)
        patterns.append(
            SpendingPattern(
                category=category,
                avg_monthly=Money(avg_monthly),
                variance=population_variance(series, avg_monthly),
                trend=classify_trend(series),
            )
        )

    return patterns
