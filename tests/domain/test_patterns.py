"""Tests for spendwise.domain.patterns pure functions."""

import pytest

from spendwise.domain.models import CategoryName, Description, Money, Month, Transaction, TransactionId
from spendwise.domain.patterns import (
    analyze_spending_patterns,
    build_month_category_matrix,
    category_series,
    classify_trend,
    mean,
    ordered_months,
    population_variance,
)


def txn(amount: float, category: str, date: str) -> Transaction:
    return Transaction(
        id=TransactionId(f"{category}-{date}-{amount}"),
        amount=Money(amount),
        category=CategoryName(category),
        date=date,
        description=Description("Expense"),
    )


class TestMatrix:
    """Tests for build_month_category_matrix and ordered_months."""

    def test_sums_per_month_and_category(self) -> None:
        """Should add amounts that share a month and category."""
        matrix = build_month_category_matrix(
            [
                txn(10.0, "Food", "2024-01-02"),
                txn(5.0, "Food", "2024-01-20"),
                txn(7.0, "Travel", "2024-01-05"),
            ]
        )

        assert matrix == {Month("2024-01"): {CategoryName("Food"): 15.0, CategoryName("Travel"): 7.0}}

    def test_months_sorted_by_calendar_not_insertion(self) -> None:
        """Should order months ascending whatever the store order."""
        matrix = build_month_category_matrix(
            [
                txn(1.0, "Food", "2024-03-01"),
                txn(1.0, "Food", "2023-12-01"),
                txn(1.0, "Food", "2024-01-01"),
            ]
        )

        assert ordered_months(matrix) == ["2023-12", "2024-01", "2024-03"]

    def test_series_fills_missing_months_with_zero(self) -> None:
        """Should have one point per month, zero where the category is absent."""
        matrix = build_month_category_matrix(
            [
                txn(10.0, "Food", "2024-01-01"),
                txn(20.0, "Travel", "2024-02-01"),
                txn(30.0, "Food", "2024-03-01"),
            ]
        )
        months = ordered_months(matrix)

        assert category_series(matrix, months, CategoryName("Food")) == [10.0, 0.0, 30.0]
        assert category_series(matrix, months, CategoryName("Travel")) == [0.0, 20.0, 0.0]


class TestStatistics:
    """Tests for mean and population_variance."""

    def test_mean(self) -> None:
        """Should compute the arithmetic mean."""
        assert mean([100.0, 50.0]) == 75.0

    def test_mean_of_empty_series_fails_loudly(self) -> None:
        """Should raise rather than produce NaN."""
        with pytest.raises(ValueError):
            mean([])

    def test_population_variance_divides_by_n(self) -> None:
        """Should divide by the series length, not length - 1."""
        assert population_variance([100.0, 50.0], 75.0) == 625.0

    def test_single_point_has_zero_variance(self) -> None:
        """Should be zero for a one-point series."""
        assert population_variance([30.0], 30.0) == 0.0


class TestClassifyTrend:
    """Tests for classify_trend."""

    def test_fewer_than_two_points_is_stable(self) -> None:
        """Should report stable for a single month."""
        assert classify_trend([500.0]) == "stable"

    def test_decreasing(self) -> None:
        """Should detect a drop larger than 10% of the first half."""
        assert classify_trend([100.0, 50.0]) == "decreasing"

    def test_increasing(self) -> None:
        """Should detect a rise larger than 10% of the first half."""
        assert classify_trend([50.0, 100.0]) == "increasing"

    def test_small_change_is_stable(self) -> None:
        """Should treat a change under 10% as stable."""
        assert classify_trend([100.0, 105.0]) == "stable"

    def test_odd_length_extra_point_in_second_half(self) -> None:
        """Should put the middle point in the second half."""
        # first half [100], second half [100, 40] -> mean 70
        assert classify_trend([100.0, 100.0, 40.0]) == "decreasing"

    def test_rise_from_zero_is_increasing(self) -> None:
        """Should report increasing when the first half had no spend."""
        assert classify_trend([0.0, 0.0, 30.0]) == "increasing"

    def test_all_zero_first_half_and_flat_is_decreasing_not_stable(self) -> None:
        """Should compare strictly against 10% of the first-half mean."""
        # diff 0 is not < 0, and not > 0
        assert classify_trend([0.0, 0.0]) == "decreasing"


class TestAnalyzeSpendingPatterns:
    """Tests for analyze_spending_patterns."""

    def test_two_month_decreasing_category(self) -> None:
        """Should give avg 75, variance 625 and a decreasing trend."""
        transactions = [
            txn(100.0, "Food & Dining", "2024-01-15"),
            txn(50.0, "Food & Dining", "2024-02-10"),
        ]

        [pattern] = analyze_spending_patterns(transactions, [CategoryName("Food & Dining")])

        assert pattern.category == "Food & Dining"
        assert pattern.avg_monthly == 75.0
        assert pattern.variance == 625.0
        assert pattern.trend == "decreasing"

    def test_averages_over_all_months_in_data(self) -> None:
        """Should count months where the category had no spend."""
        transactions = [
            txn(90.0, "Travel", "2024-01-10"),
            txn(10.0, "Food", "2024-02-10"),
            txn(10.0, "Food", "2024-03-10"),
        ]

        patterns = analyze_spending_patterns(transactions, [CategoryName("Travel"), CategoryName("Food")])
        by_category = {p.category: p for p in patterns}

        assert by_category[CategoryName("Travel")].avg_monthly == pytest.approx(30.0)
        assert by_category[CategoryName("Food")].avg_monthly == pytest.approx(20.0 / 3)

    def test_single_month_categories_are_stable(self) -> None:
        """Should report stable for every category when only one month exists."""
        transactions = [
            txn(400.0, "Rent", "2024-05-01"),
            txn(25.0, "Food", "2024-05-12"),
        ]

        patterns = analyze_spending_patterns(transactions, [CategoryName("Rent"), CategoryName("Food")])

        assert all(p.trend == "stable" for p in patterns)
        assert all(p.variance == 0.0 for p in patterns)

    def test_store_order_does_not_matter(self) -> None:
        """Should give the same patterns for shuffled input."""
        transactions = [
            txn(10.0, "Food", "2024-01-01"),
            txn(80.0, "Food", "2024-04-01"),
            txn(30.0, "Food", "2024-02-01"),
        ]

        forward = analyze_spending_patterns(transactions, [CategoryName("Food")])
        backward = analyze_spending_patterns(list(reversed(transactions)), [CategoryName("Food")])

        assert forward == backward
        assert forward[0].trend == "increasing"
