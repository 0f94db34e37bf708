"""Pure functions for savings recommendations.

This module contains the functional core for insight generation:
- No I/O operations (no database, no console, no files)
- No side effects
- Rule tables are plain data so they can be tested and extended

All monetary amounts are in the base currency (Money type).
"""

from collections.abc import Sequence
from dataclasses import dataclass

from spendwise.domain.models import CategoryName, Money, Transaction
from spendwise.domain.patterns import SpendingPattern, analyze_spending_patterns
from spendwise.domain.summary import compute_summary

MATERIALITY_THRESHOLD = 20.0
MAX_INSIGHTS = 5
BASE_CONFIDENCE = 60
MAX_CONFIDENCE = 95

TREND_REDUCTION = 0.15
TREND_CONFIDENCE = 20
VARIANCE_RATIO = 0.5
VARIANCE_REDUCTION = 0.1
VARIANCE_CONFIDENCE = 15


@dataclass(frozen=True)
class CategoryRule:
    """Category-specific reduction fraction and advice."""

    reduction: float
    tips: tuple[str, ...]


@dataclass(frozen=True)
class SavingsInsight:
    """Immutable savings recommendation for one category."""

    category: CategoryName
    current_spending: Money
    suggested_budget: Money
    potential_savings: Money
    confidence: int
    tips: list[str]


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable output of one analysis run."""

    insights: list[SavingsInsight]
    total_potential_savings: Money


# Keys are lowercase; lookups are case-insensitive exact matches
CATEGORY_RULES: dict[str, CategoryRule] = {
    "food & dining": CategoryRule(
        reduction=0.2,
        tips=(
            "Try meal planning and cooking at home more often.",
            "Look for restaurant deals and happy hour specials.",
        ),
    ),
    "entertainment": CategoryRule(
        reduction=0.25,
        tips=(
            "Consider free or low-cost entertainment alternatives.",
            "Look for subscription services you might not be using.",
        ),
    ),
    "shopping": CategoryRule(
        reduction=0.3,
        tips=(
            "Implement a 24-hour wait rule before non-essential purchases.",
            "Compare prices across different retailers.",
        ),
    ),
    "transportation": CategoryRule(
        reduction=0.15,
        tips=(
            "Consider carpooling or public transportation options.",
            "Plan trips to reduce unnecessary fuel consumption.",
        ),
    ),
}

DEFAULT_RULE_REDUCTION = 0.1


def category_rule(category: CategoryName) -> CategoryRule:
    """Look up the rule for a category, falling back to the generic review rule.

    Args:
        category: Category name, any case.

    Returns:
        Matching CategoryRule, or the default rule naming the category.
    """
    rule = CATEGORY_RULES.get(category.lower())
    if rule is not None:
        return rule
    return CategoryRule(
        reduction=DEFAULT_RULE_REDUCTION,
        tips=(f"Review your {category} expenses for potential optimizations.",),
    )


def select_material_patterns(patterns: Sequence[SpendingPattern]) -> list[SpendingPattern]:
    """Keep the top spending categories above the materiality threshold.

    Args:
        patterns: Spending patterns for every observed category.

    Returns:
        At most MAX_INSIGHTS patterns sorted by avg_monthly descending.
    """
    material = [p for p in patterns if p.avg_monthly > MATERIALITY_THRESHOLD]
    material.sort(key=lambda p: p.avg_monthly, reverse=True)
    return material[:MAX_INSIGHTS]


def score_pattern(pattern: SpendingPattern) -> SavingsInsight:
    """Apply the scoring rules to one category.

    Several rules may fire for one category; their reductions add up.
    The suggested budget is not clamped and can go negative when the
    reductions exceed the spend.

    Args:
        pattern: Spending pattern of the category.

    Returns:
        SavingsInsight with reduction, confidence and tips.
    """
    current = pattern.avg_monthly
    reduction = 0.0
    confidence = BASE_CONFIDENCE
    tips: list[str] = []

    if pattern.trend == "increasing":
        reduction += current * TREND_REDUCTION
        confidence += TREND_CONFIDENCE
        tips.append(f"Your {pattern.category} spending is trending upward. Consider setting a monthly limit.")

    if pattern.variance > current * VARIANCE_RATIO:
        reduction += current * VARIANCE_REDUCTION
        confidence += VARIANCE_CONFIDENCE
        tips.append(f"High variance in {pattern.category} spending suggests opportunities for better budgeting.")

    rule = category_rule(pattern.category)
    reduction += current * rule.reduction
    tips.extend(rule.tips)

    return SavingsInsight(
        category=pattern.category,
        current_spending=current,
        suggested_budget=Money(current - reduction),
        potential_savings=Money(reduction),
        confidence=min(confidence, MAX_CONFIDENCE),
        tips=tips,
    )


def generate_savings_insights(patterns: Sequence[SpendingPattern]) -> list[SavingsInsight]:
    """Rank categories and score each one.

    Args:
        patterns: Spending patterns for every observed category.

    Returns:
        Insights ordered by current spending descending. Empty when no
        category clears the materiality threshold.
    """
    return [score_pattern(pattern) for pattern in select_material_patterns(patterns)]


def total_potential_savings(insights: Sequence[SavingsInsight]) -> Money:
    """Sum the potential savings across insights."""
    return Money(sum(insight.potential_savings for insight in insights))


def analyze(transactions: Sequence[Transaction]) -> AnalysisResult:
    """Run the full analysis on a snapshot of transactions.

    Args:
        transactions: Snapshot of all transactions.

    Returns:
        AnalysisResult. No transactions gives no insights and zero savings.
    """
    summary = compute_summary(transactions)
    patterns = analyze_spending_patterns(transactions, summary.by_category.keys())
    insights = generate_savings_insights(patterns)
    return AnalysisResult(insights=insights, total_potential_savings=total_potential_savings(insights))
