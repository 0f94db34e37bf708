"""Domain models and types for spendwise.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Analytics separated from storage and presentation
"""

from spendwise.domain.insights import AnalysisResult, SavingsInsight, analyze
from spendwise.domain.models import CategoryName, Description, Money, Month, Transaction, TransactionId
from spendwise.domain.summary import Summary, compute_summary

__all__ = [
    "AnalysisResult",
    "CategoryName",
    "Description",
    "Money",
    "Month",
    "SavingsInsight",
    "Summary",
    "Transaction",
    "TransactionId",
    "analyze",
    "compute_summary",
]
