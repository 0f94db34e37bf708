"""Domain type definitions for spendwise.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in the base currency (USD)
- Month: Month in YYYY-MM format
- CategoryName: Name of a spending category
- Description: Transaction description text
- TransactionId: Opaque transaction identifier
"""

from dataclasses import dataclass
from typing import Literal, NewType

# Money amounts are always stored in the base currency; display conversion happens in the shell
Money = NewType("Money", float)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

# Category name for spending categories
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)

# UUID4 string, assigned once at creation
TransactionId = NewType("TransactionId", str)

Trend = Literal["increasing", "decreasing", "stable"]


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction. Edits replace the whole record."""

    id: TransactionId
    amount: Money
    category: CategoryName
    date: str  # YYYY-MM-DD
    description: Description
