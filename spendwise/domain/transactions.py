"""Pure functions for transaction creation, editing and category handling.

This module contains the functional core for the create/edit boundary:
- No I/O operations (no database, no console, no files)
- No side effects apart from generating new ids
- Malformed input is rejected here; the analytics never re-validate

All monetary amounts are in the base currency (Money type).
"""

import math
import uuid
from collections.abc import Iterable
from datetime import datetime

from spendwise.domain.models import CategoryName, Description, Money, Transaction, TransactionId

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Food & Dining",
    "Shopping",
    "Housing",
    "Transportation",
    "Entertainment",
    "Healthcare",
    "Personal Care",
    "Education",
    "Travel",
    "Utilities",
    "Other",
)


def validate_transaction_input(
    amount: float | None,
    category: str | None,
    date: str | None,
    description: str | None,
) -> tuple[bool, str | None]:
    """Validate raw transaction fields.

    Args:
        amount: Amount in the base currency.
        category: Category name.
        date: Date in YYYY-MM-DD format.
        description: Transaction description.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if amount is None or not category or not date or not description:
        return False, "Amount, category, date and description are all required"

    if not category.strip() or not description.strip():
        return False, "Category and description must not be blank"

    if not math.isfinite(amount):
        return False, "Amount must be a finite number"

    if amount <= 0:
        return False, "Amount must be positive"

    try:
        datetime.strptime(date, "%Y-%m-%d")
    except ValueError:
        return False, f"Invalid date '{date}'. Expected YYYY-MM-DD"

    return True, None


def new_transaction_id() -> TransactionId:
    """Generate a fresh transaction id."""
    return TransactionId(str(uuid.uuid4()))


def create_transaction(
    amount: float,
    category: str,
    date: str,
    description: str,
    txn_id: TransactionId | None = None,
) -> Transaction:
    """Build a validated transaction.

    Args:
        amount: Amount in the base currency.
        category: Category name.
        date: Date in YYYY-MM-DD format.
        description: Transaction description.
        txn_id: Id to use. A new one is generated if None.

    Returns:
        New Transaction.

    Raises:
        ValueError: If the fields are malformed.
    """
    is_valid, error = validate_transaction_input(amount, category, date, description)
    if not is_valid:
        raise ValueError(error)

    return Transaction(
        id=txn_id or new_transaction_id(),
        amount=Money(float(amount)),
        category=CategoryName(category.strip()),
        date=date,
        description=Description(description.strip()),
    )


def normalize_category_name(name: str) -> CategoryName:
    """Normalize a category name (surrounding whitespace removed)."""
    return CategoryName(name.strip())


def category_exists(name: str, categories: Iterable[str]) -> bool:
    """Check whether a category is already in the set, ignoring case.

    Args:
        name: Candidate category name.
        categories: Existing category names.

    Returns:
        True if a case-insensitive match exists.
    """
    wanted = normalize_category_name(name).lower()
    return any(existing.lower() == wanted for existing in categories)


def validate_new_category(name: str, categories: Iterable[str]) -> tuple[bool, str | None]:
    """Validate a category before adding it to the set.

    Args:
        name: Candidate category name.
        categories: Existing category names.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not name or not name.strip():
        return False, "Category name must not be blank"

    if category_exists(name, categories):
        return False, f"Category '{normalize_category_name(name)}' already exists"

    return True, None


def filter_transactions(
    transactions: Iterable[Transaction],
    category: str | None = None,
    search: str | None = None,
) -> list[Transaction]:
    """Keep transactions matching a category and a description search.

    Both matches ignore case; a None filter matches everything.

    Args:
        transactions: Transactions to filter, order preserved.
        category: Exact category name.
        search: Text the description must contain.

    Returns:
        Matching transactions.
    """
    wanted_category = category.strip().lower() if category else None
    needle = search.strip().lower() if search else None
    return [
        txn
        for txn in transactions
        if (wanted_category is None or txn.category.lower() == wanted_category)
        and (needle is None or needle in txn.description.lower())
    ]
