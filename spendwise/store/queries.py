"""Database query functions."""

import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from spendwise.domain.models import CategoryName, Description, Money, Transaction, TransactionId
from spendwise.domain.transactions import DEFAULT_CATEGORIES
from spendwise.logging_setup import get_logger
from spendwise.store.schema import get_db_path

logger = get_logger(__name__)

DEMO_TRANSACTIONS: tuple[tuple[str, float, str, str, str], ...] = (
    ("1", 45.99, "Food & Dining", "2023-06-15", "Grocery shopping"),
    ("2", 12.50, "Entertainment", "2023-06-17", "Movie ticket"),
    ("3", 65.00, "Transportation", "2023-06-12", "Gas refill"),
    ("4", 129.99, "Shopping", "2023-06-10", "New shoes"),
    ("5", 35.20, "Food & Dining", "2023-05-28", "Restaurant dinner"),
    ("6", 89.99, "Utilities", "2023-05-25", "Electricity bill"),
    ("7", 199.00, "Healthcare", "2023-06-05", "Doctor appointment"),
    ("8", 49.99, "Entertainment", "2023-05-20", "Video game"),
)


class TransactionNotFoundError(LookupError):
    """Raised when a transaction id does not exist in the store."""

    def __init__(self, txn_id: str) -> None:
        super().__init__(f"Transaction not found: {txn_id}")
        self.txn_id = txn_id


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_transaction(row: sqlite3.Row | dict[str, Any]) -> Transaction:
    return Transaction(
        id=TransactionId(row["id"]),
        amount=Money(row["amount"]),
        category=CategoryName(row["category"]),
        date=row["date"],
        description=Description(row["description"]),
    )


def insert_transaction(txn: Transaction, db_path: Path | None = None) -> None:
    """Insert a transaction.

    Args:
        txn: Validated transaction.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails (including a reused id).
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO transactions (id, date, description, amount, category) VALUES (?, ?, ?, ?, ?)",
                (txn.id, txn.date, txn.description, txn.amount, txn.category),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
    logger.debug("Inserted transaction %s", txn.id)


def update_transaction(txn: Transaction, db_path: Path | None = None) -> None:
    """Replace every field of an existing transaction, keeping its id.

    Args:
        txn: Transaction carrying the id to replace and the new values.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        TransactionNotFoundError: If the id does not exist.
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "UPDATE transactions SET date = ?, description = ?, amount = ?, category = ? WHERE id = ?",
                (txn.date, txn.description, txn.amount, txn.category, txn.id),
            )
            if cursor.rowcount == 0:
                raise TransactionNotFoundError(txn.id)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
    logger.debug("Updated transaction %s", txn.id)


def delete_transaction(txn_id: TransactionId, db_path: Path | None = None) -> None:
    """Delete a transaction.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        TransactionNotFoundError: If the id does not exist.
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (txn_id,))
            if cursor.rowcount == 0:
                raise TransactionNotFoundError(txn_id)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
    logger.debug("Deleted transaction %s", txn_id)


def get_transaction(txn_id: TransactionId, db_path: Path | None = None) -> Transaction | None:
    """Get a transaction by id.

    Args:
        txn_id: Transaction ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Transaction, or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, date, description, amount, category FROM transactions WHERE id = ?",
            (txn_id,),
        )
        row = cursor.fetchone()
        return _row_to_transaction(row) if row else None


def list_transactions(db_path: Path | None = None, limit: int | None = None) -> list[Transaction]:
    """Get all transactions, most recently added first.

    Args:
        db_path: Path to the database file. If None, uses default location.
        limit: Maximum number of transactions to return. If None, returns all.

    Returns:
        List of transactions.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT id, date, description, amount, category FROM transactions ORDER BY seq DESC"
        params: list[Any] = []

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        return [_row_to_transaction(row) for row in cursor.fetchall()]


def find_transactions_by_prefix(prefix: str, db_path: Path | None = None) -> list[Transaction]:
    """Find transactions whose id starts with the given prefix.

    Lets users type the short id shown by the list command.

    Args:
        prefix: Leading characters of the id.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Matching transactions.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, date, description, amount, category FROM transactions WHERE id LIKE ? ORDER BY seq DESC",
            (prefix.replace("%", "").replace("_", "") + "%",),
        )
        return [_row_to_transaction(row) for row in cursor.fetchall()]


def get_categories(db_path: Path | None = None) -> list[CategoryName]:
    """Get all categories.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of category names sorted alphabetically.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT name FROM categories ORDER BY name COLLATE NOCASE")
        return [CategoryName(row[0]) for row in cursor.fetchall()]


def add_category(name: CategoryName, db_path: Path | None = None) -> bool:
    """Add a category unless it already exists (compared case-insensitively).

    Args:
        name: Category name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if the category was added, False if it already existed.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("INSERT OR IGNORE INTO categories (name) VALUES (?)", (name,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def seed_default_categories(db_path: Path | None = None) -> int:
    """Add the default category set.

    Returns:
        Number of categories added.
    """
    return sum(add_category(CategoryName(name), db_path) for name in DEFAULT_CATEGORIES)


def seed_demo_transactions(db_path: Path | None = None, rows: Iterable[tuple] = DEMO_TRANSACTIONS) -> int:
    """Load the demo data set into an empty store.

    Args:
        db_path: Path to the database file. If None, uses default location.
        rows: Tuples of (id, amount, category, date, description).

    Returns:
        Number of transactions inserted; 0 if the store already had data.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if list_transactions(db_path, limit=1):
        return 0

    count = 0
    for txn_id, amount, category, date, description in rows:
        insert_transaction(
            Transaction(
                id=TransactionId(txn_id),
                amount=Money(amount),
                category=CategoryName(category),
                date=date,
                description=Description(description),
            ),
            db_path,
        )
        count += 1

    logger.info("Seeded %d demo transactions", count)
    return count
