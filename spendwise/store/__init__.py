"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from spendwise.store.queries import (
    TransactionNotFoundError,
    add_category,
    delete_transaction,
    find_transactions_by_prefix,
    get_categories,
    get_transaction,
    insert_transaction,
    list_transactions,
    seed_default_categories,
    seed_demo_transactions,
    update_transaction,
)
from spendwise.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "TransactionNotFoundError",
    "add_category",
    "delete_transaction",
    "find_transactions_by_prefix",
    "get_categories",
    "get_transaction",
    "insert_transaction",
    "list_transactions",
    "seed_default_categories",
    "seed_demo_transactions",
    "update_transaction",
]
