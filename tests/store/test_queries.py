"""Tests for spendwise.store against a temporary SQLite file."""

import sqlite3
from pathlib import Path

import pytest

from spendwise.domain.models import CategoryName, TransactionId
from spendwise.domain.summary import compute_summary
from spendwise.domain.transactions import DEFAULT_CATEGORIES, create_transaction
from spendwise.store import (
    TransactionNotFoundError,
    add_category,
    database_exists,
    delete_transaction,
    find_transactions_by_prefix,
    get_categories,
    get_transaction,
    init_database,
    insert_transaction,
    list_transactions,
    seed_default_categories,
    seed_demo_transactions,
    update_transaction,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "spendwise.db"
    init_database(path)
    return path


class TestSchema:
    """Tests for init_database."""

    def test_creates_database(self, tmp_path: Path) -> None:
        """Should create the file and parent directories."""
        path = tmp_path / "nested" / "spendwise.db"
        assert not database_exists(path)

        init_database(path)

        assert database_exists(path)

    def test_is_idempotent(self, db_path: Path) -> None:
        """Should be safe to run again on an existing database."""
        insert_transaction(create_transaction(5.0, "Other", "2024-01-01", "Gum"), db_path)

        init_database(db_path)

        assert len(list_transactions(db_path)) == 1

    def test_rejects_non_positive_amounts(self, db_path: Path) -> None:
        """Should enforce positive amounts at the storage level too."""
        conn = sqlite3.connect(db_path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO transactions (id, date, description, amount, category) VALUES ('x', '2024-01-01', 'a', 0, 'b')"
                )
        finally:
            conn.close()


class TestTransactions:
    """Tests for transaction queries."""

    def test_list_newest_added_first(self, db_path: Path) -> None:
        """Should return transactions in reverse insertion order, not date order."""
        older_date = create_transaction(10.0, "Shopping", "2024-03-01", "First added")
        newer_date = create_transaction(20.0, "Shopping", "2023-01-01", "Second added")
        insert_transaction(older_date, db_path)
        insert_transaction(newer_date, db_path)

        assert [t.description for t in list_transactions(db_path)] == ["Second added", "First added"]
        assert len(list_transactions(db_path, limit=1)) == 1

    def test_round_trip_fields(self, db_path: Path) -> None:
        """Should store and load every field."""
        txn = create_transaction(12.34, "Food & Dining", "2024-02-29", "Lunch")
        insert_transaction(txn, db_path)

        assert get_transaction(txn.id, db_path) == txn

    def test_duplicate_id_rejected(self, db_path: Path) -> None:
        """Should never reuse an id."""
        txn = create_transaction(1.0, "Other", "2024-01-01", "A", txn_id=TransactionId("same"))
        insert_transaction(txn, db_path)

        with pytest.raises(sqlite3.IntegrityError):
            insert_transaction(txn, db_path)

    def test_update_replaces_wholesale(self, db_path: Path) -> None:
        """Should replace all fields and keep the id."""
        txn = create_transaction(10.0, "Shopping", "2024-01-01", "Socks")
        insert_transaction(txn, db_path)

        edited = create_transaction(15.0, "Not A Listed Category", "2024-01-02", "Wool socks", txn_id=txn.id)
        update_transaction(edited, db_path)

        assert get_transaction(txn.id, db_path) == edited

    def test_update_unknown_id(self, db_path: Path) -> None:
        """Should raise TransactionNotFoundError."""
        with pytest.raises(TransactionNotFoundError):
            update_transaction(create_transaction(1.0, "Other", "2024-01-01", "A"), db_path)

    def test_delete(self, db_path: Path) -> None:
        """Should remove the transaction and fail on a second delete."""
        txn = create_transaction(10.0, "Shopping", "2024-01-01", "Socks")
        insert_transaction(txn, db_path)

        delete_transaction(txn.id, db_path)

        assert get_transaction(txn.id, db_path) is None
        with pytest.raises(TransactionNotFoundError):
            delete_transaction(txn.id, db_path)

    def test_find_by_prefix(self, db_path: Path) -> None:
        """Should match ids by leading characters."""
        a = create_transaction(1.0, "Other", "2024-01-01", "A", txn_id=TransactionId("abc-1"))
        b = create_transaction(1.0, "Other", "2024-01-01", "B", txn_id=TransactionId("abd-2"))
        insert_transaction(a, db_path)
        insert_transaction(b, db_path)

        assert [t.id for t in find_transactions_by_prefix("abc", db_path)] == ["abc-1"]
        assert len(find_transactions_by_prefix("ab", db_path)) == 2
        assert find_transactions_by_prefix("%", db_path) == [b, a]

    def test_summary_recomputed_after_each_mutation(self, db_path: Path) -> None:
        """Summary of a fresh snapshot should reflect add, edit and delete."""
        txn = create_transaction(10.0, "Shopping", "2024-01-01", "Socks")
        insert_transaction(txn, db_path)
        assert compute_summary(list_transactions(db_path)).total == pytest.approx(10.0)

        update_transaction(create_transaction(25.0, "Shopping", "2024-01-01", "Socks", txn_id=txn.id), db_path)
        assert compute_summary(list_transactions(db_path)).total == pytest.approx(25.0)

        delete_transaction(txn.id, db_path)
        assert compute_summary(list_transactions(db_path)).total == 0


class TestCategories:
    """Tests for category queries."""

    def test_add_dedupes_case_insensitively(self, db_path: Path) -> None:
        """Should keep one entry per name regardless of case."""
        assert add_category(CategoryName("Pets"), db_path) is True
        assert add_category(CategoryName("PETS"), db_path) is False

        assert get_categories(db_path) == ["Pets"]

    def test_seed_default_categories(self, db_path: Path) -> None:
        """Should add every default category once."""
        assert seed_default_categories(db_path) == len(DEFAULT_CATEGORIES)
        assert seed_default_categories(db_path) == 0
        assert sorted(get_categories(db_path)) == sorted(DEFAULT_CATEGORIES)


class TestSeedDemoTransactions:
    """Tests for seed_demo_transactions."""

    def test_seeds_empty_store_only(self, db_path: Path) -> None:
        """Should load demo data once and never over existing data."""
        assert seed_demo_transactions(db_path) == 8
        assert seed_demo_transactions(db_path) == 0

        summary = compute_summary(list_transactions(db_path))
        assert summary.total == pytest.approx(627.66)
        assert set(summary.by_month) == {"2023-05", "2023-06"}
