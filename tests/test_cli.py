"""End-to-end tests for the spendwise CLI against temporary XDG directories."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from spendwise.cli import app
from spendwise.store.queries import get_transaction, list_transactions
from spendwise.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


def init_demo() -> None:
    result = runner.invoke(app, ["init", "--demo"])
    assert result.exit_code == 0, result.output


class TestInit:
    """Tests for the init command."""

    def test_init_creates_database_and_config(self) -> None:
        """Should create both files and seed categories."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert get_db_path().exists()
        assert "Initialization complete" in result.output

    def test_init_refuses_to_overwrite(self) -> None:
        """Should fail without --force when files exist."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_reinitializes(self) -> None:
        """Should replace existing files with --force."""
        init_demo()

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0, result.output
        assert list_transactions(get_db_path()) == []


class TestTransactionCommands:
    """Tests for add, edit, delete and list."""

    def test_add_and_list(self) -> None:
        """Should store a normalised expense and list it."""
        init_demo()

        result = runner.invoke(app, ["add", "15/01/2024", "Sushi", "42.5", "--category", "Food & Dining"])

        assert result.exit_code == 0, result.output
        latest = list_transactions(get_db_path())[0]
        assert latest.date == "2024-01-15"
        assert latest.amount == 42.5

        listing = runner.invoke(app, ["list", "--all"])
        assert "Sushi" in listing.output

    def test_add_in_display_currency_stores_base_amount(self) -> None:
        """Should convert INR entry back to USD before storing."""
        init_demo()

        result = runner.invoke(app, ["add", "2024-01-15", "Chai", "166", "-c", "Food & Dining", "--currency", "INR"])

        assert result.exit_code == 0, result.output
        assert list_transactions(get_db_path())[0].amount == pytest.approx(2.0)

    def test_add_rejects_non_positive_amount(self) -> None:
        """Should refuse malformed input before it reaches the store."""
        init_demo()

        result = runner.invoke(app, ["add", "2024-01-15", "Refund", "0", "--category", "Other"])

        assert result.exit_code == 1
        assert "Amount must be positive" in result.output
        assert len(list_transactions(get_db_path())) == 8

    def test_add_rejects_unsupported_currency(self) -> None:
        """Should refuse an entry currency it cannot convert."""
        init_demo()

        result = runner.invoke(app, ["add", "2024-01-15", "Coffee", "83", "-c", "Food & Dining", "--currency", "EUR"])

        assert result.exit_code == 1
        assert "Unsupported currency 'EUR'" in result.output
        assert len(list_transactions(get_db_path())) == 8

    def test_edit_rejects_unsupported_currency(self) -> None:
        """Should leave the transaction alone for an unknown entry currency."""
        init_demo()

        result = runner.invoke(app, ["edit", "3", "--amount", "70", "--currency", "gbp"])

        assert result.exit_code == 1
        assert "Unsupported currency 'GBP'" in result.output
        txn = get_transaction("3", get_db_path())  # type: ignore[arg-type]
        assert txn is not None
        assert txn.amount == 65.0

    @pytest.mark.parametrize("amount", ["inf", "nan"])
    def test_add_rejects_non_finite_amount(self, amount: str) -> None:
        """Should keep infinite and NaN amounts out of the store."""
        init_demo()

        result = runner.invoke(app, ["add", "2024-01-15", "Coffee", amount, "-c", "Food & Dining"])

        assert result.exit_code == 1
        assert "Amount must be a finite number" in result.output
        assert len(list_transactions(get_db_path())) == 8

    def test_add_warns_on_unlisted_category(self) -> None:
        """Should keep the category but point out it is not in the list."""
        init_demo()

        result = runner.invoke(app, ["add", "2024-01-15", "Kibble", "30", "--category", "Pets"])

        assert result.exit_code == 0, result.output
        assert "not in your category list" in result.output
        assert list_transactions(get_db_path())[0].category == "Pets"

    def test_edit_replaces_fields(self) -> None:
        """Should change only the given fields."""
        init_demo()

        result = runner.invoke(app, ["edit", "3", "--amount", "70"])

        assert result.exit_code == 0, result.output
        txn = get_transaction("3", get_db_path())  # type: ignore[arg-type]
        assert txn is not None
        assert txn.amount == 70.0
        assert txn.description == "Gas refill"

    def test_list_search_by_description(self) -> None:
        """Should only list expenses whose description contains the text."""
        init_demo()

        result = runner.invoke(app, ["list", "--search", "BILL"])

        assert result.exit_code == 0, result.output
        assert "Electricity bill" in result.output
        assert "Movie ticket" not in result.output

    def test_delete_unknown_id(self) -> None:
        """Should report a missing transaction."""
        init_demo()

        result = runner.invoke(app, ["delete", "does-not-exist"])

        assert result.exit_code == 1
        assert "Transaction not found" in result.output

    def test_delete(self) -> None:
        """Should remove the transaction."""
        init_demo()

        result = runner.invoke(app, ["delete", "7"])

        assert result.exit_code == 0, result.output
        assert len(list_transactions(get_db_path())) == 7


class TestMissingDatabase:
    """Tests for commands run before init."""

    @pytest.mark.parametrize(
        "args",
        [
            ["list"],
            ["report"],
            ["analyze", "--delay", "0"],
            ["add", "2024-01-15", "Coffee", "3", "-c", "Food & Dining"],
        ],
    )
    def test_points_to_init(self, args: list[str]) -> None:
        """Should ask for init instead of failing with a database error."""
        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "Run 'spendwise init' first" in result.output
        assert "Database error" not in result.output


class TestCategoriesCommand:
    """Tests for the categories command."""

    def test_add_duplicate_category(self) -> None:
        """Should reject a case-insensitive duplicate."""
        init_demo()

        result = runner.invoke(app, ["categories", "--add", "shopping"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_category(self) -> None:
        """Should add a new category."""
        init_demo()

        result = runner.invoke(app, ["categories", "--add", "Pets"])

        assert result.exit_code == 0, result.output
        assert "Pets" in result.output


class TestReportAndAnalyze:
    """Tests for report and analyze."""

    def test_report(self) -> None:
        """Should show totals by category and month."""
        init_demo()

        result = runner.invoke(app, ["report", "--no-histogram"])

        assert result.exit_code == 0, result.output
        assert "Healthcare" in result.output
        assert "June 2023" in result.output
        assert "627.66" in result.output

    def test_analyze_without_data(self) -> None:
        """Should report that there is nothing to analyze."""
        runner.invoke(app, ["init"])

        result = runner.invoke(app, ["analyze", "--delay", "0"])

        assert result.exit_code == 0, result.output
        assert "No categories" in result.output

    def test_analyze_demo_data(self) -> None:
        """Should print recommendations and the total."""
        init_demo()

        result = runner.invoke(app, ["analyze", "--delay", "0"])

        assert result.exit_code == 0, result.output
        assert "Total potential monthly savings" in result.output
        assert "Healthcare" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_set_currency(self) -> None:
        """Should persist a valid setting."""
        init_demo()

        result = runner.invoke(app, ["config", "currency", "inr"])

        assert result.exit_code == 0, result.output
        assert "currency: INR" in result.output

    def test_reject_unknown_key(self) -> None:
        """Should fail for unknown settings."""
        result = runner.invoke(app, ["config", "colour", "blue"])

        assert result.exit_code == 1
        assert "Unknown setting" in result.output
