import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from errors import NotFoundError
from models.transaction import Transaction
from tests.helpers import TEST_USER, make_transaction

OTHER_USER = "bruno@example.com"


class TestTransactionService:
    """Tests for TransactionService."""

    def test_create_transaction(self, services):
        """Test creating a single transaction keeps its ID and values."""
        transaction = Transaction.new(
            type="expense",
            description="Groceries",
            amount=Decimal("87.35"),
            transaction_date=date(2025, 3, 6),
            category_id="food",
        )

        created = services.transactions.create(TEST_USER, transaction)
        found = services.transactions.find(TEST_USER, transaction.id)

        assert created is transaction
        assert found is not None
        assert found.id == transaction.id
        assert found.type == "expense"
        assert found.description == "Groceries"
        assert found.amount == Decimal("87.35")
        assert found.transaction_date == date(2025, 3, 6)
        assert found.category_id == "food"
        assert found.created_at == transaction.created_at

    def test_create_duplicate_id_raises_error(self, services):
        """Test that reusing a transaction ID surfaces the primary key error."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 10, date(2025, 1, 1), id="dup")
        )

        with pytest.raises(sqlite3.IntegrityError):
            services.transactions.create(
                TEST_USER, make_transaction("income", 20, date(2025, 1, 2), id="dup")
            )

    def test_same_id_for_different_users(self, services):
        """Test that transaction IDs only need to be unique per user."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 10, date(2025, 1, 1), "Mine", id="shared")
        )
        services.transactions.create(
            OTHER_USER, make_transaction("income", 20, date(2025, 1, 1), "Theirs", id="shared")
        )
        services.transactions.soft_delete(OTHER_USER, "shared")

        assert services.transactions.find(TEST_USER, "shared").description == "Mine"
        assert services.transactions.find(OTHER_USER, "shared") is None

    def test_amount_keeps_decimal_precision(self, services):
        """Test that amounts round-trip without float rounding."""
        services.transactions.create(
            TEST_USER, make_transaction("expense", "0.10", date(2025, 1, 1), id="a")
        )

        assert services.transactions.find(TEST_USER, "a").amount == Decimal("0.10")

    def test_list_orders_by_date_then_creation(self, services):
        """Test listing is newest date first, latest created first within a date."""
        for t in (
            make_transaction("income", 1, date(2025, 1, 1), id="old"),
            make_transaction("income", 2, date(2025, 2, 1), id="feb-first"),
            make_transaction("income", 3, date(2025, 2, 1), id="feb-second"),
        ):
            services.transactions.create(TEST_USER, t)

        ids = [t.id for t in services.transactions.list(TEST_USER)]

        assert ids == ["feb-second", "feb-first", "old"]

    def test_list_is_scoped_to_user(self, services):
        """Test that users only see their own transactions."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 1, date(2025, 1, 1), id="mine")
        )
        services.transactions.create(
            OTHER_USER, make_transaction("income", 1, date(2025, 1, 1), id="theirs")
        )

        assert [t.id for t in services.transactions.list(TEST_USER)] == ["mine"]
        assert services.transactions.find(TEST_USER, "theirs") is None

    def test_list_filters_by_type_and_dates(self, services):
        """Test optional type and inclusive date bounds."""
        for t in (
            make_transaction("income", 1, date(2025, 1, 1), id="jan-in"),
            make_transaction("expense", 1, date(2025, 1, 31), id="jan-out"),
            make_transaction("expense", 1, date(2025, 2, 1), id="feb-out"),
        ):
            services.transactions.create(TEST_USER, t)

        expenses = services.transactions.list(TEST_USER, type="expense")
        january = services.transactions.list(
            TEST_USER, start_date=date(2025, 1, 1), end_date=date(2025, 1, 31)
        )

        assert {t.id for t in expenses} == {"jan-out", "feb-out"}
        assert {t.id for t in january} == {"jan-in", "jan-out"}

    def test_update_fields(self, services):
        """Test updating description, amount, date and category."""
        services.transactions.create(
            TEST_USER,
            make_transaction("expense", 5, date(2025, 1, 1), "Coffee", "food", id="c"),
        )

        updated = services.transactions.update(
            TEST_USER,
            "c",
            description="Espresso",
            amount=Decimal("4.50"),
            transaction_date=date(2025, 1, 2),
            category_id="leisure",
        )

        assert updated.description == "Espresso"
        assert updated.amount == Decimal("4.50")
        assert updated.transaction_date == date(2025, 1, 2)
        assert updated.category_id == "leisure"
        assert updated.type == "expense"

    def test_update_not_found(self, services):
        """Test updating an unknown transaction raises NotFoundError."""
        with pytest.raises(NotFoundError):
            services.transactions.update(TEST_USER, "missing", description="x")

    def test_update_other_users_transaction_not_found(self, services):
        """Test that a user can't update someone else's transaction."""
        services.transactions.create(
            OTHER_USER, make_transaction("income", 1, date(2025, 1, 1), id="theirs")
        )

        with pytest.raises(NotFoundError):
            services.transactions.update(TEST_USER, "theirs", description="x")

    def test_update_unsupported_field(self, services):
        """Test that the type can't be changed by an update."""
        with pytest.raises(ValueError, match="Unsupported field names"):
            services.transactions.update(TEST_USER, "any", type="income")

    def test_update_without_fields(self, services):
        """Test that an empty update is rejected."""
        with pytest.raises(ValueError, match="No fields to update"):
            services.transactions.update(TEST_USER, "any")

    def test_soft_delete_hides_transaction(self, services):
        """Test that deleted transactions disappear from reads."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 1, date(2025, 1, 1), id="gone")
        )

        assert services.transactions.soft_delete(TEST_USER, "gone") is True
        assert services.transactions.find(TEST_USER, "gone") is None
        assert services.transactions.list(TEST_USER) == []

    def test_soft_delete_keeps_tombstone_row(self, services, test_db):
        """Test that soft delete marks the row instead of removing it."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 1, date(2025, 1, 1), id="gone")
        )
        services.transactions.soft_delete(TEST_USER, "gone")

        row = test_db.execute(
            "SELECT deleted FROM transactions WHERE id = ?", ("gone",)
        ).fetchone()

        assert row == (1,)

    def test_soft_delete_twice_succeeds(self, services):
        """Test that repeating a delete is not an error."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 1, date(2025, 1, 1), id="gone")
        )
        services.transactions.soft_delete(TEST_USER, "gone")

        assert services.transactions.soft_delete(TEST_USER, "gone") is True

    def test_soft_delete_not_found(self, services):
        """Test deleting an unknown transaction raises NotFoundError."""
        with pytest.raises(NotFoundError):
            services.transactions.soft_delete(TEST_USER, "missing")

    def test_update_deleted_transaction_not_found(self, services):
        """Test that tombstoned transactions can't be edited."""
        services.transactions.create(
            TEST_USER, make_transaction("income", 1, date(2025, 1, 1), id="gone")
        )
        services.transactions.soft_delete(TEST_USER, "gone")

        with pytest.raises(NotFoundError):
            services.transactions.update(TEST_USER, "gone", description="back")
