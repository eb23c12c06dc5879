"""Per-user ledger state and its round trips to the backing store.

A Ledger owns the in-memory category registry and transaction store for one
user, and sequences every change against the backing store:

- New and edited transactions are applied locally first, then synced. A
  failed sync is reported in the returned MutationResult, not raised.
- Deletes go to the backing store first. The local copy is only removed once
  the backing store confirmed the tombstone.
- Categories are created and deleted remotely first, then locally.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from errors import NotFoundError, SyncFailure, ValidationError
from ledger.registry import CategoryRegistry
from ledger.store import TransactionStore
from logger import get_logger
from models.category import DEFAULT_ICON, Category, new_category_id
from models.forms import CategoryForm, TransactionEditForm, TransactionForm, parse_form
from models.period import Period
from models.transaction import Transaction
from tools import filters
from tools.reports import Dashboard, Report, build_dashboard, build_report

logger = get_logger()


@dataclass
class MutationResult:
    """Outcome of an optimistic create or edit.

    Attributes:
        transaction: The transaction as it now is in the local store.
        applied_locally: True once the local store reflects the change.
        persisted: True if the backing store confirmed the change.
        error: The SyncFailure when the backing store round trip failed.
    """

    transaction: Transaction
    applied_locally: bool
    persisted: bool
    error: Optional[SyncFailure] = None


class Ledger:
    """One user's transactions and categories.

    Args:
        services: Services container giving access to the backing store.
        user_email: Identity of the user owning this ledger.
    """

    def __init__(self, services, user_email: str):
        if not user_email:
            raise ValidationError("A user email is required", ["user_email"])
        self.services = services
        self.user_email = user_email
        self.registry = CategoryRegistry()
        self.store = TransactionStore()

    def load(self) -> "Ledger":
        """Replace the local state with the backing store's current data.

        Raises:
            SyncFailure: If either listing fails. Local state is unchanged.
        """
        try:
            transactions = self.services.transactions.list(self.user_email)
            categories = self.services.categories.list(self.user_email)
        except Exception as e:
            logger.error(f"Could not load data for {self.user_email}: {e}")
            raise SyncFailure("load", str(e)) from e

        self.store.replace(transactions)
        self.registry.replace(categories)
        logger.debug(
            f"Loaded {len(self.store)} transaction(s) and "
            f"{len(self.registry)} categories for {self.user_email}"
        )
        return self

    # Transactions

    def add_transaction(
        self,
        type: str,
        description: str,
        amount,
        transaction_date,
        category_id: Optional[str],
    ) -> MutationResult:
        """Record a new transaction.

        Args:
            type: 'income' or 'expense'.
            description: Non-empty description.
            amount: Non-negative amount (Decimal, number or text).
            transaction_date: Date or ISO date text.
            category_id: ID of a category for this type.

        Returns:
            MutationResult. ``persisted`` is False when the backing store
            could not be reached; the transaction is kept locally anyway.

        Raises:
            ValidationError: If any field is missing or invalid. Nothing is
                             changed in that case.
        """
        form = parse_form(
            TransactionForm,
            type=type,
            description=description,
            amount=amount,
            transaction_date=transaction_date,
            category_id=category_id,
        )

        transaction = Transaction.new(
            type=form.type,
            description=form.description,
            amount=form.amount,
            transaction_date=form.transaction_date,
            category_id=form.category_id,
        )
        self.store.insert(transaction)

        try:
            self.services.transactions.create(self.user_email, transaction)
        except Exception as e:
            logger.warning(
                f"Transaction {transaction.id} saved locally but sync failed: {e}"
            )
            failure = SyncFailure("create", str(e))
            failure.__cause__ = e
            return MutationResult(transaction, True, False, failure)

        logger.info(f"Added {transaction.type} '{transaction.description}'")
        return MutationResult(transaction, True, True)

    def edit_transaction(self, transaction_id: str, **fields) -> MutationResult:
        """Change a transaction's description, amount, date or category.

        Raises:
            NotFoundError: If the transaction isn't in the ledger.
            ValidationError: If a field is invalid, cleared or not editable.
        """
        if transaction_id not in self.store:
            raise NotFoundError("Transaction", transaction_id)

        cleared = [name for name, value in fields.items() if value is None]
        if cleared:
            raise ValidationError("Required fields cannot be cleared", cleared)
        if not fields:
            raise ValidationError("No fields to update")

        changes = parse_form(TransactionEditForm, **fields).changes()
        transaction = self.store.update(transaction_id, **changes)

        try:
            self.services.transactions.update(
                self.user_email, transaction_id, **changes
            )
        except Exception as e:
            logger.warning(
                f"Transaction {transaction_id} updated locally but sync failed: {e}"
            )
            failure = SyncFailure("update", str(e))
            failure.__cause__ = e
            return MutationResult(transaction, True, False, failure)

        logger.info(f"Updated transaction {transaction_id}")
        return MutationResult(transaction, True, True)

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Delete a transaction once the backing store has tombstoned it.

        Returns:
            The removed transaction.

        Raises:
            NotFoundError: If the transaction isn't in the ledger.
            SyncFailure: If the backing store delete failed. The transaction
                         stays in the ledger.
        """
        transaction = self.store.find(transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction", transaction_id)

        try:
            self.services.transactions.soft_delete(self.user_email, transaction_id)
        except Exception as e:
            logger.warning(f"Could not delete transaction {transaction_id}: {e}")
            raise SyncFailure("delete", str(e)) from e

        self.store.remove(transaction_id)
        logger.info(f"Deleted transaction {transaction_id}")
        return transaction

    # Categories

    def add_category(self, name: str, type: str, icon: Optional[str] = None) -> Category:
        """Create a custom category.

        Raises:
            ValidationError: If the name or type is missing or invalid.
            SyncFailure: If the backing store rejected it. Nothing is added.
        """
        form = parse_form(CategoryForm, name=name, type=type, icon=icon)
        return self._create_category(
            Category(
                id=new_category_id(),
                name=form.name,
                icon=form.icon or DEFAULT_ICON,
                type=form.type,
                is_custom=True,
            )
        )

    def add_builtin_category(
        self, category_id: str, name: str, type: str, icon: Optional[str] = None
    ) -> Category:
        """Create a built-in category with a fixed ID.

        Built-in categories can't be deleted later.

        Raises:
            ValidationError: If a field is invalid or the ID is already used
                             for this type.
            SyncFailure: If the backing store rejected it. Nothing is added.
        """
        if not isinstance(category_id, str) or not category_id.strip():
            raise ValidationError("Invalid category input", ["id"])
        form = parse_form(CategoryForm, name=name, type=type, icon=icon)
        if self.registry.find(category_id, form.type) is not None:
            raise ValidationError(
                f"Category ID '{category_id}' already exists", ["id"]
            )

        return self._create_category(
            Category(
                id=category_id,
                name=form.name,
                icon=form.icon or "",
                type=form.type,
                is_custom=False,
            )
        )

    def _create_category(self, category: Category) -> Category:
        """Save to the backing store first, then add to the registry."""
        try:
            self.services.categories.create(self.user_email, category)
        except Exception as e:
            logger.warning(f"Could not save category '{category.name}': {e}")
            raise SyncFailure("create category", str(e)) from e

        self.registry.add(category)
        logger.info(f"Added {category.type} category '{category.name}'")
        return category

    def can_delete_category(self, category_id: str, type: str) -> bool:
        return self.registry.can_delete(category_id, type, self.store.all())

    def remove_category(self, category_id: str, type: str) -> Category:
        """Delete a custom category that no transaction uses.

        Raises:
            NotFoundError: If the category isn't in the ledger.
            ValidationError: If it's built-in or still referenced.
            SyncFailure: If the backing store delete failed.
        """
        category = self.registry.find(category_id, type)
        if category is None:
            raise NotFoundError("Category", category_id)

        if not self.can_delete_category(category_id, type):
            reason = (
                "Built-in categories cannot be deleted"
                if not category.is_custom
                else "Categories with transactions cannot be deleted"
            )
            raise ValidationError(reason, ["category_id"])

        try:
            self.services.categories.delete(self.user_email, category_id, type)
        except Exception as e:
            logger.warning(f"Could not delete category '{category.name}': {e}")
            raise SyncFailure("delete category", str(e)) from e

        self.registry.remove(category_id, type)
        logger.info(f"Removed category '{category.name}'")
        return category

    # Views

    def transactions(
        self, type: Optional[str] = None, search: Optional[str] = None
    ) -> Sequence[Transaction]:
        """List transactions in display order, optionally filtered."""
        return filters.by_search(self.store.all(type), search, self.registry)

    def report(self, period: Period, today: Optional[date] = None) -> Report:
        """Build the report for a period, anchored to today unless given."""
        return build_report(
            self.store.all(), self.registry, period, today or date.today()
        )

    def dashboard(self, recent_limit: int = 5) -> Dashboard:
        return build_dashboard(self.store.all(), recent_limit)
