"""In-memory transaction store for the active user."""

from typing import Iterable, List, Optional

from errors import ValidationError
from models.transaction import Transaction

# Fields an edit may change in place
EDITABLE_FIELDS = ("description", "amount", "transaction_date", "category_id")


class TransactionStore:
    """Ordered collection of the active user's transactions.

    Mirrors the backing store: callers insert or update after applying a
    change locally and remove only after the backing store confirmed the
    delete.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()):
        self._transactions: List[Transaction] = []
        for transaction in transactions:
            self.insert(transaction)

    def insert(self, transaction: Transaction) -> Transaction:
        """Append a transaction.

        Raises:
            ValidationError: If a transaction with the same ID is present.
        """
        if self.find(transaction.id) is not None:
            raise ValidationError(
                f"Transaction ID '{transaction.id}' already exists", ["id"]
            )
        self._transactions.append(transaction)
        return transaction

    def update(self, transaction_id: str, **fields) -> Optional[Transaction]:
        """Change fields of a transaction in place.

        Does nothing when the ID is unknown; callers check existence first.

        Args:
            transaction_id: ID of the transaction to change.
            **fields: New values for any of description, amount,
                      transaction_date and category_id.

        Returns:
            The updated transaction, or None if the ID is unknown.

        Raises:
            ValueError: If a field cannot be edited.
        """
        invalid_fields = set(fields) - set(EDITABLE_FIELDS)
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        transaction = self.find(transaction_id)
        if transaction is None:
            return None

        for name, value in fields.items():
            setattr(transaction, name, value)
        return transaction

    def remove(self, transaction_id: str) -> bool:
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                del self._transactions[index]
                return True
        return False

    def replace(self, transactions: Iterable[Transaction]) -> None:
        """Drop all transactions and load the given ones instead."""
        self._transactions = []
        for transaction in transactions:
            self.insert(transaction)

    def find(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def all(self, type: Optional[str] = None) -> List[Transaction]:
        """Get transactions in display order.

        Newest date first. Within a date the most recently inserted comes
        first (by created_at, then by position in the store).

        Args:
            type: Optional transaction type to keep.
        """
        positioned = [
            (position, t)
            for position, t in enumerate(self._transactions)
            if type is None or t.type == type
        ]
        positioned.sort(
            key=lambda p: (p[1].transaction_date, p[1].created_at, p[0]),
            reverse=True,
        )
        return [t for _, t in positioned]

    def recent(self, limit: int = 5) -> List[Transaction]:
        return self.all()[:limit]

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: str) -> bool:
        return self.find(transaction_id) is not None
