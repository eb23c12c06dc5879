"""Transaction service for database operations.

Every query is scoped to the owning user's email. Deleted transactions stay
in the table as tombstones (deleted = 1) and are never returned by reads.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from errors import NotFoundError
from logger import get_logger
from models.transaction import Transaction

logger = get_logger()

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """id, transaction_type, description, amount,
       transaction_date, category_id, created_at"""

_TRANSACTION_INSERT_FIELDS = """id, user_email, transaction_type, description,
    amount, transaction_date, category_id, created_at"""

# Automatically generate placeholders from field count
_TRANSACTION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_TRANSACTION_INSERT_FIELDS.split(',')))})"
)

# Fields an edit may change, mapped to their column and serializer
_UPDATABLE_FIELDS = {
    "description": ("description", lambda v: v),
    "amount": ("amount", str),
    "transaction_date": ("transaction_date", lambda v: v.isoformat()),
    "category_id": ("category_id", lambda v: v),
}


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, user_email: str, transaction: Transaction) -> Transaction:
        """Create a single transaction in the database.

        Args:
            user_email: Owner of the transaction.
            transaction: Transaction object to insert. Its ID is kept.

        Returns:
            The same Transaction object.

        Raises:
            sqlite3.IntegrityError: If the user already has a transaction with this ID.
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                f"""
                INSERT INTO transactions ({_TRANSACTION_INSERT_FIELDS})
                VALUES {_TRANSACTION_INSERT_PLACEHOLDERS}
                """,
                (
                    transaction.id,
                    user_email,
                    transaction.type,
                    transaction.description,
                    str(transaction.amount),
                    transaction.transaction_date.isoformat(),
                    transaction.category_id,
                    transaction.created_at.isoformat(),
                ),
            )
            conn.commit()

        logger.debug(f"Created transaction {transaction.id} for {user_email}")
        return transaction

    def update(self, user_email: str, transaction_id: str, **fields) -> Transaction:
        """Update specified fields of a single transaction.

        Args:
            user_email: Owner of the transaction.
            transaction_id: ID of the transaction to update.
            **fields: New values. Supported fields: 'description', 'amount',
                      'transaction_date', 'category_id'.

        Returns:
            The updated Transaction as stored.

        Raises:
            ValueError: If no fields or unsupported field names are provided.
            NotFoundError: If the transaction doesn't exist for this user or
                           has been deleted.
        """
        if not fields:
            raise ValueError("No fields to update")

        invalid_fields = set(fields) - set(_UPDATABLE_FIELDS)
        if invalid_fields:
            raise ValueError(f"Unsupported field names: {invalid_fields}")

        set_clause = ", ".join(
            f"{_UPDATABLE_FIELDS[name][0]} = ?" for name in fields
        )
        params = [_UPDATABLE_FIELDS[name][1](value) for name, value in fields.items()]
        params.extend([user_email, transaction_id])

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                UPDATE transactions
                SET {set_clause}
                WHERE user_email = ? AND id = ? AND deleted = 0
                """,
                params,
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError("Transaction", transaction_id)

        return self.find(user_email, transaction_id)

    def soft_delete(self, user_email: str, transaction_id: str) -> bool:
        """Mark a transaction as deleted.

        Deleting an already deleted transaction succeeds again.

        Args:
            user_email: Owner of the transaction.
            transaction_id: ID of the transaction to delete.

        Returns:
            True once the tombstone is stored.

        Raises:
            NotFoundError: If no such transaction exists for this user.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE transactions SET deleted = 1 WHERE user_email = ? AND id = ?",
                (user_email, transaction_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise NotFoundError("Transaction", transaction_id)

        logger.debug(f"Soft-deleted transaction {transaction_id} for {user_email}")
        return True

    def find(self, user_email: str, transaction_id: str) -> Optional[Transaction]:
        """Get a single active transaction by ID.

        Args:
            user_email: Owner of the transaction.
            transaction_id: The transaction ID.

        Returns:
            Transaction object if found and not deleted, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM transactions
                WHERE user_email = ? AND id = ? AND deleted = 0
                """,
                (user_email, transaction_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def list(
        self,
        user_email: str,
        *,
        type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Transaction]:
        """Get a user's active transactions.

        Args:
            user_email: Owner of the transactions.
            type: Optional transaction type ('income' or 'expense').
            start_date: Optional inclusive lower date bound.
            end_date: Optional inclusive upper date bound.

        Returns:
            List of Transaction objects, newest date first and most recently
            created first within a date.
        """
        query = f"""
            SELECT {_TRANSACTION_SELECT_FIELDS}
            FROM transactions
            WHERE user_email = ? AND deleted = 0
        """
        params = [user_email]

        if type is not None:
            query += " AND transaction_type = ?"
            params.append(type)

        if start_date is not None:
            query += " AND transaction_date >= ?"
            params.append(start_date.isoformat())

        if end_date is not None:
            query += " AND transaction_date <= ?"
            params.append(end_date.isoformat())

        query += " ORDER BY transaction_date DESC, created_at DESC"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            rows = cursor.fetchall()

            return [self._row_to_transaction(row) for row in rows]

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            type=row[1],
            description=row[2],
            amount=Decimal(row[3]),
            transaction_date=date.fromisoformat(row[4]),
            category_id=row[5],
            created_at=datetime.fromisoformat(row[6]),
        )
