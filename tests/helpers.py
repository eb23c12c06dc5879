"""Helper utilities for tests."""

from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional
import itertools
import sqlite3

from models.category import Category
from models.transaction import Transaction

TEST_USER = "ana@example.com"

_ids = itertools.count(1)


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        conn.executescript(migration_file.read_text())

    conn.commit()


def make_transaction(
    type: str,
    amount,
    transaction_date: date,
    description: str = "Test transaction",
    category_id: Optional[str] = None,
    id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Transaction:
    """Build a Transaction with sequential IDs and creation times."""
    n = next(_ids)
    return Transaction(
        id=id or f"t{n}",
        type=type,
        description=description,
        amount=Decimal(str(amount)),
        transaction_date=transaction_date,
        category_id=category_id,
        created_at=created_at or datetime(2024, 1, 1) + timedelta(seconds=n),
    )


def make_category(
    id: str, name: str, type: str, icon: str = "🏷", is_custom: bool = False
) -> Category:
    return Category(id=id, name=name, icon=icon, type=type, is_custom=is_custom)
