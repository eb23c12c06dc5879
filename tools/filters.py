"""Transaction filters.

All functions are pure: they return a new list (or the input itself for
pass-through cases) and never modify the transactions.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

from models.period import CUSTOM, MONTH, QUARTER, YEAR, Period
from models.transaction import Transaction


def by_type(transactions: Sequence[Transaction], type: str) -> List[Transaction]:
    return [t for t in transactions if t.type == type]


def amount_text(amount: Decimal) -> str:
    """Plain decimal text of an amount without trailing zeros.

    Example: Decimal("100.00") -> "100", Decimal("12.50") -> "12.5".
    """
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def by_search(
    transactions: Sequence[Transaction], term: Optional[str], registry
) -> Sequence[Transaction]:
    """Keep transactions matching a free-text search term.

    The term is matched case-insensitively as a substring of the
    description, the amount text and the resolved category label.

    Args:
        transactions: Transactions to search.
        term: Search term. Empty or blank terms match everything.
        registry: CategoryRegistry used to resolve category labels.

    Returns:
        The input sequence itself for a blank term, otherwise a new list of
        matching transactions in input order.
    """
    if term is None or not term.strip():
        return transactions

    needle = term.strip().lower()

    def matches(t: Transaction) -> bool:
        return (
            needle in t.description.lower()
            or needle in amount_text(t.amount)
            or needle in registry.resolve_label(t.category_id, t.type).lower()
        )

    return [t for t in transactions if matches(t)]


def by_date_range(
    transactions: Sequence[Transaction],
    start: Optional[date],
    end: Optional[date],
) -> Sequence[Transaction]:
    """Keep transactions dated within [start, end].

    If either bound is missing the input is returned unchanged.
    """
    if start is None or end is None:
        return transactions
    return [t for t in transactions if start <= t.transaction_date <= end]


def by_period(
    transactions: Sequence[Transaction], period: Period, today: date
) -> Sequence[Transaction]:
    """Keep transactions that fall within a reporting period.

    Args:
        transactions: Transactions to filter.
        period: The period to apply.
        today: Reference date for month, quarter and year periods. Pass the
               current date at the time of the call.

    Returns:
        Matching transactions in input order. An open custom period returns
        the input unchanged.
    """
    if period.kind == CUSTOM:
        return by_date_range(transactions, period.start, period.end)

    def in_period(d: date) -> bool:
        if d.year != today.year:
            return False
        if period.kind == MONTH:
            return d.month == today.month
        if period.kind == QUARTER:
            return (d.month - 1) // 3 == (today.month - 1) // 3
        return period.kind == YEAR

    return [t for t in transactions if in_period(t.transaction_date)]


def recent(transactions: Sequence[Transaction], limit: int = 5) -> List[Transaction]:
    """Get the latest transactions by date, newest first."""
    ordered = sorted(transactions, key=lambda t: t.transaction_date, reverse=True)
    return ordered[:limit]
