"""Tests for transaction filters."""

from datetime import date
from decimal import Decimal

import pytest

from ledger.registry import CategoryRegistry
from models.period import Period
from tools.filters import (
    amount_text,
    by_date_range,
    by_period,
    by_search,
    by_type,
    recent,
)
from tests.helpers import make_category, make_transaction


@pytest.fixture
def registry():
    return CategoryRegistry(
        [
            make_category("salary", "Salary", "income", icon="💼"),
            make_category("food", "Food", "expense", icon="🍔"),
        ]
    )


class TestAmountText:
    """Tests for amount_text."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            ("100.00", "100"),
            ("12.50", "12.5"),
            ("0.05", "0.05"),
            ("0", "0"),
            ("1000", "1000"),
        ],
    )
    def test_strips_trailing_zeros(self, amount, expected):
        assert amount_text(Decimal(amount)) == expected


class TestBySearch:
    """Tests for by_search."""

    def test_blank_term_returns_input(self, registry):
        """Test that an empty search is a pass-through."""
        transactions = [make_transaction("income", 1, date(2025, 1, 1))]

        assert by_search(transactions, "", registry) is transactions
        assert by_search(transactions, "   ", registry) is transactions
        assert by_search(transactions, None, registry) is transactions

    def test_matches_description_case_insensitively(self, registry):
        lunch = make_transaction("expense", 12, date(2025, 1, 1), "Lunch at Joe's")
        bus = make_transaction("expense", 3, date(2025, 1, 1), "Bus ticket")

        assert by_search([lunch, bus], "  LUNCH ", registry) == [lunch]

    def test_matches_amount_text(self, registry):
        """Test that 100 finds an amount stored as 100.00."""
        rent = make_transaction("expense", "100.00", date(2025, 1, 1), "Rent")
        coffee = make_transaction("expense", "4.50", date(2025, 1, 1), "Coffee")

        assert by_search([rent, coffee], "100", registry) == [rent]
        assert by_search([rent, coffee], "4.5", registry) == [coffee]

    def test_matches_category_label(self, registry):
        food = make_transaction("expense", 8, date(2025, 1, 1), "Market", "food")
        pay = make_transaction("income", 900, date(2025, 1, 1), "March", "salary")

        assert by_search([food, pay], "food", registry) == [food]

    def test_matches_uncategorized_label(self, registry):
        """Test that transactions without a category match the fallback label."""
        bare = make_transaction("expense", 8, date(2025, 1, 1), "Misc")
        food = make_transaction("expense", 8, date(2025, 1, 1), "Market", "food")

        assert by_search([bare, food], "uncategorized", registry) == [bare]

    def test_keeps_input_order(self, registry):
        first = make_transaction("expense", 1, date(2025, 1, 2), "Coffee beans")
        second = make_transaction("expense", 1, date(2025, 1, 1), "Coffee")

        assert by_search([first, second], "coffee", registry) == [first, second]


class TestByDateRange:
    """Tests for by_date_range."""

    def test_bounds_are_inclusive(self):
        inside = [
            make_transaction("income", 1, date(2025, 1, 1)),
            make_transaction("income", 1, date(2025, 1, 31)),
        ]
        outside = make_transaction("income", 1, date(2025, 2, 1))

        result = by_date_range(inside + [outside], date(2025, 1, 1), date(2025, 1, 31))

        assert result == inside

    @pytest.mark.parametrize(
        "start, end",
        [(None, date(2025, 1, 31)), (date(2025, 1, 1), None), (None, None)],
    )
    def test_missing_bound_passes_through(self, start, end):
        transactions = [make_transaction("income", 1, date(2030, 1, 1))]

        assert by_date_range(transactions, start, end) is transactions


class TestByPeriod:
    """Tests for by_period."""

    @pytest.fixture
    def transactions(self):
        return [
            make_transaction("income", 1, date(2023, 5, 10), id="last-year"),
            make_transaction("income", 1, date(2024, 2, 28), id="feb"),
            make_transaction("income", 1, date(2024, 4, 1), id="apr"),
            make_transaction("income", 1, date(2024, 5, 31), id="may"),
            make_transaction("income", 1, date(2024, 7, 1), id="jul"),
        ]

    def _ids(self, transactions):
        return [t.id for t in transactions]

    def test_month(self, transactions):
        """Test the month period keeps the current month of the current year."""
        result = by_period(transactions, Period.month(), date(2024, 5, 15))

        assert self._ids(result) == ["may"]

    def test_quarter(self, transactions):
        """Test the quarter period keeps April through June."""
        result = by_period(transactions, Period.quarter(), date(2024, 5, 15))

        assert self._ids(result) == ["apr", "may"]

    def test_year(self, transactions):
        result = by_period(transactions, Period.year(), date(2024, 5, 15))

        assert self._ids(result) == ["feb", "apr", "may", "jul"]

    def test_custom(self, transactions):
        period = Period.custom(date(2024, 2, 1), date(2024, 4, 30))

        result = by_period(transactions, period, date(2024, 5, 15))

        assert self._ids(result) == ["feb", "apr"]

    def test_open_custom_period_keeps_everything(self, transactions):
        period = Period.custom(date(2024, 2, 1), None)

        assert by_period(transactions, period, date(2024, 5, 15)) is transactions

    def test_year_boundaries(self):
        """Test the year period includes Jan 1 and Dec 31 only of this year."""
        transactions = [
            make_transaction("income", 1, date(2023, 12, 31), id="before"),
            make_transaction("income", 1, date(2024, 1, 1), id="first"),
            make_transaction("income", 1, date(2024, 12, 31), id="last"),
            make_transaction("income", 1, date(2025, 1, 1), id="after"),
        ]

        result = by_period(transactions, Period.year(), date(2024, 6, 1))

        assert self._ids(result) == ["first", "last"]


def test_by_type():
    income = make_transaction("income", 1, date(2025, 1, 1))
    expense = make_transaction("expense", 1, date(2025, 1, 1))

    assert by_type([income, expense], "expense") == [expense]


def test_recent_newest_first_with_limit():
    transactions = [make_transaction("income", 1, date(2025, 1, day)) for day in (3, 9, 1, 7)]

    assert [t.transaction_date.day for t in recent(transactions, 2)] == [9, 7]
