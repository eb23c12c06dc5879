"""Period reports and dashboard figures built from filters and aggregates."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple, Union

from ledger.registry import CategoryRegistry
from models.category import Category
from models.period import Period
from models.transaction import EXPENSE, INCOME, Transaction
from tools import aggregates, filters
from tools.aggregates import Summary


@dataclass(frozen=True)
class Report:
    """Summary and series for one reporting period.

    Attributes:
        period: The period the report covers.
        summary: Totals over the period's transactions.
        by_category: Expense totals per category label, first-seen order.
        balance_series: (ISO date, end-of-day balance) points.
        transactions: The period's transactions, newest first.
    """

    period: Period
    summary: Summary
    by_category: Dict[str, Decimal]
    balance_series: List[Tuple[str, Decimal]]
    transactions: List[Transaction] = field(default_factory=list)

    @property
    def expense_percentage(self) -> Decimal:
        return self.summary.expense_percentage


@dataclass(frozen=True)
class Dashboard:
    """Headline figures over the whole ledger."""

    summary: Summary
    counts: Dict[str, int]
    balance_status: str
    recent: List[Transaction]

    @property
    def expense_percentage(self) -> Decimal:
        return self.summary.expense_percentage


def _as_registry(
    categories: Union[CategoryRegistry, Iterable[Category]],
) -> CategoryRegistry:
    if isinstance(categories, CategoryRegistry):
        return categories
    return CategoryRegistry(categories)


def build_report(
    transactions: Iterable[Transaction],
    categories: Union[CategoryRegistry, Iterable[Category]],
    period: Period,
    today: date,
) -> Report:
    """Build the report for a period.

    The transactions are filtered to the period once; the summary, the
    expense breakdown and the running balance are all computed over that
    same filtered set. The result depends only on the arguments.

    Args:
        transactions: All of the user's transactions.
        categories: CategoryRegistry, or the categories to build one from.
        period: Reporting period.
        today: Reference date for month, quarter and year periods.

    Returns:
        Report for the period.
    """
    registry = _as_registry(categories)
    in_period = list(filters.by_period(list(transactions), period, today))

    return Report(
        period=period,
        summary=aggregates.summary(in_period),
        by_category=aggregates.by_category(in_period, EXPENSE, registry),
        balance_series=aggregates.running_balance(in_period),
        transactions=sorted(
            in_period, key=lambda t: t.transaction_date, reverse=True
        ),
    )


def build_dashboard(
    transactions: Iterable[Transaction], recent_limit: int = 5
) -> Dashboard:
    """Build the dashboard figures over all transactions."""
    transactions = list(transactions)
    summary = aggregates.summary(transactions)
    return Dashboard(
        summary=summary,
        counts=aggregates.count_by_type(transactions),
        balance_status=aggregates.balance_status(summary.balance),
        recent=filters.recent(transactions, recent_limit),
    )


REPORT_HEADER = ["date", "description", "category", "type", "amount"]


def report_rows(report: Report, registry: CategoryRegistry) -> List[List[str]]:
    """Flatten a report into CSV rows.

    The first rows hold the period and its totals, followed by a blank row,
    the detail header and one row per transaction.
    """
    summary = report.summary
    rows = [
        ["period", report.period.label],
        ["income_total", str(summary.income)],
        ["expense_total", str(summary.expense)],
        ["balance", str(summary.balance)],
        ["transaction_count", str(summary.count)],
        [],
        list(REPORT_HEADER),
    ]
    for t in report.transactions:
        rows.append(
            [
                t.transaction_date.isoformat(),
                t.description,
                registry.resolve_label(t.category_id, t.type),
                "Income" if t.type == INCOME else "Expense",
                str(t.amount),
            ]
        )
    return rows
