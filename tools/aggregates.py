"""Transaction aggregation: totals, summaries and time series."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Sequence, Tuple

from models.transaction import EXPENSE, INCOME, Transaction

ZERO = Decimal("0")
ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class Summary:
    """Totals over a set of transactions.

    Attributes:
        income: Sum of income amounts.
        expense: Sum of expense amounts.
        balance: income - expense.
        count: Number of transactions of any type.
    """

    income: Decimal
    expense: Decimal
    balance: Decimal
    count: int

    @property
    def expense_percentage(self) -> Decimal:
        return percentage_of_income(self.expense, self.income)


def total(transactions: Sequence[Transaction], type: str) -> Decimal:
    return sum((t.amount for t in transactions if t.type == type), ZERO)


def summary(transactions: Sequence[Transaction]) -> Summary:
    income = total(transactions, INCOME)
    expense = total(transactions, EXPENSE)
    return Summary(
        income=income,
        expense=expense,
        balance=income - expense,
        count=len(transactions),
    )


def percentage_of_income(expense_total: Decimal, income_total: Decimal) -> Decimal:
    """Expenses as a percentage of income, rounded to one decimal place.

    Returns 0 when there is no income.
    """
    if income_total <= 0:
        return ZERO
    percentage = expense_total / income_total * 100
    return percentage.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def count_by_type(transactions: Sequence[Transaction]) -> Dict[str, int]:
    counts = {INCOME: 0, EXPENSE: 0}
    for t in transactions:
        counts[t.type] = counts.get(t.type, 0) + 1
    return counts


def balance_status(balance: Decimal) -> str:
    """Classify a balance as "positive", "negative" or "neutral"."""
    if balance > 0:
        return "positive"
    if balance < 0:
        return "negative"
    return "neutral"


def by_category(
    transactions: Sequence[Transaction], type: str, registry
) -> Dict[str, Decimal]:
    """Sum amounts per category label for one transaction type.

    Args:
        transactions: Transactions to aggregate.
        type: Only transactions of this type are counted.
        registry: CategoryRegistry used to resolve labels.

    Returns:
        Mapping of category label to total amount. Keys keep the order in
        which each label was first encountered; they are not sorted.
    """
    totals: Dict[str, Decimal] = {}
    for t in transactions:
        if t.type != type:
            continue
        label = registry.resolve_label(t.category_id, type)
        totals[label] = totals.get(label, ZERO) + t.amount
    return totals


def running_balance(transactions: Sequence[Transaction]) -> List[Tuple[str, Decimal]]:
    """Cumulative balance over time, one point per date.

    Transactions are walked in ascending date order, adding income and
    subtracting expenses. When several transactions share a date only the
    value after the last of them is kept (end-of-day balance).

    Returns:
        List of (ISO date, balance) tuples in ascending date order.
    """
    points: Dict[str, Decimal] = {}
    balance = ZERO
    for t in sorted(transactions, key=lambda t: t.transaction_date):
        balance += t.signed_amount
        points[t.transaction_date.isoformat()] = balance
    return list(points.items())
