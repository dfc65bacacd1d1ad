"""Period summary metrics over a set of transactions.

Totals, effective hourly rate, period-over-period change, expense category
breakdown and per-day/per-month net series used by the dashboard.
"""

import calendar
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .schemas import Transaction, TransactionType
from .transactions import ReferencePeriod, as_transactions


@dataclass
class PeriodSummary:
    """Aggregate totals for one period."""

    income: float
    expenses: float
    net: float
    total_hours: float
    effective_hourly: float
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(transactions: Iterable[Union[Transaction, dict]]) -> PeriodSummary:
    """Total income, expenses, net and hours for the given transactions.

    effective_hourly is net divided by total hours logged, 0 without hours.
    """
    transactions = as_transactions(transactions)

    income = sum(tx.amount for tx in transactions if tx.type == "income")
    expenses = sum(tx.amount for tx in transactions if tx.type == "expense")
    net = income - expenses
    total_hours = sum(tx.hours_spent or 0 for tx in transactions)
    effective_hourly = net / total_hours if total_hours > 0 else 0

    return PeriodSummary(
        income=income,
        expenses=expenses,
        net=net,
        total_hours=total_hours,
        effective_hourly=effective_hourly,
        count=len(transactions),
    )


def percentage_change(current: float, previous: float) -> Optional[float]:
    """Percent change from previous to current.

    Returns None when there is no previous value to compare against (going
    from 0 to anything is not shown as a percentage) and -100 when the
    current value dropped to 0.
    """
    if previous == 0:
        return None
    if current == 0:
        return -100.0
    return (current - previous) / previous * 100


def category_totals(
    transactions: Iterable[Union[Transaction, dict]],
    tx_type: TransactionType = "expense",
) -> Dict[str, float]:
    """Summed amount per category, in first-seen order."""
    totals: Dict[str, float] = {}
    for tx in as_transactions(transactions):
        if tx.type != tx_type:
            continue
        label = tx.category_label
        totals[label] = totals.get(label, 0) + tx.amount
    return totals


def top_category(
    transactions: Iterable[Union[Transaction, dict]],
    tx_type: TransactionType = "expense",
) -> Optional[Tuple[str, float]]:
    """Category with the largest total, or None if nothing is positive.

    Ties keep the first category encountered.
    """
    best: Optional[Tuple[str, float]] = None
    for label, amount in category_totals(transactions, tx_type).items():
        if amount > (best[1] if best else 0):
            best = (label, amount)
    return best


def top_category_share_change(
    current: Iterable[Union[Transaction, dict]],
    current_expenses: float,
    previous: Iterable[Union[Transaction, dict]],
    previous_expenses: float,
) -> Optional[float]:
    """Percent change in the top expense category's share of spending.

    Compares the current top category's share with the previous period's
    top category share (which may be a different category).
    """
    if current_expenses <= 0:
        return None
    current_top = top_category(current)
    if current_top is None:
        return None

    previous_top = top_category(previous)
    if previous_top is None or previous_expenses <= 0:
        return None

    current_share = current_top[1] / current_expenses * 100
    previous_share = previous_top[1] / previous_expenses * 100
    if previous_share <= 0:
        return None
    return (current_share - previous_share) / previous_share * 100


def net_series(
    transactions: Iterable[Union[Transaction, dict]],
    period: ReferencePeriod,
) -> List[dict]:
    """Income, expense and net per day (month period) or per month (year period).

    Every bucket in the period is present, zero-filled. Transactions outside
    the period are ignored.
    """
    if period.month is None:
        keys = list(range(1, 13))
    else:
        keys = list(range(1, calendar.monthrange(period.year, period.month)[1] + 1))

    buckets = {key: {"income": 0.0, "expense": 0.0} for key in keys}
    for tx in as_transactions(transactions):
        occurred_on = tx.occurred_on
        if not period.contains(occurred_on):
            continue
        key = occurred_on.month if period.month is None else occurred_on.day
        buckets[key][tx.type] += tx.amount

    bucket_name = "month" if period.month is None else "day"
    return [
        {
            bucket_name: key,
            "income": totals["income"],
            "expense": totals["expense"],
            "net": totals["income"] - totals["expense"],
        }
        for key, totals in buckets.items()
    ]
