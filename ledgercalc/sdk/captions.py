"""Short diagnostic captions for the dashboard summary cards.

Each caption is an ordered ladder of thresholds; the first matching rung
wins. Captions are deterministic for a given set of inputs.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional, Union

from .formatting import format_number, format_percent
from .schemas import Transaction
from .summary import top_category
from .transactions import as_transactions

DEFAULT_BENCHMARK_HOURLY = 28
DEFAULT_CURRENCY_SYMBOL = "£"

# Savings rate (net / income) thresholds
EXCELLENT_SAVINGS_RATE = 0.6
SOLID_SAVINGS_RATE = 0.3
TIGHT_SAVINGS_RATE = 0.1

# +/- band around the rolling income average treated as "usual"
INCOME_DEADBAND = 0.2


@dataclass
class Captions:
    income: str
    expenses: str
    net: str
    hourly: str

    def to_dict(self) -> dict:
        return asdict(self)


def net_caption(income: float, net: float, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    savings_rate = net / income if income > 0 else 0

    if net < 0:
        return "You're negative this month. A small cut to top costs would help."
    if savings_rate >= EXCELLENT_SAVINGS_RATE:
        return f"Excellent. You're keeping {format_percent(savings_rate)} of every {currency_symbol}1 earned."
    if savings_rate >= SOLID_SAVINGS_RATE:
        return f"Solid. You're keeping {format_percent(savings_rate)} of every {currency_symbol}1 earned."
    if savings_rate >= TIGHT_SAVINGS_RATE:
        return f"Tight month. Keeping {format_percent(savings_rate)} per {currency_symbol}1."
    return "Margins are thin. Consider trimming a top expense."


def expenses_caption(
    expenses: float,
    transactions: Iterable[Union[Transaction, dict]],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """Name the biggest expense category and its share of total expenses."""
    zero_costs = f"You've kept costs at {currency_symbol}0 so far."

    expense_transactions = [tx for tx in as_transactions(transactions) if tx.type == "expense"]
    if not expense_transactions or expenses == 0:
        return zero_costs

    top = top_category(expense_transactions)
    if top is None:
        return zero_costs

    category, amount = top
    return f"Biggest drain is {category} ({format_percent(amount / expenses)}). Worth a review?"


def income_caption(income: float, rolling_income_average: Optional[float] = 0) -> str:
    """Compare income with the rolling average, if there is one."""
    if not rolling_income_average:
        return "Tracking your income this month."

    change = (income - rolling_income_average) / rolling_income_average
    if change >= INCOME_DEADBAND:
        return "Pacing above your recent average. Keep it up."
    if change <= -INCOME_DEADBAND:
        return "Below your recent pace. Any invoices pending?"
    return "Tracking close to your usual."


def hourly_caption(
    effective_hourly: float,
    benchmark_hourly: float = DEFAULT_BENCHMARK_HOURLY,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    # No hours logged
    if effective_hourly == 0:
        return ""
    if effective_hourly >= benchmark_hourly * 2:
        return "Elite pace. Well above average."
    if effective_hourly >= benchmark_hourly:
        return "You're outperforming the average freelancer."
    return (
        f"Below the {currency_symbol}{format_number(benchmark_hourly)}/hr benchmark. "
        "Higher-value work or pricing may help."
    )


def build_captions(
    income: float,
    expenses: float,
    net: float,
    effective_hourly: float,
    transactions: Iterable[Union[Transaction, dict]],
    rolling_income_average: Optional[float] = 0,
    benchmark_hourly: float = DEFAULT_BENCHMARK_HOURLY,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Captions:
    """Build the four summary-card captions for a period.

    Args:
        income: Total income for the period
        expenses: Total expenses for the period
        net: income - expenses
        effective_hourly: net / hours logged (0 if no hours)
        transactions: The period's transactions (for the category breakdown)
        rolling_income_average: Baseline income, 0/None if no history
        benchmark_hourly: Reference hourly rate
        currency_symbol: Symbol substituted into currency-bearing captions

    Returns:
        Captions with income, expenses, net and hourly strings
    """
    return Captions(
        income=income_caption(income, rolling_income_average),
        expenses=expenses_caption(expenses, transactions, currency_symbol),
        net=net_caption(income, net, currency_symbol),
        hourly=hourly_caption(effective_hourly, benchmark_hourly, currency_symbol),
    )
