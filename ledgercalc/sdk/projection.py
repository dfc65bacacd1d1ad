"""Full-period net profit projection from partial-period data.

Only the period containing today is projected: a closed past period or a
future period has no meaningful to-date figure. The projection is a
straight-line extrapolation of the to-date daily run rate:

    projection = to_date_net / days_elapsed * total_days

Two distinct "no projection" states are reported:
- wrong period: should_show False, days_elapsed 0, total_days 0
- too little data (< 3 days elapsed or no transactions): should_show False,
  but daily_average/days_elapsed/total_days are filled in
"""

import calendar
import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Iterable, Optional, Union

from .formatting import format_currency, ratio_to_percent
from .schemas import Transaction
from .transactions import PeriodType, ReferencePeriod, as_transactions

logger = logging.getLogger(__name__)

# Fewer elapsed days than this is too little data to project
MIN_DAYS_FOR_PROJECTION = 3


@dataclass
class ProjectionResult:
    projection: Optional[float]
    daily_average: float
    days_elapsed: int
    total_days: int
    should_show: bool
    is_early_estimate: bool
    period_type: PeriodType

    @property
    def is_too_early(self) -> bool:
        """Current period, but too few days elapsed to show a projection."""
        return not self.should_show and 0 < self.days_elapsed < MIN_DAYS_FOR_PROJECTION

    def to_dict(self) -> dict:
        return asdict(self)


def _elapsed_and_total_days(period: ReferencePeriod, period_type: PeriodType, today: date) -> tuple:
    if period_type == "month":
        return today.day, calendar.monthrange(period.year, period.month)[1]

    days_elapsed = (today - date(period.year, 1, 1)).days + 1
    total_days = 366 if calendar.isleap(period.year) else 365
    return days_elapsed, total_days


def project_period(
    transactions: Iterable[Union[Transaction, dict]],
    reference_period: Union[ReferencePeriod, str],
    period_type: Optional[PeriodType] = None,
    today: Optional[date] = None,
) -> ProjectionResult:
    """Estimate the full-period net from the period's to-date transactions.

    Args:
        transactions: Transactions to consider (any dates; filtered here)
        reference_period: ReferencePeriod or 'YYYY-MM' / 'YYYY'
        period_type: 'month' or 'year' (defaults to the reference period's type)
        today: Date treated as today (defaults to date.today())

    Returns:
        ProjectionResult

    Raises:
        ValueError: For an unknown period type or a month projection
            without a month
    """
    if not isinstance(reference_period, ReferencePeriod):
        reference_period = ReferencePeriod.parse(reference_period)
    period_type = period_type or reference_period.period_type
    if period_type not in ("month", "year"):
        raise ValueError(f"Invalid period type '{period_type}'. Must be 'month' or 'year'.")
    if period_type == "month" and reference_period.month is None:
        raise ValueError("Month projection needs a reference month (YYYY-MM).")
    if period_type == "year":
        reference_period = ReferencePeriod(year=reference_period.year)

    today = today or date.today()
    transactions = as_transactions(transactions)

    if not reference_period.contains(today):
        return ProjectionResult(
            projection=None,
            daily_average=0,
            days_elapsed=0,
            total_days=0,
            should_show=False,
            is_early_estimate=False,
            period_type=period_type,
        )

    days_elapsed, total_days = _elapsed_and_total_days(reference_period, period_type, today)

    to_date_net = 0.0
    for tx in transactions:
        occurred_on = tx.occurred_on
        if reference_period.contains(occurred_on) and occurred_on <= today:
            to_date_net += tx.signed_amount

    daily_average = to_date_net / days_elapsed if days_elapsed > 0 else 0

    if days_elapsed < MIN_DAYS_FOR_PROJECTION or not transactions:
        logger.debug(
            f"Projection for {reference_period.label} hidden: "
            f"{days_elapsed} day(s) elapsed, {len(transactions)} transaction(s)"
        )
        return ProjectionResult(
            projection=None,
            daily_average=daily_average,
            days_elapsed=days_elapsed,
            total_days=total_days,
            should_show=False,
            is_early_estimate=False,
            period_type=period_type,
        )

    return ProjectionResult(
        projection=to_date_net / days_elapsed * total_days,
        daily_average=daily_average,
        days_elapsed=days_elapsed,
        total_days=total_days,
        should_show=True,
        is_early_estimate=days_elapsed <= 2,
        period_type=period_type,
    )


def calculate_projection(
    transactions: Iterable[Union[Transaction, dict]],
    selected_month: str,
    today: Optional[date] = None,
) -> ProjectionResult:
    """Month-to-date projection for 'YYYY-MM'."""
    return project_period(transactions, ReferencePeriod.parse(selected_month), "month", today)


def calculate_yearly_projection(
    transactions: Iterable[Union[Transaction, dict]],
    selected_year: Union[str, int],
    today: Optional[date] = None,
) -> ProjectionResult:
    """Year-to-date projection for 'YYYY'."""
    return project_period(transactions, ReferencePeriod(year=int(selected_year)), "year", today)


def on_track_message(result: ProjectionResult, currency_symbol: str) -> Optional[str]:
    """Headline for the on-track banner, None when nothing should be shown."""
    if result.is_too_early:
        return "Too early to project. Add more activity."
    if not result.should_show or result.projection is None:
        return None

    verb = "lose" if result.projection < 0 else "earn"
    amount = format_currency(abs(result.projection), currency_symbol)
    message = f"You're on track to {verb} ~{amount} this {result.period_type}."

    # Day 3 is the first day shown and is still labelled as an estimate
    if result.is_early_estimate or result.days_elapsed <= MIN_DAYS_FOR_PROJECTION:
        message += " (early estimate)"
    return message


def projection_basis(result: ProjectionResult, currency_symbol: str) -> str:
    """Secondary banner line describing the run rate behind the projection."""
    daily = format_currency(abs(result.daily_average), currency_symbol)
    days = "day" if result.days_elapsed == 1 else "days"
    return f"Based on {daily}/day across {result.days_elapsed} {days}."


def goal_progress(net_to_date: float, monthly_net_goal: Optional[float]) -> Optional[int]:
    """Whole percent of the monthly net goal reached, clamped to 0-100."""
    if not monthly_net_goal or monthly_net_goal <= 0:
        return None
    return max(0, min(100, ratio_to_percent(net_to_date / monthly_net_goal)))
