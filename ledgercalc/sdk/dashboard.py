"""Dashboard composition for one reference period.

Wires the independent calculators together the way the dashboard view
uses them: current and previous period summaries, captions, projection,
goal progress and an estimated tax figure.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from .captions import Captions, build_captions
from .projection import (
    ProjectionResult,
    goal_progress,
    on_track_message,
    project_period,
    projection_basis,
)
from .schemas import Profile, Transaction
from .summary import (
    PeriodSummary,
    category_totals,
    net_series,
    percentage_change,
    summarize,
    top_category_share_change,
)
from .taxes import TaxBreakdown, tax_breakdown
from .transactions import ReferencePeriod, as_transactions, filter_period


@dataclass
class DashboardReport:
    """Everything the dashboard shows for one period."""

    period: ReferencePeriod
    today: date
    currency_symbol: str
    summary: PeriodSummary
    previous_summary: PeriodSummary
    changes: Dict[str, Optional[float]]
    captions: Captions
    projection: ProjectionResult
    on_track: Optional[str]
    projection_basis: Optional[str]
    goal_progress: Optional[int]
    monthly_net_goal: Optional[float]
    top_category_change: Optional[float]
    categories: Dict[str, float] = field(default_factory=dict)
    series: List[dict] = field(default_factory=list)
    tax: Optional[TaxBreakdown] = None

    def to_dict(self) -> dict:
        return {
            "period": self.period.label,
            "period_type": self.period.period_type,
            "today": self.today.isoformat(),
            "currency_symbol": self.currency_symbol,
            "summary": self.summary.to_dict(),
            "previous_summary": self.previous_summary.to_dict(),
            "changes": self.changes,
            "captions": self.captions.to_dict(),
            "projection": self.projection.to_dict(),
            "on_track": self.on_track,
            "projection_basis": self.projection_basis,
            "goal_progress": self.goal_progress,
            "monthly_net_goal": self.monthly_net_goal,
            "top_category_change": self.top_category_change,
            "categories": self.categories,
            "series": self.series,
            "tax": self.tax.to_dict() if self.tax else None,
        }


def build_dashboard(
    transactions: Iterable[Union[Transaction, dict]],
    period: Union[ReferencePeriod, str],
    profile: Optional[Profile] = None,
    today: Optional[date] = None,
) -> DashboardReport:
    """Compute the dashboard for a month or year.

    Args:
        transactions: All known transactions (any dates)
        period: ReferencePeriod or 'YYYY-MM' / 'YYYY'
        profile: Currency, benchmark, goal and tax preferences (defaults if None)
        today: Date treated as today (defaults to date.today())

    Returns:
        DashboardReport
    """
    if not isinstance(period, ReferencePeriod):
        period = ReferencePeriod.parse(period)
    profile = profile or Profile()
    today = today or date.today()
    transactions = as_transactions(transactions)

    # Current year is shown year-to-date; months and past years in full
    up_to = today if period.period_type == "year" and period.year == today.year else None
    current = filter_period(transactions, period, up_to=up_to)
    previous = filter_period(transactions, period.previous())

    summary = summarize(current)
    previous_summary = summarize(previous)

    changes = {
        "income": percentage_change(summary.income, previous_summary.income),
        "expenses": percentage_change(summary.expenses, previous_summary.expenses),
        "net": percentage_change(summary.net, previous_summary.net),
        "hourly": percentage_change(summary.effective_hourly, previous_summary.effective_hourly),
    }

    captions = build_captions(
        income=summary.income,
        expenses=summary.expenses,
        net=summary.net,
        effective_hourly=summary.effective_hourly,
        transactions=current,
        # Previous period income stands in for a rolling average
        rolling_income_average=previous_summary.income,
        benchmark_hourly=profile.benchmark_hourly,
        currency_symbol=profile.currency_symbol,
    )

    projection = project_period(transactions, period, today=today)
    basis = projection_basis(projection, profile.currency_symbol) if projection.should_show else None

    progress = None
    if period.period_type == "month":
        progress = goal_progress(summary.net, profile.monthly_net_goal)

    categories = dict(sorted(category_totals(current).items()))

    return DashboardReport(
        period=period,
        today=today,
        currency_symbol=profile.currency_symbol,
        summary=summary,
        previous_summary=previous_summary,
        changes=changes,
        captions=captions,
        projection=projection,
        on_track=on_track_message(projection, profile.currency_symbol),
        projection_basis=basis,
        goal_progress=progress,
        monthly_net_goal=profile.monthly_net_goal if progress is not None else None,
        top_category_change=top_category_share_change(
            current, summary.expenses, previous, previous_summary.expenses
        ),
        categories=categories,
        series=net_series(current, period),
        tax=tax_breakdown(summary.net, profile.tax) if profile.tax else None,
    )
