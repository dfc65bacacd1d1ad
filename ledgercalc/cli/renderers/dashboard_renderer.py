"""Rich renderers for dashboard, projection, caption and tax output.

Transforms SDK results into formatted Rich tables and panels.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ledgercalc.sdk import (
    Captions,
    DashboardReport,
    ProjectionResult,
    TaxBreakdown,
    format_currency,
    format_percent,
    get_location_name,
    on_track_message,
    projection_basis,
)
from ledgercalc.sdk.taxes import RATE_TABLE


def _format_change(change: Optional[float]) -> str:
    """Format a period-over-period change with color coding."""
    if change is None:
        return "[dim]-[/dim]"
    color = "green" if change >= 0 else "red"
    return f"[{color}]{change:+.0f}%[/{color}]"


def render_dashboard(console: Console, report: DashboardReport) -> None:
    """Render the full dashboard for one period.

    Args:
        console: Rich Console instance
        report: SDK output from build_dashboard()
    """
    symbol = report.currency_symbol
    summary = report.summary

    # On-track banner first
    if report.on_track:
        body = report.on_track
        if report.projection_basis:
            body += f"\n[dim]{report.projection_basis}[/dim]"
        if report.goal_progress is not None:
            goal = format_currency(report.monthly_net_goal, symbol)
            body += f"\n[dim]Goal: {format_currency(summary.net, symbol)} / {goal} ({report.goal_progress}%)[/dim]"
        console.print(Panel(body, title="Projection", border_style="cyan"))

    table = Table(title=f"Dashboard {report.period.label}", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Note")

    captions = report.captions
    table.add_row("Income", format_currency(summary.income, symbol),
                  _format_change(report.changes["income"]), captions.income)
    table.add_row("Expenses", format_currency(summary.expenses, symbol),
                  _format_change(report.changes["expenses"]), captions.expenses)
    table.add_row("Net", format_currency(summary.net, symbol),
                  _format_change(report.changes["net"]), captions.net)

    hourly_note = captions.hourly or "Add hours to transactions to see your rate."
    table.add_row("Effective hourly", format_currency(summary.effective_hourly, symbol, decimals=2),
                  _format_change(report.changes["hourly"]), hourly_note)
    console.print(table)

    if report.categories:
        _render_categories(console, report)

    if report.tax is not None:
        render_tax_breakdown(console, report.tax, symbol)


def _render_categories(console: Console, report: DashboardReport) -> None:
    """Render the expense category breakdown."""
    symbol = report.currency_symbol
    total = sum(report.categories.values())

    table = Table(title="Expenses by category", box=box.SIMPLE)
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")

    for category, amount in report.categories.items():
        share = format_percent(amount / total) if total else "-"
        table.add_row(category, format_currency(amount, symbol), share)

    if report.top_category_change is not None:
        table.caption = f"Top category share vs previous period: {report.top_category_change:+.0f}%"

    console.print(table)


def render_projection(console: Console, result: ProjectionResult, currency_symbol: str) -> None:
    """Render a projection result, or explain why there is none."""
    message = on_track_message(result, currency_symbol)

    # Wrong period: nothing elapsed
    if result.days_elapsed == 0:
        console.print(Panel(
            f"[yellow]No projection: the selected {result.period_type} is not the current one.[/yellow]",
            title="Projection",
            border_style="yellow"
        ))
        return

    if message is None:
        message = f"No projection: no transactions recorded this {result.period_type} yet."

    if not result.should_show:
        console.print(Panel(
            f"[yellow]{message}[/yellow]\n[dim]{projection_basis(result, currency_symbol)}[/dim]",
            title="Projection",
            border_style="yellow"
        ))
        return

    console.print(Panel(
        f"{message}\n[dim]{projection_basis(result, currency_symbol)} "
        f"{result.days_elapsed} of {result.total_days} days elapsed.[/dim]",
        title="Projection",
        border_style="cyan"
    ))


def render_captions(console: Console, captions: Captions) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("card", style="dim")
    table.add_column("caption")

    for key, value in captions.to_dict().items():
        table.add_row(key.title(), value or "[dim](none)[/dim]")

    console.print(Panel(table, title="Captions", border_style="dim"))


def render_tax_breakdown(console: Console, breakdown: TaxBreakdown, currency_symbol: str) -> None:
    """Render per-bracket tax working and the total."""
    table = Table(title=f"Tax estimate ({get_location_name(breakdown.location)})", box=box.SIMPLE)
    table.add_column("Bracket")
    table.add_column("Rate", justify="right")
    table.add_column("Taxable", justify="right")
    table.add_column("Tax", justify="right")

    for bracket in breakdown.slices:
        upper = format_currency(bracket.max, currency_symbol) if bracket.max is not None else "and above"
        table.add_row(
            f"{format_currency(bracket.min, currency_symbol)} - {upper}",
            f"{bracket.rate * 100:g}%",
            format_currency(bracket.taxable, currency_symbol, decimals=2),
            format_currency(bracket.tax, currency_symbol, decimals=2),
        )

    if breakdown.self_employment_tax:
        table.add_row("Self-employment", "", "",
                      format_currency(breakdown.self_employment_tax, currency_symbol, decimals=2))

    table.add_row(
        "[bold]Total[/bold]",
        f"[bold]{breakdown.effective_rate * 100:.1f}%[/bold]",
        format_currency(breakdown.taxable_income, currency_symbol, decimals=2),
        f"[bold]{format_currency(breakdown.total, currency_symbol, decimals=2)}[/bold]",
    )
    console.print(table)


def render_jurisdictions(console: Console) -> None:
    """List configured jurisdictions."""
    table = Table(title="Jurisdictions", box=box.SIMPLE)
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Brackets", justify="right")
    table.add_column("Top rate", justify="right")

    for code, rates in RATE_TABLE.items():
        top_rate = f"{rates.brackets[-1].rate * 100:g}%" if rates.brackets else "-"
        table.add_row(code, rates.name, str(len(rates.brackets)), top_rate)

    table.add_row("custom", get_location_name("custom"), "-", "flat")
    console.print(table)
