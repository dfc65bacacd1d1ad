"""Ledger Calc CLI - Command-line interface for dashboard analytics."""

import json
from datetime import date, datetime

import click
from pydantic import ValidationError
from rich.console import Console

from ledgercalc import __version__
from ledgercalc.sdk import (
    BUSINESS_TYPES,
    ConfigError,
    ReferencePeriod,
    TAX_LOCATIONS,
    TaxSettings,
    TransactionLoadError,
    build_captions,
    build_dashboard,
    filter_period,
    get_setting,
    load_profile,
    load_transactions,
    project_period,
    summarize,
    tax_breakdown,
)

from .profile_commands import profile as profile_group
from .settings_commands import settings as settings_group
from .renderers.dashboard_renderer import (
    render_captions,
    render_dashboard,
    render_jurisdictions,
    render_projection,
    render_tax_breakdown,
)


@click.group()
@click.version_option(version=__version__, prog_name="ledger-calc")
def cli():
    """Ledger Calc - Income/expense dashboard analytics.

    Summaries, end-of-period projections, captions and tax estimates
    computed from a transaction export (.json or .csv).

    Configuration is loaded from (in order):

    \b
    1. LEDGER_CALC_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set via CLI)
    3. ~/.config/ledger-calc/profile.yaml (XDG default)
    """
    pass


cli.add_command(profile_group)
cli.add_command(settings_group)


def _parse_today(value):
    if not value:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD.", param_hint="--today")


def _resolve_period(month, year, today):
    """Pick the reference period from --month/--year (current month by default)."""
    if month and year:
        raise click.UsageError("Use either --month or --year, not both.")
    try:
        if month:
            period = ReferencePeriod.parse(month)
            if period.month is None:
                raise ValueError(f"Invalid month '{month}'. Use YYYY-MM.")
            return period
        if year:
            period = ReferencePeriod.parse(year)
            if period.month is not None:
                raise ValueError(f"Invalid year '{year}'. Use YYYY.")
            return period
    except ValueError as e:
        raise click.BadParameter(str(e))
    return ReferencePeriod.current("month", today)


def _load(file):
    """Load transactions from FILE or the transactions_file setting."""
    try:
        path = file or get_setting("transactions_file")
    except ConfigError as e:
        raise click.ClickException(str(e))

    if not path:
        raise click.UsageError(
            "No transactions file given. Pass FILE or set a default with:\n"
            "  ledger-calc settings transactions-file /path/to/transactions.json"
        )
    try:
        return load_transactions(path)
    except TransactionLoadError as e:
        raise click.ClickException(str(e))


def _profile():
    try:
        return load_profile()
    except ConfigError as e:
        raise click.ClickException(str(e))


def _echo_json(data):
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def period_options(f):
    """Shared FILE/--month/--year/--today/--format options."""
    f = click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
                     help="Output format (default: text)")(f)
    f = click.option("--today", "today_str", metavar="YYYY-MM-DD",
                     help="Treat this date as today (default: system date)")(f)
    f = click.option("--year", metavar="YYYY", help="Reference year")(f)
    f = click.option("--month", metavar="YYYY-MM", help="Reference month (default: current month)")(f)
    f = click.argument("file", required=False, type=click.Path())(f)
    return f


@cli.command("dashboard")
@period_options
def dashboard(file, month, year, today_str, output_format):
    """Show the dashboard for a month or year.

    Totals, changes against the previous period, captions, the end-of-period
    projection, goal progress and (with tax settings in the profile) a tax
    estimate on the period's net.

    \b
    Examples:
      ledger-calc dashboard transactions.json --month 2024-03
      ledger-calc dashboard --year 2024 --format json
    """
    today = _parse_today(today_str)
    period = _resolve_period(month, year, today)
    transactions = _load(file)

    report = build_dashboard(transactions, period, profile=_profile(), today=today)

    if output_format == "json":
        _echo_json(report.to_dict())
    else:
        render_dashboard(Console(), report)


@cli.command("project")
@period_options
def project(file, month, year, today_str, output_format):
    """Project the current month's or year's net profit.

    Only the period containing today is projected, and only once at least
    3 days have elapsed.
    """
    today = _parse_today(today_str)
    period = _resolve_period(month, year, today)
    transactions = _load(file)

    result = project_period(transactions, period, today=today)

    if output_format == "json":
        _echo_json(result.to_dict())
    else:
        render_projection(Console(), result, _profile().currency_symbol)


@cli.command("captions")
@period_options
def captions(file, month, year, today_str, output_format):
    """Show the summary-card captions for a period.

    The previous period's income is used as the comparison baseline.
    """
    today = _parse_today(today_str)
    period = _resolve_period(month, year, today)
    transactions = _load(file)
    user_profile = _profile()

    up_to = today if period.period_type == "year" and period.year == today.year else None
    current = filter_period(transactions, period, up_to=up_to)
    summary = summarize(current)
    previous = summarize(filter_period(transactions, period.previous()))

    result = build_captions(
        income=summary.income,
        expenses=summary.expenses,
        net=summary.net,
        effective_hourly=summary.effective_hourly,
        transactions=current,
        rolling_income_average=previous.income,
        benchmark_hourly=user_profile.benchmark_hourly,
        currency_symbol=user_profile.currency_symbol,
    )

    if output_format == "json":
        _echo_json(result.to_dict())
    else:
        render_captions(Console(), result)


@cli.command("tax")
@click.argument("income", type=float)
@click.option("--location", "-l", help=f"Jurisdiction code ({', '.join(TAX_LOCATIONS)})")
@click.option("--business-type", "-b", type=click.Choice(BUSINESS_TYPES), help="Business type")
@click.option("--custom-rate", type=float, help="Flat percentage rate for location 'custom'")
@click.option("--self-employment/--no-self-employment", default=None,
              help="Include the US self-employment surcharge")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
def tax(income, location, business_type, custom_rate, self_employment, output_format):
    """Estimate tax owed on INCOME.

    Options override the profile's tax settings.

    \b
    Examples:
      ledger-calc tax 60000 --location UK
      ledger-calc tax 85000 -l US -b self-employed --self-employment
      ledger-calc tax 40000 -l custom --custom-rate 20
    """
    user_profile = _profile()
    base = user_profile.tax.model_dump() if user_profile.tax else {}

    overrides = {
        "location": location,
        "business_type": business_type,
        "custom_rate": custom_rate,
        "include_self_employment": self_employment,
    }
    base.update({key: value for key, value in overrides.items() if value is not None})

    if not base.get("location"):
        raise click.UsageError(
            "No location given. Pass --location or set one with:\n"
            "  ledger-calc profile set tax.location UK"
        )
    if base["location"] not in TAX_LOCATIONS:
        click.echo(f"Warning: unknown location '{base['location']}', no brackets apply.", err=True)

    try:
        settings = TaxSettings(**base)
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax settings: {e}")

    breakdown = tax_breakdown(income, settings)

    if output_format == "json":
        _echo_json(breakdown.to_dict())
    else:
        render_tax_breakdown(Console(), breakdown, user_profile.currency_symbol)


@cli.command("jurisdictions")
def jurisdictions():
    """List jurisdictions with bracket schedules."""
    render_jurisdictions(Console())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
