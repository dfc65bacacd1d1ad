"""Profile CLI commands for Ledger Calc.

Manages user preferences (profile.yaml) - currency, benchmark, goal, tax.
"""

import click
import yaml

from ledgercalc.sdk import (
    get_profile_path,
    load_profile,
    set_profile_value,
    get_location_name,
    get_business_type_name,
    ConfigError,
)


@click.group()
def profile():
    """Manage the user profile (profile.yaml).

    \b
    Keys:
      currency_symbol              e.g. £, $, €
      benchmark_hourly             reference hourly rate (default 28)
      monthly_net_goal             monthly net profit target
      tax.location                 jurisdiction code or 'custom'
      tax.business_type            sole-trader, llc, corporation, ...
      tax.custom_rate              percent, for location 'custom'
      tax.include_self_employment  true/false (US only)
    """
    pass


@profile.command("path")
def profile_path():
    """Print the profile.yaml path."""
    click.echo(get_profile_path())


@profile.command("show")
def profile_show():
    """Show effective profile values (defaults included)."""
    path = get_profile_path()
    try:
        current = load_profile()
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Profile: {path}{'' if path.exists() else ' (not found, using defaults)'}")
    click.echo()
    click.echo(yaml.dump(current.model_dump(mode="json"), default_flow_style=False,
                         sort_keys=False, allow_unicode=True).rstrip())

    if current.tax:
        click.echo()
        click.echo(f"Tax: {get_location_name(current.tax.location)}, "
                   f"{get_business_type_name(current.tax.business_type)}")


@profile.command("set")
@click.argument("key")
@click.argument("value")
def profile_set(key, value):
    """Set a profile value by dot-notation KEY.

    Examples:
        ledger-calc profile set currency_symbol $
        ledger-calc profile set tax.location US
        ledger-calc profile set tax.include_self_employment true
    """
    # Parse YAML scalars so numbers and booleans keep their types
    parsed = yaml.safe_load(value) if value.strip() else value
    if key == "currency_symbol" or key.endswith((".location", ".business_type")):
        parsed = value

    try:
        path = set_profile_value(key, parsed)
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {parsed}")
    click.echo(f"Saved to: {path}")
