"""Settings CLI commands for Ledger Calc.

Manages settings.json - default transactions file, profile location.
"""

import click
from pathlib import Path

from ledgercalc.sdk import (
    ConfigError,
    load_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_settings_path,
    get_profile_path,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - transactions_file: export read when no FILE argument is given
    - profile: path to profile.yaml (if not in the config directory)
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  profile: {get_profile_path()}")


def _path_setting(key, path, clear, label):
    """Show, set or clear a file path setting."""
    if clear:
        if clear_setting(key):
            click.echo(f"Cleared {key} setting.")
        else:
            click.echo(f"{key} was not set.")
        return

    if not path:
        current = get_setting(key)
        if current:
            click.echo(f"Current {key}: {current}")
        else:
            click.echo(f"No {key} set.")
        return

    file_path = Path(path).expanduser().resolve()
    if not file_path.exists():
        raise click.ClickException(f"{label} not found: {file_path}")
    if not file_path.is_file():
        raise click.ClickException(f"{label} is not a file: {file_path}")

    set_setting(key, str(file_path))
    click.echo(f"Set {key}: {file_path}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("transactions-file")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear the default transactions file")
def settings_transactions_file(path, clear):
    """Set or clear the default transactions export.

    PATH is a .json or .csv export of transactions.

    Examples:
        ledger-calc settings transactions-file ~/exports/transactions.json
        ledger-calc settings transactions-file --clear
    """
    _path_setting("transactions_file", path, clear, "Transactions file")


@settings.command("profile")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Use profile.yaml in the config directory")
def settings_profile(path, clear):
    """Set or clear a custom profile.yaml location."""
    _path_setting("profile", path, clear, "Profile")
