"""Configuration management for Ledger Calc.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)
   - transactions_file: default transaction export to read

2. profile.yaml - User's dashboard preferences
   - currency_symbol, benchmark_hourly, monthly_net_goal
   - tax: location, business_type, custom_rate, include_self_employment

Config directory resolution:
1. LEDGER_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/ledger-calc/ (XDG_CONFIG_HOME fallback)

Profile resolution:
1. settings.json "profile" key (if set via CLI)
2. profile.yaml in same config directory
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .schemas import Profile


APP_NAME = "ledger-calc"
CONFIG_PATH_ENV = "LEDGER_CALC_CONFIG_PATH"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"


class ConfigError(Exception):
    """Base class for configuration problems."""
    pass


class ProfileNotFoundError(ConfigError):
    """Raised when a profile is required but none is found."""
    pass


class ProfileValidationError(ConfigError):
    """Raised when profile.yaml content is invalid."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. LEDGER_CALC_CONFIG_PATH environment variable
    2. ~/.config/ledger-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If settings.json is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid settings file {settings_file}: {e}") from e


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Path to profile.yaml

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile).expanduser()
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update with: ledger-calc settings profile /path/to/profile.yaml"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found at {profile_path}\n\n"
            f"Create one with: ledger-calc profile set currency_symbol £"
        )

    return profile_path


def _load_profile_data(require_exists: bool) -> dict:
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    try:
        with open(profile_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileValidationError(f"Invalid YAML in {profile_path}: {e}") from e

    if not isinstance(data, dict):
        raise ProfileValidationError(f"{profile_path}: expected a mapping at the top level")
    return data


def load_profile(require_exists: bool = False) -> Profile:
    """Load and validate the user profile.

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Profile (all defaults if no profile file exists)

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
        ProfileValidationError: If the profile content is invalid
    """
    data = _load_profile_data(require_exists)
    try:
        return Profile(**data)
    except ValidationError as e:
        raise ProfileValidationError(f"Invalid profile: {e}") from e


def save_profile(profile: Profile, path: Optional[Path] = None) -> Path:
    """Save the user profile to profile.yaml.

    Only values that differ from the defaults are written.

    Returns:
        Path to the saved profile file
    """
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(
            profile.model_dump(mode="json", exclude_defaults=True),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    return path


def set_profile_value(key: str, value: Any) -> Path:
    """Set a profile value by dot-notation key.

    Args:
        key: Dot-notation key (e.g., "tax.location")
        value: Value to set (validated against the Profile schema)

    Returns:
        Path to the saved profile file

    Raises:
        ProfileValidationError: If the resulting profile is invalid
    """
    data = _load_profile_data(require_exists=False)

    parts = key.split(".")
    current = data

    # Navigate/create nested structure
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value

    try:
        profile = Profile(**data)
    except ValidationError as e:
        raise ProfileValidationError(f"Invalid value for '{key}': {e}") from e

    return save_profile(profile)
