"""Ledger Calc SDK - Dashboard metrics, projections, captions and tax."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_profile_path,
    load_profile,
    save_profile,
    set_profile_value,
    ConfigError,
    ProfileNotFoundError,
    ProfileValidationError,
)

from .schemas import (
    Transaction,
    Profile,
    UNCATEGORIZED,
)

from .transactions import (
    ReferencePeriod,
    TransactionLoadError,
    resolve_occurred_on,
    as_transactions,
    filter_period,
    load_transactions,
)

from .summary import (
    PeriodSummary,
    summarize,
    percentage_change,
    category_totals,
    top_category,
    top_category_share_change,
    net_series,
)

from .projection import (
    ProjectionResult,
    project_period,
    calculate_projection,
    calculate_yearly_projection,
    on_track_message,
    projection_basis,
    goal_progress,
    MIN_DAYS_FOR_PROJECTION,
)

from .captions import (
    Captions,
    build_captions,
)

from .taxes import (
    TaxSettings,
    TaxBreakdown,
    calculate_tax,
    tax_breakdown,
    get_location_name,
    get_business_type_name,
    TAX_LOCATIONS,
    BUSINESS_TYPES,
)

from .formatting import (
    format_currency,
    format_percent,
    get_currency_code,
)

from .dashboard import (
    DashboardReport,
    build_dashboard,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "set_profile_value",
    "ConfigError",
    "ProfileNotFoundError",
    "ProfileValidationError",
    # Transactions
    "Transaction",
    "Profile",
    "UNCATEGORIZED",
    "ReferencePeriod",
    "TransactionLoadError",
    "resolve_occurred_on",
    "as_transactions",
    "filter_period",
    "load_transactions",
    # Summary
    "PeriodSummary",
    "summarize",
    "percentage_change",
    "category_totals",
    "top_category",
    "top_category_share_change",
    "net_series",
    # Projection
    "ProjectionResult",
    "project_period",
    "calculate_projection",
    "calculate_yearly_projection",
    "on_track_message",
    "projection_basis",
    "goal_progress",
    "MIN_DAYS_FOR_PROJECTION",
    # Captions
    "Captions",
    "build_captions",
    # Tax
    "TaxSettings",
    "TaxBreakdown",
    "calculate_tax",
    "tax_breakdown",
    "get_location_name",
    "get_business_type_name",
    "TAX_LOCATIONS",
    "BUSINESS_TYPES",
    # Formatting
    "format_currency",
    "format_percent",
    "get_currency_code",
    # Dashboard
    "DashboardReport",
    "build_dashboard",
]
