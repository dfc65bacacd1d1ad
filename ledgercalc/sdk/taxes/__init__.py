"""taxes - Progressive income tax estimates.

Scope:
- Per-jurisdiction marginal bracket schedules (rates.yaml)
- Custom flat-rate estimates
- US self-employment surcharge

Constraints:
- Pure calculation - receives an income and settings, returns an amount
- Unknown jurisdictions produce no tax rather than an error
- The rate table is loaded once at import and never mutated

Usage:
    from ledgercalc.sdk.taxes import calculate_tax, TaxSettings

    tax = calculate_tax(60000, TaxSettings(location="UK"))
"""

from .schemas import TaxBracket, JurisdictionRates, TaxSettings

from .brackets import (
    RATE_TABLE,
    TAX_LOCATIONS,
    BUSINESS_TYPES,
    CUSTOM_LOCATION,
    SELF_EMPLOYED_TYPES,
    BracketSlice,
    TaxBreakdown,
    calculate_tax,
    tax_breakdown,
    get_jurisdiction,
    get_location_name,
    get_business_type_name,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "JurisdictionRates",
    "TaxSettings",
    # Rate table
    "RATE_TABLE",
    "TAX_LOCATIONS",
    "BUSINESS_TYPES",
    "CUSTOM_LOCATION",
    "SELF_EMPLOYED_TYPES",
    "get_jurisdiction",
    "get_location_name",
    "get_business_type_name",
    # Calculation
    "BracketSlice",
    "TaxBreakdown",
    "calculate_tax",
    "tax_breakdown",
]
