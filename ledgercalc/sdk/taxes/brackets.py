"""Progressive income tax from per-jurisdiction marginal brackets.

The rate table lives in rates.yaml next to this module. It is loaded and
validated once at import and exposed read-only as RATE_TABLE.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .schemas import JurisdictionRates, TaxSettings

logger = logging.getLogger(__name__)

CUSTOM_LOCATION = "custom"

# Business types that attract the US self-employment surcharge
SELF_EMPLOYED_TYPES = ("self-employed", "sole-trader")

BUSINESS_TYPE_NAMES = {
    "sole-trader": "Sole Trader",
    "llc": "LLC",
    "corporation": "Corporation",
    "partnership": "Partnership",
    "self-employed": "Self-Employed",
}
BUSINESS_TYPES = tuple(BUSINESS_TYPE_NAMES)


def _get_rates_path() -> Path:
    return Path(__file__).parent / "rates.yaml"


def _load_rate_table() -> Mapping[str, JurisdictionRates]:
    """Load and validate rates.yaml into a read-only mapping."""
    with open(_get_rates_path(), "r") as f:
        raw = yaml.safe_load(f) or {}

    table = {}
    for code, data in raw.items():
        try:
            table[str(code)] = JurisdictionRates(**data)
        except ValidationError as e:
            raise ValueError(f"Invalid rate table entry '{code}': {e}") from e

    return MappingProxyType(table)


RATE_TABLE = _load_rate_table()

TAX_LOCATIONS = tuple(RATE_TABLE) + (CUSTOM_LOCATION,)


def get_jurisdiction(location: str) -> Optional[JurisdictionRates]:
    """Look up a jurisdiction's schedule, None if unknown."""
    return RATE_TABLE.get(location)


def get_location_name(location: str) -> str:
    """Display name for a jurisdiction code, falling back to the code."""
    if location == CUSTOM_LOCATION:
        return "Custom"
    rates = RATE_TABLE.get(location)
    return rates.name if rates else location


def get_business_type_name(business_type: str) -> str:
    """Display name for a business type, falling back to the code."""
    return BUSINESS_TYPE_NAMES.get(business_type, business_type)


@dataclass
class BracketSlice:
    """Portion of income taxed at one bracket's rate."""

    min: float
    max: Optional[float]
    rate: float
    taxable: float
    tax: float


@dataclass
class TaxBreakdown:
    """Tax owed with the per-bracket working shown."""

    taxable_income: float
    location: str
    slices: List[BracketSlice] = field(default_factory=list)
    bracket_tax: float = 0.0
    self_employment_tax: float = 0.0

    @property
    def total(self) -> float:
        return max(0.0, self.bracket_tax + self.self_employment_tax)

    @property
    def effective_rate(self) -> float:
        if self.taxable_income <= 0:
            return 0.0
        return self.total / self.taxable_income

    def to_dict(self) -> dict:
        return {
            "taxable_income": self.taxable_income,
            "location": self.location,
            "slices": [vars(s) for s in self.slices],
            "bracket_tax": self.bracket_tax,
            "self_employment_tax": self.self_employment_tax,
            "total": self.total,
            "effective_rate": self.effective_rate,
        }


def _as_settings(settings: Union[TaxSettings, dict]) -> TaxSettings:
    if isinstance(settings, TaxSettings):
        return settings
    return TaxSettings(**settings)


def tax_breakdown(taxable_income: float, settings: Union[TaxSettings, dict]) -> TaxBreakdown:
    """Calculate tax owed on taxable_income, keeping each bracket's slice.

    Each slice of income is taxed only at its own bracket's rate. For the US,
    self-employed and sole-trader filers who opt in also pay the flat
    self-employment rate on the full taxable income.

    Args:
        taxable_income: Income subject to tax (<= 0 owes nothing)
        settings: TaxSettings or an equivalent dict

    Returns:
        TaxBreakdown whose total is the tax owed
    """
    settings = _as_settings(settings)
    result = TaxBreakdown(taxable_income=taxable_income, location=settings.location)

    if taxable_income <= 0:
        return result

    if settings.location == CUSTOM_LOCATION:
        if settings.custom_rate:
            result.bracket_tax = taxable_income * (settings.custom_rate / 100)
        return result

    rates = get_jurisdiction(settings.location)
    if rates is None or not rates.brackets:
        logger.debug(f"No brackets configured for location '{settings.location}'")
        return result

    for bracket in rates.brackets:
        if taxable_income > bracket.min:
            income_in_this_bracket = min(taxable_income, bracket.upper) - bracket.min
            if income_in_this_bracket > 0:
                bracket_tax = income_in_this_bracket * bracket.rate
                result.slices.append(BracketSlice(
                    min=bracket.min,
                    max=bracket.max,
                    rate=bracket.rate,
                    taxable=income_in_this_bracket,
                    tax=bracket_tax,
                ))
                result.bracket_tax += bracket_tax

    if (
        settings.location == "US"
        and settings.include_self_employment
        and rates.self_employment
        and settings.business_type in SELF_EMPLOYED_TYPES
    ):
        # Flat on gross taxable income; no wage base cap
        result.self_employment_tax = taxable_income * rates.self_employment

    return result


def calculate_tax(taxable_income: float, settings: Union[TaxSettings, dict]) -> float:
    """Calculate tax owed on taxable_income for the given settings."""
    return tax_breakdown(taxable_income, settings).total
