"""Pydantic schemas for tax rate table and tax settings validation.

These schemas validate taxes/rates.yaml and provide typed access to each
jurisdiction's marginal brackets and self-employment rate.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single marginal bracket. `max` is None for the open top bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound of the bracket")
    max: Optional[float] = Field(default=None, description="Upper bound (None if open-ended)")
    # Some schedules are stored as-published with rates above 1.0 (CH)
    rate: float = Field(..., ge=0, description="Tax rate as decimal")

    @property
    def upper(self) -> float:
        return self.max if self.max is not None else float("inf")


class JurisdictionRates(BaseModel):
    """Marginal schedule for one jurisdiction."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    brackets: tuple[TaxBracket, ...]
    self_employment: Optional[float] = Field(
        default=None, ge=0, le=1,
        description="Flat self-employment surcharge rate (US only)",
    )

    @model_validator(mode="after")
    def check_coverage(self) -> "JurisdictionRates":
        """Brackets must cover [0, inf) in ascending order with no gaps."""
        if not self.brackets:
            return self

        errors = []
        if self.brackets[0].min != 0:
            errors.append(f"first bracket starts at {self.brackets[0].min}, expected 0")

        for lower, upper in zip(self.brackets, self.brackets[1:]):
            if lower.max is None:
                errors.append(f"bracket at {lower.min} is open-ended but is not the last bracket")
            elif lower.max != upper.min:
                errors.append(f"bracket ending at {lower.max} is followed by one starting at {upper.min}")

        for bracket in self.brackets:
            if bracket.max is not None and bracket.max < bracket.min:
                errors.append(f"bracket max {bracket.max} is below its min {bracket.min}")

        if self.brackets[-1].max is not None:
            errors.append(f"last bracket has max {self.brackets[-1].max}, expected open-ended")

        if errors:
            raise ValueError(f"{self.name}: " + "; ".join(errors))

        return self


class TaxSettings(BaseModel):
    """Jurisdiction and business type used for a tax estimate.

    `location` and `business_type` are plain strings: unknown codes are
    tolerated and simply produce no bracket data.
    """
    model_config = ConfigDict(extra="forbid")

    location: str = Field(..., description="Jurisdiction code (e.g. 'UK') or 'custom'")
    business_type: str = Field(default="sole-trader")
    custom_rate: Optional[float] = Field(
        default=None, ge=0,
        description="Flat percentage rate, used only when location is 'custom'",
    )
    include_self_employment: bool = Field(
        default=False,
        description="Add the self-employment surcharge (US only)",
    )
