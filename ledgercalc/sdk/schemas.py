"""Pydantic schemas for ledger-calc data validation.

Transactions come from external exports, so unknown fields (user ids,
audit columns) are ignored. The profile is user-authored and uses
extra='forbid' so typos cause clear errors rather than silent ignoring.
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .taxes.schemas import TaxSettings


UNCATEGORIZED = "Uncategorized"

TransactionType = Literal["income", "expense"]


class Transaction(BaseModel):
    """A single income or expense entry.

    The sign lives in `type`; `amount` is always a non-negative magnitude.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., description="Opaque unique identifier")
    amount: float = Field(..., ge=0, description="Non-negative magnitude")
    type: TransactionType = Field(..., description="'income' or 'expense'")
    category: Optional[str] = Field(default=None, description="Optional label")
    hours_spent: Optional[float] = Field(
        default=None, ge=0,
        description="Hours worked for this entry (effective hourly rate only)",
    )
    created_at: datetime = Field(..., description="Timestamp the entry was recorded")
    transaction_date: Optional[date] = Field(
        default=None,
        description="Economic date of the entry, when it differs from created_at",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Database exports commonly use integer keys
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _accept_bare_date(cls, value):
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str) and len(value.strip()) == 10:
            return f"{value.strip()}T00:00:00"
        return value

    @field_validator("category", "transaction_date", "hours_spent", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def occurred_on(self) -> date:
        """Calendar date the transaction belongs to.

        Uses transaction_date when present, otherwise the date portion of
        created_at exactly as recorded (no timezone conversion).
        """
        if self.transaction_date is not None:
            return self.transaction_date
        return self.created_at.date()

    @property
    def category_label(self) -> str:
        """Category used for grouping."""
        return self.category or UNCATEGORIZED

    @property
    def signed_amount(self) -> float:
        return self.amount if self.type == "income" else -self.amount


class Profile(BaseModel):
    """User's dashboard preferences (profile.yaml)."""

    model_config = ConfigDict(extra="forbid")

    currency_symbol: str = Field(default="£", min_length=1)
    benchmark_hourly: float = Field(
        default=28, gt=0,
        description="Reference hourly rate used by the hourly caption",
    )
    monthly_net_goal: Optional[float] = Field(
        default=None, description="Monthly net profit target",
    )
    tax: Optional[TaxSettings] = Field(
        default=None, description="Jurisdiction and business type for tax estimates",
    )
