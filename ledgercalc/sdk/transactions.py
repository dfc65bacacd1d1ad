"""Transaction records: reference periods, date bucketing and file loading.

Every period calculation buckets a transaction by its resolved economic
date (`Transaction.occurred_on`), never by raw timestamp:

    transaction_date (YYYY-MM-DD)   if present
    created_at date portion         otherwise

Exports are read from local files:

    transactions.json   list of records, or {"transactions": [...]}
    transactions.csv    header row with field names; blank cells are None
"""

import calendar
import csv
import json
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterable, List, Literal, Optional, Union

from pydantic import ValidationError

from .schemas import Transaction

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

PeriodType = Literal["month", "year"]

SUPPORTED_SUFFIXES = (".json", ".csv")


class TransactionLoadError(Exception):
    """Raised when a transaction export cannot be read or validated."""
    pass


@dataclass(frozen=True)
class ReferencePeriod:
    """A calendar month (year + month) or a whole calendar year."""

    year: int
    month: Optional[int] = None

    def __post_init__(self):
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month {self.month}. Must be 1-12.")

    @classmethod
    def parse(cls, value: Union[str, int]) -> "ReferencePeriod":
        """Parse 'YYYY-MM' (month) or 'YYYY' (year)."""
        text = str(value).strip()
        parts = text.split("-")
        try:
            if len(parts) == 1 and len(parts[0]) == 4:
                return cls(year=int(parts[0]))
            if len(parts) == 2 and len(parts[0]) == 4:
                return cls(year=int(parts[0]), month=int(parts[1]))
        except ValueError:
            pass
        raise ValueError(f"Invalid period '{value}'. Use YYYY-MM or YYYY.")

    @classmethod
    def current(cls, period_type: PeriodType, today: Optional[date] = None) -> "ReferencePeriod":
        today = today or date.today()
        if period_type == "month":
            return cls(year=today.year, month=today.month)
        return cls(year=today.year)

    @property
    def period_type(self) -> PeriodType:
        return "year" if self.month is None else "month"

    @property
    def start(self) -> date:
        return date(self.year, self.month or 1, 1)

    @property
    def end(self) -> date:
        """Last calendar day of the period."""
        if self.month is None:
            return date(self.year, 12, 31)
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def label(self) -> str:
        if self.month is None:
            return str(self.year)
        return f"{self.year}-{self.month:02d}"

    def contains(self, day: date) -> bool:
        if day.year != self.year:
            return False
        return self.month is None or day.month == self.month

    def previous(self) -> "ReferencePeriod":
        """The period immediately before this one (same granularity)."""
        if self.month is None:
            return ReferencePeriod(year=self.year - 1)
        if self.month == 1:
            return ReferencePeriod(year=self.year - 1, month=12)
        return ReferencePeriod(year=self.year, month=self.month - 1)


def resolve_occurred_on(transaction: Transaction) -> date:
    """Resolved economic date of a transaction."""
    return transaction.occurred_on


def as_transactions(items: Iterable[Union[Transaction, dict]]) -> List[Transaction]:
    """Materialize an iterable of Transaction models or raw dicts."""
    return [
        item if isinstance(item, Transaction) else Transaction(**item)
        for item in items
    ]


def filter_period(
    transactions: Iterable[Union[Transaction, dict]],
    period: ReferencePeriod,
    up_to: Optional[date] = None,
) -> List[Transaction]:
    """Transactions whose resolved date falls in period.

    Args:
        transactions: Records to filter
        period: Month or year to keep
        up_to: Optional inclusive cut-off date (excludes future-dated entries)

    Returns:
        Matching transactions in their original order
    """
    result = []
    for tx in as_transactions(transactions):
        occurred_on = tx.occurred_on
        if not period.contains(occurred_on):
            continue
        if up_to is not None and occurred_on > up_to:
            continue
        result.append(tx)
    return result


def _read_json_rows(path: Path) -> List[dict]:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise TransactionLoadError(f"{path.name}: invalid JSON ({e})") from e

    if isinstance(data, dict):
        data = data.get("transactions")
    if not isinstance(data, list):
        raise TransactionLoadError(
            f"{path.name}: expected a list of transactions or an object with a 'transactions' list"
        )
    return data


def _read_csv_rows(path: Path) -> List[dict]:
    with open(path, "r", newline="") as f:
        reader = csv.DictReader(f)
        return [
            {key: (value if value != "" else None) for key, value in row.items() if key}
            for row in reader
        ]


def load_transactions(path: Union[str, Path]) -> List[Transaction]:
    """Load and validate a transaction export.

    Args:
        path: .json or .csv file

    Returns:
        List of Transaction records in file order

    Raises:
        TransactionLoadError: If the file is missing, unsupported or invalid
    """
    path = Path(path).expanduser()

    if not path.exists():
        raise TransactionLoadError(f"Transactions file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise TransactionLoadError(
            f"Unsupported transactions file '{path.name}'. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    rows: List[Any] = _read_json_rows(path) if suffix == ".json" else _read_csv_rows(path)

    # CSV row 1 is the header
    row_offset = 2 if suffix == ".csv" else 1

    transactions = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise TransactionLoadError(f"{path.name} row {index + row_offset}: expected an object")
        try:
            transactions.append(Transaction(**row))
        except ValidationError as e:
            raise TransactionLoadError(f"{path.name} row {index + row_offset}: {e}") from e

    logger.debug(f"Loaded {len(transactions)} transactions from {path.name}")
    return transactions
