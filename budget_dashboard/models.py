"""Expense records and the boundary where raw input becomes one.

Expense snapshots arrive as JSON-style records (``_id``, ``category``,
``subcategory``, ``amount``, ``note``, ``createdAt``) from the expense API or
from an exported file. This module converts them into immutable
:class:`Expense` objects, validates user-entered values before they are
saved, and turns a snapshot into a DataFrame for aggregation.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from .errors import ValidationResult
from .periods import Period, period_of
from .taxonomy import DEFAULT_TAXONOMY, CategoryTaxonomy

logger = logging.getLogger(__name__)

EXPENSE_COLUMNS = ['id', 'category', 'subcategory', 'amount', 'note', 'created_at']

REQUIRED_FIELDS_MESSAGE = "Please fill all required fields correctly."
INVALID_SALARY_MESSAGE = "Enter a valid salary."


@dataclass(frozen=True)
class Expense:
    """A single categorized expense as stored by the backend."""

    id: str
    category: str
    subcategory: str
    amount: float
    created_at: datetime
    note: str = ""

    def __post_init__(self) -> None:
        # Timezone-aware timestamps are stored as naive UTC.
        object.__setattr__(self, 'created_at', _parse_timestamp(self.created_at))

    @property
    def period(self) -> Period:
        return period_of(self.created_at)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Expense":
        """Build an expense from an API/file record.

        Accepts both the API field names (``_id``, ``createdAt``) and the
        snake_case names used in exported CSV files.

        Raises:
            ValueError: If the amount is not a non-negative number, the date
                cannot be parsed, or category/subcategory are missing
        """
        category = _clean_text(record.get('category'))
        subcategory = _clean_text(record.get('subcategory'))
        if not category or not subcategory:
            raise ValueError("Expense record is missing category or subcategory")

        amount = _parse_amount(record.get('amount'))
        if amount is None or amount < 0:
            raise ValueError(f"Expense amount must be a non-negative number, got {record.get('amount')!r}")

        raw_date = record.get('createdAt', record.get('created_at'))
        if raw_date is None or (isinstance(raw_date, float) and math.isnan(raw_date)):
            raise ValueError("Expense record has no creation timestamp")
        created_at = _parse_timestamp(raw_date)

        identifier = record.get('_id', record.get('id'))
        return cls(
            id=_clean_text(identifier),
            category=category,
            subcategory=subcategory,
            amount=amount,
            created_at=created_at,
            note=_clean_text(record.get('note')),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'category': self.category,
            'subcategory': self.subcategory,
            'amount': self.amount,
            'note': self.note,
            'created_at': self.created_at,
        }


def _clean_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and math.isnan(value):
        return ''
    return str(value).strip()


def _parse_amount(value: Any) -> Optional[float]:
    """Coerce a form/API amount to float, returning None if it isn't numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def _parse_timestamp(value: Any) -> datetime:
    """Parse a timestamp, normalising timezone-aware values to naive UTC."""
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid expense timestamp {value!r}: {e}") from e
    if ts is pd.NaT:
        raise ValueError(f"Invalid expense timestamp {value!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert('UTC').tz_localize(None)
    return ts.to_pydatetime()


# ---------------------------------------------------------------------------
# Boundary validation
# ---------------------------------------------------------------------------


def validate_salary(value: Any) -> ValidationResult:
    """Validate a salary typed into the dashboard form."""
    amount = _parse_amount(value)
    if amount is None or amount <= 0:
        return ValidationResult.failure(INVALID_SALARY_MESSAGE)
    return ValidationResult.success("Salary saved!")


def validate_expense(
    record: Mapping[str, Any],
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> ValidationResult:
    """Validate an expense form submission before it is sent to the backend.

    Category, subcategory and a positive amount are required, and the
    subcategory must be one offered for the chosen category.
    """
    category = _clean_text(record.get('category'))
    subcategory = _clean_text(record.get('subcategory'))
    amount = _parse_amount(record.get('amount'))
    if not category or not subcategory or amount is None or amount <= 0:
        return ValidationResult.failure(REQUIRED_FIELDS_MESSAGE)
    if category not in taxonomy:
        return ValidationResult.failure(f"Unknown category '{category}'.")
    if not taxonomy.contains(category, subcategory):
        return ValidationResult.failure(
            f"'{subcategory}' is not a subcategory of '{category}'."
        )
    return ValidationResult.success()


# ---------------------------------------------------------------------------
# Snapshot loading
# ---------------------------------------------------------------------------


def expenses_from_records(records: Iterable[Mapping[str, Any]]) -> List[Expense]:
    """Convert fetched records into expenses, skipping rows that can't be parsed."""
    expenses: List[Expense] = []
    for index, record in enumerate(records):
        try:
            expenses.append(Expense.from_record(record))
        except ValueError as e:
            logger.warning("Skipping expense record %d: %s", index, e)
    return expenses


def load_expenses(path: Union[str, Path]) -> List[Expense]:
    """Load an expense snapshot from a JSON array or CSV export.

    Args:
        path: Path to a ``.json`` or ``.csv`` file

    Returns:
        Parsed expenses; a missing file yields an empty list

    Raises:
        ValueError: If the file extension is not supported or the JSON
            document is not a list of records
    """
    target = Path(path)
    if not target.exists():
        logger.info("Expense snapshot %s not found; using empty snapshot", target)
        return []

    ext = target.suffix.lower()
    if ext == '.json':
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON list of expenses in {target}")
        return expenses_from_records(item for item in data if isinstance(item, dict))
    if ext == '.csv':
        df = pd.read_csv(target)
        return expenses_from_records(df.to_dict(orient='records'))
    raise ValueError(f"Unsupported file extension '{ext}'.")


def expenses_to_frame(expenses: Sequence[Expense]) -> pd.DataFrame:
    """Convert expenses to a DataFrame with ``Year``/``Month`` helper columns."""
    if not expenses:
        frame = pd.DataFrame(columns=EXPENSE_COLUMNS)
        frame['amount'] = frame['amount'].astype(float)
        frame['Year'] = pd.Series(dtype=int)
        frame['Month'] = pd.Series(dtype=int)
        return frame

    frame = pd.DataFrame([e.to_record() for e in expenses], columns=EXPENSE_COLUMNS)
    frame['created_at'] = pd.to_datetime(frame['created_at'])
    frame['amount'] = pd.to_numeric(frame['amount'], errors='coerce').fillna(0.0)
    frame['Year'] = frame['created_at'].dt.year
    frame['Month'] = frame['created_at'].dt.month
    return frame
