"""Twelve-month spending trend.

Months are bucketed by calendar month only, so January 2023 and January
2024 land in the same bucket.
"""

from __future__ import annotations

import calendar
from typing import List, Sequence, Tuple

import pandas as pd

from .aggregation import monthly_totals
from .models import Expense

MONTH_LABELS: List[str] = list(calendar.month_name)[1:]


def trend(expenses: Sequence[Expense]) -> List[Tuple[str, float]]:
    """Return ``(month name, total)`` for January through December."""
    return list(zip(MONTH_LABELS, monthly_totals(expenses)))


def trend_frame(expenses: Sequence[Expense]) -> pd.DataFrame:
    return pd.DataFrame(trend(expenses), columns=['Month', 'Amount'])
