"""Expense aggregation by category, subcategory and period.

All functions take an expense snapshot and return plain totals. They never
raise for well-typed input: an empty snapshot gives zeros, and expenses whose
(category, subcategory) pair is not in the taxonomy are left out of
category totals. :func:`report_mismatches` logs and returns them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .errors import TaxonomyMismatch
from .models import Expense, expenses_to_frame
from .periods import Period, PeriodLike, as_period
from .taxonomy import DEFAULT_TAXONOMY, CategoryTaxonomy

logger = logging.getLogger(__name__)


def _period_rows(frame: pd.DataFrame, period: Period) -> pd.DataFrame:
    if frame.empty:
        return frame
    return frame[(frame['Year'] == period.year) & (frame['Month'] == period.month)]


def _valid_rows(frame: pd.DataFrame, taxonomy: CategoryTaxonomy) -> pd.DataFrame:
    """Rows whose (category, subcategory) pair belongs to the taxonomy."""
    if frame.empty:
        return frame
    pairs = set(taxonomy.pairs())
    mask = [
        (category, subcategory) in pairs
        for category, subcategory in zip(frame['category'], frame['subcategory'])
    ]
    return frame[mask]


def find_mismatches(
    expenses: Sequence[Expense],
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> List[TaxonomyMismatch]:
    """Report expenses whose subcategory isn't listed under their category."""
    return [
        TaxonomyMismatch(e.id, e.category, e.subcategory)
        for e in expenses
        if not taxonomy.contains(e.category, e.subcategory)
    ]


def report_mismatches(
    expenses: Sequence[Expense],
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> List[TaxonomyMismatch]:
    """Log every mismatched expense at WARNING and return them."""
    mismatches = find_mismatches(expenses, taxonomy)
    for mismatch in mismatches:
        logger.warning("Excluding %s from category totals", mismatch.describe())
    return mismatches


def total_for_subcategory(
    expenses: Sequence[Expense],
    subcategory: str,
    period: PeriodLike,
    category: Optional[str] = None,
) -> float:
    """Sum amounts for a subcategory within one calendar month.

    Args:
        expenses: Expense snapshot
        subcategory: Subcategory name to match
        period: Period the expense creation date must fall in
        category: When given, also require this category so that a
            subcategory shared by two categories is counted once

    Returns:
        Total amount (0.0 when nothing matches)
    """
    target = as_period(period)
    return float(sum(
        e.amount
        for e in expenses
        if e.subcategory == subcategory
        and (category is None or e.category == category)
        and e.period == target
    ))


def total_for_category(
    expenses: Sequence[Expense],
    category: str,
    period: PeriodLike,
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> float:
    """Sum the subcategory totals of ``category`` for one period."""
    return float(sum(
        total_for_subcategory(expenses, subcategory, period, category=category)
        for subcategory in taxonomy.subcategories(category)
    ))


def category_totals(
    expenses: Sequence[Expense],
    period: PeriodLike,
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> Dict[str, float]:
    """Total spend per category for one period, in taxonomy order.

    Example:
        >>> category_totals([], (2024, 1))
        {'Fixed Expenses': 0.0, 'Variable Expenses': 0.0, 'Periodic and Occasional Expenses': 0.0}
    """
    totals: Dict[str, float] = {category: 0.0 for category in taxonomy}
    frame = expenses_to_frame(expenses)
    scoped = _valid_rows(_period_rows(frame, as_period(period)), taxonomy)
    if scoped.empty:
        return totals

    grouped = scoped.groupby('category')['amount'].sum()
    for category, amount in grouped.items():
        totals[category] = float(amount)
    return totals


def subcategory_totals(
    expenses: Sequence[Expense],
    period: PeriodLike,
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
    include_zero: bool = False,
) -> Dict[Tuple[str, str], float]:
    """Total spend per (category, subcategory) pair for one period.

    Args:
        include_zero: Keep pairs with no spending (omitted by default, as the
            breakdown chart only shows subcategories with spend)
    """
    frame = expenses_to_frame(expenses)
    scoped = _valid_rows(_period_rows(frame, as_period(period)), taxonomy)
    grouped = (
        scoped.groupby(['category', 'subcategory'])['amount'].sum()
        if not scoped.empty
        else pd.Series(dtype=float)
    )

    totals: Dict[Tuple[str, str], float] = {}
    for pair in taxonomy.pairs():
        amount = float(grouped.get(pair, 0.0))
        if amount > 0 or include_zero:
            totals[pair] = amount
    return totals


def total_spent(
    expenses: Sequence[Expense],
    period: PeriodLike,
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> float:
    """Total spend for one period across every category."""
    return float(sum(category_totals(expenses, period, taxonomy).values()))


def totals_by_period(
    expenses: Sequence[Expense],
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
) -> Dict[Period, float]:
    """Total categorized spend for every period that has expenses."""
    scoped = _valid_rows(expenses_to_frame(expenses), taxonomy)
    if scoped.empty:
        return {}

    grouped = scoped.groupby(['Year', 'Month'])['amount'].sum()
    return {
        Period(int(year), int(month)): float(amount)
        for (year, month), amount in grouped.items()
    }


def monthly_totals(expenses: Sequence[Expense]) -> List[float]:
    """Spend per calendar month (index 0 = January), summed across years."""
    totals = [0.0] * 12
    frame = expenses_to_frame(expenses)
    if frame.empty:
        return totals

    grouped = frame.groupby('Month')['amount'].sum()
    for month, amount in grouped.items():
        totals[int(month) - 1] = float(amount)
    return totals
