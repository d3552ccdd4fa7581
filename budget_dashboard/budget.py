"""Recommended budgets and budget-vs-actual evaluation.

The recommended budget splits the monthly salary across the three expense
categories with fixed ratios (50% fixed, 30% variable, 20% periodic). The
ratios are policy, not a forecast, and are not user-editable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

import pandas as pd

from .taxonomy import FIXED_EXPENSES, PERIODIC_EXPENSES, VARIABLE_EXPENSES

ALLOCATION_RATIOS: Dict[str, float] = {
    FIXED_EXPENSES: 0.5,
    VARIABLE_EXPENSES: 0.3,
    PERIODIC_EXPENSES: 0.2,
}

if not math.isclose(sum(ALLOCATION_RATIOS.values()), 1.0):
    raise RuntimeError("ALLOCATION_RATIOS must sum to 1.0")


@dataclass(frozen=True)
class BudgetLine:
    """Actual vs recommended spending for one category."""

    category: str
    actual: float
    recommended: float

    @property
    def over_budget(self) -> bool:
        return self.actual > self.recommended

    @property
    def variance(self) -> float:
        """Recommended minus actual; negative when over budget."""
        return self.recommended - self.actual

    @property
    def status(self) -> str:
        return 'Over' if self.over_budget else 'Under'


def recommended_budget(
    salary: Optional[float],
    ratios: Mapping[str, float] = ALLOCATION_RATIOS,
) -> Dict[str, float]:
    """Split a salary across categories by allocation ratio.

    Args:
        salary: Monthly salary; ``None`` or zero gives all-zero budgets
        ratios: Category → share of salary

    Returns:
        Dictionary mapping category names to recommended amounts

    Example:
        >>> recommended_budget(50000)
        {'Fixed Expenses': 25000.0, 'Variable Expenses': 15000.0, 'Periodic and Occasional Expenses': 10000.0}
    """
    base = float(salary) if salary else 0.0
    return {category: base * ratio for category, ratio in ratios.items()}


def evaluate(
    actual_totals: Mapping[str, float],
    recommended_totals: Mapping[str, float],
) -> Dict[str, BudgetLine]:
    """Compare actual category totals against the recommended budget.

    Categories missing from either mapping count as zero on that side.
    """
    categories = list(recommended_totals)
    categories += [c for c in actual_totals if c not in recommended_totals]
    return {
        category: BudgetLine(
            category=category,
            actual=float(actual_totals.get(category, 0.0)),
            recommended=float(recommended_totals.get(category, 0.0)),
        )
        for category in categories
    }


def remaining(salary: Optional[float], total_spent: float) -> float:
    """Salary left after spending; negative when spending exceeds salary."""
    return (float(salary) if salary else 0.0) - float(total_spent)


def suggested_savings(remaining_budget: float) -> float:
    """Amount suggested for savings this month: the remaining budget, floored at zero."""
    return max(float(remaining_budget), 0.0)


def budget_performance_frame(lines: Mapping[str, BudgetLine]) -> pd.DataFrame:
    """Tabulate budget lines for display.

    Returns:
        DataFrame with columns: Category, Actual, Recommended, Variance,
        Percent Used, Status
    """
    columns = ['Category', 'Actual', 'Recommended', 'Variance', 'Percent Used', 'Status']
    rows = []
    for line in lines.values():
        rows.append({
            'Category': line.category,
            'Actual': line.actual,
            'Recommended': line.recommended,
            'Variance': line.variance,
            'Percent Used': (line.actual / line.recommended * 100.0) if line.recommended else None,
            'Status': line.status,
        })
    return pd.DataFrame(rows, columns=columns)
