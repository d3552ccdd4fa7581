"""Dashboard summary: everything the dashboard shows for the current month.

:func:`build_summary` is the single entry point used by both dashboard
views. The basic view turns off carry-forward and savings; it is the same
computation with fewer parts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .aggregation import category_totals, report_mismatches, subcategory_totals, totals_by_period
from .budget import (
    ALLOCATION_RATIOS,
    BudgetLine,
    evaluate,
    recommended_budget,
    remaining,
    suggested_savings,
)
from .errors import TaxonomyMismatch
from .models import Expense
from .periods import Clock, Period
from .salary_store import SalaryResolution, SalaryStore
from .savings import cumulative_savings
from .taxonomy import DEFAULT_TAXONOMY, CategoryTaxonomy
from .trend import trend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    period: Period
    salary: SalaryResolution
    category_totals: Dict[str, float]
    subcategory_totals: Dict[Tuple[str, str], float]
    recommended: Dict[str, float]
    budget_lines: Dict[str, BudgetLine]
    total_spent: float
    remaining: float
    suggested_savings: float
    cumulative_savings: Optional[float]
    trend: List[Tuple[str, float]] = field(default_factory=list)
    mismatches: List[TaxonomyMismatch] = field(default_factory=list)

    @property
    def over_budget_categories(self) -> List[str]:
        return [name for name, line in self.budget_lines.items() if line.over_budget]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view for templates and JSON responses."""
        return {
            'period': self.period.key,
            'salary': self.salary.value,
            'salary_carried_forward': self.salary.was_carried_forward,
            'category_totals': dict(self.category_totals),
            'subcategory_totals': [
                {'category': category, 'subcategory': subcategory, 'total': total}
                for (category, subcategory), total in self.subcategory_totals.items()
            ],
            'budget': [
                {
                    'category': line.category,
                    'actual': line.actual,
                    'recommended': line.recommended,
                    'over_budget': line.over_budget,
                }
                for line in self.budget_lines.values()
            ],
            'total_spent': self.total_spent,
            'remaining': self.remaining,
            'suggested_savings': self.suggested_savings,
            'cumulative_savings': self.cumulative_savings,
            'trend': [{'month': label, 'total': total} for label, total in self.trend],
            'mismatches': [m.describe() for m in self.mismatches],
        }


def build_summary(
    expenses: Sequence[Expense],
    store: SalaryStore,
    clock: Clock,
    taxonomy: CategoryTaxonomy = DEFAULT_TAXONOMY,
    ratios: Mapping[str, float] = ALLOCATION_RATIOS,
    carry_forward: bool = True,
    include_savings: bool = True,
) -> DashboardSummary:
    """Compute the dashboard figures for the clock's current period.

    Args:
        expenses: Expense snapshot (any order, any periods)
        store: Salary store; ``resolve`` may anchor the current period
        clock: Supplies the current period
        taxonomy: Category table used for totals
        ratios: Allocation ratios for the recommended budget
        carry_forward: Inherit the latest prior salary when the current
            period has none
        include_savings: Compute cumulative savings across all periods

    Returns:
        DashboardSummary for the current period
    """
    period = clock.current_period()
    mismatches = report_mismatches(expenses, taxonomy)
    if carry_forward:
        salary = store.resolve(period)
    else:
        salary = SalaryResolution(period, store.get(period))

    actual = category_totals(expenses, period, taxonomy)
    recommended = recommended_budget(salary.value, ratios)
    spent = float(sum(actual.values()))
    left = remaining(salary.value, spent)

    savings: Optional[float] = None
    if include_savings:
        savings = cumulative_savings(store.all_salaries(), totals_by_period(expenses, taxonomy))

    summary = DashboardSummary(
        period=period,
        salary=salary,
        category_totals=actual,
        subcategory_totals=subcategory_totals(expenses, period, taxonomy),
        recommended=recommended,
        budget_lines=evaluate(actual, recommended),
        total_spent=spent,
        remaining=left,
        suggested_savings=suggested_savings(left),
        cumulative_savings=savings,
        trend=trend(expenses),
        mismatches=mismatches,
    )
    if summary.over_budget_categories:
        logger.info("Over budget in %s for %s", ", ".join(summary.over_budget_categories), period)
    return summary
