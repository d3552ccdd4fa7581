"""Top-level package for the Budget Dashboard.

Turns a snapshot of categorized expenses plus a salary saved per month into
the figures the dashboard shows:

* ``aggregation`` - category, subcategory and per-month totals
* ``budget`` - recommended budget (50/30/20 split) and overspend flags
* ``savings`` - cumulative savings across months
* ``trend`` - twelve-month spending series
* ``salary_store`` - salary persistence with carry-forward
* ``engine`` - ``build_summary`` tying everything together

Typical use:

```python
from budget_dashboard import (
    JsonSalaryRepository, SalaryStore, SystemClock, build_summary, load_expenses,
)

store = SalaryStore(JsonSalaryRepository())
summary = build_summary(load_expenses("data/expenses/expenses.json"), store, SystemClock())
```
"""

from .aggregation import (
    category_totals,
    find_mismatches,
    monthly_totals,
    report_mismatches,
    subcategory_totals,
    total_for_category,
    total_for_subcategory,
    total_spent,
    totals_by_period,
)
from .budget import (
    ALLOCATION_RATIOS,
    BudgetLine,
    budget_performance_frame,
    evaluate,
    recommended_budget,
    remaining,
    suggested_savings,
)
from .engine import DashboardSummary, build_summary
from .errors import BudgetError, InvalidAmount, TaxonomyMismatch, ValidationResult
from .models import (
    Expense,
    expenses_from_records,
    load_expenses,
    validate_expense,
    validate_salary,
)
from .periods import FixedClock, Period, SystemClock, period_key, period_of, previous_period
from .salary_store import (
    InMemorySalaryRepository,
    JsonSalaryRepository,
    SalaryRepository,
    SalaryResolution,
    SalaryStore,
    SqliteSalaryRepository,
)
from .savings import cumulative_savings, period_surpluses
from .taxonomy import DEFAULT_TAXONOMY, CategoryTaxonomy
from .trend import MONTH_LABELS, trend, trend_frame

__all__ = [
    # Periods
    'Period',
    'period_key',
    'previous_period',
    'period_of',
    'SystemClock',
    'FixedClock',
    # Taxonomy and records
    'CategoryTaxonomy',
    'DEFAULT_TAXONOMY',
    'Expense',
    'expenses_from_records',
    'load_expenses',
    'validate_expense',
    'validate_salary',
    # Errors
    'BudgetError',
    'InvalidAmount',
    'TaxonomyMismatch',
    'ValidationResult',
    # Salary
    'SalaryRepository',
    'InMemorySalaryRepository',
    'JsonSalaryRepository',
    'SqliteSalaryRepository',
    'SalaryResolution',
    'SalaryStore',
    # Aggregation
    'total_for_subcategory',
    'total_for_category',
    'category_totals',
    'subcategory_totals',
    'total_spent',
    'totals_by_period',
    'monthly_totals',
    'find_mismatches',
    'report_mismatches',
    # Budget
    'ALLOCATION_RATIOS',
    'BudgetLine',
    'recommended_budget',
    'evaluate',
    'remaining',
    'suggested_savings',
    'budget_performance_frame',
    # Savings and trend
    'cumulative_savings',
    'period_surpluses',
    'MONTH_LABELS',
    'trend',
    'trend_frame',
    # Summary
    'DashboardSummary',
    'build_summary',
]
