"""Cumulative savings across months.

Each month with a recorded salary contributes its surplus (salary minus
spending) when that surplus is positive. Deficit months contribute nothing;
they are not netted against other months. Months with spending but no
salary are ignored.
"""

from __future__ import annotations

from typing import Mapping

import pandas as pd

from .periods import Period


def period_surplus(salary: float, spent: float) -> float:
    return float(salary) - float(spent)


def cumulative_savings(
    all_salaries: Mapping[Period, float],
    totals_by_period: Mapping[Period, float],
) -> float:
    """Sum the positive monthly surpluses.

    Args:
        all_salaries: Salary per period
        totals_by_period: Spending per period (missing periods count as zero)

    Returns:
        Total savings available across all salaried periods

    Example:
        >>> cumulative_savings(
        ...     {Period(2024, 1): 30000, Period(2024, 2): 30000},
        ...     {Period(2024, 1): 40000, Period(2024, 2): 10000},
        ... )
        20000.0
    """
    surpluses = (
        period_surplus(salary, totals_by_period.get(period, 0.0))
        for period, salary in all_salaries.items()
    )
    return float(sum(s for s in surpluses if s > 0))


def period_surpluses(
    all_salaries: Mapping[Period, float],
    totals_by_period: Mapping[Period, float],
) -> pd.DataFrame:
    """Per-period savings breakdown, oldest first.

    Returns:
        DataFrame with columns: Period, Salary, Spending, Surplus, Saved
    """
    columns = ['Period', 'Salary', 'Spending', 'Surplus', 'Saved']
    rows = []
    for period in sorted(all_salaries):
        salary = float(all_salaries[period])
        spending = float(totals_by_period.get(period, 0.0))
        surplus = period_surplus(salary, spending)
        rows.append({
            'Period': period.key,
            'Salary': salary,
            'Spending': spending,
            'Surplus': surplus,
            'Saved': max(surplus, 0.0),
        })
    return pd.DataFrame(rows, columns=columns)
