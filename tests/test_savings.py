import random

from budget_dashboard.periods import Period
from budget_dashboard.savings import cumulative_savings, period_surpluses

A = Period(2024, 1)
B = Period(2024, 2)
C = Period(2024, 3)


def test_deficits_are_not_netted():
    salaries = {A: 30000, B: 30000}
    spending = {A: 40000, B: 10000}
    assert cumulative_savings(salaries, spending) == 20000


def test_salary_without_spending_counts_in_full():
    assert cumulative_savings({A: 30000, C: 5000}, {A: 25000}) == 10000


def test_spending_without_salary_is_ignored():
    assert cumulative_savings({A: 30000}, {A: 10000, B: 99999}) == 20000


def test_empty_inputs():
    assert cumulative_savings({}, {}) == 0.0
    assert cumulative_savings({}, {A: 100}) == 0.0


def test_order_independent():
    salaries = {Period(2023, m): 1000.0 * m for m in range(1, 13)}
    spending = {Period(2023, m): 6000.0 for m in range(1, 13)}
    expected = cumulative_savings(salaries, spending)

    items = list(salaries.items())
    rng = random.Random(7)
    for _ in range(5):
        rng.shuffle(items)
        assert cumulative_savings(dict(items), spending) == expected
    assert expected == sum(1000.0 * m - 6000.0 for m in range(7, 13))


def test_period_surpluses_frame():
    frame = period_surpluses({B: 30000, A: 30000}, {A: 40000, B: 10000})
    assert frame['Period'].tolist() == ['2024-01', '2024-02']
    assert frame['Surplus'].tolist() == [-10000.0, 20000.0]
    assert frame['Saved'].sum() == 20000
