from datetime import datetime

from budget_dashboard.models import Expense
from budget_dashboard.trend import MONTH_LABELS, trend, trend_frame


def _expense(amount, when):
    return Expense('x', 'Variable Expenses', 'Food', amount, datetime.fromisoformat(when))


def test_trend_has_twelve_labelled_points():
    points = trend([_expense(100, '2024-03-10'), _expense(50, '2023-03-02'), _expense(7, '2024-12-31')])
    assert [label for label, _ in points] == MONTH_LABELS
    assert points[0] == ('January', 0.0)
    assert points[2] == ('March', 150.0)
    assert points[11] == ('December', 7.0)


def test_trend_of_nothing_is_flat():
    assert all(total == 0.0 for _, total in trend([]))


def test_trend_frame():
    frame = trend_frame([_expense(10, '2024-05-01')])
    assert list(frame.columns) == ['Month', 'Amount']
    assert len(frame) == 12
    assert frame.loc[frame['Month'] == 'May', 'Amount'].item() == 10.0
