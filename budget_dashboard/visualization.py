"""Plotly figures for the budget dashboard.

Each function takes a :class:`~budget_dashboard.engine.DashboardSummary`
and returns a ``plotly.graph_objects.Figure`` that a front end can render.
An empty dataset gives a figure titled "No data to display".
"""

from __future__ import annotations

import plotly.graph_objects as go

from .engine import DashboardSummary

ACTUAL_COLORS = ["#4f46e5", "#fbbf24", "#10b981"]
RECOMMENDED_COLORS = ["#a5b4fc", "#fde68a", "#6ee7b7"]
PIE_COLORS = [
    "#4f46e5", "#fbbf24", "#10b981", "#f87171",
    "#3b82f6", "#8b5cf6", "#14b8a6", "#facc15",
]


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_budget_comparison_chart(summary: DashboardSummary) -> go.Figure:
    """Grouped bars of actual vs recommended spend per category."""
    lines = list(summary.budget_lines.values())
    if not lines:
        return _empty_figure()
    categories = [line.category for line in lines]
    fig = go.Figure(data=[
        go.Bar(
            name="Actual Spent",
            x=categories,
            y=[line.actual for line in lines],
            marker_color=ACTUAL_COLORS[:len(lines)],
        ),
        go.Bar(
            name="Recommended",
            x=categories,
            y=[line.recommended for line in lines],
            marker_color=RECOMMENDED_COLORS[:len(lines)],
        ),
    ])
    fig.update_layout(
        barmode="group",
        title="Category-wise Spending (Actual vs Recommended)",
        yaxis_title="Amount",
    )
    return fig


def create_subcategory_pie_chart(summary: DashboardSummary) -> go.Figure:
    """Pie of this month's spend by subcategory."""
    totals = summary.subcategory_totals
    if not totals:
        return _empty_figure()
    fig = go.Figure(data=[
        go.Pie(
            labels=[subcategory for _, subcategory in totals],
            values=list(totals.values()),
            customdata=[category for category, _ in totals],
            hovertemplate="%{label} (%{customdata})<br>%{value:,.2f}<extra></extra>",
            marker=dict(colors=PIE_COLORS),
        )
    ])
    fig.update_layout(title="Subcategory-wise Spending")
    return fig


def create_trend_chart(summary: DashboardSummary) -> go.Figure:
    """Bar chart of spending per calendar month."""
    if not any(total for _, total in summary.trend):
        return _empty_figure()
    fig = go.Figure(data=[
        go.Bar(
            x=[label for label, _ in summary.trend],
            y=[total for _, total in summary.trend],
            name="Spent",
        )
    ])
    fig.update_layout(title="Monthly Spending Trend", xaxis_title="Month", yaxis_title="Amount")
    return fig
