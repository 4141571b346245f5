"""Plotly visualisation helpers for the budget dashboard.

Each function accepts a value produced by :mod:`budget_dashboard.ledger`
and returns a ``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .formatting import format_period
from .ledger import MonthSummary

INCOME_COLOR = "#2ca02c"
EXPENSE_COLOR = "#d62728"
PROFIT_COLOR = "#1f77b4"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_month_summary_chart(summary: MonthSummary, title: str | None = None) -> go.Figure:
    """Bar chart of income, expenses and profit for one month.

    Parameters
    ----------
    summary : MonthSummary
        Totals for the selected month.
    title : str, optional
        Chart title.  Defaults to the month label.

    Returns
    -------
    plotly.graph_objects.Figure
        Three bars; an empty month yields a placeholder figure.
    """
    if summary.entry_count == 0:
        return _empty_figure()
    fig = go.Figure(
        go.Bar(
            x=["Income", "Expenses", "Profit"],
            y=[summary.income, summary.expenses, summary.profit],
            marker_color=[INCOME_COLOR, EXPENSE_COLOR, PROFIT_COLOR],
        )
    )
    fig.update_layout(
        title=title or format_period(summary.period),
        xaxis_title="",
        yaxis_title="Amount",
        showlegend=False,
    )
    return fig


def create_monthly_trend_chart(monthly: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped bars of income and expenses per month with a profit line.

    Parameters
    ----------
    monthly : pandas.DataFrame
        Output of :func:`budget_dashboard.ledger.monthly_totals`.
    title : str, optional
        Chart title.
    """
    if monthly.empty:
        return _empty_figure()
    long_df = monthly.melt(
        id_vars="Month",
        value_vars=["Income", "Expenses"],
        var_name="Type",
        value_name="Amount",
    )
    fig = px.bar(
        long_df,
        x="Month",
        y="Amount",
        color="Type",
        barmode="group",
        color_discrete_map={"Income": INCOME_COLOR, "Expenses": EXPENSE_COLOR},
    )
    fig.add_trace(
        go.Scatter(
            x=monthly["Month"],
            y=monthly["Profit"],
            mode="lines+markers",
            name="Profit",
            line=dict(color=PROFIT_COLOR),
        )
    )
    fig.update_layout(
        title=title or "Monthly income and expenses",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig
