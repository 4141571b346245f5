from datetime import datetime

from budget_dashboard import ledger as lg
from budget_dashboard import visualization as viz
from budget_dashboard.ledger import EXPENSE, INCOME


def _state():
    now = datetime(2024, 3, 10)
    state = lg.new_ledger(now=now)
    state = lg.add_entry(state, 'Salary', 1000, INCOME, now=now)
    state = lg.add_entry(state, 'Rent', 400, EXPENSE, now=now)
    return state


def test_month_summary_chart_has_three_bars():
    fig = viz.create_month_summary_chart(lg.summarize(_state()))
    assert list(fig.data[0].y) == [1000, 400, 600]
    assert fig.layout.title.text == 'March 2024'


def test_empty_month_gives_placeholder():
    fig = viz.create_month_summary_chart(lg.summarize(lg.shift_month(_state(), 1)))
    assert len(fig.data) == 0
    assert fig.layout.title.text == 'No data to display'


def test_monthly_trend_chart_adds_profit_line():
    fig = viz.create_monthly_trend_chart(lg.monthly_totals(_state()))
    names = [trace.name for trace in fig.data]
    assert names == ['Income', 'Expenses', 'Profit']
    assert list(fig.data[-1].y) == [600]


def test_monthly_trend_chart_empty():
    fig = viz.create_monthly_trend_chart(lg.monthly_totals(lg.new_ledger()))
    assert len(fig.data) == 0
