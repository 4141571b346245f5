from budget_dashboard.formatting import (
    format_currency,
    format_period,
    format_timestamp,
)
from budget_dashboard.ledger import Period
from datetime import datetime


def test_format_currency() -> None:
    assert format_currency(1234.5) == '$1,234.50'
    assert format_currency(-400) == '-$400.00'
    assert format_currency(0) == '$0.00'
    assert format_currency(1234.56, include_sign=False) == '1,234.56'


def test_format_period_and_timestamp() -> None:
    assert format_period(Period(2024, 3)) == 'March 2024'
    assert format_timestamp(datetime(2024, 3, 5, 14, 30)) == 'Mar 05, 2024 14:30'
