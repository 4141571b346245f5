"""Formatting utilities for currency, timestamp and month display."""

from __future__ import annotations

import calendar
from datetime import datetime
from typing import Union

from .ledger import Period


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators and two decimals.

    Negative amounts keep the minus sign in front of the currency symbol.

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-400)
        '-$400.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    if include_sign:
        formatted = f"${formatted}"
    return f"-{formatted}" if amount < 0 else formatted


def format_timestamp(timestamp: datetime) -> str:
    """Short date and time, e.g. ``'Mar 05, 2024 14:30'``."""
    return timestamp.strftime("%b %d, %Y %H:%M")


def format_period(period: Period) -> str:
    """Month label such as ``'March 2024'``."""
    return f"{calendar.month_name[period.month]} {period.year}"
