#!/usr/bin/env python3
"""Print one month of the stored budget ledger with its totals."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_dashboard import config
from budget_dashboard.formatting import format_currency, format_period, format_timestamp
from budget_dashboard.ledger import BudgetLedger
from budget_dashboard.storage import LocalStore


def parse_month(text: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into ``(year, month)``."""
    try:
        year_text, month_text = text.strip().split('-')
        year, month = int(year_text), int(month_text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected YYYY-MM, got {text!r}")
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"Month out of range in {text!r}")
    return year, month


def main(month: Optional[tuple[int, int]] = None, store_path: Optional[Path] = None) -> None:
    ledger = BudgetLedger(store=LocalStore(store_path or config.STORE_PATH), key=config.STORAGE_KEY)
    ledger.load()
    if month is not None:
        ledger.select_period(*month)

    entries = ledger.filtered_entries()
    print(f"Entries for {format_period(ledger.period)}")
    print("-" * 74)
    if not entries:
        print("No entries.")
    for e in entries:
        print(f"{format_timestamp(e.occurred_at)} | {e.description:<30} | {e.kind:<7} | {format_currency(e.amount):>12}")
    print("-" * 74)
    summary = ledger.summary()
    print(f"{'INCOME':<55} {format_currency(summary.income):>12}")
    print(f"{'EXPENSES':<55} {format_currency(summary.expenses):>12}")
    print(f"{'PROFIT':<55} {format_currency(summary.profit):>12}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show one month of the budget ledger.')
    parser.add_argument('--month', type=parse_month, default=None, help='Month to show as YYYY-MM (default: current month)')
    parser.add_argument('--store', type=Path, default=None, help='Path to the local storage file')
    args = parser.parse_args()
    main(month=args.month, store_path=args.store)
