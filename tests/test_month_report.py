import argparse
import importlib.util
from datetime import datetime
from pathlib import Path

import pytest

from budget_dashboard.ledger import EXPENSE, INCOME, BudgetLedger
from budget_dashboard.storage import LocalStore

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'month_report.py'


def _load_script_module():
    spec = importlib.util.spec_from_file_location('month_report_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_parse_month():
    module = _load_script_module()
    assert module.parse_month('2024-03') == (2024, 3)
    with pytest.raises(argparse.ArgumentTypeError):
        module.parse_month('2024-13')
    with pytest.raises(argparse.ArgumentTypeError):
        module.parse_month('March')


def test_report_prints_month_totals(tmp_path, capsys):
    module = _load_script_module()
    store_path = tmp_path / 'local_storage.json'
    ledger = BudgetLedger(store=LocalStore(store_path), key=module.config.STORAGE_KEY)
    ledger.add_entry('Salary', 1000, INCOME, now=datetime(2024, 3, 1))
    ledger.add_entry('Rent', 400, EXPENSE, now=datetime(2024, 3, 2))

    module.main(month=(2024, 3), store_path=store_path)
    out = capsys.readouterr().out
    assert 'Entries for March 2024' in out
    assert 'Salary' in out
    assert '$600.00' in out

    module.main(month=(2024, 4), store_path=store_path)
    out = capsys.readouterr().out
    assert 'No entries.' in out
    assert 'Rent' not in out
