import types
from datetime import datetime

from budget_dashboard import dashboard
from budget_dashboard.ledger import EXPENSE, INCOME, BudgetLedger
from budget_dashboard.storage import LocalStore


def _fake_st(monkeypatch, state=None):
    session = {} if state is None else state
    monkeypatch.setattr(dashboard, 'st', types.SimpleNamespace(session_state=session))
    return session


def test_ensure_ledger_state_loads_once(monkeypatch, tmp_path):
    store = LocalStore(tmp_path / 'local_storage.json')
    seeded = BudgetLedger(store=store, key=dashboard.config.STORAGE_KEY)
    seeded.add_entry('Salary', 1000, INCOME, now=datetime(2024, 3, 1))

    session = _fake_st(monkeypatch)
    dashboard._ensure_ledger_state(store=store)
    ledger = session[dashboard.LEDGER_KEY]
    assert [e.description for e in ledger.entries] == ['Salary']

    dashboard._ensure_ledger_state(store=LocalStore(tmp_path / 'other.json'))
    assert session[dashboard.LEDGER_KEY] is ledger
    assert dashboard._get_ledger() is ledger


def test_submit_entry_clears_form_on_success(monkeypatch, tmp_path):
    session = _fake_st(monkeypatch, {
        'entry_description': 'Rent',
        'entry_amount': '400',
        'entry_kind': EXPENSE,
    })
    ledger = BudgetLedger(store=LocalStore(tmp_path / 'local_storage.json'))
    assert dashboard._submit_entry(ledger, 'Rent', '400', EXPENSE)
    assert len(ledger.entries) == 1
    assert not any(key in session for key in dashboard.FORM_KEYS)


def test_submit_entry_keeps_form_when_rejected(monkeypatch, tmp_path):
    session = _fake_st(monkeypatch, {'entry_description': 'Rent', 'entry_amount': '-1'})
    ledger = BudgetLedger(store=LocalStore(tmp_path / 'local_storage.json'))
    assert not dashboard._submit_entry(ledger, 'Rent', '-1', EXPENSE)
    assert ledger.entries == ()
    assert session['entry_amount'] == '-1'


def test_rerun_prefers_streamlit_rerun(monkeypatch):
    called = {}

    def fake_rerun():
        called['method'] = 'rerun'

    monkeypatch.setattr(dashboard, 'st', types.SimpleNamespace(rerun=fake_rerun), raising=False)
    dashboard._rerun()
    assert called['method'] == 'rerun'


def test_rerun_falls_back_to_experimental(monkeypatch):
    called = {}

    def fake_experimental():
        called['method'] = 'experimental'

    monkeypatch.setattr(dashboard, 'st', types.SimpleNamespace(experimental_rerun=fake_experimental), raising=False)
    dashboard._rerun()
    assert called['method'] == 'experimental'
