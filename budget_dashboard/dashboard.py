"""Streamlit page for the monthly budget tracker.

The page is a thin rendering layer: it keeps one :class:`BudgetLedger` in
``st.session_state``, calls its operations in response to widget events
and redraws from the ledger's derived values.

To run the dashboard from the command line::

    streamlit run budget_dashboard/dashboard.py

or use ``python run_dashboard.py`` from the project root.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

import streamlit as st

# Conditional imports to support execution both as part of a package and
# directly as a script via ``streamlit run budget_dashboard/dashboard.py``.
if __package__:
    from . import config
    from . import visualization as viz
    from .formatting import format_currency, format_period, format_timestamp
    from .ledger import ENTRY_KINDS, EXPENSE, INCOME, BudgetLedger
    from .log import get_logger
    from .storage import LocalStore
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from budget_dashboard import config  # type: ignore
    from budget_dashboard import visualization as viz  # type: ignore
    from budget_dashboard.formatting import format_currency, format_period, format_timestamp  # type: ignore
    from budget_dashboard.ledger import ENTRY_KINDS, EXPENSE, INCOME, BudgetLedger  # type: ignore
    from budget_dashboard.log import get_logger  # type: ignore
    from budget_dashboard.storage import LocalStore  # type: ignore

logger = get_logger(__name__)

LEDGER_KEY = 'budget_ledger'
INITIALIZED_KEY = 'ledger_initialized'
FORM_KEYS = ('entry_description', 'entry_amount', 'entry_kind')
KIND_LABELS = {INCOME: "Income", EXPENSE: "Expense"}


def _rerun() -> None:
    rerun_fn = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun', None)
    if rerun_fn:
        rerun_fn()


def _ensure_ledger_state(store: Optional[LocalStore] = None) -> None:
    """Load the ledger from local storage once per session."""
    if st.session_state.get(INITIALIZED_KEY):
        return
    ledger = BudgetLedger(store=store or LocalStore(config.STORE_PATH), key=config.STORAGE_KEY)
    ledger.load()
    st.session_state[LEDGER_KEY] = ledger
    st.session_state[INITIALIZED_KEY] = True


def _get_ledger() -> BudgetLedger:
    _ensure_ledger_state()
    return st.session_state[LEDGER_KEY]


def _clear_form() -> None:
    for key in FORM_KEYS:
        st.session_state.pop(key, None)


def _submit_entry(ledger: BudgetLedger, description: str, amount: str, kind: str) -> bool:
    """Add the submitted entry; the form keeps its values when rejected."""
    if ledger.add_entry(description, amount, kind):
        _clear_form()
        return True
    logger.debug("Form submission rejected")
    return False


def _render_month_navigation(ledger: BudgetLedger) -> None:
    prev_col, label_col, next_col = st.columns([1, 3, 1])
    if prev_col.button("◀ Previous", key="month_prev", use_container_width=True):
        ledger.shift_month(-1)
        _rerun()
    label_col.markdown(
        f"<h3 style='text-align: center; margin: 0'>{format_period(ledger.period)}</h3>",
        unsafe_allow_html=True,
    )
    if next_col.button("Next ▶", key="month_next", use_container_width=True):
        ledger.shift_month(1)
        _rerun()


def _render_add_form(ledger: BudgetLedger) -> None:
    st.subheader("➕ Add entry")
    with st.form("add_entry", clear_on_submit=False):
        desc_col, amount_col, kind_col = st.columns([3, 2, 2])
        description = desc_col.text_input("Description", key='entry_description')
        amount = amount_col.text_input("Amount", key='entry_amount', placeholder="0.00")
        kind = kind_col.radio(
            "Type",
            options=list(ENTRY_KINDS),
            format_func=lambda k: KIND_LABELS[k],
            horizontal=True,
            key='entry_kind',
        )
        submitted = st.form_submit_button("Add")
    if submitted:
        if _submit_entry(ledger, description, amount, kind):
            _rerun()
        else:
            st.warning("Enter a description and a positive amount.")


def _render_metrics(ledger: BudgetLedger) -> None:
    summary = ledger.summary()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric(label="💰 Income", value=format_currency(summary.income))
    with col2:
        st.metric(label="💸 Expenses", value=format_currency(summary.expenses))
    with col3:
        st.metric(label="📈 Profit", value=format_currency(summary.profit))


def _render_entries(ledger: BudgetLedger) -> None:
    st.subheader("📋 Entries")
    visible = ledger.filtered_entries()
    if not visible:
        st.info(f"No entries for {format_period(ledger.period)}.")
        return
    for index, entry in enumerate(visible):
        date_col, desc_col, kind_col, amount_col, action_col = st.columns([2, 4, 1, 2, 1])
        date_col.write(format_timestamp(entry.occurred_at))
        desc_col.write(entry.description)
        kind_col.write(KIND_LABELS.get(entry.kind, entry.kind))
        sign = "+" if entry.kind == INCOME else "-"
        amount_col.write(f"{sign}{format_currency(entry.amount)}")
        if action_col.button("🗑️", key=f"delete_{entry.entry_id}", help="Delete entry"):
            ledger.delete_entry(index)
            _rerun()


def _render_charts(ledger: BudgetLedger) -> None:
    summary_tab, history_tab = st.tabs(["This month", "History"])
    with summary_tab:
        st.plotly_chart(viz.create_month_summary_chart(ledger.summary()), use_container_width=True)
    with history_tab:
        st.plotly_chart(viz.create_monthly_trend_chart(ledger.monthly_totals()), use_container_width=True)


def main() -> None:
    """Entry point for the Streamlit app."""
    st.set_page_config(
        page_title="Monthly Budget",
        page_icon="💰",
        layout="centered",
    )
    config.ensure_data_directories()
    ledger = _get_ledger()

    st.title("💰 Monthly Budget")
    _render_month_navigation(ledger)
    _render_metrics(ledger)
    _render_add_form(ledger)
    _render_entries(ledger)
    _render_charts(ledger)


if __name__ == "__main__":  # pragma: no cover
    main()
