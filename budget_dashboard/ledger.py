"""Budget ledger: entries, the selected month and its aggregates.

The ledger state is an immutable :class:`LedgerState` value.  Every
operation is a plain function that takes a state and returns a new one,
which keeps the logic testable without Streamlit.  :class:`BudgetLedger`
wraps a state together with a :class:`~budget_dashboard.storage.LocalStore`
for callers (the dashboard page, the report script) that want
persist-after-mutation behaviour.
"""

from __future__ import annotations

import math
import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Optional, Tuple, Union

import pandas as pd

from .log import get_logger

if TYPE_CHECKING:
    from .storage import LocalStore

logger = get_logger(__name__)

INCOME = "income"
EXPENSE = "expense"
ENTRY_KINDS = (INCOME, EXPENSE)

ENTRY_COLUMNS = ["Date", "Description", "Type", "Amount", "id"]
MONTHLY_COLUMNS = ["Month", "Income", "Expenses", "Profit"]

# Plain decimal, or thousands grouped strictly in threes
_AMOUNT_PATTERN = re.compile(r"^(\d+|\d{1,3}(,\d{3})+)(\.\d+)?$|^\.\d+$")


def new_entry_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Entry:
    """One recorded income or expense."""

    description: str
    amount: float
    kind: str
    occurred_at: datetime
    entry_id: str = field(default_factory=new_entry_id)


@dataclass(frozen=True, order=True)
class Period:
    """A calendar month identified by ``(year, month)``."""

    year: int
    month: int

    @classmethod
    def current(cls, now: Optional[datetime] = None) -> "Period":
        return cls.of(now or datetime.now())

    @classmethod
    def of(cls, timestamp: datetime) -> "Period":
        return cls(timestamp.year, timestamp.month)

    def shift(self, delta: int) -> "Period":
        """Move by ``delta`` whole months, rolling the year over as needed."""
        index = self.year * 12 + (self.month - 1) + int(delta)
        year, month_zero = divmod(index, 12)
        return Period(year, month_zero + 1)

    def contains(self, timestamp: datetime) -> bool:
        return timestamp.year == self.year and timestamp.month == self.month

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class LedgerState:
    """Entries in insertion order plus the month being browsed."""

    entries: Tuple[Entry, ...] = ()
    period: Period = field(default_factory=Period.current)


class MonthSummary(NamedTuple):
    period: Period
    income: float
    expenses: float
    profit: float
    entry_count: int


def new_ledger(entries: Iterable[Entry] = (), now: Optional[datetime] = None) -> LedgerState:
    """Create a state holding ``entries`` with the current month selected."""
    return LedgerState(entries=tuple(entries), period=Period.current(now))


def parse_amount(value: Union[str, float, int, None]) -> Optional[float]:
    """Parse a user-supplied amount into a positive finite float.

    Text input may carry surrounding whitespace, a leading ``$`` and
    comma thousands separators in groups of three; ``"1,5"`` is rejected
    rather than read as 15.  Anything that does not describe a positive,
    finite number yields ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("$"):
            text = text[1:].strip()
        if not _AMOUNT_PATTERN.match(text):
            return None
        amount = float(text.replace(",", ""))
    else:
        try:
            amount = float(value)
        except (TypeError, ValueError):
            return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def add_entry(
    state: LedgerState,
    description: str,
    amount: Union[str, float, int, None],
    kind: str,
    now: Optional[datetime] = None,
) -> LedgerState:
    """Append a new entry stamped with the real creation time.

    Invalid input (blank description, unparseable or non-positive amount,
    unknown kind) leaves ``state`` unchanged.
    """
    label = (description or "").strip()
    parsed = parse_amount(amount)
    if not label or parsed is None or kind not in ENTRY_KINDS:
        logger.debug("Rejected entry description=%r amount=%r kind=%r", description, amount, kind)
        return state
    entry = Entry(
        description=label,
        amount=parsed,
        kind=kind,
        occurred_at=now or datetime.now(),
    )
    return replace(state, entries=state.entries + (entry,))


def _remove_at(state: LedgerState, position: int) -> LedgerState:
    return replace(state, entries=state.entries[:position] + state.entries[position + 1:])


def delete_entry_by_id(state: LedgerState, entry_id: str) -> LedgerState:
    """Remove the first entry carrying ``entry_id``; unknown ids are a no-op."""
    for position, entry in enumerate(state.entries):
        if entry.entry_id == entry_id:
            return _remove_at(state, position)
    return state


def delete_entry(state: LedgerState, period_index: int) -> LedgerState:
    """Remove the entry displayed at ``period_index`` of the filtered view.

    The row is resolved to the exact entry object shown, so only that entry
    is removed even when others share its description, amount, timestamp
    or identifier.
    """
    visible = filtered_entries(state)
    if not 0 <= period_index < len(visible):
        return state
    shown = visible[period_index]
    position = next(i for i, e in enumerate(state.entries) if e is shown)
    return _remove_at(state, position)


def filtered_entries(state: LedgerState) -> List[Entry]:
    """Entries that occurred in the selected month, in insertion order."""
    return [e for e in state.entries if state.period.contains(e.occurred_at)]


def _sum_kind(state: LedgerState, kind: str) -> float:
    return float(sum(e.amount for e in filtered_entries(state) if e.kind == kind))


def total_income(state: LedgerState) -> float:
    return _sum_kind(state, INCOME)


def total_expenses(state: LedgerState) -> float:
    return _sum_kind(state, EXPENSE)


def profit(state: LedgerState) -> float:
    return total_income(state) - total_expenses(state)


def summarize(state: LedgerState) -> MonthSummary:
    """Calculate the selected month's totals in one pass for the renderer."""
    visible = filtered_entries(state)
    income = float(sum(e.amount for e in visible if e.kind == INCOME))
    expenses = float(sum(e.amount for e in visible if e.kind == EXPENSE))
    return MonthSummary(
        period=state.period,
        income=income,
        expenses=expenses,
        profit=income - expenses,
        entry_count=len(visible),
    )


def shift_month(state: LedgerState, delta: int) -> LedgerState:
    return replace(state, period=state.period.shift(delta))


def select_period(state: LedgerState, year: int, month: int) -> LedgerState:
    if not 1 <= int(month) <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return replace(state, period=Period(int(year), int(month)))


def entries_frame(entries: Iterable[Entry]) -> pd.DataFrame:
    """Tabular view of ``entries`` for display.

    The columns are always present, even for an empty selection.
    """
    rows = [
        {
            "Date": e.occurred_at,
            "Description": e.description,
            "Type": e.kind,
            "Amount": e.amount,
            "id": e.entry_id,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)


def monthly_totals(state: LedgerState) -> pd.DataFrame:
    """Income, expenses and profit for every month that has entries."""
    frame = entries_frame(state.entries)
    if frame.empty:
        return pd.DataFrame(columns=MONTHLY_COLUMNS)

    frame["Month"] = [Period.of(ts).label for ts in frame["Date"]]
    income = frame[frame["Type"] == INCOME].groupby("Month")["Amount"].sum()
    expenses = frame[frame["Type"] == EXPENSE].groupby("Month")["Amount"].sum()

    result = pd.DataFrame({"Month": sorted(frame["Month"].unique())})
    result["Income"] = result["Month"].map(income).fillna(0.0).astype(float)
    result["Expenses"] = result["Month"].map(expenses).fillna(0.0).astype(float)
    result["Profit"] = result["Income"] - result["Expenses"]
    return result[MONTHLY_COLUMNS]


class BudgetLedger:
    """Ledger state bound to a local store.

    Mutations that change the entries are written back immediately.  The
    selected month is session-only and is never persisted.
    """

    def __init__(self, store: Optional["LocalStore"] = None, key: Optional[str] = None, now: Optional[datetime] = None):
        self.store = store if store is not None else storage.LocalStore()
        self.key = key or storage.STORAGE_KEY
        self.state = new_ledger(now=now)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return self.state.entries

    @property
    def period(self) -> Period:
        return self.state.period

    def load(self) -> None:
        """Replace the entries with the stored ones and reset the month to now."""
        entries = storage.load_entries(self.store, self.key)
        self.state = new_ledger(entries)

    def save(self) -> None:
        storage.save_entries(self.store, self.state.entries, self.key)

    def add_entry(self, description: str, amount, kind: str, now: Optional[datetime] = None) -> bool:
        updated = add_entry(self.state, description, amount, kind, now=now)
        if updated is self.state:
            return False
        self.state = updated
        self.save()
        return True

    def delete_entry(self, period_index: int) -> bool:
        updated = delete_entry(self.state, period_index)
        if updated is self.state:
            return False
        self.state = updated
        self.save()
        return True

    def shift_month(self, delta: int) -> Period:
        self.state = shift_month(self.state, delta)
        return self.state.period

    def select_period(self, year: int, month: int) -> Period:
        self.state = select_period(self.state, year, month)
        return self.state.period

    def filtered_entries(self) -> List[Entry]:
        return filtered_entries(self.state)

    def total_income(self) -> float:
        return total_income(self.state)

    def total_expenses(self) -> float:
        return total_expenses(self.state)

    def profit(self) -> float:
        return profit(self.state)

    def summary(self) -> MonthSummary:
        return summarize(self.state)

    def monthly_totals(self) -> pd.DataFrame:
        return monthly_totals(self.state)


# storage imports Entry from this module, so it is bound after the definitions
from . import storage  # noqa: E402
