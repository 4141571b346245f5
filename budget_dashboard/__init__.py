"""Top‑level package for the Monthly Budget dashboard.

The primary modules are:

* ``ledger`` – entries, the selected month and its aggregates
* ``storage`` – the local key-value store the ledger persists to
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit page that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_dashboard/dashboard.py
```
"""

from . import ledger  # noqa: F401  # re-exported for convenience
from . import storage  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience
# Import dashboard lazily.  Streamlit may not be installed in all
# environments (e.g. the report script).
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore

from .ledger import BudgetLedger, Entry, LedgerState, Period  # noqa: E402

__all__ = [
    "ledger",
    "storage",
    "visualization",
    "dashboard",
    "BudgetLedger",
    "Entry",
    "LedgerState",
    "Period",
]
