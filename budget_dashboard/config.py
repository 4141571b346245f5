"""Configuration management for the budget dashboard.

This module centralizes all configuration values including paths,
the storage key and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in budget_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_DATA_DIR", _PROJECT_ROOT / "data"))

# Local key-value store backing the ledger
STORE_PATH = Path(
    os.getenv("BUDGET_STORE_PATH", DATA_DIR / "local_storage.json")
).resolve()

# Slot under which the entry array is persisted
STORAGE_KEY = os.getenv("BUDGET_STORAGE_KEY", "budget-tracker.entries")

LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "INFO").upper()


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, STORE_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)

