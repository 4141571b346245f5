"""Local key-value storage and the persisted entry layout.

:class:`LocalStore` keeps string values under string keys in a single JSON
file, the way a browser keeps ``localStorage``.  The ledger lives in one
slot as a JSON array of ``{id, description, amount, type, date}`` records.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .config import STORAGE_KEY, STORE_PATH
from .ledger import Entry, new_entry_id
from .log import get_logger

logger = get_logger(__name__)


class LocalStore:
    """String key-value store persisted as a JSON object on disk."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else STORE_PATH

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            with tmp.open('w', encoding='utf-8') as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            tmp.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise OSError(f"Failed to write store {self.path}: {e}") from e
        finally:
            tmp.unlink(missing_ok=True)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key not in data:
            return
        del data[key]
        self._write(data)

    def keys(self) -> List[str]:
        return sorted(self._read())


def _parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Timestamps with an offset (including a trailing ``Z``) are converted to
    local time so month membership follows the user's calendar.
    """
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def serialize_entry(entry: Entry) -> Dict[str, Any]:
    return {
        'id': entry.entry_id,
        'description': entry.description,
        'amount': entry.amount,
        'type': entry.kind,
        'date': entry.occurred_at.isoformat(),
    }


def deserialize_entry(record: Dict[str, Any]) -> Entry:
    """Rebuild an entry from its stored record.

    Values are taken as stored; only the timestamp is parsed.  Records
    written before identifiers existed get a fresh one.
    """
    return Entry(
        description=record['description'],
        amount=record['amount'],
        kind=record['type'],
        occurred_at=_parse_timestamp(record['date']),
        entry_id=record.get('id') or new_entry_id(),
    )


def save_entries(store: LocalStore, entries: Iterable[Entry], key: str = STORAGE_KEY) -> None:
    payload = [serialize_entry(e) for e in entries]
    store.set_item(key, json.dumps(payload, ensure_ascii=False))
    logger.info("Saved %d entries under %r", len(payload), key)


def load_entries(store: LocalStore, key: str = STORAGE_KEY) -> List[Entry]:
    """Load the stored entries, or an empty list when nothing usable is stored."""
    raw = store.get_item(key)
    if raw is None:
        return []
    try:
        records = json.loads(raw)
        if not isinstance(records, list):
            raise TypeError(f"expected a JSON array, got {type(records).__name__}")
        entries = [deserialize_entry(r) for r in records]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable ledger under %r: %s", key, exc)
        return []
    logger.info("Loaded %d entries from %r", len(entries), key)
    return entries
