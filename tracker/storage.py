"""Key-value persistence for the three collections.

Each key maps to a JSON array. ``JsonStore`` keeps one ``<key>.json`` file per
key; ``MemoryStore`` keeps them in a dict and is what the tests use.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from tracker.defaults import DEFAULT_CATEGORIES
from tracker.domain import Budget, Category, Transaction
from tracker.transforms import load_records

logger = logging.getLogger(__name__)

TRANSACTIONS = "transactions"
CATEGORIES = "categories"
BUDGETS = "budgets"
KEYS = (TRANSACTIONS, CATEGORIES, BUDGETS)


class JsonStore:
    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str, default: Any = None) -> Any:
        target = self._path(key)
        if not target.exists():
            return copy.deepcopy(default)
        try:
            with target.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("store_load_failed: key=%s path=%s error=%s", key, target, exc)
            return copy.deepcopy(default)
        if not isinstance(data, list):
            logger.warning("store_load_failed: key=%s path=%s error=not a list", key, target)
            return copy.deepcopy(default)
        return data

    def save(self, key: str, value: List[Dict[str, Any]]) -> None:
        target = self._path(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open('w', encoding='utf-8') as handle:
            json.dump(value, handle, indent=2, ensure_ascii=False)
        logger.debug("store_saved: key=%s items=%d", key, len(value))


class MemoryStore:
    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return copy.deepcopy(default)
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


def load_collections(store) -> Tuple[
    Tuple[Transaction, ...],
    Tuple[Category, ...],
    Tuple[Budget, ...],
]:
    """Read all three keys, seeding categories on first run."""
    return load_records({
        TRANSACTIONS: store.load(TRANSACTIONS, []),
        CATEGORIES: store.load(CATEGORIES, [c.to_dict() for c in DEFAULT_CATEGORIES]),
        BUDGETS: store.load(BUDGETS, []),
    })


def save_collection(store, key: str, items) -> None:
    store.save(key, [item.to_dict() for item in items])
