# ingres/storage/local_store.py
"""
Key-value bookkeeping for profiles, chats and budget sessions.

Mirrors the browser storage layout of the site: every slot holds a JSON
string, and each user context ("public" or "official") has its own set
of keys so a citizen profile and an official profile never collide.

Two backends:
    InMemoryStore  - process-local dict
    JSONFileStore  - single JSON file on disk, rewritten on every change
"""

import json
import logging
import os
import threading
from typing import Any, Dict, List, Optional

from ingres.config import (
    BUDGET_HISTORY_LIMIT,
    CHAT_HISTORY_LIMIT,
    LOCAL_STORE_PATH,
)
from ingres.storage.identity import (
    OFFICIAL,
    PUBLIC,
    USER_CONTEXTS,
    generate_contextual_user_id,
)


logger = logging.getLogger(__name__)


STORAGE_KEYS: Dict[str, Dict[str, str]] = {
    PUBLIC: {
        "profile": "ingres_public_profile",
        "chats": "ingres_chats",
        "budgetHistory": "budget_bro_history",
        "waterPoints": "ingres_water_points",
        "documents": "ingres_documents",
    },
    OFFICIAL: {
        "profile": "ingres_official_profile",
        "chats": "ingres_official_chats",
        "budgetHistory": "official_budget_bro_history",
        "waterPoints": "ingres_official_water_points",
        "documents": "ingres_official_documents",
    },
}


def get_storage_key(context: str, kind: str) -> str:

    if context not in USER_CONTEXTS:
        raise ValueError(f"Unknown user context: {context}")

    try:
        return STORAGE_KEYS[context][kind]
    except KeyError:
        raise ValueError(f"Unknown storage slot: {kind}") from None


# ============================================================
# BACKENDS
# ============================================================

class InMemoryStore:

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str):
        self._data[key] = value

    def remove_item(self, key: str):
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JSONFileStore(InMemoryStore):
    """Whole store lives in one JSON object on disk."""

    def __init__(self, path: str = LOCAL_STORE_PATH):

        super().__init__()

        self._path = path
        self._lock = threading.Lock()

        self._load()

    def _load(self):

        if not os.path.exists(self._path):
            return

        try:

            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)

        except (OSError, ValueError) as e:

            logger.error(
                "Local store load failed",
                extra={"path": self._path, "error": str(e)},
            )
            return

        if not isinstance(data, dict):

            logger.error(
                "Local store load failed",
                extra={"path": self._path, "error": "not a JSON object"},
            )
            return

        self._data = {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _commit(self, data: Dict[str, str]):
        """Write `data` to disk, then make it the live copy."""

        directory = os.path.dirname(self._path)

        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = f"{self._path}.tmp"

        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)

        os.replace(tmp_path, self._path)

        self._data = data

    def set_item(self, key: str, value: str):

        with self._lock:
            self._commit({**self._data, key: value})

    def remove_item(self, key: str):

        with self._lock:
            data = dict(self._data)
            data.pop(key, None)
            self._commit(data)


# ============================================================
# JSON SLOT HELPERS
# ============================================================

def _read_json(store, key: str, default: Any) -> Any:

    raw = store.get_item(key)

    if raw is None:
        return default

    try:
        return json.loads(raw)

    except ValueError as e:

        logger.error(
            "Error parsing stored value",
            extra={"key": key, "error": str(e)},
        )
        return default


def _write_json(store, key: str, value: Any):
    store.set_item(key, json.dumps(value, ensure_ascii=False))


# ============================================================
# CONTEXT-AWARE COLLECTIONS
# ============================================================

class ProfileStorage:

    def __init__(self, store):
        self._store = store

    def get(self, context: str = PUBLIC) -> Optional[dict]:
        return _read_json(self._store, get_storage_key(context, "profile"), None)

    def set(self, profile: dict, context: str = PUBLIC):
        _write_json(self._store, get_storage_key(context, "profile"), profile)

    def clear(self, context: str = PUBLIC):
        self._store.remove_item(get_storage_key(context, "profile"))

    def current_user_id(self, context: str = PUBLIC) -> Optional[str]:

        profile = self.get(context)

        if not isinstance(profile, dict) or not profile.get("name"):
            return None

        return generate_contextual_user_id(profile["name"], context)


class _BoundedHistory:
    """Newest-first list capped at `limit` entries."""

    slot = ""
    limit = 0

    def __init__(self, store):
        self._store = store

    def get(self, context: str = PUBLIC) -> List[dict]:

        items = _read_json(self._store, get_storage_key(context, self.slot), [])

        return items if isinstance(items, list) else []

    def add(self, entry: dict, context: str = PUBLIC):

        items = [entry] + self.get(context)

        _write_json(
            self._store,
            get_storage_key(context, self.slot),
            items[:self.limit],
        )


class ChatStorage(_BoundedHistory):

    slot = "chats"
    limit = CHAT_HISTORY_LIMIT

    def update(self, chats: List[dict], context: str = PUBLIC):
        _write_json(self._store, get_storage_key(context, self.slot), chats)

    def delete(self, chat_id: str, context: str = PUBLIC):

        remaining = [
            chat for chat in self.get(context)
            if chat.get("id") != chat_id
        ]

        self.update(remaining, context)


class BudgetStorage(_BoundedHistory):

    slot = "budgetHistory"
    limit = BUDGET_HISTORY_LIMIT
