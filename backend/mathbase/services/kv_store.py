"""
String key-value persistence behind the stats and progress services.

Each key holds one JSON blob that is read whole and rewritten whole. Three
backends are available, selected by ``MATHBASE_STORE_BACKEND``:

    memory    process-local dict (default, used by tests)
    file      one JSON file holding the whole key map
    supabase  table with ``key``/``value`` columns, upsert on ``key``
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from mathbase.core.config import get_settings

logger = logging.getLogger("mathbase.kv_store")


class KeyValueStore:
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """All keys live in a single JSON object on disk."""

    def __init__(self, path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to load store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected an object, got %s", self.path, type(data).__name__)
            return {}
        return data

    def _save(self, data: dict[str, str]) -> None:
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


class SupabaseKeyValueStore(KeyValueStore):
    def __init__(self, supabase_client, table: str = "kv_store"):
        self.sb = supabase_client
        self.table = table

    def get(self, key: str) -> Optional[str]:
        r = (
            self.sb.table(self.table)
            .select("value")
            .eq("key", key)
            .maybe_single()
            .execute()
        )
        data = getattr(r, "data", None)
        if not data:
            return None
        return data.get("value")

    def set(self, key: str, value: str) -> None:
        (
            self.sb.table(self.table)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )

    def delete(self, key: str) -> None:
        self.sb.table(self.table).delete().eq("key", key).execute()


@lru_cache
def get_kv_store() -> KeyValueStore:
    settings = get_settings()
    backend = settings.store_backend

    if backend == "file":
        return JsonFileKeyValueStore(settings.store_path)

    if backend == "supabase":
        try:
            from mathbase.services.supabase_client import get_supabase_client
            sb = get_supabase_client()
        except Exception as exc:
            logger.warning("Supabase store unavailable, falling back to memory: %s", exc)
            return InMemoryKeyValueStore()
        return SupabaseKeyValueStore(sb, table=settings.supabase_table)

    return InMemoryKeyValueStore()
