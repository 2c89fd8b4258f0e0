"""
Persistent key/value store.

The engine only needs a narrow async get/set/remove contract. `JsonFileStore`
keeps every key in a single JSON document on disk; `MemoryStore` keeps them in
a dict and is used by tests and embedders.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Protocol

from snipbox.exceptions import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


class PersistentStore(Protocol):
    """Durable key/value storage used by the snippet repository."""

    async def get(self, key: str, fallback: Any = None) -> Any: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process store. Values are copied through JSON to mimic disk storage."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value)

    async def get(self, key: str, fallback: Any = None) -> Any:
        if key not in self._data:
            return fallback
        return json.loads(self._data[key])

    async def set(self, key: str, value: Any) -> None:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreWriteError("Value is not serializable", key=key) from e

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Store backed by one JSON object on disk.

    Reads never raise: a missing, unreadable or corrupt file yields the
    fallback. Writes replace the file atomically and raise StoreWriteError.
    Each write rewrites the whole document, so read-modify-write cycles hold
    a lock to keep one key's write from dropping a concurrent write to another.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise StoreReadError(str(e), path=str(self.path)) from e
        except ValueError as e:
            raise StoreReadError("Store file is not valid JSON", path=str(self.path)) from e
        if not isinstance(data, dict):
            raise StoreReadError("Store file is not a JSON object", path=str(self.path))
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _get(self, key: str, fallback: Any) -> Any:
        try:
            data = self._read_all()
        except StoreReadError as e:
            logger.warning(f"Store read failed, using fallback for {key!r}: {e}")
            return fallback
        return data.get(key, fallback)

    def _set(self, key: str, value: Any) -> None:
        with self._lock:
            self._set_locked(key, value)

    def _set_locked(self, key: str, value: Any) -> None:
        try:
            data = self._read_all()
        except StoreReadError as e:
            # Other keys are unrecoverable at this point; start a fresh document
            logger.warning(f"Store unreadable, rewriting it: {e}")
            data = {}
        data[key] = value
        try:
            self._write_all(data)
        except (OSError, TypeError, ValueError) as e:
            raise StoreWriteError(str(e), key=key, path=str(self.path)) from e

    def _remove(self, key: str) -> None:
        with self._lock:
            self._remove_locked(key)

    def _remove_locked(self, key: str) -> None:
        try:
            data = self._read_all()
        except StoreReadError as e:
            logger.warning(f"Store unreadable, nothing to remove: {e}")
            return
        if key not in data:
            return
        del data[key]
        try:
            self._write_all(data)
        except OSError as e:
            logger.warning(f"Failed to remove {key!r} from store: {e}")

    async def get(self, key: str, fallback: Any = None) -> Any:
        return await asyncio.to_thread(self._get, key, fallback)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def remove(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)
