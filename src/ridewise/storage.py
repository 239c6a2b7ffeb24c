"""Asynchronous key-value storage backends for persisted state."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

_logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Structural persistence interface used by :class:`RouteStore`.

    Values are opaque strings; the store owns their format.
    """

    async def get_item(self, key: str) -> str | None:
        ...

    async def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Dict-backed storage that lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage:
    """Stores all keys in one JSON object file.

    Reads and writes run in a worker thread.  Writes go to a temporary
    file in the same directory which then replaces the target, so a
    crash never leaves a half-written file behind.  A file that is not
    a JSON object reads as empty and is rewritten on the next write.
    Entries holding non-string values are kept in the file but read as
    absent.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            _logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring storage file %s: expected a JSON object, got %s", self._path, type(data).__name__)
            return {}
        return data

    def _write_all(self, items: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def get_item(self, key: str) -> str | None:
        items = await asyncio.to_thread(self._read_all)
        value = items.get(key)
        if value is None or isinstance(value, str):
            return value
        _logger.warning("Storage key %r in %s holds a non-string value; treating it as absent", key, self._path)
        return None

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            items = await asyncio.to_thread(self._read_all)
            items[key] = value
            await asyncio.to_thread(self._write_all, items)
