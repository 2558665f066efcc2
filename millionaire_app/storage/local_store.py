"""Single-device store persisted to a JSON document on disk."""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from pathlib import Path
from typing import Any

from millionaire_app.core.errors import MalformedStoredValue, StoreUnavailable

logger = logging.getLogger(__name__)


class LocalStore:
    """Keeps every key in memory and mirrors the whole mapping to a file.

    With ``path=None`` nothing is written to disk, which is what the tests and
    throwaway sessions use.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path.resolve() if path is not None else None
        self._data: dict[str, Any] = self._load()
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path | None:
        return self._path

    async def get(self, key: str) -> Any | None:
        value = self._data.get(key)
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise MalformedStoredValue(f"Value for {key!r} is not JSON serializable", key) from exc
        self._data[key] = json.loads(encoded)
        await self._persist(key)

    async def remove(self, key: str) -> None:
        if self._data.pop(key, None) is None:
            return
        await self._persist(key)

    def keys(self) -> list[str]:
        return sorted(self._data)

    def _load(self) -> dict[str, Any]:
        if self._path is None or not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable store file %s: %s", self._path, exc)
            return {}
        if not isinstance(document, dict):
            logger.warning("Ignoring store file %s: top-level value is not a mapping", self._path)
            return {}
        return document

    async def _persist(self, key: str) -> None:
        if self._path is None:
            return
        async with self._write_lock:
            document = json.dumps(self._data, ensure_ascii=False, indent=2)
            try:
                await asyncio.to_thread(self._write_document, document)
            except OSError as exc:
                raise StoreUnavailable(f"Could not write store file {self._path}: {exc}", key) from exc

    def _write_document(self, document: str) -> None:
        assert self._path is not None
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_name(self._path.name + ".tmp")
        temp_path.write_text(document, encoding="utf-8")
        temp_path.replace(self._path)
