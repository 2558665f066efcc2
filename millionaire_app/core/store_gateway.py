"""Degrade-on-read / report-on-write access to the key-value store."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from millionaire_app.core.errors import StoreError, WriteResult
from millionaire_app.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreGateway:
    """Wraps a store so that services never see store exceptions.

    Reads fall back to the supplied default when the key is absent, the store
    fails, or the value does not match its schema. Writes are attempted once and
    returned as :class:`WriteResult` values; nothing is retried here.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    async def read(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        try:
            raw = await self._store.get(key)
        except StoreError as exc:
            logger.warning("Read of %s failed, using default: %s", key, exc)
            return default
        if raw is None:
            return default
        try:
            return adapter.validate_python(raw)
        except ValidationError as exc:
            logger.warning(
                "Malformed value under %s, using default (%d validation errors)",
                key,
                exc.error_count(),
            )
            return default

    async def write(self, key: str, value: Any) -> WriteResult:
        try:
            await self._store.set(key, value)
        except StoreError as exc:
            logger.error("Write of %s failed: %s", key, exc)
            return WriteResult(key=key, ok=False, error=str(exc))
        return WriteResult(key=key)

    async def remove(self, key: str) -> WriteResult:
        try:
            await self._store.remove(key)
        except StoreError as exc:
            logger.error("Removal of %s failed: %s", key, exc)
            return WriteResult(key=key, ok=False, error=str(exc))
        return WriteResult(key=key)
