"""Store selection: remote first, local once the remote is unreachable."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from millionaire_app.core.errors import StoreUnavailable
from millionaire_app.storage.base import KeyValueStore
from millionaire_app.storage.local_store import LocalStore
from millionaire_app.storage.remote_store import RemoteStore

logger = logging.getLogger(__name__)


class FallbackStore:
    """Forwards to ``primary`` until it raises StoreUnavailable, then to ``fallback`` for good."""

    def __init__(self, primary: KeyValueStore, fallback: KeyValueStore) -> None:
        self._primary = primary
        self._fallback = fallback
        self._using_fallback = False

    @property
    def using_fallback(self) -> bool:
        return self._using_fallback

    async def get(self, key: str) -> Any | None:
        if not self._using_fallback:
            try:
                return await self._primary.get(key)
            except StoreUnavailable as exc:
                self._switch(exc)
        return await self._fallback.get(key)

    async def set(self, key: str, value: Any) -> None:
        if not self._using_fallback:
            try:
                await self._primary.set(key, value)
                return
            except StoreUnavailable as exc:
                self._switch(exc)
        await self._fallback.set(key, value)

    async def remove(self, key: str) -> None:
        if not self._using_fallback:
            try:
                await self._primary.remove(key)
                return
            except StoreUnavailable as exc:
                self._switch(exc)
        await self._fallback.remove(key)

    def _switch(self, exc: StoreUnavailable) -> None:
        logger.warning("Remote store unavailable (%s); continuing with the local store", exc)
        self._using_fallback = True


def select_store(remote_url: str, local_path: Path | None) -> KeyValueStore:
    """Build the store the game runs against."""
    local = LocalStore(local_path)
    if not remote_url:
        logger.info("Using local store at %s", local.path or "<memory>")
        return local
    logger.info("Using remote store at %s with local fallback", remote_url)
    return FallbackStore(RemoteStore(remote_url), local)
