"""Capability interface every key-value backend implements.

Values are JSON-like: scalars, lists and flat mappings. ``get`` returns
``None`` for an absent key. Implementations raise
:class:`~millionaire_app.core.errors.StoreUnavailable` when the backend cannot
be reached and :class:`~millionaire_app.core.errors.MalformedStoredValue` when
a value cannot be decoded.
"""

from __future__ import annotations

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Asynchronous get/set/remove over string keys."""

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any) -> None: ...

    async def remove(self, key: str) -> None: ...
