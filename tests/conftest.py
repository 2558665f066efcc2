"""
Pytest configuration and shared fixtures for the millionaire tests.
"""

from __future__ import annotations

import random
from typing import Any

import httpx
import pytest

from millionaire_app.core.errors import StoreUnavailable
from millionaire_app.core.game_controller import GameController
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import CLASSES_KEY
from millionaire_app.server.api_server import create_api_app
from millionaire_app.storage.local_store import LocalStore

FIXED_NOW = 1_700_000_000.0


class FlakyStore:
    """In-memory store that can be told to fail reads, writes, or single keys."""

    def __init__(self) -> None:
        self.inner = LocalStore()
        self.fail_reads = False
        self.fail_writes = False
        self.failing_keys: set[str] = set()

    async def get(self, key: str) -> Any | None:
        if self.fail_reads or key in self.failing_keys:
            raise StoreUnavailable("store offline", key)
        return await self.inner.get(key)

    async def set(self, key: str, value: Any) -> None:
        if self.fail_writes or key in self.failing_keys:
            raise StoreUnavailable("store offline", key)
        await self.inner.set(key, value)

    async def remove(self, key: str) -> None:
        if self.fail_writes or key in self.failing_keys:
            raise StoreUnavailable("store offline", key)
        await self.inner.remove(key)


@pytest.fixture
def store() -> LocalStore:
    return LocalStore()


@pytest.fixture
def flaky_store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def gateway(store: LocalStore) -> StoreGateway:
    return StoreGateway(store)


@pytest.fixture
async def controller(store: LocalStore) -> GameController:
    """Controller over a fresh store with classes Alpha and Beta configured."""
    await store.set(CLASSES_KEY, ["Beta", "Alpha"])
    game = GameController(store, rng=random.Random(1234), clock=lambda: FIXED_NOW)
    await game.initialize()
    return game


@pytest.fixture
async def api_client(controller: GameController, store: LocalStore):
    app = create_api_app(controller, store)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client
