"""Tests for the local, remote and fallback stores."""

import json

import httpx
import pytest

from millionaire_app.core.errors import MalformedStoredValue, StoreUnavailable
from millionaire_app.core.game_controller import GameController
from millionaire_app.server.api_server import create_api_app
from millionaire_app.storage import FallbackStore, LocalStore, RemoteStore, select_store


@pytest.mark.asyncio
async def test_local_store_returns_none_for_absent_key():
    store = LocalStore()
    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_local_store_returns_copies():
    store = LocalStore()
    await store.set("tally", [1, 2, 3, 4])
    value = await store.get("tally")
    value[0] = 99
    assert await store.get("tally") == [1, 2, 3, 4]


@pytest.mark.asyncio
async def test_local_store_persists_to_file(tmp_path):
    path = tmp_path / "store.json"
    first = LocalStore(path)
    await first.set("currentGameSession", "game_1_abc")
    await first.set("gameSession_game_1_abc_classScores", {"Alpha": 0})
    await first.remove("gameSession_game_1_abc_classScores")

    second = LocalStore(path)
    assert await second.get("currentGameSession") == "game_1_abc"
    assert await second.get("gameSession_game_1_abc_classScores") is None
    assert json.loads(path.read_text(encoding="utf-8")) == {"currentGameSession": "game_1_abc"}


@pytest.mark.asyncio
async def test_local_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(path)
    assert store.keys() == []
    await store.set("k", "v")
    assert await LocalStore(path).get("k") == "v"


@pytest.mark.asyncio
async def test_local_store_rejects_non_json_values():
    store = LocalStore()
    with pytest.raises(MalformedStoredValue):
        await store.set("k", {1, 2})


def _remote_over_app(store: LocalStore) -> RemoteStore:
    app = create_api_app(GameController(store), store)
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
    return RemoteStore("http://test", client=client)


@pytest.mark.asyncio
async def test_remote_store_round_trips_through_kv_api():
    backing = LocalStore()
    remote = _remote_over_app(backing)
    key = "gameSession_game_1_abc_classLifelines_Room 4/B"

    assert await remote.get(key) is None
    await remote.set(key, {"50-50": False, "phone": True, "audience": True})
    assert await backing.get(key) == {"50-50": False, "phone": True, "audience": True}
    assert await remote.get(key) == {"50-50": False, "phone": True, "audience": True}

    await remote.remove(key)
    assert await backing.get(key) is None
    await remote.remove(key)
    await remote.aclose()


@pytest.mark.asyncio
async def test_remote_store_connection_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://remote")
    remote = RemoteStore("http://remote", client=client)
    with pytest.raises(StoreUnavailable):
        await remote.get("currentGameSession")


@pytest.mark.asyncio
async def test_remote_store_server_error_is_unavailable():
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
        base_url="http://remote",
    )
    remote = RemoteStore("http://remote", client=client)
    with pytest.raises(StoreUnavailable):
        await remote.set("currentGameSession", "game_1_abc")


@pytest.mark.asyncio
async def test_remote_store_undecodable_body_is_malformed():
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>")),
        base_url="http://remote",
    )
    remote = RemoteStore("http://remote", client=client)
    with pytest.raises(MalformedStoredValue):
        await remote.get("currentGameSession")


@pytest.mark.asyncio
async def test_fallback_store_switches_to_local_after_outage(flaky_store):
    local = LocalStore()
    flaky_store.fail_reads = True
    store = FallbackStore(flaky_store, local)

    await local.set("currentGameSession", "game_local")
    assert await store.get("currentGameSession") == "game_local"
    assert store.using_fallback

    flaky_store.fail_reads = False
    await store.set("mathMillionaireClasses", ["Alpha"])
    assert await local.get("mathMillionaireClasses") == ["Alpha"]
    assert await flaky_store.get("mathMillionaireClasses") is None


@pytest.mark.asyncio
async def test_fallback_store_uses_primary_while_reachable(flaky_store):
    local = LocalStore()
    store = FallbackStore(flaky_store, local)
    await store.set("k", 1)
    assert await flaky_store.get("k") == 1
    assert await local.get("k") is None
    assert not store.using_fallback


def test_select_store_without_remote_url_is_local(tmp_path):
    store = select_store("", tmp_path / "store.json")
    assert isinstance(store, LocalStore)


def test_select_store_with_remote_url_wraps_fallback(tmp_path):
    store = select_store("http://127.0.0.1:9", tmp_path / "store.json")
    assert isinstance(store, FallbackStore)
