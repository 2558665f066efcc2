"""Store that talks to the ``/kv`` endpoints of a running millionaire server."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from millionaire_app.constants.network_constants import REMOTE_STORE_TIMEOUT_SECONDS
from millionaire_app.core.errors import MalformedStoredValue, StoreError, StoreUnavailable


class RemoteStore:
    """Synchronized store shared by every device pointed at the same server."""

    def __init__(
        self,
        base_url: str,
        timeout: float = REMOTE_STORE_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def get(self, key: str) -> Any | None:
        response = await self._request("GET", key)
        if response.status_code == 404:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedStoredValue(f"Undecodable value for {key!r}", key) from exc
        if not isinstance(payload, dict) or "value" not in payload:
            raise MalformedStoredValue(f"Unexpected payload shape for {key!r}", key)
        return payload["value"]

    async def set(self, key: str, value: Any) -> None:
        await self._request("PUT", key, json={"value": value})

    async def remove(self, key: str) -> None:
        await self._request("DELETE", key)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, key: str, **kwargs: Any) -> httpx.Response:
        url = f"/kv/{quote(key, safe='')}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise StoreUnavailable(f"Remote store unreachable: {exc}", key) from exc
        if response.status_code >= 500:
            raise StoreUnavailable(f"Remote store returned {response.status_code}", key)
        if response.status_code == 422:
            raise MalformedStoredValue(f"Remote store rejected value for {key!r}", key)
        if response.status_code >= 400 and response.status_code != 404:
            raise StoreError(f"Remote store returned {response.status_code} for {key!r}", key)
        return response
