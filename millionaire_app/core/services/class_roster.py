"""Service for the configured list of classes."""

from __future__ import annotations

from millionaire_app.core.errors import WriteResult
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import CLASSES_KEY
from millionaire_app.storage.schemas import CLASS_NAMES


class ClassRoster:
    """Loads and saves ``mathMillionaireClasses``, always sorted and de-duplicated."""

    def __init__(self, gateway: StoreGateway) -> None:
        self._gateway = gateway
        self._classes: list[str] = []

    @property
    def classes(self) -> list[str]:
        return list(self._classes)

    async def load(self) -> list[str]:
        stored = await self._gateway.read(CLASSES_KEY, CLASS_NAMES, [])
        self._classes = _normalize(stored)
        return list(self._classes)

    async def save(self, names: list[str]) -> list[WriteResult]:
        self._classes = _normalize(names)
        return [await self._gateway.write(CLASSES_KEY, list(self._classes))]


def _normalize(names: list[str]) -> list[str]:
    return sorted({name.strip() for name in names if name.strip()})
