"""Per-class lifeline usage for a session."""

from __future__ import annotations

from millionaire_app.constants.game_constants import (
    LIFELINE_AUDIENCE,
    LIFELINE_FIFTY_FIFTY,
    LIFELINE_PHONE,
    LIFELINE_TYPES,
)
from millionaire_app.core.errors import WriteResult
from millionaire_app.core.models import LifelineState
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import class_lifelines_key
from millionaire_app.storage.schemas import LIFELINES, LifelineRecord

_RECORD_FIELDS = {
    LIFELINE_FIFTY_FIFTY: "fifty_fifty",
    LIFELINE_PHONE: "phone",
    LIFELINE_AUDIENCE: "audience",
}


class LifelineLedger:
    """Sparse ledger: a class with no stored record has every lifeline available.

    Usage recorded through this instance is also remembered in memory, so a
    lifeline stays used even when a later read of the store fails or the write
    never landed. One writer per class is assumed; concurrent writers on
    different devices can overwrite each other's record.
    """

    def __init__(self, gateway: StoreGateway) -> None:
        self._gateway = gateway
        self._used: set[tuple[str, str, str]] = set()

    async def is_available(self, session_id: str, class_name: str | None, lifeline: str) -> bool:
        field_name = _field_for(lifeline)
        if not class_name:
            return False
        if (session_id, class_name, lifeline) in self._used:
            return False
        record = await self._read(session_id, class_name)
        return getattr(record, field_name)

    async def state_for(self, session_id: str, class_name: str) -> LifelineState:
        record = await self._read(session_id, class_name)
        record = self._merge_used(session_id, class_name, record)
        return LifelineState(
            class_name=class_name,
            fifty_fifty=record.fifty_fifty,
            phone=record.phone,
            audience=record.audience,
        )

    async def mark_used(self, session_id: str, class_name: str, lifeline: str) -> list[WriteResult]:
        _field_for(lifeline)
        self._used.add((session_id, class_name, lifeline))
        record = self._merge_used(session_id, class_name, await self._read(session_id, class_name))
        key = class_lifelines_key(session_id, class_name)
        return [await self._gateway.write(key, record.model_dump(by_alias=True))]

    async def reset_all(self, session_id: str, classes: list[str]) -> list[WriteResult]:
        """Forget all usage for ``session_id``. Only called when a session starts."""
        self._used = {entry for entry in self._used if entry[0] != session_id}
        return [
            await self._gateway.remove(class_lifelines_key(session_id, class_name))
            for class_name in classes
        ]

    async def _read(self, session_id: str, class_name: str) -> LifelineRecord:
        return await self._gateway.read(
            class_lifelines_key(session_id, class_name), LIFELINES, LifelineRecord()
        )

    def _merge_used(self, session_id: str, class_name: str, record: LifelineRecord) -> LifelineRecord:
        used = {
            _RECORD_FIELDS[lifeline]: False
            for (used_session, used_class, lifeline) in self._used
            if used_session == session_id and used_class == class_name
        }
        return record.model_copy(update=used) if used else record


def _field_for(lifeline: str) -> str:
    try:
        return _RECORD_FIELDS[lifeline]
    except KeyError:
        raise ValueError(
            f"Unknown lifeline {lifeline!r}; expected one of {', '.join(LIFELINE_TYPES)}"
        ) from None
