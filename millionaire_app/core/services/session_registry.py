"""Service for session identity, lifecycle keys and the current-session pointer."""

from __future__ import annotations

import logging
import random
import string
import time
from typing import Callable

from millionaire_app.core.errors import WriteResult
from millionaire_app.core.models import SessionPhase
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import (
    CURRENT_SESSION_KEY,
    active_key,
    class_scores_key,
    question_pointer_key,
)
from millionaire_app.storage.schemas import ACTIVE_FLAG, CLASS_SCORES, QUESTION_POINTER, SESSION_ID

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


class SessionRegistry:
    """Tracks the host's session and mirrors it into the store.

    The audience discovers the session by polling ``currentGameSession`` and the
    per-session ``_active`` / ``_question`` keys.
    """

    def __init__(
        self,
        gateway: StoreGateway,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self._rng = rng or random.Random()
        self._session_id: str | None = None
        self._phase = SessionPhase.IDLE
        self._question_index: int = 0

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def question_index(self) -> int:
        return self._question_index

    def is_active(self) -> bool:
        return self._phase is SessionPhase.ACTIVE

    def generate_session_id(self) -> str:
        """Return ``game_<epoch-ms>_<9 base36 chars>``; ids sort by creation time."""
        millis = int(self._clock() * 1000)
        suffix = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
        return f"game_{millis}_{suffix}"

    async def start_session(self, classes: list[str]) -> tuple[str, list[WriteResult]]:
        """Create a session and publish it; returns the id and the writes made."""
        session_id = self.generate_session_id()
        self._session_id = session_id
        self._phase = SessionPhase.ACTIVE
        self._question_index = 0

        writes = [
            await self._gateway.write(CURRENT_SESSION_KEY, session_id),
            await self._gateway.write(active_key(session_id), "true"),
            await self._gateway.write(question_pointer_key(session_id), "0"),
        ]
        scores_key = class_scores_key(session_id)
        existing = await self._gateway.read(scores_key, CLASS_SCORES, None)
        if existing is None:
            writes.append(await self._gateway.write(scores_key, {name: 0 for name in classes}))

        logger.info("Started session %s with %d class(es)", session_id, len(classes))
        return session_id, writes

    async def advance(self, question_index: int) -> list[WriteResult]:
        if self._session_id is None:
            return []
        self._question_index = question_index
        return [await self._gateway.write(question_pointer_key(self._session_id), str(question_index))]

    async def end_session(self, won: bool) -> list[WriteResult]:
        """Mark the session inactive. Historical keys stay readable."""
        if self._session_id is None:
            return []
        self._phase = SessionPhase.IDLE
        logger.info("Ended session %s (won=%s) at question %d", self._session_id, won, self._question_index)
        return [await self._gateway.write(active_key(self._session_id), "false")]

    # --- Store readers used by audience-facing code ---

    async def current_session_id(self) -> str | None:
        session_id = await self._gateway.read(CURRENT_SESSION_KEY, SESSION_ID, None)
        return session_id or None

    async def is_session_active(self, session_id: str) -> bool:
        return await self._gateway.read(active_key(session_id), ACTIVE_FLAG, False)

    async def current_question_index(self, session_id: str) -> int:
        return await self._gateway.read(question_pointer_key(session_id), QUESTION_POINTER, 0)
