"""Round-robin mapping of question indices to classes."""

from __future__ import annotations

from millionaire_app.core.errors import WriteResult
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import question_class_key
from millionaire_app.storage.schemas import CLASS_NAME


class ClassAssignmentEngine:
    """Decides which class answers each question.

    An index is assigned lazily on first request and keeps that class for the
    rest of the session unless the host overrides it. With no classes
    configured every lookup returns ``None``, which disables lifelines and class
    scoring for that question.
    """

    def __init__(self, gateway: StoreGateway) -> None:
        self._gateway = gateway
        self._session_id: str | None = None
        self._classes: list[str] = []
        self._assignments: dict[int, str] = {}

    @property
    def classes(self) -> list[str]:
        return list(self._classes)

    def begin_session(self, session_id: str, classes: list[str]) -> None:
        """Bind to a new session; the class list is frozen until the next call."""
        self._session_id = session_id
        self._classes = sorted(classes)
        self._assignments = {}

    def assignments(self) -> dict[int, str]:
        return dict(self._assignments)

    async def get_assigned_class(self, question_index: int) -> str | None:
        class_name, _ = await self.assign(question_index)
        return class_name

    async def assign(self, question_index: int) -> tuple[str | None, list[WriteResult]]:
        """Return the class for ``question_index`` plus any writes needed to persist it."""
        _check_index(question_index)
        existing = self._assignments.get(question_index)
        if existing is not None:
            return existing, []

        if self._session_id is not None:
            stored = await self._gateway.read(
                question_class_key(self._session_id, question_index), CLASS_NAME, None
            )
            if stored:
                self._assignments[question_index] = stored
                return stored, []

        if not self._classes:
            return None, []

        class_name = self._classes[question_index % len(self._classes)]
        self._assignments[question_index] = class_name
        if self._session_id is None:
            return class_name, []
        write = await self._gateway.write(question_class_key(self._session_id, question_index), class_name)
        return class_name, [write]

    async def override_assignment(self, question_index: int, class_name: str) -> list[WriteResult]:
        """Replace the assignment for one index. Votes and lifelines already recorded are untouched."""
        _check_index(question_index)
        cleaned = class_name.strip()
        if not cleaned:
            raise ValueError("Class name must not be empty.")
        self._assignments[question_index] = cleaned
        if self._session_id is None:
            return []
        return [await self._gateway.write(question_class_key(self._session_id, question_index), cleaned)]


def _check_index(question_index: int) -> None:
    if question_index < 0:
        raise ValueError(f"Question index {question_index} must not be negative")
