"""Raw audience vote tallies, global and per class."""

from __future__ import annotations

from millionaire_app.constants.game_constants import OPTION_COUNT
from millionaire_app.core.errors import WriteResult
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import class_votes_key, votes_key
from millionaire_app.storage.schemas import CLASS_VOTES, VOTE_TALLY


class VoteAggregator:
    """Increments option counters for a (session, question) pair.

    Submitters are not identified, so repeated submissions all count. Each
    counter key is updated with a plain read-modify-write; the two keys are
    written one after the other, never together.
    """

    def __init__(self, gateway: StoreGateway) -> None:
        self._gateway = gateway

    async def record_vote(
        self,
        session_id: str,
        question_index: int,
        option_index: int,
        class_name: str | None = None,
    ) -> list[WriteResult]:
        if not 0 <= option_index < OPTION_COUNT:
            raise ValueError(f"Option index must be between 0 and {OPTION_COUNT - 1}.")
        if question_index < 0:
            raise ValueError("Question index must not be negative.")

        tally_key = votes_key(session_id, question_index)
        tally = await self.get_tally(session_id, question_index)
        tally[option_index] += 1
        writes = [await self._gateway.write(tally_key, tally)]

        if class_name:
            breakdown_key = class_votes_key(session_id, question_index)
            class_tallies = await self.get_class_tallies(session_id, question_index)
            class_tally = class_tallies.setdefault(class_name, _empty_tally())
            class_tally[option_index] += 1
            writes.append(await self._gateway.write(breakdown_key, class_tallies))
        return writes

    async def get_tally(self, session_id: str, question_index: int) -> list[int]:
        return await self._gateway.read(votes_key(session_id, question_index), VOTE_TALLY, _empty_tally())

    async def get_class_tallies(self, session_id: str, question_index: int) -> dict[str, list[int]]:
        return await self._gateway.read(class_votes_key(session_id, question_index), CLASS_VOTES, {})

    async def clear_tally(self, session_id: str, question_index: int) -> WriteResult:
        """Drop the global counter; per-class history is kept."""
        return await self._gateway.remove(votes_key(session_id, question_index))


def _empty_tally() -> list[int]:
    return [0] * OPTION_COUNT
