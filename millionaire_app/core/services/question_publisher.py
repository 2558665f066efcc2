"""Publishes question snapshots for the audience and for later scoring."""

from __future__ import annotations

from millionaire_app.core.errors import WriteResult
from millionaire_app.core.models import QuestionSnapshot
from millionaire_app.core.services.vote_aggregator import VoteAggregator
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import (
    current_question_data_key,
    question_class_key,
    question_data_key,
)
from millionaire_app.storage.schemas import QUESTION_SNAPSHOT, QuestionSnapshotRecord


class QuestionPublisher:
    def __init__(self, gateway: StoreGateway, votes: VoteAggregator) -> None:
        self._gateway = gateway
        self._votes = votes

    async def publish(
        self,
        session_id: str,
        question_index: int,
        question_text: str,
        options: list[str],
        correct_index: int,
        assigned_class: str | None,
    ) -> list[WriteResult]:
        """Write the snapshot under the current and indexed keys, then reset the global tally.

        Republishing an index overwrites its snapshot. The tally is cleared last,
        so a reader may briefly see the old counts next to the new question.
        """
        record = QuestionSnapshotRecord(
            question=question_text,
            options=list(options),
            question_number=question_index + 1,
            correct=correct_index,
            assigned_class=assigned_class,
        )
        payload = record.model_dump(by_alias=True)

        writes = [
            await self._gateway.write(current_question_data_key(session_id), payload),
            await self._gateway.write(question_data_key(session_id, question_index), payload),
        ]
        if assigned_class:
            writes.append(
                await self._gateway.write(question_class_key(session_id, question_index), assigned_class)
            )
        writes.append(await self._votes.clear_tally(session_id, question_index))
        return writes

    async def current_snapshot(self, session_id: str) -> QuestionSnapshot | None:
        record = await self._gateway.read(current_question_data_key(session_id), QUESTION_SNAPSHOT, None)
        return _to_snapshot(record) if record is not None else None

    async def snapshot_at(self, session_id: str, question_index: int) -> QuestionSnapshot | None:
        record = await self._gateway.read(
            question_data_key(session_id, question_index), QUESTION_SNAPSHOT, None
        )
        return _to_snapshot(record) if record is not None else None


def _to_snapshot(record: QuestionSnapshotRecord) -> QuestionSnapshot:
    return QuestionSnapshot(
        question_text=record.question,
        options=list(record.options),
        question_number=record.question_number,
        correct_option_index=record.correct,
        assigned_class=record.assigned_class,
    )
