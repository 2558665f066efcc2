"""Service that replays recorded votes into class standings."""

from __future__ import annotations

from typing import Sequence

from millionaire_app.constants.game_constants import PRIZE_LADDER
from millionaire_app.core.models import ClassScoreSummary, ClassStanding
from millionaire_app.core.services.class_roster import ClassRoster
from millionaire_app.core.services.question_bank import QuestionBank
from millionaire_app.core.services.question_publisher import QuestionPublisher
from millionaire_app.core.services.vote_aggregator import VoteAggregator
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import class_scores_key
from millionaire_app.storage.schemas import CLASS_SCORES


class ScoreCalculator:
    """Recomputes every class's score from the raw per-class tallies.

    Nothing is accumulated between calls: each call reads all tallies for the
    whole ladder, so late or out-of-order votes are always reflected and two
    calls over the same data give the same result.
    """

    def __init__(
        self,
        gateway: StoreGateway,
        votes: VoteAggregator,
        publisher: QuestionPublisher,
        questions: QuestionBank,
        roster: ClassRoster,
        prize_ladder: Sequence[int] = PRIZE_LADDER,
    ) -> None:
        self._gateway = gateway
        self._votes = votes
        self._publisher = publisher
        self._questions = questions
        self._roster = roster
        self._prize_ladder = tuple(prize_ladder)

    async def compute_class_scores(self, session_id: str) -> dict[str, ClassScoreSummary]:
        summaries = await self._initial_entries(session_id)

        for question_index, prize in enumerate(self._prize_ladder):
            class_tallies = await self._votes.get_class_tallies(session_id, question_index)
            if not class_tallies:
                continue
            correct_index = await self._correct_index(session_id, question_index)
            if correct_index is None:
                continue

            for class_name, tally in class_tallies.items():
                summary = summaries.setdefault(class_name, ClassScoreSummary())
                if sum(tally) == 0:
                    continue
                summary.total_questions += 1
                correct_votes = tally[correct_index]
                if correct_votes > 0:
                    summary.total_score += correct_votes * prize
                    summary.correct_answers += correct_votes

        return dict(sorted(summaries.items()))

    async def _initial_entries(self, session_id: str) -> dict[str, ClassScoreSummary]:
        stored = await self._gateway.read(class_scores_key(session_id), CLASS_SCORES, None)
        names = list(stored) if stored is not None else await self._roster.load()
        return {name: ClassScoreSummary() for name in names}

    async def _correct_index(self, session_id: str, question_index: int) -> int | None:
        snapshot = await self._publisher.snapshot_at(session_id, question_index)
        if snapshot is not None and snapshot.correct_option_index is not None:
            return snapshot.correct_option_index
        return self._questions.correct_option_for(question_index)


def rank_class_scores(scores: dict[str, ClassScoreSummary]) -> list[ClassStanding]:
    """Order classes by score (highest first), then by name."""
    ordered = sorted(scores.items(), key=lambda item: (-item[1].total_score, item[0]))
    return [
        ClassStanding(
            rank=position,
            class_name=class_name,
            total_score=summary.total_score,
            correct_answers=summary.correct_answers,
        )
        for position, (class_name, summary) in enumerate(ordered, start=1)
    ]
