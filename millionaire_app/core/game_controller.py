"""Business logic for running a game shared between the host and the audience."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from millionaire_app.constants.game_constants import (
    LIFELINE_AUDIENCE,
    LIFELINE_FIFTY_FIFTY,
    LIFELINE_PHONE,
    LIFELINE_TYPES,
    MAX_QUESTIONS,
    OPTION_COUNT,
    PRIZE_LADDER,
)
from millionaire_app.core.errors import (
    ActionResult,
    GameInProgressError,
    GameNotActiveError,
    LifelineUnavailableError,
    WriteResult,
)
from millionaire_app.core.lifeline_aids import ask_the_audience, fifty_fifty, phone_a_friend
from millionaire_app.core.models import (
    AnswerOutcome,
    ClassScoreSummary,
    ClassStanding,
    LifelineOutcome,
    LifelineState,
    QuestionSnapshot,
    QuestionStatistics,
    QuizQuestion,
)
from millionaire_app.core.percentages import vote_percentages
from millionaire_app.core.services.class_assignment import ClassAssignmentEngine
from millionaire_app.core.services.class_roster import ClassRoster
from millionaire_app.core.services.lifeline_ledger import LifelineLedger
from millionaire_app.core.services.question_bank import QuestionBank
from millionaire_app.core.services.question_publisher import QuestionPublisher
from millionaire_app.core.services.score_calculator import ScoreCalculator, rank_class_scores
from millionaire_app.core.services.session_registry import SessionRegistry
from millionaire_app.core.services.vote_aggregator import VoteAggregator
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class GameController:
    """Facade over the session services: registry, roster, assignment, lifelines, votes and scores.

    One instance per game process. Host actions run one at a time; audience
    votes may arrive at any moment and are forwarded straight to the store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        questions: list[QuizQuestion] | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._rng = rng or random.Random()
        self._gateway = StoreGateway(store)

        # Services
        self._registry = SessionRegistry(self._gateway, clock=clock, rng=self._rng)
        self._roster = ClassRoster(self._gateway)
        self._questions = QuestionBank(self._gateway, questions)
        self._assignments = ClassAssignmentEngine(self._gateway)
        self._lifelines = LifelineLedger(self._gateway)
        self._votes = VoteAggregator(self._gateway)
        self._publisher = QuestionPublisher(self._gateway, self._votes)
        self._scores = ScoreCalculator(
            self._gateway, self._votes, self._publisher, self._questions, self._roster
        )

        self._use_stored_questions = questions is None
        self._host_score: int = 0

    async def initialize(self) -> None:
        """Read the class list and question bank from the store."""
        await self._roster.load()
        if self._use_stored_questions:
            await self._questions.load()

    # --- Host state ---

    @property
    def session_id(self) -> str | None:
        return self._registry.session_id

    @property
    def current_question_index(self) -> int:
        return self._registry.question_index

    @property
    def host_score(self) -> int:
        return self._host_score

    def is_active(self) -> bool:
        return self._registry.is_active()

    def get_session_classes(self) -> list[str]:
        return self._assignments.classes

    # --- Session lifecycle ---

    async def start_session(self) -> ActionResult:
        """Start a fresh session; a game still running is ended as lost first."""
        result = ActionResult()
        if self._registry.is_active():
            result.extend(await self._registry.end_session(won=False))

        classes = await self._roster.load()
        if self._use_stored_questions:
            await self._questions.load()

        session_id, writes = await self._registry.start_session(classes)
        result.session_id = session_id
        result.extend(writes)
        result.extend(await self._lifelines.reset_all(session_id, classes))
        self._assignments.begin_session(session_id, classes)
        self._host_score = 0
        result.extend(await self._publish_current_question())
        return result

    async def advance_question(self) -> ActionResult:
        """Move to the next question, or finish the game after the last one."""
        self._require_active()
        next_index = self._registry.question_index + 1
        if next_index >= self._playable_question_count():
            return await self.end_session(won=True)

        result = ActionResult(session_id=self._registry.session_id)
        result.extend(await self._registry.advance(next_index))
        result.extend(await self._publish_current_question())
        return result

    async def answer_question(self, selected_option_index: int) -> AnswerOutcome:
        """Lock in the host's answer, then advance. A wrong answer does not end the game."""
        self._require_active()
        if not 0 <= selected_option_index < OPTION_COUNT:
            raise ValueError(f"Option index must be between 0 and {OPTION_COUNT - 1}.")

        question_index = self._registry.question_index
        _, correct_index = await self._published_question(question_index)
        is_correct = selected_option_index == correct_index
        if is_correct:
            self._host_score = PRIZE_LADDER[question_index]

        result = await self.advance_question()
        return AnswerOutcome(
            question_index=question_index,
            selected_option_index=selected_option_index,
            correct_option_index=correct_index,
            is_correct=is_correct,
            host_score=self._host_score,
            game_over=not self._registry.is_active(),
            failed_writes=result.failed_writes,
        )

    async def end_session(self, won: bool) -> ActionResult:
        result = ActionResult(session_id=self._registry.session_id)
        result.extend(await self._registry.end_session(won))
        return result

    async def quit_game(self) -> ActionResult:
        self._require_active()
        return await self.end_session(won=False)

    # --- Classes and assignment ---

    async def save_classes(self, names: list[str]) -> ActionResult:
        """Store the class list; takes effect when the next session starts."""
        result = ActionResult(session_id=self._registry.session_id)
        result.extend(await self._roster.save(names))
        return result

    async def load_classes(self) -> list[str]:
        return await self._roster.load()

    async def save_questions(self, questions: list[QuizQuestion]) -> ActionResult:
        """Replace the question bank. Not allowed while a game is running."""
        if self._registry.is_active():
            raise GameInProgressError("Questions cannot be changed while a game is running.")
        self._use_stored_questions = True
        result = ActionResult(session_id=self._registry.session_id)
        result.extend(await self._questions.save(questions))
        return result

    def get_questions(self) -> list[QuizQuestion]:
        return self._questions.get_questions()

    async def get_assigned_class(self, question_index: int | None = None) -> str | None:
        index = self._registry.question_index if question_index is None else question_index
        return await self._assignments.get_assigned_class(index)

    async def override_assignment(self, class_name: str, question_index: int | None = None) -> ActionResult:
        self._require_active()
        index = self._registry.question_index if question_index is None else question_index
        result = ActionResult(session_id=self._registry.session_id)
        result.extend(await self._assignments.override_assignment(index, class_name))
        return result

    # --- Lifelines ---

    async def use_lifeline(self, lifeline: str) -> LifelineOutcome:
        self._require_active()
        if lifeline not in LIFELINE_TYPES:
            raise ValueError(f"Unknown lifeline {lifeline!r}.")

        session_id = self._active_session_id()
        question_index = self._registry.question_index
        class_name = await self._assignments.get_assigned_class(question_index)
        if class_name is None:
            raise LifelineUnavailableError("No class is assigned to this question.")
        if not await self._lifelines.is_available(session_id, class_name, lifeline):
            raise LifelineUnavailableError(f"Class {class_name} has already used the {lifeline} lifeline.")

        writes = await self._lifelines.mark_used(session_id, class_name, lifeline)
        options, correct_index = await self._published_question(question_index)
        outcome = LifelineOutcome(lifeline=lifeline, class_name=class_name)

        if lifeline == LIFELINE_FIFTY_FIFTY:
            outcome.remaining_options = fifty_fifty(correct_index, self._rng)
        elif lifeline == LIFELINE_PHONE:
            outcome.friend_message = phone_a_friend(options, correct_index)
        elif lifeline == LIFELINE_AUDIENCE:
            votes = await self._votes.get_tally(session_id, question_index)
            percentages, simulated = ask_the_audience(votes, correct_index, self._rng)
            outcome.audience_percentages = percentages
            outcome.audience_votes = sum(votes)
            outcome.simulated = simulated

        outcome.failed_writes = [write for write in writes if not write.ok]
        logger.info("Class %s used lifeline %s on question %d", class_name, lifeline, question_index)
        return outcome

    async def get_lifeline_states(self) -> dict[str, LifelineState]:
        """Lifeline availability for every class in the current session."""
        session_id = self._registry.session_id
        if session_id is None:
            return {}
        return {
            class_name: await self._lifelines.state_for(session_id, class_name)
            for class_name in self._assignments.classes
        }

    async def is_lifeline_available(self, lifeline: str, class_name: str | None = None) -> bool:
        session_id = self._registry.session_id
        if session_id is None:
            return False
        if class_name is None:
            class_name = await self._assignments.get_assigned_class(self._registry.question_index)
        return await self._lifelines.is_available(session_id, class_name, lifeline)

    # --- Audience ---

    async def record_vote(
        self,
        option_index: int,
        class_name: str | None = None,
        session_id: str | None = None,
        question_index: int | None = None,
    ) -> list[WriteResult]:
        """Count one audience submission against the targeted (or current) question."""
        session_id = session_id or await self._registry.current_session_id()
        if session_id is None:
            raise GameNotActiveError("No game session has been started.")
        if question_index is None:
            question_index = await self._registry.current_question_index(session_id)
        return await self._votes.record_vote(session_id, question_index, option_index, class_name)

    async def get_audience_session(self) -> tuple[str | None, bool, int]:
        """Session id, active flag and question index as the audience sees them."""
        session_id = await self._registry.current_session_id()
        if session_id is None:
            return None, False, 0
        active = await self._registry.is_session_active(session_id)
        question_index = await self._registry.current_question_index(session_id)
        return session_id, active, question_index

    # --- Reads for presentation ---

    async def get_current_snapshot(self, session_id: str | None = None) -> QuestionSnapshot | None:
        session_id = await self._resolve_session(session_id)
        if session_id is None:
            return None
        return await self._publisher.current_snapshot(session_id)

    async def compute_class_scores(self, session_id: str | None = None) -> dict[str, ClassScoreSummary]:
        session_id = await self._resolve_session(session_id)
        if session_id is None:
            return {}
        return await self._scores.compute_class_scores(session_id)

    async def get_class_standings(self, session_id: str | None = None) -> list[ClassStanding]:
        return rank_class_scores(await self.compute_class_scores(session_id))

    async def get_question_statistics(
        self,
        question_index: int | None = None,
        session_id: str | None = None,
    ) -> QuestionStatistics:
        session_id = await self._resolve_session(session_id)
        if question_index is None:
            question_index = self._registry.question_index
        if session_id is None:
            return QuestionStatistics(
                question_index=question_index,
                votes=[0] * OPTION_COUNT,
                percentages=[0] * OPTION_COUNT,
                total_votes=0,
            )

        votes = await self._votes.get_tally(session_id, question_index)
        class_tallies = await self._votes.get_class_tallies(session_id, question_index)
        return QuestionStatistics(
            question_index=question_index,
            votes=votes,
            percentages=vote_percentages(votes),
            total_votes=sum(votes),
            class_totals={name: sum(tally) for name, tally in class_tallies.items() if sum(tally) > 0},
            snapshot=await self._publisher.snapshot_at(session_id, question_index),
        )

    # --- Internals ---

    async def _publish_current_question(self) -> list[WriteResult]:
        session_id = self._active_session_id()
        question_index = self._registry.question_index
        question = self._questions.get_question_at_index(question_index)
        assigned_class, writes = await self._assignments.assign(question_index)
        writes.extend(
            await self._publisher.publish(
                session_id,
                question_index,
                question.question_text,
                question.options,
                question.correct_option_index,
                assigned_class,
            )
        )
        return writes

    async def _published_question(self, question_index: int) -> tuple[list[str], int]:
        """Options and correct index as published; the bank is used only when no snapshot is readable."""
        snapshot = await self._publisher.snapshot_at(self._active_session_id(), question_index)
        if snapshot is not None and snapshot.correct_option_index is not None:
            return snapshot.options, snapshot.correct_option_index
        question = self._questions.get_question_at_index(question_index)
        return question.options, question.correct_option_index

    async def _resolve_session(self, session_id: str | None) -> str | None:
        if session_id:
            return session_id
        return self._registry.session_id or await self._registry.current_session_id()

    def _active_session_id(self) -> str:
        session_id = self._registry.session_id
        if session_id is None:
            raise GameNotActiveError("No game session has been started.")
        return session_id

    def _require_active(self) -> None:
        if not self._registry.is_active():
            raise GameNotActiveError("The game is not active.")

    def _playable_question_count(self) -> int:
        return min(self._questions.get_question_count(), MAX_QUESTIONS)
