"""Service for the question list the host plays through."""

from __future__ import annotations

import logging

from millionaire_app.constants.game_constants import MAX_QUESTIONS, OPTION_COUNT
from millionaire_app.core.default_questions import DEFAULT_QUESTIONS
from millionaire_app.core.errors import WriteResult
from millionaire_app.core.models import QuizQuestion
from millionaire_app.core.store_gateway import StoreGateway
from millionaire_app.core.store_keys import QUESTIONS_KEY
from millionaire_app.storage.schemas import QUESTION_BANK, QuestionRecord

logger = logging.getLogger(__name__)


class QuestionBank:
    """Holds the validated question list; falls back to the built-in set."""

    def __init__(self, gateway: StoreGateway, questions: list[QuizQuestion] | None = None) -> None:
        self._gateway = gateway
        source = questions if questions is not None else list(DEFAULT_QUESTIONS)
        self._questions = self._prepare_all(source)

    async def load(self) -> list[QuizQuestion]:
        """Replace the list with the stored one when it is present and valid."""
        records = await self._gateway.read(QUESTIONS_KEY, QUESTION_BANK, None)
        if not records:
            return self.get_questions()
        try:
            self._questions = self._prepare_all([_from_record(record) for record in records])
        except ValueError as exc:
            logger.warning("Stored question bank rejected, keeping current questions: %s", exc)
        return self.get_questions()

    async def save(self, questions: list[QuizQuestion]) -> list[WriteResult]:
        self._questions = self._prepare_all(questions)
        payload = [_to_record(question).model_dump() for question in self._questions]
        return [await self._gateway.write(QUESTIONS_KEY, payload)]

    def get_questions(self) -> list[QuizQuestion]:
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_at_index(self, index: int) -> QuizQuestion:
        if not 0 <= index < len(self._questions):
            raise IndexError(f"Question index {index} out of range")
        return self._questions[index]

    def correct_option_for(self, index: int) -> int | None:
        if 0 <= index < len(self._questions):
            return self._questions[index].correct_option_index
        return None

    def _prepare_all(self, questions: list[QuizQuestion]) -> list[QuizQuestion]:
        if not questions:
            raise ValueError("Quiz must contain at least one question.")
        if len(questions) > MAX_QUESTIONS:
            raise ValueError(f"Quiz can contain at most {MAX_QUESTIONS} questions.")
        return [self._prepare_question(question) for question in questions]

    def _prepare_question(self, question: QuizQuestion) -> QuizQuestion:
        """Validate and normalize a question before use."""
        cleaned_text = question.question_text.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")
        options = self._validate_options(question.options)
        if not 0 <= question.correct_option_index < OPTION_COUNT:
            raise ValueError("Correct option index must be between 0 and 3.")
        return QuizQuestion(
            question_text=cleaned_text,
            options=options,
            correct_option_index=question.correct_option_index,
            topic=question.topic,
        )

    @staticmethod
    def _validate_options(options: list[str]) -> list[str]:
        if len(options) != OPTION_COUNT:
            raise ValueError("Each question must have exactly four options.")
        cleaned = [option.strip() for option in options]
        if any(not option for option in cleaned):
            raise ValueError("Option text cannot be empty.")
        return cleaned


def _from_record(record: QuestionRecord) -> QuizQuestion:
    return QuizQuestion(
        question_text=record.question,
        options=list(record.options),
        correct_option_index=record.correct,
        topic=record.topic,
    )


def _to_record(question: QuizQuestion) -> QuestionRecord:
    return QuestionRecord(
        question=question.question_text,
        options=list(question.options),
        correct=question.correct_option_index,
        topic=question.topic,
    )
