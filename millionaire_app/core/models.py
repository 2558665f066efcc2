"""Domain models for the millionaire game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from millionaire_app.core.errors import WriteResult


class SessionPhase(Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(slots=True)
class QuizQuestion:
    """Multiple-choice question with exactly four options."""

    question_text: str
    options: list[str]
    correct_option_index: int
    topic: str | None = None


@dataclass(slots=True)
class QuestionSnapshot:
    """Published record of a question as seen by the audience and the scorer."""

    question_text: str
    options: list[str]
    question_number: int  # 1-based, as shown to the audience
    correct_option_index: int | None
    assigned_class: str | None = None


@dataclass(slots=True)
class LifelineState:
    """Availability of the three lifelines for one class."""

    class_name: str
    fifty_fifty: bool = True
    phone: bool = True
    audience: bool = True

    def as_dict(self) -> dict[str, bool]:
        return {"50-50": self.fifty_fifty, "phone": self.phone, "audience": self.audience}


@dataclass(slots=True)
class ClassScoreSummary:
    """Derived per-class standing; recomputed from raw votes on every request."""

    total_score: int = 0
    correct_answers: int = 0
    total_questions: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "totalScore": self.total_score,
            "correctAnswers": self.correct_answers,
            "totalQuestions": self.total_questions,
        }


@dataclass(slots=True)
class ClassStanding:
    """Immutable leaderboard row returned to consumers."""

    rank: int
    class_name: str
    total_score: int
    correct_answers: int


@dataclass(slots=True)
class QuestionStatistics:
    """Vote breakdown for one question."""

    question_index: int
    votes: list[int]
    percentages: list[int]
    total_votes: int
    class_totals: dict[str, int] = field(default_factory=dict)
    snapshot: QuestionSnapshot | None = None


@dataclass(slots=True)
class LifelineOutcome:
    """Result of using a lifeline, ready for presentation."""

    lifeline: str
    class_name: str
    remaining_options: list[int] | None = None
    friend_message: str | None = None
    audience_percentages: list[int] | None = None
    audience_votes: int = 0
    simulated: bool = False
    failed_writes: list[WriteResult] = field(default_factory=list)


@dataclass(slots=True)
class AnswerOutcome:
    """Result of the host locking in an option."""

    question_index: int
    selected_option_index: int
    correct_option_index: int
    is_correct: bool
    host_score: int
    game_over: bool
    failed_writes: list[WriteResult] = field(default_factory=list)
