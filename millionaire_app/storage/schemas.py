"""Schemas for every value kept in the store.

Each key has one declared shape. Values that fail validation on read are
treated as absent by the callers.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from millionaire_app.constants.game_constants import OPTION_COUNT

VoteCount = Annotated[int, Field(ge=0)]
VoteTally = Annotated[list[VoteCount], Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)]
OptionTexts = Annotated[list[str], Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)]
OptionIndex = Annotated[int, Field(ge=0, lt=OPTION_COUNT)]


class QuestionSnapshotRecord(BaseModel):
    """Stored under ``_questionData`` and ``_questionData_<idx>``."""

    model_config = ConfigDict(populate_by_name=True)

    question: str
    options: OptionTexts
    question_number: int = Field(alias="questionNumber", ge=1)
    correct: OptionIndex | None = None
    assigned_class: str | None = Field(default=None, alias="assignedClass")


class LifelineRecord(BaseModel):
    """Stored under ``_classLifelines_<className>``; ``False`` means used."""

    model_config = ConfigDict(populate_by_name=True)

    fifty_fifty: bool = Field(default=True, alias="50-50")
    phone: bool = True
    audience: bool = True


class QuestionRecord(BaseModel):
    """One entry of the editable question bank."""

    question: str
    options: OptionTexts
    correct: OptionIndex
    topic: str | None = None


SESSION_ID = TypeAdapter(str)
ACTIVE_FLAG = TypeAdapter(bool)
QUESTION_POINTER = TypeAdapter(Annotated[int, Field(ge=0)])
CLASS_NAME = TypeAdapter(str)
CLASS_NAMES = TypeAdapter(list[str])
CLASS_SCORES = TypeAdapter(dict[str, float])
VOTE_TALLY = TypeAdapter(VoteTally)
CLASS_VOTES = TypeAdapter(dict[str, VoteTally])
QUESTION_SNAPSHOT = TypeAdapter(QuestionSnapshotRecord)
LIFELINES = TypeAdapter(LifelineRecord)
QUESTION_BANK = TypeAdapter(list[QuestionRecord])
