"""
Data models for questionnaires and recorded responses.

This module defines:
- Question / Questionnaire: the answer key a submission is scored against
- AnswerRecord / ResponseRecord: what gets persisted for each submission
- Submitter / UserAnswer: inputs to the recorder and the scorer

Persisted and API-facing models are frozen pydantic models that serialize
with camelCase field names.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from response_service.core.constants import (
    ANONYMOUS_SUBMITTER_ID,
    ANONYMOUS_SUBMITTER_NAME,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# --- Questionnaire ---


class Question(CamelModel):
    """
    A single multiple-choice question.

    Attributes:
        id: Question identifier, unique within its questionnaire.
        text: Prompt shown to the participant.
        options: Ordered option texts.
        correct_answer_index: Index into options of the correct answer.
            None marks an unscored question, which never counts as correct.
    """

    id: str = Field(min_length=1)
    text: str = ""
    options: tuple[str, ...] = ()
    correct_answer_index: int | None = None

    @model_validator(mode="after")
    def _correct_answer_in_range(self) -> "Question":
        idx = self.correct_answer_index
        if idx is not None and not 0 <= idx < len(self.options):
            raise ValueError(
                f"correct_answer_index={idx} out of range for "
                f"{len(self.options)} options in question {self.id!r}"
            )
        return self


class Questionnaire(CamelModel):
    id: str = Field(min_length=1)
    title: str = ""
    questions: tuple[Question, ...] = ()

    @model_validator(mode="after")
    def _unique_question_ids(self) -> "Questionnaire":
        seen: set[str] = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id: {question.id!r}")
            seen.add(question.id)
        return self

    @property
    def n_questions(self) -> int:
        return len(self.questions)

    def question_index(self) -> dict[str, Question]:
        """Map question id to Question."""
        return {q.id: q for q in self.questions}


# --- Responses ---


class AnswerRecord(CamelModel):
    question_id: str
    question_text: str = ""
    selected_option: str = ""
    selected_option_index: int = 0
    is_correct: bool | None = None


class ResponseRecord(CamelModel):
    """
    One participant's submission to a questionnaire.

    Records are created once and never modified; the store only ever
    prepends new ones.
    """

    id: str = Field(min_length=1)
    questionnaire_id: str = Field(min_length=1)
    questionnaire_title: str = ""
    submitter_id: str = ANONYMOUS_SUBMITTER_ID
    submitter_name: str = ANONYMOUS_SUBMITTER_NAME
    answers: tuple[AnswerRecord, ...] = ()
    submitted_at: datetime
    score: int | None = Field(default=None, ge=0)
    total_questions: int | None = Field(default=None, ge=0)

    @field_validator("submitted_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def is_scored(self) -> bool:
        return self.score is not None


# --- Inputs ---


@dataclass(frozen=True)
class Submitter:
    submitter_id: str = ANONYMOUS_SUBMITTER_ID
    submitter_name: str = ANONYMOUS_SUBMITTER_NAME


ANONYMOUS = Submitter()


@dataclass(frozen=True)
class UserAnswer:
    """A participant's choice for one question, as an option index."""

    question_id: str
    selected_option_index: int
