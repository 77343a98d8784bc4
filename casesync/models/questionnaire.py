"""Questionnaire schema model.

Questionnaires are immutable descriptions of the questions a task needs
answered. They are linked to tasks via `task_type`. The client-only
`QuestionType.LAST_EXPOSURE_DATE` is never part of a backend payload; it is
injected locally by `casesync.logic.schema_injection`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import ValidationError, field_serializer, field_validator

from casesync.models.base import FrozenCamelModel
from casesync.models.categories import Category, Communication, TaskType

logger = logging.getLogger(__name__)


class AnswerTrigger(str, Enum):
    SET_COMMUNICATION_TO_INDEX = "communication_index"
    SET_COMMUNICATION_TO_STAFF = "communication_staff"

    @property
    def communication(self) -> Communication:
        """The communication mode a selected option with this trigger implies."""
        if self is AnswerTrigger.SET_COMMUNICATION_TO_INDEX:
            return Communication.INDEX
        return Communication.STAFF


class QuestionGroup(str, Enum):
    CLASSIFICATION = "classification"
    CONTACT_DETAILS = "contactdetails"
    OTHER = "other"


class QuestionType(str, Enum):
    CLASSIFICATION_DETAILS = "classificationdetails"
    DATE = "date"
    CONTACT_DETAILS = "contactdetails"
    CONTACT_DETAILS_FULL = "contactdetails_full"
    OPEN = "open"
    MULTIPLE_CHOICE = "multiplechoice"
    # Client-only; answers of this type are never sent to the backend.
    LAST_EXPOSURE_DATE = "lastExposureDate"


class AnswerOption(FrozenCamelModel):
    label: str
    value: str
    trigger: Optional[AnswerTrigger] = None


class Question(FrozenCamelModel):
    uuid: UUID
    group: QuestionGroup
    question_type: QuestionType
    label: Optional[str] = None
    description: Optional[str] = None
    relevant_for_categories: tuple[Category, ...] = ()
    answer_options: Optional[tuple[AnswerOption, ...]] = None

    @field_validator("relevant_for_categories", mode="before")
    @classmethod
    def unwrap_categories(cls, v: Any) -> Any:
        # Backend wraps each tier: [{"category": "2a"}, ...]
        if v is None:
            return ()
        if isinstance(v, (list, tuple)):
            return tuple(item.get("category") if isinstance(item, dict) else item for item in v)
        return v

    @field_validator("answer_options", mode="wrap")
    @classmethod
    def lenient_answer_options(cls, v: Any, handler: Any) -> Any:
        try:
            return handler(v)
        except ValidationError:
            logger.warning("question_answer_options_unreadable value=%r", v)
            return None

    @field_serializer("relevant_for_categories")
    def wrap_categories(self, categories: tuple[Category, ...]) -> list[dict[str, str]]:
        return [{"category": c.value} for c in categories]

    def is_relevant_for(self, category: Category) -> bool:
        return category in self.relevant_for_categories

    @property
    def has_communication_trigger(self) -> bool:
        """True if any option sets the communication mode to the index person."""
        return any(
            opt.trigger is AnswerTrigger.SET_COMMUNICATION_TO_INDEX
            for opt in (self.answer_options or ())
        )


class Questionnaire(FrozenCamelModel):
    uuid: UUID
    task_type: TaskType
    questions: tuple[Question, ...] = ()

    def with_questions(self, questions: list[Question] | tuple[Question, ...]) -> "Questionnaire":
        """Return a copy of this questionnaire carrying `questions`."""
        return Questionnaire(uuid=self.uuid, task_type=self.task_type, questions=tuple(questions))


__all__ = [
    "AnswerTrigger",
    "QuestionGroup",
    "QuestionType",
    "AnswerOption",
    "Question",
    "Questionnaire",
]
