"""Pydantic models for the case data aggregate and questionnaire schema."""

from __future__ import annotations

from casesync.models.answer import (
    Answer,
    AnswerValue,
    ClassificationDetailsValue,
    ContactDetailsFullValue,
    ContactDetailsValue,
    DateValue,
    LastExposureDateValue,
    MultipleChoiceValue,
    OpenValue,
    QuestionnaireResult,
    empty_answer,
    empty_value_for,
)
from casesync.models.app_data import AppData, CaseSnapshot
from casesync.models.categories import (
    ALL_CATEGORIES,
    Category,
    Communication,
    TaskSource,
    TaskType,
)
from casesync.models.questionnaire import (
    AnswerOption,
    AnswerTrigger,
    Question,
    QuestionGroup,
    Questionnaire,
    QuestionType,
)
from casesync.models.task import Contact, Task

__all__ = [
    "Answer",
    "AnswerValue",
    "ClassificationDetailsValue",
    "ContactDetailsFullValue",
    "ContactDetailsValue",
    "DateValue",
    "LastExposureDateValue",
    "MultipleChoiceValue",
    "OpenValue",
    "QuestionnaireResult",
    "empty_answer",
    "empty_value_for",
    "AppData",
    "CaseSnapshot",
    "ALL_CATEGORIES",
    "Category",
    "Communication",
    "TaskSource",
    "TaskType",
    "AnswerOption",
    "AnswerTrigger",
    "Question",
    "QuestionGroup",
    "Questionnaire",
    "QuestionType",
    "Contact",
    "Task",
]
