"""Answers and questionnaire results.

`AnswerValue` is a closed variant discriminated on `type`. Each variant only
carries its payload, so two values compare equal exactly when their payloads
match; the answer's id and timestamp live on `Answer` and never take part in
value comparisons.
"""

from __future__ import annotations

import uuid as uuid_lib
from datetime import date, datetime, timezone
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field

from casesync.models.base import CamelModel, FrozenCamelModel
from casesync.models.questionnaire import AnswerOption, Question, QuestionType


class ClassificationDetailsValue(FrozenCamelModel):
    type: Literal["classificationDetails"] = "classificationDetails"
    category1_risk: Optional[bool] = None
    # to_camel would yield "category2ARisk"
    category2a_risk: Optional[bool] = Field(default=None, alias="category2aRisk")
    category2b_risk: Optional[bool] = Field(default=None, alias="category2bRisk")
    category3_risk: Optional[bool] = None


class ContactDetailsValue(FrozenCamelModel):
    type: Literal["contactDetails"] = "contactDetails"
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None


class ContactDetailsFullValue(FrozenCamelModel):
    type: Literal["contactDetailsFull"] = "contactDetailsFull"
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None


class DateValue(FrozenCamelModel):
    type: Literal["date"] = "date"
    value: Optional[date] = None


class OpenValue(FrozenCamelModel):
    type: Literal["open"] = "open"
    value: Optional[str] = None


class MultipleChoiceValue(FrozenCamelModel):
    type: Literal["multipleChoice"] = "multipleChoice"
    value: Optional[AnswerOption] = None


class LastExposureDateValue(FrozenCamelModel):
    type: Literal["lastExposureDate"] = "lastExposureDate"
    value: Optional[date] = None


AnswerValue = Annotated[
    Union[
        ClassificationDetailsValue,
        ContactDetailsValue,
        ContactDetailsFullValue,
        DateValue,
        OpenValue,
        MultipleChoiceValue,
        LastExposureDateValue,
    ],
    Field(discriminator="type"),
]

_EMPTY_VALUES = {
    QuestionType.CLASSIFICATION_DETAILS: ClassificationDetailsValue,
    QuestionType.CONTACT_DETAILS: ContactDetailsValue,
    QuestionType.CONTACT_DETAILS_FULL: ContactDetailsFullValue,
    QuestionType.DATE: DateValue,
    QuestionType.OPEN: OpenValue,
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceValue,
    QuestionType.LAST_EXPOSURE_DATE: LastExposureDateValue,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Answer(CamelModel):
    uuid: UUID = Field(default_factory=uuid_lib.uuid4)
    question_uuid: UUID
    last_modified: datetime = Field(default_factory=utcnow)
    value: AnswerValue

    @property
    def is_client_only(self) -> bool:
        return isinstance(self.value, LastExposureDateValue)


class QuestionnaireResult(CamelModel):
    questionnaire_uuid: UUID
    answers: list[Answer] = Field(default_factory=list)


def empty_value_for(question_type: QuestionType):
    """Return the unanswered value variant for `question_type`."""
    return _EMPTY_VALUES[question_type]()


def empty_answer(question: Question, now: datetime | None = None) -> Answer:
    """Build a blank answer slot for `question` with a fresh id."""
    return Answer(
        question_uuid=question.uuid,
        last_modified=now or utcnow(),
        value=empty_value_for(question.question_type),
    )


__all__ = [
    "ClassificationDetailsValue",
    "ContactDetailsValue",
    "ContactDetailsFullValue",
    "DateValue",
    "OpenValue",
    "MultipleChoiceValue",
    "LastExposureDateValue",
    "AnswerValue",
    "Answer",
    "QuestionnaireResult",
    "empty_value_for",
    "empty_answer",
    "utcnow",
]
