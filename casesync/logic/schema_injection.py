"""Client-side questionnaire schema adjustments.

The app supports a `date_of_last_exposure` on the contact by asking for it as
a regular question. The backend does not know this question, so it is
injected here when questionnaires are first received and stripped again from
anything coming from or going to the backend.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable

from casesync.models.categories import ALL_CATEGORIES, TaskType
from casesync.models.questionnaire import Question, QuestionGroup, Questionnaire, QuestionType

logger = logging.getLogger(__name__)

LAST_EXPOSURE_LABEL = "Date of last exposure"


def build_last_exposure_question() -> Question:
    return Question(
        uuid=uuid.uuid4(),
        group=QuestionGroup.CONTACT_DETAILS,
        question_type=QuestionType.LAST_EXPOSURE_DATE,
        label=LAST_EXPOSURE_LABEL,
        description=None,
        relevant_for_categories=ALL_CATEGORIES,
        answer_options=None,
    )


def has_last_exposure_question(questionnaire: Questionnaire) -> bool:
    return any(q.question_type is QuestionType.LAST_EXPOSURE_DATE for q in questionnaire.questions)


def inject_last_exposure_date_if_needed(questionnaire: Questionnaire) -> Questionnaire:
    """Return `questionnaire` with a last-exposure-date question for contact tasks.

    The question goes directly before the first question that can set the
    communication mode to the index person, or at the end when there is none.
    A questionnaire already carrying the question is returned unchanged.
    """
    if questionnaire.task_type is not TaskType.CONTACT:
        return questionnaire
    if has_last_exposure_question(questionnaire):
        return questionnaire

    questions = list(questionnaire.questions)
    injected = build_last_exposure_question()
    index = next(
        (i for i, q in enumerate(questions) if q.has_communication_trigger),
        None,
    )
    if index is None:
        questions.append(injected)
    else:
        questions.insert(index, injected)
    logger.info(
        "last_exposure_injected questionnaire=%s position=%d of=%d",
        questionnaire.uuid,
        index if index is not None else len(questions) - 1,
        len(questions),
    )
    return questionnaire.with_questions(questions)


def strip_client_only_questions(questionnaire: Questionnaire) -> Questionnaire:
    """Drop last-exposure-date questions from a backend-supplied questionnaire."""
    if not has_last_exposure_question(questionnaire):
        return questionnaire
    logger.warning(
        "backend_questionnaire_contains_client_only_question questionnaire=%s",
        questionnaire.uuid,
    )
    return questionnaire.with_questions(
        [q for q in questionnaire.questions if q.question_type is not QuestionType.LAST_EXPOSURE_DATE]
    )


def prepare_backend_questionnaires(questionnaires: Iterable[Questionnaire]) -> list[Questionnaire]:
    """Sanitize and inject every questionnaire received from the backend."""
    return [inject_last_exposure_date_if_needed(strip_client_only_questions(q)) for q in questionnaires]


__all__ = [
    "LAST_EXPOSURE_LABEL",
    "build_last_exposure_question",
    "has_last_exposure_question",
    "inject_last_exposure_date_if_needed",
    "strip_client_only_questions",
    "prepare_backend_questionnaires",
]
