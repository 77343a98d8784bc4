"""Answer reconciliation for task saves.

Merges an incoming edit into the answers already stored for a task. Every
applicable question ends up with exactly one answer; unchanged values keep
their timestamp so that re-saving identical data is a no-op.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable, Sequence
from uuid import UUID

from casesync.models.answer import Answer, empty_answer, utcnow
from casesync.models.categories import Category
from casesync.models.questionnaire import Question, Questionnaire

logger = logging.getLogger(__name__)


def applicable_questions(questionnaire: Questionnaire, category: Category) -> list[Question]:
    """Return the questions relevant for `category`, in questionnaire order."""
    return [q for q in questionnaire.questions if q.is_relevant_for(category)]


def _first_by_question(answers: Iterable[Answer]) -> dict[UUID, Answer]:
    index: dict[UUID, Answer] = {}
    for answer in answers:
        index.setdefault(answer.question_uuid, answer)
    return index


def _resolve(
    question: Question,
    current: Answer | None,
    new: Answer | None,
    now: datetime,
) -> Answer:
    if current is not None and new is not None:
        if current.value == new.value:
            return current
        return Answer(
            uuid=current.uuid,
            question_uuid=question.uuid,
            last_modified=now,
            value=new.value,
        )
    if new is not None:
        return Answer(
            uuid=uuid.uuid4(),
            question_uuid=question.uuid,
            last_modified=now,
            value=new.value,
        )
    if current is not None:
        return current
    return empty_answer(question, now)


def reconcile(
    existing: Sequence[Answer],
    incoming: Sequence[Answer],
    questions: Sequence[Question],
    *,
    now: datetime | None = None,
) -> list[Answer]:
    """Compute the authoritative answer list after a save.

    `questions` are the questions applicable to the task's current category.
    The result holds one answer per question in `questions` order, followed
    by existing answers for questions outside that set (kept so nothing is
    lost when the category changes back). Incoming answers for questions
    outside the set are ignored.
    """
    now = now or utcnow()
    current_by_q = _first_by_question(existing)
    new_by_q = _first_by_question(incoming)

    result = [
        _resolve(q, current_by_q.get(q.uuid), new_by_q.get(q.uuid), now)
        for q in questions
    ]

    applicable_ids = {q.uuid for q in questions}
    retained = [a for a in existing if a.question_uuid not in applicable_ids]
    ignored = [qid for qid in new_by_q if qid not in applicable_ids]
    if ignored:
        logger.info("reconcile_ignored_irrelevant_answers count=%d", len(ignored))
    return result + retained


__all__ = ["applicable_questions", "reconcile"]
