"""Functional test bootstrap for the case synchronization engine.

Each test gets its own in-memory SQLite engine, a scripted fake backend and
a paired static pairing provider. Async tests run on asyncio through the
anyio pytest plugin.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any, List, Optional

import pytest

from casesync.db.base import build_engine
from casesync.db.case_store import CaseDataStore
from casesync.errors import NetworkError, NetworkErrorCode
from casesync.http.pairing import StaticPairingProvider
from casesync.logic.case_manager import CaseManager
from casesync.models import (
    AnswerOption,
    AnswerTrigger,
    CaseSnapshot,
    Category,
    Contact,
    Question,
    QuestionGroup,
    Questionnaire,
    QuestionType,
    Task,
    TaskType,
)

CASE_TOKEN = "case-token-123"


class FakeBackend:
    """Scripted `CaseBackend`: returns canned data or raises canned errors."""

    def __init__(self, case: CaseSnapshot, questionnaires: List[Questionnaire]):
        self.case = case
        self.questionnaires = questionnaires
        self.case_error: Optional[NetworkError] = None
        self.questionnaires_error: Optional[NetworkError] = None
        self.put_error: Optional[NetworkError] = None
        self.calls: List[str] = []
        self.submitted: List[CaseSnapshot] = []

    async def get_case(self, identifier: str) -> CaseSnapshot:
        self.calls.append(f"get_case:{identifier}")
        if self.case_error is not None:
            raise self.case_error
        return self.case.model_copy(deep=True)

    async def get_questionnaires(self) -> List[Questionnaire]:
        self.calls.append("get_questionnaires")
        if self.questionnaires_error is not None:
            raise self.questionnaires_error
        return list(self.questionnaires)

    async def put_case(self, identifier: str, value: CaseSnapshot) -> None:
        self.calls.append(f"put_case:{identifier}")
        if self.put_error is not None:
            raise self.put_error
        self.submitted.append(value)


class RecordingListener:
    def __init__(self, name: str = "listener", log: Optional[List[str]] = None):
        self.name = name
        self.log = log if log is not None else []

    def case_manager_did_update_tasks(self, case_manager: Any) -> None:
        self.log.append(f"{self.name}:tasks")

    def case_manager_did_update_sync_state(self, case_manager: Any) -> None:
        self.log.append(f"{self.name}:sync")


def make_question(
    question_type: QuestionType = QuestionType.OPEN,
    categories: tuple = (Category.CATEGORY_2A,),
    *,
    group: QuestionGroup = QuestionGroup.OTHER,
    answer_options: Optional[tuple] = None,
    label: Optional[str] = None,
) -> Question:
    return Question(
        uuid=uuid.uuid4(),
        group=group,
        question_type=question_type,
        label=label,
        description=None,
        relevant_for_categories=categories,
        answer_options=answer_options,
    )


def communication_question(categories: tuple = (Category.CATEGORY_2A,)) -> Question:
    return make_question(
        QuestionType.MULTIPLE_CHOICE,
        categories,
        answer_options=(
            AnswerOption(label="I will", value="index", trigger=AnswerTrigger.SET_COMMUNICATION_TO_INDEX),
            AnswerOption(label="Staff will", value="staff", trigger=AnswerTrigger.SET_COMMUNICATION_TO_STAFF),
        ),
    )


def make_task(category: Category = Category.CATEGORY_2A, **kwargs: Any) -> Task:
    return Task(
        task_type=TaskType.CONTACT,
        label=kwargs.pop("label", "Alex"),
        contact=Contact(category=category),
        **kwargs,
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def engine():
    eng = build_engine("sqlite+pysqlite:///:memory:")
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine) -> CaseDataStore:
    return CaseDataStore(engine)


@pytest.fixture
def questionnaire() -> Questionnaire:
    """Contact questionnaire with two questions relevant to category 2a."""
    return Questionnaire(
        uuid=uuid.uuid4(),
        task_type=TaskType.CONTACT,
        questions=(
            make_question(QuestionType.OPEN, (Category.CATEGORY_2A, Category.CATEGORY_3), label="Notes"),
            make_question(QuestionType.DATE, (Category.CATEGORY_2A,), label="Last contact"),
        ),
    )


@pytest.fixture
def remote_task() -> Task:
    return make_task(Category.CATEGORY_2A)


@pytest.fixture
def backend(questionnaire: Questionnaire, remote_task: Task) -> FakeBackend:
    case = CaseSnapshot(date_of_symptom_onset=date(2020, 10, 1), tasks=[remote_task])
    return FakeBackend(case, [questionnaire])


@pytest.fixture
def pairing() -> StaticPairingProvider:
    return StaticPairingProvider(CASE_TOKEN)


@pytest.fixture
def manager(store: CaseDataStore, backend: FakeBackend, pairing: StaticPairingProvider) -> CaseManager:
    return CaseManager(store, backend, pairing)


@pytest.fixture
def network_error() -> NetworkError:
    return NetworkError(NetworkErrorCode.SERVER_NOT_REACHABLE, detail="offline")
