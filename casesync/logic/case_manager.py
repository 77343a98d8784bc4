"""Case Manager: loads, mutates, persists and syncs one case.

The manager is a single-writer component. Its asynchronous operations are
coroutines awaited on one event loop, so every mutation of the case data and
every listener notification happens on that loop once the transport call
has returned. Snapshots for submission are captured before awaiting the
transport.

Lifecycle:
  Unloaded --load_case_data()--> Loaded (synced)
  Loaded --save(task)--> Loaded (dirty)
  Loaded (dirty) --sync() ok--> Loaded (synced)
  any --remove_case_data()--> Unloaded
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from casesync.db.case_store import CaseDataStore
from casesync.errors import (
    AlreadyInProgressError,
    CouldNotLoadQuestionnairesError,
    CouldNotLoadTasksError,
    NetworkError,
    NoCaseDataError,
    NotPairedError,
    QuestionnaireNotFoundError,
)
from casesync.http.backend import CaseBackend
from casesync.http.pairing import PairingProvider
from casesync.logic.answer_reconcile import applicable_questions, reconcile
from casesync.logic.listeners import (
    SYNC_STATE_UPDATED,
    TASKS_UPDATED,
    CaseManagerListener,
    ListenerRegistry,
)
from casesync.logic.schema_injection import prepare_backend_questionnaires
from casesync.logic.submission import build_submission
from casesync.models.answer import QuestionnaireResult
from casesync.models.app_data import AppData
from casesync.models.questionnaire import Questionnaire
from casesync.models.task import Task

logger = logging.getLogger(__name__)


class CaseManager:
    def __init__(self, store: CaseDataStore, backend: CaseBackend, pairing: PairingProvider):
        self._store = store
        self._backend = backend
        self._pairing = pairing
        self._listeners = ListenerRegistry()
        self._app_data: AppData | None = None
        self._removed = False
        self._loading = False
        self._syncing = False
        self._revision = 0
        self._removals = 0

    # ---- state access ----
    @property
    def _data(self) -> AppData:
        if self._app_data is None:
            if self._removed:
                raise NoCaseDataError("case data was removed; load the case again")
            self._app_data = self._store.load()
        return self._app_data

    def _persist(self, *, is_synced: bool | None = None) -> None:
        self._store.save(self._data, is_synced=is_synced)

    @property
    def has_case_data(self) -> bool:
        return self._store.exists() and bool(self._data.questionnaires)

    @property
    def is_synced(self) -> bool:
        """True when every task was uploaded in its current state."""
        if not self._store.exists():
            return True
        return self._store.is_synced()

    @property
    def date_of_symptom_onset(self) -> Optional[date]:
        return self._data.date_of_symptom_onset

    @property
    def tasks(self) -> list[Task]:
        """Working copies of the managed tasks, in display order."""
        return [t.model_copy(deep=True) for t in self._data.tasks]

    def add_listener(self, listener: CaseManagerListener) -> None:
        """Register `listener`; it is held weakly."""
        self._listeners.add(listener)

    def _set_synced(self, value: bool) -> None:
        self._store.set_synced(value)
        self._listeners.publish(SYNC_STATE_UPDATED, self)

    # ---- loading ----
    def _require_case_data(self) -> None:
        if not self.has_case_data:
            raise NoCaseDataError("no case data; pair and load the case first")

    async def load_case_data(self) -> None:
        """Fetch tasks, then questionnaires, for whatever is missing locally."""
        if self._loading:
            raise AlreadyInProgressError("load_case_data is already running")
        self._loading = True
        self._removed = False
        try:
            await self._load_tasks_if_needed()
            await self._load_questionnaires_if_needed()
        finally:
            self._loading = False
        logger.info("case_loaded tasks=%d questionnaires=%d", len(self._data.tasks), len(self._data.questionnaires))
        self._listeners.publish(TASKS_UPDATED, self)

    async def _load_tasks_if_needed(self) -> None:
        if self._data.tasks:
            return
        try:
            identifier = self._pairing.case_token()
        except NotPairedError as e:
            raise NoCaseDataError("device is not paired") from e
        try:
            case = await self._backend.get_case(identifier)
        except NetworkError as e:
            logger.warning("case_load_tasks_failed code=%s", e.code.value)
            raise CouldNotLoadTasksError(e) from e
        data = self._data
        data.tasks = case.tasks
        data.date_of_symptom_onset = case.date_of_symptom_onset
        self._persist()

    async def _load_questionnaires_if_needed(self) -> None:
        if self._data.questionnaires:
            return
        try:
            questionnaires = await self._backend.get_questionnaires()
        except NetworkError as e:
            logger.warning("case_load_questionnaires_failed code=%s", e.code.value)
            raise CouldNotLoadQuestionnairesError(e) from e
        self._data.questionnaires = prepare_backend_questionnaires(questionnaires)
        self._persist()

    def remove_case_data(self) -> None:
        """Clear all stored data; only a fresh load is valid afterwards."""
        self._store.clear()
        self._app_data = None
        self._removed = True
        self._removals += 1
        logger.info("case_removed")

    # ---- questionnaires & saving ----
    def questionnaire_for(self, task: Task) -> Questionnaire:
        self._require_case_data()
        for questionnaire in self._data.questionnaires:
            if questionnaire.task_type == task.task_type:
                return questionnaire
        logger.error("questionnaire_not_found task=%s task_type=%s", task.uuid, task.task_type)
        raise QuestionnaireNotFoundError(f"no questionnaire for task type {task.task_type!r}")

    def save(self, task: Task) -> None:
        """Store `task`, reconciling its answers with what is already stored.

        Updates the task with the same uuid or appends a new one.
        """
        self._require_case_data()
        questionnaire = self.questionnaire_for(task)

        tasks = self._data.tasks
        stored = next((t for t in reversed(tasks) if t.uuid == task.uuid), None)
        if stored is None:
            stored = task.model_copy(deep=True, update={"result": None})
            tasks.append(stored)
        stored.contact = task.contact.model_copy(deep=True)

        current = stored.result.answers if stored.result is not None else []
        incoming = task.result.answers if task.result is not None else []
        questions = applicable_questions(questionnaire, stored.contact.category)
        stored.result = QuestionnaireResult(
            questionnaire_uuid=questionnaire.uuid,
            answers=reconcile(current, incoming, questions),
        )

        self._persist(is_synced=False)
        self._revision += 1
        logger.info(
            "task_saved task=%s category=%s answers=%d",
            stored.uuid,
            stored.contact.category.value,
            len(stored.result.answers),
        )
        self._listeners.publish(SYNC_STATE_UPDATED, self)
        self._listeners.publish(TASKS_UPDATED, self)

    # ---- syncing ----
    async def sync(self, completion: Callable[[bool], None] | None = None) -> bool:
        """Upload the case; returns (and reports to `completion`) success."""
        self._require_case_data()
        try:
            identifier = self._pairing.case_token()
        except NotPairedError as e:
            raise NoCaseDataError("device is not paired") from e
        if self._syncing:
            raise AlreadyInProgressError("sync is already running")

        snapshot = build_submission(self._data)
        revision = self._revision
        removals = self._removals
        self._syncing = True
        try:
            await self._backend.put_case(identifier, snapshot)
        except NetworkError as e:
            logger.error("case_sync_failed code=%s", e.code.value)
            success = False
        else:
            success = True
        finally:
            self._syncing = False

        if success and removals != self._removals:
            logger.info("case_sync_discarded tasks=%d", len(snapshot.tasks))
        elif success and revision == self._revision:
            self._set_synced(True)
            logger.info("case_synced tasks=%d", len(snapshot.tasks))
        elif success:
            # Saved while uploading: the submitted snapshot is already stale.
            logger.info("case_synced_stale tasks=%d", len(snapshot.tasks))
        if completion is not None:
            completion(success)
        return success


__all__ = ["CaseManager"]
