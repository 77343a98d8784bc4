"""Build the case payload submitted to the backend.

Answers to client-only questions are removed here; they must never reach
the backend.
"""

from __future__ import annotations

from typing import Iterable

from casesync.models.app_data import AppData, CaseSnapshot
from casesync.models.task import Task


def _backend_task(task: Task) -> Task:
    copy = task.model_copy(deep=True)
    if copy.result is not None:
        copy.result.answers = [a for a in copy.result.answers if not a.is_client_only]
    return copy


def backend_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [_backend_task(t) for t in tasks]


def build_submission(app_data: AppData) -> CaseSnapshot:
    """Capture a detached snapshot of `app_data` for `put_case`."""
    return CaseSnapshot(
        date_of_symptom_onset=app_data.date_of_symptom_onset,
        tasks=backend_tasks(app_data.tasks),
    )


__all__ = ["backend_tasks", "build_submission"]
