"""Root persisted aggregate and backend case payload."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field

from casesync.models.base import CamelModel
from casesync.models.questionnaire import Questionnaire
from casesync.models.task import Task


class AppData(CamelModel):
    """Everything the client persists for one case.

    Task order is insertion/display order. Questionnaires normally hold one
    entry per task type.
    """

    tasks: list[Task] = Field(default_factory=list)
    questionnaires: list[Questionnaire] = Field(default_factory=list)
    date_of_symptom_onset: Optional[date] = None

    @classmethod
    def empty(cls) -> "AppData":
        return cls()


class CaseSnapshot(CamelModel):
    """Case payload exchanged with the backend (`getCase` / `putCase`)."""

    date_of_symptom_onset: Optional[date] = None
    tasks: list[Task] = Field(default_factory=list)


__all__ = ["AppData", "CaseSnapshot"]
