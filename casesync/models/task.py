"""Task model: one contact-tracing unit of work tied to a real-world contact."""

from __future__ import annotations

import uuid as uuid_lib
from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import Field

from casesync.models.answer import ContactDetailsValue, QuestionnaireResult
from casesync.models.base import CamelModel
from casesync.models.categories import Category, Communication, TaskSource, TaskType


class Contact(CamelModel):
    category: Category
    communication: Communication = Communication.NONE
    did_inform: bool = False
    date_of_last_exposure: Optional[date] = None


class Task(CamelModel):
    uuid: UUID = Field(default_factory=uuid_lib.uuid4)
    task_type: TaskType = TaskType.CONTACT
    source: TaskSource = TaskSource.APP
    label: Optional[str] = None
    task_context: Optional[str] = None
    contact: Contact
    result: Optional[QuestionnaireResult] = None

    def _contact_details(self) -> Optional[ContactDetailsValue]:
        if self.result is None:
            return None
        for answer in self.result.answers:
            if isinstance(answer.value, ContactDetailsValue):
                return answer.value
        return None

    @property
    def contact_name(self) -> Optional[str]:
        """First and last name from the contact details answer, else the label."""
        details = self._contact_details()
        if details is None:
            return self.label
        return " ".join(part for part in (details.first_name, details.last_name) if part is not None)

    @property
    def contact_first_name(self) -> Optional[str]:
        """First name from a contact details answer that has one, else the label."""
        if self.result is not None:
            for answer in self.result.answers:
                if isinstance(answer.value, ContactDetailsValue) and answer.value.first_name is not None:
                    return answer.value.first_name
        return self.label

    @property
    def is_or_can_be_informed(self) -> bool:
        return self.contact.did_inform or self.contact.communication is Communication.STAFF


__all__ = ["Contact", "Task"]
