"""Domain logic: schema injection, answer reconciliation and the Case Manager."""

from casesync.logic.answer_reconcile import applicable_questions, reconcile
from casesync.logic.case_manager import CaseManager
from casesync.logic.listeners import CaseManagerListener
from casesync.logic.schema_injection import inject_last_exposure_date_if_needed
from casesync.logic.submission import build_submission

__all__ = [
    "applicable_questions",
    "reconcile",
    "CaseManager",
    "CaseManagerListener",
    "inject_last_exposure_date_if_needed",
    "build_submission",
]
