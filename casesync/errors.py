"""Typed error hierarchy for case management, transport and storage.

Each error carries a stable `code` token so callers and logs can match on
it without relying on message text.
"""

from __future__ import annotations

from enum import Enum


class NetworkErrorCode(str, Enum):
    INVALID_REQUEST = "invalid_request"
    SERVER_NOT_REACHABLE = "server_not_reachable"
    INVALID_RESPONSE = "invalid_response"
    RESPONSE_NOT_VALID = "response_not_valid"
    SERVER_ERROR = "server_error"
    RESOURCE_NOT_FOUND = "resource_not_found"
    ENCODING_ERROR = "encoding_error"
    REDIRECTION = "redirection"


class NetworkError(Exception):
    """Failure reported by the backend transport."""

    def __init__(self, code: NetworkErrorCode, detail: str | None = None, status: int | None = None):
        self.code = code
        self.detail = detail
        self.status = status
        super().__init__(f"{code.value}: {detail}" if detail else code.value)


class NotPairedError(Exception):
    """The device holds no case token."""

    code = "not_paired"


class StoreClearedError(RuntimeError):
    """The case store was cleared and has not been loaded again."""

    code = "store_cleared"


class StoreCorruptedError(RuntimeError):
    """The persisted case blob could not be decoded."""

    code = "store_corrupted"


class CaseManagingError(Exception):
    code = "case_managing_error"


class NoCaseDataError(CaseManagingError):
    """The operation needs a paired, loaded case and there is none."""

    code = "no_case_data"


class QuestionnaireNotFoundError(CaseManagingError):
    """No questionnaire matches the task type; a schema/backend inconsistency."""

    code = "questionnaire_not_found"


class AlreadyInProgressError(CaseManagingError):
    code = "already_in_progress"


class CouldNotLoadTasksError(CaseManagingError):
    code = "could_not_load_tasks"

    def __init__(self, network_error: NetworkError):
        self.network_error = network_error
        super().__init__(str(network_error))


class CouldNotLoadQuestionnairesError(CaseManagingError):
    code = "could_not_load_questionnaires"

    def __init__(self, network_error: NetworkError):
        self.network_error = network_error
        super().__init__(str(network_error))


__all__ = [
    "NetworkErrorCode",
    "NetworkError",
    "NotPairedError",
    "StoreClearedError",
    "StoreCorruptedError",
    "CaseManagingError",
    "NoCaseDataError",
    "QuestionnaireNotFoundError",
    "AlreadyInProgressError",
    "CouldNotLoadTasksError",
    "CouldNotLoadQuestionnairesError",
]
