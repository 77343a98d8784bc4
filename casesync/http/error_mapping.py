"""Central mapping of transport outcomes to `NetworkError` codes.

Single source of truth for translating HTTP status codes and httpx
exceptions. The backend client must import from here instead of
hardcoding codes.
"""

from __future__ import annotations

import httpx

from casesync.errors import NetworkError, NetworkErrorCode

# Inclusive status ranges checked in order; exact codes take precedence.
STATUS_EXACT = {
    404: NetworkErrorCode.RESOURCE_NOT_FOUND,
}

STATUS_RANGES = (
    (300, 399, NetworkErrorCode.REDIRECTION),
    (400, 499, NetworkErrorCode.INVALID_REQUEST),
    (500, 599, NetworkErrorCode.SERVER_ERROR),
)


def code_for_status(status: int) -> NetworkErrorCode | None:
    """Return the error code for a non-2xx status, or None for success."""
    if 200 <= status <= 299:
        return None
    if status in STATUS_EXACT:
        return STATUS_EXACT[status]
    for low, high, code in STATUS_RANGES:
        if low <= status <= high:
            return code
    return NetworkErrorCode.INVALID_RESPONSE


def error_for_response(response: httpx.Response) -> NetworkError | None:
    code = code_for_status(response.status_code)
    if code is None:
        return None
    return NetworkError(code, detail=f"{response.request.method} {response.request.url.path}", status=response.status_code)


def error_for_exception(exc: httpx.HTTPError) -> NetworkError:
    if isinstance(exc, (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError)):
        return NetworkError(NetworkErrorCode.SERVER_NOT_REACHABLE, detail=str(exc) or type(exc).__name__)
    if isinstance(exc, httpx.UnsupportedProtocol):
        return NetworkError(NetworkErrorCode.INVALID_REQUEST, detail=str(exc))
    return NetworkError(NetworkErrorCode.INVALID_RESPONSE, detail=str(exc) or type(exc).__name__)


__all__ = ["code_for_status", "error_for_response", "error_for_exception"]
