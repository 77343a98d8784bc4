"""Backend collaborator: case and questionnaire endpoints over httpx.

The Case Manager depends only on the `CaseBackend` protocol. `BackendClient`
is the HTTP implementation; every failure surfaces as `NetworkError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from casesync.errors import NetworkError, NetworkErrorCode
from casesync.http.error_mapping import error_for_exception, error_for_response
from casesync.models.app_data import CaseSnapshot
from casesync.models.questionnaire import Questionnaire

logger = logging.getLogger(__name__)

_QUESTIONNAIRES = TypeAdapter(list[Questionnaire])


class CaseBackend(Protocol):
    async def get_case(self, identifier: str) -> CaseSnapshot: ...

    async def get_questionnaires(self) -> list[Questionnaire]: ...

    async def put_case(self, identifier: str, value: CaseSnapshot) -> None: ...


class BackendClient:
    """httpx-based `CaseBackend`.

    Endpoints:
      GET  {base}/cases/{token}       -> CaseSnapshot JSON
      GET  {base}/questionnaires      -> {"questionnaires": [...]} or a bare list
      PUT  {base}/cases/{token}       <- CaseSnapshot JSON
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            err = error_for_exception(exc)
            logger.warning("backend_request_failed method=%s path=%s code=%s", method, path, err.code.value)
            raise err from exc
        err = error_for_response(response)
        if err is not None:
            logger.warning(
                "backend_request_rejected method=%s path=%s status=%s code=%s",
                method,
                path,
                response.status_code,
                err.code.value,
            )
            raise err
        logger.info("backend_request_ok method=%s path=%s status=%s", method, path, response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise NetworkError(NetworkErrorCode.INVALID_RESPONSE, detail="body is not JSON") from exc

    async def get_case(self, identifier: str) -> CaseSnapshot:
        response = await self._request("GET", f"/cases/{identifier}")
        body = self._json(response)
        try:
            return CaseSnapshot.model_validate(body)
        except ValidationError as exc:
            raise NetworkError(NetworkErrorCode.RESPONSE_NOT_VALID, detail=str(exc)) from exc

    async def get_questionnaires(self) -> list[Questionnaire]:
        response = await self._request("GET", "/questionnaires")
        body = self._json(response)
        items = body.get("questionnaires") if isinstance(body, dict) else body
        try:
            return _QUESTIONNAIRES.validate_python(items)
        except ValidationError as exc:
            raise NetworkError(NetworkErrorCode.RESPONSE_NOT_VALID, detail=str(exc)) from exc

    async def put_case(self, identifier: str, value: CaseSnapshot) -> None:
        try:
            payload = value.to_wire()
        except PydanticSerializationError as exc:
            raise NetworkError(NetworkErrorCode.ENCODING_ERROR, detail=str(exc)) from exc
        await self._request("PUT", f"/cases/{identifier}", json=payload)


__all__ = ["CaseBackend", "BackendClient"]
