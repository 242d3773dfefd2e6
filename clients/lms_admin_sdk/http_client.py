from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from clients.lms_admin_sdk.config import SDKConfig
from clients.lms_admin_sdk.errors import ApiError

FileField = tuple[str, bytes, str]
AuthErrorHandler = Callable[[ApiError], None]

AUTH_STATUSES = frozenset({401, 403})


def _transport_error(exc: httpx.TransportError) -> ApiError:
    if isinstance(exc, httpx.TimeoutException):
        return ApiError(
            code="TIMEOUT_ERROR",
            message="The request timed out. Check your connection and refresh.",
            details=str(exc),
        )
    return ApiError(code="NETWORK_ERROR", message="Could not reach the LMS API.", details=str(exc))


class HttpClient:
    """Thin httpx wrapper shared by every area client.

    Every call is sent once; a failed read is repeated only when the operator refreshes.
    """

    def __init__(self, config: SDKConfig | None = None, client: httpx.Client | None = None) -> None:
        self.config = config or SDKConfig.from_env()
        self.access_token: str | None = self.config.access_token
        self._on_auth_error: AuthErrorHandler | None = None
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )

    def register_auth_error_handler(self, handler: AuthErrorHandler | None) -> None:
        self._on_auth_error = handler

    def request(self, method: str, path: str, json_body: dict[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
        response = self._send(method, path, json=json_body, **kwargs)
        try:
            body = response.json()
        except ValueError:
            return {}
        if isinstance(body, dict):
            return body
        return {"data": body}

    def request_raw(self, method: str, path: str, params: dict[str, Any] | None = None) -> bytes:
        return self._send(method, path, params=params).content

    def close(self) -> None:
        self._client.close()

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        headers.update(extra or {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _send(self, method: str, path: str, headers: dict[str, str] | None = None, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path.lstrip("/"), headers=self._headers(headers), **kwargs)
        except httpx.TransportError as exc:
            raise _transport_error(exc) from exc

        if response.status_code < 400:
            return response
        error = ApiError.from_http_response(response)
        if error.status_code in AUTH_STATUSES and self._on_auth_error is not None:
            self._on_auth_error(error)
        raise error
