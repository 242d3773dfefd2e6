from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

STATUS_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}
TRACE_HEADERS = ("X-Trace-ID", "X-Request-ID")
FALLBACK_MESSAGE = "HTTP request failed"


@dataclass
class ApiError(Exception):
    """Failure reported by the LMS API or by the transport beneath it.

    ``message`` is the backend's own text; callers display it unchanged.
    """

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        status = response.status_code
        header_trace = next((response.headers[name] for name in TRACE_HEADERS if response.headers.get(name)), None)
        try:
            payload: Any = response.json()
        except ValueError:
            payload = None

        body = payload if isinstance(payload, dict) else {}
        message = body.get("message") or body.get("error") or response.text or FALLBACK_MESSAGE
        return cls(
            code=str(body.get("code") or STATUS_CODES.get(status, "HTTP_ERROR")),
            message=str(message),
            details=(body.get("details") or body.get("errors")) if body else payload,
            trace_id=str(body["trace_id"]) if body.get("trace_id") else header_trace,
            status_code=status,
        )
