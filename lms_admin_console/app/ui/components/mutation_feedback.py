from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.errors import ApiError


def print_mutation_success(operation: str, result: Any, highlighted_id: str | None = None) -> None:
    message = result.get("message") if isinstance(result, dict) else None
    print(f"[success] operation={operation} summary={message or 'ok'}")
    if highlighted_id:
        print(f"[highlight] updated record: {highlighted_id}")


def print_mutation_error(operation: str, error: ApiError, field_errors: dict[str, str] | None = None) -> None:
    print(
        "[mutation-error] "
        f"operation={operation} "
        f"code={error.code} "
        f"message={error.message} "
        f"trace_id={error.trace_id}"
    )
    for field_name, message in (field_errors or {}).items():
        print(f"  - {field_name}: {message}")
