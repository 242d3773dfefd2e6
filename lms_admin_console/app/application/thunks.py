from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from clients.lms_admin_sdk.errors import ApiError

from lms_admin_console.app.infrastructure.logging.logger import get_logger, log_action
from lms_admin_console.app.store import Action, ActionType, Store

logger = get_logger("lms_admin_console.thunks")

Thunk = Callable[[Store], "ThunkResult"]


@dataclass(frozen=True)
class ThunkResult:
    ok: bool
    payload: Any = None
    error: ApiError | None = None
    request_id: int | None = None

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None


def fetch_thunk(slice_name: str, name: str, call: Callable[[], dict[str, Any]], params: dict[str, Any] | None = None) -> Thunk:
    """List fetch: pending -> fulfilled | rejected, stamped for last-request-wins."""
    return _settling_thunk(
        slice_name,
        name,
        call,
        (ActionType.FETCH_PENDING, ActionType.FETCH_FULFILLED, ActionType.FETCH_REJECTED),
        detail=params,
    )


def snapshot_thunk(slice_name: str, name: str, call: Callable[[], dict[str, Any]], params: dict[str, Any] | None = None) -> Thunk:
    return _settling_thunk(
        slice_name,
        name,
        call,
        (ActionType.FETCH_PENDING, ActionType.SNAPSHOT_FULFILLED, ActionType.FETCH_REJECTED),
        detail=params,
    )


def detail_thunk(slice_name: str, name: str, call: Callable[[], dict[str, Any]]) -> Thunk:
    return _settling_thunk(
        slice_name,
        name,
        call,
        (ActionType.DETAIL_PENDING, ActionType.DETAIL_FULFILLED, ActionType.DETAIL_REJECTED),
    )


def mutation_thunk(slice_name: str, name: str, call: Callable[[], Any]) -> Thunk:
    return _settling_thunk(
        slice_name,
        name,
        call,
        (ActionType.MUTATE_PENDING, ActionType.MUTATE_FULFILLED, ActionType.MUTATE_REJECTED),
    )


def _settling_thunk(
    slice_name: str,
    name: str,
    call: Callable[[], Any],
    action_types: tuple[ActionType, ActionType, ActionType],
    detail: Any = None,
) -> Thunk:
    pending, fulfilled, rejected = action_types

    def _thunk(store: Store) -> ThunkResult:
        request_id = store.next_request_id()
        store.dispatch(Action(pending, slice_name, name, request_id=request_id))
        try:
            payload = call()
        except ApiError as error:
            store.dispatch(Action(rejected, slice_name, name, payload=error.message, request_id=request_id))
            log_action(logger, slice_name, name, "rejected", request_id=request_id, trace_id=error.trace_id, detail=error.code)
            return ThunkResult(ok=False, error=error, request_id=request_id)
        except Exception as error:
            store.dispatch(Action(rejected, slice_name, name, payload=str(error), request_id=request_id))
            log_action(logger, slice_name, name, "rejected", request_id=request_id, detail=type(error).__name__)
            raise
        store.dispatch(Action(fulfilled, slice_name, name, payload=payload, request_id=request_id))
        log_action(logger, slice_name, name, "fulfilled", request_id=request_id, detail=detail)
        return ThunkResult(ok=True, payload=payload, request_id=request_id)

    return _thunk
