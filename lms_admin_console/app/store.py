from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from lms_admin_console.app.infrastructure.logging.logger import get_logger
from lms_admin_console.app.state import AppState, SliceState, default_pagination

logger = get_logger("lms_admin_console.store")


class ActionType(str, Enum):
    FETCH_PENDING = "fetch/pending"
    FETCH_FULFILLED = "fetch/fulfilled"
    FETCH_REJECTED = "fetch/rejected"
    DETAIL_PENDING = "detail/pending"
    DETAIL_FULFILLED = "detail/fulfilled"
    DETAIL_REJECTED = "detail/rejected"
    MUTATE_PENDING = "mutate/pending"
    MUTATE_FULFILLED = "mutate/fulfilled"
    MUTATE_REJECTED = "mutate/rejected"
    SNAPSHOT_FULFILLED = "snapshot/fulfilled"
    SET_FILTERS = "filters/set"
    RESET_FILTERS = "filters/reset"
    CLEAR_ERROR = "error/clear"


@dataclass(frozen=True)
class Action:
    type: ActionType
    slice: str
    name: str = ""
    payload: Any = None
    request_id: int | None = None


Listener = Callable[[Action, AppState], None]


def set_filters(slice_name: str, filters: dict[str, Any]) -> Action:
    return Action(ActionType.SET_FILTERS, slice_name, payload=dict(filters))


def reset_filters(slice_name: str) -> Action:
    return Action(ActionType.RESET_FILTERS, slice_name)


def clear_error(slice_name: str) -> Action:
    return Action(ActionType.CLEAR_ERROR, slice_name)


def reduce_slice(state: SliceState, action: Action) -> SliceState:
    kind = action.type
    if kind in {ActionType.FETCH_FULFILLED, ActionType.FETCH_REJECTED, ActionType.SNAPSHOT_FULFILLED}:
        if action.request_id is not None and action.request_id < state.latest_request_id:
            # a newer fetch is already in flight or settled
            return state

    if kind is ActionType.FETCH_PENDING:
        latest = max(state.latest_request_id, action.request_id or 0)
        if state.reset_meta_on_fetch:
            return replace(state, loading=True, latest_request_id=latest, meta={})
        return replace(state, loading=True, latest_request_id=latest)
    if kind is ActionType.FETCH_FULFILLED:
        payload = action.payload or {}
        return replace(
            state,
            loading=False,
            items=list(payload.get("items") or []),
            pagination=dict(payload.get("pagination") or state.pagination),
            meta=dict(payload.get("meta") or {}),
            error=None,
        )
    if kind is ActionType.SNAPSHOT_FULFILLED:
        return replace(state, loading=False, snapshot=action.payload, error=None)
    if kind is ActionType.FETCH_REJECTED:
        if state.reset_meta_on_fetch:
            return replace(state, loading=False, items=[], meta={}, error=str(action.payload))
        return replace(state, loading=False, error=str(action.payload))

    if kind is ActionType.DETAIL_PENDING:
        return replace(state, detail_loading=True, detail=None)
    if kind is ActionType.DETAIL_FULFILLED:
        return replace(state, detail_loading=False, detail=action.payload)
    if kind is ActionType.DETAIL_REJECTED:
        return replace(state, detail_loading=False, error=str(action.payload))

    if kind is ActionType.MUTATE_PENDING:
        return replace(state, mutating=True)
    if kind is ActionType.MUTATE_FULFILLED:
        return replace(state, mutating=False, last_mutation=action.payload, error=None)
    if kind is ActionType.MUTATE_REJECTED:
        return replace(state, mutating=False, error=str(action.payload))

    if kind is ActionType.SET_FILTERS:
        return replace(state, applied_filters=dict(action.payload or {}))
    if kind is ActionType.RESET_FILTERS:
        limit = state.pagination.get("limit") or 20
        return replace(state, applied_filters={}, pagination={**default_pagination(limit), "total": state.pagination.get("total", 0)})
    if kind is ActionType.CLEAR_ERROR:
        return replace(state, error=None)
    return state


class Store:
    """Application state container; every write goes through ``dispatch``."""

    def __init__(self, state: AppState | None = None) -> None:
        self._state = state or AppState.initial()
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        self._request_ids = itertools.count(1)

    @property
    def state(self) -> AppState:
        return self._state

    def select(self, slice_name: str) -> SliceState:
        return self._state.slices[slice_name]

    def next_request_id(self) -> int:
        with self._lock:
            return next(self._request_ids)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def dispatch(self, action: Action | Callable[["Store"], Any]) -> Any:
        if not isinstance(action, Action):
            return action(self)

        with self._lock:
            current = self._state.slices.get(action.slice)
            if current is None:
                raise KeyError(f"unknown state slice: {action.slice}")
            updated = reduce_slice(current, action)
            if updated is current and action.type in {ActionType.FETCH_FULFILLED, ActionType.FETCH_REJECTED, ActionType.SNAPSHOT_FULFILLED}:
                logger.debug("dropped stale %s for %s (request_id=%s)", action.type.value, action.slice, action.request_id)
            self._state = AppState(slices={**self._state.slices, action.slice: updated})
            snapshot = self._state

        for listener in list(self._listeners):
            listener(action, snapshot)
        return action
