from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lms_admin_console.app.application.thunks import ThunkResult, fetch_thunk
from lms_admin_console.app.store import Store, clear_error, reset_filters, set_filters
from lms_admin_console.app.ui.filters import clean_filters

FetchCall = Callable[..., dict[str, Any]]


class DataFetcher:
    """Builds list requests from the store and dispatches the fetch thunk."""

    def __init__(self, store: Store, slice_name: str, action_name: str, fetch: FetchCall, default_limit: int = 20) -> None:
        self.store = store
        self.slice_name = slice_name
        self.action_name = action_name
        self._fetch = fetch
        self.default_limit = default_limit

    def build_params(self, **overrides: Any) -> dict[str, Any]:
        state = self.store.select(self.slice_name)
        params = {
            "page": state.pagination.get("page") or 1,
            "limit": self.default_limit,
            **state.applied_filters,
            **overrides,
        }
        return clean_filters(params)

    def fetch(self, **overrides: Any) -> ThunkResult:
        self.store.dispatch(clear_error(self.slice_name))
        params = self.build_params(**overrides)
        return self.store.dispatch(fetch_thunk(self.slice_name, self.action_name, lambda: self._fetch(**params), params))

    def apply(self, filters: dict[str, Any]) -> ThunkResult:
        self.store.dispatch(set_filters(self.slice_name, clean_filters(filters)))
        return self.fetch(page=1)

    def reset(self, base_filters: dict[str, Any] | None = None) -> ThunkResult:
        self.store.dispatch(reset_filters(self.slice_name))
        if base_filters:
            self.store.dispatch(set_filters(self.slice_name, clean_filters(base_filters)))
        return self.fetch(page=1)

    def refresh(self) -> ThunkResult:
        return self.fetch()

    def go_to(self, page: int) -> ThunkResult:
        return self.fetch(page=max(1, page))
