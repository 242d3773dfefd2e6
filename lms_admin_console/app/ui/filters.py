from __future__ import annotations

import time
from typing import Any, Callable

ALL = "all"
SENTINELS = (ALL, "")


def clean_filters(filters: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value is not None and value not in SENTINELS}


CLEAR_TOKEN = "-"


def prompt_optional(label: str, current: Any = None) -> str | None:
    """Empty input keeps the current value (None); ``-`` clears it ("")."""
    suffix = f" [{current}]" if current not in (None, "") else ""
    value = input(f"{label}{suffix} (optional, {CLEAR_TOKEN} to clear): ").strip()
    if value == CLEAR_TOKEN:
        return ""
    return value or None


def debounce_text(term: str, wait_ms: int = 350, sleeper: Callable[[float], None] | None = None) -> str:
    if wait_ms <= 0:
        return term
    (sleeper or time.sleep)(wait_ms / 1000)
    return term


class FilterStateHolder:
    """Draft filters edited locally until they are applied to the store."""

    def __init__(self, defaults: dict[str, Any], applied: dict[str, Any] | None = None) -> None:
        self.defaults = dict(defaults)
        self.draft = self._seed(applied or {})

    def _seed(self, applied: dict[str, Any]) -> dict[str, Any]:
        draft = dict(self.defaults)
        for key, value in applied.items():
            if key not in draft:
                continue
            draft[key] = self.defaults[key] if value in (None, "") else value
        return draft

    def sync(self, applied: dict[str, Any]) -> None:
        self.draft = self._seed(applied)

    def on_change(self, key: str, value: Any) -> None:
        if key not in self.draft:
            raise KeyError(f"unknown filter field: {key}")
        self.draft[key] = value

    def reset(self) -> dict[str, Any]:
        self.draft = dict(self.defaults)
        return self.draft

    def applied(self) -> dict[str, Any]:
        return clean_filters(self.draft)

    @property
    def is_dirty(self) -> bool:
        return self.draft != self.defaults
