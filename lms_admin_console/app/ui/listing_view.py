from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

EMPTY_VALUE = "—"
# column labels containing any of these are blanked on export
SENSITIVE_KEYS = ("token", "secret", "password")


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        text = "ACTIVE" if value else "INACTIVE"
    elif isinstance(value, Enum):
        text = str(value.value)
    elif isinstance(value, float):
        text = f"{value:.2f}"
    elif isinstance(value, datetime):
        text = value.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    else:
        text = str(value).strip()
    return text or EMPTY_VALUE


@dataclass(frozen=True)
class ColumnDef:
    """One table column: ``key`` reads dicts or attributes unless an accessor is given."""

    key: str
    label: str
    accessor: Callable[[Any], Any] | None = None
    fallback: str = EMPTY_VALUE

    def read(self, row: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(row)
        if isinstance(row, dict):
            return row.get(self.key)
        return getattr(row, self.key, None)

    def cell(self, row: Any) -> str:
        try:
            text = normalize_value(self.read(row))
        except (AttributeError, KeyError, TypeError, ValueError):
            return self.fallback
        return self.fallback if text == EMPTY_VALUE else text


def is_sensitive(label: str) -> bool:
    lowered = label.lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def sanitize_row(row: dict[str, Any], headers: list[str]) -> dict[str, str]:
    return {header: EMPTY_VALUE if is_sensitive(header) else normalize_value(row.get(header)) for header in headers}


def format_number(value: Any) -> str:
    try:
        return f"{int(value or 0):,}"
    except (TypeError, ValueError):
        return "0"


def format_currency(value: Any) -> str:
    try:
        return f"${float(value or 0):,.2f}"
    except (TypeError, ValueError):
        return "$0.00"
