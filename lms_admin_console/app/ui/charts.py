from __future__ import annotations

from typing import Any


def _number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(number) if number.is_integer() else number


def to_line_series(points: list[dict[str, Any]] | None, x_key: str, y_keys: list[str]) -> dict[str, Any]:
    rows = [point for point in points or [] if isinstance(point, dict)]
    return {
        "labels": [str(point.get(x_key) or "") for point in rows],
        "datasets": [{"label": key, "data": [_number(point.get(key)) for point in rows]} for key in y_keys],
    }


def to_pie_series(items: list[dict[str, Any]] | None, label_key: str, value_key: str) -> dict[str, Any]:
    rows = [item for item in items or [] if isinstance(item, dict)]
    values = [_number(item.get(value_key)) for item in rows]
    total = sum(values)
    return {
        "labels": [str(item.get(label_key) or "Unknown") for item in rows],
        "data": values,
        "percentages": [round(value * 100 / total, 1) if total else 0 for value in values],
    }


def top_n(items: list[dict[str, Any]] | None, key: str, n: int = 5) -> list[dict[str, Any]]:
    rows = [item for item in items or [] if isinstance(item, dict)]
    return sorted(rows, key=lambda item: _number(item.get(key)), reverse=True)[: max(0, n)]


def sparkline(values: list[Any], width: int = 24) -> str:
    """Text rendering of a numeric series for the console."""
    blocks = "▁▂▃▄▅▆▇█"
    numbers = [_number(value) for value in values][-width:]
    if not numbers:
        return ""
    low, high = min(numbers), max(numbers)
    span = high - low
    if span == 0:
        return blocks[0] * len(numbers)
    return "".join(blocks[int((value - low) / span * (len(blocks) - 1))] for value in numbers)
