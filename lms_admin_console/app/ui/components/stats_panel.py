from __future__ import annotations

from typing import Any


def stats_lines(stats: dict[str, Any] | None, prefix: str = "", depth: int = 2) -> list[str]:
    """Flattens nested stats into ``group.key: value`` lines; lists are summarized by length."""
    lines: list[str] = []
    for key, value in (stats or {}).items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            if depth > 0:
                lines.extend(stats_lines(value, prefix=f"{name}.", depth=depth - 1))
        elif isinstance(value, list):
            lines.append(f"{name}: {len(value)} entries")
        elif value is not None:
            lines.append(f"{name}: {value}")
    return lines


def overview_line(stats: dict[str, Any] | None, keys: tuple[str, ...]) -> str | None:
    overview = (stats or {}).get("overview") or stats or {}
    parts = [f"{key}={overview[key]}" for key in keys if overview.get(key) is not None]
    return "stats: " + ", ".join(parts) if parts else None


def print_stats(title: str, stats: dict[str, Any] | None) -> None:
    print(f"\n{title}")
    lines = stats_lines(stats)
    if not lines:
        print("[empty] No statistics available.")
    for line in lines:
        print(f"  {line}")
