from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Any

from lms_admin_console.app.ui.listing_view import ColumnDef, sanitize_row


def _ensure_dir(output_dir: str) -> Path:
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _metadata(module: str, page: int | None, filters: dict[str, Any] | None, exported_at: datetime) -> list[str]:
    return [
        f"timestamp_local: {exported_at.isoformat()}",
        f"module: {module}",
        f"page: {page or 'N/A'}",
        f"filters: {filters or {}}",
    ]


def export_current_view(
    *,
    module: str,
    rows: list[Any],
    columns: list[ColumnDef],
    output_dir: str = "out/exports",
    filters: dict[str, Any] | None = None,
    page: int | None = None,
) -> Path:
    """Writes the visible page as CSV: ``#`` metadata lines, then one row per record."""
    exported_at = datetime.now().astimezone()
    path = _ensure_dir(output_dir) / f"{module}_{exported_at:%Y%m%d_%H%M%S}.csv"
    labels = [column.label for column in columns]

    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        handle.writelines(f"# {line}\n" for line in _metadata(module, page, filters, exported_at))
        writer = csv.writer(handle)
        writer.writerow(labels)
        for row in rows:
            cells = sanitize_row({column.label: column.cell(row) for column in columns}, headers=labels)
            writer.writerow([cells[label] for label in labels])

    return path


def save_download(content: bytes, *, output_dir: str, export_id: str, export_format: str) -> Path:
    path = _ensure_dir(output_dir) / f"analytics_{export_id}.{export_format}"
    path.write_bytes(content)
    return path
