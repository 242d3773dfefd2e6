from __future__ import annotations

from typing import Any

from lms_admin_console.app.ui.listing_view import ColumnDef


def render_table(rows: list[Any], columns: list[ColumnDef], markers: dict[int, str] | None = None) -> list[str]:
    cells = [[column.cell(row) for column in columns] for row in rows]
    widths = []
    for idx, column in enumerate(columns):
        max_cell = max((len(line[idx]) for line in cells), default=0)
        widths.append(max(len(column.label), max_cell))

    marker_width = 2 if markers is not None else 0
    header_line = " " * marker_width + " | ".join(column.label.ljust(widths[idx]) for idx, column in enumerate(columns))
    separator = " " * marker_width + "-+-".join("-" * width for width in widths)
    lines = [header_line, separator]
    for row_idx, line in enumerate(cells):
        prefix = (markers or {}).get(row_idx, " ").ljust(marker_width) if markers is not None else ""
        lines.append(prefix + " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(line)))
    return lines
