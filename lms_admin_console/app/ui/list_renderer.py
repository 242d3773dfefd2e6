from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lms_admin_console.app.ui.listing_view import ColumnDef
from lms_admin_console.app.ui.table_printer import render_table

SKELETON_ROWS = 3


class ListRenderer:
    def __init__(
        self,
        columns: list[ColumnDef],
        empty_message: str = "No records found.",
        row_marker: Callable[[Any], str | None] | None = None,
    ) -> None:
        self.columns = columns
        self.empty_message = empty_message
        self.row_marker = row_marker

    def render(self, items: list[Any] | None, loading: bool) -> list[str]:
        rows = list(items or [])
        if loading and not rows:
            return self.skeleton()
        if not rows:
            return [f"[empty] {self.empty_message}"]

        markers = None
        if self.row_marker is not None:
            markers = {idx: self.row_marker(row) or " " for idx, row in enumerate(rows)}
        lines = render_table(rows, self.columns, markers=markers)
        if loading:
            lines.insert(0, "[loading] refreshing...")
        return lines

    def skeleton(self) -> list[str]:
        placeholder = " | ".join("░" * max(4, len(column.label)) for column in self.columns)
        return ["[loading]"] + [placeholder for _ in range(SKELETON_ROWS)]
