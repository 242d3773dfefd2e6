from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from clients.lms_admin_sdk.models import Pagination


@dataclass(frozen=True)
class PaginationController:
    pagination: Pagination

    @classmethod
    def from_state(cls, raw: dict[str, Any] | None) -> "PaginationController":
        return cls(Pagination.model_validate(raw or {}))

    @property
    def page(self) -> int:
        return max(1, self.pagination.page)

    @property
    def last_page(self) -> int:
        return max(1, self.pagination.total_pages)

    @property
    def can_go_prev(self) -> bool:
        return self.pagination.has_prev and self.page > 1

    @property
    def can_go_next(self) -> bool:
        return self.pagination.has_next and self.page < self.last_page

    def showing_label(self) -> str:
        total = max(0, self.pagination.total)
        if total == 0:
            return "Showing 0 to 0 of 0"
        limit = max(1, self.pagination.limit)
        start = (self.page - 1) * limit + 1
        end = min(self.page * limit, total)
        return f"Showing {start} to {end} of {total}"

    def first_page(self) -> int | None:
        return 1 if self.can_go_prev else None

    def prev_page(self) -> int | None:
        return self.page - 1 if self.can_go_prev else None

    def next_page(self) -> int | None:
        return self.page + 1 if self.can_go_next else None

    def goto_page(self, page: int) -> int:
        return min(max(1, page), self.last_page)

    def last_page_target(self) -> int | None:
        return self.last_page if self.can_go_next else None

    def controls_line(self) -> str:
        def _flag(label: str, enabled: bool) -> str:
            return label if enabled else f"({label})"

        return " ".join(
            [
                _flag("f=first", self.can_go_prev),
                _flag("p=prev", self.can_go_prev),
                f"page {self.page}/{self.last_page}",
                _flag("n=next", self.can_go_next),
                _flag("l=last", self.can_go_next),
            ]
        )
