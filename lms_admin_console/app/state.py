from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CATEGORIES = "categories"
COURSES = "courses"
USERS = "users"
MODERATION = "moderation"
ANALYTICS = "analytics"
REPORTS = "reports"
REVIEW_HISTORY = "review_history"
VERIFICATION = "verification"
ANALYTICS_REPORTS = "analytics_reports"

FEATURE_SLICES = (
    CATEGORIES,
    COURSES,
    USERS,
    MODERATION,
    ANALYTICS,
    REPORTS,
    REVIEW_HISTORY,
    VERIFICATION,
    ANALYTICS_REPORTS,
)
SUBJECT_SLICES = frozenset({MODERATION})


def default_pagination(limit: int = 20) -> dict[str, Any]:
    return {"page": 1, "limit": limit, "total": 0, "totalPages": 0, "hasNext": False, "hasPrev": False}


@dataclass
class SliceState:
    """State of one feature area; replaced only by the store's reducer."""

    items: list[dict[str, Any]] = field(default_factory=list)
    pagination: dict[str, Any] = field(default_factory=default_pagination)
    applied_filters: dict[str, Any] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)
    detail: dict[str, Any] | None = None
    snapshot: dict[str, Any] | None = None
    last_mutation: dict[str, Any] | None = None
    loading: bool = False
    detail_loading: bool = False
    mutating: bool = False
    error: str | None = None
    latest_request_id: int = 0
    # meta describes the searched subject, so it must not outlive a new search
    reset_meta_on_fetch: bool = False


@dataclass
class AppState:
    slices: dict[str, SliceState] = field(default_factory=dict)

    @classmethod
    def initial(cls, page_limits: dict[str, int] | None = None) -> "AppState":
        limits = page_limits or {}
        return cls(
            slices={
                name: SliceState(pagination=default_pagination(limits.get(name, 20)), reset_meta_on_fetch=name in SUBJECT_SLICES)
                for name in FEATURE_SLICES
            }
        )
