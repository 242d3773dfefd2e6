from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.courses_client import CoursesClient
from clients.lms_admin_sdk.models import CourseHistory
from clients.lms_admin_sdk.normalizers import normalize_pagination

from lms_admin_console.app.state import REVIEW_HISTORY
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.filters import ALL
from lms_admin_console.app.ui.lfdm_page import LfdmPage, PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef

HISTORY_FILTER_DEFAULTS = {"search": "", "lastReviewAction": ALL}
REVIEW_ACTIONS = ("APPROVE", "REJECT", "SUSPENDED", "UNDER_REVIEW")


def _history(row: Any) -> CourseHistory:
    return CourseHistory.model_validate(row)


HISTORY_COLUMNS = [
    ColumnDef("courseId", "id"),
    ColumnDef("courseName", "course"),
    ColumnDef("instructorName", "instructor"),
    ColumnDef("totalReviews", "reviews", accessor=lambda row: _history(row).total_reviews),
    ColumnDef("totalStatusChanges", "status changes", accessor=lambda row: _history(row).total_status_changes),
    ColumnDef("lastReviewAction", "last action"),
    ColumnDef("lastReviewerName", "reviewer"),
    ColumnDef("lastReviewDate", "reviewed"),
]


def matches_history_filters(row: dict[str, Any], search: str = "", last_action: str = "") -> bool:
    course = _history(row)
    term = search.strip().lower()
    if term and term not in (course.course_name or "").lower() and term not in (course.instructor_name or "").lower():
        return False
    return not last_action or (course.last_review_action or "").upper() == last_action.upper()


def fetch_review_history(client: CoursesClient):
    """The history endpoint returns every course at once; filtering and paging happen here."""

    def _fetch(page: int = 1, limit: int = 20, **filters: Any) -> dict[str, Any]:
        search = str(filters.get("search") or "")
        last_action = str(filters.get("lastReviewAction") or "")
        rows = [row for row in client.list_courses_with_history() if matches_history_filters(row, search, last_action)]
        pagination = normalize_pagination({"total": len(rows)}, page=page, limit=limit)
        start = (pagination["page"] - 1) * pagination["limit"]
        return {
            "items": rows[start:start + pagination["limit"]],
            "pagination": pagination,
            "filters": {"search": search, "lastReviewAction": last_action},
            "meta": {},
        }

    return _fetch


def build_review_history_config(client: CoursesClient) -> PageConfig:
    return PageConfig(
        title="COURSE REVIEW HISTORY",
        slice_name=REVIEW_HISTORY,
        fetch_action="get_courses_with_history",
        fetch=fetch_review_history(client),
        columns=HISTORY_COLUMNS,
        filter_defaults=HISTORY_FILTER_DEFAULTS,
        filter_prompts=[("lastReviewAction", f"last action (all/{'/'.join(REVIEW_ACTIONS)})")],
        empty_message="No course has review history yet.",
        viewer=lambda row: client.get_course_review_history(_history(row).course_id or ""),
        view_action="get_course_review_history",
        id_key="courseId",
    )


class ReviewHistoryPage(LfdmPage):
    def __init__(self, store: Store, client: CoursesClient, **kwargs: Any) -> None:
        super().__init__(store, build_review_history_config(client), **kwargs)

    def show_detail(self, result) -> None:
        super().show_detail(result)
        if result is None or not result.ok or not isinstance(result.payload, dict):
            return
        print("reviews:")
        for review in result.payload.get("reviewHistory") or []:
            print(f"  - {review.get('reviewedAt') or ''} {review.get('action') or ''} by {review.get('reviewerName') or 'Unknown'}: {review.get('feedback') or ''}")
        print("status changes:")
        for change in result.payload.get("statusChanges") or []:
            print(f"  - {change.get('changedAt') or ''} {change.get('previousStatus')} -> {change.get('newStatus')} ({change.get('reason') or 'n/a'})")
