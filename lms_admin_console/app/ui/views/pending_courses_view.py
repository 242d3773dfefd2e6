from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.courses_client import CoursesClient
from clients.lms_admin_sdk.models import PendingCourse

from lms_admin_console.app.application.thunks import ThunkResult
from lms_admin_console.app.state import COURSES
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.dialogs import DialogAction, DialogMode
from lms_admin_console.app.ui.filters import ALL
from lms_admin_console.app.ui.forms import validate_bulk_course_form, validate_review_form
from lms_admin_console.app.ui.lfdm_page import PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef, format_currency
from lms_admin_console.app.ui.selectable_page import SelectableLfdmPage

COURSE_FILTER_DEFAULTS = {
    "search": "",
    "category": "",
    "level": ALL,
    "priority": ALL,
    "sortBy": "reviewSubmittedAt",
    "sortOrder": "asc",
}
COURSE_BASE_FILTERS = {"sortBy": "reviewSubmittedAt", "sortOrder": "asc"}


def _course(row: Any) -> PendingCourse:
    return PendingCourse.model_validate(row)


PENDING_COURSE_COLUMNS = [
    ColumnDef("id", "id"),
    ColumnDef("title", "title"),
    ColumnDef("instructor", "instructor", accessor=lambda row: _course(row).instructor.full_name),
    ColumnDef("category", "category", accessor=lambda row: _course(row).category.name),
    ColumnDef("level", "level"),
    ColumnDef("price", "price", accessor=lambda row: format_currency(row.get("price"))),
    ColumnDef("priority", "priority", accessor=lambda row: _course(row).metrics.priority_level),
    ColumnDef("daysPending", "days pending", accessor=lambda row: _course(row).metrics.days_pending),
    ColumnDef("reviewSubmittedAt", "submitted"),
]


def _review(client: CoursesClient):
    def _submit(values: dict[str, Any], entity: Any) -> dict[str, Any]:
        return client.review_course(
            _course(entity).id or "",
            values["action"],
            feedback=values.get("feedback", ""),
            reason=values.get("reason", ""),
        )

    return _submit


def build_pending_courses_config(client: CoursesClient) -> PageConfig:
    return PageConfig(
        title="PENDING COURSE REVIEW",
        slice_name=COURSES,
        fetch_action="get_pending_courses",
        fetch=client.list_pending_courses,
        columns=PENDING_COURSE_COLUMNS,
        filter_defaults=COURSE_FILTER_DEFAULTS,
        filter_prompts=[
            ("category", "category id"),
            ("level", "level (all/BEGINNER/INTERMEDIATE/ADVANCED)"),
            ("priority", "priority (all/HIGH/MEDIUM/LOW)"),
            ("sortBy", "sortBy (reviewSubmittedAt/title/price)"),
            ("sortOrder", "sortOrder (asc/desc)"),
        ],
        base_filters=COURSE_BASE_FILTERS,
        empty_message="No courses are waiting for review.",
        actions={
            DialogMode.UPDATE: DialogAction("review_course", _review(client), lambda values, _entity: validate_review_form(values)),
        },
        form_defaults={"action": "", "feedback": "", "reason": ""},
        form_prompts=[
            ("action", "action (APPROVE/REJECT/REQUEST_CHANGES)"),
            ("feedback", "feedback"),
            ("reason", "reason"),
        ],
        viewer=lambda row: client.get_course_review(_course(row).id or ""),
        view_action="get_course_review",
    )


class PendingCoursesPage(SelectableLfdmPage):
    def __init__(self, store: Store, client: CoursesClient, **kwargs: Any) -> None:
        super().__init__(
            store,
            build_pending_courses_config(client),
            DialogAction(
                "bulk_course_actions",
                lambda values, _ids: client.bulk_course_actions(values["courseIds"], values["action"], values.get("reason", "")),
                lambda values, _ids: validate_bulk_course_form(values),
            ),
            ids_field="courseIds",
            noun="course",
            action_hint="APPROVE/REJECT/SUSPEND/ARCHIVE",
            **kwargs,
        )
        self.client = client

    def course_stats(self) -> ThunkResult:
        return self.show_stats("COURSE STATS", "get_course_stats", self.client.get_course_stats)

    def render(self) -> list[str]:
        lines = super().render()
        summary = self.state.meta.get("summary") or {}
        if summary:
            lines.insert(1, "summary: " + ", ".join(f"{key}={value}" for key, value in summary.items()))
        return lines

    def run(self, extra_commands=None) -> None:
        super().run({"g": ("course stats", self.course_stats), **(extra_commands or {})})
