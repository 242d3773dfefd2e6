from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.models import ContentReport
from clients.lms_admin_sdk.moderation_client import ModerationClient

from lms_admin_console.app.application.thunks import ThunkResult, detail_thunk
from lms_admin_console.app.state import REPORTS
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.components.stats_panel import overview_line, print_stats
from lms_admin_console.app.ui.dialogs import DialogAction, DialogMode
from lms_admin_console.app.ui.filters import ALL
from lms_admin_console.app.ui.forms import validate_bulk_report_form, validate_report_review_form
from lms_admin_console.app.ui.lfdm_page import PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef
from lms_admin_console.app.ui.selectable_page import SelectableLfdmPage

REPORT_FILTER_DEFAULTS = {
    "search": "",
    "status": "PENDING",
    "contentType": ALL,
    "priority": ALL,
    "reportedBy": "",
    "dateFrom": "",
    "dateTo": "",
    "sortBy": "createdAt",
    "sortOrder": "desc",
}
REPORT_BASE_FILTERS = {"status": "PENDING", "sortBy": "createdAt", "sortOrder": "desc"}
STATS_KEYS = ("totalReports", "pendingReports", "resolvedReports", "escalatedReports")


def _report(row: Any) -> ContentReport:
    return ContentReport.model_validate(row)


REPORT_COLUMNS = [
    ColumnDef("id", "id"),
    ColumnDef("contentType", "content"),
    ColumnDef("reason", "reason"),
    ColumnDef("status", "status", accessor=lambda row: _report(row).status),
    ColumnDef("priority", "priority"),
    ColumnDef("reportedBy", "reported by", accessor=lambda row: _report(row).reporter_name),
    ColumnDef("author", "author", accessor=lambda row: _report(row).author_name),
    ColumnDef("title", "title", accessor=lambda row: _report(row).content_details.title),
    ColumnDef("createdAt", "reported"),
]


def _review(client: ModerationClient):
    def _submit(values: dict[str, Any], entity: Any) -> dict[str, Any]:
        notes = values.get("notes", "")
        return client.review_content_report(
            _report(entity).id or "",
            values["action"],
            action_taken=notes,
            moderator_notes=notes,
            violation_severity=values.get("violationSeverity"),
        )

    return _submit


def build_content_reports_config(client: ModerationClient) -> PageConfig:
    return PageConfig(
        title="CONTENT REPORTS",
        slice_name=REPORTS,
        fetch_action="get_content_reports",
        fetch=client.list_content_reports,
        columns=REPORT_COLUMNS,
        filter_defaults=REPORT_FILTER_DEFAULTS,
        filter_prompts=[
            ("status", "status (all/PENDING/REVIEWED/RESOLVED/ESCALATED)"),
            ("contentType", "contentType (all/REVIEW/REVIEW_REPLY/QNA_QUESTION/QNA_ANSWER/MESSAGE)"),
            ("priority", "priority (all/LOW/MEDIUM/HIGH)"),
            ("reportedBy", "reporter user id"),
            ("dateFrom", "from date (YYYY-MM-DD)"),
            ("dateTo", "to date (YYYY-MM-DD)"),
            ("sortBy", "sortBy (createdAt/status/contentType)"),
            ("sortOrder", "sortOrder (asc/desc)"),
        ],
        base_filters=REPORT_BASE_FILTERS,
        empty_message="No content reports match the current filters.",
        actions={
            DialogMode.UPDATE: DialogAction(
                "review_content_report",
                _review(client),
                lambda values, _entity: validate_report_review_form(values),
            ),
        },
        form_defaults={"action": "", "notes": "", "violationSeverity": ""},
        form_prompts=[
            ("action", "action (APPROVE/REMOVE/WARN/ESCALATE)"),
            ("notes", "moderator notes"),
            ("violationSeverity", "severity (LOW/MEDIUM/HIGH/CRITICAL)"),
        ],
    )


class ContentReportsPage(SelectableLfdmPage):
    """Reported content queue: review one report or moderate a selection."""

    def __init__(self, store: Store, client: ModerationClient, **kwargs: Any) -> None:
        super().__init__(
            store,
            build_content_reports_config(client),
            DialogAction(
                "bulk_moderate_content",
                lambda values, _ids: client.bulk_moderate_content(
                    values["reportIds"],
                    values["action"],
                    reason=values.get("reason", ""),
                    moderator_notes=values.get("reason", ""),
                ),
                lambda values, _ids: validate_bulk_report_form(values),
            ),
            ids_field="reportIds",
            noun="report",
            action_hint="APPROVE/REMOVE",
            **kwargs,
        )
        self.client = client

    def moderation_stats(self) -> ThunkResult:
        return self.show_stats("MODERATION STATS", "get_moderation_stats", self.client.get_moderation_stats)

    def community_standards(self) -> ThunkResult:
        result: ThunkResult = self.store.dispatch(
            detail_thunk(REPORTS, "get_community_standards", self.client.get_community_standards)
        )
        self._settle(result)
        if result.ok:
            print_stats("COMMUNITY STANDARDS", result.payload)
        return result

    def render(self) -> list[str]:
        lines = super().render()
        line = overview_line(self.stats, STATS_KEYS)
        if line:
            lines.insert(1, line)
        return lines

    def run(self, extra_commands=None) -> None:
        commands = {
            "g": ("moderation stats", self.moderation_stats),
            "h": ("community standards", self.community_standards),
            **(extra_commands or {}),
        }
        super().run(commands)
