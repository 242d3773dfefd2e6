from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.models import VerificationRequest
from clients.lms_admin_sdk.verification_client import VerificationClient

from lms_admin_console.app.application.thunks import ThunkResult
from lms_admin_console.app.state import VERIFICATION
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.components.stats_panel import overview_line
from lms_admin_console.app.ui.dialogs import DialogAction, DialogMode
from lms_admin_console.app.ui.filters import ALL
from lms_admin_console.app.ui.forms import validate_verification_review_form
from lms_admin_console.app.ui.lfdm_page import LfdmPage, PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef

VERIFICATION_FILTER_DEFAULTS = {
    "search": "",
    "status": ALL,
    "verificationLevel": ALL,
    "priority": ALL,
    "sortBy": "submittedAt",
    "sortOrder": "desc",
}
VERIFICATION_BASE_FILTERS = {"sortBy": "submittedAt", "sortOrder": "desc"}
STATS_KEYS = ("totalRequests", "pendingRequests", "underReviewRequests", "approvedRequests")


def _request(row: Any) -> VerificationRequest:
    return VerificationRequest.model_validate(row)


VERIFICATION_COLUMNS = [
    ColumnDef("requestId", "id"),
    ColumnDef("instructorName", "instructor"),
    ColumnDef("instructorEmail", "email"),
    ColumnDef("verificationLevel", "level"),
    ColumnDef("status", "status"),
    ColumnDef("priority", "priority"),
    ColumnDef("documentsCount", "docs", accessor=lambda row: _request(row).documents_count),
    ColumnDef("submittedAt", "submitted"),
]


def _review(client: VerificationClient):
    def _submit(values: dict[str, Any], entity: Any) -> dict[str, Any]:
        return client.review_verification_request(
            _request(entity).request_id or "",
            values["action"],
            admin_notes=values.get("adminNotes", ""),
            rejection_reason=values.get("rejectionReason", ""),
        )

    return _submit


def build_verification_config(client: VerificationClient) -> PageConfig:
    return PageConfig(
        title="INSTRUCTOR VERIFICATION",
        slice_name=VERIFICATION,
        fetch_action="get_verification_requests",
        fetch=client.list_verification_requests,
        columns=VERIFICATION_COLUMNS,
        filter_defaults=VERIFICATION_FILTER_DEFAULTS,
        filter_prompts=[
            ("status", "status (all/PENDING/UNDER_REVIEW/APPROVED/REJECTED)"),
            ("verificationLevel", "level (all/BASIC/PREMIUM/EXPERT)"),
            ("priority", "priority (all/LOW/NORMAL/HIGH/URGENT)"),
            ("sortBy", "sortBy (submittedAt/priority/status)"),
            ("sortOrder", "sortOrder (asc/desc)"),
        ],
        base_filters=VERIFICATION_BASE_FILTERS,
        empty_message="No verification requests match the current filters.",
        actions={
            DialogMode.UPDATE: DialogAction(
                "review_verification_request",
                _review(client),
                lambda values, _entity: validate_verification_review_form(values),
            ),
        },
        form_defaults={"action": "", "adminNotes": "", "rejectionReason": ""},
        form_prompts=[
            ("action", "action (APPROVE/REJECT)"),
            ("adminNotes", "admin notes"),
            ("rejectionReason", "rejection reason"),
        ],
        viewer=lambda row: client.get_verification_request(_request(row).request_id or ""),
        view_action="get_verification_request",
        id_key="requestId",
    )


class VerificationRequestsPage(LfdmPage):
    def __init__(self, store: Store, client: VerificationClient, **kwargs: Any) -> None:
        super().__init__(store, build_verification_config(client), **kwargs)
        self.client = client

    def mount(self) -> ThunkResult | None:
        result = super().mount()
        self.load_stats("get_verification_stats", self.client.get_verification_stats)
        return result

    def refresh(self) -> ThunkResult | None:
        result = super().refresh()
        if result is not None and result.ok:
            self.load_stats("get_verification_stats", self.client.get_verification_stats)
        return result

    def render(self) -> list[str]:
        lines = super().render()
        line = overview_line(self.stats, STATS_KEYS)
        if line:
            lines.insert(1, line)
        return lines
