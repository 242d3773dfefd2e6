from typing import Any

from lms_admin_console.app.state import AppState
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.dialogs import DialogMode
from lms_admin_console.app.ui.views.content_reports_view import ContentReportsPage


class _StubModerationClient:
    def __init__(self) -> None:
        self.list_calls: list[dict[str, Any]] = []
        self.reviews: list[tuple[str, str, str, str, Any]] = []
        self.bulk_calls: list[tuple[list[str], str, str]] = []

    def list_content_reports(self, **params: Any) -> dict[str, Any]:
        self.list_calls.append(params)
        return {
            "items": [
                {
                    "id": "r1",
                    "contentType": "REVIEW",
                    "reason": "SPAM",
                    "status": "PENDING",
                    "reportedBy": {"firstName": "Ana", "lastName": "Ruiz"},
                    "contentDetails": {"title": "Great course!!!", "author": {"name": "Bo"}},
                },
                {"id": "r2", "contentType": "MESSAGE", "reason": "HARASSMENT", "status": "PENDING"},
            ],
            "pagination": {"page": 1, "limit": 20, "total": 2, "totalPages": 1},
            "meta": {},
        }

    def review_content_report(
        self, report_id: str, action: str, action_taken: str = "", moderator_notes: str = "", violation_severity: Any = None
    ) -> dict[str, Any]:
        self.reviews.append((report_id, action, action_taken, moderator_notes, violation_severity))
        return {"success": True, "message": "Report reviewed"}

    def bulk_moderate_content(self, report_ids: list[str], action: str, reason: str = "", moderator_notes: str = "") -> dict[str, Any]:
        self.bulk_calls.append((report_ids, action, reason))
        return {"success": True, "message": f"{len(report_ids)} reports moderated"}

    def get_moderation_stats(self) -> dict[str, Any]:
        return {"overview": {"totalReports": 9, "pendingReports": 4}, "byType": [{"type": "REVIEW"}]}

    def get_community_standards(self) -> dict[str, Any]:
        return {"version": "2.1", "rules": [{"id": "no-spam"}, {"id": "be-kind"}]}


def _page() -> tuple[ContentReportsPage, _StubModerationClient]:
    client = _StubModerationClient()
    return ContentReportsPage(Store(AppState.initial()), client), client


def test_mount_lists_pending_reports_newest_first() -> None:
    page, client = _page()

    page.mount()

    assert client.list_calls == [{"page": 1, "limit": 20, "status": "PENDING", "sortBy": "createdAt", "sortOrder": "desc"}]
    lines = page.render()
    assert any("Ana Ruiz" in line and "Bo" in line and "Great course!!!" in line for line in lines)
    assert any("r2" in line and "Unknown" in line for line in lines)


def test_escalation_needs_notes() -> None:
    page, client = _page()
    page.mount()

    page.dialog.open(DialogMode.UPDATE, page.find_row("r1"))
    page.dialog.set_field("action", "escalate")
    assert page.dialog.submit() is None
    assert page.dialog.first_invalid_field == "notes"

    page.dialog.set_field("notes", "Possible fraud ring")
    page.dialog.set_field("violationSeverity", "high")
    result = page.dialog.submit()

    assert result is not None and result.ok
    assert client.reviews == [("r1", "ESCALATE", "Possible fraud ring", "Possible fraud ring", "HIGH")]
    assert len(client.list_calls) == 2


def test_bulk_moderation_limits_actions_and_needs_a_selection() -> None:
    page, client = _page()
    page.mount()

    assert page.submit_bulk("REMOVE") is None
    assert "reportIds" in page.bulk_dialog.field_errors

    page.toggle_selection("r2")
    assert page.submit_bulk("WARN") is None
    assert "action" in page.bulk_dialog.field_errors

    result = page.submit_bulk("remove", "spam wave")

    assert result is not None and result.ok
    assert client.bulk_calls == [(["r2"], "REMOVE", "spam wave")]
    assert page.selected_ids == []


def test_console_stats_and_standards(monkeypatch, capsys) -> None:
    page, _ = _page()
    answers = iter(["g", "h", "b"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

    page.run()

    out = capsys.readouterr().out
    assert "MODERATION STATS" in out
    assert "overview.pendingReports: 4" in out
    assert "byType: 1 entries" in out
    assert "stats: totalReports=9, pendingReports=4" in out
    assert "COMMUNITY STANDARDS" in out
    assert "rules: 2 entries" in out
    assert len(page.rows) == 2


def test_console_bulk_without_selection_says_so(monkeypatch, capsys) -> None:
    page, client = _page()
    answers = iter(["y", "b"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

    page.run()

    assert "Select at least one report with 't' first." in capsys.readouterr().out
    assert client.bulk_calls == []
