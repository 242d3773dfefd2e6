from typing import Any

import pytest

from lms_admin_console.app.state import AppState
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.dialogs import DialogMode
from lms_admin_console.app.ui.views.pending_courses_view import PendingCoursesPage


class _StubCoursesClient:
    def __init__(self) -> None:
        self.list_calls: list[dict[str, Any]] = []
        self.reviews: list[tuple[str, str, str, str]] = []
        self.bulk_calls: list[tuple[list[str], str, str]] = []

    def list_pending_courses(self, **params: Any) -> dict[str, Any]:
        self.list_calls.append(params)
        return {
            "items": [
                {
                    "id": "k1",
                    "title": "Intro to Python",
                    "price": 19.9,
                    "instructor": {"firstName": "Ana", "lastName": "Ruiz"},
                    "category": {"id": "c1", "name": "Dev"},
                    "metrics": {"priorityLevel": "HIGH", "daysPending": 9},
                },
                {"id": "k2", "title": "Watercolor", "instructor": None, "metrics": {"priorityLevel": "LOW"}},
            ],
            "pagination": {"page": 1, "limit": 20, "total": 2, "totalPages": 1},
            "meta": {"summary": {"total": 2, "highPriority": 1}},
        }

    def get_course_review(self, course_id: str) -> dict[str, Any]:
        return {"id": course_id, "title": "Intro to Python", "status": "PENDING_REVIEW"}

    def review_course(self, course_id: str, action: str, feedback: str = "", reason: str = "") -> dict[str, Any]:
        self.reviews.append((course_id, action, feedback, reason))
        return {"success": True, "message": "Course reviewed"}

    def get_course_stats(self) -> dict[str, Any]:
        return {"overview": {"totalCourses": 40, "pendingCourses": 2}, "byCategory": [{"name": "Dev"}]}

    def bulk_course_actions(self, course_ids: list[str], action: str, reason: str = "") -> dict[str, Any]:
        self.bulk_calls.append((course_ids, action, reason))
        return {"success": True, "message": f"{len(course_ids)} courses updated"}


def _page() -> tuple[PendingCoursesPage, _StubCoursesClient]:
    client = _StubCoursesClient()
    return PendingCoursesPage(Store(AppState.initial()), client), client


def test_mount_sorts_by_submission_date_and_renders_summary() -> None:
    page, client = _page()

    page.mount()

    assert client.list_calls == [{"page": 1, "limit": 20, "sortBy": "reviewSubmittedAt", "sortOrder": "asc"}]
    lines = page.render()
    assert lines[1] == "summary: total=2, highPriority=1"
    assert any("Ana Ruiz" in line and "$19.90" in line and "HIGH" in line for line in lines)


def test_review_requires_reason_for_rejection() -> None:
    page, client = _page()
    page.mount()

    page.dialog.open(DialogMode.UPDATE, page.find_row("k1"))
    page.dialog.set_field("action", "reject")
    assert page.dialog.submit() is None
    assert "reason" in page.dialog.field_errors

    page.dialog.set_field("reason", "Missing outline")
    result = page.dialog.submit()

    assert result is not None and result.ok
    assert client.reviews == [("k1", "REJECT", "", "Missing outline")]
    assert len(client.list_calls) == 2


def test_bulk_action_on_selection_clears_it_and_refetches() -> None:
    page, client = _page()
    page.mount()
    page.toggle_selection("k1")
    page.toggle_selection("k2")
    page.toggle_selection("k2")

    result = page.submit_bulk("approve")

    assert result is not None and result.ok
    assert client.bulk_calls == [(["k1"], "APPROVE", "")]
    assert page.selected_ids == []
    assert len(client.list_calls) == 2


def test_bulk_without_selection_is_blocked() -> None:
    page, client = _page()
    page.mount()

    assert page.submit_bulk("ARCHIVE", "old") is None
    assert "courseIds" in page.bulk_dialog.field_errors
    assert client.bulk_calls == []


def test_select_all_toggles_and_unknown_ids_are_rejected() -> None:
    page, _ = _page()
    page.mount()

    page.select_all()
    assert page.selected_ids == ["k1", "k2"]
    page.select_all()
    assert page.selected_ids == []
    with pytest.raises(KeyError):
        page.toggle_selection("k9")


def test_console_bulk_command(monkeypatch, capsys) -> None:
    page, client = _page()
    answers = iter(["m", "y", "SUSPEND", "policy breach", "b"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

    page.run()

    assert client.bulk_calls == [(["k1", "k2"], "SUSPEND", "policy breach")]
    assert "[success] operation=bulk_course_actions summary=2 courses updated" in capsys.readouterr().out


def test_console_view_shows_review_detail(monkeypatch, capsys) -> None:
    page, _ = _page()
    answers = iter(["v", "1", "b"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

    page.run()

    out = capsys.readouterr().out
    assert "status: PENDING_REVIEW" in out
    assert not page.dialog.is_open


def test_console_course_stats_keep_the_queue(monkeypatch, capsys) -> None:
    page, _ = _page()
    answers = iter(["g", "b"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

    page.run()

    out = capsys.readouterr().out
    assert "COURSE STATS" in out
    assert "overview.totalCourses: 40" in out
    assert "byCategory: 1 entries" in out
    assert [row["id"] for row in page.rows] == ["k1", "k2"]
    assert page.stats["overview"]["pendingCourses"] == 2
