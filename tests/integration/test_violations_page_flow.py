from typing import Any

import pytest

from clients.lms_admin_sdk.errors import ApiError

from lms_admin_console.app.state import MODERATION, AppState
from lms_admin_console.app.store import Store, set_filters
from lms_admin_console.app.ui.views.violations_view import ViolationsPage

ANA = {"id": "u1", "firstName": "Ana", "lastName": "Ruiz", "email": "ana@a.com", "role": "STUDENT"}


class _StubModerationClient:
    def __init__(self) -> None:
        self.searches: list[tuple[str, dict[str, Any]]] = []
        self.moderations: list[tuple[str, str, str, Any, str]] = []

    def get_user_violations(self, search_term: str, **params: Any) -> dict[str, Any]:
        self.searches.append((search_term, params))
        if search_term == "bob@x.com":
            raise ApiError(code="NOT_FOUND", message="User not found", status_code=404)
        if search_term == "ana":
            return {
                "items": [],
                "pagination": {"page": 1, "limit": 20, "total": 0, "totalPages": 0},
                "meta": {
                    "multipleResults": True,
                    "users": [ANA, {"id": "u2", "firstName": "Ana", "lastName": "Gil", "email": "ana@b.com"}],
                    "userInfo": None,
                },
            }
        return {
            "items": [{"violationId": "v1", "violationType": "SPAM", "severity": "HIGH", "description": "Link farm"}],
            "pagination": {"page": 1, "limit": 20, "total": 1, "totalPages": 1},
            "meta": {"multipleResults": False, "users": [], "userInfo": ANA},
        }

    def moderate_user(self, user_id: str, action: str, reason: str, duration: Any = None, notes: str = "") -> dict[str, Any]:
        self.moderations.append((user_id, action, reason, duration, notes))
        return {"success": True, "message": "User moderated"}


def _page() -> tuple[ViolationsPage, _StubModerationClient]:
    client = _StubModerationClient()
    return ViolationsPage(Store(AppState.initial()), client), client


def test_mount_waits_for_a_search_term() -> None:
    page, client = _page()

    assert page.mount() is None
    assert page.apply_filters() is None
    assert client.searches == []
    assert "[info] search by user id or email with 's'." in page.render()


def test_ambiguous_search_lists_candidates_then_loads_chosen_user() -> None:
    page, client = _page()
    page.mount()

    page.set_search("ana")

    assert page.multiple_results
    assert [user["id"] for user in page.candidate_users] == ["u1", "u2"]
    assert page.rows == []
    assert any("Ana Gil" in line for line in page.render())

    page.choose_candidate("1")

    assert client.searches[-1] == ("ana@a.com", {"page": 1, "limit": 20})
    assert not page.multiple_results
    assert page.user_info == ANA
    assert [row["violationId"] for row in page.rows] == ["v1"]
    assert "user: Ana Ruiz <ana@a.com>" in page.render()


def test_severity_filter_is_forwarded_and_all_is_dropped() -> None:
    page, client = _page()
    page.filters.on_change("severity", "HIGH")
    page.filters.on_change("violationType", "all")

    page.set_search("ana@a.com")

    assert client.searches[-1] == ("ana@a.com", {"page": 1, "limit": 20, "severity": "HIGH"})


def test_choose_unknown_candidate_raises() -> None:
    page, _ = _page()
    page.set_search("ana")

    with pytest.raises(KeyError):
        page.choose_candidate("9")


def test_moderation_validates_and_refreshes() -> None:
    page, client = _page()
    page.set_search("ana@a.com")

    assert page.moderate("SUSPEND", "harassment") is None
    assert page.moderation_dialog.field_errors == {"duration": "Suspensions need a duration in days."}
    page.moderation_dialog.close()

    result = page.moderate("suspend", "harassment", duration="7", notes="second strike")

    assert result is not None and result.ok
    assert client.moderations == [("u1", "SUSPEND", "harassment", 7, "second strike")]
    assert len(client.searches) == 2


def test_moderation_needs_a_loaded_user() -> None:
    page, _ = _page()

    with pytest.raises(ValueError):
        page.moderate("WARN", "spam")


def test_failed_search_forgets_the_previous_user() -> None:
    page, client = _page()
    page.set_search("ana@a.com")
    assert page.user_info == ANA

    result = page.set_search("bob@x.com")

    assert result is not None and not result.ok
    assert page.user_info is None
    assert page.rows == []
    assert "user: Ana Ruiz" not in "\n".join(page.render())
    with pytest.raises(ValueError):
        page.moderate("BAN", "spam")
    assert client.moderations == []


def test_loaded_user_must_match_the_applied_search_term() -> None:
    page, client = _page()
    page.set_search("ana@a.com")
    page.store.dispatch(set_filters(MODERATION, {"searchTerm": "bob@x.com"}))

    assert page.user_info is None
    with pytest.raises(ValueError):
        page.moderate("WARN", "spam")
    assert client.moderations == []


def test_console_search_pick_and_moderate(monkeypatch, capsys) -> None:
    page, client = _page()
    answers = iter(["s", "ana", "w", "ana@a.com", "o", "WARN", "spam links", "", "", "b"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

    page.run()

    assert client.moderations == [("u1", "WARN", "spam links", None, "")]
    out = capsys.readouterr().out
    assert "Several users matched" in out
    assert "[success] operation=moderate_user summary=User moderated" in out
