from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.models import PersonRef, Violation
from clients.lms_admin_sdk.moderation_client import ModerationClient

from lms_admin_console.app.application.thunks import ThunkResult
from lms_admin_console.app.state import MODERATION
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.components.mutation_feedback import print_mutation_error, print_mutation_success
from lms_admin_console.app.ui.dialogs import DialogAction, DialogController, DialogMode
from lms_admin_console.app.ui.filters import ALL, prompt_optional
from lms_admin_console.app.ui.forms import validate_moderation_form
from lms_admin_console.app.ui.lfdm_page import LfdmPage, PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef
from lms_admin_console.app.ui.table_printer import render_table

SEARCH_TERM = "searchTerm"
VIOLATION_FILTER_DEFAULTS = {SEARCH_TERM: "", "severity": ALL, "violationType": ALL}


def _violation(row: Any) -> Violation:
    return Violation.model_validate(row)


VIOLATION_COLUMNS = [
    ColumnDef("violationId", "id"),
    ColumnDef("violationType", "type", accessor=lambda row: _violation(row).violation_type),
    ColumnDef("severity", "severity", accessor=lambda row: _violation(row).severity),
    ColumnDef("contentType", "content"),
    ColumnDef("description", "description"),
    ColumnDef("actionTaken", "action taken"),
    ColumnDef("moderatorName", "moderator"),
    ColumnDef("createdAt", "created"),
]

CANDIDATE_COLUMNS = [
    ColumnDef("id", "id"),
    ColumnDef("name", "name", accessor=lambda row: PersonRef.model_validate(row).full_name),
    ColumnDef("email", "email"),
    ColumnDef("role", "role"),
]


def fetch_violations(client: ModerationClient):
    def _fetch(**params: Any) -> dict[str, Any]:
        term = str(params.pop(SEARCH_TERM, "") or "")
        return client.get_user_violations(term, **params)

    return _fetch


def build_violations_config(client: ModerationClient) -> PageConfig:
    return PageConfig(
        title="USER VIOLATIONS",
        slice_name=MODERATION,
        fetch_action="get_user_violations",
        fetch=fetch_violations(client),
        columns=VIOLATION_COLUMNS,
        filter_defaults=VIOLATION_FILTER_DEFAULTS,
        filter_prompts=[
            ("severity", "severity (all/LOW/MEDIUM/HIGH/CRITICAL)"),
            ("violationType", "violationType (all/SPAM/HARASSMENT/INAPPROPRIATE_CONTENT/COPYRIGHT/FAKE_REVIEW/OTHER)"),
        ],
        empty_message="No violations recorded for this user.",
        search_key=SEARCH_TERM,
        required_filter=SEARCH_TERM,
    )


class ViolationsPage(LfdmPage):
    def __init__(self, store: Store, client: ModerationClient, **kwargs: Any) -> None:
        super().__init__(store, build_violations_config(client), **kwargs)
        self.moderation_dialog = DialogController(
            store,
            MODERATION,
            {
                DialogMode.UPDATE: DialogAction(
                    "moderate_user",
                    lambda values, user: client.moderate_user(
                        str(user.get("id")),
                        values["action"],
                        values["reason"],
                        duration=values.get("duration"),
                        notes=values.get("notes", ""),
                    ),
                    lambda values, _user: validate_moderation_form(values),
                )
            },
            defaults={"action": "", "reason": "", "duration": None, "notes": ""},
            on_success=self.refresh,
        )

    @property
    def multiple_results(self) -> bool:
        return bool(self.state.meta.get("multipleResults"))

    @property
    def candidate_users(self) -> list[dict[str, Any]]:
        return list(self.state.meta.get("users") or [])

    @property
    def user_info(self) -> dict[str, Any] | None:
        info = self.state.meta.get("userInfo")
        if not isinstance(info, dict) or not self._matches_search(info):
            return None
        return info

    def _matches_search(self, user: dict[str, Any]) -> bool:
        term = str(self.state.applied_filters.get(SEARCH_TERM) or "").strip().lower()
        return bool(term) and term in {str(user.get("id") or "").lower(), str(user.get("email") or "").lower()}

    def choose_candidate(self, key: str) -> ThunkResult | None:
        key = key.strip()
        for idx, user in enumerate(self.candidate_users, start=1):
            if key in {str(user.get("id")), str(user.get("email")), str(idx)}:
                return self.set_search(str(user.get("email") or user.get("id")))
        raise KeyError(f"no candidate user matches {key!r}")

    def moderate(self, action: str, reason: str, duration: Any = None, notes: str = "") -> ThunkResult | None:
        user = self.user_info
        if user is None:
            raise ValueError("search for a single user before moderating")
        self.moderation_dialog.open(DialogMode.UPDATE, user)
        self.moderation_dialog.set_field("action", action)
        self.moderation_dialog.set_field("reason", reason)
        self.moderation_dialog.set_field("duration", duration)
        self.moderation_dialog.set_field("notes", notes)
        return self.moderation_dialog.submit()

    def render(self) -> list[str]:
        lines = super().render()
        if not self.state.applied_filters.get(SEARCH_TERM):
            lines.insert(1, "[info] search by user id or email with 's'.")
        if self.user_info:
            user = PersonRef.model_validate(self.user_info)
            lines.insert(1, f"user: {user.full_name} <{user.email or 'n/a'}>")
        if self.multiple_results:
            lines.append("Several users matched; pick one with 'w':")
            lines.extend(render_table(self.candidate_users, CANDIDATE_COLUMNS))
        return lines

    def _run_moderation(self) -> None:
        action = input("action (WARN/SUSPEND/BAN/CLEAR): ")
        reason = input("reason: ")
        duration = prompt_optional("duration in days")
        notes = prompt_optional("notes") or ""
        result = self.moderate(action, reason, duration, notes)
        if result is not None and result.ok:
            print_mutation_success("moderate_user", result.payload, self.user_info.get("id") if self.user_info else None)
            return
        if result is not None and result.error is not None:
            print_mutation_error("moderate_user", result.error, self.moderation_dialog.field_errors)
        else:
            for field_name, message in self.moderation_dialog.field_errors.items():
                print(f"  - {field_name}: {message}")
        self.moderation_dialog.close()

    def run(self, extra_commands=None) -> None:
        commands = {
            "w": ("pick user", lambda: self.choose_candidate(input("candidate #, id or email: "))),
            "o": ("moderate user", self._run_moderation),
            **(extra_commands or {}),
        }
        super().run(commands)
