from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.models import AdminUser
from clients.lms_admin_sdk.users_client import UsersClient

from lms_admin_console.app.state import USERS
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.dialogs import DialogAction, DialogMode
from lms_admin_console.app.ui.filters import ALL
from lms_admin_console.app.ui.forms import validate_bulk_user_form, validate_user_delete_form, validate_user_status_form
from lms_admin_console.app.ui.lfdm_page import PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef
from lms_admin_console.app.ui.selectable_page import SelectableLfdmPage

USER_FILTER_DEFAULTS = {
    "search": "",
    "role": ALL,
    "status": ALL,
    "isVerified": ALL,
    "isBanned": ALL,
    "sortBy": "createdAt",
    "sortOrder": "desc",
}
USER_BASE_FILTERS = {"sortBy": "createdAt", "sortOrder": "desc"}


def _user(row: Any) -> AdminUser:
    return AdminUser.model_validate(row)


def user_status_label(row: Any) -> str:
    user = _user(row)
    if user.is_banned:
        return "BANNED"
    if not user.is_active:
        return "INACTIVE"
    return "ACTIVE"


USER_COLUMNS = [
    ColumnDef("id", "id"),
    ColumnDef("name", "name", accessor=lambda row: " ".join(part for part in (row.get("firstName"), row.get("lastName")) if part)),
    ColumnDef("email", "email"),
    ColumnDef("role", "role"),
    ColumnDef("status", "status", accessor=user_status_label),
    ColumnDef("isVerified", "verified", accessor=lambda row: "yes" if _user(row).is_verified else "no"),
    ColumnDef("createdAt", "created"),
]


def _update_status(client: UsersClient):
    def _submit(values: dict[str, Any], entity: Any) -> dict[str, Any]:
        return client.update_user_status(
            _user(entity).id or "",
            values["action"],
            reason=values.get("reason", ""),
            duration=values.get("duration"),
        )

    return _submit


def _delete(client: UsersClient):
    def _submit(values: dict[str, Any], entity: Any) -> dict[str, Any]:
        return client.delete_user(_user(entity).id or "", values["reason"], values["confirmEmail"])

    return _submit


def build_users_config(client: UsersClient) -> PageConfig:
    return PageConfig(
        title="USERS",
        slice_name=USERS,
        fetch_action="get_users",
        fetch=client.list_users,
        columns=USER_COLUMNS,
        filter_defaults=USER_FILTER_DEFAULTS,
        filter_prompts=[
            ("role", "role (all/STUDENT/INSTRUCTOR/ADMIN)"),
            ("status", "status (all/active/inactive/banned)"),
            ("isVerified", "isVerified (all/true/false)"),
            ("isBanned", "isBanned (all/true/false)"),
            ("sortBy", "sortBy (createdAt/firstName/email)"),
            ("sortOrder", "sortOrder (asc/desc)"),
        ],
        base_filters=USER_BASE_FILTERS,
        empty_message="No users match the current filters.",
        actions={
            DialogMode.UPDATE: DialogAction(
                "update_user_status",
                _update_status(client),
                lambda values, _entity: validate_user_status_form(values),
            ),
            DialogMode.DELETE: DialogAction(
                "delete_user",
                _delete(client),
                lambda values, entity: validate_user_delete_form(values, _user(entity).email),
            ),
        },
        form_defaults={"action": "", "reason": "", "duration": None},
        form_prompts=[
            ("action", "action (ACTIVATE/DEACTIVATE/BAN/UNBAN/VERIFY)"),
            ("reason", "reason"),
            ("duration", "duration in days"),
        ],
        delete_prompts=[("reason", "deletion reason"), ("confirmEmail", "type the user's email to confirm")],
        viewer=lambda row: client.get_user(_user(row).id or ""),
        view_action="get_user",
    )


class UsersPage(SelectableLfdmPage):
    def __init__(self, store: Store, client: UsersClient, **kwargs: Any) -> None:
        super().__init__(
            store,
            build_users_config(client),
            DialogAction(
                "bulk_update_users",
                lambda values, _ids: client.bulk_update_users(values["userIds"], values["action"], values.get("reason", "")),
                lambda values, _ids: validate_bulk_user_form(values),
            ),
            ids_field="userIds",
            noun="user",
            action_hint="ACTIVATE/DEACTIVATE/VERIFY/UNVERIFY",
            **kwargs,
        )
