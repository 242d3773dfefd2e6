from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.normalizers import clean_params, normalize_listing, unwrap_data

USERS_PATH = "/admin/users/users"
BULK_USER_UPDATES = {
    "ACTIVATE": {"isActive": True},
    "DEACTIVATE": {"isActive": False},
    "VERIFY": {"isVerified": True},
    "UNVERIFY": {"isVerified": False},
}


class UsersClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_users(self, page: int = 1, limit: int = 20, **filters: Any) -> dict[str, Any]:
        params = clean_params({"page": page, "limit": limit, **filters})
        payload = self.http_client.request("GET", USERS_PATH, params=params)
        return normalize_listing(payload, items_key="users", page=page, limit=limit)

    def get_user(self, user_id: str) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", f"{USERS_PATH}/{user_id}"))
        return data if isinstance(data, dict) else {}

    def update_user_status(
        self,
        user_id: str,
        action: str,
        reason: str = "",
        duration: int | None = None,
    ) -> dict[str, Any]:
        body = clean_params({"action": action, "reason": reason, "duration": duration})
        return self.http_client.request("PATCH", f"{USERS_PATH}/{user_id}", json_body=body)

    def delete_user(self, user_id: str, reason: str, confirm_email: str) -> dict[str, Any]:
        payload = self.http_client.request(
            "DELETE",
            f"{USERS_PATH}/{user_id}",
            json_body={"reason": reason, "confirmEmail": confirm_email},
        )
        return {"deletedUserId": user_id, **payload}

    def bulk_update_users(self, user_ids: list[str], action: str, reason: str = "") -> dict[str, Any]:
        """``action`` is one of BULK_USER_UPDATES; the backend only accepts field updates."""
        update = BULK_USER_UPDATES.get(action.strip().upper())
        if update is None:
            raise ValueError(f"unsupported bulk user action: {action!r}")
        body = {"userIds": list(user_ids), "updateData": dict(update), "reason": reason}
        return self.http_client.request("PATCH", f"{USERS_PATH}/bulk", json_body=body)
