from __future__ import annotations

from typing import Any
from urllib.parse import quote

from clients.lms_admin_sdk.errors import ApiError
from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.normalizers import clean_params, normalize_listing, unwrap_data

REPORTS_PATH = "/admin/moderation/reports"


class ModerationClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def get_user_violations(self, search_term: str, page: int = 1, limit: int = 20, **filters: Any) -> dict[str, Any]:
        """Returns violations for one user, or candidate users when the term is ambiguous.

        ``meta["multipleResults"]`` is true when the term matched several users;
        ``meta["users"]`` then holds the matches and ``items`` is empty.
        """
        params = clean_params({"page": page, "limit": limit, **filters})
        payload = self.http_client.request(
            "GET",
            f"/admin/moderation/users/{quote(search_term.strip(), safe='@')}/violations",
            params=params,
        )
        if isinstance(payload, dict) and payload.get("success") is False:
            raise ApiError(code="NOT_FOUND", message=str(payload.get("message") or "No user matched the search"))

        listing = normalize_listing(payload, items_key="violations", page=page, limit=limit)
        data = unwrap_data(payload)
        data = data if isinstance(data, dict) else {}
        multiple = bool(listing["meta"].get("multipleResults"))
        listing["meta"] = {
            **listing["meta"],
            "multipleResults": multiple,
            "users": (data.get("users") or []) if multiple else [],
            "userInfo": data.get("userInfo"),
        }
        if multiple:
            listing["items"] = []
        return listing

    def moderate_user(
        self,
        user_id: str,
        action: str,
        reason: str,
        duration: int | None = None,
        notes: str = "",
    ) -> dict[str, Any]:
        body = clean_params({"action": action, "reason": reason, "duration": duration, "notes": notes})
        return self.http_client.request("PUT", f"/admin/moderation/users/{user_id}/moderate", json_body=body)

    def list_content_reports(self, page: int = 1, limit: int = 20, **filters: Any) -> dict[str, Any]:
        params = clean_params({"page": page, "limit": limit, **filters})
        payload = self.http_client.request("GET", REPORTS_PATH, params=params)
        return normalize_listing(payload, items_key="reports", page=page, limit=limit)

    def review_content_report(
        self,
        report_id: str,
        action: str,
        action_taken: str = "",
        moderator_notes: str = "",
        violation_severity: str | None = None,
    ) -> dict[str, Any]:
        body = clean_params(
            {
                "action": action,
                "actionTaken": action_taken,
                "moderatorNotes": moderator_notes,
                "violationSeverity": violation_severity,
            }
        )
        return self.http_client.request("PUT", f"{REPORTS_PATH}/{report_id}/review", json_body=body)

    def bulk_moderate_content(
        self,
        report_ids: list[str],
        action: str,
        reason: str = "",
        moderator_notes: str = "",
    ) -> dict[str, Any]:
        body = {"reportIds": list(report_ids), "action": action, "reason": reason, "moderatorNotes": moderator_notes}
        return self.http_client.request("PUT", f"{REPORTS_PATH}/bulk", json_body=body)

    def get_moderation_stats(self, **params: Any) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", "/admin/moderation/stats", params=clean_params(params)))
        return data if isinstance(data, dict) else {}

    def get_community_standards(self) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", "/admin/moderation/community-standards"))
        return data if isinstance(data, dict) else {}
