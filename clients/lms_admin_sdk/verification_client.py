from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.normalizers import clean_params, normalize_listing, unwrap_data

VERIFICATION_PATH = "/admin/users/admin"


class VerificationClient:
    """Instructor verification requests, reviewed by admins."""

    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_verification_requests(self, page: int = 1, limit: int = 20, **filters: Any) -> dict[str, Any]:
        params = clean_params({"page": page, "limit": limit, **filters})
        payload = self.http_client.request("GET", f"{VERIFICATION_PATH}/all", params=params)
        return normalize_listing(payload, items_key="requests", page=page, limit=limit)

    def get_verification_stats(self) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", f"{VERIFICATION_PATH}/stats"))
        return data if isinstance(data, dict) else {}

    def get_verification_request(self, request_id: str) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", f"{VERIFICATION_PATH}/{request_id}"))
        return data if isinstance(data, dict) else {}

    def review_verification_request(
        self,
        request_id: str,
        action: str,
        admin_notes: str = "",
        rejection_reason: str = "",
    ) -> dict[str, Any]:
        body = clean_params({"action": action, "adminNotes": admin_notes, "rejectionReason": rejection_reason})
        return self.http_client.request("PUT", f"{VERIFICATION_PATH}/{request_id}/review", json_body=body)
