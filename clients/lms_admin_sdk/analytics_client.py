from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.normalizers import clean_params, unwrap_data


class AnalyticsClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def get_dashboard_overview(self, period: str = "30d", refresh: bool = False) -> dict[str, Any]:
        return self._get("/admin/analytics/dashboard", {"period": period, "refresh": refresh})

    def get_realtime_stats(self) -> dict[str, Any]:
        return self._get("/admin/analytics/realtime", {})

    def get_user_analytics(self, period: str = "30d", group_by: str = "day", segment: str = "all") -> dict[str, Any]:
        return self._get("/admin/analytics/users", {"period": period, "groupBy": group_by, "segment": segment})

    def get_course_analytics(self, period: str = "30d", group_by: str = "day", category_id: str | None = None) -> dict[str, Any]:
        return self._get("/admin/analytics/courses", {"period": period, "groupBy": group_by, "categoryId": category_id})

    def get_revenue_analytics(self, period: str = "30d", group_by: str = "day", currency: str = "INR") -> dict[str, Any]:
        return self._get("/admin/analytics/revenue", {"period": period, "groupBy": group_by, "currency": currency})

    def export_analytics(self, export_type: str, period: str, export_format: str) -> dict[str, Any]:
        params = clean_params({"type": export_type, "period": period, "format": export_format})
        data = unwrap_data(self.http_client.request("POST", "/admin/analytics/export", json_body={}, params=params))
        return data if isinstance(data, dict) else {}

    def download_export(self, export_id: str, export_format: str) -> bytes:
        return self.http_client.request_raw(
            "GET",
            f"/admin/analytics/download/{export_id}",
            params={"format": export_format},
        )

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", path, params=clean_params(params)))
        return data if isinstance(data, dict) else {}
