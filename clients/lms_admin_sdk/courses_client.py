from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.normalizers import clean_params, normalize_listing, unwrap_data


class CoursesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_pending_courses(self, page: int = 1, limit: int = 20, **filters: Any) -> dict[str, Any]:
        params = clean_params({"page": page, "limit": limit, **filters})
        payload = self.http_client.request("GET", "/admin/courses/pending", params=params)
        listing = normalize_listing(payload, items_key="courses", page=page, limit=limit)
        data = unwrap_data(payload)
        if isinstance(data, dict) and isinstance(data.get("summary"), dict):
            listing["meta"] = {**listing["meta"], "summary": data["summary"]}
        return listing

    def get_course_review(self, course_id: str) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", f"/admin/courses/{course_id}/review"))
        return data if isinstance(data, dict) else {}

    def review_course(self, course_id: str, action: str, feedback: str = "", reason: str = "") -> dict[str, Any]:
        body = clean_params({"action": action, "feedback": feedback, "reason": reason})
        return self.http_client.request("POST", f"/admin/courses/{course_id}/review", json_body=body)

    def bulk_course_actions(self, course_ids: list[str], action: str, reason: str = "") -> dict[str, Any]:
        body = {"courseIds": list(course_ids), "action": action, "reason": reason}
        return self.http_client.request("POST", "/admin/courses/bulk-actions", json_body=body)

    def get_course_stats(self, **params: Any) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", "/admin/courses/stats", params=clean_params(params)))
        return data if isinstance(data, dict) else {}

    def list_courses_with_history(self) -> list[dict[str, Any]]:
        """Every course that has review history; the endpoint is not paginated."""
        data = unwrap_data(self.http_client.request("GET", "/admin/courses/history"))
        courses = data.get("courses") if isinstance(data, dict) else data
        if not isinstance(courses, list):
            return []
        return [course for course in courses if isinstance(course, dict)]

    def get_course_review_history(self, course_id: str) -> dict[str, Any]:
        data = unwrap_data(self.http_client.request("GET", f"/admin/courses/{course_id}/history"))
        return data if isinstance(data, dict) else {}
