from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.http_client import FileField, HttpClient
from clients.lms_admin_sdk.normalizers import clean_params, normalize_listing, unwrap_data

CATEGORIES_PATH = "/admin/users/categories"


class CategoriesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_categories(self, page: int = 1, limit: int = 50, **filters: Any) -> dict[str, Any]:
        params = clean_params({"page": page, "limit": limit, **filters})
        payload = self.http_client.request("GET", CATEGORIES_PATH, params=params)
        return normalize_listing(payload, items_key="categories", page=page, limit=limit)

    def get_category(self, category_id: str) -> dict[str, Any]:
        payload = self.http_client.request("GET", f"{CATEGORIES_PATH}/{category_id}")
        data = unwrap_data(payload)
        if isinstance(data, dict) and isinstance(data.get("category"), dict):
            return data["category"]
        return data if isinstance(data, dict) else {}

    def create_category(self, fields: dict[str, Any], image: FileField | None = None) -> dict[str, Any]:
        return self.http_client.request(
            "POST",
            CATEGORIES_PATH,
            data=fields,
            files={"image": image} if image else None,
        )

    def update_category(self, category_id: str, fields: dict[str, Any], image: FileField | None = None) -> dict[str, Any]:
        return self.http_client.request(
            "PATCH",
            f"{CATEGORIES_PATH}/{category_id}",
            data=fields,
            files={"image": image} if image else None,
        )

    def delete_category(self, category_id: str) -> dict[str, Any]:
        payload = self.http_client.request("DELETE", f"{CATEGORIES_PATH}/{category_id}")
        return {"deletedCategoryId": category_id, **payload}
