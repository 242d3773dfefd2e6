from __future__ import annotations

import math
from typing import Any

from clients.lms_admin_sdk.config import FALSY, TRUTHY

SENTINEL_VALUES = ("all", "")


def clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drops unset and sentinel values so they never reach the backend."""
    cleaned: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, str) and value.strip().lower() in SENTINEL_VALUES:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
            continue
        cleaned[key] = value.strip() if isinstance(value, str) else value
    return cleaned


def unwrap_data(payload: Any) -> Any:
    if isinstance(payload, dict) and "data" in payload and ("success" in payload or "message" in payload):
        return payload["data"]
    return payload


def normalize_listing(
    payload: Any,
    *,
    items_key: str,
    page: int = 1,
    limit: int = 20,
) -> dict[str, Any]:
    """Maps the backend envelope to ``{"items", "pagination", "filters", "meta"}``.

    Accepts the canonical ``{success, data: {<items_key>, pagination}}`` shape
    as well as bare lists and ``items``/``rows`` fallbacks.
    """
    data = unwrap_data(payload)
    items: list[Any] = []
    raw_pagination: dict[str, Any] = {}

    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        for key in (items_key, "items", "rows"):
            if isinstance(data.get(key), list):
                items = data[key]
                break
        if isinstance(data.get("pagination"), dict):
            raw_pagination = data["pagination"]

    if not raw_pagination and isinstance(payload, dict) and isinstance(payload.get("pagination"), dict):
        raw_pagination = payload["pagination"]

    filters = payload.get("filters") if isinstance(payload, dict) and isinstance(payload.get("filters"), dict) else {}
    if not filters and isinstance(data, dict) and isinstance(data.get("filters"), dict):
        filters = data["filters"]
    meta = payload.get("meta") if isinstance(payload, dict) and isinstance(payload.get("meta"), dict) else {}

    return {
        "items": items,
        "pagination": normalize_pagination(raw_pagination, page=page, limit=limit, fallback_total=len(items)),
        "filters": filters,
        "meta": meta,
    }


def normalize_pagination(
    raw: dict[str, Any] | None,
    *,
    page: int = 1,
    limit: int = 20,
    fallback_total: int | None = None,
) -> dict[str, Any]:
    raw = raw or {}
    safe_page = max(1, _to_int(raw.get("page")) or _to_int(page) or 1)
    safe_limit = max(1, _to_int(raw.get("limit")) or _to_int(limit) or 20)
    total = _to_int(raw.get("total"))
    if total is None:
        total = fallback_total or 0
    total_pages = _to_int(raw.get("totalPages"))
    if total_pages is None:
        total_pages = math.ceil(total / safe_limit) if total else 0

    has_next = _to_bool(raw.get("hasNext"))
    if has_next is None:
        has_next = safe_page < total_pages
    has_prev = _to_bool(raw.get("hasPrev"))
    if has_prev is None:
        has_prev = safe_page > 1

    return {
        "page": safe_page,
        "limit": safe_limit,
        "total": max(0, total),
        "totalPages": max(0, total_pages),
        "hasNext": has_next,
        "hasPrev": has_prev,
    }


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "" or isinstance(value, bool):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, bool) or value is None:
        return value
    token = str(value).strip().lower()
    if token in TRUTHY:
        return True
    return False if token in FALSY else None
