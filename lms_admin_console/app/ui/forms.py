from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from clients.lms_admin_sdk.models import (
    BulkCourseAction,
    BulkUserAction,
    ModerationAction,
    ReportAction,
    ReviewAction,
    Severity,
    UserAction,
    VerificationAction,
)

HEX_COLOR_REGEX = re.compile(r"^#[0-9a-fA-F]{6}$")
EMAIL_REGEX = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
NO_PARENT = "none"
DEFAULT_CATEGORY_COLOR = "#3B82F6"
EXPORT_TYPES = ("dashboard", "users", "courses", "revenue", "engagement", "instructors", "students")
EXPORT_FORMATS = ("json", "csv")
DASHBOARD_PERIODS = ("7d", "30d", "90d", "1y")
ANALYTICS_GROUPINGS = ("day", "week", "month")
BULK_REPORT_ACTIONS = (ReportAction.APPROVE.value, ReportAction.REMOVE.value)
IMAGE_CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}


@dataclass
class FormResult:
    values: dict[str, Any]
    field_errors: dict[str, str]

    @property
    def first_invalid_field(self) -> str | None:
        return next(iter(self.field_errors), None)

    @property
    def is_valid(self) -> bool:
        return len(self.field_errors) == 0


def _normalize_required_text(value: str | None) -> str:
    return (value or "").strip()


def empty_category_draft() -> dict[str, Any]:
    return {
        "name": "",
        "description": "",
        "icon": "",
        "color": DEFAULT_CATEGORY_COLOR,
        "parentId": NO_PARENT,
        "order": 0,
        "isActive": True,
        "image": None,
        "keepCurrentImage": True,
    }


def validate_category_form(draft: dict[str, Any]) -> FormResult:
    name = _normalize_required_text(draft.get("name"))
    color = _normalize_required_text(draft.get("color")) or DEFAULT_CATEGORY_COLOR
    field_errors: dict[str, str] = {}
    if not name:
        field_errors["name"] = "Name is required."
    elif len(name) > 100:
        field_errors["name"] = "Name cannot exceed 100 characters."
    if not HEX_COLOR_REGEX.match(color):
        field_errors["color"] = "Color must be a hex value like #3B82F6."

    try:
        order = int(draft.get("order") or 0)
    except (TypeError, ValueError):
        order = 0
        field_errors["order"] = "Order must be a whole number."

    image = draft.get("image")
    if image and Path(str(image)).suffix.lower() not in IMAGE_CONTENT_TYPES:
        field_errors["image"] = "Image must be png, jpg, gif, webp or svg."

    values = {**draft, "name": name, "color": color, "order": order}
    return FormResult(values=values, field_errors=field_errors)


def build_category_fields(values: dict[str, Any], include_status: bool) -> dict[str, Any]:
    """Form fields for the multipart category payload."""
    fields: dict[str, Any] = {
        "name": values.get("name", ""),
        "description": values.get("description") or "",
        "icon": values.get("icon") or "",
        "color": values.get("color") or DEFAULT_CATEGORY_COLOR,
        "order": str(values.get("order") or 0),
    }
    if include_status:
        fields["isActive"] = "true" if values.get("isActive", True) else "false"
    parent_id = values.get("parentId")
    if parent_id and parent_id != NO_PARENT:
        fields["parentId"] = parent_id
    return fields


def load_image_file(path: str | None) -> tuple[str, bytes, str] | None:
    if not path:
        return None
    image_path = Path(path).expanduser()
    content_type = IMAGE_CONTENT_TYPES.get(image_path.suffix.lower(), "application/octet-stream")
    return (image_path.name, image_path.read_bytes(), content_type)


def validate_review_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    feedback = _normalize_required_text(draft.get("feedback"))
    reason = _normalize_required_text(draft.get("reason"))
    field_errors: dict[str, str] = {}
    if action not in {item.value for item in ReviewAction}:
        field_errors["action"] = "Choose APPROVE, REJECT or REQUEST_CHANGES."
    elif action == ReviewAction.REJECT.value and not reason:
        field_errors["reason"] = "A rejection reason is required."
    elif action == ReviewAction.REQUEST_CHANGES.value and not feedback:
        field_errors["feedback"] = "Describe the requested changes."
    return FormResult(values={"action": action, "feedback": feedback, "reason": reason}, field_errors=field_errors)


def validate_bulk_course_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    course_ids = [str(item) for item in draft.get("courseIds") or [] if str(item).strip()]
    reason = _normalize_required_text(draft.get("reason"))
    field_errors: dict[str, str] = {}
    if not course_ids:
        field_errors["courseIds"] = "Select at least one course."
    if action not in {item.value for item in BulkCourseAction}:
        field_errors["action"] = "Choose APPROVE, REJECT, SUSPEND or ARCHIVE."
    elif action != BulkCourseAction.APPROVE.value and not reason:
        field_errors["reason"] = "A reason is required for this action."
    return FormResult(values={"courseIds": course_ids, "action": action, "reason": reason}, field_errors=field_errors)


def validate_user_status_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    reason = _normalize_required_text(draft.get("reason"))
    duration = _optional_int(draft.get("duration"))
    field_errors: dict[str, str] = {}
    if action not in {item.value for item in UserAction}:
        field_errors["action"] = "Choose ACTIVATE, DEACTIVATE, BAN, UNBAN or VERIFY."
    elif action in {UserAction.BAN.value, UserAction.DEACTIVATE.value} and not reason:
        field_errors["reason"] = "A reason is required."
    return FormResult(values={"action": action, "reason": reason, "duration": duration}, field_errors=field_errors)


def validate_user_delete_form(draft: dict[str, Any], expected_email: str | None) -> FormResult:
    reason = _normalize_required_text(draft.get("reason"))
    confirm_email = _normalize_required_text(draft.get("confirmEmail")).lower()
    field_errors: dict[str, str] = {}
    if not reason:
        field_errors["reason"] = "A deletion reason is required."
    if not EMAIL_REGEX.match(confirm_email):
        field_errors["confirmEmail"] = "Type the user's email to confirm."
    elif expected_email and confirm_email != expected_email.strip().lower():
        field_errors["confirmEmail"] = "Confirmation email does not match."
    return FormResult(values={"reason": reason, "confirmEmail": confirm_email}, field_errors=field_errors)


def validate_moderation_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    reason = _normalize_required_text(draft.get("reason"))
    notes = _normalize_required_text(draft.get("notes"))
    duration = _optional_int(draft.get("duration"))
    field_errors: dict[str, str] = {}
    if action not in {item.value for item in ModerationAction}:
        field_errors["action"] = "Choose WARN, SUSPEND, BAN or CLEAR."
    if not reason:
        field_errors["reason"] = "A reason is required."
    if action == ModerationAction.SUSPEND.value and not duration:
        field_errors["duration"] = "Suspensions need a duration in days."
    return FormResult(
        values={"action": action, "reason": reason, "notes": notes, "duration": duration},
        field_errors=field_errors,
    )


def validate_bulk_user_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    user_ids = [str(item) for item in draft.get("userIds") or [] if str(item).strip()]
    reason = _normalize_required_text(draft.get("reason"))
    field_errors: dict[str, str] = {}
    if not user_ids:
        field_errors["userIds"] = "Select at least one user."
    if action not in {item.value for item in BulkUserAction}:
        field_errors["action"] = "Choose ACTIVATE, DEACTIVATE, VERIFY or UNVERIFY."
    elif action == BulkUserAction.DEACTIVATE.value and not reason:
        field_errors["reason"] = "A reason is required."
    return FormResult(values={"userIds": user_ids, "action": action, "reason": reason}, field_errors=field_errors)


def validate_report_review_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    notes = _normalize_required_text(draft.get("notes"))
    severity = _normalize_required_text(draft.get("violationSeverity")).upper() or None
    field_errors: dict[str, str] = {}
    if action not in {item.value for item in ReportAction}:
        field_errors["action"] = "Choose APPROVE, REMOVE, WARN or ESCALATE."
    elif action == ReportAction.ESCALATE.value and not notes:
        field_errors["notes"] = "Explain why the report is escalated."
    if severity is not None and severity not in {item.value for item in Severity}:
        field_errors["violationSeverity"] = "Choose LOW, MEDIUM, HIGH or CRITICAL."
    return FormResult(values={"action": action, "notes": notes, "violationSeverity": severity}, field_errors=field_errors)


def validate_bulk_report_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    report_ids = [str(item) for item in draft.get("reportIds") or [] if str(item).strip()]
    reason = _normalize_required_text(draft.get("reason"))
    field_errors: dict[str, str] = {}
    if not report_ids:
        field_errors["reportIds"] = "Select at least one report."
    if action not in BULK_REPORT_ACTIONS:
        field_errors["action"] = "Choose APPROVE or REMOVE."
    return FormResult(values={"reportIds": report_ids, "action": action, "reason": reason}, field_errors=field_errors)


def validate_verification_review_form(draft: dict[str, Any]) -> FormResult:
    action = _normalize_required_text(draft.get("action")).upper()
    admin_notes = _normalize_required_text(draft.get("adminNotes"))
    rejection_reason = _normalize_required_text(draft.get("rejectionReason"))
    field_errors: dict[str, str] = {}
    if action not in {item.value for item in VerificationAction}:
        field_errors["action"] = "Choose APPROVE or REJECT."
    elif action == VerificationAction.REJECT.value and not rejection_reason:
        field_errors["rejectionReason"] = "A rejection reason is required."
    return FormResult(
        values={"action": action, "adminNotes": admin_notes, "rejectionReason": rejection_reason},
        field_errors=field_errors,
    )


def validate_export_form(draft: dict[str, Any]) -> FormResult:
    export_type = _normalize_required_text(draft.get("type")).lower() or "dashboard"
    export_format = _normalize_required_text(draft.get("format")).lower() or "json"
    period = _normalize_required_text(draft.get("period")) or "30d"
    field_errors: dict[str, str] = {}
    if export_type not in EXPORT_TYPES:
        field_errors["type"] = "Unknown export type."
    if export_format not in EXPORT_FORMATS:
        field_errors["format"] = "Supported formats: json, csv."
    if period not in DASHBOARD_PERIODS:
        field_errors["period"] = "Choose 7d, 30d, 90d or 1y."
    return FormResult(values={"type": export_type, "format": export_format, "period": period}, field_errors=field_errors)


def _first_message(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and value and isinstance(value[0], str):
        return value[0]
    return None


def _field_name(entry: dict[str, Any]) -> str | None:
    field = entry.get("field") or entry.get("path") or entry.get("param")
    if isinstance(field, list):
        # validator paths look like ["body", "order"]
        field = field[-1] if field else None
    return str(field) if field else None


def map_api_validation_errors(error_details: Any) -> dict[str, str]:
    """Field -> message from either an ``errors`` mapping or a list of validator entries."""
    if isinstance(error_details, list):
        pairs = ((_field_name(item), item.get("message") or item.get("msg")) for item in error_details if isinstance(item, dict))
        return {field: str(message) for field, message in pairs if field and message}
    if not isinstance(error_details, dict):
        return {}

    nested = error_details.get("errors")
    mapped = {str(key): str(value) for key, value in nested.items()} if isinstance(nested, dict) else {}
    for key, value in error_details.items():
        message = _first_message(value) if key != "errors" else None
        if message is not None:
            mapped[str(key)] = message
    return mapped


def _optional_int(value: Any) -> int | None:
    try:
        if value in (None, ""):
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
