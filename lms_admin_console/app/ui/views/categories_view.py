from __future__ import annotations

from typing import Any

from clients.lms_admin_sdk.categories_client import CategoriesClient
from clients.lms_admin_sdk.models import Category

from lms_admin_console.app.state import CATEGORIES
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.dialogs import DialogAction, DialogMode
from lms_admin_console.app.ui.filters import ALL, prompt_optional
from lms_admin_console.app.ui.forms import (
    NO_PARENT,
    build_category_fields,
    empty_category_draft,
    load_image_file,
    validate_category_form,
)
from lms_admin_console.app.ui.lfdm_page import LfdmPage, PageConfig
from lms_admin_console.app.ui.listing_view import ColumnDef
from lms_admin_console.app.ui.popover import IconPicker, UiNode

CATEGORY_FILTER_DEFAULTS = {"search": "", "isActive": ALL, "hasParent": ALL, "sortBy": "order", "sortOrder": "asc"}
CATEGORY_BASE_FILTERS = {"sortBy": "order", "sortOrder": "asc"}
CATEGORIES_PAGE_LIMIT = 50


def _category(row: Any) -> Category:
    return Category.model_validate(row)


CATEGORY_COLUMNS = [
    ColumnDef("id", "id"),
    ColumnDef("name", "name", accessor=lambda row: _category(row).display_name),
    ColumnDef("icon", "icon"),
    ColumnDef("color", "color"),
    ColumnDef("parent", "parent", accessor=lambda row: (row.get("parent") or {}).get("name")),
    ColumnDef("order", "order"),
    ColumnDef("isActive", "status", accessor=lambda row: _category(row).is_active),
    ColumnDef("coursesCount", "courses", accessor=lambda row: (row.get("_count") or {}).get("courses", row.get("coursesCount"))),
]


def seed_category_draft(row: Any) -> dict[str, Any]:
    category = _category(row)
    return {
        "name": category.name or "",
        "description": category.description or "",
        "icon": category.icon or "",
        "color": category.color or empty_category_draft()["color"],
        "parentId": category.resolved_parent_id or NO_PARENT,
        "order": category.order,
        "isActive": category.is_active,
        "image": None,
        "keepCurrentImage": True,
    }


def _create(client: CategoriesClient):
    def _submit(values: dict[str, Any], _entity: Any) -> dict[str, Any]:
        return client.create_category(build_category_fields(values, include_status=False), image=load_image_file(values.get("image")))

    return _submit


def _update(client: CategoriesClient):
    def _submit(values: dict[str, Any], entity: Any) -> dict[str, Any]:
        image = None if values.get("keepCurrentImage", True) else load_image_file(values.get("image"))
        return client.update_category(_category(entity).id or "", build_category_fields(values, include_status=True), image=image)

    return _submit


def _delete(client: CategoriesClient):
    def _submit(_values: dict[str, Any], entity: Any) -> dict[str, Any]:
        return client.delete_category(_category(entity).id or "")

    return _submit


def _validate(values: dict[str, Any], _entity: Any):
    return validate_category_form(values)


def build_categories_config(client: CategoriesClient) -> PageConfig:
    return PageConfig(
        title="CATEGORIES",
        slice_name=CATEGORIES,
        fetch_action="get_categories",
        fetch=client.list_categories,
        columns=CATEGORY_COLUMNS,
        filter_defaults=CATEGORY_FILTER_DEFAULTS,
        filter_prompts=[
            ("search", "search"),
            ("isActive", "isActive (all/true/false)"),
            ("hasParent", "hasParent (all/true/false)"),
            ("sortBy", "sortBy (order/name/createdAt)"),
            ("sortOrder", "sortOrder (asc/desc)"),
        ],
        base_filters=CATEGORY_BASE_FILTERS,
        default_limit=CATEGORIES_PAGE_LIMIT,
        empty_message="No categories match the current filters.",
        actions={
            DialogMode.CREATE: DialogAction("create_category", _create(client), _validate),
            DialogMode.UPDATE: DialogAction("update_category", _update(client), _validate),
            DialogMode.DELETE: DialogAction("delete_category", _delete(client)),
        },
        form_defaults=empty_category_draft(),
        form_prompts=[
            ("name", "name"),
            ("description", "description"),
            ("color", "color (#RRGGBB)"),
            ("parentId", "parentId ('none' for top level)"),
            ("order", "order"),
        ],
        seed_from_entity=seed_category_draft,
        viewer=lambda row: client.get_category(_category(row).id or ""),
        view_action="get_category",
    )


class CategoriesPage(LfdmPage):
    def __init__(self, store: Store, client: CategoriesClient, **kwargs: Any) -> None:
        super().__init__(store, build_categories_config(client), **kwargs)
        self.ui_root = UiNode("categories-page")
        dialog_node = self.ui_root.add("category-dialog")
        self.icon_picker = IconPicker(dialog_node.add("icon-picker"), on_select=lambda icon: self.dialog.set_field("icon", icon))

    def parent_options(self) -> list[tuple[str, str]]:
        """Top-level candidates for the parent selector, excluding the record being edited."""
        editing_id = self.dialog.selected_id
        options = [(NO_PARENT, "No parent (top level)")]
        for row in self.rows:
            category = _category(row)
            if category.id and category.id != editing_id and not category.resolved_parent_id:
                options.append((category.id, category.display_name))
        return options

    def collect_form(self, mode: DialogMode, first_field: str | None = None) -> None:
        if mode is DialogMode.DELETE:
            super().collect_form(mode, first_field)
            return
        print("parents: " + ", ".join(f"{value}={label}" for value, label in self.parent_options()))
        super().collect_form(mode, first_field)
        if mode is DialogMode.UPDATE:
            status = prompt_optional("isActive (true/false)", self.dialog.draft.get("isActive"))
            if status:
                self.dialog.set_field("isActive", status.strip().lower() in {"true", "1", "yes", "y"})
        self._pick_icon()
        image = prompt_optional("image path", None)
        if image:
            self.dialog.set_field("image", image)
            self.dialog.set_field("keepCurrentImage", False)

    def _pick_icon(self) -> None:
        self.icon_picker.popover.open()
        self.icon_picker.search = input("icon search (enter to list all): ").strip()
        icons = self.icon_picker.visible_icons()
        print("icons: " + "  ".join(f"{idx}:{icon}" for idx, icon in enumerate(icons, start=1)))
        choice = input("icon # or custom icon (enter to keep): ").strip()
        if not choice:
            self.icon_picker.popover.handle_pointer_down(self.ui_root)
            return
        if choice.isdigit() and 1 <= int(choice) <= len(icons):
            self.icon_picker.choose(icons[int(choice) - 1])
        else:
            self.icon_picker.custom_icon = choice
            self.icon_picker.choose_custom()
