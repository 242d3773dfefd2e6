from typing import Any

import pytest

from clients.lms_admin_sdk.errors import ApiError

from lms_admin_console.app.state import CATEGORIES, AppState
from lms_admin_console.app.store import Store, set_filters
from lms_admin_console.app.ui.data_fetcher import DataFetcher
from lms_admin_console.app.ui.dialogs import DialogAction, DialogController, DialogMode, DialogStatus
from lms_admin_console.app.ui.forms import FormResult


class _CategoryService:
    def __init__(self) -> None:
        self.list_calls: list[dict[str, Any]] = []
        self.created: list[dict[str, Any]] = []
        self.busy_during_delete: dict[str, bool] = {}
        self.fail_with: ApiError | None = None
        self.controller: DialogController | None = None

    def list_categories(self, **params: Any) -> dict[str, Any]:
        self.list_calls.append(params)
        return {"items": [{"id": "c1"}, {"id": "c2"}], "pagination": {"page": 1, "total": 2}, "meta": {}}

    def create(self, values: dict[str, Any], _entity: Any) -> dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        self.created.append(values)
        return {"message": "Category created"}

    def delete(self, _values: dict[str, Any], entity: Any) -> dict[str, Any]:
        assert self.controller is not None
        self.busy_during_delete = {row_id: self.controller.is_row_busy(row_id) for row_id in ("c1", "c2")}
        return {"deletedCategoryId": entity["id"]}


def _require_name(values: dict[str, Any], _entity: Any) -> FormResult:
    errors = {} if values.get("name") else {"name": "Name is required."}
    return FormResult(values=values, field_errors=errors)


def _controller() -> tuple[Store, _CategoryService, DialogController]:
    store = Store(AppState.initial())
    service = _CategoryService()
    fetcher = DataFetcher(store, CATEGORIES, "get_categories", service.list_categories, default_limit=50)
    controller = DialogController(
        store,
        CATEGORIES,
        {
            DialogMode.CREATE: DialogAction("create_category", service.create, _require_name),
            DialogMode.UPDATE: DialogAction("update_category", service.create, _require_name),
            DialogMode.DELETE: DialogAction("delete_category", service.delete),
        },
        defaults={"name": "", "order": 0},
        seed_from_entity=lambda row: {"name": row.get("name")},
        on_success=fetcher.refresh,
    )
    service.controller = controller
    return store, service, controller


def test_create_success_closes_resets_and_refetches_with_applied_filters() -> None:
    store, service, controller = _controller()
    store.dispatch(set_filters(CATEGORIES, {"search": "py", "sortBy": "order"}))

    controller.open(DialogMode.CREATE)
    controller.set_field("name", "Python")
    result = controller.submit()

    assert result is not None and result.ok
    assert service.created == [{"name": "Python", "order": 0}]
    assert controller.status is DialogStatus.CLOSED
    assert controller.draft == {}
    assert controller.mode is None
    assert service.list_calls[-1] == {"page": 1, "limit": 50, "search": "py", "sortBy": "order"}


def test_failed_submit_keeps_dialog_open_with_message_and_field_errors() -> None:
    _, service, controller = _controller()
    service.fail_with = ApiError(
        code="VALIDATION_ERROR",
        message="Ya existe una categoría con ese nombre",
        details={"errors": {"name": "Name already taken"}},
        status_code=409,
    )

    controller.open(DialogMode.CREATE)
    controller.set_field("name", "Python")
    result = controller.submit()

    assert result is not None and not result.ok
    assert controller.status is DialogStatus.OPEN
    assert controller.error == "Ya existe una categoría con ese nombre"
    assert controller.field_errors == {"name": "Name already taken"}
    assert controller.draft["name"] == "Python"
    assert service.list_calls == []


def test_validation_blocks_submit() -> None:
    _, service, controller = _controller()
    controller.open(DialogMode.CREATE)

    assert controller.submit() is None
    assert controller.field_errors == {"name": "Name is required."}
    assert controller.error == "Fix the highlighted fields."
    assert controller.status is DialogStatus.OPEN
    assert service.created == []
    assert controller.first_invalid_field == "name"

    controller.set_field("name", "Python")
    assert controller.submit().ok
    assert controller.first_invalid_field is None


def test_update_seeds_draft_from_entity() -> None:
    _, _, controller = _controller()

    controller.open(DialogMode.UPDATE, {"id": "c1", "name": "Design"})

    assert controller.draft == {"name": "Design", "order": 0}
    assert controller.selected_id == "c1"


def test_delete_marks_only_selected_row_busy() -> None:
    _, service, controller = _controller()

    controller.open(DialogMode.DELETE, {"id": "c2"})
    assert not controller.is_row_busy("c2")
    controller.submit()

    assert service.busy_during_delete == {"c1": False, "c2": True}
    assert not controller.is_row_busy("c2")


def test_unexpected_submit_error_reopens_dialog() -> None:
    _, service, controller = _controller()
    controller.open(DialogMode.CREATE)
    controller.set_field("name", "Python")

    def _explode(_values: dict[str, Any], _entity: Any) -> dict[str, Any]:
        raise OSError("image not readable")

    controller.actions[DialogMode.CREATE] = DialogAction("create_category", _explode)

    with pytest.raises(OSError):
        controller.submit()
    assert controller.status is DialogStatus.OPEN


def test_open_requires_entity_outside_create() -> None:
    _, _, controller = _controller()

    with pytest.raises(ValueError):
        controller.open(DialogMode.UPDATE)
    with pytest.raises(RuntimeError):
        controller.set_field("name", "x")


def test_view_dispatches_detail_fetch() -> None:
    store = Store()
    controller = DialogController(store, CATEGORIES, {}, viewer=lambda row: {"id": row["id"], "name": "Design"})

    result = controller.open(DialogMode.VIEW, {"id": "c1"})

    assert result is not None and result.ok
    assert store.select(CATEGORIES).detail == {"id": "c1", "name": "Design"}
    assert controller.submit() is None
