from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lms_admin_console.app.application.thunks import ThunkResult, detail_thunk, mutation_thunk
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.forms import FormResult, map_api_validation_errors


class DialogMode(str, Enum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class DialogStatus(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class DialogAction:
    """One mutate flow: ``submit(values, entity)`` performs the SDK call;
    ``validate(values, entity)`` runs first when set."""

    name: str
    submit: Callable[[dict[str, Any], Any], Any]
    validate: Callable[[dict[str, Any], Any], FormResult] | None = None


def _default_entity_id(entity: Any) -> Any:
    if isinstance(entity, dict):
        return entity.get("id") or entity.get("_id")
    return getattr(entity, "id", None)


class DialogController:
    def __init__(
        self,
        store: Store,
        slice_name: str,
        actions: dict[DialogMode, DialogAction],
        defaults: dict[str, Any] | None = None,
        seed_from_entity: Callable[[Any], dict[str, Any]] | None = None,
        on_success: Callable[[], Any] | None = None,
        viewer: Callable[[Any], Any] | None = None,
        view_action: str = "view",
        entity_id: Callable[[Any], Any] = _default_entity_id,
    ) -> None:
        self.store = store
        self.slice_name = slice_name
        self.actions = actions
        self.defaults = dict(defaults or {})
        self._seed_from_entity = seed_from_entity
        self._on_success = on_success
        self._viewer = viewer
        self.view_action = view_action
        self._entity_id = entity_id

        self.status = DialogStatus.CLOSED
        self.mode: DialogMode | None = None
        self.entity: Any = None
        self.draft: dict[str, Any] = {}
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}
        self.last_form: FormResult | None = None

    @property
    def is_open(self) -> bool:
        return self.status is not DialogStatus.CLOSED

    @property
    def is_deleting(self) -> bool:
        return self.mode is DialogMode.DELETE and self.status is DialogStatus.SUBMITTING

    @property
    def first_invalid_field(self) -> str | None:
        if self.last_form is not None and not self.last_form.is_valid:
            return self.last_form.first_invalid_field
        return next(iter(self.field_errors), None)

    @property
    def selected_id(self) -> Any:
        return self._entity_id(self.entity) if self.entity is not None else None

    def is_row_busy(self, row_id: Any) -> bool:
        return self.is_deleting and row_id is not None and row_id == self.selected_id

    def open(self, mode: DialogMode, entity: Any = None) -> ThunkResult | None:
        if mode is not DialogMode.CREATE and entity is None:
            raise ValueError(f"{mode.value} dialog needs a selected record")
        self.mode = mode
        self.entity = entity
        self.error = None
        self.field_errors = {}
        self.last_form = None
        self.status = DialogStatus.OPEN
        if mode is DialogMode.CREATE:
            self.draft = dict(self.defaults)
        elif mode is DialogMode.UPDATE:
            seeded = self._seed_from_entity(entity) if self._seed_from_entity else {}
            self.draft = {**self.defaults, **seeded}
        else:
            self.draft = {}

        if mode is DialogMode.VIEW and self._viewer is not None:
            result = self.store.dispatch(detail_thunk(self.slice_name, self.view_action, lambda: self._viewer(entity)))
            if not result.ok:
                self.error = result.message
            return result
        return None

    def set_field(self, key: str, value: Any) -> None:
        if not self.is_open:
            raise RuntimeError("dialog is closed")
        self.draft[key] = value
        self.field_errors.pop(key, None)

    def submit(self) -> ThunkResult | None:
        if self.status is not DialogStatus.OPEN or self.mode is None or self.mode is DialogMode.VIEW:
            return None
        action = self.actions.get(self.mode)
        if action is None:
            raise KeyError(f"no {self.mode.value} action configured for {self.slice_name}")

        values = dict(self.draft)
        if action.validate is not None:
            form = action.validate(values, self.entity)
            self.last_form = form
            if not form.is_valid:
                self.field_errors = dict(form.field_errors)
                self.error = "Fix the highlighted fields."
                return None
            values = form.values

        entity = self.entity
        self.status = DialogStatus.SUBMITTING
        self.error = None
        try:
            result: ThunkResult = self.store.dispatch(
                mutation_thunk(self.slice_name, action.name, lambda: action.submit(values, entity))
            )
        except Exception:
            self.status = DialogStatus.OPEN
            raise
        if not result.ok:
            self.status = DialogStatus.OPEN
            self.error = result.message
            self.field_errors = map_api_validation_errors(result.error.details if result.error else None)
            return result

        self.close()
        if self._on_success is not None:
            self._on_success()
        return result

    def close(self) -> None:
        self.status = DialogStatus.CLOSED
        self.mode = None
        self.entity = None
        self.draft = {}
        self.error = None
        self.field_errors = {}
        self.last_form = None
