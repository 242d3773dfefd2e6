from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from clients.lms_admin_sdk.errors import ApiError

from lms_admin_console.app.application.thunks import ThunkResult, snapshot_thunk
from lms_admin_console.app.export.csv_exporter import export_current_view
from lms_admin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from lms_admin_console.app.infrastructure.logging.logger import get_logger
from lms_admin_console.app.state import SliceState
from lms_admin_console.app.store import Store, clear_error, set_filters
from lms_admin_console.app.ui.components.error_banner import ErrorBanner
from lms_admin_console.app.ui.components.mutation_feedback import print_mutation_error, print_mutation_success
from lms_admin_console.app.ui.components.stats_panel import print_stats
from lms_admin_console.app.ui.data_fetcher import DataFetcher, FetchCall
from lms_admin_console.app.ui.dialogs import DialogAction, DialogController, DialogMode
from lms_admin_console.app.ui.filters import FilterStateHolder, debounce_text, prompt_optional
from lms_admin_console.app.ui.list_renderer import ListRenderer
from lms_admin_console.app.ui.listing_view import ColumnDef
from lms_admin_console.app.ui.pagination import PaginationController

logger = get_logger("lms_admin_console.pages")

Command = Callable[[], Any]


@dataclass
class PageConfig:
    title: str
    slice_name: str
    fetch_action: str
    fetch: FetchCall
    columns: list[ColumnDef]
    filter_defaults: dict[str, Any]
    filter_prompts: list[tuple[str, str]] = field(default_factory=list)
    base_filters: dict[str, Any] = field(default_factory=dict)
    default_limit: int = 20
    empty_message: str = "No records found."
    search_key: str | None = "search"
    required_filter: str | None = None
    actions: dict[DialogMode, DialogAction] = field(default_factory=dict)
    form_defaults: dict[str, Any] = field(default_factory=dict)
    form_prompts: list[tuple[str, str]] = field(default_factory=list)
    delete_prompts: list[tuple[str, str]] = field(default_factory=list)
    seed_from_entity: Callable[[Any], dict[str, Any]] | None = None
    viewer: Callable[[Any], Any] | None = None
    view_action: str = "view"
    id_key: str = "id"


class LfdmPage:
    """List, filter, detail and mutate flows for one feature slice."""

    def __init__(
        self,
        store: Store,
        config: PageConfig,
        search_debounce_ms: int = 0,
        sleeper: Callable[[float], None] | None = None,
        export_dir: str = "out/exports",
    ) -> None:
        self.store = store
        self.config = config
        self.search_debounce_ms = search_debounce_ms
        self._sleeper = sleeper
        self.export_dir = export_dir
        self.filters = FilterStateHolder(config.filter_defaults)
        self.fetcher = DataFetcher(store, config.slice_name, config.fetch_action, config.fetch, config.default_limit)
        self.renderer = ListRenderer(config.columns, config.empty_message, row_marker=self._row_marker)
        self.dialog = DialogController(
            store,
            config.slice_name,
            config.actions,
            defaults=config.form_defaults,
            seed_from_entity=config.seed_from_entity,
            on_success=self.refresh,
            viewer=config.viewer,
            view_action=config.view_action,
            entity_id=self.record_id,
        )
        self.banner = ErrorBanner()
        self.last_result: ThunkResult | None = None

    @property
    def state(self) -> SliceState:
        return self.store.select(self.config.slice_name)

    @property
    def rows(self) -> list[dict[str, Any]]:
        return self.state.items

    @property
    def pagination(self) -> PaginationController:
        return PaginationController.from_state(self.state.pagination)

    def mount(self) -> ThunkResult | None:
        if not self.state.applied_filters and self.config.base_filters:
            self.store.dispatch(set_filters(self.config.slice_name, self.config.base_filters))
        self.filters.sync(self.state.applied_filters)
        return self._fetch()

    def refresh(self) -> ThunkResult | None:
        return self._fetch()

    def apply_filters(self) -> ThunkResult | None:
        applied = {**self.config.base_filters, **self.filters.applied()}
        if not self._can_fetch(applied):
            self.store.dispatch(set_filters(self.config.slice_name, applied))
            return None
        return self._settle(self.fetcher.apply(applied))

    def set_search(self, term: str) -> ThunkResult | None:
        if self.config.search_key is None:
            raise KeyError("this page has no search field")
        debounced = debounce_text(term.strip(), self.search_debounce_ms, self._sleeper)
        self.filters.on_change(self.config.search_key, debounced)
        return self.apply_filters()

    def clear_filters(self) -> ThunkResult | None:
        self.filters.reset()
        if not self._can_fetch(self.config.base_filters):
            self.store.dispatch(set_filters(self.config.slice_name, self.config.base_filters))
            return None
        return self._settle(self.fetcher.reset(base_filters=self.config.base_filters))

    def change_page(self, command: str) -> ThunkResult | None:
        controller = self.pagination
        targets = {
            "f": controller.first_page,
            "p": controller.prev_page,
            "n": controller.next_page,
            "l": controller.last_page_target,
        }
        target = targets[command]()
        if target is None:
            return None
        return self._settle(self.fetcher.go_to(controller.goto_page(target)))

    def dismiss_error(self) -> None:
        self.banner.dismiss()
        self.store.dispatch(clear_error(self.config.slice_name))

    def find_row(self, key: str) -> dict[str, Any] | None:
        key = key.strip()
        for row in self.rows:
            if str(self.record_id(row) or "") == key:
                return row
        if key.isdigit() and 1 <= int(key) <= len(self.rows):
            return self.rows[int(key) - 1]
        return None

    def render(self) -> list[str]:
        state = self.state
        lines = [f"\n{self.config.title}"]
        if state.applied_filters:
            lines.append(f"filters: {state.applied_filters}")
        if not self.banner.visible and state.error:
            self.banner.set({"code": "ERROR", "message": state.error, "trace_id": None, "suggestion": None})
        banner = self.banner.render()
        if banner:
            lines.append(banner)
        lines.extend(self.renderer.render(state.items, state.loading))
        controller = self.pagination
        lines.append(controller.showing_label())
        lines.append(controller.controls_line())
        return lines

    @property
    def stats(self) -> dict[str, Any] | None:
        return self.state.snapshot

    def load_stats(self, name: str, call: Callable[[], dict[str, Any]]) -> ThunkResult:
        """Loads an aggregate view for this slice into its snapshot; the list is untouched."""
        return self._settle(self.store.dispatch(snapshot_thunk(self.config.slice_name, name, call)))

    def show_stats(self, title: str, name: str, call: Callable[[], dict[str, Any]]) -> ThunkResult:
        result = self.load_stats(name, call)
        if result.ok:
            print_stats(title, result.payload)
        return result

    def export(self) -> str:
        path = export_current_view(
            module=self.config.slice_name,
            rows=self.rows,
            columns=self.config.columns,
            output_dir=self.export_dir,
            filters=self.state.applied_filters,
            page=self.pagination.page,
        )
        return str(path)

    def command_help(self, extra_commands: dict[str, tuple[str, Command]]) -> str:
        parts = ["n/p/f/l=page", "a=apply filters", "c=clear filters", "r=refresh"]
        if self.config.search_key:
            parts.append("s=search")
        modes = self.config.actions
        if self.config.viewer is not None:
            parts.append("v=view")
        if DialogMode.CREATE in modes:
            parts.append("k=create")
        if DialogMode.UPDATE in modes:
            parts.append("u=update")
        if DialogMode.DELETE in modes:
            parts.append("d=delete")
        parts.extend(f"{key}={label}" for key, (label, _) in extra_commands.items())
        parts.extend(["x=export csv", "e=dismiss error", "b=back"])
        return "Commands: " + ", ".join(parts)

    def run(self, extra_commands: dict[str, tuple[str, Command]] | None = None) -> None:
        extra = extra_commands or {}
        self.mount()
        while True:
            for line in self.render():
                print(line)
            print(self.command_help(extra))
            command = input("cmd: ").strip().lower()
            if command == "b":
                return
            try:
                self._handle(command, extra)
            except ApiError as error:
                self.banner.set(ErrorMapper.to_payload(error))
            except (KeyError, ValueError, OSError) as error:
                self.banner.set(str(error))
            except Exception as error:  # noqa: BLE001
                logger.exception("command %r failed on %s", command, self.config.slice_name)
                self.banner.set(ErrorMapper.to_payload(error))

    def _handle(self, command: str, extra: dict[str, tuple[str, Command]]) -> None:
        if command in {"n", "p", "f", "l"}:
            if self.change_page(command) is None and not self.banner.visible:
                print("[info] no page in that direction.")
        elif command == "a":
            self.prompt_filters()
            self.apply_filters()
        elif command == "c":
            self.clear_filters()
        elif command == "r":
            self._settle(self.refresh())
        elif command == "s" and self.config.search_key:
            self.set_search(input("search: "))
        elif command == "v" and self.config.viewer is not None:
            self.run_dialog(DialogMode.VIEW)
        elif command == "k" and DialogMode.CREATE in self.config.actions:
            self.run_dialog(DialogMode.CREATE)
        elif command == "u" and DialogMode.UPDATE in self.config.actions:
            self.run_dialog(DialogMode.UPDATE)
        elif command == "d" and DialogMode.DELETE in self.config.actions:
            self.run_dialog(DialogMode.DELETE)
        elif command == "x":
            print(f"[export] {self.export()}")
        elif command == "e":
            self.dismiss_error()
        elif command in extra:
            extra[command][1]()
        else:
            print("Unknown command.")

    def prompt_filters(self) -> None:
        for key, label in self.config.filter_prompts:
            value = prompt_optional(label, self.filters.draft.get(key))
            if value is not None:
                self.filters.on_change(key, value)

    def select_row(self) -> dict[str, Any] | None:
        key = input("id or row #: ")
        row = self.find_row(key)
        if row is None:
            print(f"No row matches {key.strip()!r}.")
        return row

    def run_dialog(self, mode: DialogMode) -> ThunkResult | None:
        entity = None
        if mode is not DialogMode.CREATE:
            entity = self.select_row()
            if entity is None:
                return None
        opened = self.dialog.open(mode, entity)
        if mode is DialogMode.VIEW:
            self.show_detail(opened)
            self.dialog.close()
            return opened

        first_field: str | None = None
        while True:
            self.collect_form(mode, first_field)
            if mode is DialogMode.DELETE and input("Type 'yes' to confirm: ").strip().lower() != "yes":
                self.dialog.close()
                print("Cancelled.")
                return None
            result = self.dialog.submit()
            if result is not None and result.ok:
                print_mutation_success(f"{mode.value}_{self.config.slice_name}", result.payload, self.dialog.selected_id or self.record_id(entity))
                return result
            if result is not None and result.error is not None:
                print_mutation_error(f"{mode.value}_{self.config.slice_name}", result.error, self.dialog.field_errors)
            else:
                for field_name, message in self.dialog.field_errors.items():
                    print(f"  - {field_name}: {message}")
            first_field = self.dialog.first_invalid_field
            if first_field:
                print(f"[hint] fix '{first_field}' first.")
            if input("Edit and retry? (y/n): ").strip().lower() != "y":
                self.dialog.close()
                return result

    def collect_form(self, mode: DialogMode, first_field: str | None = None) -> None:
        prompts = self.config.delete_prompts if mode is DialogMode.DELETE else self.config.form_prompts
        # the field that failed validation is asked again before the rest
        prompts = sorted(prompts, key=lambda prompt: prompt[0] != first_field)
        for key, label in prompts:
            value = prompt_optional(label, self.dialog.draft.get(key))
            if value is not None:
                self.dialog.set_field(key, value)

    def show_detail(self, result: ThunkResult | None) -> None:
        if result is None:
            return
        if not result.ok:
            print(self.banner.format(ErrorMapper.to_payload(result.error)))
            return
        detail = result.payload if isinstance(result.payload, dict) else {}
        for key, value in detail.items():
            if isinstance(value, (dict, list)):
                continue
            print(f"{key}: {value}")

    def _can_fetch(self, applied: dict[str, Any]) -> bool:
        required = self.config.required_filter
        return required is None or bool(applied.get(required))

    def _fetch(self) -> ThunkResult | None:
        if not self._can_fetch(self.state.applied_filters):
            return None
        return self._settle(self.fetcher.refresh())

    def _settle(self, result: ThunkResult | None) -> ThunkResult | None:
        if result is None:
            return None
        if result.ok:
            self.banner.dismiss()
        elif result.error is not None:
            self.banner.set(ErrorMapper.to_payload(result.error))
        self.last_result = result
        return result

    def _row_marker(self, row: Any) -> str | None:
        return "x" if self.dialog.is_row_busy(self.record_id(row)) else None

    def record_id(self, row: Any) -> Any:
        if isinstance(row, dict):
            return row.get(self.config.id_key) or row.get("id") or row.get("_id")
        return getattr(row, "id", None)
