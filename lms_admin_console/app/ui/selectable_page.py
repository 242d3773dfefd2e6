from __future__ import annotations

from typing import Any

from lms_admin_console.app.application.thunks import ThunkResult
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.components.mutation_feedback import print_mutation_error, print_mutation_success
from lms_admin_console.app.ui.dialogs import DialogAction, DialogController, DialogMode
from lms_admin_console.app.ui.lfdm_page import LfdmPage, PageConfig


class SelectableLfdmPage(LfdmPage):
    """List page whose rows can be selected and mutated together.

    ``bulk_action`` receives the selected ids under ``ids_field`` in its values.
    """

    def __init__(
        self,
        store: Store,
        config: PageConfig,
        bulk_action: DialogAction,
        ids_field: str,
        noun: str,
        action_hint: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, config, **kwargs)
        self.ids_field = ids_field
        self.noun = noun
        self.action_hint = action_hint
        self.selected_ids: list[str] = []
        self.bulk_dialog = DialogController(
            store,
            config.slice_name,
            {DialogMode.UPDATE: bulk_action},
            defaults={"action": "", "reason": ""},
            seed_from_entity=lambda ids: {ids_field: list(ids)},
            on_success=self._after_bulk,
        )

    def toggle_selection(self, record_id: str) -> None:
        if record_id in self.selected_ids:
            self.selected_ids.remove(record_id)
        elif any(str(self.record_id(row)) == record_id for row in self.rows):
            self.selected_ids.append(record_id)
        else:
            raise KeyError(f"{self.noun} {record_id} is not on this page")

    def select_all(self) -> None:
        ids = [str(self.record_id(row)) for row in self.rows if self.record_id(row)]
        self.selected_ids = [] if set(ids) == set(self.selected_ids) else ids

    def submit_bulk(self, action: str, reason: str = "") -> ThunkResult | None:
        self.bulk_dialog.open(DialogMode.UPDATE, list(self.selected_ids))
        self.bulk_dialog.set_field("action", action)
        self.bulk_dialog.set_field("reason", reason)
        return self.bulk_dialog.submit()

    def _after_bulk(self) -> None:
        self.selected_ids = []
        self.refresh()

    def render(self) -> list[str]:
        lines = super().render()
        if self.selected_ids:
            lines.append(f"selected: {', '.join(self.selected_ids)}")
        return lines

    def _run_bulk(self) -> None:
        if not self.selected_ids:
            print(f"Select at least one {self.noun} with 't' first.")
            return
        operation = self.bulk_dialog.actions[DialogMode.UPDATE].name
        action = input(f"bulk action ({self.action_hint}): ")
        reason = input("reason: ")
        result = self.submit_bulk(action, reason)
        if result is not None and result.ok:
            print_mutation_success(operation, result.payload)
            return
        if result is not None and result.error is not None:
            print_mutation_error(operation, result.error, self.bulk_dialog.field_errors)
        else:
            for field_name, message in self.bulk_dialog.field_errors.items():
                print(f"  - {field_name}: {message}")
        self.bulk_dialog.close()

    def run(self, extra_commands=None) -> None:
        commands = {
            "t": ("toggle select", lambda: self.toggle_selection(input(f"{self.noun} id: ").strip())),
            "m": ("select all", self.select_all),
            "y": ("bulk action", self._run_bulk),
            **(extra_commands or {}),
        }
        super().run(commands)
