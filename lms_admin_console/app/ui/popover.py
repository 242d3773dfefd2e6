from __future__ import annotations

from collections.abc import Callable

PREDEFINED_ICONS = (
    "📚", "💻", "🎨", "🎵", "📊", "🔬", "🌍", "💼",
    "🏋️", "🍳", "📷", "✍️", "🧠", "⚙️", "🩺", "🗣️",
)
ICON_NAMES = {
    "📚": "books", "💻": "computer", "🎨": "art", "🎵": "music",
    "📊": "chart business", "🔬": "science", "🌍": "world languages", "💼": "business",
    "🏋️": "fitness", "🍳": "cooking", "📷": "photography", "✍️": "writing",
    "🧠": "psychology", "⚙️": "engineering", "🩺": "health", "🗣️": "speaking",
}


class UiNode:
    """Element of the rendered tree, used to answer pointer containment."""

    def __init__(self, name: str, parent: "UiNode | None" = None) -> None:
        self.name = name
        self.parent = parent
        self.children: list[UiNode] = []
        if parent is not None:
            parent.children.append(self)

    def add(self, name: str) -> "UiNode":
        return UiNode(name, parent=self)

    def contains(self, other: "UiNode | None") -> bool:
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def __repr__(self) -> str:
        return f"UiNode({self.name!r})"


class Popover:
    def __init__(self, root: UiNode, on_close: Callable[[], None] | None = None) -> None:
        self.root = root
        self._on_close = on_close
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        self._open = True

    def toggle(self) -> None:
        if self._open:
            self.close()
        else:
            self.open()

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        if self._on_close is not None:
            self._on_close()

    def handle_pointer_down(self, target: UiNode | None) -> bool:
        """Returns True when the event closed the popover."""
        if not self._open or self.root.contains(target):
            return False
        self.close()
        return True


class IconPicker:
    def __init__(self, root: UiNode, on_select: Callable[[str], None], icons: tuple[str, ...] = PREDEFINED_ICONS) -> None:
        self.popover = Popover(root, on_close=self._clear_search)
        self.icons = icons
        self._on_select = on_select
        self.search = ""
        self.custom_icon = ""

    def _clear_search(self) -> None:
        self.search = ""
        self.custom_icon = ""

    def visible_icons(self) -> list[str]:
        term = self.search.strip().lower()
        if not term:
            return list(self.icons)
        return [icon for icon in self.icons if term in ICON_NAMES.get(icon, "").lower() or term == icon]

    def choose(self, icon: str) -> None:
        value = (icon or "").strip()
        if not value:
            return
        self._on_select(value)
        self.popover.close()

    def choose_custom(self) -> None:
        self.choose(self.custom_icon)
