from lms_admin_console.app.ui.popover import IconPicker, Popover, UiNode


def _tree():
    page = UiNode("page")
    dialog = page.add("dialog")
    picker = dialog.add("icon-picker")
    grid = picker.add("icon-grid")
    save_button = dialog.add("save")
    return page, picker, grid, save_button


def test_outside_pointer_closes_popover() -> None:
    page, picker, _, save_button = _tree()
    closed: list[bool] = []
    popover = Popover(picker, on_close=lambda: closed.append(True))
    popover.open()

    assert popover.handle_pointer_down(save_button) is True
    assert not popover.is_open
    assert closed == [True]
    assert popover.handle_pointer_down(page) is False


def test_inside_pointer_keeps_popover_open() -> None:
    _, picker, grid, _ = _tree()
    popover = Popover(picker)
    popover.open()

    assert popover.handle_pointer_down(grid) is False
    assert popover.handle_pointer_down(picker) is False
    assert popover.is_open


def test_toggle_and_close_only_notify_once() -> None:
    _, picker, _, _ = _tree()
    closed: list[bool] = []
    popover = Popover(picker, on_close=lambda: closed.append(True))

    popover.toggle()
    popover.toggle()
    popover.close()

    assert closed == [True]


def test_icon_picker_filters_selects_and_clears_search() -> None:
    _, picker_node, _, save_button = _tree()
    chosen: list[str] = []
    picker = IconPicker(picker_node, on_select=chosen.append)
    picker.popover.open()
    picker.search = "music"

    assert picker.visible_icons() == ["🎵"]

    picker.choose("🎵")

    assert chosen == ["🎵"]
    assert not picker.popover.is_open
    assert picker.search == ""

    picker.popover.open()
    picker.search = "art"
    picker.popover.handle_pointer_down(save_button)
    assert picker.search == ""


def test_icon_picker_custom_icon_ignores_blank() -> None:
    _, picker_node, _, _ = _tree()
    chosen: list[str] = []
    picker = IconPicker(picker_node, on_select=chosen.append)
    picker.popover.open()

    picker.custom_icon = "   "
    picker.choose_custom()
    assert chosen == []
    assert picker.popover.is_open

    picker.custom_icon = "🚀"
    picker.choose_custom()
    assert chosen == ["🚀"]
