from lms_admin_console.app.ui.list_renderer import ListRenderer
from lms_admin_console.app.ui.listing_view import ColumnDef, format_currency, format_number, normalize_value

COLUMNS = [ColumnDef("id", "id"), ColumnDef("name", "name"), ColumnDef("isActive", "status")]


def test_loading_without_rows_renders_skeleton() -> None:
    lines = ListRenderer(COLUMNS).render([], loading=True)

    assert lines[0] == "[loading]"
    assert len(lines) == 4


def test_empty_state_message() -> None:
    assert ListRenderer(COLUMNS, "No categories match the current filters.").render([], loading=False) == [
        "[empty] No categories match the current filters."
    ]


def test_rows_render_with_fallbacks_and_markers() -> None:
    renderer = ListRenderer(COLUMNS, row_marker=lambda row: "x" if row["id"] == "c2" else None)

    lines = renderer.render([{"id": "c1", "name": "Design", "isActive": True}, {"id": "c2", "name": " ", "isActive": False}], loading=False)

    assert lines[0].split() == ["id", "|", "name", "|", "status"]
    assert lines[2].startswith("  c1")
    assert "ACTIVE" in lines[2]
    assert lines[3].startswith("x c2")
    assert "—" in lines[3]
    assert "INACTIVE" in lines[3]


def test_refreshing_keeps_rows_visible() -> None:
    lines = ListRenderer(COLUMNS).render([{"id": "c1"}], loading=True)

    assert lines[0] == "[loading] refreshing..."
    assert any(line.startswith("c1") for line in lines)


def test_value_formatters() -> None:
    assert normalize_value(None) == "—"
    assert normalize_value(2.5) == "2.50"
    assert format_number(1234567) == "1,234,567"
    assert format_currency("19.9") == "$19.90"
    assert format_currency("n/a") == "$0.00"
