from lms_admin_console.app.ui.components.stats_panel import overview_line, print_stats, stats_lines


def test_stats_lines_flatten_nested_groups_and_count_lists() -> None:
    stats = {
        "overview": {"total": 5, "byLevel": {"HIGH": 2, "deep": {"hidden": 1}}},
        "recent": [{"id": 1}, {"id": 2}],
        "missing": None,
    }

    assert stats_lines(stats) == ["overview.total: 5", "overview.byLevel.HIGH: 2", "recent: 2 entries"]
    assert stats_lines(None) == []


def test_overview_line_reads_overview_or_top_level() -> None:
    keys = ("totalReports", "pendingReports")

    assert overview_line({"overview": {"totalReports": 3, "pendingReports": 0}}, keys) == "stats: totalReports=3, pendingReports=0"
    assert overview_line({"pendingReports": 1}, keys) == "stats: pendingReports=1"
    assert overview_line({}, keys) is None
    assert overview_line(None, keys) is None


def test_print_stats_reports_empty_payload(capsys) -> None:
    print_stats("COURSE STATS", {})

    out = capsys.readouterr().out
    assert "COURSE STATS" in out
    assert "[empty] No statistics available." in out
