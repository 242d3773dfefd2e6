from lms_admin_console.app.ui.charts import sparkline, to_line_series, to_pie_series, top_n


def test_line_series_keeps_order_and_coerces_numbers() -> None:
    points = [
        {"date": "2026-01-01", "totalUsers": "10", "students": 8},
        {"date": "2026-01-02", "totalUsers": 12.5, "students": None},
    ]

    series = to_line_series(points, "date", ["totalUsers", "students"])

    assert series["labels"] == ["2026-01-01", "2026-01-02"]
    assert series["datasets"] == [
        {"label": "totalUsers", "data": [10, 12.5]},
        {"label": "students", "data": [8, 0]},
    ]


def test_pie_series_percentages() -> None:
    items = [{"category": "Dev", "revenue": 300}, {"category": None, "revenue": 100}]

    pie = to_pie_series(items, "category", "revenue")

    assert pie == {"labels": ["Dev", "Unknown"], "data": [300, 100], "percentages": [75.0, 25.0]}


def test_pie_series_with_zero_total() -> None:
    assert to_pie_series([{"deviceType": "mobile", "sessionCount": 0}], "deviceType", "sessionCount")["percentages"] == [0]


def test_top_n_sorts_descending_and_skips_non_dicts() -> None:
    rows = [{"name": "a", "totalRevenue": 5}, "junk", {"name": "b", "totalRevenue": 50}, {"name": "c", "totalRevenue": 20}]

    assert [row["name"] for row in top_n(rows, "totalRevenue", 2)] == ["b", "c"]


def test_sparkline() -> None:
    assert sparkline([]) == ""
    assert sparkline([3, 3, 3]) == "▁▁▁"
    assert sparkline([0, 7]) == "▁█"
