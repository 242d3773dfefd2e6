from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from clients.lms_admin_sdk.analytics_client import AnalyticsClient

from lms_admin_console.app.application.thunks import ThunkResult, snapshot_thunk
from lms_admin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from lms_admin_console.app.state import ANALYTICS_REPORTS
from lms_admin_console.app.store import Store, clear_error
from lms_admin_console.app.ui.charts import sparkline, to_line_series, to_pie_series, top_n
from lms_admin_console.app.ui.components.error_banner import ErrorBanner
from lms_admin_console.app.ui.components.stats_panel import stats_lines
from lms_admin_console.app.ui.forms import ANALYTICS_GROUPINGS, DASHBOARD_PERIODS
from lms_admin_console.app.ui.listing_view import format_number


@dataclass(frozen=True)
class ReportLayout:
    title: str
    fetch_action: str
    summary_key: str | None = None
    line: tuple[str, str, list[str]] | None = None
    pie: tuple[str, str, str] | None = None
    top: tuple[str, str, str] | None = None


REPORT_LAYOUTS = {
    "users": ReportLayout(
        "USER ANALYTICS",
        "get_user_analytics",
        line=("growth", "date", ["total", "students", "instructors", "verifiedUsers"]),
        pie=("geographic", "country", "totalUsers"),
        top=("engagement", "totalUsers", "role"),
    ),
    "courses": ReportLayout(
        "COURSE ANALYTICS",
        "get_course_analytics",
        pie=("categoryAnalysis", "category", "totalRevenue"),
        top=("performance", "revenue", "title"),
    ),
    "revenue": ReportLayout(
        "REVENUE ANALYTICS",
        "get_revenue_analytics",
        summary_key="overview",
        line=("trends", "date", ["totalRevenue", "transactions"]),
        pie=("categoryBreakdown", "category", "revenue"),
        top=("instructorRevenue", "grossRevenue", "name"),
    ),
}
REPORT_KEYS = dict(zip(("1", "2", "3"), REPORT_LAYOUTS))


def report_sections(report: str, data: dict[str, Any] | None) -> dict[str, Any]:
    layout = REPORT_LAYOUTS[report]
    data = data or {}
    sections: dict[str, Any] = {"summary": stats_lines(data.get(layout.summary_key)) if layout.summary_key else []}
    if layout.line:
        key, x_key, y_keys = layout.line
        sections["line"] = to_line_series(data.get(key), x_key, y_keys)
    if layout.pie:
        key, label_key, value_key = layout.pie
        sections["pie"] = to_pie_series(top_n(data.get(key), value_key, 5), label_key, value_key)
    if layout.top:
        key, value_key, label_key = layout.top
        sections["top"] = [(row.get(label_key) or "Unknown", row.get(value_key)) for row in top_n(data.get(key), value_key, 5)]
    return sections


class AnalyticsReportsPage:
    """User, course and revenue reports for one period and grouping."""

    def __init__(self, store: Store, client: AnalyticsClient) -> None:
        self.store = store
        self.client = client
        self.report = "users"
        self.period = "30d"
        self.group_by = "day"
        self.banner = ErrorBanner()

    @property
    def snapshot(self) -> dict[str, Any] | None:
        return self.store.select(ANALYTICS_REPORTS).snapshot

    def _call(self) -> Callable[[], dict[str, Any]]:
        report, period, group_by = self.report, self.period, self.group_by
        fetchers = {
            "users": self.client.get_user_analytics,
            "courses": self.client.get_course_analytics,
            "revenue": self.client.get_revenue_analytics,
        }

        def _load() -> dict[str, Any]:
            data = fetchers[report](period=period, group_by=group_by)
            return {"report": report, "period": period, "groupBy": group_by, "data": data}

        return _load

    def load(self) -> ThunkResult:
        self.store.dispatch(clear_error(ANALYTICS_REPORTS))
        layout = REPORT_LAYOUTS[self.report]
        result: ThunkResult = self.store.dispatch(
            snapshot_thunk(
                ANALYTICS_REPORTS,
                layout.fetch_action,
                self._call(),
                {"period": self.period, "groupBy": self.group_by},
            )
        )
        if result.ok:
            self.banner.dismiss()
        elif result.error is not None:
            self.banner.set(ErrorMapper.to_payload(result.error))
        return result

    def select_report(self, report: str) -> ThunkResult:
        if report not in REPORT_LAYOUTS:
            raise ValueError(f"report must be one of {', '.join(REPORT_LAYOUTS)}")
        self.report = report
        return self.load()

    def set_period(self, period: str) -> ThunkResult:
        if period not in DASHBOARD_PERIODS:
            raise ValueError(f"period must be one of {', '.join(DASHBOARD_PERIODS)}")
        self.period = period
        return self.load()

    def set_group_by(self, group_by: str) -> ThunkResult:
        if group_by not in ANALYTICS_GROUPINGS:
            raise ValueError(f"groupBy must be one of {', '.join(ANALYTICS_GROUPINGS)}")
        self.group_by = group_by
        return self.load()

    def render(self) -> list[str]:
        state = self.store.select(ANALYTICS_REPORTS)
        lines = [f"\nANALYTICS REPORTS report={self.report} period={self.period} groupBy={self.group_by}"]
        if not self.banner.visible and state.error:
            self.banner.set({"code": "ERROR", "message": state.error, "trace_id": None, "suggestion": None})
        banner = self.banner.render()
        if banner:
            lines.append(banner)
        snapshot = state.snapshot
        if state.loading and snapshot is None:
            lines.append("[loading] fetching report...")
            return lines
        if snapshot is None:
            lines.append("[empty] No report loaded yet.")
            return lines

        report = snapshot.get("report") or self.report
        data = snapshot.get("data") or {}
        sections = report_sections(report, data)
        lines.append(f"{REPORT_LAYOUTS[report].title} ({snapshot.get('period')}, by {snapshot.get('groupBy')})")
        lines.extend(f"  {line}" for line in sections["summary"])
        for dataset in (sections.get("line") or {}).get("datasets", []):
            lines.append(f"{dataset['label']:<14} {sparkline(dataset['data'])}")
        pie = sections.get("pie")
        if pie:
            for label, value, share in zip(pie["labels"], pie["data"], pie["percentages"]):
                lines.append(f"  {label:<20} {format_number(value):>14} {share}%")
        for idx, (label, value) in enumerate(sections.get("top") or [], start=1):
            lines.append(f"  {idx}. {label} {format_number(value)}")
        if data.get("lastUpdated"):
            lines.append(f"last updated: {data['lastUpdated']}")
        return lines

    def run(self) -> None:
        self.load()
        while True:
            for line in self.render():
                print(line)
            print("Commands: 1=users, 2=courses, 3=revenue, p=period, g=group by, r=refresh, e=dismiss error, b=back")
            command = input("cmd: ").strip().lower()
            if command == "b":
                return
            try:
                self._handle(command)
            except ValueError as error:
                self.banner.set(str(error))
            except Exception as error:  # noqa: BLE001
                self.banner.set(ErrorMapper.to_payload(error))

    def _handle(self, command: str) -> None:
        if command in REPORT_KEYS:
            self.select_report(REPORT_KEYS[command])
        elif command == "p":
            self.set_period(input(f"period ({'/'.join(DASHBOARD_PERIODS)}): ").strip())
        elif command == "g":
            self.set_group_by(input(f"group by ({'/'.join(ANALYTICS_GROUPINGS)}): ").strip().lower())
        elif command == "r":
            self.load()
        elif command == "e":
            self.banner.dismiss()
            self.store.dispatch(clear_error(ANALYTICS_REPORTS))
        else:
            print("Unknown command.")
