from __future__ import annotations

from pathlib import Path
from typing import Any

from clients.lms_admin_sdk.analytics_client import AnalyticsClient
from clients.lms_admin_sdk.models import DashboardSnapshot, ExportResult

from lms_admin_console.app.application.thunks import ThunkResult, detail_thunk, mutation_thunk, snapshot_thunk
from lms_admin_console.app.auto_refresh import AutoRefresher, TimerFactory, default_timer_factory
from lms_admin_console.app.export.csv_exporter import save_download
from lms_admin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from lms_admin_console.app.state import ANALYTICS
from lms_admin_console.app.store import Store, clear_error
from lms_admin_console.app.ui.charts import sparkline, to_line_series, to_pie_series, top_n
from lms_admin_console.app.ui.components.error_banner import ErrorBanner
from lms_admin_console.app.ui.components.mutation_feedback import print_mutation_error, print_mutation_success
from lms_admin_console.app.ui.forms import DASHBOARD_PERIODS, validate_export_form
from lms_admin_console.app.ui.listing_view import format_currency, format_number

DEFAULT_PERIOD = "30d"

SUMMARY_CARDS = (
    ("Total users", "totalUsers", "users", format_number),
    ("Total courses", "totalCourses", "courses", format_number),
    ("Revenue", "totalRevenue", "revenue", format_currency),
    ("Enrollments", "totalEnrollments", "enrollments", format_number),
)


def summary_cards(snapshot: dict[str, Any] | None) -> list[dict[str, str]]:
    summary = (snapshot or {}).get("summary") or {}
    growth = summary.get("growth") or {}
    cards = []
    for label, key, growth_key, formatter in SUMMARY_CARDS:
        change = growth.get(growth_key)
        trend = ""
        if isinstance(change, (int, float)):
            trend = f"{'+' if change > 0 else ''}{change}%"
        cards.append({"label": label, "value": formatter(summary.get(key)), "growth": trend})
    return cards


def dashboard_charts(snapshot: dict[str, Any] | None) -> dict[str, Any]:
    data = snapshot or {}
    return {
        "userGrowth": to_line_series(data.get("userGrowthTrend"), "date", ["totalUsers", "students", "instructors"]),
        "revenueByCategory": to_pie_series(top_n(data.get("revenueByCategory"), "revenue", 5), "category", "revenue"),
        "topInstructors": top_n(data.get("topInstructors"), "totalRevenue", 5),
        "devices": to_pie_series(data.get("deviceAnalytics"), "deviceType", "sessionCount"),
    }


class DashboardPage:
    """Analytics overview with period selection, auto-refresh and exports."""

    def __init__(
        self,
        store: Store,
        client: AnalyticsClient,
        auto_refresh_seconds: float = 300,
        export_dir: str = "out/exports",
        timer_factory: TimerFactory = default_timer_factory,
    ) -> None:
        self.store = store
        self.client = client
        self.period = DEFAULT_PERIOD
        self.export_dir = export_dir
        self.banner = ErrorBanner()
        self.last_export: dict[str, Any] | None = None
        self.refresher = AutoRefresher(self.refresh, auto_refresh_seconds, timer_factory=timer_factory)

    @property
    def snapshot(self) -> dict[str, Any] | None:
        return self.store.select(ANALYTICS).snapshot

    def mount(self) -> ThunkResult:
        result = self.load()
        self.refresher.start()
        return result

    def unmount(self) -> None:
        self.refresher.stop()

    def load(self, refresh: bool = False) -> ThunkResult:
        self.store.dispatch(clear_error(ANALYTICS))
        period = self.period
        result: ThunkResult = self.store.dispatch(
            snapshot_thunk(
                ANALYTICS,
                "get_dashboard_overview",
                lambda: DashboardSnapshot.model_validate(self.client.get_dashboard_overview(period, refresh)).model_dump(by_alias=True),
                {"period": period, "refresh": refresh},
            )
        )
        self._settle(result)
        return result

    def refresh(self) -> ThunkResult:
        return self.load(refresh=True)

    def set_period(self, period: str) -> ThunkResult:
        if period not in DASHBOARD_PERIODS:
            raise ValueError(f"period must be one of {', '.join(DASHBOARD_PERIODS)}")
        self.period = period
        return self.load()

    def realtime(self) -> ThunkResult:
        result: ThunkResult = self.store.dispatch(detail_thunk(ANALYTICS, "get_realtime_stats", self.client.get_realtime_stats))
        self._settle(result)
        return result

    def export(self, export_type: str = "dashboard", export_format: str = "json") -> ThunkResult | None:
        form = validate_export_form({"type": export_type, "format": export_format, "period": self.period})
        if not form.is_valid:
            self.banner.set("; ".join(form.field_errors.values()))
            return None
        values = form.values
        result: ThunkResult = self.store.dispatch(
            mutation_thunk(
                ANALYTICS,
                "export_analytics",
                lambda: ExportResult.model_validate(
                    self.client.export_analytics(values["type"], values["period"], values["format"])
                ).model_dump(by_alias=True),
            )
        )
        self._settle(result)
        if result.ok:
            self.last_export = {**result.payload, "format": result.payload.get("format") or values["format"]}
        return result

    def download(self, export_id: str | None = None, export_format: str | None = None) -> Path:
        export = self.last_export or {}
        export_id = export_id or export.get("exportId")
        export_format = export_format or export.get("format") or "json"
        if not export_id:
            raise ValueError("run an export before downloading")
        content = self.client.download_export(export_id, export_format)
        return save_download(content, output_dir=self.export_dir, export_id=export_id, export_format=export_format)

    def render(self) -> list[str]:
        state = self.store.select(ANALYTICS)
        lines = [f"\nDASHBOARD period={self.period} auto-refresh={'ON' if self.refresher.active else 'OFF'}"]
        if not self.banner.visible and state.error:
            self.banner.set({"code": "ERROR", "message": state.error, "trace_id": None, "suggestion": None})
        banner = self.banner.render()
        if banner:
            lines.append(banner)
        if state.loading and state.snapshot is None:
            lines.append("[loading] fetching dashboard...")
            return lines
        if state.snapshot is None:
            lines.append("[empty] No analytics loaded yet.")
            return lines
        if state.loading:
            lines.append("[loading] refreshing...")

        for card in summary_cards(state.snapshot):
            lines.append(f"{card['label']:<14} {card['value']:>14} {card['growth']}")
        charts = dashboard_charts(state.snapshot)
        for dataset in charts["userGrowth"]["datasets"]:
            lines.append(f"{dataset['label']:<14} {sparkline(dataset['data'])}")
        pie = charts["revenueByCategory"]
        for label, value, share in zip(pie["labels"], pie["data"], pie["percentages"]):
            lines.append(f"  {label:<20} {format_currency(value):>14} {share}%")
        for idx, instructor in enumerate(charts["topInstructors"], start=1):
            lines.append(f"  {idx}. {instructor.get('name') or 'Unknown'} {format_currency(instructor.get('totalRevenue'))}")
        health = state.snapshot.get("systemHealth") or {}
        if health:
            lines.append("health: " + ", ".join(f"{key}={value}" for key, value in health.items()))
        if state.snapshot.get("lastUpdated"):
            lines.append(f"last updated: {state.snapshot['lastUpdated']}")
        return lines

    def run(self) -> None:
        self.mount()
        try:
            while True:
                for line in self.render():
                    print(line)
                print("Commands: 1=7d, 2=30d, 3=90d, 4=1y, r=refresh, t=realtime, x=export, w=download, e=dismiss error, b=back")
                command = input("cmd: ").strip().lower()
                if command == "b":
                    return
                try:
                    self._handle(command)
                except (ValueError, OSError) as error:
                    self.banner.set(str(error))
                except Exception as error:  # noqa: BLE001
                    self.banner.set(ErrorMapper.to_payload(error))
        finally:
            self.unmount()

    def _handle(self, command: str) -> None:
        periods = dict(zip(("1", "2", "3", "4"), DASHBOARD_PERIODS))
        if command in periods:
            self.set_period(periods[command])
        elif command == "r":
            self.refresh()
        elif command == "t":
            result = self.realtime()
            if result.ok:
                for key, value in (result.payload or {}).items():
                    if not isinstance(value, (dict, list)):
                        print(f"{key}: {value}")
        elif command == "x":
            export_type = input("type (dashboard/users/courses/revenue/engagement/instructors/students): ").strip() or "dashboard"
            export_format = input("format (json/csv): ").strip() or "json"
            result = self.export(export_type, export_format)
            if result is not None and result.ok:
                print_mutation_success("export_analytics", result.payload, result.payload.get("exportId"))
                print(f"records: {result.payload.get('recordCount')}")
            elif result is not None and result.error is not None:
                print_mutation_error("export_analytics", result.error)
        elif command == "w":
            print(f"[download] {self.download()}")
        elif command == "e":
            self.banner.dismiss()
            self.store.dispatch(clear_error(ANALYTICS))
        else:
            print("Unknown command.")

    def _settle(self, result: ThunkResult) -> None:
        if result.ok:
            self.banner.dismiss()
        elif result.error is not None:
            self.banner.set(ErrorMapper.to_payload(result.error))
