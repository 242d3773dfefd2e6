from __future__ import annotations

from clients.lms_admin_sdk.analytics_client import AnalyticsClient
from clients.lms_admin_sdk.categories_client import CategoriesClient
from clients.lms_admin_sdk.courses_client import CoursesClient
from clients.lms_admin_sdk.errors import ApiError
from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.moderation_client import ModerationClient
from clients.lms_admin_sdk.users_client import UsersClient
from clients.lms_admin_sdk.verification_client import VerificationClient

from lms_admin_console.app.admin_console import AdminConsole
from lms_admin_console.app.config import AppConfig
from lms_admin_console.app.infrastructure.errors.error_mapper import ErrorMapper
from lms_admin_console.app.infrastructure.logging.logger import get_logger
from lms_admin_console.app.state import CATEGORIES, AppState
from lms_admin_console.app.store import Store
from lms_admin_console.app.ui.components.error_banner import ErrorBanner
from lms_admin_console.app.ui.views.analytics_reports_view import AnalyticsReportsPage
from lms_admin_console.app.ui.views.categories_view import CATEGORIES_PAGE_LIMIT, CategoriesPage
from lms_admin_console.app.ui.views.content_reports_view import ContentReportsPage
from lms_admin_console.app.ui.views.dashboard_view import DashboardPage
from lms_admin_console.app.ui.views.pending_courses_view import PendingCoursesPage
from lms_admin_console.app.ui.views.review_history_view import ReviewHistoryPage
from lms_admin_console.app.ui.views.users_view import UsersPage
from lms_admin_console.app.ui.views.verification_view import VerificationRequestsPage
from lms_admin_console.app.ui.views.violations_view import ViolationsPage

logger = get_logger("lms_admin_console.main")


def _print_runtime_config(config: AppConfig) -> None:
    print("LMS Admin Console")
    print(f"Base URL: {config.sdk.base_url}")
    print(f"Timeout: {config.sdk.timeout_seconds}s")
    print(f"Verify SSL: {config.sdk.verify_ssl}")
    print(f"Auto-refresh: {config.auto_refresh_seconds}s")
    if not config.sdk.access_token:
        print("[warning] LMS_ADMIN_TOKEN is not set; admin endpoints will answer 401.")


def build_console(config: AppConfig, http_client: HttpClient) -> AdminConsole:
    store = Store(AppState.initial(page_limits={CATEGORIES: CATEGORIES_PAGE_LIMIT}))
    page_options = {"search_debounce_ms": config.search_debounce_ms, "export_dir": config.export_dir}
    analytics = AnalyticsClient(http_client)
    courses = CoursesClient(http_client)
    moderation = ModerationClient(http_client)
    return AdminConsole(
        dashboard=DashboardPage(
            store,
            analytics,
            auto_refresh_seconds=config.auto_refresh_seconds,
            export_dir=config.export_dir,
        ),
        categories=CategoriesPage(store, CategoriesClient(http_client), **page_options),
        pending_courses=PendingCoursesPage(store, courses, **page_options),
        users=UsersPage(store, UsersClient(http_client), **page_options),
        violations=ViolationsPage(store, moderation, **page_options),
        content_reports=ContentReportsPage(store, moderation, **page_options),
        review_history=ReviewHistoryPage(store, courses, **page_options),
        verification=VerificationRequestsPage(store, VerificationClient(http_client), **page_options),
        analytics_reports=AnalyticsReportsPage(store, analytics),
    )


def run_cli() -> None:
    config = AppConfig.from_env()
    _print_runtime_config(config)
    http_client = HttpClient(config=config.sdk)

    def _handle_http_auth_error(error: ApiError) -> None:
        logger.warning("auth error status=%s trace_id=%s", error.status_code, error.trace_id)
        ErrorBanner.show(ErrorMapper.to_payload(error))

    http_client.register_auth_error_handler(_handle_http_auth_error)
    try:
        build_console(config, http_client).run()
    finally:
        http_client.close()


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
