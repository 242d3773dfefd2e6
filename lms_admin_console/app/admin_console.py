from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lms_admin_console.app.ui.views.analytics_reports_view import AnalyticsReportsPage
from lms_admin_console.app.ui.views.categories_view import CategoriesPage
from lms_admin_console.app.ui.views.content_reports_view import ContentReportsPage
from lms_admin_console.app.ui.views.dashboard_view import DashboardPage
from lms_admin_console.app.ui.views.pending_courses_view import PendingCoursesPage
from lms_admin_console.app.ui.views.review_history_view import ReviewHistoryPage
from lms_admin_console.app.ui.views.users_view import UsersPage
from lms_admin_console.app.ui.views.verification_view import VerificationRequestsPage
from lms_admin_console.app.ui.views.violations_view import ViolationsPage


class AdminConsole:
    def __init__(
        self,
        dashboard: DashboardPage,
        categories: CategoriesPage,
        pending_courses: PendingCoursesPage,
        users: UsersPage,
        violations: ViolationsPage,
        content_reports: ContentReportsPage,
        review_history: ReviewHistoryPage,
        verification: VerificationRequestsPage,
        analytics_reports: AnalyticsReportsPage,
    ) -> None:
        self.dashboard = dashboard
        self.categories = categories
        self.pending_courses = pending_courses
        self.users = users
        self.violations = violations
        self.content_reports = content_reports
        self.review_history = review_history
        self.verification = verification
        self.analytics_reports = analytics_reports

    def menu(self) -> dict[str, tuple[str, Callable[[], Any]]]:
        return {
            "1": ("Dashboard", self.dashboard.run),
            "2": ("Categories", self.categories.run),
            "3": ("Pending course review", self.pending_courses.run),
            "4": ("Users", self.users.run),
            "5": ("User violations", self.violations.run),
            "6": ("Content reports", self.content_reports.run),
            "7": ("Course review history", self.review_history.run),
            "8": ("Instructor verification", self.verification.run),
            "9": ("Analytics reports", self.analytics_reports.run),
        }

    def run(self) -> None:
        options = self.menu()
        while True:
            print("\nLMS Admin")
            for key, (label, _) in options.items():
                print(f"{key}. {label}")
            print("0. Exit")
            option = input("Select an option: ").strip().lower()
            if option in {"0", "q"}:
                return
            entry = options.get(option)
            if entry is None:
                print("Invalid option.")
                continue
            entry[1]()
