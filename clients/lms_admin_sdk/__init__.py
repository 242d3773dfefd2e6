from clients.lms_admin_sdk.analytics_client import AnalyticsClient
from clients.lms_admin_sdk.categories_client import CategoriesClient
from clients.lms_admin_sdk.config import SDKConfig
from clients.lms_admin_sdk.courses_client import CoursesClient
from clients.lms_admin_sdk.errors import ApiError
from clients.lms_admin_sdk.http_client import HttpClient
from clients.lms_admin_sdk.moderation_client import ModerationClient
from clients.lms_admin_sdk.users_client import UsersClient
from clients.lms_admin_sdk.verification_client import VerificationClient

__all__ = [
    "SDKConfig",
    "ApiError",
    "HttpClient",
    "CategoriesClient",
    "CoursesClient",
    "UsersClient",
    "ModerationClient",
    "AnalyticsClient",
    "VerificationClient",
]
