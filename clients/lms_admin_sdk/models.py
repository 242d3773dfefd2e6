from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

UNNAMED_CATEGORY = "Unnamed Category"


class ViolationType(str, Enum):
    SPAM = "SPAM"
    HARASSMENT = "HARASSMENT"
    INAPPROPRIATE_CONTENT = "INAPPROPRIATE_CONTENT"
    COPYRIGHT = "COPYRIGHT"
    FAKE_REVIEW = "FAKE_REVIEW"
    OTHER = "OTHER"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class PriorityLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ReviewAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    REQUEST_CHANGES = "REQUEST_CHANGES"


class BulkCourseAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    SUSPEND = "SUSPEND"
    ARCHIVE = "ARCHIVE"


class UserAction(str, Enum):
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"
    BAN = "BAN"
    UNBAN = "UNBAN"
    VERIFY = "VERIFY"


class ModerationAction(str, Enum):
    WARN = "WARN"
    SUSPEND = "SUSPEND"
    BAN = "BAN"
    CLEAR = "CLEAR"


class BulkUserAction(str, Enum):
    ACTIVATE = "ACTIVATE"
    DEACTIVATE = "DEACTIVATE"
    VERIFY = "VERIFY"
    UNVERIFY = "UNVERIFY"


class ReportStatus(str, Enum):
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    RESOLVED = "RESOLVED"
    ESCALATED = "ESCALATED"


class ReportAction(str, Enum):
    APPROVE = "APPROVE"
    REMOVE = "REMOVE"
    WARN = "WARN"
    ESCALATE = "ESCALATE"


class VerificationAction(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null from the backend means "use the default"
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Pagination(_ApiModel):
    page: int = 1
    limit: int = 20
    total: int = 0
    total_pages: int = Field(default=0, alias="totalPages")
    has_next: bool = Field(default=False, alias="hasNext")
    has_prev: bool = Field(default=False, alias="hasPrev")


class CategoryRef(_ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None


class Category(_ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    parent_id: Optional[str] = Field(default=None, alias="parentId")
    parent: Optional[CategoryRef] = None
    order: int = 0
    is_active: bool = Field(default=True, alias="isActive")
    image: Optional[str] = None
    courses_count: int = Field(default=0, alias="coursesCount")

    @property
    def display_name(self) -> str:
        return self.name.strip() if self.name and self.name.strip() else UNNAMED_CATEGORY

    @property
    def resolved_parent_id(self) -> Optional[str]:
        if self.parent_id:
            return self.parent_id
        if self.parent is not None and self.parent.id:
            return self.parent.id
        return None


class CourseMetrics(_ApiModel):
    priority_level: Optional[Union[PriorityLevel, str]] = Field(default=None, alias="priorityLevel", union_mode="left_to_right")
    days_pending: Optional[int] = Field(default=None, alias="daysPending")


class PersonRef(_ApiModel):
    id: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else (self.name or self.email or "Unknown")


class PendingCourse(_ApiModel):
    id: Optional[str] = None
    title: Optional[str] = None
    level: Optional[str] = None
    price: float = 0
    status: Optional[str] = None
    category: Optional[CategoryRef] = None
    instructor: Optional[PersonRef] = None
    metrics: CourseMetrics = Field(default_factory=CourseMetrics)
    review_submitted_at: Optional[str] = Field(default=None, alias="reviewSubmittedAt")


class Violation(_ApiModel):
    violation_id: Optional[str] = Field(default=None, alias="violationId")
    violation_type: Optional[Union[ViolationType, str]] = Field(default=None, alias="violationType", union_mode="left_to_right")
    severity: Optional[Union[Severity, str]] = Field(default=None, union_mode="left_to_right")
    content_type: Optional[str] = Field(default=None, alias="contentType")
    description: Optional[str] = None
    action_taken: Optional[str] = Field(default=None, alias="actionTaken")
    moderator_name: Optional[str] = Field(default=None, alias="moderatorName")
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class AdminUser(_ApiModel):
    id: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    role: Optional[str] = None
    is_active: bool = Field(default=True, alias="isActive")
    is_verified: bool = Field(default=False, alias="isVerified")
    is_banned: bool = Field(default=False, alias="isBanned")
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class ReportedContent(_ApiModel):
    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[PersonRef] = None


class ContentReport(_ApiModel):
    id: Optional[str] = None
    content_type: Optional[str] = Field(default=None, alias="contentType")
    reason: Optional[str] = None
    description: Optional[str] = None
    status: Optional[Union[ReportStatus, str]] = Field(default=None, union_mode="left_to_right")
    priority: Optional[str] = None
    reported_by: Optional[PersonRef] = Field(default=None, alias="reportedBy")
    content_details: ReportedContent = Field(default_factory=ReportedContent, alias="contentDetails")
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    @property
    def reporter_name(self) -> str:
        return self.reported_by.full_name if self.reported_by is not None else "Unknown"

    @property
    def author_name(self) -> str:
        author = self.content_details.author
        return author.full_name if author is not None else "Unknown"


class CourseHistory(_ApiModel):
    course_id: Optional[str] = Field(default=None, alias="courseId")
    course_name: Optional[str] = Field(default=None, alias="courseName")
    instructor_name: Optional[str] = Field(default=None, alias="instructorName")
    instructor_email: Optional[str] = Field(default=None, alias="instructorEmail")
    total_reviews: int = Field(default=0, alias="totalReviews")
    total_status_changes: int = Field(default=0, alias="totalStatusChanges")
    last_review_date: Optional[str] = Field(default=None, alias="lastReviewDate")
    last_review_action: Optional[str] = Field(default=None, alias="lastReviewAction")
    last_reviewer_name: Optional[str] = Field(default=None, alias="lastReviewerName")


class VerificationRequest(_ApiModel):
    request_id: Optional[str] = Field(default=None, alias="requestId")
    instructor_name: Optional[str] = Field(default=None, alias="instructorName")
    instructor_email: Optional[str] = Field(default=None, alias="instructorEmail")
    verification_level: Optional[str] = Field(default=None, alias="verificationLevel")
    status: Optional[str] = None
    priority: Optional[str] = None
    documents_count: int = Field(default=0, alias="documentsCount")
    qualifications_count: int = Field(default=0, alias="qualificationsCount")
    experience_count: int = Field(default=0, alias="experienceCount")
    submitted_at: Optional[str] = Field(default=None, alias="submittedAt")


class ExportResult(_ApiModel):
    export_id: str = Field(alias="exportId")
    record_count: int = Field(default=0, alias="recordCount")
    format: Optional[str] = None


class DashboardSnapshot(_ApiModel):
    summary: dict[str, Any] = Field(default_factory=dict)
    system_health: dict[str, Any] = Field(default_factory=dict, alias="systemHealth")

