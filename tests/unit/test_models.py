from clients.lms_admin_sdk.models import (
    AdminUser,
    Category,
    ContentReport,
    CourseHistory,
    PendingCourse,
    PersonRef,
    ReportStatus,
    Severity,
    VerificationRequest,
    Violation,
    ViolationType,
)


def test_category_display_name_and_parent_resolution() -> None:
    category = Category.model_validate({"id": "c2", "name": None, "parent": {"id": "c1", "name": "Tech"}, "extra": 1})

    assert category.display_name == "Unnamed Category"
    assert category.resolved_parent_id == "c1"
    assert category.is_active is True
    assert category.model_dump(by_alias=True)["extra"] == 1


def test_category_prefers_explicit_parent_id() -> None:
    category = Category.model_validate({"name": " Web ", "parentId": "c9", "parent": {"id": "c1"}})

    assert category.display_name == "Web"
    assert category.resolved_parent_id == "c9"


def test_violation_known_and_unknown_enum_values() -> None:
    known = Violation.model_validate({"violationType": "SPAM", "severity": "HIGH"})
    unknown = Violation.model_validate({"violationType": "DOXXING", "severity": "EXTREME"})

    assert known.violation_type is ViolationType.SPAM
    assert known.severity is Severity.HIGH
    assert unknown.violation_type == "DOXXING"
    assert unknown.severity == "EXTREME"


def test_pending_course_nested_fields() -> None:
    course = PendingCourse.model_validate(
        {
            "id": "k1",
            "instructor": {"firstName": "Ana", "lastName": "Ruiz"},
            "metrics": {"priorityLevel": "HIGH", "daysPending": 4},
        }
    )

    assert course.instructor is not None and course.instructor.full_name == "Ana Ruiz"
    assert course.metrics.priority_level == "HIGH"
    assert course.metrics.days_pending == 4


def test_admin_user_null_flags_use_defaults() -> None:
    user = AdminUser.model_validate({"id": "u1", "isBanned": None, "isVerified": True})

    assert user.is_banned is False
    assert user.is_verified is True


def test_person_ref_name_fallbacks() -> None:
    assert PersonRef.model_validate({"firstName": "Ana", "lastName": "Ruiz", "name": "ignored"}).full_name == "Ana Ruiz"
    assert PersonRef.model_validate({"name": "Bo Lee"}).full_name == "Bo Lee"
    assert PersonRef.model_validate({"email": "cy@example.com"}).full_name == "cy@example.com"
    assert PersonRef().full_name == "Unknown"


def test_content_report_people_and_status() -> None:
    report = ContentReport.model_validate(
        {
            "id": "r1",
            "status": "PENDING",
            "reportedBy": {"firstName": "Ana"},
            "contentDetails": {"title": "Great course", "author": {"name": "Bo"}},
        }
    )
    orphan = ContentReport.model_validate({"id": "r2", "status": "ARCHIVED"})

    assert report.status is ReportStatus.PENDING
    assert report.reporter_name == "Ana"
    assert report.author_name == "Bo"
    assert orphan.status == "ARCHIVED"
    assert orphan.reporter_name == "Unknown"
    assert orphan.author_name == "Unknown"
    assert orphan.content_details.title is None


def test_history_and_verification_rows_default_counts() -> None:
    history = CourseHistory.model_validate({"courseId": "k1", "lastReviewAction": "APPROVE"})
    request = VerificationRequest.model_validate({"requestId": "vr1", "documentsCount": "2"})

    assert history.total_reviews == 0
    assert history.last_review_action == "APPROVE"
    assert request.documents_count == 2
    assert request.qualifications_count == 0
