"""DTO → UI record mapping.

Mapping functions are total: every optional field has a fallback, so a
DTO with only its required fields still maps to a complete record.
"""

from __future__ import annotations

from datetime import datetime, timezone

from lms_dashboard.api.schemas import (
    AdminCourse,
    AdminStudent,
    AdminTeacher,
    AdminUser,
    StudentAssignment,
    StudentAttendanceEntry,
    StudentCourse,
    TeacherAssignment,
    TeacherAttendance,
    TeacherClass,
    TeacherStudent,
    TeacherSubmission,
)
from lms_dashboard.config.app_config import DisplayConfig
from lms_dashboard.views.records import (
    AssignmentRecord,
    AttendanceRecord,
    ClassRecord,
    CourseRecord,
    RosterRecord,
    StudentAssignmentRecord,
    StudentCourseRecord,
    StudentRecord,
    SubmissionRecord,
    TeacherRecord,
    UserRecord,
)
from lms_dashboard.views.roles import Role

UNKNOWN_NAME = "Unknown"

YEAR_BY_INDEX = {1: "Freshman", 2: "Sophomore", 3: "Junior", 4: "Senior"}

_DEFAULT_DISPLAY = DisplayConfig()


def get_initials(name: str | None) -> str:
    """Initials from a name: first letter of each word, upper-cased, max two.

    >>> get_initials("ada lovelace byron")
    'AL'
    """
    words = (name or "").split()
    initials = "".join(w[0] for w in words).upper()[:2]
    return initials or "?"


def semester_to_year(semester: int | None) -> str:
    """Bucket a semester (1-8) into a study year label."""
    if not semester or semester < 1:
        semester = 1
    index = min((semester + 1) // 2, 4)
    return YEAR_BY_INDEX[index]


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def derive_assignment_status(due_date: str | None, now: datetime | None = None) -> str:
    """Teacher-side assignment status.

    No (or unparseable) due date is a Draft, a future due date is Active,
    a past one is Closed.
    """
    due = parse_datetime(due_date)
    if due is None:
        return "Draft"
    now = now or datetime.now(timezone.utc)
    return "Active" if due > now else "Closed"


def derive_student_assignment_status(
    due_date: str | None,
    has_submission: bool,
    is_graded: bool = False,
    now: datetime | None = None,
) -> str:
    """Student-side assignment status from submission presence and due date."""
    if has_submission:
        return "Graded" if is_graded else "Submitted"
    due = parse_datetime(due_date)
    now = now or datetime.now(timezone.utc)
    if due is not None and due < now:
        return "Overdue"
    return "Pending"


def normalize_status(value: str | None, default: str = "Active") -> str:
    """Normalize server status codes ("IN_PROGRESS") to labels ("In Progress")."""
    if not value:
        return default
    if value.isupper() or "_" in value:
        return value.replace("_", " ").title()
    return value


# =============================================================================
# ADMIN
# =============================================================================


def map_api_user_to_ui(dto: AdminUser) -> UserRecord:
    return UserRecord(
        id=dto.id,
        name=dto.name or UNKNOWN_NAME,
        email=dto.email,
        role=Role.parse(dto.role, default=Role.STUDENT),
        status=dto.status or "Active",
        phone=dto.phone or "",
        department=dto.department or "",
        join_date=dto.join_date or "",
        verified=bool(dto.verified),
        avatar=dto.avatar or get_initials(dto.name),
        api_id=dto.id,
    )


def map_api_course_to_ui(
    dto: AdminCourse,
    display: DisplayConfig | None = None,
) -> CourseRecord:
    display = display or _DEFAULT_DISPLAY
    return CourseRecord(
        id=dto.id,
        title=dto.title,
        code=dto.code,
        description=dto.description or "",
        instructor=dto.instructor or ("Assigned" if dto.teacher_id else "Unassigned"),
        category=dto.category or display.default_category,
        level=dto.level or display.default_level,
        duration=dto.duration or "N/A",
        students=dto.students or 0,
        max_students=dto.max_students or 0,
        rating=dto.rating or 0.0,
        price=dto.price or 0.0,
        status=normalize_status(dto.status),
        start_date=dto.start_date or "",
        end_date=dto.end_date or "",
        lessons=dto.lessons or 0,
        completed_lessons=dto.completed_lessons or 0,
        thumbnail=dto.thumbnail or display.default_thumbnail,
        teacher_id=dto.teacher_id or "",
        api_id=dto.id,
    )


def map_api_student_to_ui(dto: AdminStudent) -> StudentRecord:
    user = dto.user
    name = user.name if user and user.name else UNKNOWN_NAME
    semester = dto.semester or 1
    return StudentRecord(
        id=dto.id,
        name=name,
        email=user.email if user else "",
        avatar=get_initials(name),
        student_id=dto.enrollment_no or dto.id,
        semester=semester,
        year=semester_to_year(semester),
        section=dto.section or "",
        department="General",
        status="Active",
        progress=dto.progress or 0.0,
        attendance=0.0,
        gpa=0.0,
        join_date="",
        api_id=dto.id,
        api_user_id=dto.user_id or (user.id if user else ""),
    )


def map_api_teacher_to_ui(dto: AdminTeacher) -> TeacherRecord:
    user = dto.user
    name = user.name if user and user.name else UNKNOWN_NAME
    return TeacherRecord(
        id=dto.id,
        name=name,
        email=user.email if user else "",
        avatar=get_initials(name),
        specialization=dto.specialization or "General",
        contact=dto.contact or "",
        status="Active" if dto.is_active else "Inactive",
        is_active=dto.is_active,
        courses=0,
        students=0,
        rating=0.0,
        experience="N/A",
        api_id=dto.id,
        api_user_id=dto.user_id or (user.id if user else ""),
    )


# =============================================================================
# TEACHER
# =============================================================================


def map_api_class_to_ui(dto: TeacherClass) -> ClassRecord:
    total = dto.total_students
    if total is None and dto.count is not None:
        total = dto.count.enrollments or dto.count.attendance
    return ClassRecord(
        id=dto.id,
        subject=dto.title,
        class_code=dto.code,
        description=dto.description or "",
        schedule=dto.schedule or "",
        room=dto.room or "",
        grade=dto.grade or "",
        section=dto.section or "",
        status=normalize_status(dto.status),
        total_students=total or 0,
        api_id=dto.id,
    )


def map_api_assignment_to_ui(
    dto: TeacherAssignment,
    total_students: int = 0,
    now: datetime | None = None,
) -> AssignmentRecord:
    submissions = dto.count.submissions if dto.count and dto.count.submissions else 0
    return AssignmentRecord(
        id=dto.id,
        title=dto.title,
        subject=dto.course.title if dto.course and dto.course.title else "",
        course_id=dto.course_id,
        description=dto.description or "",
        due_date=dto.due_date or "",
        status=derive_assignment_status(dto.due_date, now=now),
        submissions=submissions,
        total_students=total_students,
        api_id=dto.id,
    )


def map_api_submission_to_ui(dto: TeacherSubmission) -> SubmissionRecord:
    student = dto.student
    student_user = student.user if student else None
    assignment = dto.assignment
    return SubmissionRecord(
        id=dto.id,
        assignment_id=dto.assignment_id,
        assignment_title=assignment.title if assignment else "",
        course_title=assignment.course.title if assignment and assignment.course else "",
        student_id=dto.student_id,
        student_name=student_user.name if student_user and student_user.name else UNKNOWN_NAME,
        enrollment_no=(student.enrollment_no or "") if student else "",
        grade=dto.grade if dto.grade is not None else 0.0,
        is_graded=dto.grade is not None,
        feedback=dto.feedback or "",
        submitted_at=dto.submitted_at or "",
        status=dto.status or "SUBMITTED",
        api_id=dto.id,
    )


def map_api_roster_student_to_ui(dto: TeacherStudent) -> RosterRecord:
    name = dto.name or UNKNOWN_NAME
    semester = dto.semester or 1
    return RosterRecord(
        id=dto.id,
        name=name,
        email=dto.email,
        avatar=get_initials(name),
        student_id=dto.enrollment_no or dto.id,
        semester=semester,
        year=semester_to_year(semester),
        section=dto.section or "",
        status=normalize_status(dto.status),
        grade=dto.grade or "N/A",
        attendance=dto.attendance or 0.0,
        progress=dto.progress or 0.0,
        average_grade=dto.average_grade or 0.0,
        completed_assignments=dto.completed_assignments or 0,
        total_assignments=dto.total_assignments or 0,
        courses=[c.title or c.code for c in dto.courses],
        last_active=dto.last_active or "",
        api_id=dto.id,
        api_user_id=dto.user_id,
    )


def map_api_attendance_to_ui(dto: TeacherAttendance) -> AttendanceRecord:
    student = dto.student
    student_user = student.user if student else None
    return AttendanceRecord(
        id=dto.id,
        student_id=dto.student_id,
        student_name=student_user.name if student_user and student_user.name else UNKNOWN_NAME,
        course_id=dto.course_id,
        course_title=dto.course.title if dto.course else "",
        date=dto.date,
        status=dto.status or "PRESENT",
        api_id=dto.id,
    )


# =============================================================================
# STUDENT
# =============================================================================


def map_api_student_assignment_to_ui(
    dto: StudentAssignment,
    now: datetime | None = None,
) -> StudentAssignmentRecord:
    submission = dto.submissions[0] if dto.submissions else None
    is_graded = submission is not None and submission.grade is not None
    return StudentAssignmentRecord(
        id=dto.id,
        title=dto.title,
        course_title=dto.course.title if dto.course else "",
        due_date=dto.due_date or "",
        points=dto.points,
        status=derive_student_assignment_status(
            dto.due_date,
            has_submission=submission is not None or bool(dto.submitted_date),
            is_graded=is_graded,
            now=now,
        ),
        grade=submission.grade if is_graded else 0.0,
        is_graded=is_graded,
        submission_id=submission.id if submission else "",
        api_id=dto.id,
    )


def map_api_student_attendance_to_ui(dto: StudentAttendanceEntry) -> AttendanceRecord:
    return AttendanceRecord(
        id=dto.id,
        student_id="",
        student_name="",
        course_id=dto.course_id,
        course_title=dto.course.title if dto.course else "",
        date=dto.date,
        status=dto.status or "PRESENT",
        api_id=dto.id,
    )


def map_api_student_course_to_ui(
    dto: StudentCourse,
    display: DisplayConfig | None = None,
) -> StudentCourseRecord:
    display = display or _DEFAULT_DISPLAY
    return StudentCourseRecord(
        id=dto.id,
        title=dto.title,
        code=dto.code,
        description=dto.description or "",
        instructor=dto.instructor or "Unassigned",
        category=dto.category or display.default_category,
        level=dto.level or display.default_level,
        progress=dto.progress or 0.0,
        status=normalize_status(dto.status),
        api_id=dto.id,
    )
