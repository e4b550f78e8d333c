"""Pydantic schemas for the LMS REST API.

Server payloads (DTOs) and request bodies. Fields are snake_case in
Python and camelCase on the wire.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

ApiRole = Literal["ADMIN", "TEACHER", "STUDENT"]
AttendanceStatus = Literal["PRESENT", "ABSENT", "LATE"]
SubmissionStatus = Literal["SUBMITTED", "GRADED", "RETURNED"]
LeaveDecision = Literal["APPROVED", "REJECTED"]
LeaveType = Literal["SICK", "PERSONAL", "EMERGENCY"]

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base model: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_body(self) -> dict:
        """Serialize as a JSON request body (camelCase, unset fields dropped)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Page(ApiModel, Generic[T]):
    """Paginated list envelope: {items, total, limit, skip}."""

    items: list[T] = Field(default_factory=list)
    total: int = 0
    limit: int = 0
    skip: int = 0


class DeletedResponse(ApiModel):
    id: str


class UserRef(ApiModel):
    id: str
    name: str = ""
    email: str = ""


class CourseRef(ApiModel):
    id: str
    title: str = ""
    code: str = ""


class StudentRef(ApiModel):
    id: str
    enrollment_no: str | None = None
    user: UserRef | None = None


class AssignmentRef(ApiModel):
    id: str
    title: str = ""
    course: CourseRef | None = None


class RelationCount(ApiModel):
    submissions: int | None = None
    attendance: int | None = None
    enrollments: int | None = None


# =============================================================================
# ADMIN DTOs
# =============================================================================


class AdminUser(ApiModel):
    id: str
    name: str = ""
    email: str = ""
    role: str = "STUDENT"
    phone: str | None = None
    department: str | None = None
    join_date: str | None = None
    status: str | None = None
    verified: bool | None = None
    avatar: str | None = None


class AdminCourse(ApiModel):
    id: str
    title: str = ""
    code: str = ""
    description: str | None = None
    teacher_id: str | None = None
    instructor: str | None = None
    category: str | None = None
    level: str | None = None
    duration: str | None = None
    students: int | None = None
    max_students: int | None = None
    rating: float | None = None
    price: float | None = None
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    lessons: int | None = None
    completed_lessons: int | None = None
    thumbnail: str | None = None


class AdminTeacher(ApiModel):
    id: str
    user_id: str = ""
    specialization: str | None = None
    contact: str | None = None
    is_active: bool = True
    user: UserRef | None = None


class AdminStudent(ApiModel):
    id: str
    user_id: str = ""
    enrollment_no: str = ""
    semester: int | None = None
    section: str | None = None
    user: UserRef | None = None
    progress: float | None = None


class RoleCount(ApiModel):
    role: str
    count: int = 0


class StatusCount(ApiModel):
    status: str
    count: int = 0


class ReportTotals(ApiModel):
    courses: int = 0
    assignments: int = 0
    submissions: int = 0


class StudentGpa(ApiModel):
    id: str
    name: str = ""
    email: str = ""
    latest_gpa: float | None = None
    latest_semester: int | None = None


class AdminReports(ApiModel):
    users_by_role: list[RoleCount] = Field(default_factory=list)
    totals: ReportTotals = Field(default_factory=ReportTotals)
    attendance_by_status: list[StatusCount] = Field(default_factory=list)
    leaves_by_status: list[StatusCount] = Field(default_factory=list)
    avg_gpa: float = 0
    students_with_gpa: list[StudentGpa] = Field(default_factory=list)


class AttendanceCourseStat(ApiModel):
    course_id: str
    course_name: str = ""
    course_code: str = ""
    total_classes: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    attendance_percentage: float = 0


class AttendanceStudentStat(ApiModel):
    student_id: str
    student_name: str = ""
    student_email: str = ""
    enrollment_no: str = ""
    total_classes: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    attendance_percentage: float = 0


class AdminAttendanceReport(ApiModel):
    overall_attendance_percentage: float = 0
    course_stats: list[AttendanceCourseStat] = Field(default_factory=list)
    student_stats: list[AttendanceStudentStat] = Field(default_factory=list)


class GradeDistribution(ApiModel):
    a: int = Field(0, alias="A")
    b: int = Field(0, alias="B")
    c: int = Field(0, alias="C")
    d: int = Field(0, alias="D")
    f: int = Field(0, alias="F")


class OverallGrades(ApiModel):
    total_submissions: int = 0
    average_grade: float = 0
    distribution: GradeDistribution = Field(default_factory=GradeDistribution)


class CourseGrades(ApiModel):
    course_id: str
    course_name: str = ""
    course_code: str = ""
    total_submissions: int = 0
    unique_students: int = 0
    average_grade: float = 0
    distribution: GradeDistribution = Field(default_factory=GradeDistribution)


class AdminGradesReport(ApiModel):
    overall: OverallGrades = Field(default_factory=OverallGrades)
    by_course: list[CourseGrades] = Field(default_factory=list)


# =============================================================================
# TEACHER DTOs
# =============================================================================


class TeacherClass(ApiModel):
    id: str
    title: str = ""
    code: str = ""
    description: str | None = None
    teacher_id: str | None = None
    instructor: str | None = None
    schedule: str | None = None
    room: str | None = None
    grade: str | None = None
    section: str | None = None
    status: str | None = None
    total_students: int | None = None
    count: RelationCount | None = Field(None, alias="_count")


class TeacherAssignment(ApiModel):
    id: str
    title: str = ""
    description: str | None = None
    due_date: str | None = None
    course_id: str = ""
    course: CourseRef | None = None
    count: RelationCount | None = Field(None, alias="_count")


class TeacherSubmission(ApiModel):
    id: str
    assignment_id: str = ""
    student_id: str = ""
    grade: float | None = None
    feedback: str | None = None
    submitted_at: str | None = None
    status: str = "SUBMITTED"
    student: StudentRef | None = None
    assignment: AssignmentRef | None = None


class TeacherAttendance(ApiModel):
    id: str
    student_id: str = ""
    course_id: str = ""
    date: str = ""
    status: str = "PRESENT"
    student: StudentRef | None = None
    course: CourseRef | None = None


class TeacherStudent(ApiModel):
    id: str
    user_id: str = ""
    name: str = ""
    email: str = ""
    enrollment_no: str = ""
    semester: int | None = None
    section: str | None = None
    status: str | None = None
    grade: str | None = None
    attendance: float | None = None
    progress: float | None = None
    average_grade: float | None = None
    latest_gpa: float | None = None
    completed_assignments: int | None = None
    total_assignments: int | None = None
    courses: list[CourseRef] = Field(default_factory=list)
    last_active: str | None = None


class TeacherReportStudent(ApiModel):
    id: str
    name: str = ""
    email: str = ""
    enrollment_no: str = ""
    semester: int | None = None
    latest_gpa: float | None = None
    latest_semester: int | None = None
    remarks: str | None = None
    attendance_rate: float = 0
    average_grade: float | None = None
    courses_enrolled: int = 0


class TeacherReportSummary(ApiModel):
    total_students: int = 0
    total_courses: int = 0


class TeacherReports(ApiModel):
    courses: list[CourseRef] = Field(default_factory=list)
    students: list[TeacherReportStudent] = Field(default_factory=list)
    summary: TeacherReportSummary = Field(default_factory=TeacherReportSummary)


class TeacherDashboardStats(ApiModel):
    total_classes: int = 0
    active_students: int = 0
    assignments_given: int = 0
    attendance_rate: float = 0


class UpcomingClass(ApiModel):
    id: str
    subject: str = ""
    time: str = ""
    date: str = ""
    students: int = 0
    room: str = ""


class TeacherDashboard(ApiModel):
    stats: TeacherDashboardStats = Field(default_factory=TeacherDashboardStats)
    upcoming_classes: list[UpcomingClass] = Field(default_factory=list)


# =============================================================================
# STUDENT DTOs
# =============================================================================


class StudentCourse(ApiModel):
    id: str
    title: str = ""
    code: str = ""
    description: str | None = None
    instructor: str | None = None
    category: str | None = None
    level: str | None = None
    progress: float | None = None
    status: str | None = None


class SubmissionRef(ApiModel):
    id: str
    status: str = ""
    grade: float | None = None


class StudentAssignment(ApiModel):
    id: str
    title: str = ""
    description: str | None = None
    course_id: str = ""
    course: CourseRef | None = None
    due_date: str | None = None
    points: int = 0
    status: str | None = None
    submitted_date: str | None = None
    submissions: list[SubmissionRef] = Field(default_factory=list)


class StudentAttendanceSummary(ApiModel):
    course_id: str
    course: CourseRef | None = None
    present: int = 0
    absent: int = 0
    late: int = 0
    total: int = 0
    percentage: float = 0


class StudentAttendanceEntry(ApiModel):
    id: str
    course_id: str = ""
    course: CourseRef | None = None
    date: str = ""
    status: str = "PRESENT"


class StudentDashboardStats(ApiModel):
    total_courses: int = 0
    completed_assignments: int = 0
    total_assignments: int = 0
    attendance_percentage: float = 0


class UpcomingAssignment(ApiModel):
    id: str
    title: str = ""
    course: str = ""
    due_date: str = ""


class CourseProgress(ApiModel):
    course: str = ""
    progress: float = 0
    attendance_percentage: float = 0
    total_assignments: int = 0
    completed_assignments: int = 0


class StudentNotification(ApiModel):
    id: str
    title: str = ""
    content: str = ""
    timestamp: str = ""
    type: str = ""


class StudentDashboard(ApiModel):
    stats: StudentDashboardStats = Field(default_factory=StudentDashboardStats)
    upcoming_assignments: list[UpcomingAssignment] = Field(default_factory=list)
    course_progress: list[CourseProgress] = Field(default_factory=list)
    recent_notifications: list[StudentNotification] = Field(default_factory=list)


class SemesterReport(ApiModel):
    id: str
    semester: int = 0
    gpa: float = 0
    created_at: str | None = None


class StudentReports(ApiModel):
    reports: list[SemesterReport] = Field(default_factory=list)
    attendance_rate: float = 0
    average_grade: float | None = None


# =============================================================================
# REQUEST BODIES
# =============================================================================


def _check_email(value: str | None) -> str | None:
    if value is not None and not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email format")
    return value


def _check_date(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError("Invalid date") from e
    return value


class UserCreate(ApiModel):
    name: str = Field(..., min_length=2)
    email: str
    password: str = Field(..., min_length=6)
    role: ApiRole
    specialization: str | None = None
    contact: str | None = None
    enrollment_no: str | None = None
    semester: int | None = None
    section: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return _check_email(value)


class UserUpdate(ApiModel):
    id: str
    name: str | None = Field(None, min_length=2)
    email: str | None = None
    password: str | None = Field(None, min_length=6)
    role: ApiRole | None = None
    specialization: str | None = None
    contact: str | None = None
    enrollment_no: str | None = None
    semester: int | None = None
    section: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return _check_email(value)


class CourseCreate(ApiModel):
    title: str = Field(..., min_length=2)
    code: str = Field(..., min_length=2)
    description: str | None = None
    teacher_id: str | None = None


class CourseUpdate(ApiModel):
    id: str
    title: str | None = Field(None, min_length=2)
    code: str | None = Field(None, min_length=2)
    description: str | None = None
    teacher_id: str | None = None
    status: str | None = None


class TeacherCreate(ApiModel):
    user_id: str = Field(..., min_length=1)
    specialization: str | None = None
    contact: str | None = None


class TeacherUpdate(ApiModel):
    id: str
    specialization: str | None = None
    contact: str | None = None
    is_active: bool | None = None


class StudentCreate(ApiModel):
    user_id: str = Field(..., min_length=1)
    enrollment_no: str = Field(..., min_length=1)
    semester: int = Field(..., ge=1)
    section: str = Field(..., min_length=1)


class StudentUpdate(ApiModel):
    id: str
    enrollment_no: str | None = None
    semester: int | None = Field(None, ge=1)
    section: str | None = None


class ClassCreate(ApiModel):
    title: str = Field(..., min_length=2)
    code: str = Field(..., min_length=2)
    description: str | None = None


class ClassUpdate(ApiModel):
    id: str
    title: str | None = Field(None, min_length=2)
    code: str | None = Field(None, min_length=2)
    description: str | None = None


class AssignmentCreate(ApiModel):
    title: str = Field(..., min_length=2)
    description: str | None = None
    due_date: str
    course_id: str = Field(..., min_length=1)
    points: int | None = None

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, value: str | None) -> str | None:
        return _check_date(value)


class AssignmentUpdate(ApiModel):
    id: str
    title: str | None = Field(None, min_length=2)
    description: str | None = None
    due_date: str | None = None

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, value: str | None) -> str | None:
        return _check_date(value)


class AttendanceUpsert(ApiModel):
    student_id: str
    course_id: str
    date: str | None = None
    status: AttendanceStatus

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str | None) -> str | None:
        return _check_date(value)


class AttendanceUpdate(ApiModel):
    id: str
    status: AttendanceStatus | None = None
    date: str | None = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str | None) -> str | None:
        return _check_date(value)


class SubmissionGrade(ApiModel):
    id: str
    grade: float = Field(..., ge=0, le=100)
    feedback: str | None = None


class SubmissionCreate(ApiModel):
    assignment_id: str
    content: str | None = Field(None, min_length=1)
    file_url: str | None = None


class SubmissionUpdate(ApiModel):
    id: str
    content: str | None = Field(None, min_length=1)
    file_url: str | None = None


class LeaveRequestDecision(ApiModel):
    id: str
    status: LeaveDecision


class LeaveRequestCreate(ApiModel):
    type: LeaveType
    from_date: str
    to_date: str
    reason: str = Field(..., min_length=10)

    @field_validator("from_date", "to_date")
    @classmethod
    def validate_dates(cls, value: str) -> str:
        return _check_date(value)  # type: ignore[return-value]

    @model_validator(mode="after")
    def check_range(self) -> LeaveRequestCreate:
        start = datetime.fromisoformat(self.from_date.replace("Z", "+00:00"))
        end = datetime.fromisoformat(self.to_date.replace("Z", "+00:00"))
        if start.replace(tzinfo=None) > end.replace(tzinfo=None):
            raise ValueError("From date must be on or before to date")
        return self
