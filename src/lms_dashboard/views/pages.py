"""Per-entity list pages and CRUD flows.

Each `*_page(ctx)` wires a query hook, a mapper, the entity's sort fields
and its filters into a ListPage. Each `*_crud(ctx)` wires the entity's
mutation hooks and request schemas into a CrudFlow.
"""

from __future__ import annotations

from enum import Enum

from lms_dashboard.api.schemas import (
    AssignmentCreate,
    AssignmentUpdate,
    AttendanceUpdate,
    AttendanceUpsert,
    ClassCreate,
    ClassUpdate,
    CourseCreate,
    CourseUpdate,
    StudentCreate,
    StudentUpdate,
    SubmissionCreate,
    SubmissionGrade,
    SubmissionUpdate,
    TeacherCreate,
    TeacherUpdate,
    UserCreate,
    UserUpdate,
)
from lms_dashboard.hooks import admin, student, teacher
from lms_dashboard.hooks.base import DashboardContext
from lms_dashboard.views.crud import CrudFlow
from lms_dashboard.views.listing import date_key, number_key, text_key
from lms_dashboard.views.mappers import (
    map_api_assignment_to_ui,
    map_api_attendance_to_ui,
    map_api_class_to_ui,
    map_api_course_to_ui,
    map_api_roster_student_to_ui,
    map_api_student_assignment_to_ui,
    map_api_student_attendance_to_ui,
    map_api_student_course_to_ui,
    map_api_student_to_ui,
    map_api_submission_to_ui,
    map_api_teacher_to_ui,
    map_api_user_to_ui,
)
from lms_dashboard.views.page import ListPage
from lms_dashboard.views.records import CourseRecord, StudentAssignmentRecord, TeacherRecord


# =============================================================================
# SORT FIELDS
# =============================================================================


class UserSortField(str, Enum):
    NAME = "name"
    EMAIL = "email"
    ROLE = "role"
    STATUS = "status"
    JOIN_DATE = "join_date"


class CourseSortField(str, Enum):
    TITLE = "title"
    CODE = "code"
    INSTRUCTOR = "instructor"
    PRICE = "price"
    RATING = "rating"
    STUDENTS = "students"
    START_DATE = "start_date"
    STATUS = "status"


class StudentSortField(str, Enum):
    NAME = "name"
    STUDENT_ID = "student_id"
    SEMESTER = "semester"
    PROGRESS = "progress"
    GPA = "gpa"


class TeacherSortField(str, Enum):
    NAME = "name"
    SPECIALIZATION = "specialization"
    STATUS = "status"


class ClassSortField(str, Enum):
    SUBJECT = "subject"
    CLASS_CODE = "class_code"
    TOTAL_STUDENTS = "total_students"
    STATUS = "status"


class AssignmentSortField(str, Enum):
    TITLE = "title"
    DUE_DATE = "due_date"
    SUBMISSIONS = "submissions"
    STATUS = "status"


class RosterSortField(str, Enum):
    NAME = "name"
    STUDENT_ID = "student_id"
    ATTENDANCE = "attendance"
    AVERAGE_GRADE = "average_grade"
    PROGRESS = "progress"


class SubmissionSortField(str, Enum):
    STUDENT_NAME = "student_name"
    SUBMITTED_AT = "submitted_at"
    GRADE = "grade"
    STATUS = "status"


class AttendanceSortField(str, Enum):
    DATE = "date"
    STUDENT_NAME = "student_name"
    STATUS = "status"


class StudentCourseSortField(str, Enum):
    TITLE = "title"
    PROGRESS = "progress"


class StudentAssignmentSortField(str, Enum):
    TITLE = "title"
    DUE_DATE = "due_date"
    POINTS = "points"
    STATUS = "status"


class StudentAttendanceSortField(str, Enum):
    DATE = "date"
    COURSE = "course_title"
    STATUS = "status"


USER_SORT_KEYS = {
    UserSortField.NAME: text_key("name"),
    UserSortField.EMAIL: text_key("email"),
    UserSortField.ROLE: text_key("role_label"),
    UserSortField.STATUS: text_key("status"),
    UserSortField.JOIN_DATE: date_key("join_date"),
}

COURSE_SORT_KEYS = {
    CourseSortField.TITLE: text_key("title"),
    CourseSortField.CODE: text_key("code"),
    CourseSortField.INSTRUCTOR: text_key("instructor"),
    CourseSortField.PRICE: number_key("price"),
    CourseSortField.RATING: number_key("rating"),
    CourseSortField.STUDENTS: number_key("students"),
    CourseSortField.START_DATE: date_key("start_date"),
    CourseSortField.STATUS: text_key("status"),
}

STUDENT_SORT_KEYS = {
    StudentSortField.NAME: text_key("name"),
    StudentSortField.STUDENT_ID: text_key("student_id"),
    StudentSortField.SEMESTER: number_key("semester"),
    StudentSortField.PROGRESS: number_key("progress"),
    StudentSortField.GPA: number_key("gpa"),
}

TEACHER_SORT_KEYS = {
    TeacherSortField.NAME: text_key("name"),
    TeacherSortField.SPECIALIZATION: text_key("specialization"),
    TeacherSortField.STATUS: text_key("status"),
}

CLASS_SORT_KEYS = {
    ClassSortField.SUBJECT: text_key("subject"),
    ClassSortField.CLASS_CODE: text_key("class_code"),
    ClassSortField.TOTAL_STUDENTS: number_key("total_students"),
    ClassSortField.STATUS: text_key("status"),
}

ASSIGNMENT_SORT_KEYS = {
    AssignmentSortField.TITLE: text_key("title"),
    AssignmentSortField.DUE_DATE: date_key("due_date"),
    AssignmentSortField.SUBMISSIONS: number_key("submissions"),
    AssignmentSortField.STATUS: text_key("status"),
}

ROSTER_SORT_KEYS = {
    RosterSortField.NAME: text_key("name"),
    RosterSortField.STUDENT_ID: text_key("student_id"),
    RosterSortField.ATTENDANCE: number_key("attendance"),
    RosterSortField.AVERAGE_GRADE: number_key("average_grade"),
    RosterSortField.PROGRESS: number_key("progress"),
}

SUBMISSION_SORT_KEYS = {
    SubmissionSortField.STUDENT_NAME: text_key("student_name"),
    SubmissionSortField.SUBMITTED_AT: date_key("submitted_at"),
    SubmissionSortField.GRADE: number_key("grade"),
    SubmissionSortField.STATUS: text_key("status"),
}

ATTENDANCE_SORT_KEYS = {
    AttendanceSortField.DATE: date_key("date"),
    AttendanceSortField.STUDENT_NAME: text_key("student_name"),
    AttendanceSortField.STATUS: text_key("status"),
}

STUDENT_COURSE_SORT_KEYS = {
    StudentCourseSortField.TITLE: text_key("title"),
    StudentCourseSortField.PROGRESS: number_key("progress"),
}

STUDENT_ASSIGNMENT_SORT_KEYS = {
    StudentAssignmentSortField.TITLE: text_key("title"),
    StudentAssignmentSortField.DUE_DATE: date_key("due_date"),
    StudentAssignmentSortField.POINTS: number_key("points"),
    StudentAssignmentSortField.STATUS: text_key("status"),
}

STUDENT_ATTENDANCE_SORT_KEYS = {
    StudentAttendanceSortField.DATE: date_key("date"),
    StudentAttendanceSortField.COURSE: text_key("course_title"),
    StudentAttendanceSortField.STATUS: text_key("status"),
}


# =============================================================================
# ADMIN PAGES
# =============================================================================


def admin_users_page(ctx: DashboardContext) -> ListPage:
    return ListPage(
        ctx,
        title="users",
        query=lambda req, q: admin.use_admin_users(ctx, limit=req.limit, skip=req.skip, q=q),
        mapper=map_api_user_to_ui,
        sort_keys=USER_SORT_KEYS,
        default_sort=UserSortField.NAME,
        search_fields=("name", "email", "department"),
        filters={"role": "role_label", "status": "status"},
    )


def admin_courses_page(ctx: DashboardContext, teacher_id: str | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="courses",
        query=lambda req, q: admin.use_admin_courses(
            ctx, limit=req.limit, skip=req.skip, teacher_id=teacher_id, q=q
        ),
        mapper=lambda dto: map_api_course_to_ui(dto, ctx.config.display),
        sort_keys=COURSE_SORT_KEYS,
        default_sort=CourseSortField.TITLE,
        search_fields=("title", "description", "instructor"),
        filters={"category": "category", "status": "status", "level": "level"},
    )


def admin_students_page(ctx: DashboardContext, course_id: str | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="students",
        query=lambda req, q: admin.use_admin_students(
            ctx, limit=req.limit, skip=req.skip, course_id=course_id, q=q
        ),
        mapper=map_api_student_to_ui,
        sort_keys=STUDENT_SORT_KEYS,
        default_sort=StudentSortField.NAME,
        search_fields=("name", "email", "student_id"),
        filters={"year": "year", "section": "section", "status": "status"},
    )


def admin_teachers_page(ctx: DashboardContext, active: bool | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="teachers",
        query=lambda req, q: admin.use_admin_teachers(
            ctx, limit=req.limit, skip=req.skip, active=active, q=q
        ),
        mapper=map_api_teacher_to_ui,
        sort_keys=TEACHER_SORT_KEYS,
        default_sort=TeacherSortField.NAME,
        search_fields=("name", "email", "specialization"),
        filters={"status": "status", "specialization": "specialization"},
    )


# =============================================================================
# TEACHER PAGES
# =============================================================================


def teacher_classes_page(ctx: DashboardContext) -> ListPage:
    return ListPage(
        ctx,
        title="classes",
        query=lambda req, q: teacher.use_teacher_classes(ctx, limit=req.limit, skip=req.skip),
        mapper=map_api_class_to_ui,
        sort_keys=CLASS_SORT_KEYS,
        default_sort=ClassSortField.SUBJECT,
        search_fields=("subject", "class_code", "description"),
        filters={"status": "status"},
    )


def teacher_assignments_page(ctx: DashboardContext, course_id: str | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="assignments",
        query=lambda req, q: teacher.use_teacher_assignments(
            ctx, course_id=course_id, limit=req.limit, skip=req.skip
        ),
        mapper=map_api_assignment_to_ui,
        sort_keys=ASSIGNMENT_SORT_KEYS,
        default_sort=AssignmentSortField.DUE_DATE,
        search_fields=("title", "subject", "description"),
        filters={"status": "status", "subject": "subject"},
    )


def teacher_students_page(ctx: DashboardContext, course_id: str | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="students",
        query=lambda req, q: teacher.use_teacher_students(
            ctx, course_id=course_id, limit=req.limit, skip=req.skip
        ),
        mapper=map_api_roster_student_to_ui,
        sort_keys=ROSTER_SORT_KEYS,
        default_sort=RosterSortField.NAME,
        search_fields=("name", "email", "student_id"),
        filters={"status": "status", "year": "year"},
    )


def teacher_submissions_page(ctx: DashboardContext, assignment_id: str | None) -> ListPage:
    return ListPage(
        ctx,
        title="submissions",
        query=lambda req, q: teacher.use_teacher_submissions(ctx, assignment_id=assignment_id),
        mapper=map_api_submission_to_ui,
        sort_keys=SUBMISSION_SORT_KEYS,
        default_sort=SubmissionSortField.SUBMITTED_AT,
        search_fields=("student_name", "enrollment_no"),
        filters={"status": "status"},
    )


def teacher_attendance_page(
    ctx: DashboardContext,
    course_id: str | None = None,
    date: str | None = None,
) -> ListPage:
    return ListPage(
        ctx,
        title="attendance",
        query=lambda req, q: teacher.use_teacher_attendance(
            ctx, course_id=course_id, limit=req.limit, skip=req.skip, date=date
        ),
        mapper=map_api_attendance_to_ui,
        sort_keys=ATTENDANCE_SORT_KEYS,
        default_sort=AttendanceSortField.DATE,
        search_fields=("student_name", "course_title"),
        filters={"status": "status"},
    )


# =============================================================================
# STUDENT PAGES
# =============================================================================


def student_courses_page(ctx: DashboardContext) -> ListPage:
    return ListPage(
        ctx,
        title="courses",
        query=lambda req, q: student.use_student_courses(ctx, limit=req.limit, skip=req.skip),
        mapper=lambda dto: map_api_student_course_to_ui(dto, ctx.config.display),
        sort_keys=STUDENT_COURSE_SORT_KEYS,
        default_sort=StudentCourseSortField.TITLE,
        search_fields=("title", "code", "instructor"),
        filters={"category": "category", "status": "status"},
    )


def student_assignments_page(ctx: DashboardContext, course_id: str | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="assignments",
        query=lambda req, q: student.use_student_assignments(
            ctx, limit=req.limit, skip=req.skip, course_id=course_id
        ),
        mapper=map_api_student_assignment_to_ui,
        sort_keys=STUDENT_ASSIGNMENT_SORT_KEYS,
        default_sort=StudentAssignmentSortField.DUE_DATE,
        search_fields=("title", "course_title"),
        filters={"status": "status"},
    )


def student_attendance_page(ctx: DashboardContext, course_id: str | None = None) -> ListPage:
    return ListPage(
        ctx,
        title="attendance",
        query=lambda req, q: student.use_student_attendance_records(
            ctx, limit=req.limit, skip=req.skip, course_id=course_id
        ),
        mapper=map_api_student_attendance_to_ui,
        sort_keys=STUDENT_ATTENDANCE_SORT_KEYS,
        default_sort=StudentAttendanceSortField.DATE,
        search_fields=("course_title",),
        filters={"status": "status"},
    )


# =============================================================================
# CRUD FLOWS
# =============================================================================


def admin_users_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=admin.use_create_admin_user(ctx),
        update=admin.use_update_admin_user(ctx),
        delete=admin.use_delete_admin_user(ctx),
        create_schema=UserCreate,
        update_schema=UserUpdate,
    )


def admin_courses_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=admin.use_create_admin_course(ctx),
        update=admin.use_update_admin_course(ctx),
        delete=admin.use_delete_admin_course(ctx),
        create_schema=CourseCreate,
        update_schema=CourseUpdate,
    )


def admin_teachers_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=admin.use_create_admin_teacher(ctx),
        update=admin.use_update_admin_teacher(ctx),
        delete=admin.use_delete_admin_teacher(ctx),
        create_schema=TeacherCreate,
        update_schema=TeacherUpdate,
    )


def admin_students_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=admin.use_create_admin_student(ctx),
        update=admin.use_update_admin_student(ctx),
        delete=admin.use_delete_admin_student(ctx),
        create_schema=StudentCreate,
        update_schema=StudentUpdate,
    )


def teacher_classes_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=teacher.use_create_teacher_class(ctx),
        update=teacher.use_update_teacher_class(ctx),
        delete=teacher.use_delete_teacher_class(ctx),
        create_schema=ClassCreate,
        update_schema=ClassUpdate,
    )


def teacher_assignments_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=teacher.use_create_teacher_assignment(ctx),
        update=teacher.use_update_teacher_assignment(ctx),
        delete=teacher.use_delete_teacher_assignment(ctx),
        create_schema=AssignmentCreate,
        update_schema=AssignmentUpdate,
    )


def teacher_attendance_crud(ctx: DashboardContext) -> CrudFlow:
    return CrudFlow(
        ctx.toaster,
        create=teacher.use_create_teacher_attendance(ctx),
        update=teacher.use_update_teacher_attendance(ctx),
        delete=teacher.use_delete_teacher_attendance(ctx),
        create_schema=AttendanceUpsert,
        update_schema=AttendanceUpdate,
    )


def teacher_grading_crud(ctx: DashboardContext) -> CrudFlow:
    """Grading is the edit form of a submission."""
    return CrudFlow(
        ctx.toaster,
        update=teacher.use_grade_teacher_submission(ctx),
        update_schema=SubmissionGrade,
    )


def student_submissions_crud(ctx: DashboardContext) -> CrudFlow:
    """Submit is the create form; edit and delete target the record's submission."""
    return CrudFlow(
        ctx.toaster,
        create=student.use_submit_student_assignment(ctx),
        update=student.use_update_student_submission(ctx),
        delete=student.use_delete_student_submission(ctx),
        create_schema=SubmissionCreate,
        update_schema=SubmissionUpdate,
        delete_id=submission_id_of,
        update_id=submission_id_of,
    )


def submission_id_of(record: StudentAssignmentRecord) -> str:
    return record.submission_id


# =============================================================================
# TOGGLE STATUS
# =============================================================================


def teacher_toggle_variables(record: TeacherRecord) -> TeacherUpdate:
    return TeacherUpdate(id=record.api_id, is_active=not record.is_active)


def course_toggle_variables(record: CourseRecord) -> CourseUpdate:
    status = "Suspended" if record.status == "Active" else "Active"
    return CourseUpdate(id=record.api_id, status=status)
