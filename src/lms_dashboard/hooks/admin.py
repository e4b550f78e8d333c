"""Admin query and mutation hooks.

Query hooks return a QueryObserver keyed under ("admin", <entity>, params).
Mutation hooks invalidate the entity's key prefix and toast the outcome.
"""

from __future__ import annotations

from typing import Any

from lms_dashboard.api.schemas import (
    AdminAttendanceReport,
    AdminCourse,
    AdminGradesReport,
    AdminReports,
    AdminStudent,
    AdminTeacher,
    AdminUser,
    AttendanceUpsert,
    CourseCreate,
    CourseUpdate,
    DeletedResponse,
    LeaveRequestDecision,
    Page,
    StudentCreate,
    StudentUpdate,
    TeacherCreate,
    TeacherUpdate,
    UserCreate,
    UserUpdate,
)
from lms_dashboard.hooks.base import (
    DashboardContext,
    use_crud_mutation,
    use_model_query,
)
from lms_dashboard.query.client import Mutation, QueryObserver

USERS_KEY = ("admin", "users")
COURSES_KEY = ("admin", "courses")
TEACHERS_KEY = ("admin", "teachers")
STUDENTS_KEY = ("admin", "students")
REPORTS_KEY = ("admin", "reports")
ATTENDANCE_KEY = ("admin", "attendance")
LEAVE_REQUESTS_KEY = ("admin", "leave-requests")


# =============================================================================
# USERS
# =============================================================================


def use_admin_users(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
    role: str | None = None,
    q: str | None = None,
) -> QueryObserver[Page[AdminUser]]:
    params = {"limit": limit, "skip": skip, "role": role, "q": q}
    return use_model_query(ctx, USERS_KEY, "/api/admin/users", Page[AdminUser], params)


def describe_user_error(error: Exception) -> tuple[str, str]:
    """Toast (title, description) for a failed user creation."""
    message = str(error) or "Failed to create user"
    if "Email already exists" in message:
        return (
            "Email Already Exists",
            "A user with this email already exists. Please use a different email address.",
        )
    if "duplicate" in message or "unique" in message:
        return ("Duplicate Entry", message)
    return ("Error", message)


def _role_keys(data: UserCreate) -> list[tuple[str, str]]:
    """Role-specific lists that change when a user is created."""
    if data.role == "STUDENT":
        return [STUDENTS_KEY]
    if data.role == "TEACHER":
        return [TEACHERS_KEY]
    return []


def use_create_admin_user(ctx: DashboardContext) -> Mutation[UserCreate, AdminUser]:
    async def create(data: UserCreate) -> AdminUser:
        payload = await ctx.api.post("/api/admin/users", data.to_body())
        return AdminUser.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[USERS_KEY],
        success_message="User created successfully",
        error_message="Failed to create user",
        name="create_admin_user",
        describe_error=describe_user_error,
        invalidate_for=_role_keys,
    )


def use_update_admin_user(ctx: DashboardContext) -> Mutation[UserUpdate, AdminUser]:
    async def update(data: UserUpdate) -> AdminUser:
        payload = await ctx.api.put("/api/admin/users", data.to_body())
        return AdminUser.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[USERS_KEY],
        success_message="User updated successfully",
        error_message="Failed to update user",
        name="update_admin_user",
    )


def use_delete_admin_user(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(user_id: str) -> DeletedResponse:
        payload = await ctx.api.delete("/api/admin/users", params={"id": user_id})
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[USERS_KEY],
        success_message="User deleted successfully",
        error_message="Failed to delete user",
        name="delete_admin_user",
    )


# =============================================================================
# COURSES
# =============================================================================


def use_admin_courses(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
    teacher_id: str | None = None,
    q: str | None = None,
) -> QueryObserver[Page[AdminCourse]]:
    params = {"limit": limit, "skip": skip, "teacherId": teacher_id, "q": q}
    return use_model_query(ctx, COURSES_KEY, "/api/admin/courses", Page[AdminCourse], params)


def use_create_admin_course(ctx: DashboardContext) -> Mutation[CourseCreate, AdminCourse]:
    async def create(data: CourseCreate) -> AdminCourse:
        payload = await ctx.api.post("/api/admin/courses", data.to_body())
        return AdminCourse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[COURSES_KEY],
        success_message="Course created successfully",
        error_message="Failed to create course",
        name="create_admin_course",
    )


def use_update_admin_course(ctx: DashboardContext) -> Mutation[CourseUpdate, AdminCourse]:
    async def update(data: CourseUpdate) -> AdminCourse:
        payload = await ctx.api.patch(f"/api/admin/courses/{data.id}", data.to_body())
        return AdminCourse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[COURSES_KEY],
        success_message="Course updated successfully",
        error_message="Failed to update course",
        name="update_admin_course",
    )


def use_delete_admin_course(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(course_id: str) -> DeletedResponse:
        payload = await ctx.api.delete(f"/api/admin/courses/{course_id}")
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[COURSES_KEY],
        success_message="Course deleted successfully",
        error_message="Failed to delete course",
        name="delete_admin_course",
    )


# =============================================================================
# TEACHERS
# =============================================================================


def use_admin_teachers(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
    active: bool | None = None,
    q: str | None = None,
) -> QueryObserver[Page[AdminTeacher]]:
    params = {"limit": limit, "skip": skip, "active": active, "q": q}
    return use_model_query(ctx, TEACHERS_KEY, "/api/admin/teachers", Page[AdminTeacher], params)


def use_create_admin_teacher(ctx: DashboardContext) -> Mutation[TeacherCreate, AdminTeacher]:
    async def create(data: TeacherCreate) -> AdminTeacher:
        payload = await ctx.api.post("/api/admin/teachers", data.to_body())
        return AdminTeacher.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[TEACHERS_KEY],
        success_message="Teacher created successfully",
        error_message="Failed to create teacher",
        name="create_admin_teacher",
    )


def use_update_admin_teacher(ctx: DashboardContext) -> Mutation[TeacherUpdate, AdminTeacher]:
    async def update(data: TeacherUpdate) -> AdminTeacher:
        payload = await ctx.api.put("/api/admin/teachers", data.to_body())
        return AdminTeacher.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[TEACHERS_KEY],
        success_message="Teacher updated successfully",
        error_message="Failed to update teacher",
        name="update_admin_teacher",
    )


def use_delete_admin_teacher(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(teacher_id: str) -> DeletedResponse:
        payload = await ctx.api.delete("/api/admin/teachers", params={"id": teacher_id})
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[TEACHERS_KEY],
        success_message="Teacher deleted successfully",
        error_message="Failed to delete teacher",
        name="delete_admin_teacher",
    )


# =============================================================================
# STUDENTS
# =============================================================================


def use_admin_students(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
    course_id: str | None = None,
    q: str | None = None,
) -> QueryObserver[Page[AdminStudent]]:
    params = {"limit": limit, "skip": skip, "courseId": course_id, "q": q}
    return use_model_query(ctx, STUDENTS_KEY, "/api/admin/students", Page[AdminStudent], params)


def use_create_admin_student(ctx: DashboardContext) -> Mutation[StudentCreate, AdminStudent]:
    async def create(data: StudentCreate) -> AdminStudent:
        payload = await ctx.api.post("/api/admin/students", data.to_body())
        return AdminStudent.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[STUDENTS_KEY],
        success_message="Student created successfully",
        error_message="Failed to create student",
        name="create_admin_student",
    )


def use_update_admin_student(ctx: DashboardContext) -> Mutation[StudentUpdate, AdminStudent]:
    async def update(data: StudentUpdate) -> AdminStudent:
        payload = await ctx.api.put("/api/admin/students", data.to_body())
        return AdminStudent.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[STUDENTS_KEY],
        success_message="Student updated successfully",
        error_message="Failed to update student",
        name="update_admin_student",
    )


def use_delete_admin_student(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(student_id: str) -> DeletedResponse:
        payload = await ctx.api.delete("/api/admin/students", params={"id": student_id})
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[STUDENTS_KEY],
        success_message="Student deleted successfully",
        error_message="Failed to delete student",
        name="delete_admin_student",
    )


# =============================================================================
# ATTENDANCE / LEAVE REQUESTS
# =============================================================================


def use_upsert_admin_attendance(ctx: DashboardContext) -> Mutation[AttendanceUpsert, Any]:
    async def upsert(data: AttendanceUpsert) -> Any:
        return await ctx.api.post("/api/admin/attendance", data.to_body())

    return use_crud_mutation(
        ctx,
        upsert,
        invalidate=[ATTENDANCE_KEY, REPORTS_KEY + ("attendance",)],
        success_message="Attendance updated successfully",
        error_message="Failed to update attendance",
        name="upsert_admin_attendance",
    )


def use_update_admin_leave_request(
    ctx: DashboardContext,
) -> Mutation[LeaveRequestDecision, Any]:
    async def decide(data: LeaveRequestDecision) -> Any:
        return await ctx.api.patch(
            f"/api/admin/leave-requests/{data.id}", {"status": data.status}
        )

    return use_crud_mutation(
        ctx,
        decide,
        invalidate=[LEAVE_REQUESTS_KEY],
        success_message=lambda v: f"Leave request {v.status.lower()} successfully",
        error_message="Failed to update leave request",
        name="update_admin_leave_request",
    )


# =============================================================================
# REPORTS
# =============================================================================


def use_admin_reports(ctx: DashboardContext) -> QueryObserver[AdminReports]:
    return use_model_query(ctx, REPORTS_KEY, "/api/admin/reports", AdminReports)


def use_admin_attendance_report(
    ctx: DashboardContext,
    course_id: str | None = None,
    student_id: str | None = None,
) -> QueryObserver[AdminAttendanceReport]:
    params = {"courseId": course_id, "studentId": student_id}
    return use_model_query(
        ctx,
        REPORTS_KEY + ("attendance",),
        "/api/reports/admin/attendance",
        AdminAttendanceReport,
        params,
    )


def use_admin_grades_report(ctx: DashboardContext) -> QueryObserver[AdminGradesReport]:
    return use_model_query(
        ctx, REPORTS_KEY + ("grades",), "/api/reports/admin/grades", AdminGradesReport
    )
