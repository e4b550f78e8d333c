"""Teacher query and mutation hooks.

Keys live under ("teacher", <entity>, params).
"""

from __future__ import annotations

from typing import Any

from lms_dashboard.api.schemas import (
    AssignmentCreate,
    AssignmentUpdate,
    AttendanceUpdate,
    AttendanceUpsert,
    ClassCreate,
    ClassUpdate,
    DeletedResponse,
    LeaveRequestDecision,
    Page,
    SubmissionGrade,
    TeacherAssignment,
    TeacherAttendance,
    TeacherClass,
    TeacherDashboard,
    TeacherReports,
    TeacherStudent,
    TeacherSubmission,
)
from lms_dashboard.hooks.base import (
    DashboardContext,
    use_crud_mutation,
    use_model_query,
)
from lms_dashboard.query.client import Mutation, QueryObserver

CLASSES_KEY = ("teacher", "classes")
ATTENDANCE_KEY = ("teacher", "attendance")
ASSIGNMENTS_KEY = ("teacher", "assignments")
STUDENTS_KEY = ("teacher", "students")
SUBMISSIONS_KEY = ("teacher", "submissions")
REPORTS_KEY = ("teacher", "reports")
DASHBOARD_KEY = ("teacher", "dashboard")
LEAVE_REQUESTS_KEY = ("teacher", "leave-requests")


# =============================================================================
# CLASSES
# =============================================================================


def use_teacher_classes(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
) -> QueryObserver[Page[TeacherClass]]:
    params = {"limit": limit, "skip": skip}
    return use_model_query(ctx, CLASSES_KEY, "/api/teacher/classes", Page[TeacherClass], params)


def use_create_teacher_class(ctx: DashboardContext) -> Mutation[ClassCreate, TeacherClass]:
    async def create(data: ClassCreate) -> TeacherClass:
        payload = await ctx.api.post("/api/teacher/classes", data.to_body())
        return TeacherClass.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[CLASSES_KEY],
        success_message="Class created successfully",
        error_message="Failed to create class",
        name="create_teacher_class",
    )


def use_update_teacher_class(ctx: DashboardContext) -> Mutation[ClassUpdate, TeacherClass]:
    async def update(data: ClassUpdate) -> TeacherClass:
        payload = await ctx.api.patch(f"/api/teacher/classes/{data.id}", data.to_body())
        return TeacherClass.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[CLASSES_KEY],
        success_message="Class updated successfully",
        error_message="Failed to update class",
        name="update_teacher_class",
    )


def use_delete_teacher_class(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(class_id: str) -> DeletedResponse:
        payload = await ctx.api.delete(f"/api/teacher/classes/{class_id}")
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[CLASSES_KEY],
        success_message="Class deleted successfully",
        error_message="Failed to delete class",
        name="delete_teacher_class",
    )


# =============================================================================
# ATTENDANCE
# =============================================================================


def use_teacher_attendance(
    ctx: DashboardContext,
    course_id: str | None = None,
    limit: int | None = None,
    skip: int | None = None,
    date: str | None = None,
) -> QueryObserver[Page[TeacherAttendance]]:
    params = {"courseId": course_id, "limit": limit, "skip": skip, "date": date}
    return use_model_query(
        ctx, ATTENDANCE_KEY, "/api/teacher/attendance", Page[TeacherAttendance], params
    )


def use_create_teacher_attendance(
    ctx: DashboardContext,
) -> Mutation[AttendanceUpsert, TeacherAttendance]:
    async def create(data: AttendanceUpsert) -> TeacherAttendance:
        payload = await ctx.api.post("/api/teacher/attendance", data.to_body())
        return TeacherAttendance.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[ATTENDANCE_KEY],
        success_message="Attendance marked successfully",
        error_message="Failed to mark attendance",
        name="create_teacher_attendance",
    )


def use_update_teacher_attendance(
    ctx: DashboardContext,
) -> Mutation[AttendanceUpdate, TeacherAttendance]:
    async def update(data: AttendanceUpdate) -> TeacherAttendance:
        body = data.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
        payload = await ctx.api.patch(f"/api/teacher/attendance/{data.id}", body)
        return TeacherAttendance.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[ATTENDANCE_KEY],
        success_message="Attendance updated successfully",
        error_message="Failed to update attendance",
        name="update_teacher_attendance",
    )


def use_delete_teacher_attendance(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(attendance_id: str) -> DeletedResponse:
        payload = await ctx.api.delete(f"/api/teacher/attendance/{attendance_id}")
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[ATTENDANCE_KEY],
        success_message="Attendance deleted successfully",
        error_message="Failed to delete attendance",
        name="delete_teacher_attendance",
    )


# =============================================================================
# ASSIGNMENTS
# =============================================================================


def use_teacher_assignments(
    ctx: DashboardContext,
    course_id: str | None = None,
    limit: int | None = None,
    skip: int | None = None,
) -> QueryObserver[Page[TeacherAssignment]]:
    params = {"courseId": course_id, "limit": limit, "skip": skip}
    return use_model_query(
        ctx, ASSIGNMENTS_KEY, "/api/teacher/assignments", Page[TeacherAssignment], params
    )


def use_create_teacher_assignment(
    ctx: DashboardContext,
) -> Mutation[AssignmentCreate, TeacherAssignment]:
    async def create(data: AssignmentCreate) -> TeacherAssignment:
        payload = await ctx.api.post("/api/teacher/assignments", data.to_body())
        return TeacherAssignment.model_validate(payload)

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[ASSIGNMENTS_KEY],
        success_message="Assignment created successfully",
        error_message="Failed to create assignment",
        name="create_teacher_assignment",
    )


def use_update_teacher_assignment(
    ctx: DashboardContext,
) -> Mutation[AssignmentUpdate, TeacherAssignment]:
    async def update(data: AssignmentUpdate) -> TeacherAssignment:
        body = data.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
        payload = await ctx.api.patch(f"/api/teacher/assignments/{data.id}", body)
        return TeacherAssignment.model_validate(payload)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[ASSIGNMENTS_KEY],
        success_message="Assignment updated successfully",
        error_message="Failed to update assignment",
        name="update_teacher_assignment",
    )


def use_delete_teacher_assignment(ctx: DashboardContext) -> Mutation[str, DeletedResponse]:
    async def delete(assignment_id: str) -> DeletedResponse:
        payload = await ctx.api.delete(f"/api/teacher/assignments/{assignment_id}")
        return DeletedResponse.model_validate(payload)

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[ASSIGNMENTS_KEY],
        success_message="Assignment deleted successfully",
        error_message="Failed to delete assignment",
        name="delete_teacher_assignment",
    )


# =============================================================================
# STUDENTS / SUBMISSIONS / REPORTS
# =============================================================================


def use_teacher_students(
    ctx: DashboardContext,
    course_id: str | None = None,
    limit: int | None = None,
    skip: int | None = None,
) -> QueryObserver[Page[TeacherStudent]]:
    params = {"courseId": course_id, "limit": limit, "skip": skip}
    return use_model_query(
        ctx, STUDENTS_KEY, "/api/teacher/students", Page[TeacherStudent], params
    )


def use_teacher_submissions(
    ctx: DashboardContext,
    assignment_id: str | None = None,
) -> QueryObserver[Page[TeacherSubmission]]:
    """Submissions of one assignment; disabled until an assignment is chosen."""
    return use_model_query(
        ctx,
        SUBMISSIONS_KEY,
        "/api/teacher/submissions",
        Page[TeacherSubmission],
        {"assignmentId": assignment_id},
        enabled=bool(assignment_id),
    )


def use_grade_teacher_submission(
    ctx: DashboardContext,
) -> Mutation[SubmissionGrade, TeacherSubmission]:
    async def grade(data: SubmissionGrade) -> TeacherSubmission:
        body = data.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
        payload = await ctx.api.patch(f"/api/teacher/submissions/{data.id}", body)
        return TeacherSubmission.model_validate(payload)

    return use_crud_mutation(
        ctx,
        grade,
        invalidate=[SUBMISSIONS_KEY],
        success_message="Submission graded successfully",
        error_message="Failed to grade submission",
        name="grade_teacher_submission",
    )


def use_update_teacher_leave_request(
    ctx: DashboardContext,
) -> Mutation[LeaveRequestDecision, Any]:
    async def decide(data: LeaveRequestDecision) -> Any:
        return await ctx.api.patch(
            f"/api/teacher/leave-requests/{data.id}", {"status": data.status}
        )

    return use_crud_mutation(
        ctx,
        decide,
        invalidate=[LEAVE_REQUESTS_KEY],
        success_message=lambda v: f"Leave request {v.status.lower()} successfully",
        error_message="Failed to update leave request",
        name="update_teacher_leave_request",
    )


def use_teacher_reports(ctx: DashboardContext) -> QueryObserver[TeacherReports]:
    return use_model_query(ctx, REPORTS_KEY, "/api/teacher/reports", TeacherReports)


def use_teacher_dashboard(ctx: DashboardContext) -> QueryObserver[TeacherDashboard]:
    return use_model_query(ctx, DASHBOARD_KEY, "/api/teacher/dashboard", TeacherDashboard)
