"""Student query and mutation hooks."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from lms_dashboard.api.schemas import (
    ApiModel,
    LeaveRequestCreate,
    Page,
    StudentAssignment,
    StudentAttendanceEntry,
    StudentAttendanceSummary,
    StudentCourse,
    StudentDashboard,
    StudentReports,
    SubmissionCreate,
    SubmissionUpdate,
)
from lms_dashboard.hooks.base import (
    DashboardContext,
    use_crud_mutation,
    use_model_query,
)
from lms_dashboard.query.client import Mutation, QueryObserver

COURSES_KEY = ("student", "courses")
ASSIGNMENTS_KEY = ("student", "assignments")
SUBMISSIONS_KEY = ("student", "submissions")
ATTENDANCE_KEY = ("student", "attendance")
ATTENDANCE_RECORDS_KEY = ATTENDANCE_KEY + ("records",)
DASHBOARD_KEY = ("student", "dashboard")
REPORTS_KEY = ("student", "reports")
LEAVE_REQUESTS_KEY = ("student", "leave-requests")


class StudentAttendanceList(ApiModel):
    items: list[StudentAttendanceSummary] = Field(default_factory=list)
    total: int = 0


def use_student_courses(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
) -> QueryObserver[Page[StudentCourse]]:
    params = {"limit": limit, "skip": skip}
    return use_model_query(ctx, COURSES_KEY, "/api/student/courses", Page[StudentCourse], params)


def use_student_assignments(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
    course_id: str | None = None,
) -> QueryObserver[Page[StudentAssignment]]:
    params = {"limit": limit, "skip": skip, "courseId": course_id}
    return use_model_query(
        ctx, ASSIGNMENTS_KEY, "/api/student/assignments", Page[StudentAssignment], params
    )


def use_student_attendance(ctx: DashboardContext) -> QueryObserver[StudentAttendanceList]:
    return use_model_query(ctx, ATTENDANCE_KEY, "/api/student/attendance", StudentAttendanceList)


def use_student_attendance_records(
    ctx: DashboardContext,
    limit: int | None = None,
    skip: int | None = None,
    course_id: str | None = None,
) -> QueryObserver[Page[StudentAttendanceEntry]]:
    """Day-by-day attendance; a `limit` selects the record listing over the summary."""
    params = {"limit": limit or ctx.config.lists.page_size, "skip": skip, "courseId": course_id}
    return use_model_query(
        ctx,
        ATTENDANCE_RECORDS_KEY,
        "/api/student/attendance",
        Page[StudentAttendanceEntry],
        params,
    )


def use_student_dashboard(ctx: DashboardContext) -> QueryObserver[StudentDashboard]:
    return use_model_query(ctx, DASHBOARD_KEY, "/api/student/dashboard", StudentDashboard)


def use_student_reports(ctx: DashboardContext) -> QueryObserver[StudentReports]:
    return use_model_query(ctx, REPORTS_KEY, "/api/student/reports", StudentReports)


def use_submit_student_assignment(ctx: DashboardContext) -> Mutation[SubmissionCreate, Any]:
    async def submit(data: SubmissionCreate) -> Any:
        return await ctx.api.post("/api/student/submissions", data.to_body())

    return use_crud_mutation(
        ctx,
        submit,
        invalidate=[ASSIGNMENTS_KEY, SUBMISSIONS_KEY],
        success_message="Assignment submitted successfully",
        error_message="Failed to submit assignment",
        name="submit_student_assignment",
    )


def use_update_student_submission(ctx: DashboardContext) -> Mutation[SubmissionUpdate, Any]:
    async def update(data: SubmissionUpdate) -> Any:
        body = data.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
        return await ctx.api.patch(f"/api/student/submissions/{data.id}", body)

    return use_crud_mutation(
        ctx,
        update,
        invalidate=[ASSIGNMENTS_KEY, SUBMISSIONS_KEY],
        success_message="Submission updated successfully",
        error_message="Failed to update submission",
        name="update_student_submission",
    )


def use_delete_student_submission(ctx: DashboardContext) -> Mutation[str, Any]:
    async def delete(submission_id: str) -> Any:
        return await ctx.api.delete(f"/api/student/submissions/{submission_id}")

    return use_crud_mutation(
        ctx,
        delete,
        invalidate=[ASSIGNMENTS_KEY, SUBMISSIONS_KEY],
        success_message="Submission deleted successfully",
        error_message="Failed to delete submission",
        name="delete_student_submission",
    )


def use_create_student_leave_request(
    ctx: DashboardContext,
) -> Mutation[LeaveRequestCreate, Any]:
    async def create(data: LeaveRequestCreate) -> Any:
        return await ctx.api.post("/api/student/leave-requests", data.to_body())

    return use_crud_mutation(
        ctx,
        create,
        invalidate=[LEAVE_REQUESTS_KEY],
        success_message="Leave request submitted successfully",
        error_message="Failed to submit leave request",
        name="create_student_leave_request",
    )
