"""Tests for query and mutation hooks against the mock backend (F4)."""

import asyncio

import pytest
from pydantic import ValidationError

from lms_dashboard.api.client import ApiResponseError
from lms_dashboard.api.schemas import (
    AttendanceUpsert,
    CourseCreate,
    LeaveRequestCreate,
    LeaveRequestDecision,
    SubmissionCreate,
    SubmissionGrade,
    SubmissionUpdate,
    UserCreate,
)
from lms_dashboard.hooks import admin, student, teacher
from lms_dashboard.hooks.base import create_context
from lms_dashboard.query.client import key_matches


class TestQueryHooks:
    """Tests for query hooks."""

    @pytest.mark.asyncio
    async def test_users_keyed_under_admin_users(self, ctx):
        observer = admin.use_admin_users(ctx, limit=10)
        result = await observer.fetch()

        assert key_matches(observer.key, admin.USERS_KEY)
        assert result.data.total == 4
        assert [u.name for u in result.data.items][0] == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_zero_skip_not_sent(self, ctx, store):
        await admin.use_admin_users(ctx, limit=10, skip=0).fetch()
        await admin.use_admin_users(ctx, limit=10, skip=10).fetch()

        sent = store.requests_to("GET", "/api/admin/users")
        assert sent[0] == {"limit": "10"}
        assert sent[1] == {"limit": "10", "skip": "10"}

    @pytest.mark.asyncio
    async def test_role_param_filters_server_side(self, ctx):
        result = await admin.use_admin_users(ctx, role="TEACHER").fetch()
        assert [u.role for u in result.data.items] == ["TEACHER"]

    @pytest.mark.asyncio
    async def test_concurrent_observers_share_request(self, ctx, store):
        first = admin.use_admin_courses(ctx, limit=10)
        second = admin.use_admin_courses(ctx, limit=10)

        a, b = await asyncio.gather(first.fetch(), second.fetch())

        assert a.data.total == b.data.total == 3
        assert len(store.requests_to("GET", "/api/admin/courses")) == 1

    @pytest.mark.asyncio
    async def test_different_params_are_different_queries(self, ctx, store):
        await admin.use_admin_courses(ctx, limit=10).fetch()
        await admin.use_admin_courses(ctx, limit=10, teacher_id="tch_0005").fetch()
        assert len(store.requests_to("GET", "/api/admin/courses")) == 2

    @pytest.mark.asyncio
    async def test_disabled_submissions_query_sends_nothing(self, ctx, store):
        result = await teacher.use_teacher_submissions(ctx).fetch()

        assert result.data is None
        assert not result.is_loading
        assert store.requests_to("GET", "/api/teacher/submissions") == []

    @pytest.mark.asyncio
    async def test_submissions_for_assignment(self, ctx):
        result = await teacher.use_teacher_submissions(ctx, assignment_id="asg_0011").fetch()
        assert [s.id for s in result.data.items] == ["sub_0013"]

    @pytest.mark.asyncio
    async def test_server_error_captured_on_result(self, ctx, store):
        store.fail("GET", "/api/admin/reports")
        result = await admin.use_admin_reports(ctx).fetch()

        assert result.is_error
        assert str(result.error) == "Internal server error"

    @pytest.mark.asyncio
    async def test_reports(self, ctx):
        reports = (await admin.use_admin_reports(ctx).fetch()).data
        assert reports.totals.courses == 3
        roles = {r.role: r.count for r in reports.users_by_role}
        assert roles == {"ADMIN": 1, "TEACHER": 1, "STUDENT": 2}

        attendance = (await admin.use_admin_attendance_report(ctx).fetch()).data
        assert attendance.overall_attendance_percentage == 50
        assert attendance.course_stats[0].course_name == "Algebra"


class TestMutationHooks:
    """Tests for mutation hooks: invalidation and toasts."""

    @pytest.mark.asyncio
    async def test_create_course_invalidates_and_toasts(self, ctx):
        observer = admin.use_admin_courses(ctx, limit=10)
        await observer.fetch()

        mutation = admin.use_create_admin_course(ctx)
        await mutation.mutate_async(CourseCreate(title="Databases", code="DB101"))
        await ctx.queries.wait_for_background()

        assert observer.result.data.total == 4
        assert ctx.toaster.last.description == "Course created successfully"
        assert not ctx.toaster.last.is_error

    @pytest.mark.asyncio
    async def test_unobserved_query_refetches_on_next_read(self, ctx, store):
        observer = admin.use_admin_courses(ctx, limit=10)
        await observer.fetch()
        observer.unsubscribe()

        await admin.use_create_admin_course(ctx).mutate_async(
            CourseCreate(title="Databases", code="DB101")
        )
        await ctx.queries.wait_for_background()
        assert len(store.requests_to("GET", "/api/admin/courses")) == 1

        result = await admin.use_admin_courses(ctx, limit=10).fetch()
        assert result.data.total == 4
        assert len(store.requests_to("GET", "/api/admin/courses")) == 2

    @pytest.mark.asyncio
    async def test_duplicate_email_toast(self, ctx):
        mutation = admin.use_create_admin_user(ctx)
        data = UserCreate(
            name="Ada Again", email="ada@example.com", password="secret1", role="ADMIN"
        )

        with pytest.raises(ApiResponseError) as exc_info:
            await mutation.mutate_async(data)

        assert exc_info.value.status == 409
        toast = ctx.toaster.last
        assert toast.title == "Email Already Exists"
        assert toast.is_error
        assert toast.duration == 5000

    @pytest.mark.asyncio
    async def test_create_student_user_refreshes_students(self, ctx):
        students = admin.use_admin_students(ctx, limit=10)
        await students.fetch()

        await admin.use_create_admin_user(ctx).mutate_async(
            UserCreate(name="Barbara Liskov", email="barbara@example.com",
                       password="secret1", role="STUDENT")
        )
        await ctx.queries.wait_for_background()

        assert students.result.data.total == 3

    @pytest.mark.asyncio
    async def test_swallowed_failure_still_toasts(self, ctx, store):
        store.fail("POST", "/api/admin/courses")
        mutation = admin.use_create_admin_course(ctx)

        assert await mutation.mutate(CourseCreate(title="Databases", code="DB101")) is None
        assert ctx.toaster.last.description == "Internal server error"
        assert ctx.toaster.last.title == "Error"

    @pytest.mark.asyncio
    async def test_leave_request_decision(self, ctx, store):
        mutation = admin.use_update_admin_leave_request(ctx)
        await mutation.mutate_async(LeaveRequestDecision(id="lvr_0016", status="APPROVED"))

        assert store.leave_requests["lvr_0016"]["status"] == "APPROVED"
        assert ctx.toaster.last.description == "Leave request approved successfully"

    @pytest.mark.asyncio
    async def test_grade_submission(self, ctx, store):
        submissions = teacher.use_teacher_submissions(ctx, assignment_id="asg_0011")
        await submissions.fetch()

        mutation = teacher.use_grade_teacher_submission(ctx)
        await mutation.mutate_async(SubmissionGrade(id="sub_0013", grade=90, feedback="Good"))
        await ctx.queries.wait_for_background()

        assert store.submissions["sub_0013"]["grade"] == 90
        assert submissions.result.data.items[0].status == "GRADED"

    @pytest.mark.asyncio
    async def test_student_submit_refreshes_assignments(self, ctx):
        assignments = student.use_student_assignments(ctx)
        await assignments.fetch()

        await student.use_submit_student_assignment(ctx).mutate_async(
            SubmissionCreate(assignment_id="asg_0012", content="Late, sorry")
        )
        await ctx.queries.wait_for_background()

        lab = next(a for a in assignments.result.data.items if a.id == "asg_0012")
        assert len(lab.submissions) == 1

    @pytest.mark.asyncio
    async def test_update_student_submission(self, ctx, store):
        assignments = student.use_student_assignments(ctx)
        await assignments.fetch()

        await student.use_update_student_submission(ctx).mutate_async(
            SubmissionUpdate(id="sub_0013", content="Revised answer")
        )
        await ctx.queries.wait_for_background()

        assert store.requests_to("PATCH", "/api/student/submissions/sub_0013") == [{}]
        assert store.submissions["sub_0013"]["content"] == "Revised answer"
        assert ctx.toaster.last.description == "Submission updated successfully"
        assert len(store.requests_to("GET", "/api/student/assignments")) == 2

    @pytest.mark.asyncio
    async def test_admin_attendance_upsert_refreshes_report(self, ctx, store):
        report = admin.use_admin_attendance_report(ctx)
        assert (await report.fetch()).data.overall_attendance_percentage == 50

        await admin.use_upsert_admin_attendance(ctx).mutate_async(
            AttendanceUpsert(
                student_id="stu_0007",
                course_id="crs_0008",
                date="2024-03-01T00:00:00.000Z",
                status="PRESENT",
            )
        )
        await ctx.queries.wait_for_background()

        assert len(store.attendance) == 2
        assert report.result.data.overall_attendance_percentage == 100
        assert ctx.toaster.last.description == "Attendance updated successfully"


def leave_request(**overrides) -> LeaveRequestCreate:
    values = {
        "type": "SICK",
        "from_date": "2024-04-01",
        "to_date": "2024-04-02",
        "reason": "Doctor appointment",
        **overrides,
    }
    return LeaveRequestCreate(**values)


class TestStudentHooks:
    """Tests for the student dashboard, reports, attendance and leave hooks."""

    @pytest.mark.asyncio
    async def test_dashboard(self, ctx):
        data = (await student.use_student_dashboard(ctx).fetch()).data

        assert data.stats.total_courses == 1
        assert data.stats.total_assignments == 1
        assert data.stats.completed_assignments == 0
        assert data.stats.attendance_percentage == 100
        assert [a.title for a in data.upcoming_assignments] == ["Homework 1"]
        assert data.course_progress[0].course == "Algebra"

    @pytest.mark.asyncio
    async def test_reports(self, ctx):
        data = (await student.use_student_reports(ctx).fetch()).data

        assert data.reports[0].semester == 3
        assert data.attendance_rate == 100
        assert data.average_grade is None

    @pytest.mark.asyncio
    async def test_attendance_records_keyed_apart_from_summary(self, ctx, store):
        summary = await student.use_student_attendance(ctx).fetch()
        records = student.use_student_attendance_records(ctx, course_id="crs_0008")
        result = await records.fetch()

        assert summary.data.items[0].percentage == 100
        assert [r.status for r in result.data.items] == ["PRESENT"]
        assert result.data.items[0].course.title == "Algebra"
        assert key_matches(records.key, student.ATTENDANCE_KEY)
        sent = store.requests_to("GET", "/api/student/attendance")
        assert sent == [{}, {"limit": "10", "courseId": "crs_0008"}]

    @pytest.mark.asyncio
    async def test_create_leave_request(self, ctx, store):
        mutation = student.use_create_student_leave_request(ctx)
        data = leave_request()

        created = await mutation.mutate_async(data)

        assert store.leave_requests[created["id"]]["status"] == "PENDING"
        assert store.leave_requests[created["id"]]["fromDate"] == "2024-04-01"
        assert ctx.toaster.last.description == "Leave request submitted successfully"

    @pytest.mark.asyncio
    async def test_overlapping_leave_request_rejected(self, ctx):
        mutation = student.use_create_student_leave_request(ctx)
        first = leave_request(type="PERSONAL", to_date="2024-04-05", reason="Family visit abroad")
        second = leave_request(from_date="2024-04-03", to_date="2024-04-04")
        await mutation.mutate_async(first)

        with pytest.raises(ApiResponseError) as exc_info:
            await mutation.mutate_async(second)

        assert exc_info.value.status == 409
        assert ctx.toaster.last.is_error
        assert ctx.toaster.last.description == "Overlapping leave request exists"

    def test_leave_request_validation(self):
        with pytest.raises(ValidationError):
            leave_request(reason="ill")
        with pytest.raises(ValidationError, match="From date must be on or before to date"):
            leave_request(from_date="2024-04-05")
        with pytest.raises(ValidationError):
            leave_request(type="HOLIDAY")


class TestContext:
    @pytest.mark.asyncio
    async def test_aclose_closes_http_client(self, app_config, transport):
        context = create_context(config=app_config, transport=transport)
        await context.aclose()
        assert context.api._client.is_closed
