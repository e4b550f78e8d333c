"""CLI commands for the LMS dashboard.

Commands:
- list: Paginated, filtered, sorted list of an entity
- report: Admin/teacher/student report summaries
- create / update / delete: Modal CRUD flows (delete asks for confirmation)
- toggle: Flip a teacher's or course's status
- grade: Grade a submission
- submit: Submit an assignment as a student
- leave: Approve or reject a leave request
- request-leave: Ask for leave as a student
- mark: Mark attendance as a teacher or admin
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lms_dashboard.api.client import ApiError
from lms_dashboard.api.schemas import (
    AttendanceUpsert,
    LeaveRequestCreate,
    LeaveRequestDecision,
    SubmissionCreate,
)
from lms_dashboard.hooks import admin, student, teacher
from lms_dashboard.hooks.base import DashboardContext, create_context
from lms_dashboard.query.toast import Toast
from lms_dashboard.utils.validators import (
    AmbiguousRecordIdError,
    RecordNotFoundError,
    find_record,
)
from lms_dashboard.views import pages
from lms_dashboard.views.badges import (
    badge,
    level_style,
    role_style,
    status_style,
    year_style,
)
from lms_dashboard.views.crud import (
    CrudError,
    CrudFlow,
    FormValidationError,
    format_validation_errors,
    toggle_status,
)
from lms_dashboard.views.listing import SortState
from lms_dashboard.views.page import ListPage
from lms_dashboard.views.roles import Role

app = typer.Typer(
    name="lms",
    help="Role-based LMS dashboard: courses, users, classes, assignments and reports.",
    no_args_is_help=True,
)

console = Console()


class Entity(str, Enum):
    USERS = "users"
    COURSES = "courses"
    STUDENTS = "students"
    TEACHERS = "teachers"
    CLASSES = "classes"
    ASSIGNMENTS = "assignments"
    ROSTER = "roster"
    SUBMISSIONS = "submissions"
    ATTENDANCE = "attendance"
    MY_COURSES = "my-courses"
    MY_ASSIGNMENTS = "my-assignments"
    MY_ATTENDANCE = "my-attendance"


class Report(str, Enum):
    ADMIN = "admin"
    ATTENDANCE = "attendance"
    GRADES = "grades"
    TEACHER = "teacher"
    DASHBOARD = "dashboard"
    MY_ATTENDANCE = "my-attendance"
    MY_DASHBOARD = "my-dashboard"
    MY_REPORTS = "my-reports"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class Scope(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"


def _get_transport() -> httpx.AsyncBaseTransport | None:
    """HTTP transport for the API client (None = network)."""
    return None


def _print_toast(toast: Toast) -> None:
    style = "red" if toast.is_error else "green"
    icon = "✗" if toast.is_error else "✓"
    console.print(
        f"[{style}]{icon} {escape(toast.title)}:[/{style}] {escape(toast.description)}"
    )


def _fail(message: str) -> None:
    console.print(f"[red]✗ {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _run(body: Callable[[DashboardContext], Awaitable[None]]) -> None:
    """Run an async command body with a fresh dashboard context."""

    async def main() -> None:
        ctx = create_context(transport=_get_transport(), on_toast=_print_toast)
        try:
            await body(ctx)
            await ctx.queries.wait_for_background()
        finally:
            await ctx.aclose()

    try:
        asyncio.run(main())
    except ValidationError as e:
        _fail("Validation Error: " + "; ".join(format_validation_errors(e)))
    except (ApiError, CrudError, RecordNotFoundError, AmbiguousRecordIdError, ValueError) as e:
        _fail(str(e))


def _parse_fields(fields: list[str]) -> dict[str, Any]:
    """Parse repeated `-f key=value` options into form values."""
    values: dict[str, Any] = {}
    for item in fields:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        name = name.strip().replace("-", "_")
        if name == "role":
            try:
                value = Role.parse(value).api_code
            except ValueError as e:
                _fail(str(e))
        values[name] = value
    return values


def _truncate(text: str, max_len: int = 40) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# ENTITY REGISTRY
# =============================================================================


Column = tuple[str, Callable[[Any], str]]


@dataclass
class EntityView:
    """How one entity is listed, rendered and edited from the CLI."""

    page: Callable[[DashboardContext, dict[str, str | None]], ListPage]
    columns: list[Column]
    crud: Callable[[DashboardContext], CrudFlow] | None = None
    toggle: Callable[[DashboardContext], tuple[Any, Callable[[Any], Any]]] | None = None


def _short_id(row: Any) -> str:
    return row.api_id[:8]


def _percent(value: float) -> str:
    return f"{value:.0f}%"


ENTITIES: dict[Entity, EntityView] = {
    Entity.USERS: EntityView(
        page=lambda ctx, scope: pages.admin_users_page(ctx),
        columns=[
            ("ID", _short_id),
            ("Name", lambda r: f"{r.avatar}  {r.name}"),
            ("Email", lambda r: r.email),
            ("Role", lambda r: badge(r.role_label, role_style(r.role_label))),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.admin_users_crud,
    ),
    Entity.COURSES: EntityView(
        page=lambda ctx, scope: pages.admin_courses_page(ctx, teacher_id=scope.get("teacher_id")),
        columns=[
            ("ID", _short_id),
            ("Title", lambda r: r.title),
            ("Code", lambda r: r.code),
            ("Instructor", lambda r: r.instructor),
            ("Category", lambda r: r.category),
            ("Level", lambda r: badge(r.level, level_style(r.level))),
            ("Price", lambda r: f"${r.price:.2f}"),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.admin_courses_crud,
        toggle=lambda ctx: (admin.use_update_admin_course(ctx), pages.course_toggle_variables),
    ),
    Entity.STUDENTS: EntityView(
        page=lambda ctx, scope: pages.admin_students_page(ctx, course_id=scope.get("course_id")),
        columns=[
            ("ID", _short_id),
            ("Name", lambda r: f"{r.avatar}  {r.name}"),
            ("Student ID", lambda r: r.student_id),
            ("Year", lambda r: badge(r.year, year_style(r.year))),
            ("Section", lambda r: r.section),
            ("Progress", lambda r: _percent(r.progress)),
        ],
        crud=pages.admin_students_crud,
    ),
    Entity.TEACHERS: EntityView(
        page=lambda ctx, scope: pages.admin_teachers_page(ctx),
        columns=[
            ("ID", _short_id),
            ("Name", lambda r: f"{r.avatar}  {r.name}"),
            ("Email", lambda r: r.email),
            ("Specialization", lambda r: r.specialization),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.admin_teachers_crud,
        toggle=lambda ctx: (admin.use_update_admin_teacher(ctx), pages.teacher_toggle_variables),
    ),
    Entity.CLASSES: EntityView(
        page=lambda ctx, scope: pages.teacher_classes_page(ctx),
        columns=[
            ("ID", _short_id),
            ("Subject", lambda r: r.subject),
            ("Code", lambda r: r.class_code),
            ("Students", lambda r: str(r.total_students)),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.teacher_classes_crud,
    ),
    Entity.ASSIGNMENTS: EntityView(
        page=lambda ctx, scope: pages.teacher_assignments_page(
            ctx, course_id=scope.get("course_id")
        ),
        columns=[
            ("ID", _short_id),
            ("Title", lambda r: r.title),
            ("Subject", lambda r: r.subject),
            ("Due", lambda r: r.due_date[:10]),
            ("Submissions", lambda r: str(r.submissions)),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.teacher_assignments_crud,
    ),
    Entity.ROSTER: EntityView(
        page=lambda ctx, scope: pages.teacher_students_page(ctx, course_id=scope.get("course_id")),
        columns=[
            ("ID", _short_id),
            ("Name", lambda r: f"{r.avatar}  {r.name}"),
            ("Student ID", lambda r: r.student_id),
            ("Year", lambda r: badge(r.year, year_style(r.year))),
            ("Attendance", lambda r: _percent(r.attendance)),
            ("Avg grade", lambda r: f"{r.average_grade:.1f}"),
        ],
    ),
    Entity.SUBMISSIONS: EntityView(
        page=lambda ctx, scope: pages.teacher_submissions_page(
            ctx, assignment_id=scope.get("assignment_id")
        ),
        columns=[
            ("ID", _short_id),
            ("Student", lambda r: r.student_name),
            ("Enrollment", lambda r: r.enrollment_no),
            ("Submitted", lambda r: r.submitted_at[:10]),
            ("Grade", lambda r: f"{r.grade:.0f}" if r.is_graded else "-"),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.teacher_grading_crud,
    ),
    Entity.ATTENDANCE: EntityView(
        page=lambda ctx, scope: pages.teacher_attendance_page(
            ctx, course_id=scope.get("course_id"), date=scope.get("date")
        ),
        columns=[
            ("ID", _short_id),
            ("Date", lambda r: r.date[:10]),
            ("Student", lambda r: r.student_name),
            ("Course", lambda r: r.course_title),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.teacher_attendance_crud,
    ),
    Entity.MY_COURSES: EntityView(
        page=lambda ctx, scope: pages.student_courses_page(ctx),
        columns=[
            ("ID", _short_id),
            ("Title", lambda r: r.title),
            ("Instructor", lambda r: r.instructor),
            ("Level", lambda r: badge(r.level, level_style(r.level))),
            ("Progress", lambda r: _percent(r.progress)),
        ],
    ),
    Entity.MY_ASSIGNMENTS: EntityView(
        page=lambda ctx, scope: pages.student_assignments_page(
            ctx, course_id=scope.get("course_id")
        ),
        columns=[
            ("ID", _short_id),
            ("Title", lambda r: r.title),
            ("Course", lambda r: r.course_title),
            ("Due", lambda r: r.due_date[:10]),
            ("Points", lambda r: str(r.points)),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
        crud=pages.student_submissions_crud,
    ),
    Entity.MY_ATTENDANCE: EntityView(
        page=lambda ctx, scope: pages.student_attendance_page(
            ctx, course_id=scope.get("course_id")
        ),
        columns=[
            ("ID", _short_id),
            ("Date", lambda r: r.date[:10]),
            ("Course", lambda r: r.course_title),
            ("Status", lambda r: badge(r.status, status_style(r.status))),
        ],
    ),
}


def _entity_crud(entity: Entity, ctx: DashboardContext) -> CrudFlow:
    view = ENTITIES[entity]
    if view.crud is None:
        raise CrudError(f"{entity.value} cannot be modified from the CLI")
    return view.crud(ctx)


async def _find(
    ctx: DashboardContext,
    entity: Entity,
    id_prefix: str,
    scope: dict[str, str | None],
) -> Any:
    """Load up to max_limit rows of an entity and resolve an id prefix."""
    page = ENTITIES[entity].page(ctx, scope)
    page.page_size = ctx.config.lists.max_limit
    view = await page.load()
    page.close()
    if view.error_message:
        raise ApiError(view.error_message)
    return find_record(id_prefix, view.rows)


def _render_table(title: str, columns: list[Column], rows: list[Any]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    for header, _ in columns:
        table.add_column(header)
    for row in rows:
        table.add_row(*(render(row) for _, render in columns))
    return table


# =============================================================================
# LIST
# =============================================================================


@app.command(name="list")
def list_records(
    entity: Entity = typer.Argument(..., help="What to list"),
    search: str | None = typer.Option(None, "--search", "-s", help="Search text"),
    status: str | None = typer.Option(None, "--status", help="Status filter (e.g. Active)"),
    category: str | None = typer.Option(None, "--category", help="Category filter"),
    role: str | None = typer.Option(None, "--role", help="Role filter (Admin, Teacher, Student)"),
    year: str | None = typer.Option(None, "--year", help="Year filter (Freshman...Senior)"),
    level: str | None = typer.Option(None, "--level", help="Level filter"),
    sort: str | None = typer.Option(None, "--sort", help="Sort field"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    page_index: int = typer.Option(1, "--page", "-p", min=1, help="Page number (1-based)"),
    course_id: str | None = typer.Option(None, "--course", help="Course id scope"),
    assignment_id: str | None = typer.Option(None, "--assignment", help="Assignment id scope"),
    teacher_id: str | None = typer.Option(None, "--teacher", help="Teacher id scope"),
    date: str | None = typer.Option(None, "--date", help="Attendance date (YYYY-MM-DD)"),
) -> None:
    """List records with search, filters, sorting and pagination."""
    view_def = ENTITIES[entity]
    scope = {
        "course_id": course_id,
        "assignment_id": assignment_id,
        "teacher_id": teacher_id,
        "date": date,
    }
    filters = {
        "status": status,
        "category": category,
        "role": role,
        "year": year,
        "level": level,
    }

    async def body(ctx: DashboardContext) -> None:
        page = view_def.page(ctx, scope)
        if search:
            page.apply_search(search)
        for name, value in filters.items():
            if value is not None:
                page.set_filter(name, value)
        if sort is not None:
            choices = {f.value: f for f in page.sort_keys}
            if sort not in choices:
                raise ValueError(
                    f"Cannot sort {entity.value} by '{sort}'. Choices: {', '.join(choices)}"
                )
            page.sort = SortState(choices[sort], "desc" if desc else "asc")
        elif desc:
            page.sort.direction = "desc"
        page.go_to(page_index - 1)

        view = await page.load()
        page.close()

        if view.error_message:
            _fail(view.error_message)
        if not view.rows:
            console.print(f"[yellow]No {entity.value} found.[/yellow]")
        else:
            console.print(_render_table(entity.value.title(), view_def.columns, view.rows))
        console.print(
            f"[dim]{view.summary.text} · page {view.page + 1} of {view.total_pages}[/dim]"
        )

    _run(body)


# =============================================================================
# REPORTS
# =============================================================================


def _render_admin_report(data: Any) -> None:
    roles = ", ".join(f"{Role.parse(r.role, Role.STUDENT).label}: {r.count}" for r in data.users_by_role)
    header = (
        f"Users: {roles or 'none'}\n"
        f"Courses: {data.totals.courses} | Assignments: {data.totals.assignments} | "
        f"Submissions: {data.totals.submissions}\n"
        f"Average GPA: {data.avg_gpa:.2f}"
    )
    console.print(Panel(header, title="[bold]Admin report[/bold]", expand=False))

    table = Table(title="Attendance by status", show_header=True, header_style="bold")
    table.add_column("Status")
    table.add_column("Count", justify="right")
    for item in data.attendance_by_status:
        table.add_row(badge(item.status, status_style(item.status)), str(item.count))
    console.print(table)


def _render_attendance_report(data: Any) -> None:
    console.print(
        Panel(
            f"Overall attendance: {data.overall_attendance_percentage:.1f}%",
            title="[bold]Attendance report[/bold]",
            expand=False,
        )
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Course")
    table.add_column("Classes", justify="right")
    table.add_column("Present", justify="right")
    table.add_column("Absent", justify="right")
    table.add_column("Late", justify="right")
    table.add_column("%", justify="right")
    for stat in data.course_stats:
        table.add_row(
            f"{stat.course_code} {stat.course_name}".strip(),
            str(stat.total_classes),
            str(stat.present),
            str(stat.absent),
            str(stat.late),
            f"{stat.attendance_percentage:.1f}",
        )
    console.print(table)


def _render_grades_report(data: Any) -> None:
    dist = data.overall.distribution
    console.print(
        Panel(
            f"Submissions: {data.overall.total_submissions} | "
            f"Average: {data.overall.average_grade:.1f}\n"
            f"A: {dist.a}  B: {dist.b}  C: {dist.c}  D: {dist.d}  F: {dist.f}",
            title="[bold]Grades report[/bold]",
            expand=False,
        )
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Course")
    table.add_column("Submissions", justify="right")
    table.add_column("Students", justify="right")
    table.add_column("Average", justify="right")
    for course in data.by_course:
        table.add_row(
            f"{course.course_code} {course.course_name}".strip(),
            str(course.total_submissions),
            str(course.unique_students),
            f"{course.average_grade:.1f}",
        )
    console.print(table)


def _render_teacher_report(data: Any) -> None:
    console.print(
        Panel(
            f"Students: {data.summary.total_students} | Courses: {data.summary.total_courses}",
            title="[bold]Teacher report[/bold]",
            expand=False,
        )
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Student")
    table.add_column("Enrollment")
    table.add_column("GPA", justify="right")
    table.add_column("Attendance", justify="right")
    table.add_column("Avg grade", justify="right")
    for s in data.students:
        table.add_row(
            s.name,
            s.enrollment_no,
            f"{s.latest_gpa:.2f}" if s.latest_gpa is not None else "-",
            f"{s.attendance_rate:.0f}%",
            f"{s.average_grade:.1f}" if s.average_grade is not None else "-",
        )
    console.print(table)


def _render_teacher_dashboard(data: Any) -> None:
    stats = data.stats
    console.print(
        Panel(
            f"Classes: {stats.total_classes} | Active students: {stats.active_students}\n"
            f"Assignments: {stats.assignments_given} | Attendance: {stats.attendance_rate:.0f}%",
            title="[bold]Dashboard[/bold]",
            expand=False,
        )
    )
    if data.upcoming_classes:
        table = Table(title="Upcoming classes", show_header=True, header_style="bold")
        table.add_column("Subject")
        table.add_column("Date")
        table.add_column("Time")
        table.add_column("Room")
        for c in data.upcoming_classes:
            table.add_row(c.subject, c.date, c.time, c.room)
        console.print(table)


def _render_my_attendance(data: Any) -> None:
    table = Table(title="My attendance", show_header=True, header_style="bold")
    table.add_column("Course")
    table.add_column("Present", justify="right")
    table.add_column("Absent", justify="right")
    table.add_column("Late", justify="right")
    table.add_column("%", justify="right")
    for item in data.items:
        title = item.course.title if item.course else item.course_id
        table.add_row(
            title, str(item.present), str(item.absent), str(item.late), f"{item.percentage:.0f}"
        )
    console.print(table)


def _render_my_dashboard(data: Any) -> None:
    stats = data.stats
    console.print(
        Panel(
            f"Courses: {stats.total_courses} | "
            f"Assignments: {stats.completed_assignments}/{stats.total_assignments} graded\n"
            f"Attendance: {stats.attendance_percentage:.0f}%",
            title="[bold]My dashboard[/bold]",
            expand=False,
        )
    )
    if data.course_progress:
        table = Table(title="Course progress", show_header=True, header_style="bold")
        table.add_column("Course")
        table.add_column("Progress", justify="right")
        table.add_column("Attendance", justify="right")
        table.add_column("Graded", justify="right")
        for item in data.course_progress:
            table.add_row(
                item.course,
                _percent(item.progress),
                _percent(item.attendance_percentage),
                f"{item.completed_assignments}/{item.total_assignments}",
            )
        console.print(table)
    if data.upcoming_assignments:
        table = Table(title="Upcoming assignments", show_header=True, header_style="bold")
        table.add_column("Title")
        table.add_column("Course")
        table.add_column("Due")
        for a in data.upcoming_assignments:
            table.add_row(a.title, a.course, a.due_date[:10])
        console.print(table)


def _render_my_reports(data: Any) -> None:
    average = f"{data.average_grade:.1f}" if data.average_grade is not None else "-"
    console.print(
        Panel(
            f"Attendance: {data.attendance_rate:.0f}% | Average grade: {average}",
            title="[bold]My reports[/bold]",
            expand=False,
        )
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Semester", justify="right")
    table.add_column("GPA", justify="right")
    table.add_column("Issued")
    for r in data.reports:
        table.add_row(str(r.semester), f"{r.gpa:.2f}", (r.created_at or "")[:10])
    console.print(table)


REPORTS: dict[Report, tuple[Callable[[DashboardContext], Any], Callable[[Any], None]]] = {
    Report.ADMIN: (admin.use_admin_reports, _render_admin_report),
    Report.ATTENDANCE: (admin.use_admin_attendance_report, _render_attendance_report),
    Report.GRADES: (admin.use_admin_grades_report, _render_grades_report),
    Report.TEACHER: (teacher.use_teacher_reports, _render_teacher_report),
    Report.DASHBOARD: (teacher.use_teacher_dashboard, _render_teacher_dashboard),
    Report.MY_ATTENDANCE: (student.use_student_attendance, _render_my_attendance),
    Report.MY_DASHBOARD: (student.use_student_dashboard, _render_my_dashboard),
    Report.MY_REPORTS: (student.use_student_reports, _render_my_reports),
}


@app.command()
def report(
    kind: Report = typer.Argument(..., help="Which report to show"),
) -> None:
    """Show a report summary."""
    use_report, render = REPORTS[kind]

    async def body(ctx: DashboardContext) -> None:
        result = await use_report(ctx).fetch()
        if result.error is not None:
            _fail(f"Failed to load {kind.value} report: {result.error}")
        render(result.data)

    _run(body)


# =============================================================================
# CRUD
# =============================================================================


async def _submit_form(flow: CrudFlow, values: dict[str, Any]) -> Any:
    try:
        return await flow.submit(values)
    except (ApiError, FormValidationError):
        # already reported by toast
        raise typer.Exit(code=1)


@app.command()
def create(
    entity: Entity = typer.Argument(..., help="What to create"),
    fields: list[str] = typer.Option([], "--field", "-f", help="Form value as key=value"),
) -> None:
    """Create a record (e.g. lms create courses -f title=Algebra -f code=MA101)."""
    values = _parse_fields(fields)

    async def body(ctx: DashboardContext) -> None:
        flow = _entity_crud(entity, ctx)
        flow.open_create()
        created = await _submit_form(flow, values)
        created_id = getattr(created, "id", None)
        if created_id:
            console.print(f"  [dim]id:[/dim] {created_id}")

    _run(body)


@app.command()
def update(
    entity: Entity = typer.Argument(..., help="What to update"),
    id_prefix: str = typer.Argument(..., help="Record id (or unique prefix)"),
    fields: list[str] = typer.Option([], "--field", "-f", help="Form value as key=value"),
    course_id: str | None = typer.Option(None, "--course", help="Course id scope"),
    assignment_id: str | None = typer.Option(None, "--assignment", help="Assignment id scope"),
) -> None:
    """Update a record through its edit form."""
    values = _parse_fields(fields)
    scope = {"course_id": course_id, "assignment_id": assignment_id}

    async def body(ctx: DashboardContext) -> None:
        flow = _entity_crud(entity, ctx)
        record = await _find(ctx, entity, id_prefix, scope)
        flow.open_edit(record)
        await _submit_form(flow, values)

    _run(body)


@app.command()
def delete(
    entity: Entity = typer.Argument(..., help="What to delete"),
    id_prefix: str = typer.Argument(..., help="Record id (or unique prefix)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    course_id: str | None = typer.Option(None, "--course", help="Course id scope"),
    assignment_id: str | None = typer.Option(None, "--assignment", help="Assignment id scope"),
) -> None:
    """Delete a record after confirmation."""
    scope = {"course_id": course_id, "assignment_id": assignment_id}

    async def body(ctx: DashboardContext) -> None:
        flow = _entity_crud(entity, ctx)
        record = await _find(ctx, entity, id_prefix, scope)
        flow.request_delete(record)

        label = getattr(record, "name", None) or getattr(record, "title", None) or record.api_id
        if not yes and not typer.confirm(f"Delete {entity.value.rstrip('s')} '{label}'?"):
            flow.cancel()
            console.print("[yellow]Cancelled.[/yellow]")
            return

        try:
            await flow.confirm_delete()
        except ApiError:
            # already reported by toast
            raise typer.Exit(code=1)

    _run(body)


@app.command()
def toggle(
    entity: Entity = typer.Argument(..., help="teachers or courses"),
    id_prefix: str = typer.Argument(..., help="Record id (or unique prefix)"),
) -> None:
    """Toggle a teacher's active flag or a course's Active/Suspended status."""
    view_def = ENTITIES[entity]
    if view_def.toggle is None:
        _fail(f"{entity.value} have no status toggle")

    async def body(ctx: DashboardContext) -> None:
        mutation, build_variables = view_def.toggle(ctx)  # type: ignore[misc]
        record = await _find(ctx, entity, id_prefix, {})
        try:
            await toggle_status(mutation, record, build_variables)
        except ApiError:
            # already reported by toast
            raise typer.Exit(code=1)

    _run(body)


# =============================================================================
# SHORTCUTS
# =============================================================================


@app.command()
def grade(
    submission_prefix: str = typer.Argument(..., help="Submission id (or unique prefix)"),
    assignment_id: str = typer.Option(..., "--assignment", "-a", help="Assignment id"),
    score: float = typer.Option(..., "--grade", "-g", help="Grade (0-100)"),
    feedback: str | None = typer.Option(None, "--feedback", help="Feedback for the student"),
) -> None:
    """Grade a submission."""
    values: dict[str, Any] = {"grade": score}
    if feedback:
        values["feedback"] = feedback

    async def body(ctx: DashboardContext) -> None:
        flow = pages.teacher_grading_crud(ctx)
        record = await _find(
            ctx, Entity.SUBMISSIONS, submission_prefix, {"assignment_id": assignment_id}
        )
        flow.open_edit(record)
        await _submit_form(flow, values)

    _run(body)


@app.command()
def submit(
    assignment_id: str = typer.Argument(..., help="Assignment id"),
    content: str | None = typer.Option(None, "--content", "-c", help="Answer text"),
    file_url: str | None = typer.Option(None, "--file-url", help="Link to an uploaded file"),
) -> None:
    """Submit an assignment."""

    async def body(ctx: DashboardContext) -> None:
        mutation = student.use_submit_student_assignment(ctx)
        data = SubmissionCreate(assignment_id=assignment_id, content=content, file_url=file_url)
        try:
            await mutation.mutate_async(data)
        except ApiError:
            # already reported by toast
            raise typer.Exit(code=1)

    _run(body)


@app.command()
def leave(
    request_id: str = typer.Argument(..., help="Leave request id"),
    decision: Decision = typer.Argument(..., help="approve or reject"),
    scope: Scope = typer.Option(Scope.TEACHER, "--as", help="Act as admin or teacher"),
) -> None:
    """Approve or reject a leave request."""
    status = "APPROVED" if decision == Decision.APPROVE else "REJECTED"

    async def body(ctx: DashboardContext) -> None:
        if scope == Scope.ADMIN:
            mutation = admin.use_update_admin_leave_request(ctx)
        else:
            mutation = teacher.use_update_teacher_leave_request(ctx)
        try:
            await mutation.mutate_async(LeaveRequestDecision(id=request_id, status=status))
        except ApiError:
            # already reported by toast
            raise typer.Exit(code=1)

    _run(body)


@app.command(name="request-leave")
def request_leave(
    leave_type: str = typer.Option(..., "--type", "-t", help="SICK, PERSONAL or EMERGENCY"),
    from_date: str = typer.Option(..., "--from", help="First day (YYYY-MM-DD)"),
    to_date: str = typer.Option(..., "--to", help="Last day (YYYY-MM-DD)"),
    reason: str = typer.Option(..., "--reason", "-r", help="Reason (at least 10 characters)"),
) -> None:
    """Ask for leave as a student."""

    async def body(ctx: DashboardContext) -> None:
        data = LeaveRequestCreate(
            type=leave_type.upper(), from_date=from_date, to_date=to_date, reason=reason
        )
        mutation = student.use_create_student_leave_request(ctx)
        try:
            created = await mutation.mutate_async(data)
        except ApiError:
            # already reported by toast
            raise typer.Exit(code=1)
        console.print(f"  [dim]id:[/dim] {created['id']}")

    _run(body)


@app.command()
def mark(
    student_id: str = typer.Argument(..., help="Student id"),
    course_id: str = typer.Option(..., "--course", "-c", help="Course id"),
    status: str = typer.Option("PRESENT", "--status", help="PRESENT, ABSENT or LATE"),
    date: str | None = typer.Option(None, "--date", help="Class date (YYYY-MM-DD)"),
    scope: Scope = typer.Option(Scope.TEACHER, "--as", help="Act as admin or teacher"),
) -> None:
    """Mark a student's attendance; as admin an existing entry for the day is updated."""

    async def body(ctx: DashboardContext) -> None:
        data = AttendanceUpsert(
            student_id=student_id, course_id=course_id, date=date, status=status.upper()
        )
        if scope == Scope.ADMIN:
            mutation = admin.use_upsert_admin_attendance(ctx)
        else:
            mutation = teacher.use_create_teacher_attendance(ctx)
        try:
            await mutation.mutate_async(data)
        except ApiError:
            # already reported by toast
            raise typer.Exit(code=1)

    _run(body)


if __name__ == "__main__":
    app()
