"""Tests for the lms CLI against the mock backend (F5)."""

from pathlib import Path

import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from lms_dashboard.cli import commands
from lms_dashboard.cli.commands import app
from lms_dashboard.config.app_config import CONFIG_FILE, CONFIG_FILE_ENV, clear_config_cache
from mock_backend import create_app

REPO_CONFIG = Path(__file__).resolve().parents[2] / CONFIG_FILE

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_backend(monkeypatch, store):
    """Route the CLI's API client to the mock backend."""
    backend = create_app(store)
    monkeypatch.setattr(commands, "_get_transport", lambda: httpx.ASGITransport(app=backend))
    monkeypatch.setattr(commands, "console", Console(width=200))
    monkeypatch.setenv(CONFIG_FILE_ENV, str(REPO_CONFIG))
    clear_config_cache()
    yield
    clear_config_cache()


class TestList:
    """Tests for the list command."""

    def test_filter_and_sort(self):
        result = runner.invoke(app, ["list", "courses", "--status", "Active", "--sort", "price"])

        assert result.exit_code == 0, result.output
        assert "Algebra" in result.output
        assert "Chemistry" in result.output
        assert "Biology" not in result.output
        assert "Showing 1 to 2 of 3 (1 hidden by filters)" in result.output

    def test_search(self):
        result = runner.invoke(app, ["list", "courses", "--search", "chem"])

        assert result.exit_code == 0, result.output
        assert "Chemistry" in result.output
        assert "Algebra" not in result.output

    def test_descending_order(self):
        result = runner.invoke(app, ["list", "courses", "--sort", "title", "--desc"])

        assert result.exit_code == 0, result.output
        output = result.output
        assert output.index("Chemistry") < output.index("Biology") < output.index("Algebra")

    def test_sort_field_is_ascending_by_default(self):
        result = runner.invoke(app, ["list", "courses", "--sort", "title"])

        assert result.exit_code == 0, result.output
        output = result.output
        assert output.index("Algebra") < output.index("Biology") < output.index("Chemistry")

    def test_desc_without_sort_reverses_default_field(self):
        result = runner.invoke(app, ["list", "courses", "--desc"])

        assert result.exit_code == 0, result.output
        output = result.output
        assert output.index("Chemistry") < output.index("Algebra")

    def test_role_filter(self):
        result = runner.invoke(app, ["list", "users", "--role", "teacher"])

        assert result.exit_code == 0, result.output
        assert "Grace Hopper" in result.output
        assert "Ada Lovelace" not in result.output

    def test_invalid_sort_field(self):
        result = runner.invoke(app, ["list", "courses", "--sort", "colour"])

        assert result.exit_code == 1
        assert "Cannot sort courses by 'colour'" in result.output

    def test_empty_list(self):
        result = runner.invoke(app, ["list", "submissions"])

        assert result.exit_code == 0, result.output
        assert "No submissions found." in result.output

    def test_load_error(self, store):
        store.fail("GET", "/api/admin/courses")
        result = runner.invoke(app, ["list", "courses"])

        assert result.exit_code == 1
        assert "Failed to load courses. Please try again." in result.output


class TestDelete:
    """Delete asks for confirmation unless --yes is given."""

    def test_declined_confirmation_keeps_record(self, store):
        result = runner.invoke(app, ["delete", "courses", "crs_0009"], input="n\n")

        assert result.exit_code == 0, result.output
        assert "Delete course 'Biology'?" in result.output
        assert "Cancelled." in result.output
        assert "crs_0009" in store.courses
        assert store.requests_to("DELETE", "/api/admin/courses/crs_0009") == []

    def test_confirmed_delete(self, store):
        result = runner.invoke(app, ["delete", "courses", "crs_0009"], input="y\n")

        assert result.exit_code == 0, result.output
        assert "Course deleted successfully" in result.output
        assert "crs_0009" not in store.courses

    def test_yes_flag_skips_prompt(self, store):
        result = runner.invoke(app, ["delete", "teachers", "tch_0005", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Delete teacher" not in result.output
        assert store.teachers == {}

    def test_ambiguous_prefix(self, store):
        result = runner.invoke(app, ["delete", "courses", "crs_", "--yes"])

        assert result.exit_code == 1
        assert "ambiguous" in result.output
        assert len(store.courses) == 3

    def test_unknown_id(self):
        result = runner.invoke(app, ["delete", "courses", "nope", "--yes"])

        assert result.exit_code == 1
        assert "No record found with id prefix 'nope'" in result.output


class TestCreateUpdate:
    """Tests for create/update through form values."""

    def test_create_course(self, store):
        result = runner.invoke(
            app, ["create", "courses", "-f", "title=Databases", "-f", "code=DB101"]
        )

        assert result.exit_code == 0, result.output
        assert "Course created successfully" in result.output
        assert any(c["title"] == "Databases" for c in store.courses.values())

    def test_validation_error(self, store):
        result = runner.invoke(app, ["create", "courses", "-f", "title=A", "-f", "code=DB101"])

        assert result.exit_code == 1
        assert "Validation Error" in result.output
        assert store.requests_to("POST", "/api/admin/courses") == []

    def test_duplicate_email(self):
        result = runner.invoke(
            app,
            [
                "create", "users",
                "-f", "name=Ada Again",
                "-f", "email=ada@example.com",
                "-f", "password=secret1",
                "-f", "role=admin",
            ],
        )

        assert result.exit_code == 1
        assert "Email Already Exists" in result.output

    def test_unknown_role_is_reported(self, store):
        result = runner.invoke(app, ["create", "users", "-f", "name=Bob", "-f", "role=janitor"])

        assert result.exit_code == 1
        assert "Unknown role: 'janitor'" in result.output
        assert store.requests_to("POST", "/api/admin/users") == []

    def test_bad_field_syntax(self):
        result = runner.invoke(app, ["create", "courses", "-f", "title"])
        assert result.exit_code != 0

    def test_update_course(self, store):
        result = runner.invoke(app, ["update", "courses", "crs_0008", "-f", "title=Linear Algebra"])

        assert result.exit_code == 0, result.output
        assert store.courses["crs_0008"]["title"] == "Linear Algebra"

    def test_roster_is_read_only(self):
        result = runner.invoke(app, ["create", "roster", "-f", "name=x"])

        assert result.exit_code == 1
        assert "roster cannot be modified" in result.output


class TestShortcuts:
    """Tests for toggle, grade, submit, leave and report."""

    def test_toggle_teacher(self, store):
        result = runner.invoke(app, ["toggle", "teachers", "tch_0005"])

        assert result.exit_code == 0, result.output
        assert store.teachers["tch_0005"]["isActive"] is False

    def test_toggle_course(self, store):
        result = runner.invoke(app, ["toggle", "courses", "crs_0008"])

        assert result.exit_code == 0, result.output
        assert store.courses["crs_0008"]["status"] == "Suspended"

    def test_toggle_unsupported(self):
        result = runner.invoke(app, ["toggle", "students", "stu_0006"])

        assert result.exit_code == 1
        assert "students have no status toggle" in result.output

    def test_grade(self, store):
        result = runner.invoke(
            app, ["grade", "sub_0013", "--assignment", "asg_0011", "--grade", "88"]
        )

        assert result.exit_code == 0, result.output
        assert store.submissions["sub_0013"]["grade"] == 88
        assert "Submission graded successfully" in result.output

    def test_submit(self, store):
        result = runner.invoke(app, ["submit", "asg_0012", "--content", "Late, sorry"])

        assert result.exit_code == 0, result.output
        assert "Assignment submitted successfully" in result.output
        assert len(store.submissions) == 2

    def test_leave_decision(self, store):
        result = runner.invoke(app, ["leave", "lvr_0016", "reject", "--as", "admin"])

        assert result.exit_code == 0, result.output
        assert store.leave_requests["lvr_0016"]["status"] == "REJECTED"
        assert "Leave request rejected successfully" in result.output

    def test_admin_report(self):
        result = runner.invoke(app, ["report", "admin"])

        assert result.exit_code == 0, result.output
        assert "Admin report" in result.output
        assert "Courses: 3" in result.output

    def test_report_error(self, store):
        store.fail("GET", "/api/teacher/dashboard")
        result = runner.invoke(app, ["report", "dashboard"])

        assert result.exit_code == 1
        assert "Failed to load dashboard report" in result.output


class TestStudentCommands:
    """Tests for the student-facing commands and reports."""

    def test_edit_submission(self, store):
        result = runner.invoke(
            app, ["update", "my-assignments", "asg_0011", "-f", "content=Revised answer"]
        )

        assert result.exit_code == 0, result.output
        assert "Submission updated successfully" in result.output
        assert store.submissions["sub_0013"]["content"] == "Revised answer"

    def test_delete_unsubmitted_assignment(self, store):
        result = runner.invoke(app, ["delete", "my-assignments", "asg_0012", "--yes"])

        assert result.exit_code == 1
        assert "This record has nothing to delete" in result.output
        assert store.requests_to("DELETE", "/api/student/submissions/") == []

    def test_list_my_attendance(self):
        result = runner.invoke(app, ["list", "my-attendance"])

        assert result.exit_code == 0, result.output
        assert "Algebra" in result.output
        assert "PRESENT" in result.output

    def test_my_dashboard(self):
        result = runner.invoke(app, ["report", "my-dashboard"])

        assert result.exit_code == 0, result.output
        assert "My dashboard" in result.output
        assert "Courses: 1" in result.output
        assert "Homework 1" in result.output

    def test_my_reports(self):
        result = runner.invoke(app, ["report", "my-reports"])

        assert result.exit_code == 0, result.output
        assert "Attendance: 100%" in result.output
        assert "3.40" in result.output

    def test_request_leave(self, store):
        result = runner.invoke(
            app,
            [
                "request-leave",
                "--type", "sick",
                "--from", "2024-04-01",
                "--to", "2024-04-02",
                "--reason", "Doctor appointment",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Leave request submitted successfully" in result.output
        created = [r for r in store.leave_requests.values() if r.get("type") == "SICK"]
        assert created[0]["status"] == "PENDING"

    def test_request_leave_validation(self, store):
        result = runner.invoke(
            app,
            ["request-leave", "-t", "SICK", "--from", "2024-04-02", "--to", "2024-04-01",
             "--reason", "Doctor appointment"],
        )

        assert result.exit_code == 1
        assert "Validation Error" in result.output
        assert store.requests_to("POST", "/api/student/leave-requests") == []


class TestMarkAttendance:
    """Tests for the mark command."""

    def test_admin_updates_existing_entry(self, store):
        result = runner.invoke(
            app,
            [
                "mark", "stu_0007",
                "--course", "crs_0008",
                "--date", "2024-03-01T00:00:00.000Z",
                "--as", "admin",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Attendance updated successfully" in result.output
        statuses = {a["studentId"]: a["status"] for a in store.attendance.values()}
        assert statuses == {"stu_0006": "PRESENT", "stu_0007": "PRESENT"}

    def test_teacher_creates_entry(self, store):
        result = runner.invoke(
            app, ["mark", "stu_0007", "--course", "crs_0010", "--status", "late"]
        )

        assert result.exit_code == 0, result.output
        assert "Attendance marked successfully" in result.output
        assert len(store.attendance) == 3
