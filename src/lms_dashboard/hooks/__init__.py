"""Typed query and mutation hooks per role.

- admin: users, courses, teachers, students, reports
- teacher: classes, attendance, assignments, students, submissions, reports
- student: courses, assignments, attendance, submissions
"""

from lms_dashboard.hooks.base import DashboardContext, create_context

__all__ = ["DashboardContext", "create_context"]
