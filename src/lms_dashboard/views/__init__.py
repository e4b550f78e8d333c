"""Dashboard views: DTO mapping, list pipeline, CRUD flows, roles."""

from lms_dashboard.views.crud import CrudFlow, CrudState, FormValidationError
from lms_dashboard.views.page import ListPage, PageView
from lms_dashboard.views.roles import Role

__all__ = [
    "CrudFlow",
    "CrudState",
    "FormValidationError",
    "ListPage",
    "PageView",
    "Role",
]
