"""User roles.

The API speaks upper-case role codes ("STUDENT"), the dashboard shows
title-case labels ("Student"). Role maps both ways.
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Closed set of dashboard roles (value = API code)."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def api_code(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str | Role | None, default: Role | None = None) -> Role:
        """Parse an API code or display label, case-insensitively.

        Raises:
            ValueError: If the value is not a known role and no default is given.
        """
        if isinstance(value, Role):
            return value
        if value:
            role = _BY_NAME.get(value.strip().lower())
            if role is not None:
                return role
        if default is not None:
            return default
        raise ValueError(f"Unknown role: {value!r}")

    @classmethod
    def from_label(cls, label: str) -> Role:
        for role, role_label in _LABELS.items():
            if role_label == label:
                return role
        raise ValueError(f"Unknown role label: {label!r}")


_LABELS: dict[Role, str] = {
    Role.ADMIN: "Admin",
    Role.TEACHER: "Teacher",
    Role.STUDENT: "Student",
}

_BY_NAME: dict[str, Role] = {role.value.lower(): role for role in Role}
