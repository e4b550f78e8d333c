"""Badge styles for status, level, year and role values.

Styles are rich markup styles; unknown values fall back to DEFAULT_STYLE.
"""

from rich.markup import escape

DEFAULT_STYLE = "white"

STATUS_STYLES = {
    "Active": "green",
    "Pending": "yellow",
    "Inactive": "bright_black",
    "Draft": "yellow",
    "Archived": "bright_black",
    "Suspended": "red",
    "Completed": "blue",
    "Closed": "bright_black",
    "Graded": "blue",
    "At Risk": "red",
    "Submitted": "cyan",
    "Overdue": "red",
    "PRESENT": "green",
    "ABSENT": "red",
    "LATE": "yellow",
    "SUBMITTED": "cyan",
    "GRADED": "green",
    "RETURNED": "magenta",
}

LEVEL_STYLES = {
    "Beginner": "green",
    "Intermediate": "blue",
    "Advanced": "magenta",
}

YEAR_STYLES = {
    "Freshman": "green",
    "Sophomore": "blue",
    "Junior": "magenta",
    "Senior": "yellow",
}

ROLE_STYLES = {
    "Admin": "red",
    "Teacher": "blue",
    "Student": "green",
}


def status_style(status: str) -> str:
    return STATUS_STYLES.get(status, DEFAULT_STYLE)


def level_style(level: str) -> str:
    return LEVEL_STYLES.get(level, DEFAULT_STYLE)


def year_style(year: str) -> str:
    return YEAR_STYLES.get(year, DEFAULT_STYLE)


def role_style(role_label: str) -> str:
    return ROLE_STYLES.get(role_label, DEFAULT_STYLE)


def badge(value: str, style: str) -> str:
    """Wrap a value in rich markup; markup in the value itself is escaped."""
    return f"[{style}]{escape(value)}[/{style}]"
