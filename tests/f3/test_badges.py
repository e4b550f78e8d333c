"""Tests for badge styles and markup (F3)."""

from rich.text import Text

from lms_dashboard.views.badges import (
    DEFAULT_STYLE,
    badge,
    level_style,
    role_style,
    status_style,
    year_style,
)


class TestStyles:
    """Tests for the style lookups."""

    def test_known_values(self):
        assert status_style("Active") == "green"
        assert status_style("ABSENT") == "red"
        assert level_style("Advanced") == "magenta"
        assert year_style("Senior") == "yellow"
        assert role_style("Teacher") == "blue"

    def test_unknown_values_fall_back(self):
        assert status_style("Mystery") == DEFAULT_STYLE
        assert role_style("") == DEFAULT_STYLE


class TestBadge:
    """Tests for badge markup."""

    def test_plain_value(self):
        text = Text.from_markup(badge("Active", "green"))
        assert text.plain == "Active"
        assert text.spans[0].style == "green"

    def test_server_markup_is_not_interpreted(self):
        value = "[bold]Draft[/bold] [link=x]"
        text = Text.from_markup(badge(value, status_style(value)))
        assert text.plain == value
