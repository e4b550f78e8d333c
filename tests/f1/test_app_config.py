"""Tests for app configuration (F1).

Tests the configuration loading, environment overrides, and fallbacks.
"""

from pathlib import Path

import pytest

from lms_dashboard.config.app_config import (
    API_URL_ENV,
    CONFIG_FILE,
    CONFIG_FILE_ENV,
    ApiConfig,
    AppConfig,
    clear_config_cache,
    load_app_config,
)

REPO_CONFIG = Path(__file__).resolve().parents[2] / CONFIG_FILE


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts with an empty cache and no overrides."""
    monkeypatch.delenv(API_URL_ENV, raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_load_config_from_yaml(self, monkeypatch):
        """Loads config from app_config_v1.yaml."""
        monkeypatch.setenv(CONFIG_FILE_ENV, str(REPO_CONFIG))
        config = load_app_config()
        assert isinstance(config, AppConfig)
        assert config.api.base_url == "http://localhost:3000"
        assert config.lists.page_size == 10
        assert config.lists.search_debounce_ms == 300

    def test_display_defaults(self, monkeypatch):
        """Display fallbacks used by the course mapper."""
        monkeypatch.setenv(CONFIG_FILE_ENV, str(REPO_CONFIG))
        config = load_app_config()
        assert config.display.default_thumbnail == "/course-thumbnails/default.jpg"
        assert config.display.default_category == "General"
        assert config.display.default_level == "Beginner"

    def test_missing_file_uses_defaults(self, monkeypatch, tmp_path):
        """Falls back to built-in defaults when the file does not exist."""
        monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "missing.yaml"))
        config = load_app_config()
        assert config.api.timeout == 30.0
        assert config.lists.max_limit == 100

    def test_partial_file_merges_defaults(self, monkeypatch, tmp_path):
        """Sections missing from the file keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("lists:\n  page_size: 25\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_FILE_ENV, str(path))

        config = load_app_config()
        assert config.lists.page_size == 25
        assert config.lists.search_debounce_ms == 300
        assert config.api.base_url == "http://localhost:3000"

    def test_invalid_values_are_clamped(self, monkeypatch, tmp_path):
        """Page size is at least 1 and max_limit never below it."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "lists:\n  page_size: 0\n  max_limit: -5\n  search_debounce_ms: -1\n",
            encoding="utf-8",
        )
        monkeypatch.setenv(CONFIG_FILE_ENV, str(path))

        config = load_app_config()
        assert config.lists.page_size == 1
        assert config.lists.max_limit == 1
        assert config.lists.search_debounce_ms == 0

    def test_trailing_slash_stripped(self, monkeypatch, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('api:\n  base_url: "http://lms.local/"\n', encoding="utf-8")
        monkeypatch.setenv(CONFIG_FILE_ENV, str(path))

        assert load_app_config().api.base_url == "http://lms.local"

    def test_api_url_env_override(self, monkeypatch, tmp_path):
        """LMS_API_URL overrides the file."""
        monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "missing.yaml"))
        monkeypatch.setenv(API_URL_ENV, "https://lms.example.com/")
        assert load_app_config().api.base_url == "https://lms.example.com"


class TestConfigCache:
    """Tests for the module-level cache."""

    def test_cached_instance_returned(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "missing.yaml"))
        assert load_app_config() is load_app_config()

    def test_force_reload(self, monkeypatch, tmp_path):
        """force_reload picks up file changes."""
        path = tmp_path / "config.yaml"
        path.write_text("lists:\n  page_size: 5\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
        assert load_app_config().lists.page_size == 5

        path.write_text("lists:\n  page_size: 7\n", encoding="utf-8")
        assert load_app_config().lists.page_size == 5
        assert load_app_config(force_reload=True).lists.page_size == 7


class TestApiConfig:
    """Tests for ApiConfig dataclass."""

    def test_token_from_env(self, monkeypatch):
        monkeypatch.setenv("LMS_API_TOKEN", "secret")
        assert ApiConfig().get_token() == "secret"

    def test_no_token_env(self):
        assert ApiConfig(token_env=None).get_token() is None
