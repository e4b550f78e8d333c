"""Application configuration loader.

Loads centralized configuration from data/config/app_config_v1.yaml,
falling back to built-in defaults when the file is missing. The API
base URL and token can be overridden from the environment.

Usage:
    from lms_dashboard.config.app_config import load_app_config

    config = load_app_config()
    print(config.api.base_url, config.lists.page_size)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

# Environment overrides
API_URL_ENV = "LMS_API_URL"
CONFIG_FILE_ENV = "LMS_CONFIG_FILE"


@dataclass
class ApiConfig:
    """Connection settings for the LMS REST API."""

    base_url: str = "http://localhost:3000"
    timeout: float = 30.0
    token_env: str | None = "LMS_API_TOKEN"

    def get_token(self) -> str | None:
        """Get bearer token from environment variable."""
        if self.token_env:
            return os.environ.get(self.token_env)
        return None


@dataclass
class ListConfig:
    """Defaults for list views."""

    page_size: int = 10
    max_limit: int = 100
    search_debounce_ms: int = 300


@dataclass
class DisplayConfig:
    """Fallback values used when mapping DTOs to UI records."""

    default_thumbnail: str = "/course-thumbnails/default.jpg"
    default_category: str = "General"
    default_level: str = "Beginner"


@dataclass
class AppConfig:
    """Application-wide configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    lists: ListConfig = field(default_factory=ListConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "api": {
            "base_url": "http://localhost:3000",
            "timeout": 30,
            "token_env": "LMS_API_TOKEN",
        },
        "lists": {
            "page_size": 10,
            "max_limit": 100,
            "search_debounce_ms": 300,
        },
        "display": {
            "default_thumbnail": "/course-thumbnails/default.jpg",
            "default_category": "General",
            "default_level": "Beginner",
        },
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    api_data = {**defaults["api"], **(data.get("api") or {})}
    api = ApiConfig(
        base_url=str(api_data["base_url"]).rstrip("/"),
        timeout=float(api_data["timeout"]),
        token_env=api_data.get("token_env"),
    )

    lists_data = {**defaults["lists"], **(data.get("lists") or {})}
    page_size = max(1, int(lists_data["page_size"]))
    max_limit = max(page_size, int(lists_data["max_limit"]))
    lists = ListConfig(
        page_size=page_size,
        max_limit=max_limit,
        search_debounce_ms=max(0, int(lists_data["search_debounce_ms"])),
    )

    display_data = {**defaults["display"], **(data.get("display") or {})}
    display = DisplayConfig(
        default_thumbnail=display_data["default_thumbnail"],
        default_category=display_data["default_category"],
        default_level=display_data["default_level"],
    )

    return AppConfig(api=api, lists=lists, display=display)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, applying environment overrides.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    config_file = Path(os.environ.get(CONFIG_FILE_ENV, str(CONFIG_FILE)))

    data: dict[str, Any]
    if config_file.exists():
        logger.debug("loading_app_config", source=str(config_file))
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    config = _parse_config(data)

    api_url = os.environ.get(API_URL_ENV)
    if api_url:
        logger.debug("api_url_from_env", base_url=api_url)
        config.api.base_url = api_url.rstrip("/")

    _cached_config = config
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
