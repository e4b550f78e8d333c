"""Configuration package for the LMS dashboard."""

from lms_dashboard.config.app_config import (
    ApiConfig,
    AppConfig,
    DisplayConfig,
    ListConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "DisplayConfig",
    "ListConfig",
    "clear_config_cache",
    "load_app_config",
]
