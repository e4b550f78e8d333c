"""REST API access: HTTP client and wire schemas."""

from lms_dashboard.api.client import (
    ApiClient,
    ApiConnectionError,
    ApiError,
    ApiResponseError,
    build_query,
)

__all__ = [
    "ApiClient",
    "ApiConnectionError",
    "ApiError",
    "ApiResponseError",
    "build_query",
]
