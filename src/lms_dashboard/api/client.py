"""HTTP client for the LMS REST API.

Every endpoint answers with an envelope:

    {"success": true, "data": ...}            on success
    {"success": false, "error": "..."}        on failure

ApiClient unwraps the envelope and raises ApiResponseError with the
server's message when the status is not 2xx.
"""

from __future__ import annotations

import time
from typing import Any, Literal, Mapping

import httpx
import structlog

from lms_dashboard.config.app_config import ApiConfig

logger = structlog.get_logger(__name__)

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class ApiError(Exception):
    """Error during an API interaction."""

    pass


class ApiConnectionError(ApiError):
    """Error connecting to the API server."""

    pass


class ApiResponseError(ApiError):
    """Non-2xx response from the API server."""

    def __init__(self, message: str, status: int, response: Any = None):
        self.status = status
        self.response = response
        super().__init__(message)


def build_query(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Build query-string parameters from a params mapping.

    None and empty strings are dropped. Zero integers are dropped too, so
    `skip=0` is never sent. Booleans are always sent as "true"/"false".
    """
    query: dict[str, str] = {}
    if not params:
        return query
    for name, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            query[name] = "true" if value else "false"
        elif isinstance(value, int) and value == 0:
            continue
        else:
            query[name] = str(value)
    return query


def _error_message(body: Any, status: int) -> str:
    """Extract the human-readable error from an error body."""
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    return f"Request failed ({status})"


class ApiClient:
    """Async JSON client for the LMS REST API.

    Args:
        config: API connection settings
        transport: Optional httpx transport (tests mount an ASGI app here)
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or ApiConfig()

        headers = {"Content-Type": "application/json"}
        token = self.config.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=headers,
            timeout=self.config.timeout,
            transport=transport,
        )

        logger.debug("api_client_initialized", base_url=self.config.base_url)

    async def request(
        self,
        path: str,
        method: HttpMethod = "GET",
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Send a request and return the unwrapped `data` payload.

        Args:
            path: Endpoint path, e.g. "/api/admin/users"
            method: HTTP method
            params: Query parameters (unset values are dropped)
            body: JSON body

        Returns:
            The `data` field of the success envelope, or the whole body when
            the server did not wrap it.

        Raises:
            ApiConnectionError: If the server cannot be reached
            ApiResponseError: If the server answers with a non-2xx status
        """
        start_time = time.time()

        try:
            response = await self._client.request(
                method,
                path,
                params=build_query(params),
                json=body,
            )
        except httpx.TransportError as e:
            raise ApiConnectionError(
                f"Could not connect to {self.config.base_url}: {e}"
            ) from e

        latency_ms = int((time.time() - start_time) * 1000)

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error:
            message = _error_message(payload, response.status_code)
            logger.warning(
                "api_request_failed",
                method=method,
                path=path,
                status=response.status_code,
                error=message,
            )
            raise ApiResponseError(message, response.status_code, payload)

        logger.debug(
            "api_response",
            method=method,
            path=path,
            status=response.status_code,
            latency_ms=latency_ms,
        )

        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request(path, "GET", params=params)

    async def post(self, path: str, body: Any) -> Any:
        return await self.request(path, "POST", body=body)

    async def put(self, path: str, body: Any) -> Any:
        return await self.request(path, "PUT", body=body)

    async def patch(self, path: str, body: Any) -> Any:
        return await self.request(path, "PATCH", body=body)

    async def delete(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request(path, "DELETE", params=params)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
