"""Shared plumbing for the query and mutation hooks.

A DashboardContext bundles the API client, the query cache and the
toaster. Hooks take the context as their first argument.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Mapping, TypeVar

import httpx
import structlog
from pydantic import BaseModel

from lms_dashboard.api.client import ApiClient
from lms_dashboard.config.app_config import AppConfig, load_app_config
from lms_dashboard.query.client import (
    Mutation,
    QueryClient,
    QueryKey,
    QueryObserver,
    make_query_key,
)
from lms_dashboard.query.toast import Toast, Toaster

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)
V = TypeVar("V")
T = TypeVar("T")


@dataclass
class DashboardContext:
    """Everything a hook needs: API, cache, notifications, config."""

    api: ApiClient
    queries: QueryClient = field(default_factory=QueryClient)
    toaster: Toaster = field(default_factory=Toaster)
    config: AppConfig = field(default_factory=AppConfig)

    async def aclose(self) -> None:
        await self.api.aclose()


def create_context(
    config: AppConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    on_toast: Callable[[Toast], None] | None = None,
) -> DashboardContext:
    """Build a context from configuration.

    Args:
        config: App configuration (loaded from YAML if not provided)
        transport: Optional httpx transport for the API client
        on_toast: Listener called for every toast
    """
    if config is None:
        config = load_app_config()
    return DashboardContext(
        api=ApiClient(config.api, transport=transport),
        queries=QueryClient(),
        toaster=Toaster(listener=on_toast),
        config=config,
    )


def use_query(
    ctx: DashboardContext,
    key: QueryKey,
    fetcher: Callable[[], Awaitable[T]],
    enabled: bool = True,
) -> QueryObserver[T]:
    return QueryObserver(ctx.queries, key, fetcher, enabled=enabled)


def use_model_query(
    ctx: DashboardContext,
    key_parts: Iterable[Any],
    path: str,
    model: type[M],
    params: Mapping[str, Any] | None = None,
    enabled: bool = True,
) -> QueryObserver[M]:
    """Query `path` with `params` and validate the payload as `model`."""
    key = make_query_key(*key_parts, dict(params) if params else None)

    async def fetch() -> M:
        payload = await ctx.api.get(path, params=params)
        return model.model_validate(payload)

    return use_query(ctx, key, fetch, enabled=enabled)


def use_crud_mutation(
    ctx: DashboardContext,
    mutation_fn: Callable[[V], Awaitable[T]],
    invalidate: Iterable[QueryKey],
    success_message: str | Callable[[V], str],
    error_message: str,
    name: str,
    describe_error: Callable[[Exception], tuple[str, str]] | None = None,
    invalidate_for: Callable[[V], Iterable[QueryKey]] | None = None,
) -> Mutation[V, T]:
    """Build a mutation that invalidates `invalidate` keys and toasts.

    Args:
        ctx: Dashboard context
        mutation_fn: Coroutine performing the request
        invalidate: Query key prefixes to invalidate on success
        success_message: Toast description on success
        error_message: Fallback toast description when the error has no message
        name: Mutation name for logs
        describe_error: Optional (title, description) override for failures
        invalidate_for: Extra prefixes to invalidate, derived from the variables
    """
    prefixes = [tuple(p) for p in invalidate]

    def on_success(data: T, variables: V) -> None:
        for prefix in prefixes:
            ctx.queries.invalidate_queries(prefix)
        if invalidate_for is not None:
            for prefix in invalidate_for(variables):
                ctx.queries.invalidate_queries(tuple(prefix))
        message = success_message(variables) if callable(success_message) else success_message
        ctx.toaster.success(message)

    def on_error(error: Exception, variables: V) -> None:
        if describe_error is not None:
            title, description = describe_error(error)
            ctx.toaster.error(description, title=title, duration=5000)
            return
        ctx.toaster.error(str(error) or error_message)

    return Mutation(mutation_fn, on_success=on_success, on_error=on_error, name=name)
