"""Query cache and mutations.

A small asyncio query client in the spirit of a data-fetching cache:

- Queries are identified by a hashable key, e.g. ("admin", "courses", params).
- Concurrent fetches of the same key share one in-flight task.
- `invalidate_queries(prefix)` marks every entry under the prefix stale and
  schedules a background refetch for entries that have observers.
- Mutations run a request and call success/error callbacks; the hooks use
  them to invalidate keys and show toasts.

Usage:
    client = QueryClient()
    observer = QueryObserver(client, ("admin", "users", params), fetch_users)
    result = await observer.fetch()
    if result.error is None:
        print(result.data.total)
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, Hashable, Literal, Mapping, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
V = TypeVar("V")

QueryKey = tuple[Hashable, ...]
QueryStatus = Literal["pending", "success", "error"]


def _freeze(value: Any) -> Hashable:
    """Convert params into a hashable, order-independent form."""
    if isinstance(value, Mapping):
        return tuple(
            sorted((k, _freeze(v)) for k, v in value.items() if v is not None)
        )
    if isinstance(value, (list, tuple, set)):
        return tuple(_freeze(v) for v in value)
    return value


def make_query_key(*parts: Any) -> QueryKey:
    """Build a query key; mapping parts are frozen, None parts are dropped."""
    return tuple(_freeze(p) for p in parts if p is not None)


def key_matches(key: QueryKey, prefix: QueryKey) -> bool:
    """True when `prefix` is a leading slice of `key`."""
    return key[: len(prefix)] == prefix


@dataclass
class Query:
    """Cache entry for one query key."""

    key: QueryKey
    fetcher: Callable[[], Awaitable[Any]]
    status: QueryStatus = "pending"
    data: Any = None
    error: Exception | None = None
    is_stale: bool = True
    updated_at: float = 0.0
    fetch_count: int = 0
    invalidations: int = 0
    observers: int = 0
    task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def is_fetching(self) -> bool:
        return self.task is not None and not self.task.done()


@dataclass
class QueryResult(Generic[T]):
    """Snapshot handed to views: {data, is_loading, error, refetch}."""

    data: T | None
    is_loading: bool
    is_fetching: bool
    error: Exception | None
    refetch: Callable[[], Awaitable[QueryResult[T]]]

    @property
    def is_error(self) -> bool:
        return self.error is not None


class QueryClient:
    """In-memory query cache with request dedupe and prefix invalidation."""

    def __init__(self, stale_time: float = 0.0):
        """Initialize query client.

        Args:
            stale_time: Seconds a successful result stays fresh. 0 means it is
                fresh until invalidated.
        """
        self.stale_time = stale_time
        self._queries: dict[QueryKey, Query] = {}
        self._background: set[asyncio.Task] = set()

    def get_query(self, key: QueryKey) -> Query | None:
        return self._queries.get(key)

    def build_query(self, key: QueryKey, fetcher: Callable[[], Awaitable[Any]]) -> Query:
        """Get or create the cache entry for `key`."""
        query = self._queries.get(key)
        if query is None:
            query = Query(key=key, fetcher=fetcher)
            self._queries[key] = query
        else:
            query.fetcher = fetcher
        return query

    def _is_fresh(self, query: Query) -> bool:
        if query.status != "success" or query.is_stale:
            return False
        if self.stale_time and time.monotonic() - query.updated_at > self.stale_time:
            return False
        return True

    async def _run(self, query: Query) -> Any:
        query.fetch_count += 1
        generation = query.invalidations
        try:
            data = await query.fetcher()
        except Exception as e:
            query.status = "error"
            query.error = e
            logger.warning("query_failed", key=query.key, error=str(e))
            raise
        query.status = "success"
        query.data = data
        query.error = None
        # invalidated mid-flight: the data predates the change
        query.is_stale = query.invalidations != generation
        query.updated_at = time.monotonic()
        logger.debug("query_fetched", key=query.key, fetch_count=query.fetch_count)
        return data

    def _start(self, query: Query) -> asyncio.Task:
        if query.is_fetching:
            return query.task  # type: ignore[return-value]
        query.task = asyncio.ensure_future(self._run(query))
        return query.task

    async def fetch_query(
        self,
        key: QueryKey,
        fetcher: Callable[[], Awaitable[T]],
        force: bool = False,
    ) -> T:
        """Return cached data when fresh, otherwise fetch.

        A fetch already in flight for the same key is joined instead of
        issuing a second request.

        Raises:
            Whatever the fetcher raises.
        """
        query = self.build_query(key, fetcher)

        if not force and self._is_fresh(query) and not query.is_fetching:
            return query.data

        while True:
            task = self._start(query)
            # shield: one cancelled waiter must not cancel the shared request
            data = await asyncio.shield(task)
            if not query.is_stale:
                return data

    def get_query_data(self, key: QueryKey) -> Any:
        query = self._queries.get(key)
        return query.data if query else None

    def set_query_data(self, key: QueryKey, data: Any) -> None:
        query = self._queries.get(key)
        if query is None:
            raise KeyError(key)
        query.data = data
        query.status = "success"
        query.is_stale = False
        query.updated_at = time.monotonic()

    def find_queries(self, prefix: QueryKey) -> list[Query]:
        return [q for k, q in self._queries.items() if key_matches(k, prefix)]

    def invalidate_queries(self, prefix: QueryKey, refetch_active: bool = True) -> int:
        """Mark every query under `prefix` stale.

        Queries with at least one observer are refetched in the background;
        the others refetch the next time they are read.

        Returns:
            Number of entries invalidated.
        """
        matched = self.find_queries(prefix)
        for query in matched:
            query.is_stale = True
            query.invalidations += 1
            if refetch_active and query.observers > 0:
                task = asyncio.ensure_future(self._refetch_quietly(query))
                self._background.add(task)
                task.add_done_callback(self._background.discard)

        logger.debug("queries_invalidated", prefix=prefix, count=len(matched))
        return len(matched)

    async def _refetch_quietly(self, query: Query) -> None:
        try:
            while query.is_stale:
                await self._start(query)
        except Exception:
            # the error is stored on the query and shown by its observers
            pass

    def remove_queries(self, prefix: QueryKey) -> int:
        keys = [k for k in self._queries if key_matches(k, prefix)]
        for k in keys:
            del self._queries[k]
        return len(keys)

    async def wait_for_background(self) -> None:
        """Wait until all background refetches have settled."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    def clear(self) -> None:
        self._queries.clear()


class QueryObserver(Generic[T]):
    """A view's subscription to one query key.

    While subscribed, invalidation of the key triggers a background refetch.
    Errors are captured on the result instead of being raised.
    """

    def __init__(
        self,
        client: QueryClient,
        key: QueryKey,
        fetcher: Callable[[], Awaitable[T]],
        enabled: bool = True,
    ):
        self.client = client
        self.key = key
        self.enabled = enabled
        self._query = client.build_query(key, fetcher)
        self._fetcher = fetcher
        self._subscribed = False
        self.subscribe()

    def subscribe(self) -> None:
        if not self._subscribed:
            self._query.observers += 1
            self._subscribed = True

    def unsubscribe(self) -> None:
        if self._subscribed:
            self._query.observers -= 1
            self._subscribed = False

    @property
    def result(self) -> QueryResult[T]:
        query = self._query
        return QueryResult(
            data=query.data,
            is_loading=self.enabled and query.data is None and query.status != "error",
            is_fetching=query.is_fetching,
            error=query.error if query.status == "error" else None,
            refetch=self.refetch,
        )

    async def _fetch(self, force: bool) -> QueryResult[T]:
        if not self.enabled:
            return self.result
        try:
            await self.client.fetch_query(self.key, self._fetcher, force=force)
        except Exception:
            pass  # stored on the query, surfaced through `result.error`
        return self.result

    async def fetch(self) -> QueryResult[T]:
        """Read through the cache, fetching when missing or stale."""
        return await self._fetch(force=False)

    async def refetch(self) -> QueryResult[T]:
        """Force a network fetch."""
        return await self._fetch(force=True)


class Mutation(Generic[V, T]):
    """A create/update/delete request with lifecycle callbacks.

    Args:
        mutation_fn: Coroutine function performing the request
        on_success: Called with (data, variables) after success
        on_error: Called with (error, variables) after failure
    """

    def __init__(
        self,
        mutation_fn: Callable[[V], Awaitable[T]],
        on_success: Callable[[T, V], None] | None = None,
        on_error: Callable[[Exception, V], None] | None = None,
        name: str = "mutation",
    ):
        self._mutation_fn = mutation_fn
        self._on_success = on_success
        self._on_error = on_error
        self.name = name
        self.is_pending = False
        self.data: T | None = None
        self.error: Exception | None = None

    async def mutate_async(self, variables: V) -> T:
        """Run the mutation; re-raises on failure after `on_error`."""
        self.is_pending = True
        self.error = None
        try:
            data = await self._mutation_fn(variables)
        except Exception as e:
            self.error = e
            logger.warning("mutation_failed", mutation=self.name, error=str(e))
            if self._on_error is not None:
                self._on_error(e, variables)
            raise
        finally:
            self.is_pending = False

        self.data = data
        logger.info("mutation_succeeded", mutation=self.name)
        if self._on_success is not None:
            self._on_success(data, variables)
        return data

    async def mutate(self, variables: V) -> T | None:
        """Run the mutation; failures are reported through `on_error` only."""
        try:
            return await self.mutate_async(variables)
        except Exception:
            return None

    def reset(self) -> None:
        self.data = None
        self.error = None
