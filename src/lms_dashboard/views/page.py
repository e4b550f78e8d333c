"""List page controller.

A ListPage owns the local state of one list view (page index, filters,
sort, debounced search) and runs the pipeline:

    fetch (hook) → map → client filter → client sort → PageView

Usage:
    page = admin_courses_page(ctx)
    page.set_filter("status", "Active")
    page.sort_by(CourseSortField.PRICE)
    view = await page.load()
    for row in view.rows:
        print(row.title, row.price)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

import structlog

from lms_dashboard.api.schemas import Page
from lms_dashboard.hooks.base import DashboardContext
from lms_dashboard.query.client import QueryObserver
from lms_dashboard.views.debounce import Debouncer
from lms_dashboard.views.listing import (
    FilterState,
    PageRequest,
    PageSummary,
    SortKey,
    SortState,
    build_predicates,
    filter_records,
    sort_by,
    summarize_page,
    total_pages,
)

logger = structlog.get_logger(__name__)

D = TypeVar("D")
R = TypeVar("R")
F = TypeVar("F", bound=Enum)

QueryFactory = Callable[[PageRequest, "str | None"], QueryObserver[Page[Any]]]


@dataclass
class PageView(Generic[R]):
    """What a list view renders."""

    rows: list[R] = field(default_factory=list)
    summary: PageSummary = field(default_factory=lambda: PageSummary(0, 0, 0))
    page: int = 0
    total_pages: int = 1
    is_loading: bool = False
    error_message: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.is_loading and self.error_message is None


class ListPage(Generic[D, R, F]):
    """State and pipeline of one list view.

    Args:
        ctx: Dashboard context
        title: Plural entity name, used in the load error message
        query: Builds the query observer for a page request and search text
        mapper: DTO → UI record
        sort_keys: Key extractor per sort field
        default_sort: Initial sort field
        search_fields: Record attributes matched by client-side search
        filters: Filter name → record attribute, e.g. {"role": "role_label"}
        server_search: Search text is sent to the server instead of
            filtered client-side
        page_size: Rows per page (defaults to config)
    """

    def __init__(
        self,
        ctx: DashboardContext,
        title: str,
        query: QueryFactory,
        mapper: Callable[[D], R],
        sort_keys: Mapping[F, SortKey],
        default_sort: F,
        search_fields: Sequence[str] = (),
        filters: Mapping[str, str] | None = None,
        server_search: bool = False,
        page_size: int | None = None,
    ):
        self.ctx = ctx
        self.title = title
        self._query = query
        self._mapper = mapper
        self.sort_keys = dict(sort_keys)
        self.search_fields = tuple(search_fields)
        self.filter_fields = dict(filters or {})
        self.server_search = server_search
        self.page_size = page_size or ctx.config.lists.page_size

        self.page = 0
        self.filters = FilterState()
        self.sort = SortState(default_sort)
        self.view: PageView[R] = PageView(is_loading=True)

        self._search_input = Debouncer(ctx.config.lists.search_debounce_ms, self.apply_search)
        self._observer: QueryObserver[Page[Any]] | None = None
        self._generation = 0

    # -------------------------------------------------------------------------
    # State changes
    # -------------------------------------------------------------------------

    def type_search(self, text: str) -> None:
        """Search box input; applied after the debounce delay."""
        self._search_input.push(text)

    def apply_search(self, text: str) -> None:
        self.filters.search = text
        self.page = 0

    async def settle_search(self) -> None:
        await self._search_input.wait()

    def set_filter(self, name: str, value: str | None) -> None:
        if name not in self.filter_fields:
            raise ValueError(f"Cannot filter {self.title} by {name!r}")
        self.filters.select(self.filter_fields[name], value)
        self.page = 0

    def sort_by(self, sort_field: F) -> None:
        if sort_field not in self.sort_keys:
            raise ValueError(f"Cannot sort {self.title} by {sort_field!r}")
        self.sort.toggle(sort_field)

    def go_to(self, page: int) -> None:
        self.page = max(0, page)

    def next_page(self) -> None:
        if self.page + 1 < self.view.total_pages:
            self.page += 1

    def previous_page(self) -> None:
        self.page = max(0, self.page - 1)

    @property
    def request(self) -> PageRequest:
        return PageRequest(page=self.page, size=self.page_size)

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def _observe(self, request: PageRequest) -> QueryObserver[Page[Any]]:
        search = (self.filters.search.strip() or None) if self.server_search else None
        observer = self._query(request, search)
        if self._observer is not None:
            if self._observer.key == observer.key:
                observer.unsubscribe()
                return self._observer
            self._observer.unsubscribe()
        self._observer = observer
        return observer

    async def load(self, refetch: bool = False) -> PageView[R]:
        """Fetch the current page and rebuild the view.

        A load superseded by a newer one returns its own result but does
        not replace `self.view`.
        """
        self._generation += 1
        generation = self._generation
        request = self.request
        observer = self._observe(request)

        result = await (observer.refetch() if refetch else observer.fetch())

        if result.error is not None:
            logger.warning("list_load_failed", title=self.title, error=str(result.error))
            view: PageView[R] = PageView(
                page=request.page,
                error_message=f"Failed to load {self.title}. Please try again.",
            )
        elif result.data is None:
            view = PageView(page=request.page, is_loading=result.is_loading)
        else:
            view = self._build_view(request, result.data)

        if generation == self._generation:
            self.view = view
        return view

    def _build_view(self, request: PageRequest, data: Page[Any]) -> PageView[R]:
        records = [self._mapper(item) for item in data.items]
        predicates = build_predicates(
            self.filters, self.search_fields, search=not self.server_search
        )
        rows = sort_by(filter_records(records, predicates), self.sort, self.sort_keys)

        logger.debug(
            "list_loaded",
            title=self.title,
            fetched=len(records),
            shown=len(rows),
            total=data.total,
        )
        return PageView(
            rows=rows,
            summary=summarize_page(request, data.total, len(records), len(rows)),
            page=request.page,
            total_pages=total_pages(data.total, request.size),
        )

    def close(self) -> None:
        """Unsubscribe from the current query and drop any pending search."""
        self._search_input.cancel()
        if self._observer is not None:
            self._observer.unsubscribe()
            self._observer = None
