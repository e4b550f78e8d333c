"""Client-side filter, sort and pagination for list views.

Rows fetched from the server are narrowed by an AND of predicates, ordered
by one field of a closed per-entity sort enum, and summarized for the page
footer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Generic, Iterable, Literal, Mapping, Sequence, TypeVar

from lms_dashboard.views.mappers import parse_datetime

R = TypeVar("R")
F = TypeVar("F", bound=Enum)

ALL = "All"

SortDirection = Literal["asc", "desc"]
Predicate = Callable[[Any], bool]
SortKey = Callable[[Any], Any]


def is_unset(value: str | None) -> bool:
    """An unset, empty or "All" selection matches everything."""
    return value is None or value.strip() == "" or value == ALL


def matches_search(query: str | None, *values: str | None) -> bool:
    """Case-insensitive substring match over any of `values`."""
    if is_unset(query):
        return True
    needle = query.strip().casefold()  # type: ignore[union-attr]
    return any(needle in (v or "").casefold() for v in values)


def matches_value(value: Any, selected: str | None) -> bool:
    """Exact, case-insensitive match of a selection against a field value."""
    if is_unset(selected):
        return True
    return str(value).casefold() == selected.casefold()  # type: ignore[union-attr]


@dataclass
class FilterState:
    """Search text plus per-field selections, e.g. {"status": "Active"}.

    Selection keys are record attribute names.
    """

    search: str = ""
    selections: dict[str, str] = field(default_factory=dict)

    def select(self, name: str, value: str | None) -> None:
        self.selections[name] = value if value is not None else ALL

    @property
    def is_active(self) -> bool:
        return not is_unset(self.search) or any(
            not is_unset(v) for v in self.selections.values()
        )


def build_predicates(
    state: FilterState,
    search_fields: Sequence[str] = (),
    search: bool = True,
) -> list[Predicate]:
    """Turn a filter state into record predicates.

    Args:
        state: Current filter state
        search_fields: Record attributes the search text is matched against
        search: False when the search text is applied server-side
    """
    predicates: list[Predicate] = []

    if search and search_fields and not is_unset(state.search):
        getters = [attrgetter(name) for name in search_fields]
        query = state.search
        predicates.append(lambda r: matches_search(query, *(g(r) for g in getters)))

    for name, selected in state.selections.items():
        if is_unset(selected):
            continue
        getter = attrgetter(name)
        predicates.append(
            lambda r, getter=getter, selected=selected: matches_value(getter(r), selected)
        )

    return predicates


def filter_records(records: Iterable[R], predicates: Sequence[Predicate]) -> list[R]:
    return [r for r in records if all(p(r) for p in predicates)]


# =============================================================================
# SORTING
# =============================================================================


def text_key(name: str) -> SortKey:
    getter = attrgetter(name)
    return lambda r: (getter(r) or "").casefold()


def number_key(name: str) -> SortKey:
    getter = attrgetter(name)
    return lambda r: float(getter(r) or 0)


def date_key(name: str) -> SortKey:
    """Chronological key; missing or invalid dates sort first."""
    getter = attrgetter(name)

    def key(record: Any) -> float:
        parsed = parse_datetime(getter(record))
        return parsed.timestamp() if parsed else -math.inf

    return key


@dataclass
class SortState(Generic[F]):
    field: F
    direction: SortDirection = "asc"

    def toggle(self, field: F) -> None:
        """Clicking the active column flips direction, another column resets to asc."""
        if field == self.field:
            self.direction = "desc" if self.direction == "asc" else "asc"
        else:
            self.field = field
            self.direction = "asc"


def sort_records(
    records: Iterable[R],
    key: SortKey,
    direction: SortDirection = "asc",
) -> list[R]:
    """Stable sort; ties keep their original order in both directions."""
    return sorted(records, key=key, reverse=direction == "desc")


def sort_by(
    records: Iterable[R],
    state: SortState[F],
    keys: Mapping[F, SortKey],
) -> list[R]:
    return sort_records(records, keys[state.field], state.direction)


# =============================================================================
# PAGINATION
# =============================================================================


@dataclass(frozen=True)
class PageRequest:
    """0-based page index and fixed page size."""

    page: int = 0
    size: int = 10

    @property
    def skip(self) -> int:
        return self.page * self.size

    @property
    def limit(self) -> int:
        return self.size


def total_pages(total: int, size: int) -> int:
    if size <= 0:
        return 1
    return max(1, math.ceil(total / size))


@dataclass(frozen=True)
class PageSummary:
    """Footer numbers: "Showing {start} to {end} of {total}".

    `total` is always the server total. When client-side filters hid rows
    of the fetched page, `filtered_out` says how many.
    """

    start: int
    end: int
    total: int
    filtered_out: int = 0

    @property
    def is_filtered(self) -> bool:
        return self.filtered_out > 0

    @property
    def text(self) -> str:
        text = f"Showing {self.start} to {self.end} of {self.total}"
        if self.is_filtered:
            text += f" ({self.filtered_out} hidden by filters)"
        return text


def summarize_page(
    request: PageRequest,
    server_total: int,
    fetched: int,
    shown: int,
) -> PageSummary:
    if shown == 0:
        return PageSummary(start=0, end=0, total=server_total, filtered_out=fetched)
    start = request.skip + 1
    return PageSummary(
        start=start,
        end=start + shown - 1,
        total=server_total,
        filtered_out=fetched - shown,
    )
