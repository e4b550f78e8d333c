"""Query cache, mutations and toast notifications."""

from lms_dashboard.query.client import (
    Mutation,
    QueryClient,
    QueryKey,
    QueryObserver,
    QueryResult,
    make_query_key,
)
from lms_dashboard.query.toast import Toast, Toaster

__all__ = [
    "Mutation",
    "QueryClient",
    "QueryKey",
    "QueryObserver",
    "QueryResult",
    "make_query_key",
    "Toast",
    "Toaster",
]
