"""Pytest configuration for phased testing.

Tests are organized by phase (f1, f2, ..., f5):

- f1: configuration and API client
- f2: query cache, mutations and toasts
- f3: roles, mapping, filter/sort/paginate
- f4: hooks, list pages, CRUD flows against the mock backend
- f5: CLI

Future phase tests are automatically skipped.
"""

import httpx
import pytest
import pytest_asyncio

from lms_dashboard.config.app_config import AppConfig, ListConfig
from lms_dashboard.hooks.base import create_context
from mock_backend import MockStore, create_app

# Current implementation phase
CURRENT_PHASE = 5


def pytest_collection_modifyitems(config, items):
    """Skip tests from phases that haven't been implemented yet."""
    for item in items:
        # Extract phase from path (tests/f2/... -> 2)
        parts = item.fspath.strpath.split("/")
        for part in parts:
            if part.startswith("f") and part[1:].isdigit():
                test_phase = int(part[1:])
                if test_phase > CURRENT_PHASE:
                    item.add_marker(
                        pytest.mark.skip(
                            reason=f"Phase F{test_phase} not yet implemented (current: F{CURRENT_PHASE})"
                        )
                    )
                break


@pytest.fixture
def store() -> MockStore:
    """Seeded in-memory backend state."""
    return MockStore()


@pytest.fixture
def backend(store):
    return create_app(store)


@pytest.fixture
def transport(backend) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=backend)


@pytest.fixture
def app_config() -> AppConfig:
    """Default config with a short search debounce."""
    return AppConfig(lists=ListConfig(page_size=10, max_limit=100, search_debounce_ms=20))


@pytest_asyncio.fixture
async def ctx(app_config, transport):
    """Dashboard context over the mock backend; the HTTP client is closed afterwards."""
    context = create_context(config=app_config, transport=transport)
    yield context
    await context.aclose()
