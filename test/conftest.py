"""Pytest configuration and fixtures

Provides shared fixtures for all tests: settings builders, a fake BookStack
upstream served through httpx.MockTransport, and fully wired server components.
"""

import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookstack_mcp.client import BookStackClient  # noqa: E402
from bookstack_mcp.config import AppSettings  # noqa: E402
from bookstack_mcp.logger import DefaultLogger  # noqa: E402
from bookstack_mcp.mcp_server.components import initialize_components  # noqa: E402
from mock.bookstack_api import BASE_URL, FakeBookStackApi  # noqa: E402


def build_settings(**sections: Dict[str, Any]) -> AppSettings:
    """AppSettings pointing at the fake upstream, with per-section overrides."""
    raw: Dict[str, Any] = {
        "bookstack": {"base_url": BASE_URL, "token_id": "token-id", "token_secret": "token-secret"},
    }
    for name, values in sections.items():
        raw.setdefault(name, {}).update(values)
    return AppSettings.model_validate(raw)


@pytest.fixture
def logger():
    return DefaultLogger("bookstack_mcp.test")


@pytest.fixture
def fake_api():
    api = FakeBookStackApi()
    api.add("books", name="Operations Handbook", slug="operations-handbook", description="Runbooks")
    api.add("books", name="Engineering Guide", slug="engineering-guide", description="How we build")
    api.add("chapters", name="Deploying", book_id=1, priority=0)
    api.add("pages", name="Deploying the gateway", book_id=1, chapter_id=3, html="<p>steps</p>")
    api.add("shelves", name="Platform", description="Platform team")
    api.add("users", name="Ada Admin", email="ada@example.com")
    return api


@pytest.fixture
def settings_factory():
    return build_settings


@pytest.fixture
def settings():
    return build_settings()


@pytest.fixture
def bookstack_client(settings, fake_api, logger):
    return BookStackClient(settings.bookstack, logger, transport=fake_api.transport)


@pytest.fixture
def components(settings, fake_api, logger):
    return initialize_components(settings=settings, logger=logger, transport=fake_api.transport)
