"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from hubgraph.github.quota import RateLimitTracker
from hubgraph.publication.store import PublicationStore
from tests.helpers.github_events import ManualClock

_HUBGRAPH_ENV = (
    "HUBGRAPH_HOST",
    "HUBGRAPH_PORT",
    "HUBGRAPH_LOG_LEVEL",
    "HUBGRAPH_GITHUB_TOKEN",
    "HUBGRAPH_PAGES",
    "HUBGRAPH_DELAY",
    "HUBGRAPH_MAX_RATE_LIMIT_RETRIES",
    "HUBGRAPH_IDLE_BACKOFF",
)


@pytest.fixture(autouse=True)
def clean_hubgraph_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without HubGraph settings from the host environment."""
    for name in _HUBGRAPH_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tracker() -> RateLimitTracker:
    """Provide an empty quota tracker."""
    return RateLimitTracker()


@pytest.fixture
def store() -> PublicationStore:
    """Provide an empty publication store."""
    return PublicationStore()


@pytest.fixture
def clock() -> ManualClock:
    """Provide a manual clock starting at a fixed instant."""
    return ManualClock()
