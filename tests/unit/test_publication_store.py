"""Unit tests for the publication store and dashboard snapshot."""

from __future__ import annotations

import datetime as dt

import msgspec
import pytest

from hubgraph.common.time import format_rfc1123z, parse_rfc1123z
from hubgraph.github import QuotaState
from hubgraph.graph import Graph, Link, Node
from hubgraph.publication import DashboardSnapshot, PublicationStore, build_dashboard

_BUILT_AT = dt.datetime(2026, 10, 19, 12, 30, 5, tzinfo=dt.UTC)


def _graph(event_id: str = "e1") -> Graph:
    return Graph(
        nodes=(Node(id="octo/a", group=0), Node(id=event_id, group=12, title="x")),
        links=(Link(source="octo/a", target=event_id, value=1),),
    )


def _dashboard(remaining: int = 40) -> DashboardSnapshot:
    quota = QuotaState(
        limit=60, remaining=remaining, reset_at=0, poll_interval=60, observed=True
    )
    return build_dashboard(quota, refresh_interval=180, built_at=_BUILT_AT)


def test_dashboard_document_uses_camel_case_keys() -> None:
    """The dashboard serializes with the display client's field names."""
    document = msgspec.json.decode(msgspec.json.encode(_dashboard()))

    assert document == {
        "requestsUsed": 20,
        "maxRequests": 60,
        "refreshInterval": 180,
        "lastUpdate": "Mon, 19 Oct 2026 12:30:05 +0000",
    }


def test_last_update_round_trips_to_the_build_instant() -> None:
    """lastUpdate parses back to the graph build time."""
    dashboard = _dashboard()

    assert parse_rfc1123z(dashboard.last_update) == _BUILT_AT


def test_naive_timestamps_are_rejected() -> None:
    """Dashboard timestamps must carry a zone."""
    with pytest.raises(ValueError, match="timezone-aware"):
        format_rfc1123z(dt.datetime(2026, 10, 19, 12, 0))  # noqa: DTZ001


def test_store_is_empty_before_first_publish() -> None:
    """Nothing is readable until the first publication."""
    store = PublicationStore()

    assert store.latest() is None
    assert store.last_published_at is None


def test_publish_encodes_documents_and_increments_version() -> None:
    """Each publish produces a new version with pre-encoded documents."""
    store = PublicationStore()

    first = store.publish(_graph("e1"), _dashboard(), published_at=_BUILT_AT)
    later = _BUILT_AT + dt.timedelta(minutes=3)
    second = store.publish(_graph("e2"), _dashboard(30), published_at=later)

    assert (first.version, second.version) == (1, 2)
    assert store.latest() is second
    assert store.last_published_at == later
    graph_doc = msgspec.json.decode(second.graph_document)
    assert graph_doc["links"] == [{"source": "octo/a", "target": "e2", "value": 1}]
    dashboard_doc = msgspec.json.decode(second.dashboard_document)
    assert dashboard_doc["requestsUsed"] == 30


def test_earlier_publication_is_left_intact() -> None:
    """Readers holding an old publication keep a consistent pair."""
    store = PublicationStore()
    first = store.publish(_graph("e1"), _dashboard(), published_at=_BUILT_AT)

    store.publish(_graph("e2"), _dashboard(10), published_at=_BUILT_AT)

    assert msgspec.json.decode(first.graph_document)["nodes"][1]["id"] == "e1"
    assert msgspec.json.decode(first.dashboard_document)["requestsUsed"] == 20
