"""Behavioural coverage for a poll run feeding the HTTP documents."""

from __future__ import annotations

import asyncio
import typing as typ

import falcon.testing
import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from hubgraph.api import AppDependencies, create_app
from hubgraph.github import EventPage, NotModified, RateLimitTracker
from hubgraph.polling import PollerConfig, PollOrchestrator
from hubgraph.publication import PublicationStore
from tests.helpers.github_events import ManualClock, ScriptedEventSource, make_event

if typ.TYPE_CHECKING:
    from hubgraph.github import FetchOutcome

scenarios("../poll_cycle.feature")


class PollCycleContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    source: ScriptedEventSource
    store: PublicationStore
    orchestrator: PollOrchestrator
    client: falcon.testing.TestClient


@pytest.fixture
def poll_context() -> PollCycleContext:
    """Provide fresh scenario state."""
    return {}


@given(parsers.parse("a poller fetching {pages:d} pages"))
def given_poller(poll_context: PollCycleContext, pages: int) -> None:
    """Wire a scripted source, store and app together."""
    tracker = RateLimitTracker()
    store = PublicationStore()
    clock = ManualClock()
    source = ScriptedEventSource(tracker, [])
    poll_context["source"] = source
    poll_context["store"] = store
    poll_context["orchestrator"] = PollOrchestrator(
        source,
        tracker,
        store,
        config=PollerConfig(pages=pages),
        clock=clock,
        sleep=clock.sleep,
    )
    poll_context["client"] = falcon.testing.TestClient(
        create_app(AppDependencies(store=store))
    )


def _script(poll_context: PollCycleContext, outcome: FetchOutcome) -> None:
    poll_context["source"].script(outcome)


@given(parsers.parse('page {page:d} returns a "{event_type}" "{event_id}" on "{repo}"'))
def given_page_event(
    poll_context: PollCycleContext,
    page: int,
    event_type: str,
    event_id: str,
    repo: str,
) -> None:
    """Script a page holding a single event."""
    _script(
        poll_context,
        EventPage(page=page, events=(make_event(event_id, event_type, repo),)),
    )


@given(parsers.parse('page {page:d} returns a fork "{event_id}" of "{repo}" into "{fork}"'))
def given_page_fork(
    poll_context: PollCycleContext, page: int, event_id: str, repo: str, fork: str
) -> None:
    """Script a page holding a single fork event."""
    event = make_event(event_id, "ForkEvent", repo, forkee=fork)
    _script(poll_context, EventPage(page=page, events=(event,)))


@given(parsers.parse("page {page:d} then reports no changes"))
def given_page_unchanged(poll_context: PollCycleContext, page: int) -> None:
    """Script a 304 for the page."""
    _script(poll_context, NotModified(page=page))


@when("the poll run completes")
def when_run_completes(poll_context: PollCycleContext) -> None:
    """Run one poll cycle to completion."""
    asyncio.run(poll_context["orchestrator"].run_once())


@then(parsers.parse('GET /graphdata.json returns nodes "{node_ids}"'))
def then_graph_nodes(poll_context: PollCycleContext, node_ids: str) -> None:
    """Assert the served node ids in order."""
    response = poll_context["client"].simulate_get("/graphdata.json")
    assert response.status_code == 200, f"unexpected status {response.status_code}"
    served = [node["id"] for node in response.json["nodes"]]
    assert served == node_ids.split(","), f"unexpected nodes {served}"


@then(parsers.parse('the graph links are "{links}"'))
def then_graph_links(poll_context: PollCycleContext, links: str) -> None:
    """Assert the served links as ``source>target:value`` entries."""
    response = poll_context["client"].simulate_get("/graphdata.json")
    served = [
        f"{link['source']}>{link['target']}:{link['value']}"
        for link in response.json["links"]
    ]
    assert served == links.split(","), f"unexpected links {served}"


@then(
    parsers.parse(
        "GET /dashboarddata.json reports a refresh interval of {seconds:d} seconds"
    )
)
def then_dashboard_interval(poll_context: PollCycleContext, seconds: int) -> None:
    """Assert the dashboard refresh interval."""
    response = poll_context["client"].simulate_get("/dashboarddata.json")
    assert response.json["refreshInterval"] == seconds


@then(parsers.parse("the publication version is {version:d}"))
def then_publication_version(poll_context: PollCycleContext, version: int) -> None:
    """Assert the served publication version header."""
    response = poll_context["client"].simulate_get("/graphdata.json")
    assert response.headers["X-Publication-Version"] == str(version)


@then(parsers.parse("GET /graphdata.json responds with status {status:d}"))
def then_graph_status(poll_context: PollCycleContext, status: int) -> None:
    """Assert the graph route status code."""
    response = poll_context["client"].simulate_get("/graphdata.json")
    assert response.status_code == status, (
        f"expected status {status}, got {response.status_code}"
    )
