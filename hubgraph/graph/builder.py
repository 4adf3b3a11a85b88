"""Fold pages of GitHub events into a node/link graph.

One :class:`GraphBuilder` lives for one poll attempt. Pages are folded in
order with :meth:`GraphBuilder.add_events`; repository nodes are deduplicated
across every page of the attempt, while event and fork nodes are emitted as
they are discovered.
"""

from __future__ import annotations

import typing as typ

from .classification import REPOSITORY_GROUP, classify
from .models import EVENT_LINK_WEIGHT, FORK_LINK_WEIGHT, Graph, Link, Node

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from hubgraph.github.models import GitHubEvent


class GraphBuilder:
    """Accumulate graph entities across the pages of one run."""

    def __init__(self) -> None:
        """Start with an empty graph."""
        self._nodes: list[Node] = []
        self._links: list[Link] = []
        self._seen_repos: set[str] = set()
        self._event_count = 0

    @property
    def event_count(self) -> int:
        """Number of events folded so far."""
        return self._event_count

    def add_events(self, events: cabc.Sequence[GitHubEvent]) -> None:
        """Fold one page of events into the graph."""
        self._add_repository_nodes(events)
        for event in events:
            self._add_event(event)
        self._event_count += len(events)

    def build(self) -> Graph:
        """Return an immutable snapshot of the accumulated graph."""
        return Graph(nodes=tuple(self._nodes), links=tuple(self._links))

    def _add_repository_nodes(self, events: cabc.Sequence[GitHubEvent]) -> None:
        for event in events:
            name = event.repo_name
            if name in self._seen_repos:
                continue
            self._seen_repos.add(name)
            self._nodes.append(Node(id=name, group=REPOSITORY_GROUP))

    def _add_event(self, event: GitHubEvent) -> None:
        category, label = classify(event.type)
        self._nodes.append(Node(id=event.id, group=category, title=label))
        self._links.append(
            Link(source=event.repo_name, target=event.id, value=EVENT_LINK_WEIGHT)
        )

        fork_name = event.forked_repo_name
        if fork_name is not None:
            self._nodes.append(Node(id=fork_name, group=REPOSITORY_GROUP))
            self._links.append(
                Link(source=event.repo_name, target=fork_name, value=FORK_LINK_WEIGHT)
            )


def build_graph(events: cabc.Iterable[GitHubEvent]) -> Graph:
    """Build a graph from a single batch of events."""
    builder = GraphBuilder()
    builder.add_events(list(events))
    return builder.build()
