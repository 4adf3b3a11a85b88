"""Node/link graph structures published to the display client."""

from __future__ import annotations

import msgspec

EVENT_LINK_WEIGHT = 1
FORK_LINK_WEIGHT = 10


class Node(msgspec.Struct, frozen=True):
    """A repository or event vertex.

    Attributes
    ----------
    id
        Repository full name or event identifier.
    group
        ``0`` for repositories, the event category otherwise.
    title
        Human-readable label; empty for repositories.

    """

    id: str
    group: int
    title: str = ""


class Link(msgspec.Struct, frozen=True):
    """A directed, weighted edge between two node identifiers.

    Endpoints are not checked against the node list.
    """

    source: str
    target: str
    value: int = EVENT_LINK_WEIGHT


class Graph(msgspec.Struct, frozen=True):
    """Nodes and links in discovery order."""

    nodes: tuple[Node, ...] = ()
    links: tuple[Link, ...] = ()
