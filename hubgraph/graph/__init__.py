"""Graph construction from GitHub events."""

from __future__ import annotations

from .builder import GraphBuilder, build_graph
from .classification import (
    REPOSITORY_GROUP,
    UNKNOWN_GROUP,
    UNKNOWN_LABEL,
    EventClassification,
    classify,
)
from .models import EVENT_LINK_WEIGHT, FORK_LINK_WEIGHT, Graph, Link, Node

__all__ = [
    "EVENT_LINK_WEIGHT",
    "FORK_LINK_WEIGHT",
    "REPOSITORY_GROUP",
    "UNKNOWN_GROUP",
    "UNKNOWN_LABEL",
    "EventClassification",
    "Graph",
    "GraphBuilder",
    "Link",
    "Node",
    "build_graph",
    "classify",
]
