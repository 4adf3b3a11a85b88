"""In-memory publication of the latest graph and dashboard documents.

The poller is the only writer. Each :meth:`PublicationStore.publish` call
encodes both documents up front and swaps a single immutable
:class:`Publication` into place, so HTTP readers always see a graph and
dashboard from the same run.
"""

from __future__ import annotations

import dataclasses
import threading
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    import datetime as dt

    from hubgraph.graph.models import Graph

    from .models import DashboardSnapshot

_ENCODER = msgspec.json.Encoder()


@dataclasses.dataclass(frozen=True, slots=True)
class Publication:
    """One published graph/dashboard pair."""

    version: int
    graph: Graph
    dashboard: DashboardSnapshot
    graph_document: bytes
    dashboard_document: bytes
    published_at: dt.datetime


class PublicationReader(typ.Protocol):
    """Read-only view of a publication store used by the HTTP layer."""

    def latest(self) -> Publication | None:
        """Return the current publication, if any."""
        ...


class PublicationStore:
    """Hold the latest :class:`Publication`."""

    def __init__(self) -> None:
        """Create an empty store."""
        self._current: Publication | None = None
        self._write_lock = threading.Lock()

    def publish(
        self,
        graph: Graph,
        dashboard: DashboardSnapshot,
        *,
        published_at: dt.datetime,
    ) -> Publication:
        """Encode and atomically replace the published documents."""
        graph_document = _ENCODER.encode(graph)
        dashboard_document = _ENCODER.encode(dashboard)
        with self._write_lock:
            previous = self._current
            publication = Publication(
                version=1 if previous is None else previous.version + 1,
                graph=graph,
                dashboard=dashboard,
                graph_document=graph_document,
                dashboard_document=dashboard_document,
                published_at=published_at,
            )
            self._current = publication
        return publication

    def latest(self) -> Publication | None:
        """Return the current publication, or ``None`` before the first run."""
        return self._current

    @property
    def last_published_at(self) -> dt.datetime | None:
        """Timestamp of the current publication."""
        current = self._current
        return None if current is None else current.published_at
