"""Resources serving the published graph and dashboard documents.

Both resources read the pre-encoded JSON held by the publication store and
never write to it. ``X-Publication-Version`` lets clients tell whether the
documents changed since their last fetch.

Usage
-----
Register the resources on the Falcon app::

    app.add_route("/graphdata.json", GraphDataResource(store))
    app.add_route("/dashboarddata.json", DashboardDataResource(store))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import falcon

from hubgraph.api.errors import PublicationUnavailableError

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from hubgraph.publication.store import Publication, PublicationReader

__all__ = ["DashboardDataResource", "GraphDataResource"]

_VERSION_HEADER = "X-Publication-Version"


def _current(reader: PublicationReader, document: str) -> Publication:
    publication = reader.latest()
    if publication is None:
        raise PublicationUnavailableError(document)
    return publication


def _send_document(resp: Response, publication: Publication, body: bytes) -> None:
    resp.status = HTTPStatus.OK
    resp.content_type = falcon.MEDIA_JSON
    resp.set_header(_VERSION_HEADER, str(publication.version))
    resp.cache_control = ["no-cache"]
    resp.data = body


class GraphDataResource:
    """Serve ``{"nodes": [...], "links": [...]}`` for the force graph."""

    def __init__(self, reader: PublicationReader) -> None:
        """Bind the resource to a publication reader."""
        self._reader = reader

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /graphdata.json requests."""
        publication = _current(self._reader, "graph")
        _send_document(resp, publication, publication.graph_document)


class DashboardDataResource:
    """Serve quota usage and refresh timing for the dashboard panel."""

    def __init__(self, reader: PublicationReader) -> None:
        """Bind the resource to a publication reader."""
        self._reader = reader

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /dashboarddata.json requests."""
        publication = _current(self._reader, "dashboard")
        _send_document(resp, publication, publication.dashboard_document)
