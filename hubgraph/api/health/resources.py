"""Health probe resources for liveness and readiness checks.

Liveness is unconditional. Readiness reports whether a graph has been
published yet, so a load balancer can hold traffic until the first poll run
completes.

Usage
-----
Register health endpoints on the Falcon app::

    from hubgraph.api.health.resources import HealthResource, ReadyResource

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(store))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from hubgraph.publication.store import PublicationReader

__all__ = ["HealthResource", "ReadyResource"]


class HealthResource:
    """Liveness probe resource returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with liveness status.

        """
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe resource.

    Responds with HTTP 200 and the publication version once a graph is
    available, and HTTP 503 with ``{"status": "waiting"}`` before that.

    """

    def __init__(self, reader: PublicationReader) -> None:
        """Bind the probe to a publication reader."""
        self._reader = reader

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests.

        Parameters
        ----------
        _req
            Falcon request (unused).
        resp
            Falcon response populated with readiness status.

        """
        publication = self._reader.latest()
        if publication is None:
            resp.media = {"status": "waiting"}
            resp.status = HTTPStatus.SERVICE_UNAVAILABLE
            return
        resp.media = {"status": "ready", "version": publication.version}
        resp.status = HTTPStatus.OK
