"""Application factory for the HubGraph Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI
application serving the published graph and dashboard documents and, when an
orchestrator is supplied, running the poll loop for the app's lifetime.

Usage
-----
Create a read-only app over an existing store::

    app = create_app(AppDependencies(store=store))

Create the full app with the background poller::

    from hubgraph.api.app import AppDependencies, create_app

    deps = AppDependencies(store=store, orchestrator=orchestrator)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from hubgraph.api.errors import (
    PublicationUnavailableError,
    handle_publication_unavailable,
)
from hubgraph.api.health.resources import HealthResource, ReadyResource
from hubgraph.api.resources import DashboardDataResource, GraphDataResource

if typ.TYPE_CHECKING:
    from hubgraph.polling.orchestrator import PollOrchestrator
    from hubgraph.publication.store import PublicationReader

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    store
        Read side of the publication store.
    orchestrator
        Poll orchestrator run as a lifespan task. When ``None`` the app only
        serves whatever the store already holds.

    """

    store: PublicationReader
    orchestrator: PollOrchestrator | None = None


def create_app(dependencies: AppDependencies) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Publication store and optional orchestrator.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    middleware: list[object] = []
    if dependencies.orchestrator is not None:
        from hubgraph.api.middleware import PollerLifecycle

        middleware.append(PollerLifecycle(dependencies.orchestrator))

    app = falcon.asgi.App(middleware=middleware)  # type: ignore[no-matching-overload]  # Falcon stubs

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(dependencies.store))
    app.add_route("/graphdata.json", GraphDataResource(dependencies.store))
    app.add_route("/dashboarddata.json", DashboardDataResource(dependencies.store))

    app.add_error_handler(
        PublicationUnavailableError, handle_publication_unavailable
    )

    return app
