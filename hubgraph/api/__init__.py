"""HubGraph HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application that serves the published graph and dashboard
documents and hosts the background poll loop.

Usage
-----
Create and run the application::

    from hubgraph.api import AppDependencies, create_app

    app = create_app(AppDependencies(store=store, orchestrator=orchestrator))

Public API
----------
create_app
    Application factory registering the document, health and readiness
    routes, plus the poller lifespan middleware when an orchestrator is
    provided.
"""

from hubgraph.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
