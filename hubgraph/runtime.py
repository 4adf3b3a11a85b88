"""HubGraph runtime entrypoint.

This module provides the ASGI application factory and the Granian server
launcher. :func:`create_app` wires the GitHub client, quota tracker,
publication store and poll orchestrator together and delegates to
:func:`hubgraph.api.app.create_app`, keeping the
``hubgraph.runtime:create_app`` Granian entrypoint stable.

Configuration is driven by environment variables:

- ``HUBGRAPH_HOST``: Bind address (default ``0.0.0.0``)
- ``HUBGRAPH_PORT``: Listen port (default ``3000``)
- ``HUBGRAPH_LOG_LEVEL``: Log level (default ``INFO``)
- ``HUBGRAPH_GITHUB_TOKEN``: Optional token raising the GitHub quota
- ``HUBGRAPH_PAGES``, ``HUBGRAPH_DELAY``, ``HUBGRAPH_MAX_RATE_LIMIT_RETRIES``,
  ``HUBGRAPH_IDLE_BACKOFF``: Poller settings, see
  :class:`hubgraph.polling.config.PollerConfig`

Run the service directly with ``python -m hubgraph.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from hubgraph.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid HUBGRAPH_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application with its background poller.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    from hubgraph.api.app import AppDependencies
    from hubgraph.api.app import create_app as _create_api_app
    from hubgraph.github.client import GitHubEventsClient, GitHubEventsConfig
    from hubgraph.github.quota import RateLimitTracker
    from hubgraph.polling.config import PollerConfig
    from hubgraph.polling.orchestrator import PollOrchestrator
    from hubgraph.publication.store import PublicationStore

    poller_config = PollerConfig.from_env()
    github_config = GitHubEventsConfig.from_env()

    tracker = RateLimitTracker()
    store = PublicationStore()
    client = GitHubEventsClient(github_config, tracker)
    orchestrator = PollOrchestrator(client, tracker, store, config=poller_config)

    log_info(
        logger,
        "Configured poller: pages=%d fixed_delay=%s authenticated=%s",
        poller_config.pages,
        poller_config.fixed_delay,
        github_config.authenticated,
    )
    return _create_api_app(AppDependencies(store=store, orchestrator=orchestrator))


def main() -> None:
    """Start the HubGraph server using Granian.

    Reads ``HUBGRAPH_HOST``, ``HUBGRAPH_PORT``, and ``HUBGRAPH_LOG_LEVEL``
    from the environment and starts the ASGI server. A single worker is used
    because the published documents live in process memory.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("HUBGRAPH_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("HUBGRAPH_PORT", "3000"))
    log_level_str = os.environ.get("HUBGRAPH_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid HUBGRAPH_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting HubGraph on %s:%d (log_level=%s) - http://localhost:%d/",
        host,
        port,
        normalized_level,
        port,
    )

    server = Granian(
        "hubgraph.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
        workers=1,
    )
    server.serve()


if __name__ == "__main__":
    main()
