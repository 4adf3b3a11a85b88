"""Lifespan middleware running the poll loop beside the HTTP server.

The poller runs as a single asyncio task on the server's event loop, started
on ASGI lifespan startup and cancelled on shutdown. Request handlers share the
loop but only ever read the publication store.

Usage
-----
Register the middleware when creating the Falcon app::

    from hubgraph.api.middleware import PollerLifecycle

    app = falcon.asgi.App(middleware=[PollerLifecycle(orchestrator)])

"""

from __future__ import annotations

import asyncio
import contextlib
import typing as typ

from hubgraph.logging import get_logger, log_exception, log_info

if typ.TYPE_CHECKING:
    from hubgraph.polling.orchestrator import PollOrchestrator

__all__ = ["PollerLifecycle"]

logger = get_logger(__name__)


class PollerLifecycle:
    """Falcon middleware owning the background poll task.

    Parameters
    ----------
    orchestrator
        Orchestrator whose ``serve_forever`` loop is run.

    """

    def __init__(self, orchestrator: PollOrchestrator) -> None:
        """Initialize the middleware with the orchestrator to run."""
        self._orchestrator = orchestrator
        self._task: asyncio.Task[typ.NoReturn] | None = None

    @property
    def running(self) -> bool:
        """Return whether the poll task is alive."""
        return self._task is not None and not self._task.done()

    async def process_startup(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Start the poll loop when the server starts."""
        self._task = asyncio.create_task(
            self._orchestrator.serve_forever(), name="hubgraph-poller"
        )
        self._task.add_done_callback(self._report_exit)
        log_info(logger, "Poll loop started")

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Cancel the poll loop, wait for it to unwind and close the client."""
        task, self._task = self._task, None
        # A finished task was already reported by ``_report_exit``.
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        await self._orchestrator.aclose()
        log_info(logger, "Poll loop stopped")

    @staticmethod
    def _report_exit(task: asyncio.Task[typ.NoReturn]) -> None:
        """Log a poll loop that died from an unexpected error."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log_exception(logger, "Poll loop exited unexpectedly", exc)
