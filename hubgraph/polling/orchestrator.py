"""Poll-transform-publish loop.

A run fetches ``pages`` pages of GitHub events in order and folds them into
one graph. A 304 on any page ends the run without publishing. A rate-limited
page discards the partial graph, waits for the quota reset and restarts the
run from page one, up to ``max_rate_limit_retries`` times. Any other failure
aborts the run; the previous publication stays visible and the loop carries
on. Page ETags are handed back to the client only once a run is published,
so a discarded run never turns into a 304 on the next attempt.

Between runs the loop waits until the next run is due, measured from the
last successful publication rather than from a free-running timer.
"""

from __future__ import annotations

import asyncio
import dataclasses
import datetime as dt
import enum
import math
import typing as typ

from hubgraph.common.time import from_epoch, utcnow
from hubgraph.github.errors import (
    GitHubAPIError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from hubgraph.github.models import EventPage, NotModified, RateLimited
from hubgraph.graph.builder import GraphBuilder
from hubgraph.publication.models import build_dashboard

from .config import PollerConfig
from .errors import RateLimitRetriesExhaustedError
from .observability import PollEventLogger, PollRunContext
from .schedule import refresh_interval, seconds_until_next_run

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from hubgraph.github.models import FetchOutcome
    from hubgraph.github.quota import QuotaState, RateLimitTracker
    from hubgraph.publication.store import PublicationStore

    Clock: typ.TypeAlias = cabc.Callable[[], dt.datetime]
    Sleeper: typ.TypeAlias = cabc.Callable[[float], cabc.Awaitable[None]]

_WAIT_TICK_S = 1.0
_PROGRESS_EVERY_TICKS = 30

_QUOTA_REFRESH_FAILURES = (
    GitHubAPIError,
    GitHubResponseShapeError,
    GitHubTransportError,
)


class EventSource(typ.Protocol):
    """Interface the orchestrator needs from the GitHub client."""

    async def fetch_page(self, page: int) -> FetchOutcome:
        """Fetch one 1-based page of events."""
        ...

    async def fetch_rate_limits(self) -> QuotaState:
        """Refresh and record the current quota."""
        ...

    def remember_etags(self, etags: cabc.Mapping[int, str]) -> None:
        """Keep the validators of a published run for conditional fetches."""
        ...

    async def aclose(self) -> None:
        """Release HTTP resources."""
        ...


class RunStatus(enum.StrEnum):
    """How a poll run ended."""

    PUBLISHED = "published"
    UNCHANGED = "unchanged"


@dataclasses.dataclass(frozen=True, slots=True)
class RunResult:
    """Summary of a single poll run."""

    status: RunStatus
    pages_fetched: int
    events: int = 0
    nodes: int = 0
    links: int = 0
    rate_limit_restarts: int = 0
    version: int | None = None


class PollOrchestrator:
    """Drive poll runs and publish their graphs."""

    def __init__(  # noqa: PLR0913
        self,
        client: EventSource,
        tracker: RateLimitTracker,
        store: PublicationStore,
        *,
        config: PollerConfig | None = None,
        event_logger: PollEventLogger | None = None,
        clock: Clock = utcnow,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Create an orchestrator bound to a client, quota tracker and store."""
        self._client = client
        self._tracker = tracker
        self._store = store
        self._config = config or PollerConfig()
        self._event_logger = event_logger or PollEventLogger()
        self._clock = clock
        self._sleep = sleep
        self._run_number = 0
        self._last_attempt_at: dt.datetime | None = None

    @property
    def refresh_interval(self) -> int:
        """Seconds between runs under the current configuration and quota."""
        return refresh_interval(
            pages=self._config.pages,
            fixed_delay=self._config.fixed_delay,
            quota=self._tracker.current(),
        )

    async def aclose(self) -> None:
        """Close the event source."""
        await self._client.aclose()

    async def prime(self) -> None:
        """Load the quota before the first run so scheduling has a baseline."""
        await self._refresh_quota()

    async def run_once(self) -> RunResult:
        """Run one poll cycle, restarting it while rate limited.

        Raises
        ------
        GitHubTransportError, GitHubResponseShapeError, GitHubAPIError
            When a page cannot be fetched; nothing is published.
        RateLimitRetriesExhaustedError
            When every allowed restart is rate limited as well.

        """
        self._run_number += 1
        started_at = self._clock()
        self._last_attempt_at = started_at
        context = PollRunContext(
            run_number=self._run_number,
            pages=self._config.pages,
            started_at=started_at,
        )
        self._event_logger.log_run_started(context)

        try:
            result = await self._run_with_restarts(context)
        except Exception as exc:
            self._event_logger.log_run_failed(
                context, exc, self._clock() - started_at
            )
            raise

        duration = self._clock() - started_at
        if result.status is RunStatus.PUBLISHED:
            self._event_logger.log_run_published(context, result, duration)
        else:
            self._event_logger.log_run_unchanged(
                context, result.pages_fetched + 1, duration
            )
        return result

    async def serve_forever(self) -> typ.NoReturn:
        """Poll and publish until the task is cancelled."""
        await self.prime()
        while True:
            published = await self._run_cycle()
            await self._wait_until(self._next_run_at(published=published), "refresh")

    async def _run_cycle(self) -> bool:
        """Run once; failures end the cycle and were logged by ``run_once``."""
        try:
            result = await self.run_once()
        except Exception:  # noqa: BLE001 - any failure aborts only this run
            return False
        return result.status is RunStatus.PUBLISHED

    def _next_run_at(self, *, published: bool) -> dt.datetime:
        now = self._clock()
        anchor = self._store.last_published_at or self._last_attempt_at or now
        wait = seconds_until_next_run(anchor, self.refresh_interval, now=now)
        if not published:
            wait = max(wait, self._config.idle_backoff_s)
        return now + dt.timedelta(seconds=wait)

    async def _run_with_restarts(self, context: PollRunContext) -> RunResult:
        attempts = self._config.max_rate_limit_retries + 1
        for attempt in range(1, attempts + 1):
            outcome = await self._attempt(context)
            if not isinstance(outcome, RateLimited):
                return dataclasses.replace(outcome, rate_limit_restarts=attempt - 1)
            if attempt == attempts:
                break

            deadline = self._reset_deadline(outcome.reset_at)
            self._event_logger.log_rate_limited(
                context,
                page=outcome.page,
                attempt=attempt,
                wait_seconds=max(
                    0, math.ceil((deadline - self._clock()).total_seconds())
                ),
            )
            await self._wait_until(deadline, "rate_limit")

        raise RateLimitRetriesExhaustedError(attempts)

    async def _attempt(self, context: PollRunContext) -> RunResult | RateLimited:
        """Fetch every page into a fresh graph, or stop at the first signal."""
        builder = GraphBuilder()
        etags: dict[int, str] = {}
        for page in range(1, self._config.pages + 1):
            outcome = await self._client.fetch_page(page)
            match outcome:
                case EventPage(events=events, etag=etag):
                    builder.add_events(events)
                    if etag is not None:
                        etags[page] = etag
                    self._event_logger.log_page_fetched(context, page, len(events))
                case NotModified():
                    return RunResult(
                        status=RunStatus.UNCHANGED,
                        pages_fetched=page - 1,
                        events=builder.event_count,
                    )
                case RateLimited():
                    return outcome
        return await self._publish(builder, etags)

    async def _publish(
        self, builder: GraphBuilder, etags: dict[int, str]
    ) -> RunResult:
        await self._refresh_quota()
        graph = builder.build()
        built_at = self._clock()
        dashboard = build_dashboard(
            self._tracker.current(),
            refresh_interval=self.refresh_interval,
            built_at=built_at,
        )
        publication = self._store.publish(graph, dashboard, published_at=built_at)
        # Validators from discarded attempts never reach the client.
        self._client.remember_etags(etags)
        return RunResult(
            status=RunStatus.PUBLISHED,
            pages_fetched=self._config.pages,
            events=builder.event_count,
            nodes=len(graph.nodes),
            links=len(graph.links),
            version=publication.version,
        )

    async def _refresh_quota(self) -> None:
        """Refresh quota from ``/rate_limit``; header values remain on failure."""
        try:
            await self._client.fetch_rate_limits()
        except _QUOTA_REFRESH_FAILURES as exc:
            self._event_logger.log_quota_refresh_failed(exc)

    def _reset_deadline(self, reset_at: int) -> dt.datetime:
        if reset_at <= 0:
            return self._clock() + dt.timedelta(
                seconds=self._config.fallback_reset_wait_s
            )
        return from_epoch(reset_at) + dt.timedelta(
            seconds=self._config.rate_limit_margin_s
        )

    async def _wait_until(self, deadline: dt.datetime, reason: str) -> None:
        """Sleep in one-second ticks until ``deadline``, logging progress."""
        ticks = 0
        while True:
            remaining = (deadline - self._clock()).total_seconds()
            if remaining <= 0:
                return
            if ticks % _PROGRESS_EVERY_TICKS == 0:
                quota = self._tracker.current()
                self._event_logger.log_wait_progress(
                    reason, math.ceil(remaining), quota.requests_used, quota.limit
                )
            await self._sleep(min(_WAIT_TICK_S, remaining))
            ticks += 1
