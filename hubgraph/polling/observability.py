"""Observability primitives for the poll loop.

Provides structured logging and error categorization for poll runs. Every
event is emitted as a ``[event.type] key=value ...`` message so log
aggregators can parse run outcomes, rate-limit waits and failures.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from hubgraph.github.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from hubgraph.logging import get_logger, log_debug, log_error, log_info, log_warning

from .errors import RateLimitRetriesExhaustedError

if typ.TYPE_CHECKING:
    import datetime as dt

    from .orchestrator import RunResult

logger = get_logger(__name__)

# HTTP status code threshold for server errors (5xx)
_HTTP_SERVER_ERROR_THRESHOLD = 500


class PollEventType(enum.StrEnum):
    """Structured log event types for poll observability."""

    RUN_STARTED = "poll.run.started"
    RUN_PUBLISHED = "poll.run.published"
    RUN_UNCHANGED = "poll.run.unchanged"
    RUN_FAILED = "poll.run.failed"
    PAGE_FETCHED = "poll.page.fetched"
    RATE_LIMITED = "poll.rate_limited"
    QUOTA_REFRESH_FAILED = "poll.quota.refresh_failed"
    WAIT_PROGRESS = "poll.wait.progress"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in alerts."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True, slots=True)
class PollRunContext:
    """Shared context for a single poll run."""

    run_number: int
    pages: int
    started_at: dt.datetime


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubTransportError, ErrorCategory.TRANSIENT),
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
    (RateLimitRetriesExhaustedError, ErrorCategory.RATE_LIMITED),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for alerting purposes.

    Returns:
        ErrorCategory indicating the type of failure for alert routing.

    """
    if isinstance(exc, GitHubAPIError):
        if (
            exc.status_code is not None
            and exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD
        ):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class PollEventLogger:
    """Emit structured poll events via femtologging.

    Events are emitted at INFO for run outcomes, WARNING for rate limiting
    and quota refresh problems, ERROR for failed runs and DEBUG for wait
    progress.
    """

    def log_run_started(self, context: PollRunContext) -> None:
        """Log poll run start."""
        log_info(
            logger,
            "[%s] run=%d pages=%d started_at=%s",
            PollEventType.RUN_STARTED,
            context.run_number,
            context.pages,
            context.started_at.isoformat(),
        )

    def log_page_fetched(
        self, context: PollRunContext, page: int, events: int
    ) -> None:
        """Log a page folded into the run's graph."""
        log_debug(
            logger,
            "[%s] run=%d page=%d events=%d",
            PollEventType.PAGE_FETCHED,
            context.run_number,
            page,
            events,
        )

    def log_run_published(
        self,
        context: PollRunContext,
        result: RunResult,
        duration: dt.timedelta,
    ) -> None:
        """Log a completed run with graph and quota metrics."""
        log_info(
            logger,
            "[%s] run=%d duration_seconds=%.3f version=%d events=%d nodes=%d "
            "links=%d rate_limit_restarts=%d",
            PollEventType.RUN_PUBLISHED,
            context.run_number,
            duration.total_seconds(),
            result.version or 0,
            result.events,
            result.nodes,
            result.links,
            result.rate_limit_restarts,
        )

    def log_run_unchanged(
        self, context: PollRunContext, page: int, duration: dt.timedelta
    ) -> None:
        """Log a run that stopped because GitHub had nothing new."""
        log_info(
            logger,
            "[%s] run=%d page=%d duration_seconds=%.3f",
            PollEventType.RUN_UNCHANGED,
            context.run_number,
            page,
            duration.total_seconds(),
        )

    def log_run_failed(
        self,
        context: PollRunContext,
        error: BaseException,
        duration: dt.timedelta,
    ) -> None:
        """Log a failed run with error categorization."""
        category = categorize_error(error)
        log_error(
            logger,
            "[%s] run=%d duration_seconds=%.3f error_type=%s error_category=%s "
            "error_message=%s",
            PollEventType.RUN_FAILED,
            context.run_number,
            duration.total_seconds(),
            type(error).__name__,
            category,
            str(error),
            exc_info=error,
        )

    def log_rate_limited(
        self,
        context: PollRunContext,
        *,
        page: int,
        attempt: int,
        wait_seconds: int,
    ) -> None:
        """Log a rate-limited attempt that will restart from page one."""
        log_warning(
            logger,
            "[%s] run=%d page=%d attempt=%d wait_seconds=%d",
            PollEventType.RATE_LIMITED,
            context.run_number,
            page,
            attempt,
            wait_seconds,
        )

    def log_quota_refresh_failed(self, error: BaseException) -> None:
        """Log a failed ``/rate_limit`` refresh; header quota is used instead."""
        log_warning(
            logger,
            "[%s] error_type=%s error_category=%s error_message=%s",
            PollEventType.QUOTA_REFRESH_FAILED,
            type(error).__name__,
            categorize_error(error),
            str(error),
        )

    def log_wait_progress(
        self, reason: str, remaining_seconds: int, requests_used: int, limit: int
    ) -> None:
        """Log progress through a rate-limit or refresh wait."""
        log_debug(
            logger,
            "[%s] reason=%s remaining_seconds=%d requests_used=%d max_requests=%d",
            PollEventType.WAIT_PROGRESS,
            reason,
            remaining_seconds,
            requests_used,
            limit,
        )
