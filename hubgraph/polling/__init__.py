"""Poll orchestration: fetch, build, publish and schedule."""

from __future__ import annotations

from .config import PollerConfig
from .errors import PollerConfigError, RateLimitRetriesExhaustedError
from .observability import (
    ErrorCategory,
    PollEventLogger,
    PollEventType,
    PollRunContext,
    categorize_error,
)
from .orchestrator import (
    EventSource,
    PollOrchestrator,
    RunResult,
    RunStatus,
)
from .schedule import refresh_interval, seconds_until_next_run

__all__ = [
    "ErrorCategory",
    "EventSource",
    "PollEventLogger",
    "PollEventType",
    "PollOrchestrator",
    "PollRunContext",
    "PollerConfig",
    "PollerConfigError",
    "RateLimitRetriesExhaustedError",
    "RunResult",
    "RunStatus",
    "categorize_error",
    "refresh_interval",
    "seconds_until_next_run",
]
