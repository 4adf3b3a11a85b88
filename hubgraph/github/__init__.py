"""GitHub events client, quota tracking and event models."""

from __future__ import annotations

from .client import GitHubEventsClient, GitHubEventsConfig
from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from .models import (
    EventPage,
    EventPayload,
    EventRepo,
    FetchOutcome,
    Forkee,
    GitHubEvent,
    NotModified,
    RateLimited,
)
from .quota import QuotaState, RateLimitTracker

__all__ = [
    "EventPage",
    "EventPayload",
    "EventRepo",
    "FetchOutcome",
    "Forkee",
    "GitHubAPIError",
    "GitHubConfigError",
    "GitHubEvent",
    "GitHubEventsClient",
    "GitHubEventsConfig",
    "GitHubResponseShapeError",
    "GitHubTransportError",
    "NotModified",
    "QuotaState",
    "RateLimitTracker",
    "RateLimited",
]
