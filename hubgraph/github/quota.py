"""Rate limit tracking for the GitHub API identity in use.

The tracker holds the most recently observed quota as an immutable
:class:`QuotaState`. Every update swaps in a new value, so readers on the
HTTP side and the poller never observe a half-written quota.
"""

from __future__ import annotations

import dataclasses
import threading


@dataclasses.dataclass(frozen=True, slots=True)
class QuotaState:
    """Snapshot of the upstream request quota.

    Attributes
    ----------
    limit
        Request ceiling for the current window.
    remaining
        Requests left in the current window.
    reset_at
        Epoch second at which the window resets.
    poll_interval
        Seconds GitHub suggests waiting between polls (``0`` when unknown).
    observed
        ``True`` once any quota has been recorded.

    """

    limit: int = 0
    remaining: int = 0
    reset_at: int = 0
    poll_interval: int = 0
    observed: bool = False

    @property
    def requests_used(self) -> int:
        """Requests consumed in the current window."""
        return self.limit - self.remaining


class RateLimitTracker:
    """Hold the latest :class:`QuotaState` for one API identity."""

    def __init__(self, initial: QuotaState | None = None) -> None:
        """Create a tracker, optionally seeded with a known state."""
        self._state = initial or QuotaState()
        self._lock = threading.Lock()

    def record(
        self,
        *,
        limit: int | None,
        remaining: int | None,
        reset_at: int | None,
        poll_interval: int | None,
    ) -> QuotaState:
        """Overwrite the held quota; missing values are stored as zero."""
        state = QuotaState(
            limit=limit or 0,
            remaining=remaining or 0,
            reset_at=reset_at or 0,
            poll_interval=poll_interval or 0,
            observed=True,
        )
        with self._lock:
            self._state = state
        return state

    def current(self) -> QuotaState:
        """Return the held quota snapshot."""
        with self._lock:
            return self._state
