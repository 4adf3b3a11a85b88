"""Shared GitHub event builders and fakes for tests.

This module provides deterministic ``GET /events`` payloads, a scripted
event source standing in for :class:`hubgraph.github.GitHubEventsClient`, and
a manual clock whose sleeps advance time instantly.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import msgspec

from hubgraph.github.models import GitHubEvent
from hubgraph.github.quota import QuotaState, RateLimitTracker

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from hubgraph.github.models import FetchOutcome

START = dt.datetime(2026, 10, 19, 12, 0, tzinfo=dt.UTC)


def event_payload(
    event_id: str,
    event_type: str,
    repo: str,
    *,
    forkee: str | None = None,
) -> dict[str, typ.Any]:
    """Return a raw event as GitHub serializes it, with noise fields."""
    payload: dict[str, typ.Any] = {"action": "started"}
    if forkee is not None:
        payload["forkee"] = {"id": 1, "full_name": forkee, "private": False}
    return {
        "id": event_id,
        "type": event_type,
        "actor": {"id": 7, "login": "octocat"},
        "repo": {"id": 42, "name": repo, "url": f"https://api.github.com/repos/{repo}"},
        "payload": payload,
        "public": True,
        "created_at": "2026-10-19T12:00:00Z",
    }


def make_event(
    event_id: str,
    event_type: str,
    repo: str,
    *,
    forkee: str | None = None,
) -> GitHubEvent:
    """Decode a single event built by :func:`event_payload`."""
    raw = msgspec.json.encode(event_payload(event_id, event_type, repo, forkee=forkee))
    return msgspec.json.decode(raw, type=GitHubEvent)


class ManualClock:
    """Clock advanced explicitly or by awaiting :meth:`sleep`."""

    def __init__(self, start: dt.datetime = START) -> None:
        """Start the clock at ``start``."""
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> dt.datetime:
        """Return the current fake time."""
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += dt.timedelta(seconds=seconds)

    async def sleep(self, seconds: float) -> None:
        """Record the sleep and advance time by the same amount."""
        self.sleeps.append(seconds)
        self.advance(seconds)

    @property
    def slept(self) -> float:
        """Total seconds slept."""
        return sum(self.sleeps)


class ScriptedEventSource:
    """Event source replaying scripted page outcomes in call order.

    Each entry in ``outcomes`` is either a fetch outcome or an exception to
    raise. ``quota`` is recorded on the tracker whenever the rate limit
    endpoint is queried; ``quota_error`` makes that call raise instead.
    """

    def __init__(
        self,
        tracker: RateLimitTracker,
        outcomes: cabc.Iterable[FetchOutcome | Exception],
        *,
        quota: QuotaState | None = None,
        quota_error: Exception | None = None,
    ) -> None:
        """Store the script and the quota to report."""
        self._tracker = tracker
        self._outcomes = list(outcomes)
        self._quota = quota or QuotaState(
            limit=60, remaining=57, reset_at=0, poll_interval=60
        )
        self._quota_error = quota_error
        self.pages_requested: list[int] = []
        self.rate_limit_calls = 0
        self.remembered_etags: list[dict[int, str]] = []
        self.closed = False

    def script(self, outcome: FetchOutcome | Exception) -> None:
        """Append an outcome to the end of the script."""
        self._outcomes.append(outcome)

    async def fetch_page(self, page: int) -> FetchOutcome:
        """Return the next scripted outcome."""
        self.pages_requested.append(page)
        if not self._outcomes:
            msg = f"no scripted outcome left for page {page}"
            raise AssertionError(msg)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def remember_etags(self, etags: cabc.Mapping[int, str]) -> None:
        """Record the validators handed over after a publication."""
        self.remembered_etags.append(dict(etags))

    async def aclose(self) -> None:
        """Record that the source was closed."""
        self.closed = True

    async def fetch_rate_limits(self) -> QuotaState:
        """Record and return the scripted quota."""
        self.rate_limit_calls += 1
        if self._quota_error is not None:
            raise self._quota_error
        return self._tracker.record(
            limit=self._quota.limit,
            remaining=self._quota.remaining,
            reset_at=self._quota.reset_at,
            poll_interval=self._quota.poll_interval,
        )
