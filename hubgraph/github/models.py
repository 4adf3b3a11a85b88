"""Typed domain models for the GitHub events stream."""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

FORK_EVENT_TYPE = "ForkEvent"


class EventRepo(msgspec.Struct, frozen=True):
    """Repository that originated an event."""

    name: str


class Forkee(msgspec.Struct, frozen=True):
    """Repository created by a fork."""

    full_name: str


class EventPayload(msgspec.Struct, frozen=True):
    """The subset of an event payload the graph needs."""

    forkee: Forkee | None = None


class GitHubEvent(msgspec.Struct, frozen=True):
    """One entry from ``GET /events``; unknown fields are ignored."""

    id: str
    type: str
    repo: EventRepo
    payload: EventPayload = msgspec.field(default_factory=EventPayload)

    @property
    def repo_name(self) -> str:
        """Full name of the originating repository."""
        return self.repo.name

    @property
    def forked_repo_name(self) -> str | None:
        """Full name of the fork created by a ``ForkEvent``, if any."""
        if self.type != FORK_EVENT_TYPE or self.payload.forkee is None:
            return None
        return self.payload.forkee.full_name


@dataclasses.dataclass(frozen=True, slots=True)
class EventPage:
    """A page of events returned with HTTP 200.

    ``etag`` is the validator GitHub sent for the page. It only becomes a
    conditional request header once the run holding the page is published.
    """

    page: int
    events: tuple[GitHubEvent, ...]
    etag: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class NotModified:
    """GitHub reported no new content for the page (HTTP 304)."""

    page: int


@dataclasses.dataclass(frozen=True, slots=True)
class RateLimited:
    """GitHub refused the request because the quota is exhausted.

    ``reset_at`` is the epoch second before which no retry should be made,
    or ``0`` when GitHub gave no hint.
    """

    page: int
    reset_at: int


FetchOutcome: typ.TypeAlias = EventPage | NotModified | RateLimited
