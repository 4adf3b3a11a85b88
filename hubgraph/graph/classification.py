"""Map GitHub event types to graph groups and labels.

Each known event type gets a stable group number so the display client can
colour it consistently. Group ``0`` is reserved for repository nodes and
``99`` catches event types GitHub adds later.

See https://docs.github.com/en/rest/using-the-rest-api/github-event-types.
"""

from __future__ import annotations

import typing as typ

REPOSITORY_GROUP = 0
UNKNOWN_GROUP = 99
UNKNOWN_LABEL = "Unknown event"


class EventClassification(typ.NamedTuple):
    """Graph group and human-readable label for an event type."""

    category: int
    label: str


_EVENT_CLASSIFICATIONS: dict[str, EventClassification] = {
    "CommitCommentEvent": EventClassification(1, "Comment to commit"),
    "CreateEvent": EventClassification(2, "New repo created"),
    "DeleteEvent": EventClassification(3, "Something has been deleted"),
    # Fired on the parent repository.
    "ForkEvent": EventClassification(4, "Repo has been forked"),
    "GollumEvent": EventClassification(5, "Wiki page edited"),
    "IssueCommentEvent": EventClassification(6, "Issue has been commented"),
    "IssuesEvent": EventClassification(7, "An issue has changed"),
    "MemberEvent": EventClassification(8, "New collaborator added"),
    "PublicEvent": EventClassification(9, "Repo made public!"),
    "PullRequestEvent": EventClassification(10, "New pull request"),
    "PullRequestReviewCommentEvent": EventClassification(
        11, "PR's code has been commented"
    ),
    "PushEvent": EventClassification(12, "New commit pushed"),
    "ReleaseEvent": EventClassification(13, "New release created"),
    "WatchEvent": EventClassification(14, "Repo has been starred"),
}

_UNKNOWN = EventClassification(UNKNOWN_GROUP, UNKNOWN_LABEL)


def classify(event_type: str) -> EventClassification:
    """Return the graph group and label for ``event_type``.

    Unrecognised types map to :data:`UNKNOWN_GROUP`.

    >>> classify("PushEvent")
    EventClassification(category=12, label='New commit pushed')
    >>> classify("SponsorshipEvent").category
    99

    """
    return _EVENT_CLASSIFICATIONS.get(event_type, _UNKNOWN)


def known_event_types() -> tuple[str, ...]:
    """Return the event types with a dedicated group."""
    return tuple(_EVENT_CLASSIFICATIONS)
