"""Unit tests for event type classification."""

from __future__ import annotations

import pytest

from hubgraph.graph import UNKNOWN_GROUP, UNKNOWN_LABEL, classify
from hubgraph.graph.classification import known_event_types


@pytest.mark.parametrize(
    ("event_type", "category", "label"),
    [
        ("CommitCommentEvent", 1, "Comment to commit"),
        ("CreateEvent", 2, "New repo created"),
        ("DeleteEvent", 3, "Something has been deleted"),
        ("ForkEvent", 4, "Repo has been forked"),
        ("GollumEvent", 5, "Wiki page edited"),
        ("IssueCommentEvent", 6, "Issue has been commented"),
        ("IssuesEvent", 7, "An issue has changed"),
        ("MemberEvent", 8, "New collaborator added"),
        ("PublicEvent", 9, "Repo made public!"),
        ("PullRequestEvent", 10, "New pull request"),
        ("PullRequestReviewCommentEvent", 11, "PR's code has been commented"),
        ("PushEvent", 12, "New commit pushed"),
        ("ReleaseEvent", 13, "New release created"),
        ("WatchEvent", 14, "Repo has been starred"),
    ],
)
def test_known_event_types(event_type: str, category: int, label: str) -> None:
    """Each known event type maps to its fixed group and label."""
    assert classify(event_type) == (category, label)


@pytest.mark.parametrize("event_type", ["", "pushevent", "DiscussionEvent"])
def test_unknown_event_types(event_type: str) -> None:
    """Unrecognised or differently cased types fall into the unknown group."""
    result = classify(event_type)

    assert result.category == UNKNOWN_GROUP
    assert result.label == UNKNOWN_LABEL


def test_known_event_groups_are_distinct() -> None:
    """No two event types share a group, and none collides with repositories."""
    groups = [classify(event_type).category for event_type in known_event_types()]

    assert len(set(groups)) == len(groups) == 14
    assert 0 not in groups
    assert UNKNOWN_GROUP not in groups
