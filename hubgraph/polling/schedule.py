"""Refresh cadence calculations for the poll loop."""

from __future__ import annotations

import datetime as dt
import math
import typing as typ

if typ.TYPE_CHECKING:
    from hubgraph.github.quota import QuotaState

# Safe spacing for anonymous clients: 60 requests per hour.
DEFAULT_SECONDS_PER_PAGE = 60


def refresh_interval(
    *,
    pages: int,
    fixed_delay: int | None,
    quota: QuotaState,
) -> int:
    """Return the seconds between the starts of consecutive runs.

    An operator-supplied ``fixed_delay`` wins. Otherwise GitHub's poll hint is
    scaled by the number of pages fetched per run, falling back to
    :data:`DEFAULT_SECONDS_PER_PAGE` per page before any hint is observed.
    """
    if fixed_delay is not None:
        return fixed_delay
    if quota.observed and quota.poll_interval > 0:
        return quota.poll_interval * pages
    return DEFAULT_SECONDS_PER_PAGE * pages


def next_run_due(anchor: dt.datetime, interval: int) -> dt.datetime:
    """Return when the run after ``anchor`` is due."""
    return anchor + dt.timedelta(seconds=interval)


def seconds_until_next_run(
    anchor: dt.datetime,
    interval: int,
    *,
    now: dt.datetime,
) -> int:
    """Return whole seconds until the next run, measured from ``anchor``.

    ``anchor`` is the last successful publication, so a late or skipped cycle
    shortens the next wait instead of pushing the schedule back.
    """
    remaining = (next_run_due(anchor, interval) - now).total_seconds()
    return max(0, math.ceil(remaining))
