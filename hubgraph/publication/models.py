"""Dashboard document published alongside the graph."""

from __future__ import annotations

import typing as typ

import msgspec

from hubgraph.common.time import format_rfc1123z

if typ.TYPE_CHECKING:
    import datetime as dt

    from hubgraph.github.quota import QuotaState


class DashboardSnapshot(msgspec.Struct, frozen=True, rename="camel"):
    """Operational metrics for the display client.

    Attributes
    ----------
    requests_used
        Requests consumed in the current quota window.
    max_requests
        Quota ceiling for the identity in use.
    refresh_interval
        Seconds between poll runs.
    last_update
        RFC 1123 timestamp (numeric zone) of the graph build.

    """

    requests_used: int
    max_requests: int
    refresh_interval: int
    last_update: str


def build_dashboard(
    quota: QuotaState,
    *,
    refresh_interval: int,
    built_at: dt.datetime,
) -> DashboardSnapshot:
    """Derive a dashboard snapshot from the quota in effect at publish time."""
    return DashboardSnapshot(
        requests_used=quota.requests_used,
        max_requests=quota.limit,
        refresh_interval=refresh_interval,
        last_update=format_rfc1123z(built_at),
    )
