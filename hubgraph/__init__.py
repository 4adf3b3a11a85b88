"""HubGraph: a live graph of public GitHub activity.

The service polls GitHub's public events stream, folds each run's events
into a node/link graph and republishes it, together with quota usage, for a
force-graph display client.
"""

from __future__ import annotations

__all__: list[str] = []
