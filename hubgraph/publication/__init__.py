"""Publication of graph and dashboard documents."""

from __future__ import annotations

from .models import DashboardSnapshot, build_dashboard
from .store import Publication, PublicationReader, PublicationStore

__all__ = [
    "DashboardSnapshot",
    "Publication",
    "PublicationReader",
    "PublicationStore",
    "build_dashboard",
]
