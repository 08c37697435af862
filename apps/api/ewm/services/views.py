from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from ewm.models import Event
from ewm.stats_client import StatsClient


class EventView(NamedTuple):
    event: Event
    views: int


def event_uri(event_id: int) -> str:
    return f"/events/{event_id}"


def fetch_views(stats: StatsClient, events: Sequence[Event]) -> dict[int, int]:
    """One batched stats lookup for ``events``; missing events count as zero."""
    if not events:
        return {}

    start = min(e.created_on for e in events)
    by_uri = stats.views_for((event_uri(e.id) for e in events), start=start)
    return {e.id: by_uri.get(event_uri(e.id), 0) for e in events}


def with_views(stats: StatsClient, events: Sequence[Event]) -> list[EventView]:
    views = fetch_views(stats, events)
    return [EventView(e, views[e.id]) for e in events]
