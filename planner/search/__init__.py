"""Event listing and search.

Provides:
- EventFilter: Filter record understood by Event.matches()
- EventSet: Ordered collection of events with search
"""

from planner.search.event_set import EventSet, sort_events
from planner.search.schemas import EventFilter

__all__ = [
    "EventFilter",
    "EventSet",
    "sort_events",
]
