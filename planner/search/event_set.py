"""Ordered collection of events for listing and search."""

from collections.abc import Iterable, Iterator
from functools import cmp_to_key

import structlog

from planner.models.event import Event
from planner.search.schemas import EventFilter

logger = structlog.get_logger()


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Sort events by their earliest comparison date, undated first."""
    return sorted(events, key=cmp_to_key(lambda a, b: a.compare_to(b)))


class EventSet:
    """A group of events, as returned by a search.

    Holds no rules of its own: matching is delegated to Event.matches().
    """

    def __init__(self, events: Iterable[Event] = ()):
        self._events = list(events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def size(self) -> int:
        return len(self._events)

    def at(self, index: int) -> Event:
        return self._events[index]

    def ids(self) -> list[str]:
        return [event.id for event in self._events]

    def sorted(self) -> "EventSet":
        """Copy of this set in comparison-date order."""
        return EventSet(sort_events(self._events))

    def search(self, filter: EventFilter) -> "EventSet":
        """Events matching the filter, in comparison-date order.

        Args:
            filter: Criteria; the name clause is matched here, the rest by
                    each event

        Returns:
            A new EventSet
        """
        if filter.is_empty:
            return self.sorted()

        query = filter.name.lower() if filter.name else None
        found = [
            event
            for event in self._events
            if (query is None or query in event.name.lower()) and event.matches(filter)
        ]
        logger.debug("searched events", total=len(self._events), matched=len(found))
        return EventSet(sort_events(found))
