"""Pytest configuration and fixtures."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from planner.models.event import Event

NEW_YORK = ZoneInfo("America/New_York")


@pytest.fixture
def now() -> datetime:
    return datetime(2017, 11, 18, tzinfo=NEW_YORK)


@pytest.fixture
def tomorrow() -> datetime:
    return datetime(2017, 11, 19, tzinfo=NEW_YORK)


@pytest.fixture
def next_week() -> datetime:
    return datetime(2017, 11, 25, tzinfo=NEW_YORK)


@pytest.fixture
def next_month() -> datetime:
    return datetime(2017, 12, 16, tzinfo=NEW_YORK)


@pytest.fixture
def event() -> Event:
    """An open event with no proposals."""
    return Event("AAA", "Party at Frey's House")


@pytest.fixture
def voted_event(
    tomorrow: datetime, next_week: datetime, next_month: datetime
) -> Event:
    """Three dates, three invitees; proposals 0 and 1 tied at two votes."""
    evt = Event("BBB", "Board game night")
    evt.propose_date(tomorrow)
    evt.propose_date(next_week)
    evt.propose_date(next_month)
    evt.invite("alice")
    evt.invite("bob")
    evt.invite("carol")
    evt.accept_proposal("alice", 0)
    evt.accept_proposal("bob", 0)
    evt.accept_proposal("bob", 1)
    evt.accept_proposal("carol", 1)
    evt.accept_proposal("carol", 2)
    return evt
