"""Domain models for the event planner.

This module exports the two core entities:
- Proposal: A candidate date and the invitees who accepted it
- Event: The aggregate negotiating a date among invitees
"""

from planner.models.event import LEADER_FLOOR, Event
from planner.models.proposal import Proposal

__all__ = [
    "Event",
    "LEADER_FLOOR",
    "Proposal",
]
