"""Event planner: negotiate a date for an event among invitees."""

from planner.errors import (
    EventAlreadyFinalizedError,
    EventFinalizedError,
    EventNotFinalizedError,
    InvalidProposalError,
    PlannerError,
)
from planner.models import Event, Proposal

__all__ = [
    "Event",
    "Proposal",
    "PlannerError",
    "InvalidProposalError",
    "EventFinalizedError",
    "EventAlreadyFinalizedError",
    "EventNotFinalizedError",
]
