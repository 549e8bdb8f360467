"""Render-agnostic event summaries.

Provides:
- EventSummary: Summary of an open or finalized event
- ResponseState: Invitee classification against the final date
- build_summary: Assemble a summary from an Event
"""

from planner.summary.builder import build_summary, classify_response
from planner.summary.schemas import (
    AttendeeStatus,
    EventSummary,
    FinalDate,
    InviteeResponse,
    ProposalLine,
    ResponseState,
)

__all__ = [
    "build_summary",
    "classify_response",
    "AttendeeStatus",
    "EventSummary",
    "FinalDate",
    "InviteeResponse",
    "ProposalLine",
    "ResponseState",
]
