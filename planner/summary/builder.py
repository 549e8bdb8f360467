"""Assemble an EventSummary from an Event."""

from datetime import datetime
from typing import TYPE_CHECKING

from planner.summary.schemas import (
    AttendeeStatus,
    EventSummary,
    FinalDate,
    InviteeResponse,
    ProposalLine,
    ResponseState,
)

if TYPE_CHECKING:
    from planner.models.event import Event


def classify_response(event: "Event", uid: str) -> ResponseState:
    """Classify an invitee against the final date of a finalized event.

    Having responded is judged on the event as a whole: an invitee who only
    accepted some other date still counts as having answered.

    Args:
        event: A finalized event
        uid: Invitee identifier

    Returns:
        The invitee's ResponseState
    """
    if not event.has_responded(uid):
        return ResponseState.UNRESPONDED
    if event.final_proposal().is_attending(uid):
        return ResponseState.ATTENDING
    return ResponseState.NOT_ATTENDING


def build_summary(event: "Event", now: datetime) -> EventSummary:
    """Build the summary for an event relative to a reference time.

    Args:
        event: Event to summarize
        now: Reference time used for the ``until`` deltas

    Returns:
        EventSummary for the open or finalized state
    """
    summary = EventSummary(
        id=event.id,
        name=event.name,
        is_finalized=event.is_finalized(),
    )

    if not event.is_finalized():
        summary.proposals = [
            ProposalLine(
                index=index,
                timestamp=proposal.timestamp,
                until=proposal.timestamp - now,
                yes_count=proposal.yes_count(),
                is_leading=proposal.is_leading,
            )
            for index, proposal in event.live_proposals()
        ]
        summary.respondents = [
            InviteeResponse(uid=uid, responded=event.has_responded(uid))
            for uid in event.get_invitees()
        ]
        return summary

    final = event.final_proposal()
    summary.final = FinalDate(
        index=event.finalized,
        timestamp=final.timestamp,
        until=final.timestamp - now,
    )
    summary.attendees = [
        AttendeeStatus(uid=uid, state=classify_response(event, uid))
        for uid in event.get_invitees()
    ]
    return summary
