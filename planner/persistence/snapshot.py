"""Convert events to and from their stored form."""

from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from planner.config import get_settings
from planner.models.event import Event
from planner.models.proposal import Proposal
from planner.persistence.schemas import (
    EventRecord,
    ProposalRecord,
    resolve_zone,
    zone_name,
)

logger = structlog.get_logger()

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND = timedelta(milliseconds=1)
_MICROSECOND = timedelta(microseconds=1)


def proposal_to_record(proposal: Proposal) -> ProposalRecord:
    ts = proposal.timestamp
    millis, remainder = divmod(ts - EPOCH, _MILLISECOND)
    return ProposalRecord(
        timestamp=millis,
        microseconds=remainder // _MICROSECOND,
        timezone=zone_name(ts.tzinfo, ts.utcoffset()),
        accepted=sorted(proposal.accepted),
    )


def proposal_from_record(
    record: ProposalRecord,
    default_timezone: str | None = None,
) -> Proposal:
    """Rebuild a proposal in the zone it was proposed in.

    Args:
        record: Stored proposal
        default_timezone: Zone for records stored without one. Defaults to
                          the configured default timezone.
    """
    zone = resolve_zone(
        record.timezone or default_timezone or get_settings().default_timezone
    )
    instant = EPOCH + timedelta(
        milliseconds=record.timestamp, microseconds=record.microseconds
    )
    timestamp = instant.astimezone(zone)
    return Proposal(timestamp=timestamp, accepted=set(record.accepted))


def event_to_record(event: Event) -> EventRecord:
    return EventRecord(
        id=event.id,
        name=event.name,
        invitees=event.get_invitees(),
        responses=sorted(event.get_responses()),
        finalized=event.finalized,
        proposals=[
            proposal_to_record(p) if p is not None else None for p in event.slots()
        ],
    )


def event_from_record(
    record: EventRecord,
    default_timezone: str | None = None,
) -> Event:
    proposals = [
        proposal_from_record(r, default_timezone) if r is not None else None
        for r in record.proposals
    ]
    return Event.from_state(
        id=record.id,
        name=record.name,
        proposals=proposals,
        invitees=record.invitees,
        responses=record.responses,
        finalized=record.finalized,
    )


def serialize_event(event: Event) -> dict[str, Any]:
    """Snapshot an event into a JSON-compatible dict.

    Args:
        event: Event to snapshot

    Returns:
        Dict with id, name, invitees, responses, finalized and proposals
    """
    data = event_to_record(event).model_dump()
    logger.debug("event serialized", event_id=event.id, slots=len(data["proposals"]))
    return data


def deserialize_event(
    payload: dict[str, Any],
    default_timezone: str | None = None,
) -> Event:
    """Rebuild an event from a snapshot produced by serialize_event().

    Args:
        payload: Snapshot dict
        default_timezone: Zone for proposals stored without one

    Returns:
        Event with the same indices, holes, rosters and final date

    Raises:
        pydantic.ValidationError: If the snapshot is malformed
    """
    record = EventRecord.model_validate(payload)
    event = event_from_record(record, default_timezone)
    logger.debug("event deserialized", event_id=event.id, slots=event.slot_count())
    return event
