"""Event snapshots for persistence collaborators.

Provides:
- EventRecord / ProposalRecord: Stored forms of the aggregate
- serialize_event / deserialize_event: Dict snapshots with stable indices
"""

from planner.persistence.schemas import EventRecord, ProposalRecord
from planner.persistence.snapshot import (
    deserialize_event,
    event_from_record,
    event_to_record,
    serialize_event,
)

__all__ = [
    "EventRecord",
    "ProposalRecord",
    "deserialize_event",
    "event_from_record",
    "event_to_record",
    "serialize_event",
]
