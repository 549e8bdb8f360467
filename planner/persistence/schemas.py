"""Snapshot schemas for storing events.

An event is stored as a plain structure:

    {id, name, invitees, responses, finalized,
     proposals: [{timestamp, microseconds, timezone, accepted} | null, ...]}

Removed proposals are stored as null so that every index survives a
round trip. Timestamps are epoch milliseconds, a microsecond remainder and
the zone they were proposed in.
"""

import re
from datetime import timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator, model_validator

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):(\d{2})$")


def resolve_zone(name: str) -> tzinfo:
    """Turn a stored timezone string into a tzinfo.

    Args:
        name: IANA zone name (e.g. "America/New_York") or a fixed UTC
              offset such as "+05:30"

    Returns:
        ZoneInfo for zone names, a fixed-offset timezone for offsets

    Raises:
        ValueError: If the zone is unknown or the offset is malformed
    """
    match = _OFFSET_RE.match(name)
    if match:
        sign, hours, minutes = match.groups()
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-offset if sign == "-" else offset)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        msg = f"Unknown timezone: {name}"
        raise ValueError(msg) from e


def zone_name(tz: tzinfo, offset: timedelta) -> str:
    """Name a tzinfo so that resolve_zone() can restore it.

    Args:
        tz: The timestamp's tzinfo
        offset: The timestamp's UTC offset, used when tz has no IANA key
    """
    key = getattr(tz, "key", None)
    if key:
        return key
    if offset == timedelta(0):
        return "UTC"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


class ProposalRecord(BaseModel):
    """Stored form of a proposal."""

    timestamp: int = Field(description="Epoch milliseconds")
    microseconds: int = Field(
        default=0,
        ge=0,
        le=999,
        description="Sub-millisecond remainder of the timestamp",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA zone or fixed offset; settings default when missing",
    )
    accepted: list[str] = Field(
        default_factory=list,
        description="Invitees who accepted this date",
    )

    @field_validator("timezone")
    @classmethod
    def timezone_resolves(cls, v: str | None) -> str | None:
        """Reject zones that cannot be loaded."""
        if v is not None:
            resolve_zone(v)
        return v


class EventRecord(BaseModel):
    """Stored form of an event."""

    id: str = Field(min_length=1, description="Event identifier")
    name: str = Field(description="Event name")
    invitees: list[str] = Field(default_factory=list, description="Invitees")
    responses: list[str] = Field(
        default_factory=list,
        description="Invitees who responded to any proposal",
    )
    finalized: int | None = Field(
        default=None,
        ge=0,
        description="Index of the finalized proposal",
    )
    proposals: list[ProposalRecord | None] = Field(
        default_factory=list,
        description="Proposal slots in index order, null where removed",
    )

    @model_validator(mode="after")
    def finalized_is_live(self) -> "EventRecord":
        """The finalized index must name a stored proposal."""
        if self.finalized is None:
            return self
        slots = self.proposals
        if self.finalized >= len(slots) or slots[self.finalized] is None:
            msg = f"finalized index {self.finalized} does not reference a proposal"
            raise ValueError(msg)
        return self
