"""Summary schemas for presenting an event.

These carry the data and its classification only. Display strings,
icons, and any chat platform's message layout belong to the presenter.
"""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ResponseState(str, Enum):
    """How an invitee stands with respect to the final date."""

    UNRESPONDED = "unresponded"
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"


class ProposalLine(BaseModel):
    """One live proposal of an open event."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Stable proposal index")
    timestamp: datetime = Field(description="Proposed date")
    until: timedelta = Field(description="Time from the reference now to the date")
    yes_count: int = Field(ge=0, description="Number of invitees who accepted")
    is_leading: bool = Field(default=False, description="Whether this date leads")


class InviteeResponse(BaseModel):
    """Whether an invitee has answered any proposal of an open event."""

    model_config = ConfigDict(frozen=True)

    uid: str = Field(description="Invitee identifier")
    responded: bool = Field(description="True once the invitee voted on any date")


class FinalDate(BaseModel):
    """The chosen date of a finalized event."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, description="Index of the finalized proposal")
    timestamp: datetime = Field(description="Final date")
    until: timedelta = Field(description="Time from the reference now to the date")


class AttendeeStatus(BaseModel):
    """An invitee's standing with respect to the final date."""

    model_config = ConfigDict(frozen=True)

    uid: str = Field(description="Invitee identifier")
    state: ResponseState = Field(description="Response classification")


class EventSummary(BaseModel):
    """Render-agnostic summary of an event.

    Open events fill proposals and respondents; finalized events fill
    final and attendees. The other pair is left empty.
    """

    id: str = Field(description="Event identifier")
    name: str = Field(description="Event name")
    is_finalized: bool = Field(description="Whether a final date was chosen")
    proposals: list[ProposalLine] = Field(
        default_factory=list,
        description="Live proposals in index order (open events)",
    )
    respondents: list[InviteeResponse] = Field(
        default_factory=list,
        description="Invitees in insertion order (open events)",
    )
    final: FinalDate | None = Field(
        default=None,
        description="The chosen date (finalized events)",
    )
    attendees: list[AttendeeStatus] = Field(
        default_factory=list,
        description="Invitees in insertion order (finalized events)",
    )

    @property
    def leading_indices(self) -> list[int]:
        """Indices of leading proposals."""
        return [p.index for p in self.proposals if p.is_leading]

    @property
    def attending(self) -> list[str]:
        """Invitees attending the final date."""
        return [a.uid for a in self.attendees if a.state == ResponseState.ATTENDING]
