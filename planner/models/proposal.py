"""Proposal model: one candidate date for an event."""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, PrivateAttr


class Proposal(BaseModel):
    """A single candidate date plus the invitees who accepted it.

    The leading flag is derived by the owning Event from the vote counts of
    all its proposals, so it is kept private and only changed through
    mark_leader() and clear_leader().
    """

    model_config = ConfigDict(validate_assignment=True)

    timestamp: AwareDatetime = Field(frozen=True, description="Proposed date")
    accepted: set[str] = Field(
        default_factory=set,
        description="Invitees who said yes to this date",
    )

    _leading: bool = PrivateAttr(default=False)

    def date(self) -> datetime:
        return self.timestamp

    @property
    def is_leading(self) -> bool:
        """Whether this proposal currently holds the most votes."""
        return self._leading

    def yes(self, uid: str) -> None:
        self.accepted.add(uid)

    def no(self, uid: str) -> None:
        self.accepted.discard(uid)

    def is_attending(self, uid: str) -> bool:
        return uid in self.accepted

    def yes_count(self) -> int:
        return len(self.accepted)

    def get_attendees(self) -> list[str]:
        """Snapshot of the accepted invitees."""
        return list(self.accepted)

    def mark_leader(self) -> None:
        self._leading = True

    def clear_leader(self) -> None:
        self._leading = False
