"""Event aggregate: date negotiation among invitees.

An Event moves from open negotiation, where any number of dates are
proposed and voted on, to a finalized state locked to one of those dates.

Proposals live in an arena of optional slots. The index handed out by
propose_date() is a stable identifier: removing a proposal leaves a hole
and indices are never renumbered or reused.
"""

from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from planner.errors import (
    EventAlreadyFinalizedError,
    EventFinalizedError,
    EventNotFinalizedError,
    InvalidProposalError,
)
from planner.models.proposal import Proposal
from planner.summary.builder import build_summary
from planner.summary.schemas import EventSummary

if TYPE_CHECKING:
    from planner.search.schemas import EventFilter

logger = structlog.get_logger()

# A proposal needs strictly more votes than this to be marked leading
LEADER_FLOOR = 2


class Event:
    """An event whose date is being negotiated.

    Attributes:
        id: Opaque event identifier
        name: Display name
        finalized: Index of the chosen proposal, or None while open
        earliest: Live proposal with the smallest timestamp, or None
        latest: Live proposal with the largest timestamp, or None
    """

    def __init__(self, id: str, name: str):
        self._id = id
        self.name = name
        self._proposals: list[Proposal | None] = []
        # dict keys keep insertion order for display
        self._invitees: dict[str, None] = {}
        self._responses: set[str] = set()
        self.finalized: int | None = None
        self.earliest: Proposal | None = None
        self.latest: Proposal | None = None

    @classmethod
    def from_state(
        cls,
        id: str,
        name: str,
        proposals: list[Proposal | None],
        invitees: Iterable[str] = (),
        responses: Iterable[str] = (),
        finalized: int | None = None,
    ) -> "Event":
        """Rebuild an event from stored state.

        Slots given as None stay removed. The earliest/latest caches and
        leader marks are derived again from the live proposals.

        Raises:
            InvalidProposalError: If finalized does not name a live proposal
        """
        event = cls(id, name)
        event._proposals = list(proposals)
        event._invitees = dict.fromkeys(invitees)
        event._responses = set(responses)
        if finalized is not None:
            event.proposal(finalized)
        event.finalized = finalized
        event.earliest = event._find_earliest()
        event.latest = event._find_latest()
        event._remark_leader()
        return event

    def __repr__(self) -> str:
        return (
            f"Event(id={self._id!r}, name={self.name!r}, "
            f"finalized={self.finalized!r})"
        )

    @property
    def id(self) -> str:
        return self._id

    def set_name(self, name: str) -> None:
        self.name = name

    # Proposals

    def propose_date(self, timestamp: datetime) -> int:
        """Add a candidate date and return its index.

        Raises:
            EventFinalizedError: If the event already has a final date
            pydantic.ValidationError: If the timestamp is not timezone-aware
        """
        if self.is_finalized():
            raise EventFinalizedError(event_id=self._id, event_name=self.name)

        proposal = Proposal(timestamp=timestamp)
        self._proposals.append(proposal)
        index = len(self._proposals) - 1

        if self.earliest is None or proposal.timestamp < self.earliest.timestamp:
            self.earliest = proposal
        if self.latest is None or proposal.timestamp > self.latest.timestamp:
            self.latest = proposal

        logger.debug("date proposed", event_id=self._id, index=index)
        return index

    def unpropose(self, index: int) -> None:
        """Remove a proposal, leaving its index permanently unused.

        Removing a missing or already removed index changes nothing.
        """
        removed = self._slot(index)
        if removed is None:
            return

        self._proposals[index] = None

        if removed is self.earliest:
            self.earliest = self._find_earliest()
        if removed is self.latest:
            self.latest = self._find_latest()
        if self.finalized == index:
            self.finalized = None

        self._remark_leader()
        logger.debug("date unproposed", event_id=self._id, index=index)

    def proposal(self, index: int) -> Proposal:
        """Look up a live proposal.

        Raises:
            InvalidProposalError: If the slot was never issued or was removed
        """
        proposal = self._slot(index)
        if proposal is None:
            raise InvalidProposalError(
                proposal=index, event_id=self._id, event_name=self.name
            )
        return proposal

    def proposal_keys(self) -> list[int]:
        """Indices of live proposals in index order."""
        return [index for index, _ in self.live_proposals()]

    def live_proposals(self) -> Iterator[tuple[int, Proposal]]:
        """Yield (index, proposal) for every live slot in index order."""
        for index, proposal in enumerate(self._proposals):
            if proposal is not None:
                yield index, proposal

    def slots(self) -> list[Proposal | None]:
        """Every issued slot in index order, None where removed."""
        return list(self._proposals)

    def slot_count(self) -> int:
        """Number of indices handed out so far, including removed ones."""
        return len(self._proposals)

    def _slot(self, index: int) -> Proposal | None:
        if not isinstance(index, int) or index < 0 or index >= len(self._proposals):
            return None
        return self._proposals[index]

    def _find_earliest(self) -> Proposal | None:
        # strict comparison: the first of several equal timestamps wins
        best = None
        for _, proposal in self.live_proposals():
            if best is None or proposal.timestamp < best.timestamp:
                best = proposal
        return best

    def _find_latest(self) -> Proposal | None:
        best = None
        for _, proposal in self.live_proposals():
            if best is None or proposal.timestamp > best.timestamp:
                best = proposal
        return best

    # Roster

    def invite(self, uid: str) -> None:
        self._invitees[uid] = None

    def uninvite(self, uid: str) -> None:
        self._invitees.pop(uid, None)

    def get_invitees(self) -> list[str]:
        """Invitees in the order they were first added."""
        return list(self._invitees)

    def is_invited(self, uid: str) -> bool:
        return uid in self._invitees

    def get_responses(self) -> set[str]:
        return set(self._responses)

    def has_responded(self, uid: str) -> bool:
        return uid in self._responses

    def responded(self, uid: str) -> None:
        """Record that an invitee answered without touching any proposal."""
        self._responses.add(uid)

    # Voting

    def accept_proposal(self, uid: str, index: int) -> None:
        """Record a yes vote; the voter is implicitly invited.

        Raises:
            InvalidProposalError: If the proposal does not exist
        """
        proposal = self.proposal(index)
        self._invitees[uid] = None
        self._responses.add(uid)
        proposal.yes(uid)
        self._remark_leader()
        logger.debug("proposal accepted", event_id=self._id, index=index, uid=uid)

    def reject_proposal(self, uid: str, index: int) -> None:
        """Record a no vote; the voter is not added to the invitees.

        Raises:
            InvalidProposalError: If the proposal does not exist
        """
        proposal = self.proposal(index)
        self._responses.add(uid)
        proposal.no(uid)
        self._remark_leader()
        logger.debug("proposal rejected", event_id=self._id, index=index, uid=uid)

    def _remark_leader(self) -> None:
        leading_count = LEADER_FLOOR
        for _, proposal in self.live_proposals():
            leading_count = max(leading_count, proposal.yes_count())

        for _, proposal in self.live_proposals():
            if leading_count > LEADER_FLOOR and proposal.yes_count() == leading_count:
                proposal.mark_leader()
            else:
                proposal.clear_leader()

    def leaders(self) -> list[int]:
        """Indices of the proposals currently marked leading."""
        return [index for index, p in self.live_proposals() if p.is_leading]

    # Finalization

    def finalize(self, index: int) -> None:
        """Lock the event to a proposed date.

        Votes recorded on any proposal are kept as they are; finalizing a
        different date later means unfinalize() then finalize() again.

        Raises:
            InvalidProposalError: If the proposal does not exist
            EventAlreadyFinalizedError: If a final date is already set
        """
        self.proposal(index)
        if self.is_finalized():
            raise EventAlreadyFinalizedError(event_id=self._id, event_name=self.name)

        self.finalized = index
        logger.info("event finalized", event_id=self._id, index=index)

    def unfinalize(self) -> None:
        if self.finalized is not None:
            logger.info("event unfinalized", event_id=self._id, index=self.finalized)
        self.finalized = None

    def final_proposal(self) -> Proposal:
        """The chosen proposal.

        Raises:
            EventNotFinalizedError: If no date has been chosen
        """
        if self.finalized is None:
            raise EventNotFinalizedError(event_id=self._id, event_name=self.name)
        return self.proposal(self.finalized)

    def is_finalized(self) -> bool:
        return self.finalized is not None

    # Ordering and filtering

    def earliest_comparison_date(self) -> datetime | None:
        if self.is_finalized():
            return self.final_proposal().timestamp
        if self.earliest is not None:
            return self.earliest.timestamp
        return None

    def latest_comparison_date(self) -> datetime | None:
        if self.is_finalized():
            return self.final_proposal().timestamp
        if self.latest is not None:
            return self.latest.timestamp
        return None

    def compare_to(self, other: "Event") -> int:
        """Order by earliest comparison date, undated events first.

        Returns:
            -1, 0 or 1
        """
        a = self.earliest_comparison_date()
        b = other.earliest_comparison_date()

        if a is None and b is None:
            return 0
        if a is None:
            return -1
        if b is None:
            return 1
        if a == b:
            return 0
        return -1 if a < b else 1

    def matches(self, filter: "EventFilter") -> bool:
        """Check every clause set on the filter against this event.

        Events without any proposed date pass the before and after clauses.
        """
        earliest = self.earliest_comparison_date()
        latest = self.latest_comparison_date()

        if filter.finalized and not self.is_finalized():
            return False
        if filter.unfinalized and self.is_finalized():
            return False
        if filter.before is not None and earliest is not None:
            if earliest > filter.before:
                return False
        if filter.after is not None and latest is not None:
            if latest < filter.after:
                return False
        if filter.invited is not None and filter.invited not in self._invitees:
            return False
        return True

    # Summary

    def summarize(self, now: datetime) -> EventSummary:
        """Build the render-agnostic summary of this event."""
        return build_summary(self, now)
