"""Errors raised by the event aggregate.

All of these are caller-input errors. They are raised before any state
changes and are meant to be caught by whatever handles the user's command
and turned into a message.
"""


class PlannerError(Exception):
    """Base class for all event planner errors."""

    code = "planner_error"

    def __init__(
        self,
        message: str,
        event_id: str | None = None,
        event_name: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.event_id = event_id
        self.event_name = event_name

    def to_dict(self) -> dict:
        """Convert to a plain dict for a command handler's reply."""
        return {
            "code": self.code,
            "message": self.message,
            "event_id": self.event_id,
            "event_name": self.event_name,
        }


class InvalidProposalError(PlannerError):
    """Referenced proposal index does not exist or was removed."""

    code = "invalid_proposal"

    def __init__(
        self,
        proposal: int,
        event_id: str | None = None,
        event_name: str | None = None,
    ):
        super().__init__(
            f"Invalid proposed date: {proposal}",
            event_id=event_id,
            event_name=event_name,
        )
        self.proposal = proposal

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["proposal"] = self.proposal
        return data


class EventFinalizedError(PlannerError):
    """A new date was proposed on an event that already has a final date."""

    code = "event_finalized"

    def __init__(self, event_id: str | None = None, event_name: str | None = None):
        super().__init__(
            f"Event {event_id} has already been finalized",
            event_id=event_id,
            event_name=event_name,
        )


class EventAlreadyFinalizedError(EventFinalizedError):
    """finalize() was called on an event that already has a final date."""

    code = "event_already_finalized"


class EventNotFinalizedError(PlannerError):
    """The final date was read before one was chosen."""

    code = "event_not_finalized"

    def __init__(self, event_id: str | None = None, event_name: str | None = None):
        super().__init__(
            f"Event {event_id} has not been finalized yet",
            event_id=event_id,
            event_name=event_name,
        )
