"""Filter record for event searches."""

from pydantic import AwareDatetime, BaseModel, Field, model_validator


class EventFilter(BaseModel):
    """Filter criteria for event searches.

    Every clause that is set must pass. Unset clauses are ignored.
    """

    finalized: bool = Field(
        default=False,
        description="Only events that have a final date",
    )
    unfinalized: bool = Field(
        default=False,
        description="Only events still being negotiated",
    )
    before: AwareDatetime | None = Field(
        default=None,
        description="Only events whose earliest date is not after this time",
    )
    after: AwareDatetime | None = Field(
        default=None,
        description="Only events whose latest date is not before this time",
    )
    invited: str | None = Field(
        default=None,
        description="Only events that explicitly invited this invitee",
    )
    name: str | None = Field(
        default=None,
        description="Case-insensitive substring of the event name",
    )

    @model_validator(mode="after")
    def finalized_flags_exclusive(self) -> "EventFilter":
        """finalized and unfinalized cannot both be requested."""
        if self.finalized and self.unfinalized:
            msg = "finalized and unfinalized are mutually exclusive"
            raise ValueError(msg)
        return self

    @property
    def is_empty(self) -> bool:
        """True when no clause is set."""
        return not (
            self.finalized
            or self.unfinalized
            or self.before is not None
            or self.after is not None
            or self.invited is not None
            or self.name
        )
