"""Contributions - the raw inputs that earn slices.

Each contribution records what a contributor put in (hours, dollars, or a
negotiated value) together with a snapshot of the multiplier and slice count
in effect when it was recorded. The snapshot is permanent: later changes to
the multiplier table or to the contributor's hourly rate never rewrite history.

Contribution types and multipliers:
    - time:         hours x hourly rate x 2
    - cash:         amount x 4
    - non-cash:     fair market value x 2
    - idea:         negotiated value x 1
    - relationship: negotiated value x 1
"""

from typing import Literal, Optional, Dict
from decimal import Decimal
from datetime import date, datetime
from pydantic import Field

from .base import DomainModel, SliceCount, ContributorId, ContributionId
from .contributors import DeletionState, ActiveState, SoftDeletedState


ContributionType = Literal["time", "cash", "non-cash", "idea", "relationship"]

CONTRIBUTION_TYPE_LABELS: Dict[str, str] = {
    "time": "Time",
    "cash": "Cash",
    "non-cash": "Non-Cash",
    "idea": "Idea/IP",
    "relationship": "Relationship",
}


# =============================================================================
# Contribution
# =============================================================================

class Contribution(DomainModel):
    """A single contribution made by a contributor.

    Invariant: slices == calculate_slices(type, value, hourly_rate) evaluated
    when the row was created. Build new rows through
    engine.slices.create_contribution so the snapshot is always taken.

    value is unconstrained; the form layer rejects negative or nonsensical
    amounts before a row is built.

    Examples:
        100 hours at $50/hr:
            type="time", value=100, multiplier=2, slices=10000

        $5,000 cash:
            type="cash", value=5000, multiplier=4, slices=20000
    """

    id: ContributionId = Field(
        description="Unique contribution identifier"
    )

    contributor_id: ContributorId = Field(
        description="Owning contributor"
    )

    type: ContributionType = Field(
        description="Contribution type (drives the multiplier)"
    )

    value: Decimal = Field(
        description="Raw value: hours for time, dollars for cash/non-cash, "
                    "negotiated slice-equivalent value for idea/relationship"
    )

    description: Optional[str] = Field(
        default=None,
        description="Free-text description"
    )

    contribution_date: date = Field(
        description="Calendar date the contribution was made"
    )

    multiplier: Decimal = Field(
        description="Multiplier in effect when the contribution was recorded"
    )

    slices: SliceCount = Field(
        description="Slices earned, fixed at creation time"
    )

    created_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp the row was recorded"
    )

    deletion: DeletionState = Field(
        default_factory=ActiveState,
        description="Active or soft-deleted (directly or with its contributor)"
    )

    @property
    def is_deleted(self) -> bool:
        return isinstance(self.deletion, SoftDeletedState)

    @property
    def is_cascade_deleted(self) -> bool:
        return isinstance(self.deletion, SoftDeletedState) and self.deletion.is_cascade

    @property
    def can_restore_independently(self) -> bool:
        """Only directly deleted rows can be restored on their own.

        Cascade-deleted rows return with their contributor.
        """
        if not isinstance(self.deletion, SoftDeletedState):
            return False
        return not self.deletion.is_cascade
