"""Contributors, vesting configuration and soft-deletion state.

A Contributor is a person who puts time, money, ideas or relationships into the
company. The engine only ever reads contributors; creation, edits and soft
deletion belong to the persistence layer.

Deletion is modeled as a discriminated union rather than a nullable timestamp:
    - ActiveState: the record participates in every computation
    - SoftDeletedState: hidden from equity math, kept for audit and restore
"""

from typing import Annotated, Union, Literal, Optional
from datetime import date, datetime
from pydantic import Field

from .base import DomainModel, HourlyRate, MonthCount, ContributorId


# =============================================================================
# Deletion State
# =============================================================================

class ActiveState(DomainModel):
    """Record is live and included in equity computations."""

    status: Literal["active"] = "active"


class SoftDeletedState(DomainModel):
    """Record was soft-deleted.

    cascaded_from holds the parent contributor ID when a contribution was
    removed because its contributor was deleted. Cascade-deleted rows come
    back only together with their parent.

    Examples:
        Direct deletion:
            SoftDeletedState(deleted_at=datetime(2024, 3, 1, 12, 0))

        Cascade from contributor "alice":
            SoftDeletedState(deleted_at=..., cascaded_from="alice")
    """

    status: Literal["deleted"] = "deleted"

    deleted_at: datetime = Field(
        description="Timestamp of the soft deletion"
    )

    cascaded_from: Optional[ContributorId] = Field(
        default=None,
        description="Parent contributor ID if this row was cascade-deleted"
    )

    @property
    def is_cascade(self) -> bool:
        return self.cascaded_from is not None


DeletionState = Annotated[
    Union[ActiveState, SoftDeletedState],
    Field(discriminator="status")
]


# =============================================================================
# Vesting Configuration
# =============================================================================

class VestingConfig(DomainModel):
    """Cliff plus linear vesting schedule attached to a contributor.

    vesting_months is the length of the linear ramp AFTER the cliff, so the
    contributor is fully vested at start_date + cliff_months + vesting_months.

    Example:
        Standard 1-year cliff, 3-year ramp (4 years total):
            VestingConfig(start_date=date(2024, 1, 1), cliff_months=12, vesting_months=36)
            cliff date     = 2025-01-01
            full vest date = 2028-01-01
    """

    start_date: date = Field(
        description="Vesting clock zero"
    )

    cliff_months: MonthCount = Field(
        description="Months before anything vests (0 = no cliff)"
    )

    vesting_months: MonthCount = Field(
        description="Length of the post-cliff linear ramp in months"
    )

    @property
    def total_months(self) -> int:
        return self.cliff_months + self.vesting_months


# =============================================================================
# Contributor
# =============================================================================

class Contributor(DomainModel):
    """A person earning slices in the pie.

    The hourly rate is only used to price time contributions at creation time.
    The active flag is cosmetic and does not affect equity math; only the
    deletion state does.

    Example:
        Contributor(
            id="alice",
            name="Alice",
            hourly_rate=Decimal("50"),
            vesting=VestingConfig(start_date=date(2024, 1, 1), cliff_months=12, vesting_months=36),
        )
    """

    id: ContributorId = Field(
        description="Unique contributor identifier"
    )

    name: str = Field(
        description="Display name"
    )

    email: Optional[str] = Field(
        default=None,
        description="Contact email (informational only)"
    )

    hourly_rate: HourlyRate = Field(
        description="Market hourly rate used for time contributions"
    )

    active: bool = Field(
        default=True,
        description="Cosmetic active flag (does not affect equity)"
    )

    vesting: Optional[VestingConfig] = Field(
        default=None,
        description="Vesting schedule. None = fully vested, no schedule"
    )

    deletion: DeletionState = Field(
        default_factory=ActiveState,
        description="Active or soft-deleted"
    )

    @property
    def is_deleted(self) -> bool:
        return isinstance(self.deletion, SoftDeletedState)
