"""Vesting outputs - computed, never stored.

Vesting status is a pure function of (vesting config, total slices, as-of
date). Nothing here is persisted; every model is rebuilt on each request.

States:
    - none:        no vesting config, 100% vested
    - preCliff:    elapsed months < cliff (including as-of before start)
    - vesting:     cliff <= elapsed < cliff + ramp, linear accrual
    - fullyVested: elapsed >= cliff + ramp
"""

from typing import Literal, Optional
from decimal import Decimal
from datetime import date
from pydantic import Field

from .base import DomainModel, SliceCount, PercentValue, ContributorId


VestingState = Literal["none", "preCliff", "vesting", "fullyVested"]


# =============================================================================
# Vesting Status
# =============================================================================

class VestingStatus(DomainModel):
    """Vested/unvested breakdown for one contributor at one instant.

    vested_slices + unvested_slices == total slices, always.
    """

    state: VestingState

    percent_vested: PercentValue = Field(
        description="Share of slices vested (0-100, 2 decimals while vesting)"
    )

    vested_slices: SliceCount
    unvested_slices: SliceCount

    cliff_date: Optional[date] = Field(
        default=None,
        description="start + cliff. None when there is no cliff or no schedule"
    )

    full_vest_date: Optional[date] = Field(
        default=None,
        description="start + cliff + ramp. None when there is no schedule"
    )

    months_until_cliff: int = Field(
        default=0,
        ge=0,
        description="Countdown to the cliff, 0 once passed"
    )

    months_until_full_vest: int = Field(
        default=0,
        ge=0,
        description="Countdown to full vesting, 0 once passed"
    )


# =============================================================================
# Projections and Summaries
# =============================================================================

class VestingProjectionRow(DomainModel):
    """One contributor evaluated at one future offset."""

    contributor_id: ContributorId
    contributor_name: str

    months_ahead: int = Field(
        description="Offset from the as-of date in months (6, 12, 18, 24)"
    )

    projection_date: date
    state: VestingState
    vested_slices: SliceCount
    unvested_slices: SliceCount
    percent_vested: PercentValue


class VestedEquityItem(DomainModel):
    """Vested/unvested split for one contributor, shaped for charts."""

    contributor_id: ContributorId
    contributor_name: str
    vested_slices: SliceCount
    unvested_slices: SliceCount
    total_slices: SliceCount
    percent_vested: PercentValue
    vesting_state: VestingState


class VestingSummary(DomainModel):
    """Company-wide vesting roll-up.

    Contributors without a schedule (state "none") count as fully vested.
    """

    total_vested_slices: SliceCount
    total_unvested_slices: SliceCount
    total_slices: SliceCount

    overall_percent_vested: Decimal = Field(
        description="Vested share of all slices (100 when there are no slices)"
    )

    next_cliff_date: Optional[date] = None
    next_full_vest_date: Optional[date] = None

    contributors_pre_cliff: int = 0
    contributors_vesting: int = 0
    contributors_fully_vested: int = 0

