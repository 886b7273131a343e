"""Equity rows - one contributor's share of the pie.

Rows are computed on demand from live contributors and contributions and
are never persisted. Dollar and vesting columns are filled only when the
caller asks for them.
"""

from typing import Optional
from decimal import Decimal
from pydantic import Field

from .base import DomainModel, SliceCount, ContributorId


class EquityRow(DomainModel):
    """Aggregated slices and ownership for one contributor.

    Example:
        A with 10,000 slices and B with 30,000 slices:
            EquityRow(contributor_id="a", total_slices=10000, percentage=25)
            EquityRow(contributor_id="b", total_slices=30000, percentage=75)
    """

    contributor_id: ContributorId
    contributor_name: str

    total_slices: SliceCount = Field(
        description="Sum of the contributor's live slices"
    )

    percentage: Decimal = Field(
        description="Share of total slices on a 0-100 scale (0 when total is 0)"
    )

    dollar_value: Optional[Decimal] = Field(
        default=None,
        description="Whole-dollar value of the stake at the current valuation"
    )

    vested_slices: Optional[SliceCount] = None

    vested_percentage: Optional[Decimal] = Field(
        default=None,
        description="Vested slices as a share of ALL slices (0-100)"
    )

    vested_dollar_value: Optional[Decimal] = None
