"""Report configuration - top-level entry point for presentation output.

The ReportCFG mirrors the inclusion flags the export layer exposes
(contributions breakdown, valuation, vesting). EngineSnapshot bundles the
plain-data entities the engine reads, plus the explicit as-of date so no
computation ever consults the wall clock.
"""

from typing import List, Optional, Tuple
from datetime import date
from pydantic import Field, field_validator

from .base import DomainModel
from .contributors import Contributor
from .contributions import Contribution
from .valuation import ValuationConfig


# =============================================================================
# Company and Snapshot
# =============================================================================

class Company(DomainModel):
    """Company header information."""

    name: str = Field(
        default="My Startup",
        description="Company display name"
    )

    description: str = ""


class EngineSnapshot(DomainModel):
    """Immutable input bundle handed to the report blocks.

    Example:
        EngineSnapshot(
            company=Company(name="Acme"),
            contributors=[alice, bob],
            contributions=[...],
            valuation_config=ValuationConfig(mode="manual", manual_value=1_000_000),
            as_of=date(2025, 1, 1),
        )
    """

    company: Company = Field(default_factory=Company)
    contributors: List[Contributor] = Field(default_factory=list)
    contributions: List[Contribution] = Field(default_factory=list)
    valuation_config: Optional[ValuationConfig] = None

    as_of: date = Field(
        description="'Now' for every time-dependent computation"
    )


# =============================================================================
# Report Configuration
# =============================================================================

class ReportCFG(DomainModel):
    """Which sections to compute for a report.

    Sections:
        1. Equity summary - always included
        2. Contributions breakdown - per-contribution rows with subtotals
        3. Valuation - company valuation and per-contributor dollar values
        4. Vesting - current status, schedule and future projections
    """

    include_contributions_breakdown: bool = Field(
        default=True,
        description="Include per-contribution rows grouped by contributor"
    )

    include_valuation: bool = Field(
        default=False,
        description="Include dollar values (requires a valuation)"
    )

    include_vesting: bool = Field(
        default=False,
        description="Include vesting status, schedule and projections"
    )

    projection_offsets: Tuple[int, ...] = Field(
        default=(6, 12, 18, 24),
        description="Future offsets in months for vesting projections"
    )

    @field_validator("projection_offsets")
    @classmethod
    def validate_offsets(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        if any(offset < 0 for offset in v):
            raise ValueError("projection_offsets must be non-negative month counts")
        return v
