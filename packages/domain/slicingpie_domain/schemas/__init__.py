"""Slicing Pie domain schemas.

This package contains all Pydantic models for the domain layer:
- Base types and conventions
- Contributors, vesting configuration and soft-deletion state
- Contributions and their slice snapshots
- Equity rows
- Vesting status, projections and summaries
- Valuation configuration and results
- Report configuration and the engine input snapshot

Usage:
    from slicingpie_domain.schemas import (
        Contributor, Contribution, VestingConfig,
        EquityRow, VestingStatus, ValuationConfig, ReportCFG
    )
"""

# Base types
from .base import (
    DomainModel,
    SliceCount,
    MoneyAmount,
    HourlyRate,
    PercentValue,
    ChurnRate,
    MonthCount,
    ContributorId,
    ContributionId,
)

# Contributors
from .contributors import (
    ActiveState,
    SoftDeletedState,
    DeletionState,
    VestingConfig,
    Contributor,
)

# Contributions
from .contributions import (
    ContributionType,
    CONTRIBUTION_TYPE_LABELS,
    Contribution,
)

# Equity
from .equity import EquityRow

# Vesting
from .vesting import (
    VestingState,
    VestingStatus,
    VestingProjectionRow,
    VestedEquityItem,
    VestingSummary,
)

# Valuation
from .valuation import (
    ValuationMode,
    ConfidenceLevel,
    MAX_HISTORY_YEARS,
    ProfitYear,
    BusinessMetrics,
    ValuationConfig,
    ValuationBreakdown,
    ValuationResult,
    ValuationHistoryEntry,
)

# Report
from .report import (
    Company,
    EngineSnapshot,
    ReportCFG,
)

__all__ = [
    # Base types
    "DomainModel",
    "SliceCount",
    "MoneyAmount",
    "HourlyRate",
    "PercentValue",
    "ChurnRate",
    "MonthCount",
    "ContributorId",
    "ContributionId",
    # Contributors
    "ActiveState",
    "SoftDeletedState",
    "DeletionState",
    "VestingConfig",
    "Contributor",
    # Contributions
    "ContributionType",
    "CONTRIBUTION_TYPE_LABELS",
    "Contribution",
    # Equity
    "EquityRow",
    # Vesting
    "VestingState",
    "VestingStatus",
    "VestingProjectionRow",
    "VestedEquityItem",
    "VestingSummary",
    # Valuation
    "ValuationMode",
    "ConfidenceLevel",
    "MAX_HISTORY_YEARS",
    "ProfitYear",
    "BusinessMetrics",
    "ValuationConfig",
    "ValuationBreakdown",
    "ValuationResult",
    "ValuationHistoryEntry",
    # Report
    "Company",
    "EngineSnapshot",
    "ReportCFG",
]
