"""Pure equity computation engine.

Every function here is a deterministic function of its arguments: no I/O,
no shared state, no clock reads. "Now" is always passed in explicitly.

Modules:
- slices:      contribution -> slices (fixed multiplier table)
- equity:      slices per contributor and ownership percentages
- vesting:     cliff + linear vesting status at an as-of date
- projections: vesting status at fixed future offsets
- valuation:   company valuation and dollar value of equity
- lifecycle:   soft delete / restore as snapshot transforms
"""

from .slices import (
    MULTIPLIERS,
    get_multiplier,
    calculate_slices,
    preview_slices,
    create_contribution,
)
from .equity import (
    active_contributors,
    active_contributions,
    total_slices,
    contributor_total_slices,
    slices_by_contributor,
    calculate_equity_percentage,
    aggregate,
    sort_by_slices,
)
from .vesting import (
    months_between,
    add_months,
    milestone_date,
    cliff_date,
    full_vest_date,
    vesting_status,
    vesting_status_at_elapsed,
    contributor_vesting_status,
    vested_equity_data,
    vesting_summary,
)
from .projections import PROJECTION_OFFSETS, project_vesting
from .valuation import (
    BASE_MULTIPLE,
    MAX_HISTORY_ENTRIES,
    round_dollars,
    calculate_growth_multiplier,
    calculate_retention_multiplier,
    confidence_level,
    calculate_valuation,
    current_valuation,
    valuation_from_config,
    equity_value,
    vested_equity_value,
    record_valuation,
)
from .lifecycle import (
    soft_delete_contributor,
    soft_delete_contribution,
    restore_contributor,
    restore_contribution,
    slices_affected,
)

__all__ = [
    # Slices
    "MULTIPLIERS",
    "get_multiplier",
    "calculate_slices",
    "preview_slices",
    "create_contribution",
    # Equity
    "active_contributors",
    "active_contributions",
    "total_slices",
    "contributor_total_slices",
    "slices_by_contributor",
    "calculate_equity_percentage",
    "aggregate",
    "sort_by_slices",
    # Vesting
    "months_between",
    "add_months",
    "milestone_date",
    "cliff_date",
    "full_vest_date",
    "vesting_status",
    "vesting_status_at_elapsed",
    "contributor_vesting_status",
    "vested_equity_data",
    "vesting_summary",
    # Projections
    "PROJECTION_OFFSETS",
    "project_vesting",
    # Valuation
    "BASE_MULTIPLE",
    "MAX_HISTORY_ENTRIES",
    "round_dollars",
    "calculate_growth_multiplier",
    "calculate_retention_multiplier",
    "confidence_level",
    "calculate_valuation",
    "current_valuation",
    "valuation_from_config",
    "equity_value",
    "vested_equity_value",
    "record_valuation",
    # Lifecycle
    "soft_delete_contributor",
    "soft_delete_contribution",
    "restore_contributor",
    "restore_contribution",
    "slices_affected",
]
