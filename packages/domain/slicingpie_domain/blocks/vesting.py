"""Vesting computation block.

Output DataFrames:
- vesting_status: Current vested/unvested split per live contributor
- vesting_summary: Company-wide roll-up (single row)
- vesting_schedule: Cliff and full-vest dates for contributors on a schedule
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..engine import (
    active_contributors,
    cliff_date,
    contributor_vesting_status,
    full_vest_date,
    slices_by_contributor,
    vesting_summary,
)
from ..schemas import EngineSnapshot

STATUS_COLUMNS = [
    "contributor_id",
    "contributor_name",
    "state",
    "total_slices",
    "vested_slices",
    "unvested_slices",
    "percent_vested",
    "cliff_date",
    "full_vest_date",
    "months_until_cliff",
    "months_until_full_vest",
]

SCHEDULE_COLUMNS = [
    "contributor_name",
    "start_date",
    "cliff_months",
    "cliff_end_date",
    "vesting_period_months",
    "vesting_end_date",
]


class VestingBlock(Block):
    """Evaluates every live contributor's vesting at the snapshot's as-of date.

    Inputs (from context):
        - engine_snapshot: EngineSnapshot (as_of drives the evaluation)

    Outputs (to context):
        - vesting_status: DataFrame with columns listed in STATUS_COLUMNS.
          Contributors without a schedule appear with state "none".
        - vesting_summary: DataFrame with single row mirroring VestingSummary
        - vesting_schedule: DataFrame with columns listed in SCHEDULE_COLUMNS,
          one row per contributor with a vesting config
    """

    def __init__(self, snapshot_key: str = "engine_snapshot"):
        self.snapshot_key = snapshot_key

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["vesting_status", "vesting_summary", "vesting_schedule"]

    def execute(self, context: BlockContext) -> None:
        snapshot: EngineSnapshot = context.get(self.snapshot_key)
        live = active_contributors(snapshot.contributors)
        totals = slices_by_contributor(live, snapshot.contributions)

        context.set("vesting_status", self._compute_status(snapshot, live, totals))

        summary = vesting_summary(live, totals, snapshot.as_of)
        summary_row = summary.model_dump()
        for key in ("total_vested_slices", "total_unvested_slices", "total_slices", "overall_percent_vested"):
            summary_row[key] = float(summary_row[key])
        context.set("vesting_summary", pd.DataFrame([summary_row]))

        context.set("vesting_schedule", self._compute_schedule(live))

    def _compute_status(self, snapshot: EngineSnapshot, live, totals) -> pd.DataFrame:
        rows = []
        for contributor in live:
            total = totals[contributor.id]
            status = contributor_vesting_status(contributor, total, snapshot.as_of)
            rows.append({
                "contributor_id": contributor.id,
                "contributor_name": contributor.name,
                "state": status.state,
                "total_slices": float(total),
                "vested_slices": float(status.vested_slices),
                "unvested_slices": float(status.unvested_slices),
                "percent_vested": float(status.percent_vested),
                "cliff_date": status.cliff_date,
                "full_vest_date": status.full_vest_date,
                "months_until_cliff": status.months_until_cliff,
                "months_until_full_vest": status.months_until_full_vest,
            })

        return pd.DataFrame(rows, columns=STATUS_COLUMNS)

    def _compute_schedule(self, live) -> pd.DataFrame:
        rows = []
        for contributor in live:
            config = contributor.vesting
            if config is None:
                continue
            rows.append({
                "contributor_name": contributor.name,
                "start_date": config.start_date,
                "cliff_months": config.cliff_months,
                "cliff_end_date": cliff_date(config),
                "vesting_period_months": config.vesting_months,
                "vesting_end_date": full_vest_date(config),
            })

        return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
