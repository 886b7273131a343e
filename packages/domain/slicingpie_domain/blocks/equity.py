"""Equity computation block.

Turns an EngineSnapshot into the ownership table shown on reports.

Output DataFrames:
- equity_rows: Per-contributor slices and ownership percentage
- equity_summary: Total slices and contributor counts
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..engine import aggregate, sort_by_slices, active_contributions, total_slices
from ..schemas import EngineSnapshot

EQUITY_COLUMNS = [
    "contributor_id",
    "contributor_name",
    "total_slices",
    "percentage",
]


class EquityBlock(Block):
    """Aggregates slices into ownership rows.

    Inputs (from context):
        - engine_snapshot: EngineSnapshot to aggregate

    Outputs (to context):
        - equity_rows: DataFrame with columns:
            * contributor_id: Contributor identifier
            * contributor_name: Display name
            * total_slices: Live slices
            * percentage: Share of the pie (0-100)
          Zero-slice contributors are suppressed; largest stake first.

        - equity_summary: DataFrame with single row:
            * total_slices: Slices across all live contributions
            * total_contributors: Live contributors (including zero-slice)
            * contributors_with_slices: Contributors shown in equity_rows
            * total_contributions: Live contributions counted
    """

    def __init__(self, snapshot_key: str = "engine_snapshot"):
        self.snapshot_key = snapshot_key

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["equity_rows", "equity_summary"]

    def execute(self, context: BlockContext) -> None:
        snapshot: EngineSnapshot = context.get(self.snapshot_key)

        rows = aggregate(snapshot.contributors, snapshot.contributions)
        equity_df = self._compute_rows(rows)
        context.set("equity_rows", equity_df)

        live_contributions = active_contributions(snapshot.contributions, snapshot.contributors)
        summary_df = pd.DataFrame([{
            "total_slices": float(total_slices(live_contributions)),
            "total_contributors": len(rows),
            "contributors_with_slices": len(equity_df),
            "total_contributions": len(live_contributions),
        }])
        context.set("equity_summary", summary_df)

    def _compute_rows(self, rows) -> pd.DataFrame:
        records = [
            {
                "contributor_id": row.contributor_id,
                "contributor_name": row.contributor_name,
                "total_slices": float(row.total_slices),
                "percentage": float(row.percentage),
            }
            for row in sort_by_slices(rows)
            if row.total_slices > 0
        ]

        if not records:
            return pd.DataFrame(columns=EQUITY_COLUMNS)

        return pd.DataFrame(records, columns=EQUITY_COLUMNS)
