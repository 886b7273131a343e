"""Contributions breakdown block.

Lists every live contribution, grouped by contributor, for the detailed
section of a report.
"""

from typing import List
import pandas as pd

from .base import Block, BlockContext
from ..engine import active_contributions, active_contributors
from ..schemas import CONTRIBUTION_TYPE_LABELS, EngineSnapshot

BREAKDOWN_COLUMNS = [
    "contributor_id",
    "contributor_name",
    "contribution_id",
    "contribution_date",
    "type",
    "type_label",
    "description",
    "value",
    "multiplier",
    "slices",
    "subtotal_slices",
]


class ContributionsBreakdownBlock(Block):
    """Flattens live contributions into report rows.

    Inputs (from context):
        - engine_snapshot: EngineSnapshot

    Outputs (to context):
        - contributions_breakdown: DataFrame with BREAKDOWN_COLUMNS.
          Contributors are ordered by subtotal (largest first); contributions
          within a contributor by date (oldest first). Missing descriptions
          fall back to the type label.
    """

    def __init__(self, snapshot_key: str = "engine_snapshot"):
        self.snapshot_key = snapshot_key

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["contributions_breakdown"]

    def execute(self, context: BlockContext) -> None:
        snapshot: EngineSnapshot = context.get(self.snapshot_key)
        live = active_contributors(snapshot.contributors)
        names = {c.id: c.name for c in live}

        rows = []
        for contribution in active_contributions(snapshot.contributions, live):
            label = CONTRIBUTION_TYPE_LABELS.get(contribution.type, contribution.type)
            rows.append({
                "contributor_id": contribution.contributor_id,
                "contributor_name": names[contribution.contributor_id],
                "contribution_id": contribution.id,
                "contribution_date": contribution.contribution_date,
                "type": contribution.type,
                "type_label": label,
                "description": contribution.description or label,
                "value": float(contribution.value),
                "multiplier": float(contribution.multiplier),
                "slices": float(contribution.slices),
            })

        if not rows:
            context.set("contributions_breakdown", pd.DataFrame(columns=BREAKDOWN_COLUMNS))
            return

        df = pd.DataFrame(rows)
        df["subtotal_slices"] = df.groupby("contributor_id")["slices"].transform("sum")
        df = df.sort_values(
            ["subtotal_slices", "contributor_id", "contribution_date"],
            ascending=[False, True, True],
            kind="mergesort",
        ).reset_index(drop=True)

        context.set("contributions_breakdown", df[BREAKDOWN_COLUMNS])
