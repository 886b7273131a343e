"""Vesting projections block.

Converts engine projection rows into the flat table used by the
"Vesting Projections" report section.
"""

from typing import List, Sequence
import pandas as pd

from .base import Block, BlockContext
from ..engine import PROJECTION_OFFSETS, project_vesting
from ..schemas import EngineSnapshot

PROJECTION_COLUMNS = [
    "contributor_id",
    "contributor_name",
    "months_ahead",
    "projection_date",
    "state",
    "vested_slices",
    "unvested_slices",
    "percent_vested",
]


class ProjectionBlock(Block):
    """Projects vesting at fixed future offsets from the snapshot's as-of date.

    Inputs (from context):
        - engine_snapshot: EngineSnapshot

    Outputs (to context):
        - vesting_projections: DataFrame with PROJECTION_COLUMNS, one row per
          scheduled contributor with slices per offset
    """

    def __init__(
        self,
        snapshot_key: str = "engine_snapshot",
        offsets: Sequence[int] = PROJECTION_OFFSETS,
    ):
        self.snapshot_key = snapshot_key
        self.offsets = tuple(offsets)

    def inputs(self) -> List[str]:
        return [self.snapshot_key]

    def outputs(self) -> List[str]:
        return ["vesting_projections"]

    def execute(self, context: BlockContext) -> None:
        snapshot: EngineSnapshot = context.get(self.snapshot_key)

        rows = project_vesting(
            snapshot.contributors,
            snapshot.contributions,
            snapshot.as_of,
            self.offsets,
        )

        records = []
        for row in rows:
            record = row.model_dump()
            for key in ("vested_slices", "unvested_slices", "percent_vested"):
                record[key] = float(record[key])
            records.append(record)

        context.set("vesting_projections", pd.DataFrame(records, columns=PROJECTION_COLUMNS))
