"""Valuation computation block.

Maps ownership (and optionally vested ownership) onto the company valuation.

Output DataFrames:
- valuation_summary: Current valuation and, in auto mode, how it was derived
- equity_values: Dollar value of each contributor's stake
"""

from typing import List
from decimal import Decimal
import pandas as pd

from .base import Block, BlockContext
from ..engine import (
    aggregate,
    calculate_equity_percentage,
    calculate_valuation,
    contributor_vesting_status,
    equity_value,
    valuation_from_config,
    vested_equity_value,
)
from ..schemas import EngineSnapshot

VALUE_COLUMNS = [
    "contributor_id",
    "contributor_name",
    "total_slices",
    "percentage",
    "dollar_value",
    "vested_slices",
    "vested_percentage",
    "vested_dollar_value",
]


class ValuationBlock(Block):
    """Computes company valuation and per-contributor dollar values.

    Inputs (from context):
        - engine_snapshot: EngineSnapshot with valuation_config
        - equity_rows: DataFrame from EquityBlock

    Outputs (to context):
        - valuation_summary: DataFrame with single row:
            * mode: "manual" or "auto" (None without a config)
            * valuation: Whole-dollar valuation, or None when unavailable
            * confidence, average_profit, base_multiple, growth_multiplier,
              retention_multiplier: auto mode only, otherwise None

        - equity_values: DataFrame with VALUE_COLUMNS. Dollar columns are None
          when there is no positive valuation; vested columns are None unless
          include_vesting is set.

    Example:
        Manual valuation $1,000,000, contributor at 25% -> dollar_value 250,000
    """

    def __init__(
        self,
        snapshot_key: str = "engine_snapshot",
        equity_key: str = "equity_rows",
        include_vesting: bool = False,
    ):
        self.snapshot_key = snapshot_key
        self.equity_key = equity_key
        self.include_vesting = include_vesting

    def inputs(self) -> List[str]:
        return [self.snapshot_key, self.equity_key]

    def outputs(self) -> List[str]:
        return ["valuation_summary", "equity_values"]

    def execute(self, context: BlockContext) -> None:
        snapshot: EngineSnapshot = context.get(self.snapshot_key)
        equity_df: pd.DataFrame = context.get(self.equity_key)
        current_year = snapshot.as_of.year

        valuation = valuation_from_config(snapshot.valuation_config, current_year)
        context.set("valuation_summary", self._compute_summary(snapshot, valuation, current_year))

        context.set("equity_values", self._compute_values(snapshot, equity_df, valuation))

    def _compute_summary(self, snapshot: EngineSnapshot, valuation, current_year: int) -> pd.DataFrame:
        config = snapshot.valuation_config
        row = {
            "mode": config.mode if config else None,
            "valuation": float(valuation) if valuation is not None else None,
            "confidence": None,
            "average_profit": None,
            "base_multiple": None,
            "growth_multiplier": None,
            "retention_multiplier": None,
        }

        if config is not None and config.mode == "auto" and config.business_metrics is not None:
            result = calculate_valuation(config.business_metrics, current_year)
            row["confidence"] = result.confidence
            row["average_profit"] = float(result.breakdown.average_profit)
            row["base_multiple"] = float(result.breakdown.base_multiple)
            row["growth_multiplier"] = float(result.breakdown.growth_multiplier)
            row["retention_multiplier"] = float(result.breakdown.retention_multiplier)

        return pd.DataFrame([row])

    def _compute_values(self, snapshot: EngineSnapshot, equity_df: pd.DataFrame, valuation) -> pd.DataFrame:
        if equity_df.empty:
            return pd.DataFrame(columns=VALUE_COLUMNS)

        # Exact Decimal rows from the engine; equity_df decides which rows show and in what order
        rows_by_id = {row.contributor_id: row for row in aggregate(snapshot.contributors, snapshot.contributions)}
        contributors_by_id = {c.id: c for c in snapshot.contributors}
        grand_total = sum((row.total_slices for row in rows_by_id.values()), Decimal("0"))
        has_valuation = valuation is not None and valuation > 0

        records = []
        for contributor_id in equity_df["contributor_id"]:
            equity_row = rows_by_id[contributor_id]

            if has_valuation:
                equity_row.dollar_value = equity_value(equity_row.percentage, valuation)

            if self.include_vesting:
                status = contributor_vesting_status(
                    contributors_by_id[contributor_id], equity_row.total_slices, snapshot.as_of
                )
                equity_row.vested_slices = status.vested_slices
                equity_row.vested_percentage = calculate_equity_percentage(status.vested_slices, grand_total)
                if has_valuation:
                    equity_row.vested_dollar_value = vested_equity_value(
                        status.vested_slices, grand_total, valuation
                    )

            records.append({
                key: float(value) if isinstance(value, Decimal) else value
                for key, value in equity_row.model_dump().items()
            })

        return pd.DataFrame(records, columns=VALUE_COLUMNS)
