"""Computation blocks for Slicing Pie reports.

This package turns engine results into flat pandas DataFrames for reports,
exports and charts.

Architecture:
    Schemas (data models) → Engine (pure math) → Blocks (DataFrames)

Key concepts:
- Blocks are reusable computation units with explicit dependencies
- Each block declares its inputs and outputs
- Dependency graph enables topological execution
- All outputs are pandas DataFrames for downstream consumption

Available blocks:
- EquityBlock: Ownership table and totals
- ContributionsBreakdownBlock: Per-contribution rows with subtotals
- VestingBlock: Current vesting status, summary and schedule
- ProjectionBlock: Vesting at future offsets
- ValuationBlock: Company valuation and dollar value of each stake

Usage:
    from slicingpie_domain.blocks import build_report
    from slicingpie_domain.schemas import ReportCFG

    context = build_report(snapshot, ReportCFG(include_vesting=True))
    equity_df = context.get("equity_rows")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError
from .equity import EquityBlock
from .contributions import ContributionsBreakdownBlock
from .vesting import VestingBlock
from .projections import ProjectionBlock
from .valuation import ValuationBlock
from .report import build_report, report_blocks

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "EquityBlock",
    "ContributionsBreakdownBlock",
    "VestingBlock",
    "ProjectionBlock",
    "ValuationBlock",
    "build_report",
    "report_blocks",
]
