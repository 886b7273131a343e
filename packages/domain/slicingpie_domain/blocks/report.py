"""Report assembly.

Chooses which blocks to run from a ReportCFG and executes them against a
single EngineSnapshot. Monetary outputs are already rounded display values;
consumers render them as-is.
"""

from typing import List, Optional

from .base import Block, BlockContext, BlockExecutor
from .contributions import ContributionsBreakdownBlock
from .equity import EquityBlock
from .projections import ProjectionBlock
from .valuation import ValuationBlock
from .vesting import VestingBlock
from ..logging import get_logger
from ..schemas import EngineSnapshot, ReportCFG

logger = get_logger(__name__)

SNAPSHOT_KEY = "engine_snapshot"


def report_blocks(cfg: ReportCFG) -> List[Block]:
    """Blocks needed for the sections enabled in cfg.

    The equity table is always present.
    """
    blocks: List[Block] = [EquityBlock(SNAPSHOT_KEY)]

    if cfg.include_contributions_breakdown:
        blocks.append(ContributionsBreakdownBlock(SNAPSHOT_KEY))

    if cfg.include_vesting:
        blocks.append(VestingBlock(SNAPSHOT_KEY))
        blocks.append(ProjectionBlock(SNAPSHOT_KEY, cfg.projection_offsets))

    if cfg.include_valuation:
        blocks.append(ValuationBlock(SNAPSHOT_KEY, include_vesting=cfg.include_vesting))

    return blocks


def build_report(snapshot: EngineSnapshot, cfg: Optional[ReportCFG] = None) -> BlockContext:
    """Run every enabled report section.

    Args:
        snapshot: Entities plus the as-of date
        cfg: Section flags (defaults to ReportCFG())

    Returns:
        BlockContext holding the snapshot and every produced DataFrame

    Example:
        context = build_report(snapshot, ReportCFG(include_valuation=True))
        context.get("equity_rows")
        context.get("equity_values")
    """
    cfg = cfg or ReportCFG()
    blocks = report_blocks(cfg)
    logger.debug(
        "Building report for %s as of %s with %d blocks",
        snapshot.company.name,
        snapshot.as_of,
        len(blocks),
    )

    context = BlockContext()
    context.set(SNAPSHOT_KEY, snapshot)
    return BlockExecutor(blocks).execute(context)
