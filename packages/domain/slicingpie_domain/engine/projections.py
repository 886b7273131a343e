"""Vesting projection generator.

Re-runs the vesting state machine at fixed future offsets from an as-of date.
Each row uses the months elapsed at as_of plus the offset; projection_date is
only the label, since a clamped month-end date would lose a month. Offsets
are evaluated independently.
Contributors without a schedule, or without any live slices, produce no rows.
"""

from typing import Iterable, List, Sequence
from datetime import date

from ..logging import get_logger
from ..schemas import Contribution, Contributor, VestingProjectionRow
from .equity import active_contributors, slices_by_contributor
from .vesting import add_months, months_between, vesting_status_at_elapsed

logger = get_logger(__name__)

PROJECTION_OFFSETS = (6, 12, 18, 24)


def project_vesting(
    contributors: Iterable[Contributor],
    contributions: Iterable[Contribution],
    as_of: date,
    offsets: Sequence[int] = PROJECTION_OFFSETS,
) -> List[VestingProjectionRow]:
    """Project vesting for every scheduled contributor at each offset.

    Args:
        contributors: All contributors (soft-deleted ones are ignored)
        contributions: All contributions (soft-deleted ones are ignored)
        as_of: "Now" - offsets are measured from this date
        offsets: Months ahead to evaluate (default 6, 12, 18, 24)

    Returns:
        Rows grouped by contributor (input order), then by offset

    Example:
        Alice: 12-month cliff, 36-month ramp starting 2024-01-01, 1,000 slices
        project_vesting([alice], contributions, date(2024, 1, 1))
        -> +6: preCliff 0%, +12: vesting 0%, +18: vesting 16.67%, +24: vesting 33.33%
    """
    live = active_contributors(contributors)
    totals = slices_by_contributor(live, contributions)

    rows = []
    for contributor in live:
        if contributor.vesting is None:
            continue
        total = totals[contributor.id]
        if total == 0:
            logger.debug("Skipping projection for %s: no live slices", contributor.id)
            continue

        elapsed_now = months_between(contributor.vesting.start_date, as_of)
        for months_ahead in offsets:
            target = add_months(as_of, months_ahead)
            status = vesting_status_at_elapsed(
                contributor.vesting, total, elapsed_now + months_ahead
            )
            rows.append(VestingProjectionRow(
                contributor_id=contributor.id,
                contributor_name=contributor.name,
                months_ahead=months_ahead,
                projection_date=target,
                state=status.state,
                vested_slices=status.vested_slices,
                unvested_slices=status.unvested_slices,
                percent_vested=status.percent_vested,
            ))

    return rows
