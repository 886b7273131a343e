"""Equity aggregator.

Sums live slices per contributor and derives each contributor's share of the
pie. Soft-deleted contributors and contributions are dropped first; a
contribution whose owner is deleted drops out with its owner, so it counts
toward neither the owner nor the total.
"""

from typing import Dict, Iterable, List
from decimal import Decimal

from ..logging import get_logger
from ..schemas import Contribution, Contributor, EquityRow

logger = get_logger(__name__)


def active_contributors(contributors: Iterable[Contributor]) -> List[Contributor]:
    return [c for c in contributors if not c.is_deleted]


def active_contributions(
    contributions: Iterable[Contribution],
    contributors: Iterable[Contributor],
) -> List[Contribution]:
    """Live contributions whose owner is also live."""
    live_ids = {c.id for c in active_contributors(contributors)}
    rows = []
    for contribution in contributions:
        if contribution.is_deleted:
            continue
        if contribution.contributor_id not in live_ids:
            logger.debug(
                "Excluding contribution %s: contributor %s is not live",
                contribution.id,
                contribution.contributor_id,
            )
            continue
        rows.append(contribution)
    return rows


def total_slices(contributions: Iterable[Contribution]) -> Decimal:
    return sum((c.slices for c in contributions), Decimal("0"))


def contributor_total_slices(
    contributor_id: str, contributions: Iterable[Contribution]
) -> Decimal:
    return total_slices(c for c in contributions if c.contributor_id == contributor_id)


def slices_by_contributor(
    contributors: Iterable[Contributor],
    contributions: Iterable[Contribution],
) -> Dict[str, Decimal]:
    """Map live contributor ID -> live slice total (zero for no contributions)."""
    live = active_contributors(contributors)
    totals: Dict[str, Decimal] = {c.id: Decimal("0") for c in live}
    for contribution in active_contributions(contributions, live):
        totals[contribution.contributor_id] += contribution.slices
    return totals


def calculate_equity_percentage(
    contributor_slices: Decimal, total: Decimal
) -> Decimal:
    """Share of the pie on a 0-100 scale. Zero total -> 0, never an error."""
    if total == 0:
        return Decimal("0")
    return contributor_slices / total * Decimal("100")


def aggregate(
    contributors: Iterable[Contributor],
    contributions: Iterable[Contribution],
) -> List[EquityRow]:
    """Compute one EquityRow per live contributor.

    Zero-slice contributors are kept (0%). Row order follows the contributor
    input order; callers sort as needed.

    Example:
        A: 10,000 slices, B: 30,000 slices
        -> A 25%, B 75%, total 40,000
    """
    live = active_contributors(contributors)
    totals = slices_by_contributor(live, contributions)
    grand_total = sum(totals.values(), Decimal("0"))

    return [
        EquityRow(
            contributor_id=contributor.id,
            contributor_name=contributor.name,
            total_slices=totals[contributor.id],
            percentage=calculate_equity_percentage(totals[contributor.id], grand_total),
        )
        for contributor in live
    ]


def sort_by_slices(rows: Iterable[EquityRow]) -> List[EquityRow]:
    """Largest stake first."""
    return sorted(rows, key=lambda row: row.total_slices, reverse=True)
