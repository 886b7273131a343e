"""Slice calculator.

Converts one raw contribution into slices using the fixed Slicing Pie
multiplier table:

    time:         hours x hourly_rate x 2
    cash:         amount x 4
    non-cash:     fair market value x 2
    idea:         negotiated value x 1
    relationship: negotiated value x 1

No rounding happens here; fractional slices are legal. The function trusts
its inputs, so negative values produce negative slices rather than errors.
"""

from typing import Dict, Mapping, Optional, Union
from decimal import Decimal
from datetime import date, datetime

from ..schemas import Contribution, ContributionType, Contributor

Number = Union[Decimal, int, float, str]

MULTIPLIERS: Dict[str, Decimal] = {
    "time": Decimal("2"),
    "cash": Decimal("4"),
    "non-cash": Decimal("2"),
    "idea": Decimal("1"),
    "relationship": Decimal("1"),
}


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as Decimal("0.1") instead of its binary expansion
    return Decimal(str(value))


def get_multiplier(
    contribution_type: ContributionType,
    multipliers: Optional[Mapping[str, Decimal]] = None,
) -> Decimal:
    """Return the multiplier for a contribution type.

    Args:
        contribution_type: One of time, cash, non-cash, idea, relationship
        multipliers: Optional replacement table (defaults to MULTIPLIERS)
    """
    table = MULTIPLIERS if multipliers is None else multipliers
    return _to_decimal(table[contribution_type])


def calculate_slices(
    contribution_type: ContributionType,
    value: Number,
    hourly_rate: Optional[Number] = None,
    multipliers: Optional[Mapping[str, Decimal]] = None,
) -> Decimal:
    """Calculate slices for a single contribution.

    Args:
        contribution_type: The contribution type
        value: Hours for time, dollars for cash/non-cash, negotiated value otherwise
        hourly_rate: Contributor hourly rate. Only used for time; None counts as 0
        multipliers: Optional replacement multiplier table

    Returns:
        Slice count (unrounded)

    Examples:
        calculate_slices("time", 100, 50)  -> Decimal("10000")
        calculate_slices("cash", 5000)     -> Decimal("20000")
        calculate_slices("time", 100)      -> Decimal("0")
    """
    multiplier = get_multiplier(contribution_type, multipliers)
    amount = _to_decimal(value)

    if contribution_type == "time":
        rate = _to_decimal(hourly_rate) if hourly_rate is not None else Decimal("0")
        return amount * rate * multiplier

    return amount * multiplier


def preview_slices(
    contribution_type: ContributionType,
    value: Number,
    contributor: Contributor,
) -> Decimal:
    """Slices a contributor would earn, for live form previews.

    Uses exactly the same calculation that create_contribution stores, so the
    preview always matches the persisted value.
    """
    return calculate_slices(contribution_type, value, contributor.hourly_rate)


def create_contribution(
    id: str,
    contributor: Contributor,
    contribution_type: ContributionType,
    value: Number,
    contribution_date: date,
    description: Optional[str] = None,
    created_at: Optional[datetime] = None,
    multipliers: Optional[Mapping[str, Decimal]] = None,
) -> Contribution:
    """Build a new Contribution with its multiplier and slices snapshotted.

    This is the only place stored slices are computed. The contributor's
    hourly rate at this moment is baked into the row; later rate changes do
    not touch it.

    Example:
        alice = Contributor(id="alice", name="Alice", hourly_rate=50)
        row = create_contribution("c1", alice, "time", 100, date(2024, 1, 15))
        row.slices      # Decimal("10000")
        row.multiplier  # Decimal("2")
    """
    return Contribution(
        id=id,
        contributor_id=contributor.id,
        type=contribution_type,
        value=_to_decimal(value),
        description=description,
        contribution_date=contribution_date,
        multiplier=get_multiplier(contribution_type, multipliers),
        slices=calculate_slices(
            contribution_type, value, contributor.hourly_rate, multipliers
        ),
        created_at=created_at,
    )
