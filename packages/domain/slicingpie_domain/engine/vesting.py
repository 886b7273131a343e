"""Vesting engine.

Cliff plus linear vesting, driven purely by whole elapsed calendar months
between the schedule's start date and an explicit as-of date. A month only
completes once the same day-of-month is reached, so 2024-01-15 -> 2024-02-14
is 0 months and 2024-01-15 -> 2024-02-15 is 1 month.

State machine (m = elapsed months, c = cliff, v = post-cliff ramp):

    no config        -> none         100%
    m < c            -> preCliff     0%   (also when as_of precedes start)
    c <= m < c + v   -> vesting      (m - c) / v, 2 decimals
    m >= c + v       -> fullyVested  100%

vested_slices is floored to whole slices while vesting, and
unvested_slices is always total - vested so the two add up exactly.
"""

from typing import Dict, Iterable, List, Optional
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ..schemas import (
    Contributor,
    VestingConfig,
    VestingStatus,
    VestedEquityItem,
    VestingSummary,
)

HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


# =============================================================================
# Calendar Helpers
# =============================================================================

def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end (negative if end < start).

    Examples:
        months_between(date(2024, 1, 15), date(2024, 3, 15)) -> 2
        months_between(date(2024, 1, 15), date(2024, 3, 14)) -> 1
        months_between(date(2024, 3, 1), date(2024, 1, 1))   -> -2
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return months


def add_months(start: date, months: int) -> date:
    """Shift a date by calendar months, clamping to the end of short months.

    Example:
        add_months(date(2024, 1, 31), 1) -> date(2024, 2, 29)
    """
    return start + relativedelta(months=months)


def milestone_date(start: date, months: int) -> date:
    """First date on which months_between(start, date) reaches months.

    When add_months clamps to a shorter month the clamped day is still one
    month short, so the milestone moves to the following day.

    Example:
        milestone_date(date(2024, 1, 31), 1) -> date(2024, 3, 1)
    """
    shifted = add_months(start, months)
    if shifted.day < start.day:
        return shifted + timedelta(days=1)
    return shifted


def cliff_date(config: VestingConfig) -> Optional[date]:
    """Date the cliff passes, or None when the schedule has no cliff."""
    if config.cliff_months == 0:
        return None
    return milestone_date(config.start_date, config.cliff_months)


def full_vest_date(config: VestingConfig) -> date:
    """start + cliff + post-cliff ramp."""
    return milestone_date(config.start_date, config.total_months)


# =============================================================================
# Vesting Status
# =============================================================================

def vesting_status(
    config: Optional[VestingConfig],
    total_slices: Decimal,
    as_of: date,
) -> VestingStatus:
    """Compute vested/unvested slices for one contributor at one date.

    Args:
        config: Vesting schedule, or None for "no schedule / fully vested"
        total_slices: Contributor's live slice total
        as_of: The instant to evaluate. Required; the engine never reads a clock

    Returns:
        VestingStatus for that instant

    Example:
        config = VestingConfig(start_date=date(2024, 1, 1), cliff_months=12, vesting_months=36)
        vesting_status(config, Decimal("1000"), date(2026, 7, 1))
        # state="vesting", percent_vested=50.00, vested_slices=500
    """
    if config is None:
        return vesting_status_at_elapsed(None, total_slices, 0)
    elapsed = months_between(config.start_date, as_of)
    return vesting_status_at_elapsed(config, total_slices, elapsed)


def vesting_status_at_elapsed(
    config: Optional[VestingConfig],
    total_slices: Decimal,
    elapsed: int,
) -> VestingStatus:
    """Run the state machine for a whole number of elapsed months.

    Projections call this directly with "months elapsed today + offset" so a
    clamped calendar date never shortens the offset.
    """
    total = Decimal(total_slices)

    if config is None:
        return VestingStatus(
            state="none",
            percent_vested=HUNDRED,
            vested_slices=total,
            unvested_slices=Decimal("0"),
        )

    until_cliff = max(0, config.cliff_months - elapsed)
    until_full_vest = max(0, config.total_months - elapsed)

    if elapsed < config.cliff_months:
        state = "preCliff"
        percent = Decimal("0")
        vested = Decimal("0")
    elif elapsed >= config.total_months:
        state = "fullyVested"
        percent = HUNDRED
        vested = total
    else:
        state = "vesting"
        # vesting_months > 0 here, otherwise elapsed >= total_months above.
        # Multiply before dividing so 900 x 12/36 floors to 300, not 299.
        ramp_elapsed = Decimal(elapsed - config.cliff_months)
        ramp_length = Decimal(config.vesting_months)
        percent = min(ramp_elapsed * HUNDRED / ramp_length, HUNDRED).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP
        )
        vested = (total * ramp_elapsed / ramp_length).to_integral_value(rounding=ROUND_FLOOR)

    return VestingStatus(
        state=state,
        percent_vested=percent,
        vested_slices=vested,
        unvested_slices=total - vested,
        cliff_date=cliff_date(config),
        full_vest_date=full_vest_date(config),
        months_until_cliff=until_cliff,
        months_until_full_vest=until_full_vest,
    )


def contributor_vesting_status(
    contributor: Contributor,
    total_slices: Decimal,
    as_of: date,
) -> VestingStatus:
    return vesting_status(contributor.vesting, total_slices, as_of)


# =============================================================================
# Roll-ups
# =============================================================================

def vested_equity_data(
    contributors: Iterable[Contributor],
    slices_by_contributor: Dict[str, Decimal],
    as_of: date,
) -> List[VestedEquityItem]:
    """Vested/unvested split per live contributor, shaped for charts."""
    items = []
    for contributor in contributors:
        if contributor.is_deleted:
            continue
        total = slices_by_contributor.get(contributor.id, Decimal("0"))
        status = contributor_vesting_status(contributor, total, as_of)
        items.append(VestedEquityItem(
            contributor_id=contributor.id,
            contributor_name=contributor.name,
            vested_slices=status.vested_slices,
            unvested_slices=status.unvested_slices,
            total_slices=total,
            percent_vested=status.percent_vested,
            vesting_state=status.state,
        ))
    return items


def vesting_summary(
    contributors: Iterable[Contributor],
    slices_by_contributor: Dict[str, Decimal],
    as_of: date,
) -> VestingSummary:
    """Company-wide vesting totals and upcoming milestones.

    next_cliff_date is the earliest future cliff among pre-cliff contributors;
    next_full_vest_date is the earliest future full-vest date among everyone
    on a schedule.
    """
    total_vested = Decimal("0")
    total_unvested = Decimal("0")
    next_cliff: Optional[date] = None
    next_full_vest: Optional[date] = None
    pre_cliff = vesting = fully_vested = 0

    for contributor in contributors:
        if contributor.is_deleted:
            continue
        total = slices_by_contributor.get(contributor.id, Decimal("0"))
        status = contributor_vesting_status(contributor, total, as_of)

        total_vested += status.vested_slices
        total_unvested += status.unvested_slices

        if status.state == "preCliff":
            pre_cliff += 1
            if status.cliff_date and status.cliff_date > as_of:
                if next_cliff is None or status.cliff_date < next_cliff:
                    next_cliff = status.cliff_date
        elif status.state == "vesting":
            vesting += 1
        else:
            fully_vested += 1

        if status.full_vest_date and status.full_vest_date > as_of:
            if next_full_vest is None or status.full_vest_date < next_full_vest:
                next_full_vest = status.full_vest_date

    grand_total = total_vested + total_unvested
    if grand_total > 0:
        overall = (total_vested / grand_total * HUNDRED).quantize(
            TWO_PLACES, rounding=ROUND_HALF_UP
        )
    else:
        overall = HUNDRED

    return VestingSummary(
        total_vested_slices=total_vested,
        total_unvested_slices=total_unvested,
        total_slices=grand_total,
        overall_percent_vested=overall,
        next_cliff_date=next_cliff,
        next_full_vest_date=next_full_vest,
        contributors_pre_cliff=pre_cliff,
        contributors_vesting=vesting,
        contributors_fully_vested=fully_vested,
    )
