"""Tests for vesting projections.

Tests cover:
- One row per scheduled contributor per offset, in offset order
- Contributors without a schedule or without slices are skipped
- Each offset is an independent vesting evaluation
- Custom offsets
- Month-end as-of dates keep the full offset
"""

from decimal import Decimal
from datetime import date, datetime

from slicingpie_domain.engine import (
    PROJECTION_OFFSETS,
    create_contribution,
    project_vesting,
    vesting_status,
)
from slicingpie_domain.schemas import Contributor, SoftDeletedState, VestingConfig


AS_OF = date(2024, 1, 1)
SCHEDULE = VestingConfig(start_date=date(2024, 1, 1), cliff_months=12, vesting_months=36)


def make_team():
    alice = Contributor(id="alice", name="Alice", hourly_rate=Decimal("50"), vesting=SCHEDULE)
    bob = Contributor(id="bob", name="Bob", hourly_rate=Decimal("50"))
    carol = Contributor(id="carol", name="Carol", hourly_rate=Decimal("50"), vesting=SCHEDULE)
    dave = Contributor(
        id="dave",
        name="Dave",
        hourly_rate=Decimal("50"),
        vesting=SCHEDULE,
        deletion=SoftDeletedState(deleted_at=datetime(2023, 12, 1)),
    )
    contributions = [
        create_contribution("c1", alice, "idea", 1000, date(2024, 1, 1)),
        create_contribution("c2", bob, "cash", 500, date(2024, 1, 1)),
        create_contribution("c3", dave, "idea", 800, date(2024, 1, 1)),
    ]
    return [alice, bob, carol, dave], contributions


def test_default_offsets():
    assert PROJECTION_OFFSETS == (6, 12, 18, 24)


def test_projection_rows_for_scheduled_contributor():
    """+6 pre-cliff, +12 at the cliff, +18 and +24 on the ramp."""
    contributors, contributions = make_team()

    rows = project_vesting(contributors, contributions, AS_OF)

    assert [row.contributor_id for row in rows] == ["alice"] * 4
    assert [row.months_ahead for row in rows] == [6, 12, 18, 24]
    assert [row.projection_date for row in rows] == [
        date(2024, 7, 1),
        date(2025, 1, 1),
        date(2025, 7, 1),
        date(2026, 1, 1),
    ]
    assert [row.state for row in rows] == ["preCliff", "vesting", "vesting", "vesting"]
    assert [row.percent_vested for row in rows] == [
        Decimal("0"),
        Decimal("0"),
        Decimal("16.67"),
        Decimal("33.33"),
    ]
    assert [row.vested_slices for row in rows] == [
        Decimal("0"),
        Decimal("0"),
        Decimal("166"),
        Decimal("333"),
    ]


def test_rows_match_independent_evaluation():
    """Each row equals a fresh vesting_status call at its projected date."""
    contributors, contributions = make_team()

    for row in project_vesting(contributors, contributions, AS_OF):
        status = vesting_status(SCHEDULE, Decimal("1000"), row.projection_date)
        assert row.state == status.state
        assert row.vested_slices == status.vested_slices
        assert row.vested_slices + row.unvested_slices == Decimal("1000")


def test_custom_offsets_past_full_vest():
    contributors, contributions = make_team()

    rows = project_vesting(contributors, contributions, AS_OF, offsets=(0, 48, 60))

    assert [row.state for row in rows] == ["preCliff", "fullyVested", "fullyVested"]
    assert rows[-1].vested_slices == Decimal("1000")
    assert rows[-1].unvested_slices == Decimal("0")


def test_no_scheduled_contributors_gives_no_rows():
    bob = Contributor(id="bob", name="Bob", hourly_rate=Decimal("50"))
    contributions = [create_contribution("c1", bob, "cash", 10, AS_OF)]

    assert project_vesting([bob], contributions, AS_OF) == []


def test_month_end_as_of_keeps_full_offsets():
    """A clamped projection date (Feb 28) still counts the full offset."""
    config = VestingConfig(start_date=date(2024, 8, 31), cliff_months=6, vesting_months=12)
    erin = Contributor(id="erin", name="Erin", hourly_rate=Decimal("50"), vesting=config)
    contributions = [create_contribution("e1", erin, "idea", 1200, date(2024, 8, 31))]

    rows = project_vesting([erin], contributions, date(2024, 8, 31))

    assert [row.projection_date for row in rows] == [
        date(2025, 2, 28),
        date(2025, 8, 31),
        date(2026, 2, 28),
        date(2026, 8, 31),
    ]
    assert [row.state for row in rows] == ["vesting", "vesting", "fullyVested", "fullyVested"]
    assert [row.percent_vested for row in rows] == [
        Decimal("0"),
        Decimal("50"),
        Decimal("100"),
        Decimal("100"),
    ]
    assert rows[2].vested_slices == Decimal("1200")
