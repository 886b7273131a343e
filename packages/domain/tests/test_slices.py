"""Tests for the slice calculator.

Tests cover:
- Fixed multiplier table
- Time contributions priced by hourly rate (missing rate = 0 slices)
- Monotonicity in value
- Negative inputs pass through without raising
- Contribution snapshots taken at creation time
"""

import pytest
from decimal import Decimal
from datetime import date, datetime

from slicingpie_domain.engine import (
    MULTIPLIERS,
    calculate_slices,
    create_contribution,
    get_multiplier,
    preview_slices,
)
from slicingpie_domain.schemas import Contributor


def make_contributor(hourly_rate="50"):
    return Contributor(id="alice", name="Alice", hourly_rate=Decimal(hourly_rate))


# =============================================================================
# Multiplier Table
# =============================================================================

def test_multiplier_table():
    """Test the fixed Slicing Pie multipliers."""
    assert MULTIPLIERS == {
        "time": Decimal("2"),
        "cash": Decimal("4"),
        "non-cash": Decimal("2"),
        "idea": Decimal("1"),
        "relationship": Decimal("1"),
    }


def test_get_multiplier_with_override_table():
    """Test that a replacement table is honoured."""
    custom = {**MULTIPLIERS, "cash": Decimal("3")}
    assert get_multiplier("cash", custom) == Decimal("3")
    assert get_multiplier("cash") == Decimal("4")


# =============================================================================
# calculate_slices
# =============================================================================

def test_time_contribution_uses_hourly_rate():
    """100 hours at $50/hr -> 100 x 50 x 2 = 10,000 slices."""
    assert calculate_slices("time", 100, 50) == Decimal("10000")


def test_time_contribution_without_rate_is_zero():
    """Missing hourly rate counts as 0, not an error."""
    assert calculate_slices("time", 100) == Decimal("0")
    assert calculate_slices("time", 100, None) == Decimal("0")


@pytest.mark.parametrize("contribution_type,value,expected", [
    ("cash", 5000, Decimal("20000")),
    ("non-cash", 1500, Decimal("3000")),
    ("idea", 2500, Decimal("2500")),
    ("relationship", 2500, Decimal("2500")),
])
def test_non_time_contributions(contribution_type, value, expected):
    """Non-time types multiply the raw value directly."""
    assert calculate_slices(contribution_type, value) == expected


def test_non_time_ignores_hourly_rate():
    """Hourly rate only affects time contributions."""
    assert calculate_slices("cash", 100, 999) == Decimal("400")


def test_idea_equals_relationship():
    """Idea and relationship share the 1x multiplier."""
    assert calculate_slices("idea", 1234) == calculate_slices("relationship", 1234)


def test_fractional_slices_are_not_rounded():
    """No rounding at this layer."""
    assert calculate_slices("time", "1.5", "33.33") == Decimal("99.990")
    assert calculate_slices("cash", 0.1) == Decimal("0.4")


def test_monotonic_in_value():
    """Slices never decrease as value grows."""
    for contribution_type in MULTIPLIERS:
        previous = calculate_slices(contribution_type, 0, 40)
        for value in (1, 10, 100, 1000):
            current = calculate_slices(contribution_type, value, 40)
            assert current >= previous
            previous = current


def test_negative_value_passes_through():
    """Validation is the caller's job; the calculator does not raise."""
    assert calculate_slices("cash", -10) == Decimal("-40")


# =============================================================================
# Contribution Snapshots
# =============================================================================

def test_create_contribution_snapshots_slices_and_multiplier():
    """Stored slices and multiplier are fixed at creation."""
    contribution = create_contribution(
        "c1",
        make_contributor("50"),
        "time",
        100,
        date(2024, 1, 15),
        description="MVP build",
        created_at=datetime(2024, 1, 15, 9, 30),
    )

    assert contribution.contributor_id == "alice"
    assert contribution.multiplier == Decimal("2")
    assert contribution.slices == Decimal("10000")
    assert contribution.contribution_date == date(2024, 1, 15)
    assert not contribution.is_deleted


def test_snapshot_survives_rate_change():
    """Changing the hourly rate later does not rewrite history."""
    alice = make_contributor("50")
    contribution = create_contribution("c1", alice, "time", 10, date(2024, 1, 1))

    alice.hourly_rate = Decimal("200")

    assert contribution.slices == Decimal("1000")
    assert preview_slices("time", 10, alice) == Decimal("4000")


def test_preview_matches_stored_value():
    """The live preview equals what create_contribution stores."""
    alice = make_contributor("75")
    preview = preview_slices("time", 12, alice)
    stored = create_contribution("c2", alice, "time", 12, date(2024, 2, 1)).slices
    assert preview == stored
