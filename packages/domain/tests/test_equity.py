"""Tests for the equity aggregator.

Tests cover:
- Slices summed per contributor and percentage of total
- Zero-total guard (0%, never NaN or an exception)
- Soft-deleted contributors and contributions are excluded
- Contributions of a deleted contributor drop out of the total
- Zero-slice contributors are kept
"""

import pytest
from decimal import Decimal
from datetime import date, datetime

from slicingpie_domain.engine import (
    aggregate,
    active_contributions,
    calculate_equity_percentage,
    contributor_total_slices,
    slices_by_contributor,
    sort_by_slices,
    total_slices,
)
from slicingpie_domain.schemas import Contribution, Contributor, SoftDeletedState


DELETED_AT = datetime(2024, 6, 1, 12, 0)


def make_contributor(id, **kwargs):
    return Contributor(id=id, name=id.title(), hourly_rate=Decimal("50"), **kwargs)


def make_contribution(id, contributor_id, slices, **kwargs):
    return Contribution(
        id=id,
        contributor_id=contributor_id,
        type="idea",
        value=Decimal(slices),
        contribution_date=date(2024, 1, 1),
        multiplier=Decimal("1"),
        slices=Decimal(slices),
        **kwargs,
    )


# =============================================================================
# Percentages
# =============================================================================

def test_two_contributors_25_75():
    """A with 10,000 and B with 30,000 -> 25% / 75% of 40,000."""
    contributors = [make_contributor("a"), make_contributor("b")]
    contributions = [
        make_contribution("c1", "a", 10000),
        make_contribution("c2", "b", 20000),
        make_contribution("c3", "b", 10000),
    ]

    rows = {row.contributor_id: row for row in aggregate(contributors, contributions)}

    assert rows["a"].total_slices == Decimal("10000")
    assert rows["a"].percentage == Decimal("25")
    assert rows["b"].total_slices == Decimal("30000")
    assert rows["b"].percentage == Decimal("75")
    assert total_slices(contributions) == Decimal("40000")


def test_percentages_sum_to_100():
    """Percentages add up to 100 whenever there are slices."""
    contributors = [make_contributor("a"), make_contributor("b"), make_contributor("c")]
    contributions = [
        make_contribution("c1", "a", 1),
        make_contribution("c2", "b", 1),
        make_contribution("c3", "c", 1),
    ]

    rows = aggregate(contributors, contributions)

    assert float(sum(row.percentage for row in rows)) == pytest.approx(100.0)


def test_zero_total_gives_zero_percent():
    """No slices anywhere -> every row at 0%."""
    contributors = [make_contributor("a"), make_contributor("b")]

    rows = aggregate(contributors, [])

    assert [row.percentage for row in rows] == [Decimal("0"), Decimal("0")]
    assert calculate_equity_percentage(Decimal("0"), Decimal("0")) == Decimal("0")


def test_zero_slice_contributor_is_kept():
    """The aggregator does not filter zero-slice rows."""
    contributors = [make_contributor("a"), make_contributor("b")]
    contributions = [make_contribution("c1", "a", 500)]

    rows = {row.contributor_id: row for row in aggregate(contributors, contributions)}

    assert rows["b"].total_slices == Decimal("0")
    assert rows["b"].percentage == Decimal("0")
    assert rows["a"].percentage == Decimal("100")


# =============================================================================
# Soft Deletion
# =============================================================================

def test_deleted_contribution_excluded():
    """A directly deleted contribution counts for nobody."""
    contributors = [make_contributor("a"), make_contributor("b")]
    contributions = [
        make_contribution("c1", "a", 100),
        make_contribution("c2", "b", 100),
        make_contribution("c3", "b", 800, deletion=SoftDeletedState(deleted_at=DELETED_AT)),
    ]

    rows = {row.contributor_id: row for row in aggregate(contributors, contributions)}

    assert rows["b"].total_slices == Decimal("100")
    assert rows["a"].percentage == Decimal("50")


def test_deleted_contributor_excluded_with_contributions():
    """Contributions of a deleted contributor leave the total too."""
    contributors = [
        make_contributor("a"),
        make_contributor("b", deletion=SoftDeletedState(deleted_at=DELETED_AT)),
    ]
    # c2 is still marked live, but its owner is gone
    contributions = [
        make_contribution("c1", "a", 100),
        make_contribution("c2", "b", 300),
    ]

    rows = aggregate(contributors, contributions)

    assert [row.contributor_id for row in rows] == ["a"]
    assert rows[0].percentage == Decimal("100")
    assert [c.id for c in active_contributions(contributions, contributors)] == ["c1"]


def test_slices_by_contributor_covers_live_contributors_only():
    contributors = [
        make_contributor("a"),
        make_contributor("b", deletion=SoftDeletedState(deleted_at=DELETED_AT)),
        make_contributor("c"),
    ]
    contributions = [make_contribution("c1", "a", 10), make_contribution("c2", "b", 20)]

    assert slices_by_contributor(contributors, contributions) == {
        "a": Decimal("10"),
        "c": Decimal("0"),
    }


# =============================================================================
# Helpers
# =============================================================================

def test_contributor_total_slices():
    contributions = [
        make_contribution("c1", "a", 10),
        make_contribution("c2", "a", "2.5"),
        make_contribution("c3", "b", 99),
    ]
    assert contributor_total_slices("a", contributions) == Decimal("12.5")


def test_sort_by_slices_descending():
    """Callers sort; sort_by_slices puts the largest stake first."""
    contributors = [make_contributor("a"), make_contributor("b"), make_contributor("c")]
    contributions = [
        make_contribution("c1", "a", 5),
        make_contribution("c2", "b", 50),
        make_contribution("c3", "c", 20),
    ]

    ordered = sort_by_slices(aggregate(contributors, contributions))

    assert [row.contributor_id for row in ordered] == ["b", "c", "a"]
