"""Tests for soft delete and restore.

Tests cover:
- Contributor deletion cascades to its live contributions
- Directly deleted contributions keep their own deletion record
- Restoring a contributor restores only cascaded rows
- Cascaded rows cannot be restored on their own
- Inputs are never mutated
"""

from decimal import Decimal
from datetime import date, datetime

from slicingpie_domain.engine import (
    aggregate,
    restore_contribution,
    restore_contributor,
    slices_affected,
    soft_delete_contribution,
    soft_delete_contributor,
)
from slicingpie_domain.schemas import (
    ActiveState,
    Contribution,
    Contributor,
    SoftDeletedState,
)


EARLIER = datetime(2024, 3, 1, 9, 0)
LATER = datetime(2024, 6, 1, 9, 0)


def make_contribution(id, contributor_id, slices):
    return Contribution(
        id=id,
        contributor_id=contributor_id,
        type="cash",
        value=Decimal(slices) / 4,
        contribution_date=date(2024, 1, 1),
        multiplier=Decimal("4"),
        slices=Decimal(slices),
    )


def make_state():
    alice = Contributor(id="alice", name="Alice", hourly_rate=Decimal("50"))
    bob = Contributor(id="bob", name="Bob", hourly_rate=Decimal("50"))
    contributions = [
        make_contribution("a1", "alice", 400),
        make_contribution("a2", "alice", 600),
        make_contribution("b1", "bob", 1000),
    ]
    return alice, bob, contributions


# =============================================================================
# Deletion
# =============================================================================

def test_delete_contributor_cascades():
    """Every live contribution of the contributor is tagged with cascaded_from."""
    alice, bob, contributions = make_state()

    deleted, rows = soft_delete_contributor(alice, contributions, LATER)

    assert deleted.is_deleted
    assert deleted.deletion.deleted_at == LATER
    by_id = {row.id: row for row in rows}
    assert by_id["a1"].deletion.cascaded_from == "alice"
    assert by_id["a2"].is_cascade_deleted
    assert not by_id["b1"].is_deleted


def test_delete_contributor_does_not_mutate_inputs():
    alice, _, contributions = make_state()

    soft_delete_contributor(alice, contributions, LATER)

    assert not alice.is_deleted
    assert all(not c.is_deleted for c in contributions)


def test_deleted_contributor_leaves_the_pie():
    alice, bob, contributions = make_state()

    deleted, rows = soft_delete_contributor(alice, contributions, LATER)
    equity = aggregate([deleted, bob], rows)

    assert [row.contributor_id for row in equity] == ["bob"]
    assert equity[0].percentage == Decimal("100")


def test_slices_affected():
    _, _, contributions = make_state()
    contributions[0] = soft_delete_contribution(contributions[0], EARLIER)

    assert slices_affected("alice", contributions) == Decimal("600")


# =============================================================================
# Restore
# =============================================================================

def test_restore_contributor_restores_cascaded_rows_only():
    """A row deleted directly before the cascade stays deleted."""
    alice, _, contributions = make_state()
    contributions[0] = soft_delete_contribution(contributions[0], EARLIER)

    deleted, rows = soft_delete_contributor(alice, contributions, LATER)
    by_id = {row.id: row for row in rows}
    assert by_id["a1"].deletion.cascaded_from is None
    assert by_id["a1"].deletion.deleted_at == EARLIER

    restored, rows = restore_contributor(deleted, rows)
    by_id = {row.id: row for row in rows}

    assert not restored.is_deleted
    assert by_id["a1"].is_deleted
    assert not by_id["a2"].is_deleted
    assert not by_id["b1"].is_deleted


def test_cascaded_row_cannot_be_restored_alone():
    alice, _, contributions = make_state()
    _, rows = soft_delete_contributor(alice, contributions, LATER)

    assert not rows[0].can_restore_independently
    assert restore_contribution(rows[0]) is None


def test_directly_deleted_row_restores():
    _, _, contributions = make_state()
    deleted = soft_delete_contribution(contributions[2], EARLIER)

    assert deleted.can_restore_independently
    restored = restore_contribution(deleted)
    assert isinstance(restored.deletion, ActiveState)


def test_restore_live_row_is_noop():
    _, _, contributions = make_state()
    assert restore_contribution(contributions[0]) is None


def test_restore_ignores_rows_cascaded_from_someone_else():
    alice, bob, contributions = make_state()
    contributions[2] = contributions[2].model_copy(update={
        "deletion": SoftDeletedState(deleted_at=LATER, cascaded_from="bob"),
    })

    _, rows = restore_contributor(alice, contributions)

    assert rows[2].is_cascade_deleted
