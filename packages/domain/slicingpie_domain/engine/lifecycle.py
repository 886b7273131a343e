"""Soft delete and restore as pure snapshot transforms.

Nothing is mutated in place: every function returns fresh model copies and
the persistence layer decides what to store.

Rules:
    - Deleting a contributor cascade-deletes its live contributions, tagging
      each with cascaded_from=<contributor id>
    - Restoring a contributor restores exactly the rows cascaded from it;
      contributions deleted directly beforehand stay deleted
    - A cascade-deleted contribution cannot be restored on its own
"""

from typing import Iterable, List, Optional, Tuple
from decimal import Decimal
from datetime import datetime

from ..logging import get_logger
from ..schemas import ActiveState, Contribution, Contributor, SoftDeletedState

logger = get_logger(__name__)


def soft_delete_contributor(
    contributor: Contributor,
    contributions: Iterable[Contribution],
    at: datetime,
) -> Tuple[Contributor, List[Contribution]]:
    """Delete a contributor and cascade to its live contributions.

    Returns:
        (deleted contributor, full contribution list with cascaded rows replaced)
    """
    deleted = contributor.model_copy(update={"deletion": SoftDeletedState(deleted_at=at)})

    rows = []
    cascaded = 0
    for contribution in contributions:
        if contribution.contributor_id == contributor.id and not contribution.is_deleted:
            contribution = contribution.model_copy(update={
                "deletion": SoftDeletedState(deleted_at=at, cascaded_from=contributor.id)
            })
            cascaded += 1
        rows.append(contribution)

    logger.debug("Soft-deleted contributor %s with %d cascaded contributions", contributor.id, cascaded)
    return deleted, rows


def soft_delete_contribution(contribution: Contribution, at: datetime) -> Contribution:
    """Directly delete one contribution (restorable on its own)."""
    return contribution.model_copy(update={"deletion": SoftDeletedState(deleted_at=at)})


def restore_contributor(
    contributor: Contributor,
    contributions: Iterable[Contribution],
) -> Tuple[Contributor, List[Contribution]]:
    """Restore a contributor together with the rows cascaded from it."""
    restored = contributor.model_copy(update={"deletion": ActiveState()})

    rows = []
    for contribution in contributions:
        deletion = contribution.deletion
        if isinstance(deletion, SoftDeletedState) and deletion.cascaded_from == contributor.id:
            contribution = contribution.model_copy(update={"deletion": ActiveState()})
        rows.append(contribution)

    return restored, rows


def restore_contribution(contribution: Contribution) -> Optional[Contribution]:
    """Restore a directly deleted contribution.

    Returns:
        The restored row, or None when the row is live or was cascade-deleted
    """
    if not contribution.can_restore_independently:
        return None
    return contribution.model_copy(update={"deletion": ActiveState()})


def slices_affected(
    contributor_id: str, contributions: Iterable[Contribution]
) -> Decimal:
    """Slices removed from the pie when a contributor is deleted (audit log figure)."""
    return sum(
        (c.slices for c in contributions if c.contributor_id == contributor_id and not c.is_deleted),
        Decimal("0"),
    )
