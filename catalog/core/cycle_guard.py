"""Cycle detection for category re-parenting.

The walk reads the parent chain as it is *before* the update is written,
so it must be called strictly before the new parent is persisted.
"""

from typing import Protocol
from uuid import UUID

from catalog.infra.logging import get_logger
from catalog.models.category import Category

logger = get_logger(__name__)


class CategoryLookup(Protocol):
    """Point lookup by id, returning None when no row matches."""

    async def get(self, category_id: UUID) -> Category | None: ...


async def would_create_cycle(
    store: CategoryLookup,
    category_id: UUID,
    proposed_parent_id: UUID,
) -> bool:
    """Check whether ``proposed_parent_id`` may become the parent of ``category_id``.

    Walks upward from the proposed parent following ``parent_id`` links.

    Args:
        store: Category lookup (one read per ancestor)
        category_id: Category being re-parented
        proposed_parent_id: Candidate parent

    Returns:
        True if the category would become its own ancestor (including the
        proposed parent being the category itself) or if the existing chain
        already loops; False once a root or a missing row is reached.
    """
    visited: set[UUID] = set()
    current: UUID | None = proposed_parent_id
    depth = 0

    while current is not None:
        if current in visited:
            logger.warning(
                "Existing category chain contains a loop",
                category_id=str(category_id),
                repeated_id=str(current),
            )
            return True

        if current == category_id:
            logger.debug(
                "Re-parenting rejected, category is an ancestor of the new parent",
                category_id=str(category_id),
                proposed_parent_id=str(proposed_parent_id),
                depth=depth,
            )
            return True

        visited.add(current)
        ancestor = await store.get(current)
        current = ancestor.parent_id if ancestor is not None else None
        depth += 1

    return False
