"""Hierarchy assembly for the category tree.

Categories are addressed by id only; the tree is rebuilt from repeated
store lookups rather than from ORM object graphs. Acyclicity is enforced at
write time by :mod:`catalog.core.cycle_guard`, so the recursion here
assumes it terminates.
"""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from catalog.core.errors import CategoryNotFoundError
from catalog.models.category import Category
from catalog.schemas.category import CategoryResponse


class HierarchyStore(Protocol):
    async def get(self, category_id: UUID) -> Category | None: ...

    async def list_children(self, parent_id: UUID) -> list[Category]: ...

    async def count_products_by_category(self, category_ids: Iterable[UUID]) -> dict[UUID, int]: ...


async def build_hierarchy(store: HierarchyStore, root_id: UUID) -> CategoryResponse:
    """Load the full subtree rooted at ``root_id``.

    Raises:
        CategoryNotFoundError: If the root does not exist
    """
    root = await store.get(root_id)
    if root is None:
        raise CategoryNotFoundError(root_id)

    counts = await store.count_products_by_category([root.id])
    return await _expand(store, root, counts.get(root.id, 0))


async def _expand(store: HierarchyStore, category: Category, product_count: int) -> CategoryResponse:
    children = await store.list_children(category.id)
    counts = await store.count_products_by_category(c.id for c in children)

    # An AsyncSession cannot run statements concurrently
    expanded = []
    for child in children:
        expanded.append(await _expand(store, child, counts.get(child.id, 0)))

    return CategoryResponse(
        id=category.id,
        name=category.name,
        parent_id=category.parent_id,
        created_at=category.created_at,
        product_count=product_count,
        children=expanded,
    )


def depth_of(parent_map: dict[UUID, UUID | None], category_id: UUID) -> int:
    """Number of ancestors of ``category_id`` (roots are at depth 0).

    ``parent_map`` is the ``id -> parent_id`` arena of the whole table. A
    dangling parent id ends the walk like a root does.
    """
    depth = 0
    seen = {category_id}
    current = parent_map.get(category_id)
    while current is not None and current in parent_map and current not in seen:
        seen.add(current)
        depth += 1
        current = parent_map[current]
    return depth
