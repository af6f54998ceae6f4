"""Category Store - persistence operations for product categories.

Every method issues a single statement (or a single aggregate) against the
request session. Nothing here enforces catalog rules; that is the job of
:class:`catalog.services.category_service.CategoryService`.
"""

from collections.abc import Iterable
from typing import Literal
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.infra.logging import get_logger
from catalog.models.category import Category
from catalog.models.product import Product

logger = get_logger(__name__)

CategoryOrderField = Literal["name", "created_at"]


class CategoryRepository:
    """Data access for the ``product_categories`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # =========================================================================
    # Lookups
    # =========================================================================

    async def get(self, category_id: UUID) -> Category | None:
        """Fetch a category by id, or None if no row matches."""
        result = await self.session.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def get_many(self, category_ids: Iterable[UUID]) -> dict[UUID, Category]:
        ids = set(category_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(Category).where(Category.id.in_(ids)))
        return {c.id: c for c in result.scalars().all()}

    async def find_sibling(
        self,
        name: str,
        parent_id: UUID | None,
        exclude_id: UUID | None = None,
    ) -> Category | None:
        """Find a category named ``name`` in the sibling set of ``parent_id``.

        ``parent_id=None`` searches among the roots.
        """
        stmt = select(Category).where(Category.name == name)
        if parent_id is None:
            stmt = stmt.where(Category.parent_id.is_(None))
        else:
            stmt = stmt.where(Category.parent_id == parent_id)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)

        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    async def list_children(self, parent_id: UUID) -> list[Category]:
        """Direct children of a category, ordered by name."""
        result = await self.session.execute(
            select(Category).where(Category.parent_id == parent_id).order_by(Category.name)
        )
        return list(result.scalars().all())

    async def list_children_of(self, parent_ids: Iterable[UUID]) -> dict[UUID, list[Category]]:
        """Direct children of several categories, grouped by parent id."""
        ids = set(parent_ids)
        grouped: dict[UUID, list[Category]] = {pid: [] for pid in ids}
        if not ids:
            return grouped

        result = await self.session.execute(
            select(Category).where(Category.parent_id.in_(ids)).order_by(Category.name)
        )
        for child in result.scalars().all():
            grouped[child.parent_id].append(child)  # type: ignore[index]
        return grouped

    async def find_all(
        self,
        search: str | None = None,
        parent_id: UUID | None = None,
        roots_only: bool = False,
        order_by: CategoryOrderField = "name",
        descending: bool = False,
    ) -> list[Category]:
        """List categories matching the filters.

        Args:
            search: Case-insensitive substring of the name
            parent_id: Only direct children of this category
            roots_only: Only root categories (overrides ``parent_id``)
            order_by: Column to sort on
            descending: Sort direction
        """
        stmt = select(Category)
        if search:
            stmt = stmt.where(Category.name.icontains(search, autoescape=True))
        if roots_only:
            stmt = stmt.where(Category.parent_id.is_(None))
        elif parent_id is not None:
            stmt = stmt.where(Category.parent_id == parent_id)

        column = Category.created_at if order_by == "created_at" else Category.name
        stmt = stmt.order_by(column.desc() if descending else column.asc(), Category.id)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def parent_map(self) -> dict[UUID, UUID | None]:
        """Return every ``id -> parent_id`` pair of the table."""
        result = await self.session.execute(select(Category.id, Category.parent_id))
        return {row.id: row.parent_id for row in result.all()}

    # =========================================================================
    # Aggregates
    # =========================================================================

    async def count_children(self, category_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Category).where(Category.parent_id == category_id)
        )
        return result.scalar_one()

    async def count_products(self, category_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Product).where(Product.category_id == category_id)
        )
        return result.scalar_one()

    async def count_products_by_category(self, category_ids: Iterable[UUID]) -> dict[UUID, int]:
        """Product counts per category; categories without products map to 0."""
        ids = set(category_ids)
        counts: dict[UUID, int] = {cid: 0 for cid in ids}
        if not ids:
            return counts

        result = await self.session.execute(
            select(Product.category_id, func.count(Product.id))
            .where(Product.category_id.in_(ids))
            .group_by(Product.category_id)
        )
        for category_id, count in result.all():
            counts[category_id] = count
        return counts

    # =========================================================================
    # Writes
    # =========================================================================

    async def create(self, name: str, parent_id: UUID | None = None) -> Category:
        category = Category(name=name, parent_id=parent_id)
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)

        logger.debug("Category row inserted", category_id=str(category.id))
        return category

    async def update(self, category: Category, **fields: object) -> Category:
        for field, value in fields.items():
            setattr(category, field, value)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete(self, category_id: UUID) -> None:
        await self.session.execute(delete(Category).where(Category.id == category_id))
        await self.session.flush()
