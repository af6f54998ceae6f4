"""Category Service - rules of the product category tree.

Orchestrates the category repository, the cycle guard and the hierarchy
assembler:

- names are unique within a sibling set (all roots form one set)
- a category never becomes its own ancestor
- only childless, product-free categories can be deleted

Check-then-write sequences run inside the request session without extra
isolation; the ``(name, parent_id)`` unique constraint is the database-side
backstop for concurrent writers.
"""

from uuid import UUID

from catalog.core.cycle_guard import would_create_cycle
from catalog.core.errors import (
    CategoryHasChildrenError,
    CategoryHasProductsError,
    CategoryNotFoundError,
    CircularParentError,
    DuplicateCategoryNameError,
    ParentCategoryNotFoundError,
    SelfParentError,
)
from catalog.core.hierarchy import build_hierarchy, depth_of
from catalog.infra.logging import get_logger
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.repositories.category_repository import CategoryRepository
from catalog.repositories.product_repository import ProductRepository
from catalog.schemas.category import (
    CategoryCreate,
    CategoryProductSummary,
    CategoryQuery,
    CategoryResponse,
    CategoryUpdate,
)

logger = get_logger(__name__)


def to_category_response(
    category: Category,
    product_count: int = 0,
    parent: CategoryResponse | None = None,
    children: list[CategoryResponse] | None = None,
    products: list[Product] | None = None,
) -> CategoryResponse:
    """Build the response for one category row plus its derived fields."""
    return CategoryResponse(
        id=category.id,
        name=category.name,
        parent_id=category.parent_id,
        created_at=category.created_at,
        product_count=product_count,
        parent=parent,
        children=children,
        products=(
            [CategoryProductSummary.model_validate(p) for p in products]
            if products is not None
            else None
        ),
    )


class CategoryService:
    """Product category operations."""

    def __init__(self, categories: CategoryRepository, products: ProductRepository) -> None:
        self.categories = categories
        self.products = products

    async def _get_or_404(self, category_id: UUID) -> Category:
        category = await self.categories.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def _children_responses(self, parent_ids: list[UUID]) -> dict[UUID, list[CategoryResponse]]:
        """One level of children per parent, each with its product count."""
        children_of = await self.categories.list_children_of(parent_ids)
        child_ids = [c.id for children in children_of.values() for c in children]
        counts = await self.categories.count_products_by_category(child_ids)
        return {
            parent_id: [to_category_response(c, counts.get(c.id, 0)) for c in children]
            for parent_id, children in children_of.items()
        }

    async def _detail(self, category: Category) -> CategoryResponse:
        """Category with its count, parent and counted children."""
        counts = await self.categories.count_products_by_category([category.id])

        parent = None
        if category.parent_id is not None:
            parent_row = await self.categories.get(category.parent_id)
            if parent_row is not None:
                parent = to_category_response(parent_row)

        children = await self._children_responses([category.id])
        return to_category_response(
            category,
            counts.get(category.id, 0),
            parent=parent,
            children=children.get(category.id, []),
        )

    # =========================================================================
    # Commands
    # =========================================================================

    async def create(self, data: CategoryCreate) -> CategoryResponse:
        """Create a category.

        Raises:
            ParentCategoryNotFoundError: If ``parent_id`` does not exist
            DuplicateCategoryNameError: If a sibling already has the name
        """
        parent = None
        if data.parent_id is not None:
            parent = await self.categories.get(data.parent_id)
            if parent is None:
                raise ParentCategoryNotFoundError(data.parent_id)

        if await self.categories.find_sibling(data.name, data.parent_id) is not None:
            raise DuplicateCategoryNameError(data.name, data.parent_id)

        category = await self.categories.create(name=data.name, parent_id=data.parent_id)

        logger.info(
            "Category created",
            category_id=str(category.id),
            name=category.name,
            parent_id=str(category.parent_id) if category.parent_id else None,
        )

        return to_category_response(
            category,
            0,
            parent=to_category_response(parent) if parent is not None else None,
            children=[],
        )

    async def update(self, category_id: UUID, data: CategoryUpdate) -> CategoryResponse:
        """Rename and/or re-parent a category.

        Every check runs before the row is written, against the current tree.

        Raises:
            CategoryNotFoundError: If the category does not exist
            SelfParentError: If ``parent_id`` equals the category id
            ParentCategoryNotFoundError: If the new parent does not exist
            CircularParentError: If the new parent is a descendant
            DuplicateCategoryNameError: If the resulting sibling set has the name
        """
        category = await self._get_or_404(category_id)
        fields: dict[str, object] = {}

        new_parent_id = category.parent_id
        if data.parent_id_set:
            if data.parent_id is not None:
                if data.parent_id == category_id:
                    raise SelfParentError(category_id)
                if await self.categories.get(data.parent_id) is None:
                    raise ParentCategoryNotFoundError(data.parent_id)
                if await would_create_cycle(self.categories, category_id, data.parent_id):
                    raise CircularParentError(category_id, data.parent_id)
            new_parent_id = data.parent_id
            fields["parent_id"] = data.parent_id

        new_name = category.name
        if data.name is not None:
            new_name = data.name
            fields["name"] = data.name

        if data.name is not None or new_parent_id != category.parent_id:
            conflict = await self.categories.find_sibling(new_name, new_parent_id, exclude_id=category_id)
            if conflict is not None:
                raise DuplicateCategoryNameError(new_name, new_parent_id)

        if fields:
            category = await self.categories.update(category, **fields)
            logger.info(
                "Category updated",
                category_id=str(category_id),
                fields=sorted(fields),
            )

        return await self._detail(category)

    async def remove(self, category_id: UUID) -> None:
        """Delete a leaf category without products.

        Raises:
            CategoryNotFoundError: If the category does not exist
            CategoryHasChildrenError: If it has subcategories
            CategoryHasProductsError: If products are filed under it
        """
        await self._get_or_404(category_id)

        children = await self.categories.count_children(category_id)
        if children > 0:
            raise CategoryHasChildrenError(category_id, children)

        products = await self.categories.count_products(category_id)
        if products > 0:
            raise CategoryHasProductsError(category_id, products)

        await self.categories.delete(category_id)
        logger.info("Category deleted", category_id=str(category_id))

    # =========================================================================
    # Queries
    # =========================================================================

    async def find_all(self, query: CategoryQuery | None = None) -> list[CategoryResponse]:
        """List categories with filters, optional relations and sorting.

        Sorting by ``productCount`` happens in memory after the fetch; the
        database query is then ordered by name.
        """
        query = query or CategoryQuery()
        by_count = query.sort_by == "productCount"

        rows = await self.categories.find_all(
            search=query.search,
            parent_id=query.parent_id,
            roots_only=query.roots_only,
            order_by="created_at" if query.sort_by == "createdAt" else "name",
            descending=query.sort_order == "desc" and not by_count,
        )

        if query.level is not None:
            arena = await self.categories.parent_map()
            rows = [c for c in rows if depth_of(arena, c.id) == query.level]

        ids = [c.id for c in rows]
        counts = await self.categories.count_products_by_category(ids)

        parents: dict[UUID, Category] = {}
        if query.include_parent:
            parents = await self.categories.get_many(c.parent_id for c in rows if c.parent_id is not None)

        children: dict[UUID, list[CategoryResponse]] = {}
        if query.include_children:
            children = await self._children_responses(ids)

        products: dict[UUID, list[Product]] = {}
        if query.include_products:
            products = await self.products.find_by_categories(set(ids))

        result = []
        for category in rows:
            parent_row = parents.get(category.parent_id) if category.parent_id else None
            result.append(
                to_category_response(
                    category,
                    counts.get(category.id, 0),
                    parent=to_category_response(parent_row) if parent_row is not None else None,
                    children=children.get(category.id, []) if query.include_children else None,
                    products=products.get(category.id, []) if query.include_products else None,
                )
            )

        if by_count:
            result.sort(key=lambda c: c.product_count, reverse=query.sort_order == "desc")

        return result

    async def find_roots(self) -> list[CategoryResponse]:
        """Root categories ordered by name, each with one level of children."""
        roots = await self.categories.find_all(roots_only=True)
        ids = [c.id for c in roots]
        counts = await self.categories.count_products_by_category(ids)
        children = await self._children_responses(ids)

        return [
            to_category_response(c, counts.get(c.id, 0), children=children.get(c.id, []))
            for c in roots
        ]

    async def find_one(self, category_id: UUID) -> CategoryResponse:
        """Category with product count, parent and direct children.

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        category = await self._get_or_404(category_id)
        return await self._detail(category)

    async def get_category_hierarchy(self, category_id: UUID) -> CategoryResponse:
        """Fully expanded subtree rooted at ``category_id``.

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        tree = await build_hierarchy(self.categories, category_id)
        logger.debug("Category hierarchy assembled", category_id=str(category_id))
        return tree
