"""Product Service - catalog items, stock movements and statistics."""

from uuid import UUID

from catalog.config import settings
from catalog.core.errors import (
    CategoryNotFoundError,
    CategoryReferenceNotFoundError,
    DuplicateProductNameError,
    InsufficientStockError,
    ProductInUseError,
    ProductNotFoundError,
)
from catalog.core.pagination import PageInfo
from catalog.core.stock import StockStatus
from catalog.infra.logging import get_logger
from catalog.models.product import Product
from catalog.repositories.category_repository import CategoryRepository
from catalog.repositories.product_repository import ProductFilter, ProductRepository
from catalog.schemas.category import CategoryResponse
from catalog.schemas.product import (
    CategoryProductCount,
    PaginatedProductResponse,
    PaginationMeta,
    ProductCreate,
    ProductQuery,
    ProductResponse,
    ProductStats,
    ProductUpdate,
)
from catalog.services.category_service import to_category_response

logger = get_logger(__name__)

_SORT_COLUMNS = {
    "name": "name",
    "price": "price",
    "stock": "stock",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


class ProductService:
    """Product operations."""

    def __init__(self, products: ProductRepository, categories: CategoryRepository) -> None:
        self.products = products
        self.categories = categories

    async def _get_or_404(self, product_id: UUID) -> Product:
        product = await self.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def _ensure_category(self, category_id: UUID | None) -> None:
        if category_id is not None and await self.categories.get(category_id) is None:
            raise CategoryReferenceNotFoundError(category_id)

    async def _to_responses(self, products: list[Product], include_category: bool) -> list[ProductResponse]:
        categories: dict[UUID, CategoryResponse] = {}
        if include_category:
            rows = await self.categories.get_many(
                p.category_id for p in products if p.category_id is not None
            )
            categories = {cid: to_category_response(c) for cid, c in rows.items()}

        responses = []
        for product in products:
            response = ProductResponse.model_validate(product)
            if include_category and product.category_id is not None:
                response.category = categories.get(product.category_id)
            responses.append(response)
        return responses

    async def _to_response(self, product: Product, include_category: bool = True) -> ProductResponse:
        return (await self._to_responses([product], include_category))[0]

    # =========================================================================
    # Commands
    # =========================================================================

    async def create(self, data: ProductCreate) -> ProductResponse:
        """Create a product.

        Raises:
            CategoryReferenceNotFoundError: If ``category_id`` does not exist
            DuplicateProductNameError: If the name is taken
        """
        await self._ensure_category(data.category_id)

        if await self.products.find_by_name(data.name) is not None:
            raise DuplicateProductNameError(data.name)

        product = await self.products.create(**data.model_dump())
        logger.info(
            "Product created",
            product_id=str(product.id),
            name=product.name,
            category_id=str(product.category_id) if product.category_id else None,
        )
        return await self._to_response(product)

    async def update(self, product_id: UUID, data: ProductUpdate) -> ProductResponse:
        """Update the provided fields of a product.

        Raises:
            ProductNotFoundError: If the product does not exist
            CategoryReferenceNotFoundError: If the new category does not exist
            DuplicateProductNameError: If the new name is taken by another product
        """
        product = await self._get_or_404(product_id)
        await self._ensure_category(data.category_id)

        if data.name is not None and data.name != product.name:
            if await self.products.find_by_name(data.name, exclude_id=product_id) is not None:
                raise DuplicateProductNameError(data.name)

        fields = data.model_dump(exclude_unset=True)
        if fields:
            product = await self.products.update(product, **fields)
            logger.info("Product updated", product_id=str(product_id), fields=sorted(fields))

        return await self._to_response(product)

    async def update_stock(self, product_id: UUID, quantity: int) -> ProductResponse:
        """Apply a signed stock movement.

        Raises:
            ProductNotFoundError: If the product does not exist
            InsufficientStockError: If the result would be negative
        """
        product = await self._get_or_404(product_id)

        new_stock = product.stock + quantity
        if new_stock < 0:
            raise InsufficientStockError(product_id, product.stock, quantity)

        previous = product.stock
        product = await self.products.update(product, stock=new_stock)
        logger.info(
            "Product stock updated",
            product_id=str(product_id),
            previous_stock=previous,
            quantity=quantity,
            stock=new_stock,
        )
        return await self._to_response(product)

    async def remove(self, product_id: UUID) -> None:
        """Delete a product no order or campaign refers to.

        Raises:
            ProductNotFoundError: If the product does not exist
            ProductInUseError: If order items or campaign products reference it
        """
        await self._get_or_404(product_id)

        if await self.products.count_order_items(product_id) > 0:
            raise ProductInUseError(product_id, "Cannot delete product that has been ordered")
        if await self.products.count_campaign_links(product_id) > 0:
            raise ProductInUseError(product_id, "Cannot delete product that is part of campaigns")

        await self.products.delete(product_id)
        logger.info("Product deleted", product_id=str(product_id))

    # =========================================================================
    # Queries
    # =========================================================================

    async def find_all(self, query: ProductQuery | None = None) -> PaginatedProductResponse:
        """Filtered, sorted, paginated product listing."""
        query = query or ProductQuery()
        limit = min(query.limit, settings.max_page_size)

        filters = ProductFilter(
            search=query.search,
            category_id=query.category_id,
            min_price=query.min_price,
            max_price=query.max_price,
            stock_status=query.stock_status,
        )
        page = PageInfo.compute(query.page, limit, await self.products.count(filters))

        rows = await self.products.find_page(
            filters,
            order_by=_SORT_COLUMNS[query.sort_by],  # type: ignore[arg-type]
            descending=query.sort_order == "desc",
            offset=page.offset,
            limit=limit,
        )

        return PaginatedProductResponse(
            data=await self._to_responses(rows, query.include_category),
            meta=PaginationMeta(
                page=page.page,
                limit=page.limit,
                total=page.total,
                total_pages=page.total_pages,
                has_next=page.has_next,
                has_previous=page.has_previous,
            ),
        )

    async def find_one(self, product_id: UUID, include_category: bool = True) -> ProductResponse:
        """Raises ProductNotFoundError if the product does not exist."""
        product = await self._get_or_404(product_id)
        return await self._to_response(product, include_category)

    async def find_by_category(
        self,
        category_id: UUID,
        query: ProductQuery | None = None,
    ) -> PaginatedProductResponse:
        """Products of one category.

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        if await self.categories.get(category_id) is None:
            raise CategoryNotFoundError(category_id)

        query = query or ProductQuery()
        return await self.find_all(query.model_copy(update={"category_id": category_id}))

    async def get_low_stock(self, threshold: int | None = None) -> list[ProductResponse]:
        """Products at or below ``threshold`` units, lowest stock first."""
        if threshold is None:
            threshold = settings.low_stock_threshold
        rows = await self.products.find_low_stock(threshold)
        return await self._to_responses(rows, include_category=True)

    async def get_stats(self) -> ProductStats:
        total = await self.products.count()
        by_status = await self.products.count_by_stock_status()
        by_category = await self.products.count_per_category()

        return ProductStats(
            total=total,
            in_stock=by_status[StockStatus.IN_STOCK],
            low_stock=by_status[StockStatus.LOW_STOCK],
            out_of_stock=by_status[StockStatus.OUT_OF_STOCK],
            by_category=[
                CategoryProductCount(category_name=name, count=count) for name, count in by_category
            ],
        )
