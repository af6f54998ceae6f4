"""Product persistence operations."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from sqlalchemy import ColumnElement, Select, and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.stock import LOW_STOCK_LIMIT, StockStatus
from catalog.infra.logging import get_logger
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.models.references import CampaignProduct, OrderItem

logger = get_logger(__name__)

ProductOrderField = Literal["name", "price", "stock", "created_at", "updated_at"]


@dataclass(frozen=True)
class ProductFilter:
    """Filters of a product listing; ``None`` means "don't filter"."""

    search: str | None = None
    category_id: UUID | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    stock_status: StockStatus | None = None


def stock_status_condition(status: StockStatus) -> ColumnElement[bool]:
    """SQL condition matching products in the given stock status."""
    if status == StockStatus.OUT_OF_STOCK:
        return Product.stock == 0
    if status == StockStatus.LOW_STOCK:
        return and_(Product.stock > 0, Product.stock <= LOW_STOCK_LIMIT)
    return Product.stock > LOW_STOCK_LIMIT


class ProductRepository:
    """Data access for the ``products`` table and its reference tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, product_id: UUID) -> Product | None:
        result = await self.session.execute(select(Product).where(Product.id == product_id))
        return result.scalar_one_or_none()

    async def find_by_name(self, name: str, exclude_id: UUID | None = None) -> Product | None:
        stmt = select(Product).where(Product.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    def _apply_filter(self, stmt: Select[Any], filters: ProductFilter) -> Select[Any]:
        if filters.search:
            stmt = stmt.where(
                or_(
                    Product.name.icontains(filters.search, autoescape=True),
                    Product.description.icontains(filters.search, autoescape=True),
                )
            )
        if filters.category_id is not None:
            stmt = stmt.where(Product.category_id == filters.category_id)
        if filters.min_price is not None:
            stmt = stmt.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Product.price <= filters.max_price)
        if filters.stock_status is not None:
            stmt = stmt.where(stock_status_condition(filters.stock_status))
        return stmt

    async def count(self, filters: ProductFilter | None = None) -> int:
        stmt = select(func.count()).select_from(Product)
        stmt = self._apply_filter(stmt, filters or ProductFilter())
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_page(
        self,
        filters: ProductFilter,
        order_by: ProductOrderField = "created_at",
        descending: bool = True,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Product]:
        """One page of products matching ``filters``."""
        column = getattr(Product, order_by)
        stmt = self._apply_filter(select(Product), filters)
        stmt = stmt.order_by(column.desc() if descending else column.asc(), Product.id)
        result = await self.session.execute(stmt.offset(offset).limit(limit))
        return list(result.scalars().all())

    async def find_low_stock(self, threshold: int) -> list[Product]:
        """Products with ``stock <= threshold``, lowest stock first."""
        result = await self.session.execute(
            select(Product)
            .where(Product.stock <= threshold)
            .order_by(Product.stock.asc(), Product.name)
        )
        return list(result.scalars().all())

    async def find_by_categories(self, category_ids: set[UUID]) -> dict[UUID, list[Product]]:
        grouped: dict[UUID, list[Product]] = {cid: [] for cid in category_ids}
        if not category_ids:
            return grouped
        result = await self.session.execute(
            select(Product).where(Product.category_id.in_(category_ids)).order_by(Product.name)
        )
        for product in result.scalars().all():
            grouped[product.category_id].append(product)  # type: ignore[index]
        return grouped

    async def count_by_stock_status(self) -> dict[StockStatus, int]:
        counts: dict[StockStatus, int] = {}
        for status in StockStatus:
            counts[status] = await self.count(ProductFilter(stock_status=status))
        return counts

    async def count_per_category(self) -> list[tuple[str, int]]:
        """``(category name, product count)`` for every category, including empty ones."""
        result = await self.session.execute(
            select(Category.name, func.count(Product.id))
            .select_from(Category)
            .outerjoin(Product, Product.category_id == Category.id)
            .group_by(Category.id, Category.name)
            .order_by(Category.name)
        )
        return [(name, count) for name, count in result.all()]

    async def count_order_items(self, product_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(OrderItem).where(OrderItem.product_id == product_id)
        )
        return result.scalar_one()

    async def count_campaign_links(self, product_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(CampaignProduct)
            .where(CampaignProduct.product_id == product_id)
        )
        return result.scalar_one()

    async def create(self, **fields: Any) -> Product:
        product = Product(**fields)
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)

        logger.debug("Product row inserted", product_id=str(product.id))
        return product

    async def update(self, product: Product, **fields: Any) -> Product:
        for field, value in fields.items():
            setattr(product, field, value)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def delete(self, product_id: UUID) -> None:
        await self.session.execute(delete(Product).where(Product.id == product_id))
        await self.session.flush()
