"""Product model - sellable item, optionally filed under a category."""

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

PRODUCT_NAME_MAX_LENGTH = 255
PRODUCT_DESCRIPTION_MAX_LENGTH = 1000


class Product(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Product with price and stock.

    ``stock_status`` is derived from ``stock`` on read, see
    :func:`catalog.core.stock.stock_status`.
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(
        String(PRODUCT_NAME_MAX_LENGTH), unique=True, nullable=False, index=True
    )
    description: Mapped[str | None] = mapped_column(
        String(PRODUCT_DESCRIPTION_MAX_LENGTH), nullable=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("product_categories.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock})>"
