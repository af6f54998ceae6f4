"""Tables that reference products from outside the catalog.

Orders and campaigns are owned by other services; the catalog only reads
these link tables to refuse deleting a product that is still referenced.
"""

import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class OrderItem(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Order line pointing at a product."""

    __tablename__ = "order_items"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<OrderItem(id={self.id}, product_id={self.product_id})>"


class CampaignProduct(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Campaign membership of a product."""

    __tablename__ = "campaign_products"

    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<CampaignProduct(id={self.id}, product_id={self.product_id})>"
