"""SQLAlchemy models for the catalog.

Categories and products are owned by this service. Order items and
campaign products are read-only references used by the delete guards.
"""

from catalog.models.base import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin
from catalog.models.category import Category
from catalog.models.product import Product
from catalog.models.references import CampaignProduct, OrderItem

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "CampaignProduct",
    "Category",
    "OrderItem",
    "Product",
]
