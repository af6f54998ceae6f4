"""Business logic services."""

from catalog.services.category_service import CategoryService, to_category_response
from catalog.services.product_service import ProductService

__all__ = [
    "CategoryService",
    "ProductService",
    "to_category_response",
]
