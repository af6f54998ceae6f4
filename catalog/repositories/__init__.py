"""Repositories - single-statement data access over an AsyncSession."""

from catalog.repositories.category_repository import CategoryRepository
from catalog.repositories.product_repository import ProductFilter, ProductRepository

__all__ = [
    "CategoryRepository",
    "ProductFilter",
    "ProductRepository",
]
