"""Pydantic schemas for request/response validation."""

from catalog.schemas.category import (
    CategoryCreate,
    CategoryProductSummary,
    CategoryQuery,
    CategoryResponse,
    CategoryUpdate,
)
from catalog.schemas.common import ErrorResponse, HealthResponse
from catalog.schemas.product import (
    PaginatedProductResponse,
    PaginationMeta,
    ProductCreate,
    ProductQuery,
    ProductResponse,
    ProductStats,
    ProductUpdate,
    StockUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryProductSummary",
    "CategoryQuery",
    "CategoryResponse",
    "CategoryUpdate",
    "ErrorResponse",
    "HealthResponse",
    "PaginatedProductResponse",
    "PaginationMeta",
    "ProductCreate",
    "ProductQuery",
    "ProductResponse",
    "ProductStats",
    "ProductUpdate",
    "StockUpdate",
]
