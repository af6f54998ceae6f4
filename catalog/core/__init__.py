"""Core module - category tree rules, stock and pagination helpers, domain errors.

``catalog.core.hierarchy`` builds response schemas and is imported directly
rather than re-exported here.
"""

from catalog.core.cycle_guard import would_create_cycle
from catalog.core.errors import BadRequestError, CatalogError, ErrorCode, NotFoundError
from catalog.core.pagination import PageInfo
from catalog.core.stock import StockStatus, stock_status

__all__ = [
    "BadRequestError",
    "CatalogError",
    "ErrorCode",
    "NotFoundError",
    "PageInfo",
    "StockStatus",
    "stock_status",
    "would_create_cycle",
]
