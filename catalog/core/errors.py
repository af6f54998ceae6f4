"""Domain errors raised by the catalog services.

Every error carries the HTTP status and the machine-readable error code it
is translated to by the global exception handlers in ``catalog.api.errors``.
"""

from typing import Any
from uuid import UUID


class ErrorCode:
    """Error codes exposed in the ``error`` field of error responses."""

    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    FOREIGN_KEY_CONSTRAINT = "FOREIGN_KEY_CONSTRAINT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CatalogError(Exception):
    """Base class for all catalog domain errors."""

    status_code: int = 500
    error_code: str = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


# =============================================================================
# Not found (404)
# =============================================================================


class NotFoundError(CatalogError):
    """Referenced entity does not exist."""

    status_code = 404
    error_code = ErrorCode.RESOURCE_NOT_FOUND


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: UUID) -> None:
        super().__init__("Product category not found", {"id": str(category_id)})
        self.category_id = category_id


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: UUID) -> None:
        super().__init__("Product not found", {"id": str(product_id)})
        self.product_id = product_id


# =============================================================================
# Bad request (400)
# =============================================================================


class BadRequestError(CatalogError):
    """Semantic violation of a catalog rule."""

    status_code = 400
    error_code = ErrorCode.VALIDATION_ERROR


class DuplicateCategoryNameError(BadRequestError):
    """Another category with the same name already exists in the sibling set."""

    error_code = ErrorCode.DUPLICATE_RESOURCE

    def __init__(self, name: str, parent_id: UUID | None) -> None:
        super().__init__(
            "Category name already exists at this level",
            {"name": name, "parentId": str(parent_id) if parent_id else None},
        )


class ParentCategoryNotFoundError(BadRequestError):
    """Requested parent category does not exist."""

    error_code = ErrorCode.FOREIGN_KEY_CONSTRAINT

    def __init__(self, parent_id: UUID) -> None:
        super().__init__("Parent category not found", {"parentId": str(parent_id)})


class SelfParentError(BadRequestError):
    def __init__(self, category_id: UUID) -> None:
        super().__init__("Category cannot be its own parent", {"id": str(category_id)})


class CircularParentError(BadRequestError):
    """Assigning the parent would make the category its own ancestor."""

    def __init__(self, category_id: UUID, parent_id: UUID) -> None:
        super().__init__(
            "Circular dependency detected",
            {"id": str(category_id), "parentId": str(parent_id)},
        )


class CategoryHasChildrenError(BadRequestError):
    def __init__(self, category_id: UUID, children: int) -> None:
        super().__init__(
            "Cannot delete category with subcategories",
            {"id": str(category_id), "children": children},
        )


class CategoryHasProductsError(BadRequestError):
    def __init__(self, category_id: UUID, products: int) -> None:
        super().__init__(
            "Cannot delete category with products",
            {"id": str(category_id), "products": products},
        )


class CategoryReferenceNotFoundError(BadRequestError):
    """Product points at a category that does not exist."""

    error_code = ErrorCode.FOREIGN_KEY_CONSTRAINT

    def __init__(self, category_id: UUID) -> None:
        super().__init__("Category not found", {"categoryId": str(category_id)})


class DuplicateProductNameError(BadRequestError):
    error_code = ErrorCode.DUPLICATE_RESOURCE

    def __init__(self, name: str) -> None:
        super().__init__("Product with this name already exists", {"name": name})


class InsufficientStockError(BadRequestError):
    def __init__(self, product_id: UUID, stock: int, quantity: int) -> None:
        super().__init__(
            "Insufficient stock",
            {"id": str(product_id), "stock": stock, "quantity": quantity},
        )


class ProductInUseError(BadRequestError):
    """Product is still referenced by orders or campaigns."""

    def __init__(self, product_id: UUID, reason: str) -> None:
        super().__init__(reason, {"id": str(product_id)})
