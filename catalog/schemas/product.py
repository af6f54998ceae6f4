"""Product request, query and response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import Field, ValidationInfo, computed_field, field_validator

from catalog.core.stock import StockStatus
from catalog.core.stock import stock_status as classify_stock
from catalog.models.product import PRODUCT_DESCRIPTION_MAX_LENGTH, PRODUCT_NAME_MAX_LENGTH
from catalog.schemas.base import CamelModel, CamelRequest
from catalog.schemas.category import CategoryResponse, SortOrder

ProductSortField = Literal["name", "price", "stock", "createdAt", "updatedAt"]


class ProductCreate(CamelRequest):
    """Body of ``POST /products``."""

    name: str = Field(
        min_length=1,
        max_length=PRODUCT_NAME_MAX_LENGTH,
        description="Product name, unique across the catalog",
        examples=["iPhone 15 Pro"],
    )
    description: str | None = Field(default=None, max_length=PRODUCT_DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(gt=0, decimal_places=2, max_digits=10, examples=[999.99])
    stock: int = Field(ge=0, examples=[100])
    category_id: UUID | None = Field(default=None)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name should not be empty")
        return v


class ProductUpdate(CamelRequest):
    """Body of ``PATCH /products/{id}``; only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=PRODUCT_NAME_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=PRODUCT_DESCRIPTION_MAX_LENGTH)
    price: Decimal | None = Field(default=None, gt=0, decimal_places=2, max_digits=10)
    stock: int | None = Field(default=None, ge=0)
    category_id: UUID | None = Field(default=None)

    @field_validator("name", "price", "stock", mode="before")
    @classmethod
    def reject_null(cls, v: object, info: ValidationInfo) -> object:
        # Only description and categoryId may be cleared
        if v is None:
            raise ValueError(f"{info.field_name} should not be null")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name should not be empty")
        return v


class StockUpdate(CamelRequest):
    """Body of ``PATCH /products/{id}/stock``: signed stock delta."""

    quantity: int = Field(description="Units to add (positive) or remove (negative)")


class ProductQuery(CamelModel):
    """Filters, sorting and pagination of ``GET /products``."""

    search: str | None = Field(default=None, description="Matches name or description")
    category_id: UUID | None = None
    min_price: Decimal | None = Field(default=None, ge=0)
    max_price: Decimal | None = Field(default=None, ge=0)
    stock_status: StockStatus | None = None
    sort_by: ProductSortField = "createdAt"
    sort_order: SortOrder = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    include_category: bool = False


class ProductResponse(CamelModel):
    """Product with its derived stock status."""

    id: UUID
    name: str
    description: str | None = None
    price: float
    stock: int
    category_id: UUID | None = None
    created_at: datetime
    updated_at: datetime
    category: CategoryResponse | None = None

    @computed_field(alias="stockStatus")  # type: ignore[prop-decorator]
    @property
    def stock_status(self) -> StockStatus:
        return classify_stock(self.stock)


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool


class PaginatedProductResponse(CamelModel):
    data: list[ProductResponse]
    meta: PaginationMeta


class CategoryProductCount(CamelModel):
    category_name: str
    count: int


class ProductStats(CamelModel):
    """Counts returned by ``GET /products/stats``."""

    total: int
    in_stock: int
    low_stock: int
    out_of_stock: int
    by_category: list[CategoryProductCount]
