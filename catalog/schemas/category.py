"""Product category request, query and response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, computed_field, field_validator

from catalog.core.stock import StockStatus
from catalog.core.stock import stock_status as classify_stock
from catalog.models.category import CATEGORY_NAME_MAX_LENGTH
from catalog.schemas.base import CamelModel, CamelRequest

CategorySortField = Literal["name", "createdAt", "productCount"]
SortOrder = Literal["asc", "desc"]


def _clean_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name should not be empty")
    return v


class CategoryCreate(CamelRequest):
    """Body of ``POST /product-categories``."""

    name: str = Field(
        max_length=CATEGORY_NAME_MAX_LENGTH,
        description="Category name",
        examples=["Electronics"],
    )
    parent_id: UUID | None = Field(
        default=None,
        description="Parent category ID, omit for a root category",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)  # type: ignore[return-value]


class CategoryUpdate(CamelRequest):
    """Body of ``PATCH /product-categories/{id}``.

    An explicit ``"parentId": null`` moves the category to the roots;
    omitting ``parentId`` leaves the parent unchanged.
    """

    name: str | None = Field(
        default=None,
        max_length=CATEGORY_NAME_MAX_LENGTH,
        description="New category name",
    )
    parent_id: UUID | None = Field(default=None, description="New parent category ID")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return _clean_name(v)

    @property
    def parent_id_set(self) -> bool:
        """Whether ``parentId`` was present in the request body."""
        return "parent_id" in self.model_fields_set


class CategoryQuery(CamelModel):
    """Filters and shaping options of ``GET /product-categories``."""

    search: str | None = Field(default=None, description="Case-insensitive name substring")
    parent_id: UUID | None = Field(default=None, description="Only children of this category")
    level: int | None = Field(default=None, ge=0, description="Depth in the hierarchy, roots are 0")
    sort_by: CategorySortField = Field(default="name")
    sort_order: SortOrder = Field(default="asc")
    include_products: bool = Field(default=False)
    include_parent: bool = Field(default=True)
    include_children: bool = Field(default=True)
    roots_only: bool = Field(default=False)


class CategoryProductSummary(CamelModel):
    """Product as listed inside a category response."""

    id: UUID
    name: str
    price: float
    stock: int

    @computed_field(alias="stockStatus")  # type: ignore[prop-decorator]
    @property
    def stock_status(self) -> StockStatus:
        return classify_stock(self.stock)


class CategoryResponse(CamelModel):
    """Category with derived fields.

    ``parent``, ``children`` and ``products`` are only present when
    requested; ``children`` nodes may themselves carry children when the
    response comes from the hierarchy endpoint.
    """

    id: UUID
    name: str
    parent_id: UUID | None = None
    created_at: datetime
    product_count: int = 0
    parent: CategoryResponse | None = None
    children: list[CategoryResponse] | None = None
    products: list[CategoryProductSummary] | None = None


CategoryResponse.model_rebuild()
