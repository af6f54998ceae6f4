"""Product endpoints."""

from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from catalog.api.deps import ProductServiceDep
from catalog.config import settings
from catalog.core.stock import StockStatus
from catalog.schemas.category import SortOrder
from catalog.schemas.product import (
    PaginatedProductResponse,
    ProductCreate,
    ProductQuery,
    ProductResponse,
    ProductSortField,
    ProductStats,
    ProductUpdate,
    StockUpdate,
)

router = APIRouter()


def product_query(
    search: Annotated[str | None, Query(description="Matches name or description")] = None,
    category_filter: Annotated[UUID | None, Query(alias="categoryId")] = None,
    min_price: Annotated[Decimal | None, Query(alias="minPrice", ge=0)] = None,
    max_price: Annotated[Decimal | None, Query(alias="maxPrice", ge=0)] = None,
    stock_status: Annotated[StockStatus | None, Query(alias="stockStatus")] = None,
    sort_by: Annotated[ProductSortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = settings.default_page_size,
    include_category: Annotated[bool, Query(alias="includeCategory")] = False,
) -> ProductQuery:
    """Collect the listing query parameters."""
    return ProductQuery(
        search=search,
        category_id=category_filter,
        min_price=min_price,
        max_price=max_price,
        stock_status=stock_status,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
        include_category=include_category,
    )


ProductQueryDep = Annotated[ProductQuery, Depends(product_query)]


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(data: ProductCreate, service: ProductServiceDep) -> ProductResponse:
    return await service.create(data)


@router.get(
    "",
    response_model=PaginatedProductResponse,
    summary="List products with filtering, sorting and pagination",
)
async def list_products(query: ProductQueryDep, service: ProductServiceDep) -> PaginatedProductResponse:
    return await service.find_all(query)


@router.get("/stats", response_model=ProductStats, summary="Product statistics")
async def get_product_stats(service: ProductServiceDep) -> ProductStats:
    return await service.get_stats()


@router.get(
    "/low-stock",
    response_model=list[ProductResponse],
    summary="Products at or below a stock threshold",
)
async def get_low_stock_products(
    service: ProductServiceDep,
    threshold: Annotated[int | None, Query(ge=0, description="Stock threshold (default: 10)")] = None,
) -> list[ProductResponse]:
    return await service.get_low_stock(threshold)


@router.get(
    "/category/{category_id}",
    response_model=PaginatedProductResponse,
    summary="List the products of a category",
)
async def list_products_by_category(
    category_id: UUID,
    query: ProductQueryDep,
    service: ProductServiceDep,
) -> PaginatedProductResponse:
    return await service.find_by_category(category_id, query)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(product_id: UUID, service: ProductServiceDep) -> ProductResponse:
    return await service.find_one(product_id)


@router.patch("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    service: ProductServiceDep,
) -> ProductResponse:
    return await service.update(product_id, data)


@router.patch(
    "/{product_id}/stock",
    response_model=ProductResponse,
    summary="Add or remove stock",
)
async def update_product_stock(
    product_id: UUID,
    data: StockUpdate,
    service: ProductServiceDep,
) -> ProductResponse:
    return await service.update_stock(product_id, data.quantity)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
async def delete_product(product_id: UUID, service: ProductServiceDep) -> Response:
    await service.remove(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
