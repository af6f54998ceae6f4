"""Product category endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from catalog.api.deps import CategoryServiceDep
from catalog.schemas.category import (
    CategoryCreate,
    CategoryQuery,
    CategoryResponse,
    CategorySortField,
    CategoryUpdate,
    SortOrder,
)

router = APIRouter()


@router.post(
    "",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product category",
)
async def create_category(data: CategoryCreate, service: CategoryServiceDep) -> CategoryResponse:
    return await service.create(data)


@router.get(
    "",
    response_model=list[CategoryResponse],
    response_model_exclude_none=True,
    summary="List product categories with filtering and sorting",
)
async def list_categories(
    service: CategoryServiceDep,
    search: Annotated[str | None, Query(description="Case-insensitive name substring")] = None,
    parent_id: Annotated[UUID | None, Query(alias="parentId")] = None,
    level: Annotated[int | None, Query(ge=0, description="Depth in the hierarchy, roots are 0")] = None,
    sort_by: Annotated[CategorySortField, Query(alias="sortBy")] = "name",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "asc",
    include_products: Annotated[bool, Query(alias="includeProducts")] = False,
    include_parent: Annotated[bool, Query(alias="includeParent")] = True,
    include_children: Annotated[bool, Query(alias="includeChildren")] = True,
    roots_only: Annotated[bool, Query(alias="rootsOnly")] = False,
) -> list[CategoryResponse]:
    query = CategoryQuery(
        search=search,
        parent_id=parent_id,
        level=level,
        sort_by=sort_by,
        sort_order=sort_order,
        include_products=include_products,
        include_parent=include_parent,
        include_children=include_children,
        roots_only=roots_only,
    )
    return await service.find_all(query)


@router.get(
    "/roots",
    response_model=list[CategoryResponse],
    response_model_exclude_none=True,
    summary="List root categories with their direct children",
)
async def list_root_categories(service: CategoryServiceDep) -> list[CategoryResponse]:
    return await service.find_roots()


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    summary="Get a product category",
)
async def get_category(category_id: UUID, service: CategoryServiceDep) -> CategoryResponse:
    return await service.find_one(category_id)


@router.get(
    "/{category_id}/hierarchy",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    summary="Get the fully expanded subtree of a category",
)
async def get_category_hierarchy(category_id: UUID, service: CategoryServiceDep) -> CategoryResponse:
    return await service.get_category_hierarchy(category_id)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    response_model_exclude_none=True,
    summary="Rename or move a product category",
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    service: CategoryServiceDep,
) -> CategoryResponse:
    return await service.update(category_id, data)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a leaf category without products",
)
async def delete_category(category_id: UUID, service: CategoryServiceDep) -> Response:
    await service.remove(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
