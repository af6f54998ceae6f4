"""FastAPI dependencies for dependency injection.

Provides:
- Database session per request
- Repositories and services bound to that session
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.infra.database import get_db_session
from catalog.repositories.category_repository import CategoryRepository
from catalog.repositories.product_repository import ProductRepository
from catalog.services.category_service import CategoryService
from catalog.services.product_service import ProductService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session committed when the request succeeds."""
    async with get_db_session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_category_repository(db: DbSession) -> CategoryRepository:
    return CategoryRepository(db)


def get_product_repository(db: DbSession) -> ProductRepository:
    return ProductRepository(db)


Categories = Annotated[CategoryRepository, Depends(get_category_repository)]
Products = Annotated[ProductRepository, Depends(get_product_repository)]


def get_category_service(categories: Categories, products: Products) -> CategoryService:
    return CategoryService(categories, products)


def get_product_service(products: Products, categories: Categories) -> ProductService:
    return ProductService(products, categories)


# Type aliases for cleaner annotations
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
