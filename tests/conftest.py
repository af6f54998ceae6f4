"""Shared fixtures.

Routes run against in-memory repositories through FastAPI dependency
overrides; no database is needed for the test suite.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog.api.deps import get_category_repository, get_product_repository
from catalog.main import app
from catalog.services.category_service import CategoryService
from catalog.services.product_service import ProductService
from tests.fakes import FakeCategoryRepository, FakeProductRepository, InMemoryCatalog


@pytest.fixture
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog()


@pytest.fixture
def category_repo(catalog: InMemoryCatalog) -> FakeCategoryRepository:
    return FakeCategoryRepository(catalog)


@pytest.fixture
def product_repo(catalog: InMemoryCatalog) -> FakeProductRepository:
    return FakeProductRepository(catalog)


@pytest.fixture
def category_service(
    category_repo: FakeCategoryRepository,
    product_repo: FakeProductRepository,
) -> CategoryService:
    return CategoryService(category_repo, product_repo)  # type: ignore[arg-type]


@pytest.fixture
def product_service(
    category_repo: FakeCategoryRepository,
    product_repo: FakeProductRepository,
) -> ProductService:
    return ProductService(product_repo, category_repo)  # type: ignore[arg-type]


@pytest_asyncio.fixture
async def client(
    category_repo: FakeCategoryRepository,
    product_repo: FakeProductRepository,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app with repositories swapped for fakes."""
    app.dependency_overrides[get_category_repository] = lambda: category_repo
    app.dependency_overrides[get_product_repository] = lambda: product_repo

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
