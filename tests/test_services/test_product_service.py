"""Tests for ProductService over in-memory repositories."""

import uuid
from decimal import Decimal

import pytest

from catalog.core.errors import (
    CategoryNotFoundError,
    CategoryReferenceNotFoundError,
    DuplicateProductNameError,
    InsufficientStockError,
    ProductInUseError,
    ProductNotFoundError,
)
from catalog.core.stock import StockStatus
from catalog.schemas.product import ProductCreate, ProductQuery, ProductUpdate
from tests.fakes import make_category, make_product


class TestCommands:
    """Tests for create, update, stock movements and delete."""

    @pytest.mark.asyncio
    async def test_create(self, product_service, catalog):
        phones = make_category(catalog, "Phones")

        created = await product_service.create(
            ProductCreate(name="Pixel 8", price=Decimal("699.00"), stock=25, category_id=phones.id)
        )

        assert created.name == "Pixel 8"
        assert created.price == 699.0
        assert created.stock_status == StockStatus.IN_STOCK
        assert created.category is not None
        assert created.category.name == "Phones"

    @pytest.mark.asyncio
    async def test_create_unknown_category(self, product_service, catalog):
        with pytest.raises(CategoryReferenceNotFoundError):
            await product_service.create(
                ProductCreate(name="Pixel 8", price=Decimal("699.00"), stock=1, category_id=uuid.uuid4())
            )

        assert catalog.products == {}

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self, product_service, catalog):
        make_product(catalog, "Pixel 8")

        with pytest.raises(DuplicateProductNameError):
            await product_service.create(ProductCreate(name="Pixel 8", price=Decimal("1.00"), stock=0))

    @pytest.mark.asyncio
    async def test_update_only_provided_fields(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8", price="699.00", description="Phone")

        updated = await product_service.update(product.id, ProductUpdate(price=Decimal("649.00")))

        assert updated.price == 649.0
        assert updated.name == "Pixel 8"
        assert updated.description == "Phone"

    @pytest.mark.asyncio
    async def test_update_clears_description(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8", description="Phone")

        updated = await product_service.update(product.id, ProductUpdate.model_validate({"description": None}))

        assert updated.description is None

    @pytest.mark.asyncio
    async def test_update_name_taken(self, product_service, catalog):
        make_product(catalog, "Pixel 8")
        other = make_product(catalog, "Pixel 7")

        with pytest.raises(DuplicateProductNameError):
            await product_service.update(other.id, ProductUpdate(name="Pixel 8"))

    @pytest.mark.asyncio
    async def test_update_missing(self, product_service):
        with pytest.raises(ProductNotFoundError):
            await product_service.update(uuid.uuid4(), ProductUpdate(stock=1))

    @pytest.mark.asyncio
    async def test_stock_increase(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8", stock=5)

        updated = await product_service.update_stock(product.id, 10)

        assert updated.stock == 15
        assert updated.stock_status == StockStatus.IN_STOCK

    @pytest.mark.asyncio
    async def test_stock_cannot_go_negative(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8", stock=5)

        with pytest.raises(InsufficientStockError):
            await product_service.update_stock(product.id, -8)

        assert catalog.products[product.id].stock == 5

    @pytest.mark.asyncio
    async def test_stock_to_zero(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8", stock=5)

        updated = await product_service.update_stock(product.id, -5)

        assert updated.stock == 0
        assert updated.stock_status == StockStatus.OUT_OF_STOCK

    @pytest.mark.asyncio
    async def test_remove(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8")

        await product_service.remove(product.id)

        assert product.id not in catalog.products

    @pytest.mark.asyncio
    async def test_ordered_product_cannot_be_removed(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8")
        catalog.order_items[product.id] = 2

        with pytest.raises(ProductInUseError, match="ordered"):
            await product_service.remove(product.id)

        assert product.id in catalog.products

    @pytest.mark.asyncio
    async def test_campaign_product_cannot_be_removed(self, product_service, catalog):
        product = make_product(catalog, "Pixel 8")
        catalog.campaign_links[product.id] = 1

        with pytest.raises(ProductInUseError, match="campaigns"):
            await product_service.remove(product.id)


class TestQueries:
    """Tests for listings and statistics."""

    @pytest.mark.asyncio
    async def test_pagination(self, product_service, catalog):
        for i in range(25):
            make_product(catalog, f"Item {i:02d}")

        page = await product_service.find_all(ProductQuery(page=3, limit=10, sort_by="name", sort_order="asc"))

        assert [p.name for p in page.data] == [f"Item {i}" for i in range(20, 25)]
        assert page.meta.total == 25
        assert page.meta.total_pages == 3
        assert page.meta.has_next is False
        assert page.meta.has_previous is True

    @pytest.mark.asyncio
    async def test_default_sort_is_newest_first(self, product_service, catalog):
        make_product(catalog, "Old")
        make_product(catalog, "New")

        page = await product_service.find_all()

        assert [p.name for p in page.data] == ["New", "Old"]
        assert page.data[0].category is None

    @pytest.mark.asyncio
    async def test_filters(self, product_service, catalog):
        phones = make_category(catalog, "Phones")
        make_product(catalog, "Pixel 8", price="699.00", stock=3, category=phones)
        make_product(catalog, "iPhone 15", price="999.00", stock=50, category=phones)
        make_product(catalog, "Case", price="19.00", stock=0)

        low = await product_service.find_all(ProductQuery(stock_status=StockStatus.LOW_STOCK))
        priced = await product_service.find_all(ProductQuery(min_price=Decimal("500"), max_price=Decimal("900")))
        searched = await product_service.find_all(ProductQuery(search="IPHONE", include_category=True))

        assert [p.name for p in low.data] == ["Pixel 8"]
        assert [p.name for p in priced.data] == ["Pixel 8"]
        assert [p.name for p in searched.data] == ["iPhone 15"]
        assert searched.data[0].category.name == "Phones"

    @pytest.mark.asyncio
    async def test_find_one(self, product_service, catalog):
        phones = make_category(catalog, "Phones")
        product = make_product(catalog, "Pixel 8", category=phones)

        found = await product_service.find_one(product.id)

        assert found.id == product.id
        assert found.category.id == phones.id

    @pytest.mark.asyncio
    async def test_find_one_missing(self, product_service):
        with pytest.raises(ProductNotFoundError):
            await product_service.find_one(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_find_by_category(self, product_service, catalog):
        phones = make_category(catalog, "Phones")
        make_product(catalog, "Pixel 8", category=phones)
        make_product(catalog, "Novel")

        page = await product_service.find_by_category(phones.id)

        assert [p.name for p in page.data] == ["Pixel 8"]
        assert page.meta.total == 1

    @pytest.mark.asyncio
    async def test_find_by_missing_category(self, product_service):
        with pytest.raises(CategoryNotFoundError):
            await product_service.find_by_category(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_low_stock_default_threshold(self, product_service, catalog):
        make_product(catalog, "A", stock=10)
        make_product(catalog, "B", stock=0)
        make_product(catalog, "C", stock=11)

        result = await product_service.get_low_stock()

        assert [p.name for p in result] == ["B", "A"]

    @pytest.mark.asyncio
    async def test_low_stock_custom_threshold(self, product_service, catalog):
        make_product(catalog, "A", stock=10)
        make_product(catalog, "B", stock=3)

        result = await product_service.get_low_stock(threshold=5)

        assert [p.name for p in result] == ["B"]

    @pytest.mark.asyncio
    async def test_stats(self, product_service, catalog):
        phones = make_category(catalog, "Phones")
        make_category(catalog, "Books")
        make_product(catalog, "A", stock=0, category=phones)
        make_product(catalog, "B", stock=5, category=phones)
        make_product(catalog, "C", stock=100)

        stats = await product_service.get_stats()

        assert stats.total == 3
        assert (stats.in_stock, stats.low_stock, stats.out_of_stock) == (1, 1, 1)
        assert [(c.category_name, c.count) for c in stats.by_category] == [("Books", 0), ("Phones", 2)]
