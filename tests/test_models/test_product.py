"""Tests for Product model and the reference tables."""

from sqlalchemy import CheckConstraint

from catalog.models import CampaignProduct, OrderItem, Product


def test_product_tablename():
    assert Product.__tablename__ == "products"


def test_product_has_required_columns():
    columns = {c.name for c in Product.__table__.columns}
    assert {
        "id",
        "name",
        "description",
        "price",
        "stock",
        "category_id",
        "created_at",
        "updated_at",
    } <= columns


def test_product_name_is_unique():
    assert Product.__table__.c.name.unique


def test_product_price_is_fixed_point():
    price_type = Product.__table__.c.price.type
    assert price_type.precision == 10
    assert price_type.scale == 2


def test_product_optional_columns():
    assert Product.__table__.c.description.nullable
    assert Product.__table__.c.category_id.nullable


def test_product_check_constraints():
    names = {c.name for c in Product.__table__.constraints if isinstance(c, CheckConstraint)}
    assert names == {"ck_products_price_positive", "ck_products_stock_non_negative"}


def test_product_category_foreign_key():
    fk = next(iter(Product.__table__.c.category_id.foreign_keys))
    assert fk.target_fullname == "product_categories.id"


def test_reference_tables_point_at_products():
    for model in (OrderItem, CampaignProduct):
        fk = next(iter(model.__table__.c.product_id.foreign_keys))
        assert fk.target_fullname == "products.id"

    assert OrderItem.__tablename__ == "order_items"
    assert CampaignProduct.__tablename__ == "campaign_products"
