"""Tests for base model infrastructure."""

from sqlalchemy.orm import DeclarativeBase

from catalog.models import Base, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin


def test_base_is_declarative_base():
    """Base should be a SQLAlchemy DeclarativeBase."""
    assert hasattr(Base, "metadata")
    assert issubclass(Base, DeclarativeBase)


def test_all_tables_registered():
    assert set(Base.metadata.tables) == {
        "product_categories",
        "products",
        "order_items",
        "campaign_products",
    }


def test_mixins_provide_columns():
    assert hasattr(UUIDPrimaryKeyMixin, "id")
    assert hasattr(CreatedAtMixin, "created_at")
    assert issubclass(TimestampMixin, CreatedAtMixin)
    assert hasattr(TimestampMixin, "updated_at")
