"""Tests for Category model."""

import uuid

from sqlalchemy import UniqueConstraint

from catalog.models.category import CATEGORY_NAME_MAX_LENGTH, Category


def test_category_tablename():
    """Category should map to product_categories table."""
    assert Category.__tablename__ == "product_categories"


def test_category_has_required_columns():
    columns = {c.name for c in Category.__table__.columns}
    assert {"id", "name", "parent_id", "created_at"} <= columns


def test_category_name_length():
    assert Category.__table__.c.name.type.length == CATEGORY_NAME_MAX_LENGTH == 100


def test_category_parent_is_self_reference():
    """parent_id should reference product_categories.id and refuse cascading deletes."""
    fks = list(Category.__table__.c.parent_id.foreign_keys)
    assert len(fks) == 1
    assert fks[0].target_fullname == "product_categories.id"
    assert fks[0].ondelete == "RESTRICT"
    assert Category.__table__.c.parent_id.nullable


def test_category_name_unique_per_parent():
    """(name, parent_id) should be unique with NULL parents colliding."""
    constraints = [c for c in Category.__table__.constraints if isinstance(c, UniqueConstraint)]
    assert len(constraints) == 1

    constraint = constraints[0]
    assert [c.name for c in constraint.columns] == ["name", "parent_id"]
    assert constraint.dialect_options["postgresql"]["nulls_not_distinct"] is True


def test_category_is_root():
    assert Category(name="Electronics", parent_id=None).is_root
    assert not Category(name="Phones", parent_id=uuid.uuid4()).is_root


def test_category_repr():
    category_id = uuid.uuid4()
    category = Category(id=category_id, name="Electronics")
    assert repr(category) == f"<Category(id={category_id}, name='Electronics', parent_id=None)>"
