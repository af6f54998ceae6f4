"""Category model - self-referencing product category tree."""

import uuid

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin

CATEGORY_NAME_MAX_LENGTH = 100


class Category(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Product category.

    ``parent_id`` is a plain lookup key into the same table; there are no
    ORM relationships, so trees are walked by id through the repository.
    ``children`` and ``product_count`` are derived on read and never stored.
    """

    __tablename__ = "product_categories"

    name: Mapped[str] = mapped_column(String(CATEGORY_NAME_MAX_LENGTH), nullable=False)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("product_categories.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        # Roots share one sibling set, so NULL parents must collide too
        UniqueConstraint(
            "name",
            "parent_id",
            name="uq_product_categories_name_parent",
            postgresql_nulls_not_distinct=True,
        ),
    )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', parent_id={self.parent_id})>"
