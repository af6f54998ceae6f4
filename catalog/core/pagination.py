"""Offset pagination helpers."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata for one page of a listing.

    Attributes:
        page: 1-based page number
        limit: Page size
        total: Total number of matching items
        total_pages: ceil(total / limit)
        has_next: Whether a later page exists
        has_previous: Whether an earlier page exists
    """

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> "PageInfo":
        if page < 1:
            raise ValueError("page must be >= 1")
        if limit < 1:
            raise ValueError("limit must be >= 1")

        total_pages = math.ceil(total / limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.limit)


def offset_for(page: int, limit: int) -> int:
    """Number of rows to skip for a 1-based page."""
    return (page - 1) * limit
