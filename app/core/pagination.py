"""Pagination helpers for list endpoints."""


from fastapi import Query
from pydantic import BaseModel

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


def clamp_page(page: int | None) -> int:
    return page if page and page >= 1 else 1


def clamp_page_size(page_size: int | None) -> int:
    """Out-of-range sizes fall back to the default rather than being rejected."""
    if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
        return DEFAULT_PAGE_SIZE
    return page_size


class PaginationParams:
    """FastAPI dependency for `?page=1&page_size=50`."""

    def __init__(
        self,
        page: int | None = Query(default=1, description="Page number (1-based)"),
        page_size: int | None = Query(
            default=DEFAULT_PAGE_SIZE, description=f"Items per page (1-{MAX_PAGE_SIZE})"
        ),
    ):
        self.page = clamp_page(page)
        self.page_size = clamp_page_size(page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PageMeta(BaseModel):
    total: int
    page: int
    page_size: int
    pages: int
