"""
Pagination helpers shared by the list and search endpoints.
"""
import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


class PageParams(BaseModel):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Page(BaseModel, Generic[T]):
    """A page of results plus the counts a client needs to render paging controls."""
    items: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


def normalize(page: Optional[int] = None, limit: Optional[int] = None) -> PageParams:
    """Apply defaults and bounds to raw ``page``/``limit`` query values."""
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    return PageParams(page=page, limit=min(limit, MAX_LIMIT))


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def clamp_page(page: int, pages: int) -> int:
    """Keep ``page`` within ``[1, max(pages, 1)]``."""
    return max(1, min(page, max(pages, 1)))


def fit_to_total(params: PageParams, total: int) -> PageParams:
    """Move a page past the end back onto the last page."""
    page = clamp_page(params.page, total_pages(total, params.limit))
    return PageParams(page=page, limit=params.limit)



def build_page(items: List[T], total: int, params: PageParams) -> Page[T]:
    return Page(
        items=items,
        total=total,
        page=params.page,
        limit=params.limit,
        total_pages=total_pages(total, params.limit),
    )
