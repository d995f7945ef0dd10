"""
Generic page envelope for listing endpoints.
"""

from typing import Callable, Generic, List, TypeVar

from pydantic import BaseModel

from ..models import Page

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    items: List[T]
    current_page: int
    total_items: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page, convert: Callable) -> "PageResponse":
        return cls(
            items=[convert(item) for item in page.items],
            current_page=page.page,
            total_items=page.total_items,
            total_pages=page.total_pages,
        )
