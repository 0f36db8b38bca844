from dataclasses import dataclass
from math import ceil
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

@dataclass(slots=True)
class PageDTO(Generic[T]):
    """Generic pagination envelope. Pages are 1-based; an empty result is one empty page."""
    items: List[T]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, items: Sequence[T], *, page: int, page_size: int, total: int) -> "PageDTO[T]":
        total = int(total or 0)
        total_pages = max(1, ceil(total / page_size)) if total else 1
        return cls(
            items=list(items),
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
