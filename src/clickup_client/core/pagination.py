"""
Page-counter pagination.

The API has no "has more" flag on paged listings: a caller asks for page 0,
1, 2 ... and stops once a page comes back with fewer than MAX_PAGE_SIZE
items.
"""

from __future__ import annotations

from typing import AsyncIterator, Awaitable, Callable, Generic, List, Sequence, TypeVar

MAX_PAGE_SIZE = 100

T = TypeVar("T")

PageFetcher = Callable[[int], Awaitable[Sequence[T]]]


class Paginator(Generic[T]):
    """
    Restartable async iterable over every item of a paged listing.

    Each ``async for`` starts again from ``first_page``; nothing is cached
    between iterations.
    """

    def __init__(
        self,
        fetch_page: PageFetcher[T],
        *,
        page_size: int = MAX_PAGE_SIZE,
        first_page: int = 0,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1.")
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.first_page = first_page

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        page = self.first_page
        while True:
            items = await self._fetch_page(page)
            for item in items:
                yield item
            if len(items) < self.page_size:
                return
            page += 1

    async def collect(self) -> List[T]:
        return [item async for item in self]


__all__ = ["Paginator", "PageFetcher", "MAX_PAGE_SIZE"]
