"""
Paginated fetch walker.

Turns a cursor-paginated list endpoint into either a fully materialized list
(``fetch_all``) or a lazy async iterator (``stream``). Both follow the
``next`` cursor of each page until a page reports none.

The walker never retries. Whatever the page-fetch function raises reaches the
caller unchanged, at the point in the walk where it happened.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional, TypeVar

from .jsonapi import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchPage = Callable[[str], Awaitable[Page[T]]]
PageCallback = Callable[[Page[Any], int], None]


def _validate(fetch_page: Any, start: Any) -> None:
    if fetch_page is None or not callable(fetch_page):
        raise ValueError("fetch_page must be a callable returning a Page")
    if not isinstance(start, str) or not start.strip():
        raise ValueError("start must be a non-empty endpoint")


async def _walk(
    fetch_page: FetchPage,
    start: str,
    max_items: Optional[int],
    delay_between_pages: float,
    on_page: Optional[PageCallback],
) -> AsyncIterator[T]:
    if max_items is not None and max_items <= 0:
        return

    cursor: Optional[str] = start
    page_number = 0
    produced = 0

    while cursor is not None:
        if page_number and delay_between_pages > 0:
            await asyncio.sleep(delay_between_pages)

        page = await fetch_page(cursor)
        page_number += 1
        logger.debug(
            f"Fetched page {page_number} ({len(page.items)} items, "
            f"total {page.meta.total_count}) from {cursor}"
        )
        if on_page is not None:
            on_page(page, page_number)

        for item in page.items:
            yield item
            produced += 1
            if max_items is not None and produced >= max_items:
                return

        cursor = page.next


async def fetch_all(
    fetch_page: FetchPage,
    start: str,
    *,
    max_items: Optional[int] = None,
    delay_between_pages: float = 0.0,
    on_page: Optional[PageCallback] = None,
) -> List[T]:
    """
    Fetch every page and return all items in page order.

    Args:
        fetch_page: Async function performing one request for a cursor
        start: Cursor of the first page (endpoint with query string)
        max_items: Stop once this many items have been collected
        delay_between_pages: Seconds to wait between page requests
        on_page: Called with each page and its 1-based number

    Returns:
        List of all items

    Raises:
        ValueError: If ``fetch_page`` or ``start`` is missing
        Exception: Whatever ``fetch_page`` raised; no partial list is returned
    """
    _validate(fetch_page, start)
    items: List[T] = []
    async for item in _walk(fetch_page, start, max_items, delay_between_pages, on_page):
        items.append(item)
    return items


def stream(
    fetch_page: FetchPage,
    start: str,
    *,
    max_items: Optional[int] = None,
    delay_between_pages: float = 0.0,
    on_page: Optional[PageCallback] = None,
) -> AsyncIterator[T]:
    """
    Lazily yield items across pages.

    The next page is requested only after the current page's items have been
    consumed. Each call starts an independent walk from ``start``.

    Raises:
        ValueError: Immediately, if ``fetch_page`` or ``start`` is missing
    """
    _validate(fetch_page, start)
    return _walk(fetch_page, start, max_items, delay_between_pages, on_page)
