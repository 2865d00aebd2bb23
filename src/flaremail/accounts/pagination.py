# =============================================================================
# Pagination
# =============================================================================
# Pure page arithmetic for the account list, 1-indexed throughout.
#
# The page window is the compact strip of page buttons. With more than seven
# pages it always shows the first and last page and collapses the rest:
#
#     current near start:  1 2 3 4 … 10
#     current near end:    1 … 7 8 9 10
#     current in middle:   1 … 4 5 6 … 10
# =============================================================================

import math
from collections.abc import Sequence
from typing import Final, TypeVar


T = TypeVar("T")


class _Ellipsis:
    """Marker for a collapsed run of pages in a page window."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ELLIPSIS"

    def __str__(self) -> str:
        return "…"


ELLIPSIS: Final = _Ellipsis()

PageItem = int | _Ellipsis

# Up to this many pages are listed in full
MAX_FULL_WINDOW = 7


def total_pages(item_count: int, page_size: int) -> int:
    """Number of pages for item_count items; never less than 1."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(item_count / page_size))


def clamp_page(page: int, pages: int) -> int:
    """Clamp a page number into [1, pages]."""
    return max(1, min(page, pages))


def paginate(items: Sequence[T], page: int, page_size: int) -> tuple[list[T], int]:
    """
    Slice one page out of items.

    Args:
        items: The (already filtered) items.
        page: Requested 1-based page; clamped into range.
        page_size: Items per page.

    Returns:
        (items on the page, total number of pages)
    """
    pages = total_pages(len(items), page_size)
    page = clamp_page(page, pages)
    start = (page - 1) * page_size
    return list(items[start:start + page_size]), pages


def build_page_window(total: int, current: int) -> list[PageItem]:
    """
    Build the page-number strip for a pagination control.

    Args:
        total: Total number of pages.
        current: The current page.

    Returns:
        Page numbers, with ELLIPSIS standing for collapsed runs.
    """
    if total <= MAX_FULL_WINDOW:
        return list(range(1, total + 1))

    if current <= 3:
        return [1, 2, 3, 4, ELLIPSIS, total]

    if current >= total - 2:
        return [1, ELLIPSIS, total - 3, total - 2, total - 1, total]

    return [1, ELLIPSIS, current - 1, current, current + 1, ELLIPSIS, total]
