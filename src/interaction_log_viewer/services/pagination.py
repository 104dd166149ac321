"""Offset/limit pagination state and page query-parameter handling.

Page indexes are 0-based internally; pages shown to the user and carried in
the ``page`` query parameter are 1-based. Page 1 is never written to the
query so the canonical URL of a listing stays stable.
"""

import logging
from typing import Mapping, Optional

from interaction_log_viewer.types.pagination import PageWindow

logger = logging.getLogger(__name__)

PAGE_PARAM = "page"


def compute_window(page_index: int, limit: int, total: int) -> PageWindow:
    """Navigation state and visible row range for a requested page.

    Raises ValueError for a negative page index, a limit below 1 or a
    negative total.
    """
    if page_index < 0:
        raise ValueError(f"page_index must be >= 0, got {page_index}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")

    offset = page_index * limit
    current_page = page_index + 1
    total_pages = -(-total // limit)

    if offset >= total:
        range_start = range_end = None
    else:
        range_start = offset + 1
        range_end = min(offset + limit, total)

    return PageWindow(
        offset=offset,
        current_page=current_page,
        total_pages=total_pages,
        has_next=current_page < total_pages,
        has_prev=total_pages > 0 and current_page > 1,
        visible_range_start=range_start,
        visible_range_end=range_end,
        total=total,
    )


def navigate(window: PageWindow, step: int) -> Optional[int]:
    """Target page index after moving ``step`` pages, or None when out of range."""
    target = window.current_page - 1 + step
    if target < 0 or target > window.total_pages - 1:
        logger.debug("Ignoring navigation to page index %d of %d pages", target, window.total_pages)
        return None
    return target


def controls_visible(total: int, limit: int) -> bool:
    """Navigation is only offered when the rows do not fit on one page."""
    return total > limit


def page_index_from_query(value: Optional[str]) -> int:
    """0-based page index from a ``page`` query value; absent or invalid is 0."""
    if value is None:
        return 0
    try:
        page = int(str(value).strip())
    except ValueError:
        logger.debug("Invalid page query value %r", value)
        return 0
    return max(page - 1, 0)


def page_query_value(page_index: int) -> Optional[str]:
    """Query value for a page index; None for the first page."""
    if page_index <= 0:
        return None
    return str(page_index + 1)


def with_page_param(params: Mapping[str, str], page_index: int) -> dict[str, str]:
    """Copy of ``params`` with the page parameter set, or removed for page 1."""
    result = dict(params)
    value = page_query_value(page_index)
    if value is None:
        result.pop(PAGE_PARAM, None)
    else:
        result[PAGE_PARAM] = value
    return result
