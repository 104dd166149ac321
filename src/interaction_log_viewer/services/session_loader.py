"""Load a session detail page from two independent upstream fetches.

The interaction page and the session summary are fetched side by side. A
failing fetch is logged and recorded, and whatever did arrive is still
rendered.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional

from interaction_log_viewer.services.pagination import compute_window
from interaction_log_viewer.services.row_presenter import (
    MAX_VISIBLE_TOOLS,
    MESSAGE_PREVIEW_LENGTH,
    build_interaction_rows,
)
from interaction_log_viewer.services.session_aggregator import MAX_TITLE_LENGTH, aggregate_session
from interaction_log_viewer.types.interactions import SessionSummary
from interaction_log_viewer.types.metrics import InteractionRow, SessionHeader
from interaction_log_viewer.types.pagination import InteractionPage, PageWindow

logger = logging.getLogger(__name__)

FetchInteractions = Callable[[], InteractionPage]
FetchSummary = Callable[[], Optional[SessionSummary]]


@dataclass
class SessionDetail:
    """What arrived from upstream for one session page."""
    page: Optional[InteractionPage] = None
    summary: Optional[SessionSummary] = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        """True only when nothing usable arrived at all."""
        return self.page is None and self.summary is None


@dataclass(frozen=True)
class SessionView:
    header: SessionHeader
    rows: tuple[InteractionRow, ...]
    window: PageWindow


def load_session_detail(fetch_interactions: FetchInteractions, fetch_summary: FetchSummary) -> SessionDetail:
    """Run both fetches concurrently and collect their results."""
    detail = SessionDetail()
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="session-fetch") as pool:
        page_future = pool.submit(fetch_interactions)
        summary_future = pool.submit(fetch_summary)
        detail.page = _result(page_future, "interactions", detail)
        detail.summary = _result(summary_future, "summary", detail)
    return detail


def _result(future: Future, name: str, detail: SessionDetail):
    try:
        return future.result()
    except Exception as e:
        logger.exception("Failed to fetch session %s", name)
        detail.errors[name] = str(e) or type(e).__name__
        return None


def build_session_view(
    detail: SessionDetail,
    page_index: int = 0,
    limit: int = 20,
    *,
    max_visible_tools: int = MAX_VISIBLE_TOOLS,
    message_preview_length: int = MESSAGE_PREVIEW_LENGTH,
    title_max_length: int = MAX_TITLE_LENGTH,
) -> SessionView:
    """Header, rows and page window from whatever part of the detail arrived."""
    page = detail.page or InteractionPage()
    pagination = page.pagination if detail.page is not None else None
    header = aggregate_session(page.data, detail.summary, pagination, title_max_length=title_max_length)
    total = pagination.total if pagination is not None else header.total_requests
    window = compute_window(page_index, limit, total)
    rows = build_interaction_rows(
        page.data,
        max_visible_tools=max_visible_tools,
        message_preview_length=message_preview_length,
    )
    return SessionView(header=header, rows=tuple(rows), window=window)
