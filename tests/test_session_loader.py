"""Tests for interaction_log_viewer.services.session_loader."""

import threading

from helpers import make_interaction
from interaction_log_viewer.services.session_loader import (
    SessionDetail,
    build_session_view,
    load_session_detail,
)
from interaction_log_viewer.types import InteractionPage, PaginationMeta, SessionSummary


def _page(total: int = 2) -> InteractionPage:
    return InteractionPage(
        data=(
            make_interaction("a", minutes=1, message="Second question in the session"),
            make_interaction("b", minutes=0, message="First question in the session"),
        ),
        pagination=PaginationMeta(current_page=1, limit=20, total=total, total_pages=1),
    )


# ---------------------------------------------------------------------------
# 1. Concurrent fetching
# ---------------------------------------------------------------------------

def test_both_fetches_succeed():
    summary = SessionSummary(session_id="sess-1", request_count=2)
    detail = load_session_detail(lambda: _page(), lambda: summary)
    assert detail.page == _page()
    assert detail.summary is summary
    assert detail.errors == {}
    assert detail.failed is False


def test_fetches_run_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    def fetch_page():
        barrier.wait()
        return _page()

    def fetch_summary():
        barrier.wait()
        return None

    detail = load_session_detail(fetch_page, fetch_summary)
    assert detail.errors == {}
    assert len(detail.page.data) == 2


def test_summary_failure_keeps_page():
    def boom():
        raise ConnectionError("summary endpoint down")

    detail = load_session_detail(lambda: _page(), boom)
    assert detail.summary is None
    assert detail.page is not None
    assert detail.errors == {"summary": "summary endpoint down"}
    assert detail.failed is False


def test_page_failure_keeps_summary():
    def boom():
        raise TimeoutError()

    summary = SessionSummary(session_id="sess-1")
    detail = load_session_detail(boom, lambda: summary)
    assert detail.page is None
    assert detail.summary is summary
    assert detail.errors == {"interactions": "TimeoutError"}


def test_both_fail():
    def boom():
        raise RuntimeError("down")

    detail = load_session_detail(boom, boom)
    assert detail.failed is True
    assert set(detail.errors) == {"interactions", "summary"}


# ---------------------------------------------------------------------------
# 2. View building
# ---------------------------------------------------------------------------

def test_view_from_full_detail():
    view = build_session_view(SessionDetail(page=_page(total=45)), page_index=1, limit=20)
    assert view.header.is_page_scoped is True
    assert view.header.total_requests == 45
    assert view.header.title == "First question in the session"
    assert [r.id for r in view.rows] == ["a", "b"]
    assert view.window.current_page == 2
    assert view.window.visible_range_start == 21


def test_view_from_summary_only():
    summary = SessionSummary(session_id="sess-1", request_count=30, conversation_title="Chat about parsers")
    view = build_session_view(SessionDetail(summary=summary), limit=20)
    assert view.rows == ()
    assert view.header.title == "Chat about parsers"
    assert view.window.total_pages == 2


def test_view_from_nothing():
    view = build_session_view(SessionDetail())
    assert view.rows == ()
    assert view.header.total_requests == 0
    assert view.window.is_empty


def test_view_options_applied():
    view = build_session_view(
        SessionDetail(page=_page()),
        max_visible_tools=0,
        message_preview_length=5,
        title_max_length=11,
    )
    assert view.rows[0].message_preview == "Secon..."
    assert view.header.title == "First quest..."
