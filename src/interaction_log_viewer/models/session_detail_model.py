"""Session header and pagination state exposed to QML."""

import logging

from PySide6.QtCore import QObject, Property, Signal, Slot

from interaction_log_viewer.services.pagination import controls_visible, navigate
from interaction_log_viewer.services.savings_calculator import format_percent
from interaction_log_viewer.services.session_loader import SessionDetail, SessionView, build_session_view
from interaction_log_viewer.types import SessionSource
from interaction_log_viewer.utils.decimals import is_nonzero

logger = logging.getLogger(__name__)

TITLE_PLACEHOLDER = "Session"


class SessionDetailModel(QObject):
    """Holds the current SessionView; navigation slots emit page requests."""

    changed = Signal()
    page_requested = Signal(int)  # 0-based page index

    def __init__(self, parent=None, page_size: int = 20):
        super().__init__(parent)
        self._view: SessionView | None = None
        self._page_size = page_size

    def set_view(self, view: SessionView, page_size: int | None = None):
        self._view = view
        if page_size is not None:
            self._page_size = page_size
        self.changed.emit()

    def view(self) -> SessionView | None:
        return self._view

    def show_detail(self, detail: SessionDetail, page_index: int = 0, config=None) -> SessionView:
        """Build the view for freshly loaded data using the configured display options."""
        options = config.view_options() if config is not None else {"limit": self._page_size}
        view = build_session_view(detail, page_index, **options)
        self.set_view(view, page_size=options["limit"])
        return view

    # Header

    def _get_title(self) -> str:
        if self._view is None or not self._view.header.title:
            return TITLE_PLACEHOLDER
        return self._view.header.title

    title = Property(str, _get_title, notify=changed)

    def _get_total_requests(self) -> int:
        return self._view.header.total_requests if self._view else 0

    totalRequests = Property(int, _get_total_requests, notify=changed)

    def _get_total_input_tokens(self) -> int:
        return self._view.header.total_input_tokens if self._view else 0

    totalInputTokens = Property(int, _get_total_input_tokens, notify=changed)

    def _get_total_output_tokens(self) -> int:
        return self._view.header.total_output_tokens if self._view else 0

    totalOutputTokens = Property(int, _get_total_output_tokens, notify=changed)

    def _get_models(self) -> list:
        return list(self._view.header.models) if self._view else []

    models = Property(list, _get_models, notify=changed)

    def _get_total_cost(self) -> str:
        if self._view is None:
            return "-"
        header = self._view.header
        if not (is_nonzero(header.total_cost) and is_nonzero(header.total_baseline_cost)):
            return "-"
        return header.total_cost

    totalCost = Property(str, _get_total_cost, notify=changed)

    def _get_savings_text(self) -> str:
        return format_percent(self._view.header.savings_percent if self._view else None)

    savingsText = Property(str, _get_savings_text, notify=changed)

    def _get_first_request(self) -> str:
        first = self._view.header.first_request if self._view else None
        return first.isoformat() if first else ""

    firstRequest = Property(str, _get_first_request, notify=changed)

    def _get_last_request(self) -> str:
        last = self._view.header.last_request if self._view else None
        return last.isoformat() if last else ""

    lastRequest = Property(str, _get_last_request, notify=changed)

    def _get_profile_name(self) -> str:
        return (self._view.header.profile_name or "") if self._view else ""

    profileName = Property(str, _get_profile_name, notify=changed)

    def _get_user_names(self) -> list:
        return list(self._view.header.user_names) if self._view else []

    userNames = Property(list, _get_user_names, notify=changed)

    def _get_is_claude_code(self) -> bool:
        return self._view is not None and self._view.header.session_source == SessionSource.CLAUDE_CODE

    isClaudeCode = Property(bool, _get_is_claude_code, notify=changed)

    def _get_root_interaction_id(self) -> str:
        root = self._view.header.root_interaction if self._view else None
        return root.id if root else ""

    rootInteractionId = Property(str, _get_root_interaction_id, notify=changed)

    def _get_is_page_scoped(self) -> bool:
        return self._view.header.is_page_scoped if self._view else False

    isPageScoped = Property(bool, _get_is_page_scoped, notify=changed)

    # Pagination

    def _get_current_page(self) -> int:
        return self._view.window.current_page if self._view else 1

    currentPage = Property(int, _get_current_page, notify=changed)

    def _get_total_pages(self) -> int:
        return self._view.window.total_pages if self._view else 0

    totalPages = Property(int, _get_total_pages, notify=changed)

    def _get_has_next(self) -> bool:
        return self._view.window.has_next if self._view else False

    hasNext = Property(bool, _get_has_next, notify=changed)

    def _get_has_prev(self) -> bool:
        return self._view.window.has_prev if self._view else False

    hasPrev = Property(bool, _get_has_prev, notify=changed)

    def _get_controls_visible(self) -> bool:
        if self._view is None:
            return False
        return controls_visible(self._total_rows(), self._page_size)

    controlsVisible = Property(bool, _get_controls_visible, notify=changed)

    def _get_range_text(self) -> str:
        if self._view is None or self._view.window.is_empty:
            return ""
        window = self._view.window
        return (
            f"Showing {window.visible_range_start} to {window.visible_range_end} "
            f"of {self._total_rows()} requests"
        )

    rangeText = Property(str, _get_range_text, notify=changed)

    @Slot()
    def next_page(self):
        self._request(1)

    @Slot()
    def previous_page(self):
        self._request(-1)

    def _request(self, step: int):
        if self._view is None:
            return
        target = navigate(self._view.window, step)
        if target is not None:
            logger.debug("Requesting page index %d", target)
            self.page_requested.emit(target)

    def _total_rows(self) -> int:
        return self._view.window.total
