"""Backend wiring for the session detail view.

Builds the config and models a QML session page binds to, and keeps them fed
as the user pages through a session.
"""

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Slot

from interaction_log_viewer.models.interaction_model import InteractionModel
from interaction_log_viewer.models.session_detail_model import SessionDetailModel
from interaction_log_viewer.services.config_manager import ConfigManager
from interaction_log_viewer.services.session_loader import SessionView, load_session_detail
from interaction_log_viewer.types import InteractionPage, SessionSummary

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "interaction_log_viewer"
DEBUG_LOGGING_KEY = "advanced/debugLogging"

FetchPage = Callable[[int, int], InteractionPage]  # (page_index, limit)
FetchSummary = Callable[[], Optional[SessionSummary]]


def apply_log_level(config: ConfigManager):
    """Set the package log level from the debug-logging setting."""
    level = logging.DEBUG if config.debug_logging() else logging.INFO
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


class SessionDetailController(QObject):
    """Loads pages of one session into a SessionDetailModel and an InteractionModel."""

    def __init__(
        self,
        fetch_page: FetchPage,
        fetch_summary: FetchSummary,
        config: ConfigManager | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self._fetch_page = fetch_page
        self._fetch_summary = fetch_summary
        self._config = config or ConfigManager(self)

        self.detail_model = SessionDetailModel(self, page_size=self._config.page_size())
        self.interaction_model = InteractionModel(self)
        self.last_errors: dict[str, str] = {}

        # Wire signals: navigation -> reload, settings -> log level
        self.detail_model.page_requested.connect(self.load_page)
        self._config.settings_changed.connect(self._on_setting_changed)
        apply_log_level(self._config)

    @Slot(int)
    def load_page(self, page_index: int) -> SessionView:
        limit = self._config.page_size()
        logger.debug("Loading page index %d with limit %d", page_index, limit)
        detail = load_session_detail(lambda: self._fetch_page(page_index, limit), self._fetch_summary)
        self.last_errors = dict(detail.errors)
        view = self.detail_model.show_detail(detail, page_index, self._config)
        self.interaction_model.set_rows(list(view.rows))
        return view

    def _on_setting_changed(self, key: str):
        if key == DEBUG_LOGGING_KEY:
            apply_log_level(self._config)
