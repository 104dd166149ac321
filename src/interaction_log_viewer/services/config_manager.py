"""Application configuration manager wrapping QSettings."""

import logging

from PySide6.QtCore import QObject, Signal, Slot, QSettings

logger = logging.getLogger(__name__)

# Default values
DEFAULTS = {
    "display/pageSize": 20,
    "display/maxVisibleTools": 2,
    "display/messagePreviewLength": 80,
    "display/titleMaxLength": 100,
    "advanced/debugLogging": False,
}

# Integer settings that must stay positive
_POSITIVE_INTS = frozenset({"display/pageSize", "display/messagePreviewLength", "display/titleMaxLength"})


class ConfigManager(QObject):
    """Centralized viewer settings with QML slot access."""

    settings_changed = Signal(str)  # key

    def __init__(self, parent=None):
        super().__init__(parent)
        self._settings = QSettings()

    @Slot(str, result=str)
    def get_string(self, key: str) -> str:
        return str(self._settings.value(key, DEFAULTS.get(key, "")))

    @Slot(str, result=int)
    def get_int(self, key: str) -> int:
        default = DEFAULTS.get(key, 0)
        val = self._settings.value(key, default)
        try:
            result = int(val)
        except (ValueError, TypeError):
            logger.debug("Bad stored value %r for %s, using default", val, key)
            return default
        if key in _POSITIVE_INTS and result < 1:
            return default
        return max(result, 0)

    @Slot(str, result=bool)
    def get_bool(self, key: str) -> bool:
        val = self._settings.value(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    @Slot(str, str)
    def set_string(self, key: str, value: str):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, int)
    def set_int(self, key: str, value: int):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str, bool)
    def set_bool(self, key: str, value: bool):
        self._settings.setValue(key, value)
        self.settings_changed.emit(key)

    @Slot(str)
    def reset(self, key: str):
        """Drop a stored value so the default applies again."""
        self._settings.remove(key)
        self.settings_changed.emit(key)

    # Typed accessors used by the view layer
    def page_size(self) -> int:
        return self.get_int("display/pageSize")

    def max_visible_tools(self) -> int:
        return self.get_int("display/maxVisibleTools")

    def message_preview_length(self) -> int:
        return self.get_int("display/messagePreviewLength")

    def title_max_length(self) -> int:
        return self.get_int("display/titleMaxLength")

    def debug_logging(self) -> bool:
        return self.get_bool("advanced/debugLogging")

    def view_options(self) -> dict:
        """Keyword arguments for build_session_view."""
        return {
            "limit": self.page_size(),
            "max_visible_tools": self.max_visible_tools(),
            "message_preview_length": self.message_preview_length(),
            "title_max_length": self.title_max_length(),
        }
