"""Tests for interaction_log_viewer.services.config_manager."""


# ---------------------------------------------------------------------------
# 1. Defaults
# ---------------------------------------------------------------------------

def test_defaults(config):
    assert config.page_size() == 20
    assert config.max_visible_tools() == 2
    assert config.message_preview_length() == 80
    assert config.title_max_length() == 100
    assert config.debug_logging() is False


def test_view_options(config):
    assert config.view_options() == {
        "limit": 20,
        "max_visible_tools": 2,
        "message_preview_length": 80,
        "title_max_length": 100,
    }


# ---------------------------------------------------------------------------
# 2. Set and get
# ---------------------------------------------------------------------------

def test_set_get_int(config):
    config.set_int("display/pageSize", 50)
    assert config.page_size() == 50


def test_set_get_bool(config):
    config.set_bool("advanced/debugLogging", True)
    assert config.debug_logging() is True


def test_set_get_string(config):
    config.set_string("display/pageSize", "35")
    assert config.get_string("display/pageSize") == "35"
    assert config.page_size() == 35


# ---------------------------------------------------------------------------
# 3. Bad stored values fall back to defaults
# ---------------------------------------------------------------------------

def test_non_numeric_falls_back(config):
    config.set_string("display/pageSize", "lots")
    assert config.page_size() == 20


def test_non_positive_page_size_falls_back(config):
    config.set_int("display/pageSize", 0)
    assert config.page_size() == 20


def test_zero_visible_tools_allowed(config):
    config.set_int("display/maxVisibleTools", 0)
    assert config.max_visible_tools() == 0


def test_reset(config):
    config.set_int("display/pageSize", 99)
    config.reset("display/pageSize")
    assert config.page_size() == 20


# ---------------------------------------------------------------------------
# 4. Settings changed signal
# ---------------------------------------------------------------------------

def test_settings_changed_signal(config):
    received = []
    config.settings_changed.connect(received.append)
    config.set_int("display/maxVisibleTools", 3)
    assert received == ["display/maxVisibleTools"]
