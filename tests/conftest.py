"""Shared test fixtures for Interaction Log Viewer."""

import os
import sys
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def qapp():
    """Create a QGuiApplication for tests that need Qt."""
    os.environ["QT_QPA_PLATFORM"] = "offscreen"
    from PySide6.QtGui import QGuiApplication

    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication(sys.argv or ["test"])
    yield app


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def session_page_path(fixtures_dir) -> Path:
    return fixtures_dir / "session_page.json"


@pytest.fixture
def jsonl_path(fixtures_dir) -> Path:
    return fixtures_dir / "interactions.jsonl"


@pytest.fixture
def session_summary_path(fixtures_dir) -> Path:
    return fixtures_dir / "session_summary.json"


@pytest.fixture
def config(qapp, tmp_path):
    """Create a ConfigManager with isolated QSettings."""
    from PySide6.QtCore import QSettings
    from interaction_log_viewer.services.config_manager import DEFAULTS, ConfigManager

    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path / "config"))
    manager = ConfigManager()
    for key in DEFAULTS:
        manager.reset(key)
    return manager
