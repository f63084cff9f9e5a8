"""Shared pytest fixtures."""

import pytest
from PyQt6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """Ensure a QCoreApplication exists for QObject signals."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
