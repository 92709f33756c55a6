"""pytest configuration and fixtures for pyqt-formbind tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from pyqt_formbind.protocols.form_config import set_form_config  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_config():
    """Restore the default binding configuration after each test."""
    yield
    set_form_config(None)
