"""pytest configuration and fixtures for pyqt-formrelation tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pyqt_formrelation.protocols import set_relation_config


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_relation_config():
    """Every test starts (and ends) with the default global RelationConfig."""
    set_relation_config(None)
    yield
    set_relation_config(None)
