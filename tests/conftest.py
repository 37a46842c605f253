# Shared fixtures: headless Qt platform and a clean service registry per test.

import os

import pytest

# Must be set before any QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from responsive.services.service_locator import services  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_services():
    services.clear()
    yield
    services.clear()
