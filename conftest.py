# conftest.py
import pytest

from common import load_config
from driver_session import acquire


@pytest.fixture(scope="session")
def ui_config():
    """Loaded config.yaml, shared read-only across tests."""
    return load_config()


@pytest.fixture
def ui_session(request, ui_config):
    """A fresh browser session per test, quit even when the test fails."""
    session = acquire(ui_config, test_name=request.node.name)
    try:
        yield session
    finally:
        session.release()
