import pytest

from driver_session import DriverSession
from fakes import FakeDriver


@pytest.fixture
def test_config(tmp_path):
    return {
        "base_url": "https://site.test/",
        "screenshot_dir": str(tmp_path / "shots"),
        "poll_frequency": 0.05,
        "banner_settle_seconds": 0,
    }


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def session(fake_driver, test_config, request):
    s = DriverSession(fake_driver, test_name=request.node.name, config=test_config)
    yield s
    s.release()
