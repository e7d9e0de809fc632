import pytest

from testsuites.fakes import FakeDriver
from ui_foundation import RunConfiguration, Session


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def config():
    # Short waits keep timeout tests fast
    return RunConfiguration({"waitTimeout": 0.5, "pollInterval": 0.01})


@pytest.fixture
def session(driver, config):
    return Session(driver, config)
