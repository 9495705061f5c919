import pytest
from unittest.mock import create_autospec

from selenese_tools import wait as wait_module
from selenese_tools.config.types import SeleniumSettings
from selenese_tools.context import SeleniumTestContextHolder
from selenese_tools.driver.command_processor import CommandProcessor
from selenese_tools.driver.selenese import SeleneseDriver
from selenese_tools.wrapper import SeleniumWrapper

DEFAULT_TIMEOUT = 10000


class FakeClock:
    """Stands in for the time module inside the wait loop."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(wait_module, "time", fake)
    return fake


@pytest.fixture(autouse=True)
def reset_context_holder():
    """Make sure no session leaks between tests."""
    SeleniumTestContextHolder.reset()
    yield
    SeleniumTestContextHolder.reset()


@pytest.fixture
def settings():
    return SeleniumSettings(default_timeout=DEFAULT_TIMEOUT, context_path="/app")


@pytest.fixture
def mock_selenium():
    return create_autospec(SeleneseDriver, instance=True)


@pytest.fixture
def mock_processor():
    processor = create_autospec(CommandProcessor, instance=True)
    processor.has_command.return_value = False
    return processor


@pytest.fixture
def wrapper(mock_selenium, mock_processor, settings):
    return SeleniumWrapper(mock_selenium, mock_processor, settings)
