"""pytest plugin exposing the shared Selenium session.

The session is started the first time a test asks for the ``selenium``
fixture and stopped when the test session finishes. Failed tests can leave a
screenshot behind when ``screenshot.on_fail`` is configured.
"""

import logging
import re
from pathlib import Path

import pytest

from selenese_tools.config.manager import SeleniumConfigManager
from selenese_tools.config.types import SeleniumSettings
from selenese_tools.context import SeleniumTestContextHolder
from selenese_tools.session import start_selenium, stop_selenium
from selenese_tools.wrapper import SeleniumWrapper

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    group = parser.getgroup("selenium", "Selenium session")
    group.addoption(
        "--selenium-config",
        action="store",
        default=None,
        help="Path to the Selenium YAML config file (default: ./selenium.yaml)",
    )
    group.addoption(
        "--selenium-env",
        action="store",
        default="test",
        help="Environment block of the config file to apply (default: test)",
    )
    group.addoption(
        "--selenium-browser",
        action="store",
        default=None,
        help="Browser to drive, e.g. firefox, chrome, edge, safari or *googlechrome",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "selenium: test drives a browser through the shared Selenium session")


def screenshot_file_name(nodeid: str) -> str:
    return re.sub(r"[^\w.-]+", "_", nodeid).strip("_") + ".png"


@pytest.fixture(scope="session")
def selenium_settings(pytestconfig) -> SeleniumSettings:
    """The merged Selenium configuration for this run"""
    config_file = pytestconfig.getoption("selenium_config")
    manager = SeleniumConfigManager().load(
        config_file=Path(config_file) if config_file else None,
        environment=pytestconfig.getoption("selenium_env"),
        overrides={"browser": pytestconfig.getoption("selenium_browser")},
    )
    return manager.to_settings()


@pytest.fixture(scope="session")
def selenium_session(selenium_settings):
    """The shared session, started once for the whole test run"""
    wrapper = start_selenium(selenium_settings)
    yield wrapper
    stop_selenium()


@pytest.fixture
def selenium(selenium_session, request) -> SeleniumWrapper:
    """The shared session, with its context set to the running test"""
    selenium_session.set_context(request.node.nodeid)
    return selenium_session


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when != "call" or not report.failed:
        return

    context = SeleniumTestContextHolder.context
    if context is None or not context.config.screenshot.on_fail or not context.selenium.alive:
        return

    screenshot_dir = Path(context.config.screenshot.dir)
    path = screenshot_dir / screenshot_file_name(item.nodeid)
    try:
        screenshot_dir.mkdir(parents=True, exist_ok=True)
        context.selenium.capture_screenshot(str(path))
    except Exception as e:
        logger.warning(f"Could not capture screenshot for {item.nodeid}: {e}")
        return
    logger.info(f"Screenshot saved to {path}")
    report.sections.append(("selenium", f"Screenshot saved to {path}"))
