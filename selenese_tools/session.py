"""Start and stop the shared Selenium session."""

import logging
from typing import Callable, Optional

from selenium.webdriver.remote.webdriver import WebDriver

from selenese_tools.config.types import SeleniumSettings
from selenese_tools.context import DefaultSeleniumTestContext, SeleniumTestContextHolder
from selenese_tools.driver.command_processor import CommandProcessor
from selenese_tools.driver.selenese import SeleneseDriver
from selenese_tools.exceptions import SeleneseError
from selenese_tools.wrapper import SeleniumWrapper

logger = logging.getLogger(__name__)

SLOW_SPEED = 1000


def start_selenium(
    settings: SeleniumSettings,
    driver_factory: Optional[Callable[[SeleniumSettings], WebDriver]] = None,
) -> SeleniumWrapper:
    """Launch the browser and make the session available to tests

    Args:
        settings: Merged Selenium configuration
        driver_factory: Creates the WebDriver; defaults to ``WebDriverFactory.create``

    Returns:
        The started session wrapper

    Raises:
        SeleneseError: If a session is already active
    """
    if SeleniumTestContextHolder.context is not None:
        raise SeleneseError("A Selenium session is already active")

    logger.info(f"Starting Selenium session: browser={settings.browser}, url={settings.browser_url}")
    selenium = SeleneseDriver(settings, driver_factory=driver_factory)
    processor = CommandProcessor(selenium, settings.user_extensions)
    wrapper = SeleniumWrapper(selenium, processor, settings)
    wrapper.start()

    try:
        if settings.slow:
            selenium.set_speed(SLOW_SPEED)
        if settings.window_maximize:
            selenium.window_maximize()
    except Exception as e:
        logger.error(f"Error configuring Selenium session, closing browser: {e}")
        wrapper.stop()
        raise

    SeleniumTestContextHolder.set_context(DefaultSeleniumTestContext(wrapper, settings))
    return wrapper


def stop_selenium():
    """Close the browser and clear the shared session"""
    context = SeleniumTestContextHolder.context
    if context is None:
        return
    logger.info("Stopping Selenium session")
    try:
        context.selenium.stop()
    finally:
        SeleniumTestContextHolder.reset()
