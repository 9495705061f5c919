"""WebDriver factory.

This module creates the WebDriver that backs a Selenese session, either a local
browser whose driver binary is resolved by webdriver-manager or a remote
session on a Selenium server.
"""

import logging
from typing import Dict, Literal

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.safari.options import Options as SafariOptions
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from selenese_tools.config.types import SeleniumSettings

logger = logging.getLogger(__name__)

BrowserType = Literal["chrome", "edge", "firefox", "safari"]

# Selenium RC browser launchers and the WebDriver browser that replaces them
LEGACY_BROWSER_NAMES: Dict[str, BrowserType] = {
    "firefox": "firefox",
    "firefoxproxy": "firefox",
    "firefoxchrome": "firefox",
    "chrome": "firefox",  # RC's "*chrome" launched Firefox in chrome mode
    "googlechrome": "chrome",
    "iexplore": "edge",
    "iexploreproxy": "edge",
    "iehta": "edge",
    "safari": "safari",
    "safariproxy": "safari",
}


def normalize_browser(browser: str) -> BrowserType:
    """Map a configured browser name to a WebDriver browser type.

    Plain WebDriver names pass through; RC launcher names such as
    ``*googlechrome`` are translated.

    Raises:
        ValueError: If the browser is not supported
    """
    name = browser.strip().lower()
    if name.startswith("*"):
        launcher = name[1:].split(" ", 1)[0]
        if launcher in LEGACY_BROWSER_NAMES:
            return LEGACY_BROWSER_NAMES[launcher]
    elif name in ("chrome", "edge", "firefox", "safari"):
        return name  # type: ignore[return-value]
    raise ValueError(f"Unsupported browser type: {browser}")


class WebDriverFactory:
    """Factory for the WebDriver instances behind Selenese sessions."""

    @staticmethod
    def create_options(browser_type: BrowserType, headless: bool = False):
        """Build default options for a browser type"""
        if browser_type == "chrome":
            options = ChromeOptions()
        elif browser_type == "edge":
            options = EdgeOptions()
        elif browser_type == "firefox":
            options = FirefoxOptions()
        elif browser_type == "safari":
            return SafariOptions()
        else:
            raise ValueError(f"Unsupported browser type: {browser_type}")

        if browser_type in ("chrome", "edge"):
            options.add_argument("--no-sandbox")
            options.add_argument("--disable-dev-shm-usage")
            options.add_argument("--disable-gpu")

        # Safari has no headless mode
        if headless:
            options.add_argument("--headless")
        return options

    @staticmethod
    def create(settings: SeleniumSettings) -> WebDriver:
        """Create the WebDriver described by the settings.

        Args:
            settings: Merged Selenium configuration

        Returns:
            A started WebDriver session

        Raises:
            ValueError: If the configured browser is not supported
        """
        browser_type = normalize_browser(settings.browser)
        options = WebDriverFactory.create_options(browser_type, headless=settings.headless)

        if settings.server.remote:
            logger.info(f"Connecting to remote {browser_type} at {settings.server.url}")
            return webdriver.Remote(command_executor=settings.server.url, options=options)

        logger.info(f"Setting up local {browser_type.capitalize()} browser...")
        try:
            if browser_type == "chrome":
                service = ChromeService(ChromeDriverManager().install())
                driver = webdriver.Chrome(service=service, options=options)
            elif browser_type == "edge":
                service = EdgeService(EdgeChromiumDriverManager().install())
                driver = webdriver.Edge(service=service, options=options)
            elif browser_type == "firefox":
                service = FirefoxService(GeckoDriverManager().install())
                driver = webdriver.Firefox(service=service, options=options)
            else:
                driver = webdriver.Safari(options=options)
        except Exception as e:
            logger.error(f"Error setting up {browser_type.capitalize()}: {e}")
            raise

        logger.info(f"{browser_type.capitalize()} WebDriver successfully created")
        return driver
