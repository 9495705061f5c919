"""Browser driver module.

This module provides the Selenese command set on top of Selenium WebDriver.
"""

from selenese_tools.driver.selenese import SeleneseDriver
from selenese_tools.driver.command_processor import CommandProcessor
from selenese_tools.driver.factory import WebDriverFactory, normalize_browser

__all__ = [
    "SeleneseDriver",
    "CommandProcessor",
    "WebDriverFactory",
    "normalize_browser",
]
