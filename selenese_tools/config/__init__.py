"""
Selenium configuration package.

Loads defaults, the application's ``selenium.yaml`` and environment
overrides into a single ``SeleniumSettings`` object.
"""

from selenese_tools.config.manager import SeleniumConfigManager, get_default_browser
from selenese_tools.config.types import (
    SeleniumSettings,
    ServerSettings,
    ScreenshotSettings,
)

__all__ = [
    "SeleniumConfigManager",
    "get_default_browser",
    "SeleniumSettings",
    "ServerSettings",
    "ScreenshotSettings",
]
