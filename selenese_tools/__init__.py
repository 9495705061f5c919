"""Selenese tools - Selenium sessions, waits and page objects for pytest."""

from selenese_tools.exceptions import (
    SeleneseError,
    MissingCommandError,
    WaitTimedOutError,
    UnexpectedPageError,
)
from selenese_tools.wait import wait_for
from selenese_tools.wrapper import SeleniumWrapper
from selenese_tools.context import (
    SeleniumTestContext,
    DefaultSeleniumTestContext,
    SeleniumTestContextHolder,
)
from selenese_tools.session import start_selenium, stop_selenium
from selenese_tools.aware import SeleniumAware
from selenese_tools.pageobjects import Page
from selenese_tools.testcase import SeleneseTestCase, SeleneseVerifier

__version__ = "0.1.0"

__all__ = [
    # Errors
    "SeleneseError",
    "MissingCommandError",
    "WaitTimedOutError",
    "UnexpectedPageError",
    # Session
    "wait_for",
    "SeleniumWrapper",
    "SeleniumTestContext",
    "DefaultSeleniumTestContext",
    "SeleniumTestContextHolder",
    "start_selenium",
    "stop_selenium",
    # Test helpers
    "SeleniumAware",
    "Page",
    "SeleneseTestCase",
    "SeleneseVerifier",
]
