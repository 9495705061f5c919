"""Page object base classes for functional tests."""

from selenese_tools.pageobjects.page import Page

__all__ = ["Page"]
