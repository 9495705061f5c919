"""Abstract page object that verifies the browser state on construction."""

import re
from abc import ABC, abstractmethod
from typing import Optional, Pattern, Union

from selenese_tools.aware import SeleniumAware
from selenese_tools.exceptions import UnexpectedPageError


class Page(SeleniumAware, ABC):
    """A page object that checks the browser is on the right page when constructed.

    Subclasses implement ``verify_page``; a page-opening factory method passes
    the page's URI to the constructor, while navigation methods on other page
    objects construct the page without one after an action that should load it.
    """

    def __init__(self, uri: Optional[str] = None):
        """Verify the current page, opening ``uri`` first if given.

        The URI is prefixed with the application context path unless it
        already starts with it.

        Raises:
            UnexpectedPageError: If the browser is not on the page this class represents
        """
        if uri is not None:
            context_path = self.selenium.context_path
            if not uri.startswith(context_path):
                uri = context_path + uri
            self.selenium.open(uri)
        self.verify_page()

    @abstractmethod
    def verify_page(self):
        """Raise UnexpectedPageError unless the browser is on this page.

        Typically a check of the page title.
        """
        pass

    def page_title_matches(self, pattern: Union[str, Pattern[str]]):
        """Raise UnexpectedPageError unless the whole title matches ``pattern``"""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        title = self.selenium.get_title()
        if not regex.fullmatch(title):
            raise UnexpectedPageError(
                f"Expected page title matching /{regex.pattern}/ but found '{title}'"
            )

    def page_title_is(self, expected_title: str):
        """Raise UnexpectedPageError unless the title equals ``expected_title``"""
        title = self.selenium.get_title()
        if title != expected_title:
            raise UnexpectedPageError(
                f"Expected page title '{expected_title}' but found '{title}'"
            )
