"""unittest base class for Selenese style functional tests."""

import unittest
from typing import Any, List, Optional

from selenese_tools.aware import SeleniumAware
from selenese_tools.driver.locators import matches_pattern
from selenese_tools.exceptions import MissingCommandError


def selenese_equals(expected: Any, actual: Any) -> bool:
    """Compare values the way Selenese does: strings are matched as patterns"""
    if isinstance(expected, str) and isinstance(actual, str):
        return matches_pattern(expected, actual)
    return expected == actual


class SeleneseVerifier:
    """Soft assertions that are collected and reported together."""

    def __init__(self):
        self.verification_errors: List[str] = []

    def verify_equals(self, expected: Any, actual: Any):
        if not selenese_equals(expected, actual):
            self.verification_errors.append(f"Expected '{expected}' but saw '{actual}'")

    def verify_not_equals(self, expected: Any, actual: Any):
        if selenese_equals(expected, actual):
            self.verification_errors.append(f"Did not expect '{actual}'")

    def verify_true(self, condition: Any, message: Optional[str] = None):
        if not condition:
            self.verification_errors.append(message or "Expected true but was false")

    def verify_false(self, condition: Any, message: Optional[str] = None):
        if condition:
            self.verification_errors.append(message or "Expected false but was true")

    def clear_verification_errors(self):
        self.verification_errors = []

    def check_for_verification_errors(self):
        """Fail with every collected verification error, then start afresh"""
        errors, self.verification_errors = self.verification_errors, []
        if errors:
            raise AssertionError("\n".join(errors))


class SeleneseTestCase(SeleniumAware, unittest.TestCase):
    """A TestCase bound to the shared Selenium session.

    Unknown attributes are looked up on a ``SeleneseVerifier`` so tests can call
    ``self.verify_equals(...)`` and friends directly.
    """

    def __init__(self, methodName: str = "runTest"):
        self.verifier = SeleneseVerifier()
        super().__init__(methodName)

    def setUp(self):
        super().setUp()
        self.set_test_context()

    def tearDown(self):
        super().tearDown()
        self.verifier.check_for_verification_errors()

    @property
    def root_url(self) -> str:
        """The URL context path of the application"""
        return self.context_path

    def set_test_context(self):
        self.selenium.set_context(f"{type(self).__name__}.{self._testMethodName}")

    def __getattr__(self, name: str):
        if name.startswith("_") or "verifier" not in self.__dict__:
            raise AttributeError(name)
        if hasattr(self.verifier, name):
            return getattr(self.verifier, name)
        raise MissingCommandError(name, type(self))
