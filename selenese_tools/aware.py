"""Access to the active Selenium session from tests and page objects."""

from typing import Any, Callable, Optional

from selenese_tools.context import SeleniumTestContext, SeleniumTestContextHolder
from selenese_tools.exceptions import SeleneseError
from selenese_tools.wait import wait_for
from selenese_tools.wrapper import SeleniumWrapper


class SeleniumAware:
    """Mixin giving tests and page objects access to the shared session."""

    @property
    def selenium_context(self) -> SeleniumTestContext:
        context = SeleniumTestContextHolder.context
        if context is None:
            raise SeleneseError("No Selenium session is active")
        return context

    @property
    def selenium(self) -> SeleniumWrapper:
        return self.selenium_context.selenium

    @property
    def context_path(self) -> str:
        return self.selenium.context_path

    def wait_for(
        self,
        condition: Callable[[], Any],
        timeout: Optional[int] = None,
        description: str = "condition",
    ):
        """Return once ``condition`` holds, or fail when the timeout is reached.

        Args:
            condition: Zero-argument callable returning truthy when satisfied
            timeout: Maximum wait in milliseconds; defaults to the session timeout
            description: Names the condition in the failure message
        """
        context = self.selenium_context
        wait_for(
            condition,
            description,
            timeout=timeout if timeout is not None else context.timeout,
            interval=context.interval,
        )
