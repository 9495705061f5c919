"""Session wrapper with timeout handling and dynamic Selenese commands.

``SeleniumWrapper`` forwards every Selenese command to the underlying
``SeleneseDriver`` and adds a few conveniences on top:

* ``<command>_and_wait(...)`` runs the command then waits for the page to load.
* ``wait_for_<x>(...)`` / ``wait_for_not_<x>(...)`` poll ``is_<x>`` or
  ``get_<x>`` until the expected state is reached.
* Commands declared in a user extension script are forwarded to the
  ``CommandProcessor``.

Resolved dynamic commands are cached on the instance, so the dispatch below
only runs the first time a name is used.
"""

import logging
import re
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from selenese_tools.config.types import SeleniumSettings
from selenese_tools.driver.command_processor import CommandProcessor
from selenese_tools.driver.selenese import SeleneseDriver
from selenese_tools.exceptions import MissingCommandError
from selenese_tools.wait import wait_for

logger = logging.getLogger(__name__)

AND_WAIT_SUFFIX = "_and_wait"
WAIT_FOR_PREFIX = "wait_for_"
NOT_PREFIX = "not_"

Millis = Union[int, str]


class SeleniumWrapper:
    """The shared Selenium session handed to tests and page objects."""

    def __init__(
        self,
        selenium: SeleneseDriver,
        command_processor: Optional[CommandProcessor],
        config: SeleniumSettings,
    ):
        self.selenium = selenium
        self.command_processor = command_processor
        self.config = config
        self._timeout: Optional[Millis] = None
        self._alive = False

    # ==================== Lifecycle ====================

    @property
    def alive(self) -> bool:
        return self._alive

    def start(self):
        self.selenium.start()
        self._alive = True

    def stop(self):
        try:
            self.selenium.stop()
        finally:
            self._alive = False

    # ==================== Timeouts ====================

    @property
    def default_timeout(self) -> int:
        return self.config.default_timeout

    @property
    def interval(self) -> int:
        return self.config.default_interval

    @property
    def timeout(self) -> Optional[Millis]:
        return self._timeout

    @timeout.setter
    def timeout(self, value: Millis):
        self.selenium.set_timeout(value)
        self._timeout = value

    def set_timeout(self, value: Millis):
        self.timeout = value

    def get_timeout(self) -> Optional[Millis]:
        return self.timeout

    def _effective_timeout(self) -> int:
        return int(self._timeout if self._timeout is not None else self.default_timeout)

    def wait_for_page_to_load(self, timeout: Optional[Millis] = None):
        """Wait for the page to load, by default for ``timeout`` or else ``default_timeout``"""
        if timeout is None:
            timeout = self._timeout if self._timeout is not None else self.default_timeout
        self.selenium.wait_for_page_to_load(timeout)

    def wait_for(self, description: str, condition: Callable[[], Any], timeout: Optional[Millis] = None):
        """Poll ``condition`` until it returns a truthy value

        Raises:
            WaitTimedOutError: If the condition does not hold within the timeout
        """
        wait_for(
            condition,
            description,
            timeout=int(timeout) if timeout is not None else self._effective_timeout(),
            interval=self.interval,
        )

    # ==================== Application ====================

    @property
    def context_path(self) -> str:
        """The URL context path the application is deployed under"""
        path = self.config.context_path
        if path is None:
            path = self.config.app_name or Path.cwd().name
        return path if path.startswith("/") else f"/{path}"

    # ==================== Dynamic commands ====================

    def __getattr__(self, name: str):
        # private names and lookups before __init__ has run never dispatch
        if name.startswith("_") or "selenium" not in self.__dict__:
            raise AttributeError(name)
        method = self._resolve_command(name)
        self.__dict__[name] = method
        return method

    def _resolve_command(self, name: str) -> Callable:
        if name.endswith(AND_WAIT_SUFFIX) and len(name) > len(AND_WAIT_SUFFIX):
            return self._and_wait_command(name[: -len(AND_WAIT_SUFFIX)])

        if name in dir(self.selenium):
            logger.debug(f"Forwarding {name} to {type(self.selenium).__name__}")
            return getattr(self.selenium, name)

        if name.startswith(WAIT_FOR_PREFIX):
            command = self._wait_for_command(name)
            if command is not None:
                return command

        if self.command_processor is not None and self.command_processor.has_command(name):
            return self._user_extension_command(name)

        raise MissingCommandError(name, type(self))

    def _and_wait_command(self, command_name: str) -> Callable:
        command = getattr(self, command_name)

        def and_wait(*args):
            result = command(*args)
            self.wait_for_page_to_load(self.default_timeout)
            return result

        and_wait.__name__ = f"{command_name}{AND_WAIT_SUFFIX}"
        return and_wait

    def _user_extension_command(self, name: str) -> Callable:
        def user_extension(*args):
            if not all(isinstance(arg, str) for arg in args):
                raise MissingCommandError(name, type(self), args)
            return self.command_processor.do_command(name, args)

        user_extension.__name__ = name
        return user_extension

    def _wait_for_command(self, name: str) -> Optional[Callable]:
        condition = name[len(WAIT_FOR_PREFIX):]
        negated = condition.startswith(NOT_PREFIX)
        if negated:
            condition = condition[len(NOT_PREFIX):]
        members = dir(self.selenium)

        if f"is_{condition}" in members:
            accessor_name = f"is_{condition}"
            accessor = getattr(self.selenium, accessor_name)

            def wait_for_state(*args):
                description = describe_call(accessor_name, args)
                if negated:
                    description = f"not {description}"
                self.wait_for(description, lambda: bool(accessor(*args)) != negated)
                return True

            wait_for_state.__name__ = name
            return wait_for_state

        if f"get_{condition}" in members:
            accessor_name = f"get_{condition}"
            accessor = getattr(self.selenium, accessor_name)

            def wait_for_value(*args):
                if not args:
                    raise MissingCommandError(name, type(self), args)
                *accessor_args, expected = args
                matcher, expectation = self._value_matcher(name, expected, negated, args)
                verb = "not to be" if negated else "to be"
                description = f"{describe_call(accessor_name, accessor_args)} {verb} {expectation}"
                self.wait_for(description, lambda: matcher(accessor(*accessor_args)))
                return True

            wait_for_value.__name__ = name
            return wait_for_value

        return None

    def _value_matcher(
        self, name: str, expected: Any, negated: bool, args: Sequence[Any]
    ) -> Tuple[Callable[[Any], bool], str]:
        if isinstance(expected, re.Pattern):
            matcher = lambda value: expected.fullmatch(str(value)) is not None
            expectation = f"/{expected.pattern}/"
        elif callable(expected):
            # A matcher cannot be reliably inverted
            if negated:
                raise MissingCommandError(name, type(self), args)
            matcher = lambda value: bool(expected(value))
            expectation = getattr(expected, "__name__", repr(expected))
        else:
            matcher = lambda value: value == expected
            expectation = f'"{expected}"'

        if negated:
            return (lambda value: not matcher(value)), expectation
        return matcher, expectation


def describe_call(command: str, args: Sequence[Any]) -> str:
    return f"{command}({', '.join(str(arg) for arg in args)})"
