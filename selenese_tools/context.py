"""Process-wide holder for the active Selenium session."""

from abc import ABC, abstractmethod
from typing import Optional

from selenese_tools.config.types import SeleniumSettings
from selenese_tools.wait import DEFAULT_INTERVAL, DEFAULT_TIMEOUT
from selenese_tools.wrapper import SeleniumWrapper


class SeleniumTestContext(ABC):
    """What tests can reach while a Selenium session is running."""

    @property
    @abstractmethod
    def selenium(self) -> SeleniumWrapper:
        pass

    @property
    @abstractmethod
    def config(self) -> SeleniumSettings:
        pass

    @property
    @abstractmethod
    def timeout(self) -> int:
        """Default wait timeout in milliseconds."""
        pass

    @property
    @abstractmethod
    def interval(self) -> int:
        """Polling interval in milliseconds."""
        pass


class DefaultSeleniumTestContext(SeleniumTestContext):
    def __init__(self, selenium: SeleniumWrapper, config: SeleniumSettings):
        self._selenium = selenium
        self._config = config

    @property
    def selenium(self) -> SeleniumWrapper:
        return self._selenium

    @property
    def config(self) -> SeleniumSettings:
        return self._config

    @property
    def timeout(self) -> int:
        return self._config.default_timeout or DEFAULT_TIMEOUT

    @property
    def interval(self) -> int:
        return self._config.default_interval or DEFAULT_INTERVAL


class SeleniumTestContextHolder:
    """Holds at most one test context per process."""

    context: Optional[SeleniumTestContext] = None

    def __init__(self):
        raise TypeError("SeleniumTestContextHolder is not instantiable")

    @classmethod
    def set_context(cls, context: SeleniumTestContext):
        cls.context = context

    @classmethod
    def reset(cls):
        cls.context = None
