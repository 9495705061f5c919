"""Selenese command set implemented over Selenium WebDriver.

``SeleneseDriver`` keeps the Selenium RC style of API (string locators,
millisecond string-or-int timeouts, ``is_*``/``get_*`` accessors) so that tests
written against RC read the same, while the browser itself is driven through a
Selenium 4 WebDriver.
"""

import logging
import time
from typing import Any, Callable, Optional, Union
from urllib.parse import urljoin

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import Select, WebDriverWait

from selenese_tools.config.types import SeleniumSettings
from selenese_tools.driver.factory import WebDriverFactory
from selenese_tools.driver.locators import (
    find_element,
    find_elements,
    matches_pattern,
    parse_option_locator,
    split_attribute_locator,
)
from selenese_tools.exceptions import SeleneseError, WaitTimedOutError

logger = logging.getLogger(__name__)

Millis = Union[int, str]


def _seconds(millis: Millis) -> float:
    return int(millis) / 1000.0


class SeleneseDriver:
    """Selenese commands backed by a WebDriver.

    The WebDriver is created on ``start()`` and discarded on ``stop()``.
    """

    def __init__(
        self,
        settings: SeleniumSettings,
        driver_factory: Optional[Callable[[SeleniumSettings], WebDriver]] = None,
    ):
        self.settings = settings
        self._driver_factory = driver_factory or WebDriverFactory.create
        self._driver: Optional[WebDriver] = None
        self._speed = 0
        self._timeout = settings.default_timeout
        self._context: Optional[str] = None

    # ==================== Session ====================

    @property
    def driver(self) -> WebDriver:
        if self._driver is None:
            raise SeleneseError("Selenium session has not been started")
        return self._driver

    def start(self):
        """Launch the browser"""
        self._driver = self._driver_factory(self.settings)
        self._driver.set_page_load_timeout(_seconds(self._timeout))

    def stop(self):
        """Close the browser"""
        if self._driver is not None:
            try:
                self._driver.quit()
            finally:
                self._driver = None

    def set_context(self, context: str):
        """Name the test currently driving the browser, for the logs"""
        self._context = context
        logger.info(f"Selenium context: {context}")

    def set_timeout(self, timeout: Millis):
        """Set the page load timeout used by open and wait_for_page_to_load"""
        self._timeout = int(timeout)
        if self._driver is not None:
            self._driver.set_page_load_timeout(_seconds(timeout))

    def set_speed(self, speed: Millis):
        """Pause ``speed`` milliseconds after every action"""
        self._speed = int(speed)

    def get_speed(self) -> str:
        return str(self._speed)

    def _pause(self):
        if self._speed > 0:
            time.sleep(self._speed / 1000.0)

    # ==================== Actions ====================

    def open(self, url: str):
        """Open a URL; relative URLs resolve against the configured browser URL"""
        self.driver.get(urljoin(self.settings.browser_url, url))
        self._pause()

    def click(self, locator: str):
        find_element(self.driver, locator).click()
        self._pause()

    def double_click(self, locator: str):
        ActionChains(self.driver).double_click(find_element(self.driver, locator)).perform()
        self._pause()

    def type(self, locator: str, value: str):
        element = find_element(self.driver, locator)
        element.clear()
        element.send_keys(value)
        self._pause()

    def check(self, locator: str):
        element = find_element(self.driver, locator)
        if not element.is_selected():
            element.click()
        self._pause()

    def uncheck(self, locator: str):
        element = find_element(self.driver, locator)
        if element.is_selected():
            element.click()
        self._pause()

    def select(self, select_locator: str, option_locator: str):
        select = Select(find_element(self.driver, select_locator))
        kind, value = parse_option_locator(option_locator)
        if kind == "label":
            select.select_by_visible_text(value)
        elif kind == "value":
            select.select_by_value(value)
        elif kind == "index":
            select.select_by_index(int(value))
        else:
            for option in select.options:
                if option.get_attribute("id") == value:
                    option.click()
                    break
            else:
                raise SeleneseError(f"Option with id '{value}' not found")
        self._pause()

    def submit(self, form_locator: str):
        find_element(self.driver, form_locator).submit()
        self._pause()

    def refresh(self):
        self.driver.refresh()
        self._pause()

    def go_back(self):
        self.driver.back()
        self._pause()

    def drag_and_drop_to_object(self, locator_of_object_to_be_dragged: str, locator_of_drag_destination_object: str):
        source = find_element(self.driver, locator_of_object_to_be_dragged)
        target = find_element(self.driver, locator_of_drag_destination_object)
        ActionChains(self.driver).drag_and_drop(source, target).perform()
        self._pause()

    def window_maximize(self):
        self.driver.maximize_window()

    def delete_all_visible_cookies(self):
        self.driver.delete_all_cookies()

    # ==================== Accessors ====================

    def get_title(self) -> str:
        return self.driver.title

    def get_location(self) -> str:
        return self.driver.current_url

    def get_body_text(self) -> str:
        return find_element(self.driver, "css=body").text

    def get_text(self, locator: str) -> str:
        return find_element(self.driver, locator).text

    def get_value(self, locator: str) -> str:
        element = find_element(self.driver, locator)
        if element.get_attribute("type") in ("checkbox", "radio"):
            return "on" if element.is_selected() else "off"
        return element.get_attribute("value") or ""

    def get_attribute(self, attribute_locator: str) -> Optional[str]:
        locator, attribute = split_attribute_locator(attribute_locator)
        return find_element(self.driver, locator).get_attribute(attribute)

    def get_xpath_count(self, xpath: str) -> int:
        return len(find_elements(self.driver, f"xpath={xpath}"))

    def get_eval(self, script: str) -> Any:
        """Evaluate a JavaScript expression in the page and return its value"""
        return self.driver.execute_script(f"return ({script});")

    def is_text_present(self, pattern: str) -> bool:
        return matches_pattern(pattern, self.get_body_text(), search=True)

    def is_element_present(self, locator: str) -> bool:
        return bool(find_elements(self.driver, locator))

    def is_visible(self, locator: str) -> bool:
        return find_element(self.driver, locator).is_displayed()

    def is_checked(self, locator: str) -> bool:
        return find_element(self.driver, locator).is_selected()

    def is_editable(self, locator: str) -> bool:
        element = find_element(self.driver, locator)
        return element.is_enabled() and element.get_attribute("readonly") is None

    # ==================== Waits ====================

    def wait_for_page_to_load(self, timeout: Millis):
        """Wait until the document has finished loading

        Raises:
            WaitTimedOutError: If the page is still loading after ``timeout`` ms
        """
        try:
            WebDriverWait(self.driver, _seconds(timeout)).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
        except TimeoutException:
            raise WaitTimedOutError(f"Timed out after {timeout}ms waiting for page to load")

    def wait_for_condition(self, script: str, timeout: Millis):
        """Wait until a JavaScript expression evaluates truthy"""
        try:
            WebDriverWait(self.driver, _seconds(timeout)).until(lambda d: self.get_eval(script))
        except TimeoutException:
            raise WaitTimedOutError(f"Timed out after {timeout}ms waiting for condition: {script}")

    # ==================== Screenshots ====================

    def capture_screenshot(self, filename: str):
        if not self.driver.save_screenshot(filename):
            raise SeleneseError(f"Could not save screenshot to {filename}")

    def capture_screenshot_to_string(self) -> str:
        """Capture the viewport as a base64 encoded PNG"""
        return self.driver.get_screenshot_as_base64()
