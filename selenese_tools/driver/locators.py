"""Selenese locator and pattern parsing.

Element locators take the form ``type=argument``; a locator without a
recognised prefix is treated as XPath when it starts with ``//`` and as an
identifier (id, then name) otherwise.
"""

import re
from typing import List, Tuple

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from selenese_tools.exceptions import SeleneseError

LOCATOR_STRATEGIES = {
    "id": [By.ID],
    "name": [By.NAME],
    "identifier": [By.ID, By.NAME],
    "css": [By.CSS_SELECTOR],
    "xpath": [By.XPATH],
    "link": [By.LINK_TEXT],
}


def parse_locator(locator: str) -> Tuple[List[str], str]:
    """Split a Selenese locator into WebDriver strategies and a value.

    Returns:
        Tuple of (strategies to try in order, value)

    Raises:
        SeleneseError: For ``dom=`` locators, which need the RC JavaScript runtime
    """
    if locator.startswith("//"):
        return [By.XPATH], locator
    if locator.startswith("document."):
        raise SeleneseError(f"DOM locators are not supported: {locator}")

    prefix, sep, value = locator.partition("=")
    if sep and prefix in LOCATOR_STRATEGIES:
        return LOCATOR_STRATEGIES[prefix], value
    if sep and prefix == "dom":
        raise SeleneseError(f"DOM locators are not supported: {locator}")
    return LOCATOR_STRATEGIES["identifier"], locator


def find_elements(driver: WebDriver, locator: str) -> List[WebElement]:
    strategies, value = parse_locator(locator)
    for by in strategies:
        elements = driver.find_elements(by, value)
        if elements:
            return elements
    return []


def find_element(driver: WebDriver, locator: str) -> WebElement:
    """Find the first element matching a Selenese locator.

    Raises:
        SeleneseError: If nothing matches
    """
    strategies, value = parse_locator(locator)
    for by in strategies:
        try:
            return driver.find_element(by, value)
        except NoSuchElementException:
            continue
    raise SeleneseError(f"Element {locator} not found")


def split_attribute_locator(attribute_locator: str) -> Tuple[str, str]:
    """Split ``locator@attribute`` at its last ``@``"""
    locator, sep, attribute = attribute_locator.rpartition("@")
    if not sep or not locator or not attribute:
        raise SeleneseError(f"Invalid attribute locator: {attribute_locator}")
    return locator, attribute


def parse_option_locator(option_locator: str) -> Tuple[str, str]:
    """Split a select option locator; plain text means ``label=``"""
    prefix, sep, value = option_locator.partition("=")
    if sep and prefix in ("label", "value", "id", "index"):
        return prefix, value
    return "label", option_locator


def glob_to_regex(glob: str) -> str:
    """Translate a Selenese glob, where only ``*`` and ``?`` are special"""
    return "".join(
        ".*" if ch == "*" else "." if ch == "?" else re.escape(ch) for ch in glob
    )


def matches_pattern(pattern: str, text: str, search: bool = False) -> bool:
    """Match text against a Selenese string-match pattern.

    Supported prefixes are ``glob:`` (the default), ``regexp:``, ``regexpi:``
    and ``exact:``. Regular expressions may match anywhere in the
    text; globs and exact patterns must match all of it unless ``search`` is set.
    """
    if pattern.startswith("regexp:"):
        return re.search(pattern[len("regexp:"):], text) is not None
    if pattern.startswith("regexpi:"):
        return re.search(pattern[len("regexpi:"):], text, re.IGNORECASE) is not None
    if pattern.startswith("exact:"):
        literal = pattern[len("exact:"):]
        return literal in text if search else literal == text
    if pattern.startswith("glob:"):
        pattern = pattern[len("glob:"):]
    regex = re.compile(glob_to_regex(pattern), re.DOTALL)

    return bool(regex.search(text)) if search else bool(regex.fullmatch(text))
