from unittest.mock import patch

import pytest
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.safari.options import Options as SafariOptions

from selenese_tools.config.types import ServerSettings, SeleniumSettings
from selenese_tools.driver.factory import WebDriverFactory, normalize_browser


@pytest.mark.parametrize(
    "browser,expected",
    [
        ("firefox", "firefox"),
        ("Chrome", "chrome"),
        ("edge", "edge"),
        ("safari", "safari"),
        ("*firefox", "firefox"),
        ("*googlechrome", "chrome"),
        ("*chrome", "firefox"),
        ("*iexplore", "edge"),
        ("*iehta", "edge"),
        ("*safari", "safari"),
        ("*firefox /usr/lib/firefox/firefox-bin", "firefox"),
    ],
)
def test_normalize_browser(browser, expected):
    assert normalize_browser(browser) == expected


@pytest.mark.parametrize("browser", ["opera", "*opera", "*custom /bin/browser", ""])
def test_normalize_unsupported_browser(browser):
    with pytest.raises(ValueError):
        normalize_browser(browser)


class TestCreateOptions:
    def test_chrome_options(self):
        options = WebDriverFactory.create_options("chrome")
        assert isinstance(options, ChromeOptions)
        assert "--no-sandbox" in options.arguments
        assert "--headless" not in options.arguments

    def test_headless(self):
        options = WebDriverFactory.create_options("firefox", headless=True)
        assert isinstance(options, FirefoxOptions)
        assert "--headless" in options.arguments

    def test_safari_options(self):
        assert isinstance(WebDriverFactory.create_options("safari", headless=True), SafariOptions)

    def test_unsupported(self):
        with pytest.raises(ValueError):
            WebDriverFactory.create_options("opera")


class TestCreate:
    def test_remote_session(self):
        settings = SeleniumSettings(
            browser="*googlechrome",
            server=ServerSettings(host="grid.example.com", port=4445, remote=True),
        )
        with patch("selenese_tools.driver.factory.webdriver.Remote") as remote:
            driver = WebDriverFactory.create(settings)

        assert driver is remote.return_value
        kwargs = remote.call_args.kwargs
        assert kwargs["command_executor"] == "http://grid.example.com:4445/wd/hub"
        assert isinstance(kwargs["options"], ChromeOptions)

    @patch("selenese_tools.driver.factory.webdriver.Firefox")
    @patch("selenese_tools.driver.factory.FirefoxService")
    @patch("selenese_tools.driver.factory.GeckoDriverManager")
    def test_local_firefox(self, manager, service, firefox):
        manager.return_value.install.return_value = "/drivers/geckodriver"

        driver = WebDriverFactory.create(SeleniumSettings(browser="firefox", headless=True))

        assert driver is firefox.return_value
        service.assert_called_once_with("/drivers/geckodriver")
        assert firefox.call_args.kwargs["service"] is service.return_value
        assert "--headless" in firefox.call_args.kwargs["options"].arguments

    @patch("selenese_tools.driver.factory.webdriver.Chrome")
    @patch("selenese_tools.driver.factory.ChromeService")
    @patch("selenese_tools.driver.factory.ChromeDriverManager")
    def test_driver_errors_propagate(self, manager, service, chrome):
        chrome.side_effect = RuntimeError("no chrome binary")
        with pytest.raises(RuntimeError, match="no chrome binary"):
            WebDriverFactory.create(SeleniumSettings(browser="chrome"))

    def test_unsupported_browser(self):
        with pytest.raises(ValueError):
            WebDriverFactory.create(SeleniumSettings(browser="netscape"))
