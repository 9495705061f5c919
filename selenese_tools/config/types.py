from typing import Optional
from pydantic import BaseModel, Field


class ServerSettings(BaseModel):
    """Location of the remote WebDriver server"""

    host: str = "localhost"
    port: int = 4444
    remote: bool = False

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/wd/hub"


class ScreenshotSettings(BaseModel):
    """Where and when screenshots are captured"""

    dir: str = "test-reports/screenshots"
    on_fail: bool = False


class SeleniumSettings(BaseModel):
    """Merged Selenium configuration for a test run"""

    server: ServerSettings = Field(default_factory=ServerSettings)
    browser: str = "firefox"
    browser_url: str = "http://localhost:8080"
    default_timeout: int = 60000
    default_interval: int = 500
    slow: bool = False
    window_maximize: bool = False
    headless: bool = False
    screenshot: ScreenshotSettings = Field(default_factory=ScreenshotSettings)
    context_path: Optional[str] = None
    app_name: Optional[str] = None
    user_extensions: Optional[str] = None
