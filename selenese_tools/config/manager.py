from pathlib import Path
from typing import Dict, Any, Optional, Mapping
from selenese_tools.config.types import SeleniumSettings
import logging
import os
import platform

import yaml


def get_default_browser() -> str:
    """Pick the browser that is always present on the current platform"""
    system = platform.system()
    if system == "Darwin":
        return "safari"
    if system == "Windows":
        return "edge"
    return "firefox"


class SeleniumConfigManager:
    """
    Configuration manager that merges the layers of Selenium configuration:
    built-in defaults, the application's ``selenium.yaml`` (with per-environment
    blocks) and ``selenium.*`` / ``SELENIUM_*`` environment variables.
    """

    _instance = None

    CONFIG_FILE_NAME = "selenium.yaml"
    ENV_PREFIX = "selenium."

    # Default settings with their types, keyed by dotted path
    DEFAULT_SETTINGS = {
        "server.host": ("localhost", str),
        "server.port": (4444, int),
        "server.remote": (False, bool),
        "browser": (None, str),
        "browser_url": ("http://localhost:8080", str),
        "default_timeout": (60000, int),
        "default_interval": (500, int),
        "slow": (False, bool),
        "window_maximize": (False, bool),
        "headless": (False, bool),
        "screenshot.dir": ("test-reports/screenshots", str),
        "screenshot.on_fail": (False, bool),
        "context_path": (None, str),
        "app_name": (None, str),
        "user_extensions": (None, str),
    }

    # Each setting can also be set via its upper-cased env var, e.g. SELENIUM_SERVER_PORT
    ENV_MAPPING = {
        "SELENIUM_" + setting.upper().replace(".", "_"): setting
        for setting in DEFAULT_SETTINGS.keys()
    }

    TRUE_VALUES = ("true", "1", "yes", "on")
    FALSE_VALUES = ("false", "0", "no", "off")

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    @classmethod
    def reset(cls):
        """Drop the singleton so the next access starts from defaults"""
        cls._instance = None

    def _initialize(self):
        """Initialize settings with default values"""
        self.settings: Dict[str, Any] = {}
        self.environment = "test"
        self.config_file: Optional[Path] = None
        self.logger = logging.getLogger(__name__)
        self.load_default_config()

    def load_default_config(self):
        """Reset every setting to its built-in default"""
        for key, (default_value, _) in self.DEFAULT_SETTINGS.items():
            self.settings[key] = default_value
        self.settings["browser"] = get_default_browser()
        return self

    def _convert_value(self, value: Any, target_type: type) -> Any:
        """Convert string value to target type

        Raises:
            ValueError: If the string is not a valid value of the type
        """
        if value is None or not isinstance(value, str):
            return value
        if target_type == bool:
            text = value.strip().lower()
            if text in self.TRUE_VALUES:
                return True
            if text in self.FALSE_VALUES:
                return False
            raise ValueError(f"'{value}' is not a boolean")
        return target_type(value)

    def _set(self, key: str, value: Any, source: str):
        if key not in self.DEFAULT_SETTINGS:
            self.logger.warning(f"Ignoring unknown Selenium setting '{key}' from {source}")
            return
        _, target_type = self.DEFAULT_SETTINGS[key]
        try:
            self.settings[key] = self._convert_value(value, target_type)
        except ValueError as e:
            raise ValueError(f"Invalid value for Selenium setting '{key}' from {source}: {e}") from e

    @staticmethod
    def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
        """Flatten nested mappings into dotted keys"""
        flat = {}
        for key, value in data.items():
            dotted = f"{prefix}{key}"
            if isinstance(value, Mapping):
                flat.update(SeleniumConfigManager._flatten(value, f"{dotted}."))
            else:
                flat[dotted] = value
        return flat

    def merge_application_config(self, config_file: Optional[Path] = None):
        """Merge settings from the application's selenium.yaml, if there is one

        Args:
            config_file: Explicit path; defaults to ``selenium.yaml`` in the
                current directory
        """
        path = Path(config_file) if config_file else Path.cwd() / self.CONFIG_FILE_NAME
        if not path.is_file():
            if config_file:
                raise FileNotFoundError(f"Selenium config file not found: {path}")
            self.logger.info(f"{self.CONFIG_FILE_NAME} not found, proceeding without config file")
            return self

        self.logger.info(f"Loading Selenium config from: {path}")
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise ValueError(f"Selenium config file {path} must contain a mapping")

        layers = [data.get("selenium") or {}]
        env_block = (data.get("environments") or {}).get(self.environment) or {}
        layers.append(env_block.get("selenium") or {})

        for layer in layers:
            for key, value in self._flatten(layer).items():
                self._set(key, value, str(path))
        self.config_file = path
        return self

    def merge_environment(self, environ: Optional[Mapping[str, str]] = None):
        """Merge overrides from ``selenium.*`` and ``SELENIUM_*`` environment variables"""
        environ = os.environ if environ is None else environ
        for key, value in environ.items():
            if key.startswith(self.ENV_PREFIX):
                self._set(key[len(self.ENV_PREFIX):], value, f"environment variable {key}")
            elif key in self.ENV_MAPPING:
                self._set(self.ENV_MAPPING[key], value, f"environment variable {key}")
        return self

    def load(
        self,
        config_file: Optional[Path] = None,
        environment: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ):
        """Load all configuration layers in order

        Args:
            config_file: Path to the application config file
            environment: Name of the environment block to apply (default "test")
            overrides: Final dotted-key overrides, e.g. from command line options

        Returns:
            The manager, for chaining
        """
        if environment:
            self.environment = environment
        self.load_default_config()
        self.merge_application_config(config_file)
        self.merge_environment()
        for key, value in (overrides or {}).items():
            if value is not None:
                self._set(key, value, "overrides")

        self.logger.debug(f"Selenium configuration loaded for '{self.environment}': {self.settings}")
        return self

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def get_parameter_dict(self) -> Dict[str, Any]:
        """Return the settings nested by their dotted paths"""
        nested: Dict[str, Any] = {}
        for key, value in self.settings.items():
            target = nested
            *parents, leaf = key.split(".")
            for part in parents:
                target = target.setdefault(part, {})
            if value is not None:
                target[leaf] = value
        return nested

    def to_settings(self) -> SeleniumSettings:
        """Validate the merged configuration"""
        return SeleniumSettings(**self.get_parameter_dict())
