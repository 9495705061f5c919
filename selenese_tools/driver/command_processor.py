"""User extension commands.

A user extension file is plain JavaScript. Each top-level
``function name(...)`` declaration becomes a command that tests can call on
the session like any built-in Selenese command.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from selenese_tools.driver.selenese import SeleneseDriver
from selenese_tools.exceptions import MissingCommandError

logger = logging.getLogger(__name__)

FUNCTION_DECLARATION = re.compile(r"^function\s+([A-Za-z_$][\w$]*)\s*\(", re.MULTILINE)


class CommandProcessor:
    """Runs user extension commands in the page."""

    def __init__(self, selenium: SeleneseDriver, extensions_file: Optional[str] = None):
        self.selenium = selenium
        self.script = ""
        self.commands: Dict[str, str] = {}
        if extensions_file:
            self.load_extensions(Path(extensions_file))

    def load_extensions(self, path: Path):
        """Register every function declared in a user extension script"""
        self.script = path.read_text()
        names = FUNCTION_DECLARATION.findall(self.script)
        self.commands = {name: name for name in names}
        logger.info(f"Loaded {len(names)} user extension command(s) from {path}: {names}")

    def has_command(self, name: str) -> bool:
        return name in self.commands

    def do_command(self, command: str, args: Sequence[str]) -> Any:
        """Run a user extension command in the current page

        Args:
            command: Name of the extension function
            args: String arguments passed to it

        Returns:
            Whatever the function returns
        """
        if not self.has_command(command):
            raise MissingCommandError(command, type(self), args)
        logger.debug(f"Running user extension {command}{tuple(args)}")
        return self.selenium.driver.execute_script(
            f"{self.script}\nreturn {command}.apply(null, arguments);", *args
        )
