"""Exceptions raised by selenese tools."""


class SeleneseError(Exception):
    """Base class for errors raised while driving the browser."""


class MissingCommandError(SeleneseError, AttributeError):
    """Raised when a command name matches nothing the session can run."""

    def __init__(self, name: str, owner: type, args=None):
        self.name = name
        self.owner = owner
        self.args_given = None if args is None else tuple(args)
        message = f"No such method: {owner.__name__}.{name}()"
        if self.args_given is not None:
            types = ", ".join(type(a).__name__ for a in self.args_given)
            message += f" for argument types ({types})"
        super().__init__(message)


class WaitTimedOutError(SeleneseError, AssertionError):
    """Raised when a polled condition is not met within its timeout."""


class UnexpectedPageError(SeleneseError, AssertionError):
    """Raised when a page object finds the browser on the wrong page."""
