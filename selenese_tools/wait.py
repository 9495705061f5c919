"""Polling wait helper.

Evaluates a condition at a fixed interval until it holds or the timeout
expires. Everything here runs on the calling thread.
"""

import logging
import time
from typing import Any, Callable, Optional

from selenese_tools.exceptions import WaitTimedOutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30000
DEFAULT_INTERVAL = 500


def wait_for(
    condition: Callable[[], Any],
    description: str = "condition",
    timeout: Optional[int] = None,
    interval: Optional[int] = None,
) -> None:
    """Block until ``condition`` returns a truthy value.

    Args:
        condition: Zero-argument callable polled on every attempt. An exception
            raised by it counts as "not satisfied yet".
        description: Text naming the condition, used in the timeout message
        timeout: Maximum time to wait in milliseconds
        interval: Delay between attempts in milliseconds

    Raises:
        ValueError: If timeout or interval is not positive
        WaitTimedOutError: If the condition is still false when the timeout expires
    """
    timeout = DEFAULT_TIMEOUT if timeout is None else int(timeout)
    interval = DEFAULT_INTERVAL if interval is None else int(interval)
    if timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout}")
    if interval <= 0:
        raise ValueError(f"Interval must be positive, got {interval}")

    deadline = time.monotonic() + timeout / 1000.0
    attempts = 0
    while time.monotonic() < deadline:
        attempts += 1
        try:
            if condition():
                logger.debug(f"{description} satisfied after {attempts} attempt(s)")
                return
        except Exception as e:
            logger.debug(f"Attempt {attempts} waiting for {description} raised: {e}")
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        time.sleep(min(interval / 1000.0, remaining))

    raise WaitTimedOutError(f"Timed out waiting for {description}")
