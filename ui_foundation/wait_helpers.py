# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Blocking polling primitive used by element and busy-indicator waits.
#
# Key Features:
#   - Fixed poll interval (UI state changes are cheap to re-check)
#   - Hard deadline: the last sleep is clipped so a wait never overshoots
#     its timeout by more than one condition evaluation
#   - Diagnostic WaitTimeoutError carrying the description and elapsed time
#
# Usage:
#   poll_until(lambda: element.is_displayed(), timeout=15,
#              description="search box visible")
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Callable

from loguru import logger

from .exceptions import WaitTimeoutError


DEFAULT_POLL_INTERVAL = 0.25
DEFAULT_WAIT_TIMEOUT = 15.0


@dataclass
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        timeout: Total timeout in seconds
        poll_interval: Seconds to sleep between condition checks
    """
    timeout: float = DEFAULT_WAIT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL


def poll_until(
    condition: Callable[[], bool],
    timeout: float,
    description: str = "Waiting for condition",
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> float:
    """
    Block until ``condition()`` returns True.

    Exceptions raised by the condition propagate immediately.

    Args:
        condition: Zero-argument predicate
        timeout: Seconds before giving up
        description: Human-readable description for logs and the error
        poll_interval: Seconds between attempts

    Returns:
        Seconds elapsed until the condition held

    Raises:
        WaitTimeoutError: If the timeout elapses first
    """
    start_time = time.monotonic()
    attempt = 0

    while True:
        attempt += 1
        if condition():
            elapsed = time.monotonic() - start_time
            logger.debug(
                f"Wait successful after {attempt} attempts ({elapsed:.2f}s): {description}"
            )
            return elapsed

        elapsed = time.monotonic() - start_time
        remaining = timeout - elapsed
        if remaining <= 0:
            logger.error(f"Timeout after {elapsed:.2f}s waiting for: {description}")
            raise WaitTimeoutError(description, elapsed, timeout)

        time.sleep(min(poll_interval, remaining))


__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_WAIT_TIMEOUT",
    "WaitConfig",
    "poll_until",
]
