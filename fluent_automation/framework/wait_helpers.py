# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# This module provides the condition-polling primitive used by WaitUntil.
#
# Key Features:
#   - Fixed-interval polling on the calling thread
#   - Swallowed intermediate failures (logged at TRACE)
#   - Final attempt's failure re-raised verbatim on timeout
#   - Fatal (session lost) errors stop polling immediately
#   - Optional cancellation through a threading.Event
#
# Usage:
#   wait_until(lambda: expect.text("Done").in_("#status"), timeout=10)
#   wait_until(check, scenario="fast", cancel_event=stop)
#
# ================================================================================

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from loguru import logger

from .exceptions import ExpectationFailedError, InvalidArgumentError, WaitCancelledError


@dataclass
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        timeout: Total timeout in seconds
        poll_interval: Pause between attempts in seconds
    """
    timeout: float = 30.0
    poll_interval: float = 0.1


# Pre-configured wait strategies for common scenarios
WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    "default": WaitConfig(),

    # Client-side re-render (text, totals, toggled classes)
    "fast": WaitConfig(timeout=5.0, poll_interval=0.05),

    # XHR-driven updates
    "ajax": WaitConfig(timeout=15.0, poll_interval=0.25),

    # Full navigation or redirect chains
    "page_load": WaitConfig(timeout=60.0, poll_interval=0.5),
}


def get_wait_config(scenario: str) -> WaitConfig:
    """
    Get wait configuration for a specific scenario.

    Args:
        scenario: Scenario name (e.g., "fast", "page_load")

    Returns:
        WaitConfig for the scenario, or default if not found
    """
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


def is_fatal(error: BaseException) -> bool:
    """Return True for errors that no amount of polling can recover from."""
    return bool(getattr(error, "fatal", False))


def describe(fn: Callable[..., Any]) -> str:
    """Short human-readable name for a callable."""
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    return name or repr(fn)


def wait_until(
    condition: Callable[[], Any],
    timeout: Optional[float] = None,
    poll_interval: Optional[float] = None,
    description: str = "",
    scenario: Optional[str] = None,
    cancel_event: Optional[threading.Event] = None,
) -> int:
    """
    Poll a condition until it succeeds or the timeout elapses.

    An attempt succeeds when `condition` returns a truthy value or None
    (action-style conditions that assert by raising). It fails when it
    returns a falsy value or raises.

    Args:
        condition: Zero-argument callable, invoked repeatedly
        timeout: Total timeout in seconds (required unless scenario is given)
        poll_interval: Pause between attempts in seconds
        description: Human-readable description for logging
        scenario: Predefined scenario supplying timeout/poll_interval defaults
        cancel_event: Setting this event ends the wait with WaitCancelledError

    Returns:
        Number of attempts made

    Raises:
        InvalidArgumentError: If timeout is missing or non-positive
        WaitCancelledError: If cancel_event is set while polling
        Exception: The final attempt's own failure on timeout, or a
            fatal error as soon as it is seen
    """
    if scenario is not None:
        config = get_wait_config(scenario)
        timeout = config.timeout if timeout is None else timeout
        poll_interval = config.poll_interval if poll_interval is None else poll_interval

    if timeout is None or timeout <= 0:
        raise InvalidArgumentError(f"wait_until requires a positive timeout, got {timeout!r}")
    if poll_interval is None:
        poll_interval = WAIT_SCENARIOS["default"].poll_interval
    if poll_interval < 0:
        raise InvalidArgumentError(f"poll_interval must not be negative, got {poll_interval!r}")

    description = description or describe(condition)
    start_time = time.monotonic()
    attempt = 0

    logger.debug(
        f"Starting wait: {description} "
        f"(timeout={timeout}s, poll_interval={poll_interval}s)"
    )

    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WaitCancelledError(f"Wait cancelled after {attempt} attempts: {description}")

        attempt += 1
        failure: Optional[Exception] = None

        try:
            result = condition()
        except Exception as e:
            if is_fatal(e):
                logger.error(f"Attempt {attempt} hit a fatal error, not retrying: {e}")
                raise
            failure = e
            logger.trace(f"Attempt {attempt} failed with error: {e}")
        else:
            if result is None or result:
                elapsed = time.monotonic() - start_time
                logger.debug(
                    f"Wait successful after {attempt} attempts "
                    f"({elapsed:.2f}s): {description}"
                )
                return attempt
            logger.trace(f"Attempt {attempt}: condition returned {result!r}")

        elapsed = time.monotonic() - start_time
        if elapsed >= timeout:
            logger.warning(
                f"Timeout after {elapsed:.2f}s ({attempt} attempts) "
                f"waiting for: {description}"
            )
            if failure is not None:
                raise failure
            raise ExpectationFailedError(
                f"Expected condition [{description}] to become true within {timeout}s "
                f"but it was still false after {attempt} attempts.",
                context=description,
                expected=True,
                actual=False,
            )

        delay = min(poll_interval, timeout - elapsed)
        if cancel_event is not None:
            if cancel_event.wait(delay):
                raise WaitCancelledError(f"Wait cancelled after {attempt} attempts: {description}")
        else:
            time.sleep(delay)


__all__ = [
    "WaitConfig",
    "WAIT_SCENARIOS",
    "get_wait_config",
    "is_fatal",
    "describe",
    "wait_until",
]
