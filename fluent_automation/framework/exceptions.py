"""
================================================================================
Fluent Automation Exceptions
================================================================================

Error taxonomy shared by the command core and the expectation engine.

    FluentError
    ├── UnsupportedBrowserError   - unknown logical browser identifier
    ├── ElementNotFoundError      - accessor resolved to zero matches
    ├── CommandExecutionError     - driver fault surfaced through act()
    ├── ExpectationFailedError    - a named assertion did not hold
    ├── InvalidArgumentError      - malformed caller input
    └── WaitCancelledError        - wait_until() cancelled by its caller

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class FluentError(Exception):
    """Base class for every error raised by the framework itself."""
    pass


class UnsupportedBrowserError(FluentError):
    """Raised when a logical browser identifier is not recognized."""

    def __init__(self, browser: Any, reason: str = "is not supported"):
        self.browser = browser
        super().__init__(f"Browser [{browser}] {reason}.")


class ElementNotFoundError(FluentError):
    """Raised when a selector matches zero nodes at resolution time."""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Unable to find element matching selector [{selector}].")


class CommandExecutionError(FluentError):
    """
    Wraps a fault raised by the document/driver collaborator.

    Attributes:
        fatal: True when the underlying session is gone and retrying
            cannot succeed (closed page, crashed browser).
    """

    def __init__(self, message: str, fatal: bool = False):
        self.fatal = fatal
        super().__init__(message)


class ExpectationFailedError(FluentError):
    """
    Raised when an expectation does not hold.

    Carries structured data so a runner can render a diff without
    inspecting internal state.
    """

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
    ):
        self.message = message
        self.context = context
        self.expected = expected
        self.actual = actual
        super().__init__(message)

    def to_dict(self) -> dict:
        """Serializable view used for report attachments."""
        return {
            "message": self.message,
            "context": self.context,
            "expected": _stringify(self.expected),
            "actual": _stringify(self.actual),
        }


class InvalidArgumentError(FluentError, ValueError):
    """Raised for malformed caller input (e.g. non-positive timeout)."""
    pass


class WaitCancelledError(FluentError):
    """Raised when a wait_until() poll loop is cancelled through its event."""
    pass


def _stringify(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return None if value is None else str(value)


__all__ = [
    "FluentError",
    "UnsupportedBrowserError",
    "ElementNotFoundError",
    "CommandExecutionError",
    "ExpectationFailedError",
    "InvalidArgumentError",
    "WaitCancelledError",
]
