"""
================================================================================
Command Provider
================================================================================

Command execution core of the fluent DSL.

Provides:
    - Lazy element accessors (find / find_all) that query only when invoked
    - `act`: single-shot fault boundary normalizing driver errors
    - `wait_until`: condition polling with timeout and cancellation
    - Fluent actions (open, click, hover, enter, select)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

import allure
from loguru import logger

from ..common.global_config import get_config
from .document import DocumentQuery
from .element import ElementHandle
from .exceptions import (
    CommandExecutionError,
    ElementNotFoundError,
    FluentError,
    InvalidArgumentError,
)
from .wait_helpers import wait_until as _poll_until


T = TypeVar("T")


@dataclass
class FluentSettings:
    """
    Runtime settings for a command provider.

    Attributes:
        wait_timeout: Default wait_until timeout in seconds
        poll_interval: Default pause between wait_until attempts in seconds
    """
    wait_timeout: float = 30.0
    poll_interval: float = 0.1

    @classmethod
    def from_config(cls) -> "FluentSettings":
        """Build settings from the `wait.*` configuration section."""
        try:
            return cls(
                wait_timeout=float(get_config("wait.timeout", cls.wait_timeout)),
                poll_interval=float(get_config("wait.poll_interval", cls.poll_interval)),
            )
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Invalid wait configuration: {e}") from e


class Accessor(Generic[T]):
    """
    Deferred element lookup.

    Nothing is queried when the accessor is built; every `resolve()`
    (or call) performs a fresh query and returns fresh snapshots.
    """

    def __init__(
        self,
        resolver: Callable[[], T],
        selector: Optional[str] = None,
        description: Optional[str] = None,
    ):
        self._resolver = resolver
        self.selector = selector
        self.description = description or selector or "element"

    def resolve(self) -> T:
        return self._resolver()

    def __call__(self) -> T:
        return self._resolver()

    def __repr__(self) -> str:
        return f"Accessor({self.description!r})"


ElementTarget = Union[str, Callable[[], ElementHandle]]
ElementsTarget = Union[str, Callable[[], List[ElementHandle]]]


class CommandProvider:
    """
    Executes commands against a document collaborator.

    Usage:
        commands = CommandProvider(document)
        submit = commands.find("button[type=submit]")   # no query yet
        commands.click("button[type=submit]")
        commands.wait_until(lambda: commands.url.endswith("/done"), timeout=5)
    """

    def __init__(
        self,
        document: DocumentQuery,
        settings: Optional[FluentSettings] = None,
    ):
        """
        Initialize command provider.

        Args:
            document: Document collaborator to query and drive
            settings: Wait defaults; read from configuration when None
        """
        self.document = document
        self.settings = settings or FluentSettings.from_config()

    # =========================================================================
    # Lazy Accessors
    # =========================================================================

    def find(self, selector: str) -> Accessor[ElementHandle]:
        """
        Build a lazy accessor for the first element matching selector.

        Resolving it raises ElementNotFoundError when nothing matches.
        """
        def resolve() -> ElementHandle:
            return self.document.to_handle(self._find_native(selector))

        return Accessor(resolve, selector=selector)

    def find_all(self, selector: str) -> Accessor[List[ElementHandle]]:
        """Build a lazy accessor for all elements matching selector."""
        def resolve() -> List[ElementHandle]:
            return [self.document.to_handle(n) for n in self.document.query_multiple(selector)]

        return Accessor(resolve, selector=selector)

    def _find_native(self, selector: str) -> Any:
        native = self.document.query_single(selector)
        if native is None:
            raise ElementNotFoundError(selector)
        return native

    # =========================================================================
    # Fault Boundary and Polling
    # =========================================================================

    def act(self, operation: Callable[[], T]) -> T:
        """
        Execute operation once inside the fault boundary.

        Framework errors (expectation failures, element not found) pass
        through unchanged. Anything else raised by the collaborator is
        re-raised as CommandExecutionError with the original message.

        Returns:
            Whatever operation returns
        """
        try:
            return operation()
        except FluentError:
            raise
        except Exception as e:
            fatal = self.document.is_session_lost(e)
            message = str(e) or type(e).__name__
            logger.debug(f"Driver fault ({type(e).__name__}, fatal={fatal}): {message}")
            raise CommandExecutionError(message, fatal=fatal) from e

    def wait_until(
        self,
        condition: Callable[[], Any],
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        description: str = "",
    ) -> int:
        """
        Poll condition until it succeeds or the timeout elapses.

        Args:
            condition: Zero-argument callable; returns bool, or None when it
                asserts by raising (e.g. an expectation)
            timeout: Seconds; defaults to settings.wait_timeout
            poll_interval: Seconds; defaults to settings.poll_interval
            cancel_event: Optional event that cancels the wait when set
            description: Label for logs and the timeout failure

        Returns:
            Number of attempts made
        """
        timeout = self.settings.wait_timeout if timeout is None else timeout
        poll_interval = self.settings.poll_interval if poll_interval is None else poll_interval

        with allure.step(f"Wait until: {description or 'condition'} (timeout={timeout}s)"):
            return _poll_until(
                lambda: self.act(condition),
                timeout=timeout,
                poll_interval=poll_interval,
                description=description,
                cancel_event=cancel_event,
            )

    # =========================================================================
    # Actions
    # =========================================================================

    @property
    def url(self) -> str:
        """Current document location."""
        return self.act(self.document.current_url)

    def open(self, url: str) -> None:
        """Navigate the session to url."""
        with allure.step(f"Open: {url}"):
            logger.info(f"Opening: {url}")
            self.act(lambda: self.document.navigate(url))

    def click(self, selector: str) -> None:
        """Click the first element matching selector."""
        with allure.step(f"Click: {selector}"):
            logger.info(f"Clicking element: {selector}")
            self.act(lambda: self.document.click(self._find_native(selector)))
            logger.debug(f"Successfully clicked: {selector}")

    def hover(self, selector: str) -> None:
        """Hover over the first element matching selector."""
        with allure.step(f"Hover: {selector}"):
            logger.info(f"Hovering over: {selector}")
            self.act(lambda: self.document.hover(self._find_native(selector)))

    def enter(self, text: Any, selector: str) -> None:
        """
        Replace the content of an input.

        Args:
            text: Text to enter; non-strings are converted with str()
            selector: Input selector
        """
        value = text if isinstance(text, str) else str(text)
        with allure.step(f"Enter '{value}' in: {selector}"):
            logger.info(f"Entering '{value[:50]}' in: {selector}")
            self.act(lambda: self.document.fill(self._find_native(selector), value))
            logger.debug(f"Successfully filled: {selector}")

    def select(self, option: Union[str, int, List[str]], selector: str) -> None:
        """
        Select option(s) in a select element.

        Args:
            option: Option value or label (str), zero-based index (int),
                or several values/labels (list)
            selector: Select element selector
        """
        if isinstance(option, bool) or not isinstance(option, (str, int, list)):
            raise InvalidArgumentError(f"Unsupported option type: {type(option).__name__}")

        with allure.step(f"Select {option!r} from: {selector}"):
            logger.info(f"Selecting option: {option!r} in {selector}")
            self.act(lambda: self.document.select_option(self._find_native(selector), option))
            logger.debug(f"Successfully selected: {option!r}")


__all__ = [
    "Accessor",
    "CommandProvider",
    "FluentSettings",
    "ElementTarget",
    "ElementsTarget",
]
