"""
================================================================================
Fluent Automation Framework
================================================================================

Fluent browser-automation test DSL on top of Playwright.

Components:
    - capabilities: Logical browser -> capability record resolution
    - command_provider: Lazy accessors, act fault boundary, wait_until
    - expect_provider: Text/value/count/class/url/boolean/throws expectations
    - fluent: Sentence-style "I" session
    - playwright_document: Playwright page as document collaborator
    - browser_manager: Browser lifecycle and bootstrap

Author: Automation Team
License: MIT
================================================================================
"""

from .capabilities import Browser, CapabilityRecord, resolve
from .command_provider import Accessor, CommandProvider, FluentSettings
from .document import DocumentQuery
from .element import ElementHandle, ElementKind
from .exceptions import (
    CommandExecutionError,
    ElementNotFoundError,
    ExpectationFailedError,
    FluentError,
    InvalidArgumentError,
    UnsupportedBrowserError,
    WaitCancelledError,
)
from .expect_provider import ExpectProvider
from .fluent import FluentSession
from .wait_helpers import wait_until

__all__ = [
    "Accessor",
    "Browser",
    "CapabilityRecord",
    "CommandExecutionError",
    "CommandProvider",
    "DocumentQuery",
    "ElementHandle",
    "ElementKind",
    "ElementNotFoundError",
    "ExpectationFailedError",
    "ExpectProvider",
    "FluentError",
    "FluentSession",
    "FluentSettings",
    "InvalidArgumentError",
    "UnsupportedBrowserError",
    "WaitCancelledError",
    "resolve",
    "wait_until",
]
