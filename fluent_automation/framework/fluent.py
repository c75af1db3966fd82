"""
================================================================================
Fluent Session
================================================================================

Sentence-style front end over the command and expect providers.

Usage:
    I = FluentSession(document)
    I.open("http://localhost:3000/forms")
    I.select("Motorcycles").from_("tr select:nth-of-type(1)")
    I.enter(6).in_("td.quantity input")
    I.expect.text("$197.70").in_("tr span.subtotal")
    I.click("a.remove")
    I.wait_until(lambda: I.expect.text("$788.64").in_("p.grandTotal span"))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from typing import Any, Callable, List, Optional, Union

from .command_provider import CommandProvider, ElementsTarget, ElementTarget, FluentSettings
from .document import DocumentQuery
from .expect_provider import ExpectProvider, Matcher


class EnterSyntax:
    """`I.enter(text).in_(selector)`"""

    def __init__(self, commands: CommandProvider, text: Any):
        self._commands = commands
        self._text = text

    def in_(self, selector: str) -> None:
        self._commands.enter(self._text, selector)


class SelectSyntax:
    """`I.select(option).from_(selector)`"""

    def __init__(self, commands: CommandProvider, option: Union[str, int, List[str]]):
        self._commands = commands
        self._option = option

    def from_(self, selector: str) -> None:
        self._commands.select(self._option, selector)


class MatchSyntax:
    """`I.expect.text(expected).in_(target)` / `I.expect.value(expected).of(target)`"""

    def __init__(self, check: Callable[[ElementTarget, Matcher], None], expected: Matcher):
        self._check = check
        self._expected = expected

    def in_(self, target: ElementTarget) -> None:
        self._check(target, self._expected)

    of = in_


class CountSyntax:
    """`I.expect.count(n).of(target)`"""

    def __init__(self, expect: ExpectProvider, expected: int):
        self._expect = expect
        self._expected = expected

    def of(self, target: ElementsTarget) -> None:
        self._expect.count(target, self._expected)

    in_ = of


class CssClassSyntax:
    """`I.expect.css_class(name).on(target)`"""

    def __init__(self, expect: ExpectProvider, class_name: str):
        self._expect = expect
        self._class_name = class_name

    def on(self, target: ElementTarget) -> None:
        self._expect.css_class(target, self._class_name)

    in_ = on


class FluentExpect:
    """Builder entry points for expectations."""

    def __init__(self, provider: ExpectProvider):
        self.provider = provider

    def text(self, expected: Matcher) -> MatchSyntax:
        return MatchSyntax(self.provider.text, expected)

    def value(self, expected: Matcher) -> MatchSyntax:
        return MatchSyntax(self.provider.value, expected)

    def count(self, expected: int) -> CountSyntax:
        return CountSyntax(self.provider, expected)

    def css_class(self, class_name: str) -> CssClassSyntax:
        return CssClassSyntax(self.provider, class_name)

    def url(self, expected: Union[str, Callable[[str], bool]]) -> None:
        self.provider.url(expected)

    def exists(self, target: ElementTarget) -> None:
        self.provider.exists(target)

    def true(self, predicate: Callable[[], bool]) -> None:
        self.provider.true(predicate)

    def false(self, predicate: Callable[[], bool]) -> None:
        self.provider.false(predicate)

    def throws(self, action: Callable[[], Any]) -> None:
        self.provider.throws(action)


class FluentSession:
    """
    The "I" of a fluent test.

    Wires a CommandProvider and an ExpectProvider around one document
    collaborator (one logical browser session).
    """

    def __init__(
        self,
        document: DocumentQuery,
        settings: Optional[FluentSettings] = None,
    ):
        self.commands = CommandProvider(document, settings)
        self.expect = FluentExpect(ExpectProvider(self.commands))

    @property
    def url(self) -> str:
        return self.commands.url

    def find(self, selector: str):
        return self.commands.find(selector)

    def find_all(self, selector: str):
        return self.commands.find_all(selector)

    def open(self, url: str) -> "FluentSession":
        self.commands.open(url)
        return self

    def click(self, selector: str) -> "FluentSession":
        self.commands.click(selector)
        return self

    def hover(self, selector: str) -> "FluentSession":
        self.commands.hover(selector)
        return self

    def enter(self, text: Any) -> EnterSyntax:
        return EnterSyntax(self.commands, text)

    def select(self, option: Union[str, int, List[str]]) -> SelectSyntax:
        return SelectSyntax(self.commands, option)

    def wait_until(
        self,
        condition: Callable[[], Any],
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> int:
        return self.commands.wait_until(
            condition,
            timeout=timeout,
            poll_interval=poll_interval,
            cancel_event=cancel_event,
        )


__all__ = [
    "FluentSession",
    "FluentExpect",
]
