"""
================================================================================
Expect Provider
================================================================================

Expectation engine of the fluent DSL.

Evaluates text/value/count/css-class/url/boolean/throws assertions against
element snapshots or arbitrary predicates. Every check runs through the
command provider's `act` fault boundary, so driver faults and assertion
failures share one discipline.

Key Features:
- Uniform text/value matching across plain, text, select and multi-select
  elements ("any selected option" semantics for multi selects)
- Exact (case-insensitive) or predicate matching
- Structured failures (context, expected, actual) for readable reports
- Allure step per expectation, JSON attachment on failure

================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import allure
from loguru import logger

from .command_provider import CommandProvider, ElementsTarget, ElementTarget
from .element import ElementHandle
from .exceptions import ElementNotFoundError, ExpectationFailedError, InvalidArgumentError
from .wait_helpers import describe


Matcher = Union[str, Callable[[str], bool]]


# ================================================================================
# Outcome capture
# ================================================================================

@dataclass(frozen=True)
class Outcome:
    """Result of running an action: either completed or failed with an error."""
    error: Optional[Exception] = None

    @property
    def completed(self) -> bool:
        return self.error is None

    @property
    def expectation_failed(self) -> bool:
        return isinstance(self.error, ExpectationFailedError)


def capture(action: Callable[[], Any]) -> Outcome:
    """Run action and return its Outcome instead of raising."""
    try:
        action()
    except Exception as e:
        return Outcome(error=e)
    return Outcome()


# ================================================================================
# Matching helpers
# ================================================================================

def is_text_match(actual: Optional[str], expected: Optional[str]) -> bool:
    """Case-insensitive, culture-invariant string equality."""
    return (actual or "").casefold() == (expected or "").casefold()


def has_css_class(class_name: str, class_attribute: str) -> bool:
    """
    Check whether class_name is one of the tokens of a class attribute.

    A leading '.' on class_name is ignored (".active" == "active").
    """
    class_name = class_name.strip().lstrip(".")
    class_attribute = class_attribute.strip()

    if any(ch.isspace() for ch in class_attribute):
        return class_name in (token.strip() for token in class_attribute.split() if token.strip())
    return class_name == class_attribute


def _compile(expected: Matcher) -> Tuple[Callable[[str], bool], str, str]:
    """Return (match function, expected description, verb phrase)."""
    if callable(expected):
        return (lambda actual: bool(expected(actual))), describe(expected), "match expression"
    if isinstance(expected, str):
        return (lambda actual: is_text_match(actual, expected)), expected, "be"
    raise InvalidArgumentError(
        f"Expected a string or a predicate, got {type(expected).__name__}"
    )


def _label(context: Optional[str]) -> str:
    return f" [{context}]" if context else ""


# ================================================================================
# Expect Provider
# ================================================================================

class ExpectProvider:
    """
    Assertion operations over a CommandProvider.

    Targets are either a selector string (resolved lazily through
    `commands.find` / `commands.find_all`) or an accessor.

    Example:
        expect = ExpectProvider(commands)
        expect.text("#status", "done")
        expect.text("select#vehicle", lambda t: t.startswith("Motor"))
        expect.count("li.item", 3)
        expect.throws(lambda: expect.text("#status", "pending"))
    """

    def __init__(self, commands: CommandProvider):
        """
        Initialize the expect provider.

        Args:
            commands: Command provider used for element lookup and `act`
        """
        self.commands = commands

    # ============================================================
    # Element expectations
    # ============================================================

    def count(self, target: ElementsTarget, expected: int) -> None:
        """Expect the number of matching elements to equal expected."""
        accessor, context = self._elements(target)

        def check() -> None:
            actual = len(accessor())
            if actual != expected:
                where = f"matching selector [{context}]" if context else "in collection"
                raise ExpectationFailedError(
                    f"Expected count of elements {where} to be [{expected}] "
                    f"but instead it was [{actual}].",
                    context=context,
                    expected=expected,
                    actual=actual,
                )

        self._run(f"Expect count {expected} of {context or 'collection'}", check)

    def css_class(self, target: ElementTarget, class_name: str) -> None:
        """Expect the element's class attribute to include class_name."""
        if not class_name or not class_name.strip().lstrip("."):
            raise InvalidArgumentError("class_name must not be empty")
        accessor, context = self._element(target)

        def check() -> None:
            class_attribute = accessor().attribute("class").strip()
            if not has_css_class(class_name, class_attribute):
                raise ExpectationFailedError(
                    f"Expected element{_label(context)} to include CSS class [{class_name}] "
                    f"but current class attribute is [{class_attribute}].",
                    context=context,
                    expected=class_name,
                    actual=class_attribute,
                )

        self._run(f"Expect CSS class {class_name} on {context or 'element'}", check)

    def text(self, target: ElementTarget, expected: Matcher) -> None:
        """Expect element text (or selected option text) to match."""
        self._match(target, expected, "text")

    def value(self, target: ElementTarget, expected: Matcher) -> None:
        """Expect element value (or selected option value) to match."""
        self._match(target, expected, "value")

    def exists(self, target: ElementTarget) -> None:
        """
        Expect at least one element to match.

        A selector matching nothing is an expectation failure; driver faults
        still surface as CommandExecutionError.
        """
        accessor, context = self._element(target)

        def check() -> None:
            try:
                accessor()
            except ElementNotFoundError as e:
                raise ExpectationFailedError(
                    f"Expected element matching selector{_label(context)} to exist.",
                    context=context,
                    expected="element exists",
                    actual="not found",
                ) from e

        self._run(f"Expect exists: {context or 'element'}", check)

    # ============================================================
    # Document and boolean expectations
    # ============================================================

    def url(self, expected: Union[str, Callable[[str], bool]]) -> None:
        """Expect the current URL to equal expected (case-insensitive) or satisfy a predicate."""
        if callable(expected):
            description = describe(expected)

            def check() -> None:
                actual = self.commands.url
                if not expected(actual):
                    raise ExpectationFailedError(
                        f"Expected URL to match expression [{description}] "
                        f"but it was actually [{actual}].",
                        context="url",
                        expected=description,
                        actual=actual,
                    )
        else:
            description = str(expected)

            def check() -> None:
                actual = self.commands.url
                if not is_text_match(actual, description):
                    raise ExpectationFailedError(
                        f"Expected URL to match [{description}] but it was actually [{actual}].",
                        context="url",
                        expected=description,
                        actual=actual,
                    )

        self._run(f"Expect URL: {description}", check)

    def true(self, predicate: Callable[[], bool]) -> None:
        """Expect a zero-argument predicate to return True."""
        self._polarity(predicate, True)

    def false(self, predicate: Callable[[], bool]) -> None:
        """Expect a zero-argument predicate to return False."""
        self._polarity(predicate, False)

    def throws(self, action: Callable[[], Any]) -> None:
        """
        Expect action to fail with an ExpectationFailedError.

        Completing normally, or failing with any other error kind, is
        itself an expectation failure.
        """
        description = describe(action)

        def check() -> None:
            outcome = capture(action)
            if outcome.expectation_failed:
                logger.debug(f"Expected failure observed: {outcome.error}")
                return
            if outcome.completed:
                actual = "completed without error"
            else:
                actual = f"{type(outcome.error).__name__}: {outcome.error}"
            raise ExpectationFailedError(
                f"Expected expression [{description}] to raise an expectation failure "
                f"but it {'' if outcome.completed else 'raised '}{actual}.",
                context=description,
                expected=ExpectationFailedError.__name__,
                actual=actual,
            )

        self._run(f"Expect throws: {description}", check)

    # ============================================================
    # Internals
    # ============================================================

    def _run(self, title: str, check: Callable[[], None]) -> None:
        with allure.step(title):
            try:
                self.commands.act(check)
            except ExpectationFailedError as e:
                logger.debug(f"❌ FAIL: {e}")
                allure.attach(
                    json.dumps(e.to_dict(), indent=2),
                    name=f"Expectation: {title}",
                    attachment_type=allure.attachment_type.JSON,
                )
                raise
            logger.debug(f"✅ PASS: {title}")

    def _element(self, target: ElementTarget) -> Tuple[Callable[[], ElementHandle], Optional[str]]:
        if isinstance(target, str):
            return self.commands.find(target), target
        if callable(target):
            return target, getattr(target, "selector", None)
        raise InvalidArgumentError(f"Expected a selector or accessor, got {type(target).__name__}")

    def _elements(self, target: ElementsTarget) -> Tuple[Callable[[], List[ElementHandle]], Optional[str]]:
        if isinstance(target, str):
            return self.commands.find_all(target), target
        if callable(target):
            return target, getattr(target, "selector", None)
        raise InvalidArgumentError(f"Expected a selector or accessor, got {type(target).__name__}")

    def _polarity(self, predicate: Callable[[], bool], expected: bool) -> None:
        description = describe(predicate)

        def check() -> None:
            actual = bool(predicate())
            if actual is not expected:
                raise ExpectationFailedError(
                    f"Expected expression [{description}] to return {str(expected).lower()} "
                    f"but it returned [{actual}].",
                    context=description,
                    expected=expected,
                    actual=actual,
                )

        self._run(f"Expect {str(expected).lower()}: {description}", check)

    def _match(self, target: ElementTarget, expected: Matcher, attribute: str) -> None:
        matches, expected_description, verb = _compile(expected)
        accessor, context = self._element(target)

        def check() -> None:
            self._match_handle(accessor(), matches, attribute, context, expected_description, verb)

        self._run(f"Expect {attribute} [{expected_description}] in {context or 'element'}", check)

    @staticmethod
    def _match_handle(
        handle: ElementHandle,
        matches: Callable[[str], bool],
        attribute: str,
        context: Optional[str],
        expected: str,
        verb: str,
    ) -> None:
        where = _label(context)

        if handle.is_multiple_select:
            candidates: Sequence[str] = (
                handle.selected_option_texts if attribute == "text" else handle.selected_option_values
            )
            if any(matches(candidate) for candidate in candidates):
                return
            joined = ", ".join(candidates)
            raise ExpectationFailedError(
                f"Expected SelectElement{where} selected options to have at least one option "
                f"with {attribute} to {verb} [{expected}]. "
                f"Selected option {attribute} values include [{joined}].",
                context=context,
                expected=expected,
                actual=list(candidates),
            )

        actual = handle.text if attribute == "text" else handle.value
        if matches(actual):
            return

        if handle.is_select:
            subject = f"SelectElement{where} selected option {attribute}"
        elif handle.is_text:
            subject = f"TextElement{where} {attribute}"
        else:
            subject = f"DOM Element{where} {attribute}"
        raise ExpectationFailedError(
            f"Expected {subject} to {verb} [{expected}] but it was actually [{actual}].",
            context=context,
            expected=expected,
            actual=actual,
        )


__all__ = [
    "ExpectProvider",
    "Outcome",
    "capture",
    "has_css_class",
    "is_text_match",
]
