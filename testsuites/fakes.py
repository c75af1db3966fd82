"""
In-memory document collaborator for unit tests.

FakeDocument maps selectors to FakeElement lists and counts every query so
tests can assert on lookup timing.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from fluent_automation.framework.document import DocumentQuery
from fluent_automation.framework.element import ElementHandle, ElementKind


class FakeElement:
    """Mutable stand-in for a DOM node."""

    def __init__(
        self,
        kind: ElementKind = ElementKind.GENERIC,
        text: str = "",
        value: str = "",
        attributes: Optional[Dict[str, str]] = None,
        options: Optional[Sequence[Tuple[str, str]]] = None,
        selected: Optional[Sequence[int]] = None,
        on_click: Optional[Callable[["FakeElement"], None]] = None,
    ):
        self.kind = kind
        self.text = text
        self.value = value
        self.attributes = dict(attributes or {})
        # (value, text) pairs
        self.options = list(options or [])
        self.selected = list(selected or [])
        self.on_click = on_click
        self.clicks = 0
        self.hovers = 0

    @classmethod
    def select(cls, options: Sequence[str], selected: int = 0, multiple: bool = False,
               selected_many: Sequence[int] = ()) -> "FakeElement":
        """Select whose option values are the lower-cased option texts."""
        kind = ElementKind.MULTI_SELECT if multiple else ElementKind.SELECT
        chosen = list(selected_many) if multiple else [selected]
        return cls(kind=kind, options=[(o.lower(), o) for o in options], selected=chosen)

    def snapshot(self) -> ElementHandle:
        if self.kind is ElementKind.SELECT:
            value, text = self.options[self.selected[0]] if self.selected else ("", "")
            return ElementHandle(kind=self.kind, text=text, value=value, attributes=self.attributes)
        if self.kind is ElementKind.MULTI_SELECT:
            chosen = [self.options[i] for i in self.selected]
            return ElementHandle(
                kind=self.kind,
                attributes=self.attributes,
                selected_option_texts=tuple(t for _, t in chosen),
                selected_option_values=tuple(v for v, _ in chosen),
            )
        return ElementHandle(kind=self.kind, text=self.text, value=self.value, attributes=self.attributes)


class FakeDocument(DocumentQuery):
    """
    Document collaborator backed by a selector -> elements dict.

    Attributes:
        queries: Number of query_single/query_multiple calls
        fault: When set, raised by every query (simulates driver failures)
        session_lost: Value reported by is_session_lost()
    """

    def __init__(self, url: str = "about:blank"):
        self.elements: Dict[str, List[FakeElement]] = {}
        self.url = url
        self.queries = 0
        self.fault: Optional[Exception] = None
        self.session_lost = False

    def add(self, selector: str, *elements: FakeElement) -> FakeElement:
        self.elements.setdefault(selector, []).extend(elements)
        return elements[0] if elements else None

    def _query(self, selector: str) -> List[FakeElement]:
        self.queries += 1
        if self.fault is not None:
            raise self.fault
        return self.elements.get(selector, [])

    # Queries

    def query_single(self, selector: str) -> Optional[FakeElement]:
        found = self._query(selector)
        return found[0] if found else None

    def query_multiple(self, selector: str) -> List[FakeElement]:
        return list(self._query(selector))

    def current_url(self) -> str:
        if self.fault is not None:
            raise self.fault
        return self.url

    def to_handle(self, native: FakeElement) -> ElementHandle:
        return native.snapshot()

    # Actions

    def navigate(self, url: str) -> None:
        self.url = url

    def click(self, native: FakeElement) -> None:
        native.clicks += 1
        if native.on_click:
            native.on_click(native)

    def hover(self, native: FakeElement) -> None:
        native.hovers += 1

    def fill(self, native: FakeElement, text: str) -> None:
        native.text = text
        native.value = text

    def select_option(self, native: FakeElement, option: Union[str, int, List[str]]) -> None:
        if isinstance(option, int):
            native.selected = [option]
            return
        wanted = [option] if isinstance(option, str) else list(option)
        matches = [
            i for i, (value, text) in enumerate(native.options)
            if value in wanted or text in wanted
        ]
        if not matches:
            raise RuntimeError(f"No option matching {option!r}")
        native.selected = matches if native.kind is ElementKind.MULTI_SELECT else matches[:1]

    def is_session_lost(self, error: BaseException) -> bool:
        return self.session_lost
