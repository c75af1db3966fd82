"""
================================================================================
Playwright Document
================================================================================

DocumentQuery implementation over a Playwright (sync API) page.

Features:
    - CSS/text/xpath selectors handled by Playwright's selector engine
    - One-round-trip DOM snapshot into an ElementHandle
    - Element kind decided from tag, input type and `multiple`
    - Closed page/browser errors classified as session loss

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from loguru import logger
from playwright.sync_api import ElementHandle as NativeElement
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .document import DocumentQuery
from .element import ElementHandle, ElementKind


# Collects everything the expectation engine needs in a single evaluate()
SNAPSHOT_SCRIPT = """
el => {
    const attributes = {};
    for (const attr of el.attributes) {
        attributes[attr.name] = attr.value;
    }
    const snapshot = {
        tag: el.tagName.toLowerCase(),
        type: (el.getAttribute('type') || '').toLowerCase(),
        multiple: !!el.multiple,
        attributes: attributes,
        text: (el.innerText !== undefined ? el.innerText : el.textContent) || '',
        value: typeof el.value === 'string' ? el.value : (el.getAttribute('value') || ''),
        selectedTexts: [],
        selectedValues: [],
    };
    if (snapshot.tag === 'select') {
        const selected = Array.from(el.selectedOptions);
        snapshot.selectedTexts = selected.map(o => o.text);
        snapshot.selectedValues = selected.map(o => o.value);
    }
    return snapshot;
}
"""

# Input types that do not hold user-entered text
NON_TEXT_INPUT_TYPES = frozenset({
    "button", "checkbox", "file", "hidden", "image", "radio", "reset", "submit",
})

SESSION_LOST_MARKERS = (
    "has been closed",
    "Target closed",
    "Browser closed",
    "Connection closed",
)


def element_kind(snapshot: Dict[str, Any]) -> ElementKind:
    """Decide the element variant from a DOM snapshot."""
    tag = snapshot.get("tag", "")
    if tag == "select":
        return ElementKind.MULTI_SELECT if snapshot.get("multiple") else ElementKind.SELECT
    if tag == "textarea":
        return ElementKind.TEXT
    if tag == "input" and snapshot.get("type", "") not in NON_TEXT_INPUT_TYPES:
        return ElementKind.TEXT
    return ElementKind.GENERIC


def handle_from_snapshot(snapshot: Dict[str, Any]) -> ElementHandle:
    """Build an ElementHandle from the dict produced by SNAPSHOT_SCRIPT."""
    kind = element_kind(snapshot)
    attributes = {k: str(v) for k, v in (snapshot.get("attributes") or {}).items()}

    if kind is ElementKind.TEXT:
        value = snapshot.get("value") or ""
        return ElementHandle(kind=kind, text=value, value=value, attributes=attributes)

    if kind in (ElementKind.SELECT, ElementKind.MULTI_SELECT):
        texts = [str(t).strip() for t in snapshot.get("selectedTexts") or []]
        values = [str(v) for v in snapshot.get("selectedValues") or []]
        if kind is ElementKind.SELECT:
            return ElementHandle(
                kind=kind,
                text=texts[0] if texts else "",
                value=values[0] if values else "",
                attributes=attributes,
            )
        return ElementHandle(
            kind=kind,
            text=", ".join(texts),
            value=", ".join(values),
            attributes=attributes,
            selected_option_texts=tuple(texts),
            selected_option_values=tuple(values),
        )

    return ElementHandle(
        kind=kind,
        text=(snapshot.get("text") or "").strip(),
        value=snapshot.get("value") or "",
        attributes=attributes,
    )


class PlaywrightDocument(DocumentQuery):
    """
    Document collaborator backed by a Playwright Page.

    Usage:
        with sync_playwright() as p:
            page = p.chromium.launch().new_page()
            document = PlaywrightDocument(page)
            I = FluentSession(document)
    """

    def __init__(self, page: Page, action_timeout: Optional[float] = None):
        """
        Args:
            page: Playwright Page (sync API)
            action_timeout: Per-action timeout in milliseconds
                (Playwright default when None)
        """
        self.page = page
        self.action_timeout = action_timeout

    # =========================================================================
    # Queries
    # =========================================================================

    def query_single(self, selector: str) -> Optional[NativeElement]:
        return self.page.query_selector(selector)

    def query_multiple(self, selector: str) -> List[NativeElement]:
        return self.page.query_selector_all(selector)

    def current_url(self) -> str:
        return self.page.url

    def to_handle(self, native: NativeElement) -> ElementHandle:
        return handle_from_snapshot(native.evaluate(SNAPSHOT_SCRIPT))

    # =========================================================================
    # Actions
    # =========================================================================

    def navigate(self, url: str) -> None:
        self.page.goto(url)
        logger.debug(f"Navigated to: {self.page.url}")

    def click(self, native: NativeElement) -> None:
        native.click(timeout=self.action_timeout)

    def hover(self, native: NativeElement) -> None:
        native.hover(timeout=self.action_timeout)

    def fill(self, native: NativeElement, text: str) -> None:
        native.fill(text, timeout=self.action_timeout)

    def select_option(self, native: NativeElement, option: Union[str, int, List[str]]) -> None:
        if isinstance(option, int):
            native.select_option(index=option, timeout=self.action_timeout)
        else:
            # Strings match either the option value or its label
            native.select_option(option, timeout=self.action_timeout)

    def is_session_lost(self, error: BaseException) -> bool:
        if not isinstance(error, PlaywrightError):
            return False
        if self.page.is_closed():
            return True
        message = str(error)
        return any(marker in message for marker in SESSION_LOST_MARKERS)


__all__ = [
    "PlaywrightDocument",
    "SNAPSHOT_SCRIPT",
    "element_kind",
    "handle_from_snapshot",
]
