"""
================================================================================
Document Collaborator Interface
================================================================================

Boundary contract between the command core and whatever drives the browser.

The core never talks to a driver directly. It asks a DocumentQuery for native
elements, converts them into ElementHandle snapshots through `to_handle`, and
forwards user actions (click, fill, select) back to it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Union

from .element import ElementHandle


class DocumentQuery(ABC):
    """
    Abstract document collaborator.

    Implementations must report "not found" by returning None from
    `query_single`, and report transport/session faults by raising.
    """

    # =========================================================================
    # Queries
    # =========================================================================

    @abstractmethod
    def query_single(self, selector: str) -> Optional[Any]:
        """Return the first native element matching selector, or None."""

    @abstractmethod
    def query_multiple(self, selector: str) -> Sequence[Any]:
        """Return all native elements matching selector (may be empty)."""

    @abstractmethod
    def current_url(self) -> str:
        """Return the current document location."""

    @abstractmethod
    def to_handle(self, native: Any) -> ElementHandle:
        """Convert a native element into an ElementHandle snapshot."""

    # =========================================================================
    # Actions
    # =========================================================================

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Load url in the current session."""

    @abstractmethod
    def click(self, native: Any) -> None:
        """Click a native element."""

    @abstractmethod
    def hover(self, native: Any) -> None:
        """Move the pointer over a native element."""

    @abstractmethod
    def fill(self, native: Any, text: str) -> None:
        """Replace the content of an editable native element."""

    @abstractmethod
    def select_option(self, native: Any, option: Union[str, int, List[str]]) -> None:
        """
        Select option(s) of a native select element.

        Args:
            native: Select element
            option: Value or label (str), zero-based index (int),
                or several values/labels (list) for multi selects
        """

    def is_session_lost(self, error: BaseException) -> bool:
        """
        Classify a collaborator error as fatal.

        Returns True when the session is gone (closed page, crashed browser)
        so that polling can stop instead of retrying until timeout.
        """
        return False


__all__ = [
    "DocumentQuery",
]
