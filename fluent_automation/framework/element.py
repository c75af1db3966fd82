"""
================================================================================
Element Handle
================================================================================

Immutable snapshot of a queried document node's observable state.

A handle is produced by the document adapter every time a lazy accessor is
resolved; it is never cached, so a handle cannot go stale.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from .exceptions import InvalidArgumentError


class ElementKind(str, Enum):
    """Variant tag decided once by the native-to-handle adapter."""
    GENERIC = "generic"
    TEXT = "text"
    SELECT = "select"
    MULTI_SELECT = "multi_select"


@dataclass(frozen=True, eq=False)
class ElementHandle:
    """
    Snapshot of a single document node.

    Attributes:
        kind: Element variant
        text: Rendered text, input text, or selected option text (single select)
        value: Value attribute, input value, or selected option value (single select)
        attributes: Attribute name -> value
        selected_option_texts: Selected option texts (multi select)
        selected_option_values: Selected option values, index-aligned with texts
    """
    kind: ElementKind = ElementKind.GENERIC
    text: str = ""
    value: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    selected_option_texts: Tuple[str, ...] = ()
    selected_option_values: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.selected_option_texts) != len(self.selected_option_values):
            raise InvalidArgumentError(
                f"Selected option texts ({len(self.selected_option_texts)}) and "
                f"values ({len(self.selected_option_values)}) must be index-aligned"
            )
        # Freeze the mutable inputs
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "selected_option_texts", tuple(self.selected_option_texts))
        object.__setattr__(self, "selected_option_values", tuple(self.selected_option_values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ElementHandle):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.text == other.text
            and self.value == other.value
            and dict(self.attributes) == dict(other.attributes)
            and self.selected_option_texts == other.selected_option_texts
            and self.selected_option_values == other.selected_option_values
        )

    __hash__ = None

    def attribute(self, name: str) -> str:
        """Get attribute value; missing attributes yield an empty string."""
        return self.attributes.get(name) or ""

    @property
    def is_select(self) -> bool:
        return self.kind in (ElementKind.SELECT, ElementKind.MULTI_SELECT)

    @property
    def is_multiple_select(self) -> bool:
        return self.kind is ElementKind.MULTI_SELECT

    @property
    def is_text(self) -> bool:
        return self.kind is ElementKind.TEXT


__all__ = [
    "ElementKind",
    "ElementHandle",
]
