"""
================================================================================
Capability Resolver
================================================================================

Maps a logical browser identifier to a negotiated capability record.

Features:
    - Pure lookup table of per-browser defaults (no I/O)
    - Caller overrides applied key-by-key after defaults
    - `javascriptEnabled` always forced on

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from loguru import logger

from .exceptions import UnsupportedBrowserError


class Browser(str, Enum):
    """Supported logical browsers."""
    CHROME = "chrome"
    HEADLESS_CHROME = "headless_chrome"
    FIREFOX = "firefox"
    WEBKIT = "webkit"
    INTERNET_EXPLORER = "internet_explorer"
    INTERNET_EXPLORER_64 = "internet_explorer_64"
    PHANTOM_JS = "phantom_js"
    # Remote-only mobile targets
    IPHONE = "iphone"
    IPAD = "ipad"
    ANDROID = "android"


# Default capability sets
# Format: browser -> {capability_name: value}
DEFAULT_CAPABILITIES: Dict[Browser, Dict[str, Any]] = {
    Browser.CHROME: {
        "browserName": "chrome",
        "version": "",
        "platform": "ANY",
    },
    Browser.HEADLESS_CHROME: {
        "browserName": "chrome",
        "version": "",
        "platform": "ANY",
        "headless": True,
        "args": ["--disable-gpu"],
    },
    Browser.FIREFOX: {
        "browserName": "firefox",
        "version": "",
        "platform": "ANY",
        "acceptInsecureCerts": True,
    },
    Browser.WEBKIT: {
        "browserName": "webkit",
        "version": "",
        "platform": "ANY",
    },
    Browser.INTERNET_EXPLORER: {
        "browserName": "internet explorer",
        "version": "",
        "platform": "WINDOWS",
        "se:ieOptions": {"ie.architecture": "x86"},
    },
    Browser.INTERNET_EXPLORER_64: {
        "browserName": "internet explorer",
        "version": "",
        "platform": "WINDOWS",
        "se:ieOptions": {"ie.architecture": "x64"},
    },
    Browser.PHANTOM_JS: {
        "browserName": "phantomjs",
        "version": "",
        "platform": "ANY",
        "headless": True,
    },
    Browser.IPHONE: {
        "browserName": "safari",
        "platformName": "iOS",
        "deviceName": "iPhone 13",
    },
    Browser.IPAD: {
        "browserName": "safari",
        "platformName": "iOS",
        "deviceName": "iPad (gen 7)",
    },
    Browser.ANDROID: {
        "browserName": "chrome",
        "platformName": "Android",
        "deviceName": "Pixel 5",
    },
}


@dataclass(frozen=True)
class CapabilityRecord:
    """
    Immutable capability set for one bootstrap call.

    Attributes:
        browser: Logical browser identifier
        capabilities: Read-only capability name -> value mapping
    """
    browser: Browser
    capabilities: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "capabilities", MappingProxyType(dict(self.capabilities)))

    def get(self, name: str, default: Any = None) -> Any:
        return self.capabilities.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        """Plain mutable copy, e.g. for JSON serialization."""
        return dict(self.capabilities)


def parse_browser(browser: Union[Browser, str]) -> Browser:
    """
    Normalize a browser identifier.

    Accepts a Browser member, its value ("internet_explorer_64") or its
    name in any case ("INTERNET_EXPLORER_64", "Chrome").

    Raises:
        UnsupportedBrowserError: When the identifier is not recognized
    """
    if isinstance(browser, Browser):
        return browser
    if isinstance(browser, str):
        key = browser.strip().lower().replace("-", "_").replace(" ", "_")
        for member in Browser:
            if key in (member.value, member.name.lower()):
                return member
    raise UnsupportedBrowserError(browser)


def resolve(
    browser: Union[Browser, str],
    overrides: Optional[Mapping[str, Any]] = None,
) -> CapabilityRecord:
    """
    Resolve a logical browser into a capability record.

    Args:
        browser: Browser member or identifier string
        overrides: Capability values that win over the defaults.
            Unknown keys are accepted verbatim.

    Returns:
        CapabilityRecord with `javascriptEnabled` set to True

    Raises:
        UnsupportedBrowserError: When browser is not recognized
    """
    selected = parse_browser(browser)
    if selected not in DEFAULT_CAPABILITIES:
        raise UnsupportedBrowserError(browser)

    capabilities = copy.deepcopy(DEFAULT_CAPABILITIES[selected])
    for name, value in (overrides or {}).items():
        capabilities[name] = value

    capabilities["javascriptEnabled"] = True

    logger.debug(
        f"Resolved capabilities for {selected.value}: "
        f"{len(capabilities)} keys ({len(overrides or {})} overrides)"
    )
    return CapabilityRecord(browser=selected, capabilities=capabilities)


__all__ = [
    "Browser",
    "CapabilityRecord",
    "DEFAULT_CAPABILITIES",
    "parse_browser",
    "resolve",
]
