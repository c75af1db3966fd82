"""
================================================================================
Browser Manager
================================================================================

Driver factory: turns a CapabilityRecord into a live Playwright session.

Features:
    - Logical browser -> Playwright engine mapping
    - Capability keys mapped onto launch and context options
    - Remote sessions over a Playwright server (ws://) or Selenium Grid (http://)
    - Context manager lifecycle

This is bootstrap glue; the command core never calls it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from loguru import logger
from playwright.sync_api import (
    Browser as PlaywrightBrowser,
    BrowserContext,
    Page,
    Playwright,
    sync_playwright,
)

from ..common.global_config import get_config, to_bool
from .capabilities import Browser, CapabilityRecord, resolve
from .command_provider import FluentSettings
from .exceptions import UnsupportedBrowserError
from .fluent import FluentSession
from .playwright_document import PlaywrightDocument


# Browsers Playwright can launch on this machine
LOCAL_ENGINES: Dict[Browser, str] = {
    Browser.CHROME: "chromium",
    Browser.HEADLESS_CHROME: "chromium",
    Browser.FIREFOX: "firefox",
    Browser.WEBKIT: "webkit",
}

# Remote-only targets reachable through a remote endpoint
REMOTE_ENGINES: Dict[Browser, str] = {
    **LOCAL_ENGINES,
    Browser.IPHONE: "webkit",
    Browser.IPAD: "webkit",
    Browser.ANDROID: "chromium",
}

# Capability name -> launch option
LAUNCH_OPTION_KEYS: Dict[str, str] = {
    "headless": "headless",
    "args": "args",
    "channel": "channel",
    "slowMo": "slow_mo",
}

# Capability name -> context option
CONTEXT_OPTION_KEYS: Dict[str, str] = {
    "acceptInsecureCerts": "ignore_https_errors",
    "viewport": "viewport",
    "locale": "locale",
    "userAgent": "user_agent",
}


def launch_options(record: CapabilityRecord, headless: bool = True) -> Dict[str, Any]:
    """Map capability keys onto BrowserType.launch() keyword arguments."""
    options: Dict[str, Any] = {"headless": headless}
    for capability, option in LAUNCH_OPTION_KEYS.items():
        if capability in record.capabilities:
            options[option] = record.capabilities[capability]
    if "headless" in options:
        options["headless"] = to_bool(options["headless"])
    return options


def context_options(
    record: CapabilityRecord,
    devices: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Map capability keys onto Browser.new_context() keyword arguments."""
    options: Dict[str, Any] = {}
    device_name = record.get("deviceName")
    if device_name and devices is not None and device_name in devices:
        options.update(devices[device_name])
    for capability, option in CONTEXT_OPTION_KEYS.items():
        if capability in record.capabilities:
            options[option] = record.capabilities[capability]
    return options


class BrowserManager:
    """
    Manages one browser session for a fluent test.

    Usage:
        record = resolve("firefox", {"viewport": {"width": 1280, "height": 720}})
        with BrowserManager(record) as manager:
            I = manager.new_session()
            I.open("https://example.com")
    """

    def __init__(
        self,
        record: CapabilityRecord,
        remote_url: Optional[str] = None,
        headless: bool = True,
    ):
        """
        Initialize browser manager.

        Args:
            record: Resolved capabilities for the target browser
            remote_url: ws:// Playwright server or http:// Selenium Grid hub
            headless: Headless default when the record does not say otherwise
        """
        self.record = record
        self.remote_url = remote_url
        self.headless = headless

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[PlaywrightBrowser] = None
        self._contexts: list[BrowserContext] = []

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def engine(self) -> str:
        """Playwright engine name for the record's browser."""
        engines = REMOTE_ENGINES if self.remote_url else LOCAL_ENGINES
        engine = engines.get(self.record.browser)
        if engine is None:
            where = "remotely" if self.remote_url else "locally without a remote_url"
            raise UnsupportedBrowserError(
                self.record.browser.value,
                f"cannot be driven by Playwright {where}",
            )
        return engine

    @property
    def uses_grid(self) -> bool:
        return bool(self.remote_url) and self.remote_url.startswith(("http://", "https://"))

    def start(self) -> None:
        """
        Start Playwright and launch or connect to the browser.

        A failed launch stops the Playwright driver before the error propagates.
        """
        engine = self.engine
        if self.uses_grid and engine != "chromium":
            raise UnsupportedBrowserError(
                self.record.browser.value, "is not supported through Selenium Grid"
            )

        if self.uses_grid:
            self._playwright = self._start_with_grid_env()
        else:
            self._playwright = sync_playwright().start()

        try:
            self._launch(engine)
        except BaseException:
            self.close()
            raise

    def _launch(self, engine: str) -> None:
        launcher = getattr(self._playwright, engine)
        if self.remote_url and not self.uses_grid:
            self._browser = launcher.connect(self.remote_url)
            logger.debug(f"Connected to remote {engine}: {self.remote_url}")
        else:
            options = launch_options(self.record, headless=self.headless)
            self._browser = launcher.launch(**options)
            logger.debug(
                f"Browser started: {self.record.browser.value} ({engine}, "
                f"headless={options['headless']})"
            )

    def _start_with_grid_env(self) -> Playwright:
        # The Playwright driver reads these when it is spawned
        saved = {k: os.environ.get(k) for k in ("SELENIUM_REMOTE_URL", "SELENIUM_REMOTE_CAPABILITIES")}
        os.environ["SELENIUM_REMOTE_URL"] = self.remote_url
        os.environ["SELENIUM_REMOTE_CAPABILITIES"] = json.dumps(self.record.to_dict(), default=str)
        try:
            return sync_playwright().start()
        finally:
            for key, value in saved.items():
                if value is None:
                    os.environ.pop(key, None)
                else:
                    os.environ[key] = value

    def close(self) -> None:
        """Close all contexts and the browser."""
        for context in self._contexts:
            try:
                context.close()
            except Exception as e:
                logger.debug(f"Ignoring context close failure: {e}")
        self._contexts.clear()

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    def new_page(self) -> Page:
        """Create a page in a fresh, isolated context."""
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context = self._browser.new_context(**context_options(self.record, self._playwright.devices))
        self._contexts.append(context)
        return context.new_page()

    def new_session(self, settings: Optional[FluentSettings] = None) -> FluentSession:
        """Create a page and wrap it in a FluentSession."""
        return FluentSession(PlaywrightDocument(self.new_page()), settings)

    @property
    def browser(self) -> Optional[PlaywrightBrowser]:
        return self._browser


# =============================================================================
# Bootstrap
# =============================================================================

def bootstrap(
    browser: Optional[Union[Browser, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    remote_url: Optional[str] = None,
    headless: Optional[bool] = None,
) -> Tuple[BrowserManager, FluentSession]:
    """
    Build a started BrowserManager and a FluentSession from configuration.

    Explicit arguments win over the `browser.*` configuration section.

    Returns:
        Tuple of (BrowserManager, FluentSession); close the manager when done
    """
    browser = browser or get_config("browser.name", Browser.CHROME.value)
    capabilities = dict(get_config("browser.capabilities", {}) or {})
    capabilities.update(overrides or {})
    record = resolve(browser, capabilities)

    manager = BrowserManager(
        record,
        remote_url=remote_url or get_config("browser.remote_url"),
        headless=to_bool(get_config("browser.headless", True)) if headless is None else headless,
    )
    try:
        manager.start()
        return manager, manager.new_session()
    except Exception:
        manager.close()
        raise


__all__ = [
    "BrowserManager",
    "bootstrap",
    "context_options",
    "launch_options",
]
