"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, fluent sessions, and test setup/teardown.

Key Features:
- One browser per test session, one isolated context per test
- Skips the UI suite when no browser can be launched on this machine
- Screenshot capture on failure

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Page

from fluent_automation.common.global_config import get_config, to_bool
from fluent_automation.framework.browser_manager import BrowserManager
from fluent_automation.framework.capabilities import resolve
from fluent_automation.framework.command_provider import FluentSettings
from fluent_automation.framework.fluent import FluentSession
from fluent_automation.framework.playwright_document import PlaywrightDocument


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def browser_manager() -> Generator[BrowserManager, None, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single browser for all tests in the session, reducing
    browser launch overhead.
    """
    record = resolve(
        get_config("browser.name", "chrome"),
        get_config("browser.capabilities", {}),
    )
    manager = BrowserManager(
        record,
        remote_url=get_config("browser.remote_url"),
        headless=to_bool(get_config("browser.headless", True)),
    )
    try:
        manager.start()
    except Exception as e:
        manager.close()
        pytest.skip(f"Browser unavailable: {e}")
    yield manager
    manager.close()


@pytest.fixture(scope="function")
def page(browser_manager: BrowserManager) -> Generator[Page, None, None]:
    """
    Function-scoped page fixture.

    Each page lives in its own browser context, providing isolation.
    """
    page = browser_manager.new_page()
    yield page
    if not page.is_closed():
        page.close()


@pytest.fixture(scope="function")
def I(page: Page) -> FluentSession:
    """Fluent session over the test's page, with short waits."""
    return FluentSession(PlaywrightDocument(page), FluentSettings(wait_timeout=5.0, poll_interval=0.05))


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Automatically takes a screenshot when a UI test fails and attaches
    it to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = getattr(item, "funcargs", {}).get("page")
        if page is not None and not page.is_closed():
            try:
                allure.attach(
                    page.screenshot(full_page=True),
                    name="failure_screenshot",
                    attachment_type=allure.attachment_type.PNG,
                )
            except Exception as e:
                # Log but don't fail if screenshot capture fails
                logger.warning(f"Failed to capture screenshot on failure: {e}")
