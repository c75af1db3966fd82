"""
Fixtures for in-memory unit tests.
"""

import pytest
from loguru import logger

from fluent_automation.framework.command_provider import CommandProvider, FluentSettings
from fluent_automation.framework.expect_provider import ExpectProvider
from fluent_automation.framework.fluent import FluentSession
from testsuites.fakes import FakeDocument


@pytest.fixture
def settings() -> FluentSettings:
    """Short waits so polling tests stay fast."""
    return FluentSettings(wait_timeout=1.0, poll_interval=0.01)


@pytest.fixture
def document() -> FakeDocument:
    return FakeDocument(url="http://automation.local/forms")


@pytest.fixture
def commands(document: FakeDocument, settings: FluentSettings) -> CommandProvider:
    return CommandProvider(document, settings)


@pytest.fixture
def expect(commands: CommandProvider) -> ExpectProvider:
    return ExpectProvider(commands)


@pytest.fixture
def session(document: FakeDocument, settings: FluentSettings) -> FluentSession:
    return FluentSession(document, settings)


@pytest.fixture
def log_records():
    """Collect loguru records (all levels, TRACE included)."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)
