import pytest

from fluent_automation.framework.capabilities import (
    DEFAULT_CAPABILITIES,
    Browser,
    CapabilityRecord,
    parse_browser,
    resolve,
)
from fluent_automation.framework.exceptions import UnsupportedBrowserError


@pytest.mark.parametrize("browser", list(Browser))
def test_every_browser_has_javascript_enabled(browser):
    record = resolve(browser)
    assert isinstance(record, CapabilityRecord)
    assert record.browser is browser
    assert record.capabilities["javascriptEnabled"] is True


def test_overrides_win_over_defaults():
    overrides = {"browserName": "chromium", "platform": "LINUX", "custom:flag": 42}
    record = resolve(Browser.CHROME, overrides)
    for key, value in overrides.items():
        assert record.capabilities[key] == value
    assert record.capabilities["version"] == ""


def test_javascript_enabled_cannot_be_overridden():
    record = resolve(Browser.FIREFOX, {"javascriptEnabled": False})
    assert record.capabilities["javascriptEnabled"] is True


def test_unknown_browser_names_the_identifier():
    with pytest.raises(UnsupportedBrowserError) as exc_info:
        resolve("netscape_navigator")
    assert "netscape_navigator" in str(exc_info.value)
    assert exc_info.value.browser == "netscape_navigator"


@pytest.mark.parametrize(
    "identifier, expected",
    [
        ("chrome", Browser.CHROME),
        ("Chrome", Browser.CHROME),
        ("INTERNET_EXPLORER_64", Browser.INTERNET_EXPLORER_64),
        ("internet-explorer", Browser.INTERNET_EXPLORER),
        ("headless chrome", Browser.HEADLESS_CHROME),
    ],
)
def test_parse_browser_accepts_names_and_values(identifier, expected):
    assert parse_browser(identifier) is expected


def test_record_is_read_only():
    record = resolve(Browser.CHROME)
    with pytest.raises(TypeError):
        record.capabilities["browserName"] = "firefox"


def test_resolution_does_not_mutate_defaults():
    record = resolve(Browser.HEADLESS_CHROME)
    record.capabilities["args"].append("--mutated")
    assert "--mutated" not in DEFAULT_CAPABILITIES[Browser.HEADLESS_CHROME]["args"]
    assert "javascriptEnabled" not in DEFAULT_CAPABILITIES[Browser.HEADLESS_CHROME]


def test_records_are_independent():
    first = resolve(Browser.CHROME, {"a": 1})
    second = resolve(Browser.CHROME)
    assert "a" in first.capabilities
    assert "a" not in second.capabilities
    assert first.to_dict() is not first.capabilities
