import pytest

from fluent_automation.framework.command_provider import CommandProvider, FluentSettings
from fluent_automation.framework.element import ElementKind
from fluent_automation.framework.exceptions import (
    CommandExecutionError,
    ElementNotFoundError,
    ExpectationFailedError,
    InvalidArgumentError,
)
from testsuites.fakes import FakeDocument, FakeElement


# ============================================================
# Lazy accessors
# ============================================================

def test_find_does_not_query_until_invoked(commands, document):
    document.add("#total", FakeElement(text="$197.70"))

    accessor = commands.find("#total")
    assert document.queries == 0

    handle = accessor()
    assert document.queries == 1
    assert handle.text == "$197.70"

    accessor.resolve()
    assert document.queries == 2


def test_find_raises_element_not_found_on_resolution(commands, document):
    accessor = commands.find("#missing")
    with pytest.raises(ElementNotFoundError) as exc_info:
        accessor()
    assert exc_info.value.selector == "#missing"


def test_find_all_empty_result_is_valid(commands, document):
    accessor = commands.find_all("li.item")
    assert document.queries == 0
    assert accessor() == []


def test_find_all_returns_handles_in_order(commands, document):
    document.add("li", FakeElement(text="one"), FakeElement(text="two"))
    assert [h.text for h in commands.find_all("li")()] == ["one", "two"]


def test_resolution_builds_fresh_equal_snapshots(commands, document):
    document.add("#qty", FakeElement(kind=ElementKind.TEXT, text="6", value="6", attributes={"name": "qty"}))
    accessor = commands.find("#qty")

    first, second = accessor(), accessor()
    assert first == second
    assert first is not second


def test_resolution_sees_document_changes(commands, document):
    node = document.add("#status", FakeElement(text="pending"))
    accessor = commands.find("#status")
    assert accessor().text == "pending"
    node.text = "done"
    assert accessor().text == "done"


# ============================================================
# act
# ============================================================

def test_act_returns_operation_result(commands):
    assert commands.act(lambda: 42) == 42


def test_act_wraps_driver_errors(commands):
    def operation():
        raise RuntimeError("stale element reference")

    with pytest.raises(CommandExecutionError) as exc_info:
        commands.act(operation)
    assert str(exc_info.value) == "stale element reference"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.fatal is False


def test_act_does_not_swallow_expectation_failures(commands):
    failure = ExpectationFailedError("nope")

    def operation():
        raise failure

    with pytest.raises(ExpectationFailedError) as exc_info:
        commands.act(operation)
    assert exc_info.value is failure


def test_act_marks_session_loss_fatal(commands, document):
    document.session_lost = True
    document.fault = RuntimeError("Target page, context or browser has been closed")
    with pytest.raises(CommandExecutionError) as exc_info:
        commands.act(commands.find("#x"))
    assert exc_info.value.fatal is True


def test_act_surfaces_query_faults(commands, document):
    document.fault = ConnectionError("session reset")
    with pytest.raises(CommandExecutionError, match="session reset"):
        commands.act(commands.find("#anything"))


# ============================================================
# wait_until
# ============================================================

def test_wait_until_uses_settings_defaults(document):
    commands = CommandProvider(document, FluentSettings(wait_timeout=0.1, poll_interval=0.01))
    with pytest.raises(ExpectationFailedError):
        commands.wait_until(lambda: False)


def test_wait_until_retries_element_not_found(commands, document):
    calls = []

    def condition():
        calls.append(1)
        if len(calls) == 2:
            document.add("#late", FakeElement(text="here"))
        return commands.find("#late")().text == "here"

    assert commands.wait_until(condition) == 2


def test_wait_until_stops_on_lost_session(commands, document):
    document.fault = RuntimeError("Browser has been closed")
    document.session_lost = True

    with pytest.raises(CommandExecutionError) as exc_info:
        commands.wait_until(lambda: commands.find("#x")(), timeout=5.0)
    assert exc_info.value.fatal is True
    assert document.queries == 1


def test_wait_until_rejects_zero_timeout(commands):
    with pytest.raises(InvalidArgumentError):
        commands.wait_until(lambda: True, timeout=0)


# ============================================================
# Actions
# ============================================================

def test_open_and_url(commands, document):
    commands.open("http://automation.local/forms")
    assert document.url == "http://automation.local/forms"
    assert commands.url == "http://automation.local/forms"


def test_click_and_hover(commands, document):
    button = document.add("button.add", FakeElement(text="Add product"))
    commands.click("button.add")
    commands.hover("button.add")
    assert button.clicks == 1
    assert button.hovers == 1


def test_click_missing_element_raises_not_found(commands):
    with pytest.raises(ElementNotFoundError):
        commands.click("button.missing")


def test_enter_stringifies_values(commands, document):
    quantity = document.add("td.quantity input", FakeElement(kind=ElementKind.TEXT))
    commands.enter(6, "td.quantity input")
    assert quantity.value == "6"


@pytest.mark.parametrize("option, expected_text", [("Boats", "Boats"), ("boats", "Boats"), (0, "Motorcycles")])
def test_select_by_label_value_or_index(commands, document, option, expected_text):
    document.add("select.category", FakeElement.select(["Motorcycles", "Boats"], selected=1))
    commands.select(option, "select.category")
    assert commands.find("select.category")().text == expected_text


@pytest.mark.parametrize("option", [True, 1.5, None])
def test_select_rejects_unsupported_option_types(commands, option):
    with pytest.raises(InvalidArgumentError):
        commands.select(option, "select.category")


def test_settings_from_config(monkeypatch):
    values = {"wait.timeout": "2.5", "wait.poll_interval": 0.2}
    monkeypatch.setattr(
        "fluent_automation.framework.command_provider.get_config",
        lambda key, default=None: values.get(key, default),
    )
    settings = FluentSettings.from_config()
    assert settings.wait_timeout == 2.5
    assert settings.poll_interval == 0.2


def test_settings_from_config_rejects_garbage(monkeypatch):
    monkeypatch.setattr(
        "fluent_automation.framework.command_provider.get_config",
        lambda key, default=None: "soon",
    )
    with pytest.raises(InvalidArgumentError):
        FluentSettings.from_config()
