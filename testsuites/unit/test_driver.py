from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

from ui_foundation import (
    Button,
    DocumentScope,
    ElementProxy,
    InvalidConfigurationError,
    Locator,
    PlaywrightDriver,
    WaitTimeoutError,
)
from ui_foundation.wait_helpers import WaitConfig


FAST = WaitConfig(timeout=0.5, poll_interval=0.01)


def navigation_error():
    return PlaywrightError("Execution context was destroyed, most likely because of a navigation")


def make_handle(visible=True):
    handle = MagicMock()
    handle.is_visible.return_value = visible
    handle.evaluate.return_value = False
    return handle


@pytest.fixture
def page():
    return MagicMock()


def test_command_timeout_applied_in_milliseconds(page):
    PlaywrightDriver(page, command_timeout=30)

    page.set_default_timeout.assert_called_once_with(30000)
    page.set_default_navigation_timeout.assert_called_once_with(30000)


def test_missing_page_is_rejected():
    with pytest.raises(InvalidConfigurationError):
        PlaywrightDriver(None)


def test_find_uses_page_or_root(page):
    driver = PlaywrightDriver(page)
    root = MagicMock()
    page.query_selector_all.return_value = ["a"]
    root.query_selector_all.return_value = ["b"]

    assert driver.find(Locator.name("q")) == ["a"]
    assert driver.find(Locator.tag_name("h3"), root=root) == ["b"]
    page.query_selector_all.assert_called_once_with('[name="q"]')
    root.query_selector_all.assert_called_once_with("h3")


def test_find_during_navigation_matches_nothing(page):
    page.query_selector_all.side_effect = navigation_error()

    assert PlaywrightDriver(page).find(Locator.name("q")) == []


def test_is_stale_follows_connection_state():
    driver = PlaywrightDriver(MagicMock())
    handle = MagicMock()

    handle.evaluate.return_value = False
    assert driver.is_stale(handle) is False

    handle.evaluate.return_value = True
    assert driver.is_stale(handle) is True

    handle.evaluate.side_effect = navigation_error()
    assert driver.is_stale(handle) is True


def test_visibility_checks_tolerate_destroyed_context():
    driver = PlaywrightDriver(MagicMock())
    handle = MagicMock()
    handle.is_visible.side_effect = navigation_error()
    handle.is_enabled.side_effect = navigation_error()

    assert driver.is_displayed(handle) is False
    assert driver.is_enabled(handle) is False


def test_element_commands_map_to_handle_calls():
    driver = PlaywrightDriver(MagicMock())
    handle = MagicMock()

    driver.clear(handle)
    driver.send_keys(handle, "owl")
    driver.press_key(handle, "Enter")
    driver.click(handle)

    handle.fill.assert_called_once_with("")
    handle.type.assert_called_once_with("owl")
    handle.press.assert_called_once_with("Enter")
    handle.click.assert_called_once_with()


def test_select_option_routes_label_or_value():
    driver = PlaywrightDriver(MagicMock())
    handle = MagicMock()

    driver.select_option(handle, label="Canada")
    handle.select_option.assert_called_once_with(label="Canada")

    handle.reset_mock()
    driver.select_option(handle, value="ca")
    handle.select_option.assert_called_once_with(value="ca")


def test_get_attribute_reads_property_first():
    driver = PlaywrightDriver(MagicMock())
    handle = MagicMock()
    handle.evaluate.return_value = "typed text"

    assert driver.get_attribute(handle, "value") == "typed text"
    script, name = handle.evaluate.call_args.args
    assert name == "value"
    assert "el[name]" in script
    assert "getAttribute" in script


def test_navigation_and_page_properties(page):
    driver = PlaywrightDriver(page)
    page.title.return_value = "Google"
    page.url = "https://www.google.com/"
    page.content.return_value = "<html></html>"

    driver.go_to_url("https://www.google.com")
    driver.back()
    driver.forward()
    driver.refresh()

    page.goto.assert_called_once_with("https://www.google.com")
    page.go_back.assert_called_once_with()
    page.go_forward.assert_called_once_with()
    page.reload.assert_called_once_with()
    assert driver.title == "Google"
    assert driver.current_url == "https://www.google.com/"
    assert driver.page_source == "<html></html>"


def test_exists_is_false_while_document_navigates(page):
    page.query_selector_all.side_effect = navigation_error()
    proxy = ElementProxy(DocumentScope(PlaywrightDriver(page)), Locator.name("q"), wait_config=FAST)

    assert proxy.exists() is False
    assert proxy.is_displayed() is False
    assert proxy.is_enabled() is False


def test_wait_until_visible_keeps_polling_through_navigation(page):
    target = make_handle()
    page.query_selector_all.side_effect = [navigation_error(), [target]]
    proxy = ElementProxy(DocumentScope(PlaywrightDriver(page)), Locator.id("results"), wait_config=FAST)

    proxy.wait_until_visible(timeout=1)

    assert proxy.resolve() is target
    assert page.query_selector_all.call_count == 2


def test_wait_until_visible_still_times_out_when_navigation_never_settles(page):
    page.query_selector_all.side_effect = navigation_error()
    proxy = ElementProxy(DocumentScope(PlaywrightDriver(page)), Locator.id("results"), wait_config=FAST)

    with pytest.raises(WaitTimeoutError, match="By.id: results"):
        proxy.wait_until_visible(timeout=0.05)


def test_post_click_wait_survives_navigating_click(page):
    button = make_handle()
    target = make_handle()
    page.query_selector_all.side_effect = [[button], navigation_error(), [target]]
    search = Button(DocumentScope(PlaywrightDriver(page)), Locator.name("btnK"), wait_config=FAST)
    search.arm_post_click_wait(Locator.id("search"), timeout=1)

    search.click()

    button.click.assert_called_once_with()
    assert page.query_selector_all.call_count == 3
