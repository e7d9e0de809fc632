"""
================================================================================
Typed Element Wrappers
================================================================================

Thin, type-appropriate APIs over an ElementProxy.

Each wrapper *holds* one proxy (no inheritance from a driver element class)
and always acts through ``proxy.resolve()``, so a stale handle is replaced
before every read or write.

Wrappers:
    - TextField:      get_text / set_text / press_enter / clear
    - Button, Link:   click / get_text / arm_post_click_wait
    - CheckBox,
      RadioButton:    is_selected / set_selected / click
    - SelectList:     option texts and values / select by text or value
    - TextBlock:      get_text, tolerant of absence
    - BusyIndicator:  appear / disappear / idle waits, never cached

================================================================================
"""

from __future__ import annotations

from typing import Any, List, Optional

import allure
from loguru import logger

from .driver import BrowserDriver, DocumentScope
from .element_proxy import ElementProxy
from .exceptions import (
    ElementNotFoundError,
    InvalidConfigurationError,
    OptionNotFoundError,
)
from .locator import Locator
from .wait_helpers import WaitConfig, poll_until


ENTER_KEY = "Enter"

# Evaluated by BusyIndicator.wait_until_requests_finish
NO_PENDING_REQUESTS_SCRIPT = (
    "() => document.readyState === 'complete' && "
    "(!window.jQuery || window.jQuery.active === 0)"
)


class ElementWrapper:
    """
    Shared construction and state delegation for typed wrappers.

    Args:
        scope: Search scope (document or parent element)
        locator: How to find the element
        label: Creator name for diagnostics
        wait_config: Default wait timeout and poll interval
    """

    def __init__(
        self,
        scope: Any,
        locator: Locator,
        label: str = "",
        wait_config: Optional[WaitConfig] = None,
    ):
        self.proxy = ElementProxy(
            scope,
            locator,
            label=label,
            kind=type(self).__name__,
            wait_config=wait_config,
        )

    @classmethod
    def from_handle(cls, driver: BrowserDriver, handle: Any, label: str = ""):
        """Wrap an already-found handle. Static: no waits, no requery."""
        wrapper = cls.__new__(cls)
        wrapper.proxy = ElementProxy.bound(driver, handle, label=label, kind=cls.__name__)
        return wrapper

    @property
    def driver(self) -> BrowserDriver:
        return self.proxy.driver

    @property
    def label(self) -> str:
        return self.proxy.label

    def bind_label(self, label: str) -> None:
        self.proxy.bind_label(label)

    def exists(self) -> bool:
        return self.proxy.exists()

    def is_displayed(self) -> bool:
        return self.proxy.is_displayed()

    def is_enabled(self) -> bool:
        return self.proxy.is_enabled()

    def is_requery_needed(self) -> bool:
        return self.proxy.is_requery_needed()

    def wait_until_visible(self, timeout: Optional[float] = None) -> None:
        self.proxy.wait_until_visible(timeout)

    def wait_until_invisible(self, timeout: Optional[float] = None) -> None:
        self.proxy.wait_until_invisible(timeout)

    def __str__(self) -> str:
        return self.proxy.describe()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.proxy.describe()}>"


class TextField(ElementWrapper):
    """An editable text input."""

    def get_text(self) -> str:
        """Current value of the field."""
        return self.driver.get_attribute(self.proxy.resolve(), "value") or ""

    def set_text(self, text: str) -> None:
        """Replace the field's content. Always clears first, never appends."""
        with allure.step(f"Set text of {self}"):
            handle = self.proxy.resolve()
            self.driver.clear(handle)
            self.driver.send_keys(handle, text)
            logger.debug(f"Set text of {self}")

    def clear(self) -> None:
        self.driver.clear(self.proxy.resolve())

    def press_enter(self) -> None:
        with allure.step(f"Press Enter in {self}"):
            self.driver.press_key(self.proxy.resolve(), ENTER_KEY)


class Button(ElementWrapper):
    """
    A clickable button.

    Use ``arm_post_click_wait`` after creation to synchronize clicks that
    trigger navigation or re-rendering.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._post_click_target: Optional[ElementProxy] = None
        self._post_click_timeout: Optional[float] = None

    @classmethod
    def from_handle(cls, driver: BrowserDriver, handle: Any, label: str = ""):
        wrapper = super().from_handle(driver, handle, label)
        wrapper._post_click_target = None
        wrapper._post_click_timeout = None
        return wrapper

    def arm_post_click_wait(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """After every click, wait until ``locator`` is visible in the document."""
        self._post_click_target = ElementProxy(
            DocumentScope(self.driver),
            locator,
            label=f"post-click target of {self.label or type(self).__name__}",
            wait_config=self.proxy.wait_config,
        )
        self._post_click_timeout = timeout

    def click(self) -> None:
        with allure.step(f"Click {self}"):
            self.driver.click(self.proxy.resolve())
            logger.debug(f"Clicked {self}")
            if self._post_click_target is not None:
                self._post_click_target.wait_until_visible(self._post_click_timeout)

    def get_text(self) -> str:
        return self.driver.get_text(self.proxy.resolve())


class Link(Button):
    """A hypertext link."""

    def get_href(self) -> Optional[str]:
        return self.driver.get_attribute(self.proxy.resolve(), "href")


class CheckBox(ElementWrapper):
    """A checkbox. ``set_selected`` clicks only when the state must change."""

    def is_selected(self) -> bool:
        return bool(self.driver.is_selected(self.proxy.resolve()))

    def set_selected(self, selected: bool) -> None:
        if self.is_selected() != selected:
            self.click()

    def click(self) -> None:
        with allure.step(f"Click {self}"):
            self.driver.click(self.proxy.resolve())


class RadioButton(CheckBox):
    """A single radio input."""

    @property
    def value(self) -> Optional[str]:
        return self.driver.get_attribute(self.proxy.resolve(), "value")


class SelectList(ElementWrapper):
    """A drop down (``<select>``) menu."""

    OPTION = Locator.tag_name("option")

    def _options(self) -> List[Any]:
        return self.driver.find(self.OPTION, root=self.proxy.resolve())

    def get_option_texts(self) -> List[str]:
        """Visible texts of the available options, in page order."""
        return [self.driver.get_text(option).strip() for option in self._options()]

    def get_option_values(self) -> List[str]:
        return [self.driver.get_attribute(option, "value") or "" for option in self._options()]

    def selected_text(self) -> Optional[str]:
        for option in self._options():
            if self.driver.is_selected(option):
                return self.driver.get_text(option).strip()
        return None

    def select_by_text(self, text: str) -> None:
        """
        Select an option by its visible text (case sensitive).

        Raises:
            OptionNotFoundError: When no option has that text
        """
        texts = self.get_option_texts()
        if text not in texts:
            raise OptionNotFoundError(text, texts, owner=str(self))
        with allure.step(f"Select '{text}' in {self}"):
            self.driver.select_option(self.proxy.resolve(), label=text)

    def select_by_value(self, value: str) -> None:
        """
        Select an option by its value attribute.

        Raises:
            OptionNotFoundError: When no option has that value
        """
        values = self.get_option_values()
        if value not in values:
            raise OptionNotFoundError(value, values, owner=str(self))
        with allure.step(f"Select value '{value}' in {self}"):
            self.driver.select_option(self.proxy.resolve(), value=value)


class TextBlock(ElementWrapper):
    """Read-only text on the page (headings, spans, divs, footers)."""

    def get_text(self) -> str:
        """Displayed text, or an empty string when the element is absent."""
        handle = self.proxy.current()
        if handle is None:
            return ""
        return self.driver.get_text(handle)


class BusyIndicator:
    """
    A loading spinner.

    Holds only a scope and locator: every check runs a fresh lookup, since
    spinners are created and destroyed by the page constantly.
    """

    def __init__(
        self,
        scope: Any,
        locator: Locator,
        label: str = "",
        wait_config: Optional[WaitConfig] = None,
        idle_script: str = NO_PENDING_REQUESTS_SCRIPT,
    ):
        if scope is None or locator is None:
            raise InvalidConfigurationError(
                "search scope and locator are required when creating a BusyIndicator!"
            )
        self.scope = scope
        self.locator = locator
        self.driver: BrowserDriver = scope.driver
        self.label = label
        self.wait_config = wait_config or WaitConfig()
        self.idle_script = idle_script

    def bind_label(self, label: str) -> None:
        if not self.label:
            self.label = label

    def __str__(self) -> str:
        name = f"{self.label} (BusyIndicator)" if self.label else "BusyIndicator"
        return f"{name} [{self.locator}]"

    def is_displayed(self) -> bool:
        try:
            handles = self.scope.find(self.locator)
        except ElementNotFoundError:
            return False
        return any(self.driver.is_displayed(handle) for handle in handles)

    def _timeout(self, timeout: Optional[float]) -> float:
        return self.wait_config.timeout if timeout is None else timeout

    def wait_until_appears(self, timeout: Optional[float] = None) -> None:
        poll_until(
            self.is_displayed,
            timeout=self._timeout(timeout),
            description=f"{self} to appear",
            poll_interval=self.wait_config.poll_interval,
        )

    def wait_until_disappears(self, timeout: Optional[float] = None) -> None:
        poll_until(
            lambda: not self.is_displayed(),
            timeout=self._timeout(timeout),
            description=f"{self} to disappear",
            poll_interval=self.wait_config.poll_interval,
        )

    def wait_until_requests_finish(self, timeout: Optional[float] = None) -> None:
        """Wait until the page reports no pending asynchronous requests."""
        poll_until(
            lambda: bool(self.driver.execute_script(self.idle_script)),
            timeout=self._timeout(timeout),
            description=f"pending requests to finish ({self})",
            poll_interval=self.wait_config.poll_interval,
        )

    def wait_until_idle(self, timeout: Optional[float] = None) -> None:
        """
        Wait for requests to finish, then for the spinner to vanish.

        Requests go first: the spinner can vanish before in-flight responses
        re-render, and a later request may show it again.
        """
        with allure.step(f"Wait until idle: {self}"):
            self.wait_until_requests_finish(timeout)
            self.wait_until_disappears(timeout)


__all__ = [
    "ElementWrapper",
    "TextField",
    "Button",
    "Link",
    "CheckBox",
    "RadioButton",
    "SelectList",
    "TextBlock",
    "BusyIndicator",
    "NO_PENDING_REQUESTS_SCRIPT",
]
