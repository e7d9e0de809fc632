"""
================================================================================
Browser Driver Boundary and Search Scopes
================================================================================

The resolution layer never talks to Playwright directly. It consumes the
``BrowserDriver`` capability below, which ``PlaywrightDriver`` implements over a
``playwright.sync_api.Page``. Unit tests substitute an in-memory fake.

Search scopes:
    - DocumentScope: the whole page
    - ElementScope: the sub-tree under an ElementProxy (re-resolved on use)

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .exceptions import InvalidConfigurationError
from .locator import Locator

if TYPE_CHECKING:
    from .element_proxy import ElementProxy


class BrowserDriver(Protocol):
    """Capability consumed by proxies, wrappers and pages."""

    def find(self, locator: Locator, root: Any = None) -> List[Any]: ...

    def is_stale(self, handle: Any) -> bool: ...

    def is_displayed(self, handle: Any) -> bool: ...

    def is_enabled(self, handle: Any) -> bool: ...

    def is_selected(self, handle: Any) -> bool: ...

    def click(self, handle: Any) -> None: ...

    def send_keys(self, handle: Any, text: str) -> None: ...

    def press_key(self, handle: Any, key: str) -> None: ...

    def clear(self, handle: Any) -> None: ...

    def get_attribute(self, handle: Any, name: str) -> Optional[str]: ...

    def get_text(self, handle: Any) -> str: ...

    def select_option(
        self,
        handle: Any,
        value: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None: ...

    def go_to_url(self, url: str) -> None: ...

    def back(self) -> None: ...

    def forward(self) -> None: ...

    def refresh(self) -> None: ...

    @property
    def title(self) -> str: ...

    @property
    def current_url(self) -> str: ...

    @property
    def page_source(self) -> str: ...

    def execute_script(self, script: str) -> Any: ...


# =============================================================================
# Search Scopes
# =============================================================================

class DocumentScope:
    """Search scope covering the whole document."""

    def __init__(self, driver: BrowserDriver):
        if driver is None:
            raise InvalidConfigurationError("DocumentScope requires a browser driver.")
        self.driver = driver

    def find(self, locator: Locator) -> List[Any]:
        return list(self.driver.find(locator))

    def __str__(self) -> str:
        return "document"


class ElementScope:
    """
    Search scope rooted at another element.

    The root is an ElementProxy, so a dynamic root re-resolves when stale.
    If the root cannot be resolved, ``find`` raises ElementNotFoundError for
    the root and every child lookup fails with it.
    """

    def __init__(self, root: "ElementProxy"):
        if root is None:
            raise InvalidConfigurationError("ElementScope requires a root element.")
        self.root = root
        self.driver = root.driver

    def find(self, locator: Locator) -> List[Any]:
        return list(self.driver.find(locator, root=self.root.resolve()))

    def __str__(self) -> str:
        return f"children of {self.root.describe()}"


# =============================================================================
# Playwright Implementation
# =============================================================================

# Property first (live value of inputs), attribute as fallback
_GET_ATTRIBUTE_JS = """(el, name) => {
    const prop = el[name];
    if (prop !== undefined && prop !== null && typeof prop !== 'object' && typeof prop !== 'function') {
        return String(prop);
    }
    return el.getAttribute(name);
}"""

_IS_SELECTED_JS = "el => Boolean(el.checked || el.selected)"

_IS_DETACHED_JS = "el => !el.isConnected"


class PlaywrightDriver:
    """
    BrowserDriver over a Playwright sync Page.

    Handles are ``playwright.sync_api.ElementHandle`` objects. A handle is stale
    once its node is detached from the DOM or its execution context was
    destroyed by navigation.
    """

    def __init__(self, page: Page, command_timeout: float = 120):
        if page is None:
            raise InvalidConfigurationError("PlaywrightDriver requires a Playwright page.")
        self.page = page
        self.command_timeout_ms = int(command_timeout * 1000)
        self.page.set_default_timeout(self.command_timeout_ms)
        self.page.set_default_navigation_timeout(self.command_timeout_ms)

    def find(self, locator: Locator, root: Any = None) -> List[Any]:
        target = root if root is not None else self.page
        try:
            return target.query_selector_all(locator.selector)
        except PlaywrightError as e:
            # Document is navigating or the root was detached; nothing matches yet
            logger.debug(f"Lookup of {locator} found nothing: {str(e)[:80]}")
            return []

    def is_stale(self, handle: Any) -> bool:
        try:
            return bool(handle.evaluate(_IS_DETACHED_JS))
        except PlaywrightError as e:
            logger.debug(f"Handle considered stale: {str(e)[:80]}")
            return True

    def is_displayed(self, handle: Any) -> bool:
        try:
            return handle.is_visible()
        except PlaywrightError as e:
            logger.debug(f"Handle considered hidden: {str(e)[:80]}")
            return False

    def is_enabled(self, handle: Any) -> bool:
        try:
            return handle.is_enabled()
        except PlaywrightError as e:
            logger.debug(f"Handle considered disabled: {str(e)[:80]}")
            return False

    def is_selected(self, handle: Any) -> bool:
        return bool(handle.evaluate(_IS_SELECTED_JS))

    def click(self, handle: Any) -> None:
        handle.click()

    def send_keys(self, handle: Any, text: str) -> None:
        handle.type(text)

    def press_key(self, handle: Any, key: str) -> None:
        handle.press(key)

    def clear(self, handle: Any) -> None:
        handle.fill("")

    def get_attribute(self, handle: Any, name: str) -> Optional[str]:
        return handle.evaluate(_GET_ATTRIBUTE_JS, name)

    def get_text(self, handle: Any) -> str:
        return handle.inner_text()

    def select_option(
        self,
        handle: Any,
        value: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        if label is not None:
            handle.select_option(label=label)
        else:
            handle.select_option(value=value)

    def go_to_url(self, url: str) -> None:
        self.page.goto(url)

    def back(self) -> None:
        self.page.go_back()

    def forward(self) -> None:
        self.page.go_forward()

    def refresh(self) -> None:
        self.page.reload()

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def current_url(self) -> str:
        return self.page.url

    @property
    def page_source(self) -> str:
        return self.page.content()

    def execute_script(self, script: str) -> Any:
        return self.page.evaluate(script)


__all__ = [
    "BrowserDriver",
    "DocumentScope",
    "ElementScope",
    "PlaywrightDriver",
]
