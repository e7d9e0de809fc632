"""
================================================================================
Page Model and Content Blocks
================================================================================

Composite page objects exposing named, lazily created element wrappers.

    - PageModel: scope is the whole document; adds navigation and identity
    - ContentBlock: scope is the sub-tree under its own root element (popups,
      search results, records, forms)

Two-level caching:
    The wrapper instance behind a ``lazy_element`` attribute is created once
    per page object. The handle inside it is still re-resolved on every use,
    so memoizing wrappers never hands out stale elements.

Usage:
    class LoginPage(PageModel):
        URL_PATH = "/login"
        PAGE_TITLE = "Login"

        @lazy_element
        def username(self) -> TextField:
            return self.text_field(Locator.name("username"))

================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Type, TypeVar

import allure

from .configuration import RunConfiguration
from .driver import BrowserDriver, ElementScope
from .element_proxy import ElementProxy
from .elements import (
    BusyIndicator,
    Button,
    CheckBox,
    Link,
    RadioButton,
    SelectList,
    TextBlock,
    TextField,
)
from .exceptions import InvalidConfigurationError
from .locator import Locator
from .radio_group import RadioGroup


T = TypeVar("T")
B = TypeVar("B", bound="ContentBlock")

_UNSET = object()


class LazyCell(Generic[T]):
    """
    Computes a value on first access and caches it.

    Not thread-safe: a cell belongs to one page object of one session.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value: Any = _UNSET

    @property
    def is_created(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            self._value = self._factory()
        return self._value

    def reset(self) -> None:
        """Forget the cached value; the next ``get`` recomputes it."""
        self._value = _UNSET


class lazy_element(Generic[T]):
    """
    Descriptor memoizing an element factory per page object instance.

    The created wrapper is labeled ``ClassName.attribute`` unless the factory
    gave it a label, so failures name the page attribute that built it.
    ``del page.attribute`` discards the cached wrapper.
    """

    def __init__(self, factory: Callable[[Any], T]):
        self.factory = factory
        self.name = factory.__name__
        self.__doc__ = factory.__doc__

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def _cell(self, instance: Any) -> LazyCell:
        cells = instance.__dict__.setdefault("_lazy_cells", {})
        if self.name not in cells:
            def build() -> T:
                value = self.factory(instance)
                bind_label = getattr(value, "bind_label", None)
                if bind_label is not None:
                    bind_label(f"{type(instance).__name__}.{self.name}")
                return value
            cells[self.name] = LazyCell(build)
        return cells[self.name]

    def __get__(self, instance: Any, owner: Optional[type] = None):
        if instance is None:
            return self
        return self._cell(instance).get()

    def __delete__(self, instance: Any) -> None:
        self._cell(instance).reset()


class _PageObject:
    """Session access and element factories shared by pages and blocks."""

    session: Any
    scope: Any

    def _bind_session(self, session: Any) -> None:
        if session is None:
            raise InvalidConfigurationError(
                f"Parent session was not set on {type(self).__name__} creation."
            )
        self.session = session

    @property
    def driver(self) -> BrowserDriver:
        return self.session.driver

    @property
    def config(self) -> RunConfiguration:
        """Settings of the current run (browser, device, timeouts)."""
        return self.session.config

    @property
    def log(self):
        """Session-bound loguru logger for steps, decisions and failures."""
        return self.session.log

    # =========================================================================
    # Element Factories
    # =========================================================================

    def _make(self, wrapper_class: Type[T], locator: Locator, label: str) -> T:
        return wrapper_class(self.scope, locator, label=label, wait_config=self.config.wait_config)

    def text_field(self, locator: Locator, label: str = "") -> TextField:
        return self._make(TextField, locator, label)

    def button(self, locator: Locator, label: str = "") -> Button:
        return self._make(Button, locator, label)

    def link(self, locator: Locator, label: str = "") -> Link:
        return self._make(Link, locator, label)

    def check_box(self, locator: Locator, label: str = "") -> CheckBox:
        return self._make(CheckBox, locator, label)

    def radio_button(self, locator: Locator, label: str = "") -> RadioButton:
        return self._make(RadioButton, locator, label)

    def select_list(self, locator: Locator, label: str = "") -> SelectList:
        return self._make(SelectList, locator, label)

    def text_block(self, locator: Locator, label: str = "") -> TextBlock:
        return self._make(TextBlock, locator, label)

    def busy_indicator(self, locator: Locator, label: str = "", **kwargs: Any) -> BusyIndicator:
        return BusyIndicator(
            self.scope, locator, label=label, wait_config=self.config.wait_config, **kwargs
        )

    def radio_group(self, group_name: str, label: str = "") -> RadioGroup:
        return RadioGroup(self.scope, group_name, label=label)

    def block(self, block_class: Type[B], locator: Locator, label: str = "") -> B:
        """A ContentBlock rooted at ``locator`` inside this object's scope."""
        return block_class(self.session, self.scope, locator, label=label)


class PageModel(_PageObject):
    """
    Base class for all page models. Scope is always the full document.

    Override in subclasses:
        URL_PATH: absolute URL, or path joined to the ``baseUrl`` setting
        PAGE_TITLE: expected title used by the default ``is_at``
    """

    URL_PATH: str = ""
    PAGE_TITLE: str = ""

    def __init__(self, session: Any):
        self._bind_session(session)
        self.scope = session.document

    @property
    def url(self) -> str:
        """Canonical address of this page."""
        if "://" in self.URL_PATH:
            return self.URL_PATH
        return f"{self.config.base_url}{self.URL_PATH}"

    def go(self) -> None:
        """Navigate the session to this page's canonical address."""
        if not self.url:
            raise InvalidConfigurationError(f"{type(self).__name__} has no URL_PATH to navigate to.")
        with allure.step(f"Open {type(self).__name__}"):
            self.session.go_to_url(self.url)

    def is_at(self) -> bool:
        """Whether the browser is currently on this page (title match by default)."""
        return self.title == self.PAGE_TITLE

    # =========================================================================
    # Navigation (delegated to the session)
    # =========================================================================

    def go_to_url(self, url: str) -> None:
        self.session.go_to_url(url)

    def back(self) -> None:
        self.session.back()

    def forward(self) -> None:
        self.session.forward()

    def refresh(self) -> None:
        self.session.refresh()

    @property
    def title(self) -> str:
        return self.session.title

    @property
    def current_url(self) -> str:
        return self.session.current_url

    @property
    def page_source(self) -> str:
        return self.session.page_source


class ContentBlock(_PageObject):
    """
    A chunk of HTML grouped together: popups, divs, search results, records,
    iframes, etc.

    The block owns an ElementProxy for its root; children are looked up under
    that root. Use the driver only through the block's elements, never for
    document-wide searches.
    """

    def __init__(self, session: Any, scope: Any, locator: Locator, label: str = ""):
        self._bind_session(session)
        self.root = ElementProxy(
            scope,
            locator,
            label=label,
            kind=type(self).__name__,
            wait_config=session.config.wait_config,
        )
        self.scope = ElementScope(self.root)

    @classmethod
    def from_handle(cls: Type[B], session: Any, handle: Any, label: str = "") -> B:
        """A block over an already-found element. Static: no waits, no requery."""
        block = cls.__new__(cls)
        block._bind_session(session)
        block.root = ElementProxy.bound(session.driver, handle, label=label, kind=cls.__name__)
        block.scope = ElementScope(block.root)
        return block

    def bind_label(self, label: str) -> None:
        self.root.bind_label(label)

    def exists(self) -> bool:
        return self.root.exists()

    def is_displayed(self) -> bool:
        return self.root.is_displayed()

    def is_requery_needed(self) -> bool:
        return self.root.is_requery_needed()

    def wait_until_visible(self, timeout: Optional[float] = None) -> None:
        self.root.wait_until_visible(timeout)

    def wait_until_invisible(self, timeout: Optional[float] = None) -> None:
        self.root.wait_until_invisible(timeout)

    def __str__(self) -> str:
        return self.root.describe()


__all__ = [
    "LazyCell",
    "lazy_element",
    "PageModel",
    "ContentBlock",
]
