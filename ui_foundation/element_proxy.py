"""
================================================================================
Element Proxy
================================================================================

Lazily-resolving, auto-requerying wrapper around a single element handle.

Browser handles are invalidated by any DOM mutation touching their subtree
(navigation, re-render, AJAX update). A proxy never trusts a cached handle:

    - DYNAMIC mode (scope + locator): the handle is looked up on first use and
      looked up again whenever the cached one has gone stale.
    - STATIC mode (bound handle): the handle is fixed for the proxy's lifetime.
      Staleness is reported through ``is_requery_needed()`` so the owner can
      rebuild the wrapper, but the proxy itself cannot heal.

Usage:
    >>> proxy = ElementProxy(session.document, Locator.name("q"), label="search_box")
    >>> proxy.exists()
    True
    >>> proxy.wait_until_visible(timeout=5)

================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from loguru import logger

from .driver import BrowserDriver
from .exceptions import ElementNotFoundError, InvalidConfigurationError
from .locator import Locator
from .wait_helpers import WaitConfig, poll_until


class ProxyMode(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


class ElementProxy:
    """
    Resolves and caches one element handle.

    Attributes:
        mode: STATIC or DYNAMIC
        scope: Search scope (DYNAMIC only)
        locator: How to find the element (DYNAMIC only)
        label: Creator name used in diagnostics (usually the page attribute)
        kind: Name of the wrapper type, used in diagnostics
    """

    def __init__(
        self,
        scope: Any,
        locator: Locator,
        label: str = "",
        kind: str = "element",
        wait_config: Optional[WaitConfig] = None,
    ):
        if scope is None:
            raise InvalidConfigurationError(
                f"search scope cannot be None when creating a {kind}!"
            )
        if locator is None:
            raise InvalidConfigurationError(
                f"locator cannot be None when creating a {kind}!"
            )
        self.mode = ProxyMode.DYNAMIC
        self.scope = scope
        self.locator = locator
        self.driver: BrowserDriver = scope.driver
        self.label = label
        self.kind = kind
        self.wait_config = wait_config or WaitConfig()
        self._handle: Any = None

    @classmethod
    def bound(
        cls,
        driver: BrowserDriver,
        handle: Any,
        label: str = "",
        kind: str = "element",
    ) -> "ElementProxy":
        """Create a STATIC proxy around an already-found handle."""
        if driver is None:
            raise InvalidConfigurationError(
                f"driver cannot be None when creating a {kind}!"
            )
        if handle is None:
            raise InvalidConfigurationError(
                f"element handle cannot be None when creating a static {kind}!"
            )
        proxy = cls.__new__(cls)
        proxy.mode = ProxyMode.STATIC
        proxy.scope = None
        proxy.locator = None
        proxy.driver = driver
        proxy.label = label
        proxy.kind = kind
        proxy.wait_config = WaitConfig()
        proxy._handle = handle
        return proxy

    @property
    def is_static(self) -> bool:
        return self.mode is ProxyMode.STATIC

    def describe(self) -> str:
        """Short diagnostic name: label, kind and locator."""
        name = f"{self.label} ({self.kind})" if self.label else self.kind
        if self.locator is not None:
            name += f' [{self.locator}]'
        return name

    def bind_label(self, label: str) -> None:
        """Set the creator label unless one was given explicitly."""
        if not self.label:
            self.label = label

    # =========================================================================
    # Resolution
    # =========================================================================

    def _query(self) -> Any:
        handles = self.scope.find(self.locator)
        return handles[0] if handles else None

    def _refresh(self) -> Any:
        if not self.is_static:
            if self._handle is None or self.driver.is_stale(self._handle):
                if self._handle is not None:
                    logger.debug(f"Requerying stale element: {self.describe()}")
                self._handle = self._query()
        return self._handle

    def resolve(self) -> Any:
        """
        Return a usable handle.

        Raises:
            ElementNotFoundError: When nothing matches the locator
        """
        if self._refresh() is None:
            error = ElementNotFoundError(
                locator=self.locator,
                scope=str(self.scope) if self.scope is not None else "",
                label=self.label,
                kind=self.kind,
            )
            logger.error(str(error).strip())
            raise error
        return self._handle

    def exists(self) -> bool:
        """True when the element can be resolved; never raises for absence."""
        return self.current() is not None

    def is_stale(self) -> bool:
        """Whether the currently cached handle is stale (True if none cached)."""
        if self._handle is None:
            return True
        return self.driver.is_stale(self._handle)

    def is_requery_needed(self) -> bool:
        """
        For STATIC proxies: has the bound handle gone stale?

        Owners use this to decide whether to recreate the wrapper.
        Always False for DYNAMIC proxies, which requery on their own.
        """
        return self.is_static and self.is_stale()

    # =========================================================================
    # State Queries
    # =========================================================================

    def current(self) -> Any:
        """The usable handle, or None when nothing matches. Never raises for absence."""
        try:
            return self._refresh()
        except ElementNotFoundError:
            return None

    def is_displayed(self) -> bool:
        handle = self.current()
        return handle is not None and bool(self.driver.is_displayed(handle))

    def is_enabled(self) -> bool:
        handle = self.current()
        return handle is not None and bool(self.driver.is_enabled(handle))

    def is_selected(self) -> bool:
        handle = self.current()
        return handle is not None and bool(self.driver.is_selected(handle))

    # =========================================================================
    # Waits
    # =========================================================================

    def _require_dynamic(self, action: str) -> None:
        if self.is_static:
            raise InvalidConfigurationError(
                f"Cannot {action} on {self.describe()}: it was created from a "
                f"bound element and cannot be requeried. Create it with a "
                f"search scope and locator instead."
            )

    def _visible_now(self) -> bool:
        try:
            handle = self._query()
        except ElementNotFoundError:
            return False
        if handle is not None and self.driver.is_displayed(handle):
            self._handle = handle
            return True
        return False

    def _invisible_now(self) -> bool:
        try:
            handle = self._query()
        except ElementNotFoundError:
            # Parent scope vanished, so this element is gone too
            return True
        return handle is None or not self.driver.is_displayed(handle)

    def wait_until_visible(self, timeout: Optional[float] = None) -> None:
        """
        Block until the locator resolves to a visible element.

        Raises:
            WaitTimeoutError: When still not visible after ``timeout`` seconds
            InvalidConfigurationError: When called on a STATIC proxy
        """
        self._require_dynamic("wait until visible")
        poll_until(
            self._visible_now,
            timeout=self.wait_config.timeout if timeout is None else timeout,
            description=f"{self.describe()} to become visible in {self.scope}",
            poll_interval=self.wait_config.poll_interval,
        )

    def wait_until_invisible(self, timeout: Optional[float] = None) -> None:
        """
        Block until the element is hidden or absent.

        Raises:
            WaitTimeoutError: When still visible after ``timeout`` seconds
            InvalidConfigurationError: When called on a STATIC proxy
        """
        self._require_dynamic("wait until invisible")
        poll_until(
            self._invisible_now,
            timeout=self.wait_config.timeout if timeout is None else timeout,
            description=f"{self.describe()} to become invisible in {self.scope}",
            poll_interval=self.wait_config.poll_interval,
        )

    def __repr__(self) -> str:
        return f"<ElementProxy {self.mode.value} {self.describe()}>"


__all__ = [
    "ElementProxy",
    "ProxyMode",
]
