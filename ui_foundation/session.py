"""
================================================================================
Session
================================================================================

Owns the single browser-automation handle of a test run.

Features:
    - Launches Playwright (sync API) for the configured browser
    - Device emulation for tablet/phone layouts
    - Supplies the document search scope to page objects
    - Navigation primitives used by PageModel
    - No global driver: every page holds its Session explicitly, so parallel
      workers each get an isolated object graph

Usage:
    with Session.launch(RunConfiguration.load()) as session:
        home = session.create_page(GoogleHomePage)
        home.go()

================================================================================
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Type, TypeVar

import allure
from loguru import logger
from playwright.sync_api import sync_playwright

from .configuration import Browser, RunConfiguration
from .driver import BrowserDriver, DocumentScope, PlaywrightDriver
from .exceptions import InvalidConfigurationError


P = TypeVar("P")


class Session:
    """
    One browser, one page, one logical thread of control.

    Args:
        driver: Browser capability (PlaywrightDriver or a test double)
        config: Run configuration
        on_close: Optional callable releasing the driver's resources
    """

    # Default context options for desktop runs
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        driver: BrowserDriver,
        config: Optional[RunConfiguration] = None,
        on_close: Optional[Any] = None,
    ):
        if driver is None:
            raise InvalidConfigurationError("Session requires a browser driver.")
        self.driver = driver
        self.config = config or RunConfiguration()
        self.session_id = uuid.uuid4().hex[:8]
        self.log = logger.bind(session=self.session_id)
        self.document = DocumentScope(driver)
        self._on_close = on_close

    @classmethod
    def launch(cls, config: RunConfiguration) -> "Session":
        """
        Start Playwright and open a page for the configured browser/device.

        Raises:
            InvalidConfigurationError: For browsers Playwright cannot drive
        """
        if config.browser is Browser.IE:
            raise InvalidConfigurationError(
                "Internet Explorer is not supported by the Playwright driver; "
                "use chrome or firefox."
            )

        playwright = sync_playwright().start()
        try:
            launcher = (
                playwright.firefox if config.browser is Browser.FIREFOX
                else playwright.chromium
            )
            browser = launcher.launch(headless=config.headless)

            context_options = dict(cls.DEFAULT_CONTEXT_OPTIONS)
            emulation = config.device_emulation()
            if emulation:
                descriptor = dict(playwright.devices[emulation])
                descriptor.pop("default_browser_type", None)
                if config.browser is Browser.FIREFOX:
                    # Firefox rejects mobile emulation flags
                    descriptor.pop("is_mobile", None)
                context_options.update(descriptor)

            context = browser.new_context(**context_options)
            page = context.new_page()
        except Exception:
            playwright.stop()
            raise

        def _close() -> None:
            context.close()
            browser.close()
            playwright.stop()

        driver = PlaywrightDriver(page, command_timeout=config.command_timeout)
        session = cls(driver, config, on_close=_close)
        session.log.info(
            f"Browser started: {config.browser.value} "
            f"(device={config.device.value}, headless={config.headless})"
        )
        return session

    def close(self) -> None:
        """Release the browser. Safe to call more than once."""
        if self._on_close is not None:
            on_close, self._on_close = self._on_close, None
            on_close()
            self.log.debug("Browser closed")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Page Creation
    # =========================================================================

    def create_page(self, page_class: Type[P]) -> P:
        """Construct a page model bound to this session."""
        return page_class(self)

    # =========================================================================
    # Navigation
    # =========================================================================

    def go_to_url(self, url: str) -> None:
        with allure.step(f"Navigate to {url}"):
            self.driver.go_to_url(url)
            self.log.debug(f"Navigated to: {url}")

    def back(self) -> None:
        self.driver.back()

    def forward(self) -> None:
        self.driver.forward()

    def refresh(self) -> None:
        self.driver.refresh()

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    @property
    def page_source(self) -> str:
        return self.driver.page_source

    def __repr__(self) -> str:
        return f"<Session {self.session_id} {self.config!r}>"


__all__ = [
    "Session",
]
