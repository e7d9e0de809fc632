"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for live browser tests, providing fixtures for
session management, page models, and test setup/teardown.

Key Features:
- One browser Session per test (isolation, parallel-safe)
- Page model fixtures
- Screenshot capture according to the ``screenshot`` setting

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger

from testsuites.ui_testing.pages.google_pages import GoogleHomePage
from ui_foundation import RunConfiguration, ScreenshotPolicy, Session


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="function")
def ui_session(run_config: RunConfiguration) -> Generator[Session, None, None]:
    """
    Function-scoped browser session.

    Launches the configured browser/device and closes it after the test.
    """
    session = Session.launch(run_config)
    yield session
    session.close()


# ================================================================================
# Page Model Fixtures
# ================================================================================

@pytest.fixture
def google_home(ui_session: Session) -> GoogleHomePage:
    """
    Provides GoogleHomePage, already navigated to.
    """
    page = ui_session.create_page(GoogleHomePage)
    page.go()
    return page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

def _capture_screenshot(session: Session, name: str) -> None:
    page = getattr(session.driver, "page", None)
    if page is None:
        return
    target_dir = session.config.screenshot_path
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"{name}.png"
    screenshot = page.screenshot(path=str(path), full_page=True)
    allure.attach(
        screenshot,
        name=name,
        attachment_type=allure.attachment_type.PNG,
    )
    session.log.info(f"Screenshot saved: {path}")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture screenshots after the test call.

    ``screenshot: onfail`` captures failed tests only, ``always`` every test.
    The image is saved under ``screenshotPath`` and attached to Allure.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call":
        return
    session = getattr(item, "funcargs", {}).get("ui_session")
    if session is None:
        return

    policy = session.config.screenshot
    if policy is ScreenshotPolicy.ALWAYS or (policy is ScreenshotPolicy.ON_FAIL and report.failed):
        try:
            _capture_screenshot(session, f"{item.name}_{session.session_id}")
        except Exception as e:
            # Log but don't fail if screenshot capture fails
            logger.warning(f"Failed to capture screenshot: {e}")
