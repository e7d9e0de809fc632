"""
================================================================================
Custom UI Asserts
================================================================================

Assertion helpers that render element diagnostics alongside the caller's
message. Each check is recorded as an Allure step.

Usage:
    assert_displayed(home.search_box, "Search box should be visible")
    assert_at_page(results, "Search should land on the results page")

================================================================================
"""

from __future__ import annotations

from typing import Any

import allure


def _fail(message: str, subject: Any, detail: str) -> None:
    raise AssertionError(f"{message}\n  {subject}: {detail}")


def assert_exists(element: Any, message: str = "Element should exist") -> None:
    with allure.step(f"Assert exists: {element}"):
        if not element.exists():
            _fail(message, element, "not found on the page")


def assert_not_exists(element: Any, message: str = "Element should not exist") -> None:
    with allure.step(f"Assert does not exist: {element}"):
        if element.exists():
            _fail(message, element, "found on the page")


def assert_displayed(element: Any, message: str = "Element should be displayed") -> None:
    with allure.step(f"Assert displayed: {element}"):
        if not element.is_displayed():
            state = "present but hidden" if element.exists() else "not found on the page"
            _fail(message, element, state)


def assert_not_displayed(element: Any, message: str = "Element should not be displayed") -> None:
    with allure.step(f"Assert not displayed: {element}"):
        if element.is_displayed():
            _fail(message, element, "is visible")


def assert_at_page(page: Any, message: str = "Browser should be on the expected page") -> None:
    with allure.step(f"Assert at page: {type(page).__name__}"):
        if not page.is_at():
            _fail(
                message,
                type(page).__name__,
                f"current title '{page.title}', url '{page.current_url}'",
            )


__all__ = [
    "assert_exists",
    "assert_not_exists",
    "assert_displayed",
    "assert_not_displayed",
    "assert_at_page",
]
