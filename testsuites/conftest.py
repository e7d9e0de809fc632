"""
================================================================================
Test Suites Pytest Configuration
================================================================================

This module registers common markers for the unit and UI suites and
auto-marks tests by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for release"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework tests against the in-memory driver"
    )
    config.addinivalue_line(
        "markers", "ui: Live browser tests (need --run-ui)"
    )


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config, items):
    """
    Auto-add suite markers based on the test's directory.
    """
    for item in items:
        if "ui_testing" in item.path.parts:
            item.add_marker(pytest.mark.ui)

        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    run_config = getattr(config, "run_config", None)
    return [
        "",
        "=" * 60,
        "UI Test Foundation",
        f"Run configuration: {run_config!r}",
        "=" * 60,
        "",
    ]
