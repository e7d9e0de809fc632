"""
Repository-level pytest configuration.

Provides:
  - Command line options mapped onto RunConfiguration run parameters
  - Safe environment defaults for local runs
  - Logger initialization from the run configuration
  - Live browser tests skipped unless ``--run-ui`` is given

Settings resolve as: command line > UI_* environment > config/ui_settings.yaml.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

import pytest

from ui_foundation import RunConfiguration
from ui_foundation.log_setup import init_logger


# Safe defaults, only applied when not provided by the user/CI
ENV_DEFAULTS = {
    "UI_BASE_URL": "http://localhost:3000",
    "UI_SETTINGS_PATH": str(Path(__file__).parent / "config" / "ui_settings.yaml"),
}


def pytest_addoption(parser):
    group = parser.getgroup("ui", "UI test run configuration")
    group.addoption("--browser", action="store", default=None, help="chrome, firefox or ie")
    group.addoption("--device", action="store", default=None, help="desktop, tablet or phone")
    group.addoption("--headed", action="store_true", default=False, help="Show the browser window")
    group.addoption("--screenshot", action="store", default=None, help="never, onfail or always")
    group.addoption("--run-ui", action="store_true", default=False, help="Run live browser tests")


def _run_parameters(config) -> Dict[str, str]:
    params = {
        "browser": config.getoption("--browser"),
        "device": config.getoption("--device"),
        "screenshot": config.getoption("--screenshot"),
    }
    if config.getoption("--headed"):
        params["headless"] = "false"
    return {key: value for key, value in params.items() if value is not None}


def pytest_configure(config):
    for key, value in ENV_DEFAULTS.items():
        os.environ.setdefault(key, value)

    config.run_config = RunConfiguration.load(run_parameters=_run_parameters(config))
    init_logger(config.run_config)


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-ui"):
        return
    skip_ui = pytest.mark.skip(reason="live browser test, use --run-ui to run")
    for item in items:
        if "ui" in item.keywords:
            item.add_marker(skip_ui)


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def run_config(pytestconfig) -> RunConfiguration:
    """Run configuration shared by the whole test session."""
    return pytestconfig.run_config
