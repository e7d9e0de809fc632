"""
================================================================================
Run Configuration
================================================================================

Layered settings for a UI test run.

Configuration hierarchy (highest to lowest priority):
    1. Run parameters (pytest options, ``add_setting`` calls)
    2. Environment variables with the ``UI_`` prefix (UI_BROWSER=firefox)
    3. Static app settings from YAML (config/ui_settings.yaml)

Keys are case-insensitive and ignore ``_`` / ``-`` separators, so
``commandTimeout``, ``command_timeout`` and ``UI_COMMAND_TIMEOUT`` are the
same setting. Missing settings read as None; typed accessors apply defaults.

Usage:
    >>> config = RunConfiguration.load(run_parameters={"browser": "firefox"})
    >>> config.browser
    <Browser.FIREFOX: 'firefox'>
    >>> config.device
    <Device.DESKTOP: 'desktop'>

================================================================================
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from loguru import logger

from .exceptions import InvalidConfigurationError
from .wait_helpers import DEFAULT_POLL_INTERVAL, DEFAULT_WAIT_TIMEOUT, WaitConfig


# Relative to the working directory; override with the settingsPath setting
DEFAULT_SETTINGS_PATH = Path("config") / "ui_settings.yaml"
ENV_PREFIX = "UI_"

DEFAULT_COMMAND_TIMEOUT = 120


class Browser(str, Enum):
    CHROME = "chrome"
    FIREFOX = "firefox"
    IE = "ie"


class Device(str, Enum):
    DESKTOP = "desktop"
    TABLET = "tablet"
    PHONE = "phone"


class ScreenshotPolicy(str, Enum):
    NEVER = "never"
    ON_FAIL = "onfail"
    ALWAYS = "always"


# Playwright device descriptors used to emulate mobile layouts
DEVICE_EMULATION: Dict[Device, Optional[str]] = {
    Device.DESKTOP: None,
    Device.TABLET: "iPad (gen 7)",
    Device.PHONE: "iPhone 6",
}

_BROWSER_ALIASES: Dict[str, Browser] = {
    "chrome": Browser.CHROME,
    "chromium": Browser.CHROME,
    "firefox": Browser.FIREFOX,
    "ie": Browser.IE,
    "internetexplorer": Browser.IE,
}


def normalize_key(name: str) -> str:
    """Canonical form of a setting name."""
    return name.lower().replace("_", "").replace("-", "").replace(".", "")


def _normalize(settings: Mapping[str, Any]) -> Dict[str, str]:
    return {
        normalize_key(str(key)): str(value)
        for key, value in settings.items()
        if value is not None and not isinstance(value, (dict, list))
    }


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes", "on")


class RunConfiguration:
    """
    Ordered settings layers; the first layer that defines a key wins.

    Args:
        run_parameters: Highest priority settings for this run
        app_settings: Static defaults (usually loaded from YAML)
    """

    def __init__(
        self,
        run_parameters: Optional[Mapping[str, Any]] = None,
        app_settings: Optional[Mapping[str, Any]] = None,
    ):
        self._layers: List[Dict[str, str]] = [
            _normalize(run_parameters or {}),
            _normalize(app_settings or {}),
        ]

    @classmethod
    def load(
        cls,
        run_parameters: Optional[Mapping[str, Any]] = None,
        settings_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "RunConfiguration":
        """
        Build the standard stack: run parameters, ``UI_*`` env vars, YAML file.

        Args:
            run_parameters: Explicit settings (e.g. from the command line)
            settings_path: YAML app settings; when omitted, the ``settingsPath``
                run parameter or ``UI_SETTINGS_PATH``, else DEFAULT_SETTINGS_PATH
            environ: Environment mapping; ``os.environ`` if omitted
        """
        environ = os.environ if environ is None else environ
        from_env = {
            key[len(ENV_PREFIX):]: value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX)
        }
        merged = dict(_normalize(from_env))
        merged.update(_normalize(run_parameters or {}))
        path = settings_path or merged.get(normalize_key("settingsPath")) or DEFAULT_SETTINGS_PATH
        return cls(merged, load_app_settings(Path(path)))

    # =========================================================================
    # Raw Access
    # =========================================================================

    def get_setting(self, name: str) -> Optional[str]:
        """Value of ``name`` from the first layer defining it, else None."""
        key = normalize_key(name)
        for layer in self._layers:
            if key in layer:
                return layer[key]
        return None

    def get(self, name: str, default: Any = None) -> Any:
        value = self.get_setting(name)
        return default if value is None else value

    def add_setting(self, name: str, value: Any) -> None:
        """Add or replace a run parameter (highest priority)."""
        self._layers[0][normalize_key(name)] = str(value)

    def _get_float(self, name: str, default: float) -> float:
        value = self.get_setting(name)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Setting '{name}'={value!r} is not a number, using {default}")
            return default

    # =========================================================================
    # Typed Accessors
    # =========================================================================

    @property
    def browser(self) -> Browser:
        """Browser kind. Missing or unrecognized values fall back to chrome."""
        value = (self.get_setting("browser") or "").strip().lower()
        return _BROWSER_ALIASES.get(value, Browser.CHROME)

    @property
    def device(self) -> Device:
        """Device kind. Missing or unrecognized values fall back to desktop."""
        value = (self.get_setting("device") or "").strip().lower()
        try:
            return Device(value)
        except ValueError:
            return Device.DESKTOP

    def device_emulation(self, device: Optional[Device] = None) -> Optional[str]:
        """Playwright device descriptor name, None for desktop."""
        return DEVICE_EMULATION[device or self.device]

    @property
    def command_timeout(self) -> int:
        """Driver command timeout in whole seconds (default 120)."""
        return int(self._get_float("commandTimeout", DEFAULT_COMMAND_TIMEOUT))

    @property
    def wait_timeout(self) -> float:
        return self._get_float("waitTimeout", DEFAULT_WAIT_TIMEOUT)

    @property
    def poll_interval(self) -> float:
        return self._get_float("pollInterval", DEFAULT_POLL_INTERVAL)

    @property
    def wait_config(self) -> WaitConfig:
        return WaitConfig(timeout=self.wait_timeout, poll_interval=self.poll_interval)

    @property
    def screenshot(self) -> ScreenshotPolicy:
        value = (self.get_setting("screenshot") or "").strip().lower()
        try:
            return ScreenshotPolicy(value)
        except ValueError:
            return ScreenshotPolicy.NEVER

    @property
    def screenshot_path(self) -> Path:
        return Path(self.get("screenshotPath", "screenshots"))

    @property
    def base_url(self) -> str:
        return self.get("baseUrl", "").rstrip("/")

    @property
    def headless(self) -> bool:
        return _to_bool(self.get("headless", "true"))

    def __repr__(self) -> str:
        return (
            f"<RunConfiguration browser={self.browser.value} "
            f"device={self.device.value} command_timeout={self.command_timeout}>"
        )


def load_app_settings(path: Path) -> Dict[str, Any]:
    """
    Load static app settings from YAML.

    A missing file yields no settings. Nested sections are flattened
    (``logging: {level: DEBUG}`` becomes ``logginglevel``).

    Raises:
        InvalidConfigurationError: When the file is not valid YAML
    """
    path = Path(path)
    if not path.exists():
        logger.warning(
            f"App settings file not found: {path}. "
            f"Using defaults and run parameters only."
        )
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(f"Invalid YAML in settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Settings file {path} must contain a mapping")

    logger.debug(f"Loaded app settings from: {path}")
    return _flatten(data)


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=name))
        else:
            flat[name] = value
    return flat


__all__ = [
    "Browser",
    "Device",
    "ScreenshotPolicy",
    "RunConfiguration",
    "DEVICE_EMULATION",
    "DEFAULT_SETTINGS_PATH",
    "load_app_settings",
    "normalize_key",
]
