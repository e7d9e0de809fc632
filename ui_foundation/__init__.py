"""
================================================================================
UI Foundation
================================================================================

Page-object-model foundation for browser UI tests.

Components:
    - locator: how to find elements (By + value)
    - driver: browser capability boundary, search scopes, Playwright driver
    - element_proxy: lazy, stale-aware element resolution
    - elements: typed wrappers (TextField, Button, CheckBox, ...)
    - radio_group: radio buttons sharing a name
    - page_model: PageModel, ContentBlock, lazy_element
    - configuration: layered run settings (browser, device, timeouts)
    - session: browser lifecycle for one test run
    - asserts: UI assertion helpers

================================================================================
"""

from .configuration import Browser, Device, RunConfiguration, ScreenshotPolicy
from .driver import BrowserDriver, DocumentScope, ElementScope, PlaywrightDriver
from .element_proxy import ElementProxy, ProxyMode
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
from .exceptions import (
    ElementNotFoundError,
    InvalidConfigurationError,
    OptionNotFoundError,
    UiFoundationError,
    WaitTimeoutError,
)
from .locator import By, Locator
from .page_model import ContentBlock, LazyCell, PageModel, lazy_element
from .radio_group import RadioGroup
from .session import Session

__version__ = "1.0.0"

__all__ = [
    "Browser",
    "Device",
    "RunConfiguration",
    "ScreenshotPolicy",
    "BrowserDriver",
    "DocumentScope",
    "ElementScope",
    "PlaywrightDriver",
    "ElementProxy",
    "ProxyMode",
    "BusyIndicator",
    "Button",
    "CheckBox",
    "Link",
    "RadioButton",
    "SelectList",
    "TextBlock",
    "TextField",
    "ElementNotFoundError",
    "InvalidConfigurationError",
    "OptionNotFoundError",
    "UiFoundationError",
    "WaitTimeoutError",
    "By",
    "Locator",
    "ContentBlock",
    "LazyCell",
    "PageModel",
    "lazy_element",
    "RadioGroup",
    "Session",
]
