"""
================================================================================
Radio Group
================================================================================

A set of radio buttons linked by a common ``name`` attribute.

The ``value`` attribute of each input is assumed to exist and be unique within
the group. Members are bound (static) RadioButtons; when any of them goes
stale the whole mapping is rebuilt from a fresh query, never patched.

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

import allure
from loguru import logger

from .elements import RadioButton
from .exceptions import InvalidConfigurationError, OptionNotFoundError
from .locator import Locator


class RadioGroup:
    """
    Radio buttons sharing one name.

    Args:
        scope: Search scope; the name is assumed to be unique to this set within it
        group_name: Shared ``name`` attribute of the inputs
        label: Creator name for diagnostics
    """

    def __init__(self, scope: Any, group_name: str, label: str = ""):
        if scope is None:
            raise InvalidConfigurationError("Search scope for radio buttons cannot be None!")
        self.scope = scope
        self.group_name = group_name
        self.label = label
        self._buttons: Optional[Dict[str, RadioButton]] = None

    def bind_label(self, label: str) -> None:
        if not self.label:
            self.label = label

    def __str__(self) -> str:
        name = self.label or "RadioGroup"
        return f"{name} [name={self.group_name}]"

    def _populate(self) -> None:
        driver = self.scope.driver
        buttons: Dict[str, RadioButton] = {}

        for handle in self.scope.find(Locator.name(self.group_name)):
            value = driver.get_attribute(handle, "value") or ""
            if value in buttons:
                logger.warning(f"{self} has duplicate value '{value}', keeping the first")
                continue
            buttons[value] = RadioButton.from_handle(
                driver, handle, label=f"{self.group_name}[{value}]"
            )

        logger.debug(f"Populated {self} with {len(buttons)} buttons")
        self._buttons = buttons

    def _needs_requery(self) -> bool:
        if not self._buttons:
            return True
        return any(button.is_requery_needed() for button in self._buttons.values())

    def _buttons_now(self) -> Dict[str, RadioButton]:
        if self._needs_requery():
            self._populate()
        return self._buttons

    def members(self) -> List[RadioButton]:
        """The radio buttons in this set."""
        return list(self._buttons_now().values())

    def option_values(self) -> Set[str]:
        """The available options (value attributes) in this set."""
        return set(self._buttons_now())

    def count(self) -> int:
        return len(self._buttons_now())

    def get(self, value: str) -> RadioButton:
        """
        The radio button for ``value``.

        Raises:
            OptionNotFoundError: When no member has that value
        """
        buttons = self._buttons_now()
        if value not in buttons:
            raise OptionNotFoundError(value, buttons.keys(), owner=str(self))
        return buttons[value]

    def select(self, value: str, selected: bool = True) -> None:
        """Select or deselect the radio button for ``value``."""
        with allure.step(f"Select '{value}' in {self}"):
            self.get(value).set_selected(selected)

    def all_visible(self) -> bool:
        """True when no member is hidden. Not equivalent to ``not all_hidden()``."""
        return not any(not button.is_displayed() for button in self.members())

    def all_hidden(self) -> bool:
        """True when no member is visible. Not equivalent to ``not all_visible()``."""
        return not any(button.is_displayed() for button in self.members())


__all__ = [
    "RadioGroup",
]
