"""
================================================================================
Locator
================================================================================

Immutable description of how to find elements within a search scope.

Each locator has two renderings:
    - ``str(locator)``: diagnostic form used in error messages (``By.name: q``)
    - ``locator.selector``: selector string understood by the Playwright engine

Usage:
    >>> Locator.name("q")
    Locator(by=<By.NAME: 'name'>, value='q')
    >>> str(Locator.id("search"))
    'By.id: search'

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class By(str, Enum):
    """Supported location strategies."""
    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    TAG_NAME = "tag name"
    CSS = "css"
    XPATH = "xpath"
    LINK_TEXT = "link text"


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _xpath_literal(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    return "concat(" + ", '\"', ".join(f'"{p}"' for p in parts) + ")"


@dataclass(frozen=True)
class Locator:
    """A strategy plus its value."""

    by: By
    value: str

    def __str__(self) -> str:
        label = {
            By.ID: "id",
            By.NAME: "name",
            By.CLASS_NAME: "className",
            By.TAG_NAME: "tagName",
            By.CSS: "cssSelector",
            By.XPATH: "xpath",
            By.LINK_TEXT: "linkText",
        }[self.by]
        return f"By.{label}: {self.value}"

    @property
    def selector(self) -> str:
        """Selector string for the Playwright selector engine."""
        if self.by is By.ID:
            return f"[id={_quote(self.value)}]"
        if self.by is By.NAME:
            return f"[name={_quote(self.value)}]"
        if self.by is By.CLASS_NAME:
            return "." + ".".join(self.value.split())
        if self.by is By.TAG_NAME:
            return self.value
        if self.by is By.XPATH:
            return f"xpath={self.value}"
        if self.by is By.LINK_TEXT:
            return f"xpath=.//a[normalize-space(.)={_xpath_literal(self.value)}]"
        return self.value

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls(By.ID, value)

    @classmethod
    def name(cls, value: str) -> "Locator":
        return cls(By.NAME, value)

    @classmethod
    def class_name(cls, value: str) -> "Locator":
        return cls(By.CLASS_NAME, value)

    @classmethod
    def tag_name(cls, value: str) -> "Locator":
        return cls(By.TAG_NAME, value)

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls(By.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls(By.XPATH, value)

    @classmethod
    def link_text(cls, value: str) -> "Locator":
        return cls(By.LINK_TEXT, value)


__all__ = [
    "By",
    "Locator",
]
