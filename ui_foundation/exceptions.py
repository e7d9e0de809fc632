"""
================================================================================
UI Foundation Exceptions
================================================================================

Typed failures raised by the element resolution layer.

Every error carries enough context to tell *which* element failed:
    - the locator that was evaluated
    - the search scope it was evaluated in
    - the creator label (page attribute that built the element)

================================================================================
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class UiFoundationError(Exception):
    """Base class for all UI foundation failures."""
    pass


class ElementNotFoundError(UiFoundationError):
    """Raised when an operation needs an element and resolution found none."""

    def __init__(
        self,
        locator: Any = None,
        scope: str = "",
        label: str = "",
        kind: str = "element",
        detail: str = "",
    ):
        self.locator = locator
        self.scope = scope
        self.label = label
        self.kind = kind

        if label:
            lines = [f"Expected {label} as {kind} does not exist on the page!"]
        else:
            lines = [f"Expected {kind} object does not exist on the page!"]
        if locator is not None:
            where = f" in {scope}" if scope else ""
            lines.append(f'Locator: "{locator}" found no elements{where}.')
        if detail:
            lines.append(detail)
        super().__init__("\n".join(lines))


class WaitTimeoutError(UiFoundationError):
    """Raised when a polling wait does not see its condition before the timeout."""

    def __init__(self, description: str, elapsed: float, timeout: float):
        self.description = description
        self.elapsed = elapsed
        self.timeout = timeout
        super().__init__(
            f"Timeout after {elapsed:.2f}s (limit {timeout:.2f}s) "
            f"waiting for: {description}"
        )


class OptionNotFoundError(UiFoundationError):
    """Raised when a select list or radio group has no matching option."""

    def __init__(
        self,
        option: str,
        available: Optional[Iterable[str]] = None,
        owner: str = "",
    ):
        self.option = option
        self.available = sorted(available or [])
        message = f"Option '{option}' not found"
        if owner:
            message += f" in {owner}"
        message += f". Available options: {self.available}"
        super().__init__(message)


class InvalidConfigurationError(UiFoundationError):
    """Raised on misuse: a required collaborator is missing or unsupported."""
    pass


__all__ = [
    "UiFoundationError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "OptionNotFoundError",
    "InvalidConfigurationError",
]
