"""
================================================================================
In-Memory Browser Fakes
================================================================================

A tiny DOM plus a BrowserDriver implementation over it, so the resolution
layer can be unit tested without launching a browser.

    - FakeElement: tag, attributes, text, visibility flags, children
    - FakeDriver: locator matching, staleness, interaction log, navigation

Re-rendering is modeled by ``FakeDriver.replace(old, new)``: the old element
becomes stale (detached) and the new one takes its place in the tree.

================================================================================
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Dict, List, Optional, Tuple

from ui_foundation.locator import By, Locator


_ids = itertools.count(1)


class FakeElement:
    """A DOM node with the flags the driver reports."""

    def __init__(
        self,
        tag: str = "div",
        attrs: Optional[Dict[str, str]] = None,
        text: str = "",
        displayed: bool = True,
        enabled: bool = True,
        selected: bool = False,
        children: Optional[List["FakeElement"]] = None,
        selectors: Tuple[str, ...] = (),
    ):
        self.node_id = next(_ids)
        self.tag = tag
        self.attrs = dict(attrs or {})
        self.text = text
        self.displayed = displayed
        self.enabled = enabled
        self.selected = selected
        self.stale = False
        self.children: List[FakeElement] = []
        self.parent: Optional[FakeElement] = None
        # Raw css/xpath selectors this node answers to
        self.selectors = selectors
        self.on_click: Optional[Callable[[], None]] = None
        for child in children or []:
            self.append(child)

    def append(self, child: "FakeElement") -> "FakeElement":
        child.parent = self
        self.children.append(child)
        return child

    def descendants(self):
        for child in self.children:
            yield child
            yield from child.descendants()

    def detach(self) -> None:
        self.stale = True
        for node in self.descendants():
            node.stale = True

    def matches(self, locator: Locator) -> bool:
        value = locator.value
        if locator.by is By.ID:
            return self.attrs.get("id") == value
        if locator.by is By.NAME:
            return self.attrs.get("name") == value
        if locator.by is By.CLASS_NAME:
            classes = self.attrs.get("class", "").split()
            return all(name in classes for name in value.split())
        if locator.by is By.TAG_NAME:
            return self.tag == value
        if locator.by is By.LINK_TEXT:
            return self.tag == "a" and self.text.strip() == value
        return value in self.selectors

    def __repr__(self) -> str:
        return f"<FakeElement #{self.node_id} {self.tag} {self.attrs}>"


class FakeDriver:
    """
    BrowserDriver over a list of FakeElement trees.

    Attributes:
        elements: Top-level nodes of the document
        calls: Interaction log as (action, node, argument) tuples
        find_count: Number of ``find`` calls made
        script_results: Values returned by successive ``execute_script`` calls
    """

    def __init__(self, elements: Optional[List[FakeElement]] = None):
        self.elements: List[FakeElement] = list(elements or [])
        self.calls: List[Tuple[str, Any, Any]] = []
        self.find_count = 0
        self.script_results: List[Any] = []
        self.scripts: List[str] = []
        self.title = ""
        self.current_url = "about:blank"
        self.page_source = "<html></html>"
        self.history: List[str] = []

    # =========================================================================
    # Document Editing
    # =========================================================================

    def add(self, element: FakeElement) -> FakeElement:
        self.elements.append(element)
        return element

    def remove(self, element: FakeElement) -> None:
        if element.parent is not None:
            element.parent.children.remove(element)
        else:
            self.elements.remove(element)
        element.detach()

    def replace(self, old: FakeElement, new: FakeElement) -> FakeElement:
        """Swap ``old`` for ``new`` in place; ``old`` and its subtree go stale."""
        siblings = old.parent.children if old.parent is not None else self.elements
        siblings[siblings.index(old)] = new
        new.parent = old.parent
        old.detach()
        return new

    def _all(self):
        for element in self.elements:
            yield element
            yield from element.descendants()

    # =========================================================================
    # BrowserDriver
    # =========================================================================

    def find(self, locator: Locator, root: Any = None) -> List[FakeElement]:
        self.find_count += 1
        nodes = root.descendants() if root is not None else self._all()
        return [node for node in nodes if not node.stale and node.matches(locator)]

    def is_stale(self, handle: FakeElement) -> bool:
        return handle.stale

    def is_displayed(self, handle: FakeElement) -> bool:
        return handle.displayed

    def is_enabled(self, handle: FakeElement) -> bool:
        return handle.enabled

    def is_selected(self, handle: FakeElement) -> bool:
        return handle.selected

    def click(self, handle: FakeElement) -> None:
        self.calls.append(("click", handle, None))
        input_type = handle.attrs.get("type")
        if input_type == "checkbox":
            handle.selected = not handle.selected
        elif input_type == "radio":
            for node in self._all():
                if node.attrs.get("name") == handle.attrs.get("name"):
                    node.selected = False
            handle.selected = True
        if handle.on_click is not None:
            handle.on_click()

    def send_keys(self, handle: FakeElement, text: str) -> None:
        self.calls.append(("send_keys", handle, text))
        handle.attrs["value"] = handle.attrs.get("value", "") + text

    def press_key(self, handle: FakeElement, key: str) -> None:
        self.calls.append(("press_key", handle, key))

    def clear(self, handle: FakeElement) -> None:
        self.calls.append(("clear", handle, None))
        handle.attrs["value"] = ""

    def get_attribute(self, handle: FakeElement, name: str) -> Optional[str]:
        return handle.attrs.get(name)

    def get_text(self, handle: FakeElement) -> str:
        return handle.text

    def select_option(
        self,
        handle: FakeElement,
        value: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.calls.append(("select_option", handle, label if label is not None else value))
        for option in handle.children:
            if label is not None:
                option.selected = option.text.strip() == label
            else:
                option.selected = option.attrs.get("value") == value

    def go_to_url(self, url: str) -> None:
        self.history.append(url)
        self.current_url = url

    def back(self) -> None:
        self.calls.append(("back", None, None))

    def forward(self) -> None:
        self.calls.append(("forward", None, None))

    def refresh(self) -> None:
        self.calls.append(("refresh", None, None))

    def execute_script(self, script: str) -> Any:
        self.scripts.append(script)
        if self.script_results:
            return self.script_results.pop(0)
        return True

    def actions(self, action: Optional[str] = None) -> List[Tuple[str, Any, Any]]:
        """Logged interactions, optionally filtered by action name."""
        return [call for call in self.calls if action is None or call[0] == action]
