"""
================================================================================
Google Page Models
================================================================================

Example consumers of the foundation: the Google home page and results page.

Highlights:
  - Device-aware locators (phone layout uses a different search box class)
  - Navigation methods return the page model of the page they land on
  - Results rendered as ContentBlocks scoped under the results container

NOTE:
  Google markup changes often; locators here are illustrative.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure

from ui_foundation import (
    Button,
    ContentBlock,
    Device,
    Link,
    Locator,
    PageModel,
    TextBlock,
    TextField,
    lazy_element,
)


class GoogleHomePage(PageModel):
    """Google search landing page."""

    URL_PATH = "https://www.google.com"
    PAGE_TITLE = "Google"

    @lazy_element
    def search_box(self) -> TextField:
        if self.config.device is Device.PHONE:
            return self.text_field(Locator.class_name("gLFyf"))
        return self.text_field(Locator.name("q"))

    @lazy_element
    def search_button(self) -> Button:
        return self.button(Locator.name("btnK"))

    @allure.step("Search for '{search_text}'")
    def enter_text_and_search(self, search_text: str) -> "GoogleResultsPage":
        """
        Enter text in the search box and submit it.

        Returns:
            Page model of the Google results page
        """
        self.search_box.set_text(search_text)
        self.search_box.press_enter()
        return GoogleResultsPage(self.session)


class SearchResult(ContentBlock):
    """One organic result inside the results container."""

    @lazy_element
    def heading(self) -> TextBlock:
        return self.text_block(Locator.tag_name("h3"))

    @lazy_element
    def title_link(self) -> Link:
        return self.link(Locator.tag_name("a"))


class GoogleResultsPage(PageModel):
    """Google search results page."""

    URL_PATH = "https://www.google.com/search"

    @lazy_element
    def search_box(self) -> TextField:
        return self.text_field(Locator.name("q"))

    @lazy_element
    def results_container(self) -> TextBlock:
        return self.text_block(Locator.id("search"))

    def is_at(self) -> bool:
        return "/search" in self.current_url

    def results(self) -> List[SearchResult]:
        """Result blocks currently on the page. Re-created on every call."""
        self.results_container.wait_until_visible()
        handles = self.scope.find(Locator.css("#search div.g"))
        return [
            SearchResult.from_handle(self.session, handle, label=f"result[{index}]")
            for index, handle in enumerate(handles)
        ]
