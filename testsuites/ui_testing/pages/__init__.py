"""
================================================================================
Page Models
================================================================================

Page models for the example application pages.

Each page class encapsulates:
    - Element locators (lazily created wrappers)
    - Page-specific actions returning the next page model
    - Identity checks (is_at)

================================================================================
"""

from .google_pages import GoogleHomePage, GoogleResultsPage, SearchResult

__all__ = [
    "GoogleHomePage",
    "GoogleResultsPage",
    "SearchResult",
]
