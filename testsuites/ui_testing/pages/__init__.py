"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for storefront pages.

Each page class encapsulates:
    - Element selectors
    - Page-specific flows
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .authentication_page import AuthenticationPage
from .search_page import SearchPage

__all__ = [
    "AuthenticationPage",
    "SearchPage",
]
