"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the storefront suites.

Components:
    - target: driver-neutral element / context interfaces
    - playwright_adapter: Playwright implementation of those interfaces
    - retry: bounded retry and deadline polling
    - element_actions: wait-safe interaction helpers
    - assertions: logged UI assertions
    - data_builder: immutable randomized test data
    - page_base: base page object
    - browser_manager: browser lifecycle management

Author: Automation Team
License: MIT
================================================================================
"""

from .target import ElementNotFoundError, ExecutionContext, Target
from .retry import RetryPolicy, WaitTimeoutError, poll_until, retry_async
from .element_actions import ElementActions, screenshot_name
from .assertions import AssertionTimeoutError, UIAssertionError, UIAssertions
from .data_builder import (
    AddressData,
    DataFactory,
    ProductData,
    UserData,
    build_address_data,
    build_product_data,
    build_user_data,
)
from .page_base import BasePage
from .playwright_adapter import PlaywrightContext, PlaywrightTarget
from .browser_manager import BrowserManager

__all__ = [
    "ElementNotFoundError",
    "ExecutionContext",
    "Target",
    "RetryPolicy",
    "WaitTimeoutError",
    "poll_until",
    "retry_async",
    "ElementActions",
    "screenshot_name",
    "AssertionTimeoutError",
    "UIAssertionError",
    "UIAssertions",
    "AddressData",
    "DataFactory",
    "ProductData",
    "UserData",
    "build_address_data",
    "build_product_data",
    "build_user_data",
    "BasePage",
    "PlaywrightContext",
    "PlaywrightTarget",
    "BrowserManager",
]
