"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - URL building against the configured storefront base URL
    - Element targets with human-readable descriptions
    - Access to the action and assertion helpers
    - Failure capture for reports

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from storefront_tools.common import EnvironmentSettings, StepLogger
from storefront_tools.report_tools import attach_text

from .assertions import UIAssertions
from .element_actions import ElementActions
from .target import ExecutionContext, Target


class BasePage:
    """
    Base class for all page objects.

    Pages never talk to the driver directly: interactions go through
    `self.actions`, checks through `self.check`.

    Usage:
        class AuthenticationPage(BasePage):
            URL_PATH = "?controller=authentication&back=my-account"

            async def sign_in(self, email: str, password: str):
                await self.actions.type_text_clear(self.element("#email", "Email"), email)
    """

    # Override in subclasses (appended to the base URL)
    URL_PATH: str = ""
    PAGE_TITLE: str = ""

    def __init__(
        self,
        context: ExecutionContext,
        settings: EnvironmentSettings,
        log: Optional[StepLogger] = None,
        actions: Optional[ElementActions] = None,
        assertions: Optional[UIAssertions] = None,
    ):
        """
        Initialize page object.

        Args:
            context: Execution context of the test session
            settings: Session settings (base URL and timeouts)
            log: Step logger
            actions: Shared action helpers; built from settings if not given
            assertions: Shared assertion helpers; built from settings if not given
        """
        self.context = context
        self.settings = settings
        self.log = log or StepLogger()
        self.actions = actions or ElementActions.from_settings(context, settings, self.log)
        self.check = assertions or UIAssertions.from_settings(context, settings, self.log)

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def element(self, selector: str, description: str = "") -> Target:
        """Target for `selector` in the active frame."""
        return self.context.locate(selector, description)

    async def navigate(self) -> None:
        """Navigate to this page."""
        self.log.step(f"Open {self.PAGE_TITLE or self.url}")
        await self.actions.navigate_to(self.url)

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Screenshot (`failure_<test>_<timestamp>`)
            - Current URL
        """
        with allure.step("Capture failure details"):
            await self.actions.take_screenshot(f"failure_{test_name}")
            attach_text(await self.actions.get_current_url(), name="Current URL")


__all__ = [
    "BasePage",
]
