# ================================================================================
# Element Actions Module
# ================================================================================
#
# Wait-safe wrappers around raw driver interactions so that test scripts never
# race the page's rendering.
#
# Key Features:
#   - Every interaction waits for its element (exists + visible) first
#   - Bounded, fixed-delay retry for flaky clicks
#   - Dropdown selection by visible text or value
#   - Navigation, iframe and screenshot helpers
#   - Intent logged before every action, values logged after every read
#
# Usage:
#   actions = ElementActions(context, log)
#   await actions.click_with_retry(context.locate("#SubmitLogin", "Sign in"))
#   await actions.type_text_clear(context.locate("#email", "Email"), "a@b.c")
#
# ================================================================================

from __future__ import annotations

import asyncio
import re
from datetime import datetime, timezone
from typing import Any, Optional

import allure

from storefront_tools.common import EnvironmentSettings, StepLogger

from .retry import RetryPolicy, poll_until, retry_async
from .target import ElementNotFoundError, ExecutionContext, Target


DEFAULT_TIMEOUT_MS = 10000
DEFAULT_CLICK_RETRIES = 3

_TIMESTAMP_SEPARATORS = re.compile(r"[:.T]")


def screenshot_name(name: str, now: Optional[datetime] = None) -> str:
    """
    Build a filesystem-safe screenshot name: `<name>_<timestamp>`.

    The timestamp is the UTC ISO-8601 time with millisecond precision, with
    ':', '.' and 'T' replaced by '-' (e.g. `login_fail_2024-05-01-09-30-05-123`).
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3]
    return f"{name}_{_TIMESTAMP_SEPARATORS.sub('-', stamp)}"


class ElementActions:
    """
    Interaction helpers over an ExecutionContext.

    All element interactions wait for the target to exist and be visible
    before acting. Only `click_with_retry` retries; every other helper
    propagates the first failure.

    Example:
        actions = ElementActions(context, log)
        email = context.locate("#email", "Email field")
        await actions.type_text_clear(email, "user@example.com")
        await actions.click_with_retry(context.locate("#SubmitLogin", "Sign in"))
    """

    def __init__(
        self,
        context: ExecutionContext,
        log: Optional[StepLogger] = None,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        poll_interval_ms: int = 100,
        click_retry_backoff_ms: int = 1000,
    ):
        """
        Initialize ElementActions.

        Args:
            context: Execution context to act against
            log: Step logger; a fresh StepLogger if not given
            default_timeout_ms: Timeout for waits when none is passed
            poll_interval_ms: Delay between condition checks while waiting
            click_retry_backoff_ms: Fixed delay between click attempts
        """
        self.context = context
        self.log = log or StepLogger()
        self.default_timeout_ms = default_timeout_ms
        self.poll_interval_ms = poll_interval_ms
        self.click_retry_backoff_ms = click_retry_backoff_ms

    @classmethod
    def from_settings(
        cls,
        context: ExecutionContext,
        settings: EnvironmentSettings,
        log: Optional[StepLogger] = None,
    ) -> "ElementActions":
        """Build helpers using the timeouts of the session settings."""
        return cls(
            context,
            log,
            default_timeout_ms=settings.selector_timeout_ms,
            poll_interval_ms=settings.poll_interval_ms,
            click_retry_backoff_ms=settings.click_retry_backoff_ms,
        )

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for_element(
        self,
        target: Target,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Wait until the target exists and is visible.

        Args:
            target: Element to wait for
            timeout_ms: Deadline in milliseconds (default: 10000)

        Raises:
            WaitTimeoutError: If the element is not visible in time
        """
        timeout_ms = self._timeout(timeout_ms)
        self.log.action("Waiting for element to be visible", element=str(target), timeout_ms=timeout_ms)

        async def _is_ready() -> bool:
            return await target.exists() and await target.visible()

        await poll_until(
            _is_ready,
            timeout_ms,
            self.poll_interval_ms,
            description=f"{target} to be visible",
        )

    async def wait_for_element_to_disappear(
        self,
        target: Target,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Wait until the target no longer exists.

        Raises:
            WaitTimeoutError: If the element is still present at the deadline
        """
        timeout_ms = self._timeout(timeout_ms)
        self.log.action("Waiting for element to disappear", element=str(target), timeout_ms=timeout_ms)

        async def _is_gone() -> bool:
            return not await target.exists()

        await poll_until(
            _is_gone,
            timeout_ms,
            self.poll_interval_ms,
            description=f"{target} to disappear",
        )

    async def wait(self, ms: int) -> None:
        """Unconditional pause, for flows with no observable readiness signal."""
        self.log.action(f"Waiting for {ms}ms")
        await asyncio.sleep(ms / 1000)

    # =========================================================================
    # Pointer & keyboard interactions
    # =========================================================================

    async def click_with_retry(
        self,
        target: Target,
        retries: int = DEFAULT_CLICK_RETRIES,
    ) -> None:
        """
        Wait for the element and click it, retrying on failure.

        Each attempt waits for the element and then clicks. Failed attempts
        are followed by a fixed pause; after the last attempt its exception
        is re-raised unchanged.

        Args:
            target: Element to click
            retries: Total number of attempts; must be at least 1

        Raises:
            ValueError: If retries is below 1 (nothing is clicked)
        """
        self.log.action("Clicking element with retry", element=str(target), retries=retries)
        policy = RetryPolicy(
            max_attempts=retries,
            backoff_seconds=self.click_retry_backoff_ms / 1000,
        )

        async def _attempt() -> None:
            await self.wait_for_element(target)
            await target.click()

        with allure.step(f"Click: {target}"):
            await retry_async(_attempt, policy, description=f"click on {target}", log=self.log)

    async def type_text_clear(self, target: Target, text: str, **options: Any) -> None:
        """
        Replace the value of an input: wait, select-all + delete, then type.

        Args:
            target: Input element
            text: Text to type
            **options: Typing options passed to the driver (e.g. delay)
        """
        shown = "*" * len(text) if "password" in str(target).lower() else text
        self.log.action("Typing text after clearing", element=str(target), text=shown)

        with allure.step(f"Type into {target}: {shown}"):
            await self.wait_for_element(target)
            await target.clear()
            await target.type_text(text, **options)

    async def hover_element(self, target: Target) -> None:
        self.log.action("Hovering over element", element=str(target))
        await self.wait_for_element(target)
        await target.hover()

    async def double_click_element(self, target: Target) -> None:
        self.log.action("Double clicking element", element=str(target))
        await self.wait_for_element(target)
        await target.double_click()

    async def right_click_element(self, target: Target) -> None:
        self.log.action("Right clicking element", element=str(target))
        await self.wait_for_element(target)
        await target.right_click()

    async def scroll_to_element(self, target: Target) -> None:
        """Scroll the target into view. Does not wait for visibility."""
        self.log.action("Scrolling to element", element=str(target))
        await target.scroll_into_view()

    # =========================================================================
    # Dropdowns
    # =========================================================================

    async def select_dropdown_by_text(self, target: Target, option_text: str) -> None:
        """
        Open a dropdown and pick the option whose text contains `option_text`.

        Raises:
            ElementNotFoundError: If no option matches
        """
        self.log.action("Selecting dropdown option", element=str(target), option_text=option_text)
        with allure.step(f"Select '{option_text}' in {target}"):
            await self.wait_for_element(target)
            await self._open_and_select(target, target.find_option_by_text(option_text))

    async def select_dropdown_by_value(self, target: Target, value: str) -> None:
        """
        Open a dropdown and pick the option with the given value attribute.

        Raises:
            ElementNotFoundError: If no option matches
        """
        self.log.action("Selecting dropdown option by value", element=str(target), value=value)
        with allure.step(f"Select value '{value}' in {target}"):
            await self.wait_for_element(target)
            await self._open_and_select(target, target.find_option_by_value(value))

    async def _open_and_select(self, dropdown: Target, option: Target) -> None:
        if not await option.exists():
            raise ElementNotFoundError(f"No {option} found")
        await dropdown.click()
        await option.click()

    # =========================================================================
    # Navigation & frames
    # =========================================================================

    async def navigate_to(self, url: str) -> None:
        self.log.action("Navigating to URL", url=url)
        with allure.step(f"Navigate to {url}"):
            await self.context.goto(url)

    async def refresh_page(self) -> None:
        """Reload the page, bypassing the browser cache."""
        self.log.action("Refreshing page")
        await self.context.reload(hard=True)

    async def get_current_url(self) -> str:
        url = await self.context.current_url()
        self.log.debug("Current URL", url=url)
        return url

    async def switch_to_iframe(self, target: Target) -> None:
        """Make the iframe the active context. Pair with switch_to_main_window()."""
        self.log.action("Switching to iframe", element=str(target))
        await self.context.switch_to_frame(target)

    async def switch_to_main_window(self) -> None:
        self.log.action("Switching to main window")
        await self.context.switch_to_main()

    async def take_screenshot(self, name: str) -> None:
        """Capture the page as `<name>_<timestamp>`."""
        full_name = screenshot_name(name)
        self.log.info(f"Taking screenshot: {full_name}")
        await self.context.screenshot(full_name)

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_element_count(self, target: Target) -> int:
        count = await target.count()
        self.log.debug("Element count", element=str(target), count=count)
        return count

    async def element_exists(self, target: Target) -> bool:
        exists = await target.exists()
        self.log.debug("Element exists", element=str(target), exists=exists)
        return exists

    async def is_element_visible(self, target: Target) -> bool:
        visible = await target.visible()
        self.log.debug("Element visible", element=str(target), visible=visible)
        return visible

    async def get_element_text(self, target: Target) -> str:
        text = await target.text()
        self.log.debug("Element text", element=str(target), text=text)
        return text

    async def get_element_attribute(self, target: Target, attribute_name: str) -> Optional[str]:
        value = await target.attribute(attribute_name)
        self.log.debug(f"Element attribute {attribute_name}", element=str(target), value=value)
        return value

    def _timeout(self, timeout_ms: Optional[int]) -> int:
        return self.default_timeout_ms if timeout_ms is None else timeout_ms


__all__ = [
    "ElementActions",
    "screenshot_name",
]
