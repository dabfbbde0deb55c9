"""
================================================================================
UI Assertions Module
================================================================================

Declarative expectations against the page, with readable default messages
and one logged `TEST ASSERTION` entry per call.

Key Features:
- Presence/visibility assertions that wait up to a timeout
- Text, URL, count, attribute, class and state comparisons
- Plain value comparisons for computed values
- Failures carry message, expected and actual values

Failures are never retried here; flaky interactions belong in the action
layer (`ElementActions.click_with_retry`).

================================================================================
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from storefront_tools.common import EnvironmentSettings, StepLogger

from .retry import WaitTimeoutError, poll_until
from .target import ExecutionContext, Target


DEFAULT_ASSERTION_TIMEOUT_MS = 10000


class UIAssertionError(AssertionError):
    """An expected condition did not hold."""

    def __init__(self, message: str, expected: Any = None, actual: Any = None):
        self.message = message
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message} (expected: {expected!r}, actual: {actual!r})")


class AssertionTimeoutError(UIAssertionError):
    """An expected condition was not observed before the assertion timeout."""

    def __init__(self, message: str, expected: Any, actual: Any, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"{message} [timed out after {timeout_ms}ms]", expected, actual)


class UIAssertions:
    """
    Assertion helpers bound to an execution context.

    Example:
        check = UIAssertions(context, log)
        await check.assert_element_visible(context.locate(".alert-danger"))
        await check.assert_text_equals(heading, "AUTHENTICATION")
        await check.assert_url_contains("controller=my-account")
    """

    def __init__(
        self,
        context: ExecutionContext,
        log: Optional[StepLogger] = None,
        default_timeout_ms: int = DEFAULT_ASSERTION_TIMEOUT_MS,
        poll_interval_ms: int = 100,
    ):
        """
        Initialize assertions.

        Args:
            context: Execution context used for URL reads
            log: Step logger; a fresh StepLogger if not given
            default_timeout_ms: Timeout for waiting assertions
            poll_interval_ms: Delay between checks while waiting
        """
        self.context = context
        self.log = log or StepLogger()
        self.default_timeout_ms = default_timeout_ms
        self.poll_interval_ms = poll_interval_ms

    @classmethod
    def from_settings(
        cls,
        context: ExecutionContext,
        settings: EnvironmentSettings,
        log: Optional[StepLogger] = None,
    ) -> "UIAssertions":
        return cls(
            context,
            log,
            default_timeout_ms=settings.assertion_timeout_ms,
            poll_interval_ms=settings.poll_interval_ms,
        )

    # =========================================================================
    # Presence & visibility (waiting)
    # =========================================================================

    async def assert_element_visible(
        self,
        target: Target,
        message: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Element exists and is visible within the timeout."""
        message = message or "Element should be visible"
        self.log.assertion(message, element=str(target))

        async def _visible() -> bool:
            return await target.exists() and await target.visible()

        await self._wait_for(_visible, message, timeout_ms, expected="visible", actual="not visible")

    async def assert_element_not_visible(
        self,
        target: Target,
        message: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Element is absent or hidden within the timeout."""
        message = message or "Element should not be visible"
        self.log.assertion(message, element=str(target))

        async def _hidden() -> bool:
            return not (await target.exists() and await target.visible())

        await self._wait_for(_hidden, message, timeout_ms, expected="not visible", actual="visible")

    async def assert_element_exists(
        self,
        target: Target,
        message: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        message = message or "Element should exist"
        self.log.assertion(message, element=str(target))
        await self._wait_for(target.exists, message, timeout_ms, expected="exists", actual="missing")

    async def assert_element_not_exists(
        self,
        target: Target,
        message: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        message = message or "Element should not exist"
        self.log.assertion(message, element=str(target))

        async def _missing() -> bool:
            return not await target.exists()

        await self._wait_for(_missing, message, timeout_ms, expected="missing", actual="exists")

    # =========================================================================
    # Text & URL
    # =========================================================================

    async def assert_text_contains(
        self,
        target: Target,
        expected_text: str,
        message: Optional[str] = None,
    ) -> None:
        """Case-sensitive substring match on the element's rendered text."""
        message = message or f"Text should contain: {expected_text}"
        self.log.assertion(message, element=str(target), expected_text=expected_text)
        actual = await target.text()
        self._verify(expected_text in actual, message, expected_text, actual)

    async def assert_text_not_contains(
        self,
        target: Target,
        unexpected_text: str,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"Text should not contain: {unexpected_text}"
        self.log.assertion(message, element=str(target), unexpected_text=unexpected_text)
        actual = await target.text()
        self._verify(unexpected_text not in actual, message, unexpected_text, actual)

    async def assert_text_equals(
        self,
        target: Target,
        expected_text: str,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"Text should equal: {expected_text}"
        self.log.assertion(message, element=str(target), expected_text=expected_text)
        actual = await target.text()
        self._verify(actual == expected_text, message, expected_text, actual)

    async def assert_url_contains(
        self,
        expected_url_part: str,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"URL should contain: {expected_url_part}"
        self.log.assertion(message, expected_url_part=expected_url_part)
        current_url = await self.context.current_url()
        self._verify(expected_url_part in current_url, message, expected_url_part, current_url)

    async def assert_url_equals(
        self,
        expected_url: str,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"URL should equal: {expected_url}"
        self.log.assertion(message, expected_url=expected_url)
        current_url = await self.context.current_url()
        self._verify(current_url == expected_url, message, expected_url, current_url)

    # =========================================================================
    # Count, attributes & state
    # =========================================================================

    async def assert_element_count(
        self,
        target: Target,
        expected_count: int,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"Element count should be: {expected_count}"
        self.log.assertion(message, element=str(target), expected_count=expected_count)
        actual = await target.count()
        self._verify(actual == expected_count, message, expected_count, actual)

    async def assert_element_has_attribute(
        self,
        target: Target,
        attribute_name: str,
        expected_value: Optional[str],
        message: Optional[str] = None,
    ) -> None:
        message = message or (
            f"Element should have attribute {attribute_name} with value: {expected_value}"
        )
        self.log.assertion(
            message,
            element=str(target),
            attribute_name=attribute_name,
            expected_value=expected_value,
        )
        actual = await target.attribute(attribute_name)
        self._verify(actual == expected_value, message, expected_value, actual)

    async def assert_element_has_class(
        self,
        target: Target,
        class_name: str,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"Element should have class: {class_name}"
        self.log.assertion(message, element=str(target), class_name=class_name)
        has_class = await target.has_class(class_name)
        self._verify(has_class, message, True, has_class)

    async def assert_element_not_has_class(
        self,
        target: Target,
        class_name: str,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"Element should not have class: {class_name}"
        self.log.assertion(message, element=str(target), class_name=class_name)
        has_class = await target.has_class(class_name)
        self._verify(not has_class, message, False, has_class)

    async def assert_element_enabled(self, target: Target, message: Optional[str] = None) -> None:
        message = message or "Element should be enabled"
        self.log.assertion(message, element=str(target))
        enabled = await target.enabled()
        self._verify(enabled, message, True, enabled)

    async def assert_element_disabled(self, target: Target, message: Optional[str] = None) -> None:
        message = message or "Element should be disabled"
        self.log.assertion(message, element=str(target))
        enabled = await target.enabled()
        self._verify(not enabled, message, False, enabled)

    async def assert_checkbox_checked(self, target: Target, message: Optional[str] = None) -> None:
        message = message or "Checkbox should be checked"
        self.log.assertion(message, element=str(target))
        checked = await target.checked()
        self._verify(checked, message, True, checked)

    async def assert_checkbox_not_checked(self, target: Target, message: Optional[str] = None) -> None:
        message = message or "Checkbox should not be checked"
        self.log.assertion(message, element=str(target))
        checked = await target.checked()
        self._verify(not checked, message, False, checked)

    # =========================================================================
    # Plain values
    # =========================================================================

    async def assert_value_equals(self, actual: Any, expected: Any, message: Optional[str] = None) -> None:
        message = message or f"Value should equal: {expected}"
        self.log.assertion(message, actual=actual, expected=expected)
        self._verify(actual == expected, message, expected, actual)

    async def assert_value_not_equals(self, actual: Any, expected: Any, message: Optional[str] = None) -> None:
        message = message or f"Value should not equal: {expected}"
        self.log.assertion(message, actual=actual, expected=expected)
        self._verify(actual != expected, message, expected, actual)

    # =========================================================================
    # Internals
    # =========================================================================

    @staticmethod
    def _verify(passed: bool, message: str, expected: Any, actual: Any) -> None:
        if not passed:
            raise UIAssertionError(message, expected, actual)

    async def _wait_for(
        self,
        condition: Callable[[], Awaitable[bool]],
        message: str,
        timeout_ms: Optional[int],
        expected: Any,
        actual: Any,
    ) -> None:
        timeout_ms = self.default_timeout_ms if timeout_ms is None else timeout_ms
        try:
            await poll_until(condition, timeout_ms, self.poll_interval_ms, description=message)
        except WaitTimeoutError as e:
            raise AssertionTimeoutError(message, expected, actual, timeout_ms) from e


__all__ = [
    "AssertionTimeoutError",
    "UIAssertionError",
    "UIAssertions",
]
