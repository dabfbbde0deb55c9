# ================================================================================
# Retry & Wait Combinators
# ================================================================================
#
# Generic building blocks used by the action and assertion layers:
#
#   - RetryPolicy / retry_async: run a fallible coroutine up to N times with a
#     fixed delay between attempts; the final failure is re-raised unchanged
#   - poll_until: evaluate an async condition until it holds or a deadline
#     passes
#
# Usage:
#   await retry_async(lambda: target.click(), RetryPolicy(max_attempts=3))
#   await poll_until(target.visible, timeout_ms=10000, description="banner")
#
# ================================================================================

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from loguru import logger


T = TypeVar("T")


class WaitTimeoutError(TimeoutError):
    """Raised when a wait condition is not met within its deadline."""

    def __init__(self, description: str, timeout_ms: int):
        self.description = description
        self.timeout_ms = timeout_ms
        super().__init__(f"Timed out after {timeout_ms}ms waiting for {description}")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry behavior for fallible operations.

    Attributes:
        max_attempts: Total number of attempts, including the first one
        backoff_seconds: Fixed delay between attempts
    """
    max_attempts: int = 3
    backoff_seconds: float = 1.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.backoff_seconds < 0:
            raise ValueError(f"backoff_seconds must be >= 0, got {self.backoff_seconds}")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    description: str = "operation",
    log: Any = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> T:
    """
    Run `operation` until it succeeds or the attempt budget is exhausted.

    Args:
        operation: Zero-argument coroutine function to call on each attempt
        policy: Attempt count and fixed backoff
        description: Operation name for log messages
        log: Logger with warning/error methods (loguru logger by default)
        sleep: Awaitable sleep function, replaceable in tests

    Returns:
        The result of the first successful attempt

    Raises:
        The exception of the final attempt, unmodified
    """
    log = log or logger

    for attempt in range(1, policy.max_attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if attempt == policy.max_attempts:
                log.error(
                    f"All {policy.max_attempts} attempts failed for {description}: {e}"
                )
                raise
            log.warning(
                f"Attempt {attempt}/{policy.max_attempts} failed for "
                f"{description}: {e}. Retrying in {policy.backoff_seconds}s..."
            )
            await sleep(policy.backoff_seconds)

    # range() is never empty because max_attempts >= 1
    raise AssertionError("unreachable")


async def poll_until(
    condition: Callable[[], Awaitable[bool]],
    timeout_ms: int,
    interval_ms: int = 100,
    description: str = "condition",
) -> None:
    """
    Wait until an async condition evaluates truthy.

    The condition is evaluated at least once. A WaitTimeoutError is raised
    only after the deadline has passed on the event loop's monotonic clock.

    Args:
        condition: Zero-argument coroutine function returning a bool
        timeout_ms: Deadline in milliseconds
        interval_ms: Delay between evaluations in milliseconds
        description: What is being waited for (used in the error)

    Raises:
        WaitTimeoutError: If the condition never held before the deadline
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000
    interval = max(interval_ms, 1) / 1000

    while True:
        if await condition():
            return
        remaining = deadline - loop.time()
        if remaining <= 0:
            raise WaitTimeoutError(description, timeout_ms)
        await asyncio.sleep(min(interval, remaining))


__all__ = [
    "RetryPolicy",
    "WaitTimeoutError",
    "poll_until",
    "retry_async",
]
