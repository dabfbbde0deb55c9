"""
================================================================================
Target & Execution Context Interfaces
================================================================================

The framework's helpers and assertions only talk to these two interfaces:

    Target            - handle to zero-or-more matched elements; every read
                        re-evaluates against the page (lazy)
    ExecutionContext  - the active browsing context (page or iframe) that
                        navigation, screenshots and locating happen against

`playwright_adapter` provides the Playwright implementation; unit tests use
in-memory fakes.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional


class ElementNotFoundError(LookupError):
    """Raised when a requested element or option is absent from the matched set."""
    pass


class Target(ABC):
    """Abstract handle to the elements matched by a selector."""

    description: str = "element"

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @abstractmethod
    async def exists(self) -> bool:
        """At least one element matches."""

    @abstractmethod
    async def visible(self) -> bool:
        """The first matched element is rendered and visible."""

    @abstractmethod
    async def text(self) -> str:
        """Rendered text of the first matched element."""

    @abstractmethod
    async def attribute(self, name: str) -> Optional[str]:
        """Attribute value of the first matched element, None if absent."""

    @abstractmethod
    async def count(self) -> int:
        """Number of matched elements."""

    @abstractmethod
    async def has_class(self, class_name: str) -> bool:
        ...

    @abstractmethod
    async def enabled(self) -> bool:
        ...

    @abstractmethod
    async def checked(self) -> bool:
        ...

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    @abstractmethod
    async def click(self) -> None:
        ...

    @abstractmethod
    async def double_click(self) -> None:
        ...

    @abstractmethod
    async def right_click(self) -> None:
        ...

    @abstractmethod
    async def hover(self) -> None:
        ...

    @abstractmethod
    async def scroll_into_view(self) -> None:
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Select the current value and delete it."""

    @abstractmethod
    async def type_text(self, text: str, **options: Any) -> None:
        ...

    # -------------------------------------------------------------------------
    # Dropdown options
    # -------------------------------------------------------------------------

    @abstractmethod
    def find_option_by_text(self, text: str) -> "Target":
        """Option of this dropdown whose visible text matches."""

    @abstractmethod
    def find_option_by_value(self, value: str) -> "Target":
        """Option of this dropdown whose value attribute matches."""

    def __str__(self) -> str:
        return self.description


class ExecutionContext(ABC):
    """Active browsing context that actions and reads are performed against."""

    @abstractmethod
    async def current_url(self) -> str:
        ...

    @abstractmethod
    async def goto(self, url: str) -> None:
        ...

    @abstractmethod
    async def reload(self, hard: bool = True) -> None:
        """Reload the page; `hard` bypasses the browser cache."""

    @abstractmethod
    async def screenshot(self, name: str) -> Path:
        """Capture the page and return the written file."""

    @abstractmethod
    async def switch_to_frame(self, target: Target) -> None:
        ...

    @abstractmethod
    async def switch_to_main(self) -> None:
        ...

    @abstractmethod
    def locate(self, selector: str, description: str = "") -> Target:
        """Build a lazy Target for `selector` in the active frame."""


__all__ = [
    "ElementNotFoundError",
    "ExecutionContext",
    "Target",
]
