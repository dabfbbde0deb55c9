"""
================================================================================
Playwright Adapter
================================================================================

Playwright implementation of the `Target` / `ExecutionContext` interfaces.

Features:
    - Lazy targets: the selector is re-resolved against the active frame on
      every read or action, so a target created before an iframe switch or a
      re-render still points at the live DOM
    - Native <select> support: option targets are selected through their
      parent dropdown
    - Cache-bypassing reloads and Allure-attached screenshots

Usage:
    context = PlaywrightContext(page, screenshot_dir="screenshots")
    login_button = context.locate("#SubmitLogin", "Sign in button")
    await login_button.click()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger
from playwright.async_api import Frame, Locator, Page

from storefront_tools.report_tools import attach_png

from .target import ElementNotFoundError, ExecutionContext, Target


def css_string(value: str) -> str:
    """Quote a value as a CSS string literal (for attribute selectors)."""
    escaped = []
    for char in value:
        if char in ('"', "\\"):
            escaped.append("\\" + char)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            # hex escape; the trailing space ends it
            escaped.append(f"\\{ord(char):x} ")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


class PlaywrightTarget(Target):
    """Target backed by a CSS/Playwright selector in the active frame."""

    def __init__(
        self,
        context: "PlaywrightContext",
        selector: str,
        description: str = "",
    ):
        self._context = context
        self.selector = selector
        self.description = description or selector

    @property
    def locator(self) -> Locator:
        """Fresh Playwright locator for the current frame."""
        return self._context.scope.locator(self.selector)

    async def exists(self) -> bool:
        return await self.locator.count() > 0

    async def visible(self) -> bool:
        return await self.locator.first.is_visible()

    async def text(self) -> str:
        return await self.locator.first.inner_text()

    async def attribute(self, name: str) -> Optional[str]:
        return await self.locator.first.get_attribute(name)

    async def count(self) -> int:
        return await self.locator.count()

    async def has_class(self, class_name: str) -> bool:
        return await self.locator.first.evaluate(
            "(el, name) => el.classList.contains(name)", class_name
        )

    async def enabled(self) -> bool:
        return await self.locator.first.is_enabled()

    async def checked(self) -> bool:
        return await self.locator.first.is_checked()

    async def click(self) -> None:
        await self.locator.first.click()

    async def double_click(self) -> None:
        await self.locator.first.dblclick()

    async def right_click(self) -> None:
        await self.locator.first.click(button="right")

    async def hover(self) -> None:
        await self.locator.first.hover()

    async def scroll_into_view(self) -> None:
        await self.locator.first.scroll_into_view_if_needed()

    async def clear(self) -> None:
        element = self.locator.first
        await element.select_text()
        await element.press("Delete")

    async def type_text(self, text: str, **options: Any) -> None:
        await self.locator.first.press_sequentially(text, **options)

    def find_option_by_text(self, text: str) -> "PlaywrightOptionTarget":
        return PlaywrightOptionTarget(self, text=text)

    def find_option_by_value(self, value: str) -> "PlaywrightOptionTarget":
        return PlaywrightOptionTarget(self, value=value)

    async def content_frame(self) -> Frame:
        """Frame rendered by this (iframe) element."""
        handle = await self.locator.first.element_handle()
        frame = await handle.content_frame() if handle else None
        if frame is None:
            raise ElementNotFoundError(f"{self.description} is not an iframe")
        return frame


class PlaywrightOptionTarget(PlaywrightTarget):
    """
    An <option> of a dropdown.

    Browsers do not dispatch clicks to native options, so `click()` selects
    the option through the parent <select> instead.
    """

    def __init__(
        self,
        dropdown: PlaywrightTarget,
        text: Optional[str] = None,
        value: Optional[str] = None,
    ):
        if (text is None) == (value is None):
            raise ValueError("Specify exactly one of text or value")
        if text is not None:
            description = f"option '{text}' of {dropdown.description}"
        else:
            description = f"option [value={value}] of {dropdown.description}"
        super().__init__(dropdown._context, dropdown.selector, description)
        self._dropdown = dropdown
        self._text = text
        self._value = value

    @property
    def locator(self) -> Locator:
        options = self._dropdown.locator
        if self._value is not None:
            return options.locator(f"option[value={css_string(self._value)}]")
        # Case-sensitive substring match on the option text
        return options.locator("option").filter(has_text=re.compile(re.escape(self._text)))

    async def click(self) -> None:
        option = self.locator.first
        value = await option.get_attribute("value")
        dropdown = self._dropdown.locator.first
        if value is not None:
            await dropdown.select_option(value=value)
        else:
            label = (await option.inner_text()).strip()
            await dropdown.select_option(label=label)


class PlaywrightContext(ExecutionContext):
    """
    Execution context over a Playwright page.

    Tracks the active frame; targets created through `locate()` resolve in
    whichever frame is active when they are used.
    """

    def __init__(
        self,
        page: Page,
        screenshot_dir: Union[str, Path] = "screenshots",
    ):
        self.page = page
        self.screenshot_dir = Path(screenshot_dir)
        self._frame: Optional[Frame] = None

    @property
    def scope(self) -> Union[Page, Frame]:
        """Active frame, or the page when no iframe is selected."""
        return self._frame or self.page

    def locate(self, selector: str, description: str = "") -> PlaywrightTarget:
        return PlaywrightTarget(self, selector, description)

    async def current_url(self) -> str:
        return await self.scope.evaluate("() => window.location.href")

    async def goto(self, url: str) -> None:
        self._frame = None
        await self.page.goto(url)

    async def reload(self, hard: bool = True) -> None:
        self._frame = None
        if not hard:
            await self.page.reload()
            return
        # location.reload(true) asks the browser to skip its cache; the
        # reload is deferred so evaluate() returns before the page unloads
        async with self.page.expect_navigation():
            await self.page.evaluate("() => setTimeout(() => window.location.reload(true), 0)")

    async def screenshot(self, name: str) -> Path:
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        path = self.screenshot_dir / f"{name}.png"
        await self.page.screenshot(path=str(path), full_page=True)
        attach_png(path, name=name)
        logger.debug(f"Screenshot saved: {path}")
        return path

    async def switch_to_frame(self, target: Target) -> None:
        if not isinstance(target, PlaywrightTarget):
            raise TypeError(f"Cannot switch to non-Playwright target: {target!r}")
        self._frame = await target.content_frame()

    async def switch_to_main(self) -> None:
        self._frame = None


__all__ = [
    "PlaywrightContext",
    "PlaywrightOptionTarget",
    "PlaywrightTarget",
]
