"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for the storefront suites.

Features:
    - Browser selection from settings (chrome/edge/firefox/safari)
    - One isolated context per test session
    - Default timeouts from settings
    - Video recording with failed-only retention

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    BrowserType,
    Page,
    Playwright,
)

from storefront_tools.common import (
    EnvironmentSettings,
    StepLogger,
    render_artifact_path,
)

from .playwright_adapter import PlaywrightContext


# Settings browser name -> (Playwright engine, release channel)
BROWSER_ENGINES: Dict[str, Tuple[str, Optional[str]]] = {
    "chrome": ("chromium", None),
    "chromium": ("chromium", None),
    "edge": ("chromium", "msedge"),
    "firefox": ("firefox", None),
    "safari": ("webkit", None),
    "webkit": ("webkit", None),
}


class BrowserManager:
    """
    Manages the browser and per-test contexts.

    Usage:
        async with BrowserManager(settings, log) as manager:
            page, context = await manager.new_session()
            await context.goto(settings.base_url)
    """

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        settings: EnvironmentSettings,
        log: Optional[StepLogger] = None,
    ):
        """
        Initialize browser manager.

        Args:
            settings: Session settings (browser, headless, timeouts, artifacts)
            log: Step logger
        """
        self.settings = settings
        self.log = log or StepLogger()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: list[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    @property
    def headless(self) -> bool:
        """CI runs are always headless."""
        return self.settings.headless or self.settings.is_ci

    @property
    def browser_name(self) -> str:
        return self.settings.browser.lower()

    def _launcher(self) -> Tuple[BrowserType, Optional[str]]:
        try:
            engine, channel = BROWSER_ENGINES[self.browser_name]
        except KeyError:
            raise ValueError(
                f"Unsupported browser '{self.settings.browser}'. "
                f"Choose one of: {', '.join(sorted(BROWSER_ENGINES))}"
            ) from None
        return getattr(self._playwright, engine), channel

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()
        launcher, channel = self._launcher()

        launch_options: Dict[str, Any] = {"headless": self.headless}
        if channel:
            launch_options["channel"] = channel

        self._browser = await launcher.launch(**launch_options)
        self.log.debug(
            f"Browser started: {self.settings.browser_selector}",
            engine=launcher.name,
            ci=self.settings.is_ci,
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            await context.close()
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        self.log.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new isolated browser context.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext with timeouts from settings
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, **options}
        if self.settings.video_recording:
            context_options.setdefault("record_video_dir", self.settings.video_path)

        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(self.settings.selector_timeout_ms)
        context.set_default_navigation_timeout(self.settings.test_timeout_ms)
        self._contexts.append(context)
        return context

    async def new_session(self, **context_options: Any) -> Tuple[Page, PlaywrightContext]:
        """
        Open a page in a fresh context.

        Returns:
            Tuple of (Playwright Page, PlaywrightContext over it)
        """
        context = await self.new_context(**context_options)
        page = await context.new_page()
        return page, PlaywrightContext(page, screenshot_dir=self.settings.screenshot_path)

    async def finalize_video(
        self,
        page: Page,
        failed: bool,
        fixture: str,
        test: str,
    ) -> Optional[Path]:
        """
        Keep the page's recording for failed tests only.

        Must be called after the page is closed.

        Returns:
            Path of the kept recording, or None
        """
        video = page.video
        if video is None:
            return None

        if not failed:
            await video.delete()
            return None

        target = render_artifact_path(
            self.settings.video_path,
            self.settings.video_path_pattern,
            fixture=fixture,
            test=test,
            browser=self.browser_name,
            when=datetime.now(),
        )
        # Playwright records webm; keep the real container extension
        target = target.with_suffix(Path(await video.path()).suffix)
        target.parent.mkdir(parents=True, exist_ok=True)
        await video.save_as(str(target))
        await video.delete()
        self.log.info(f"Video saved: {target}")
        return target

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BROWSER_ENGINES",
    "BrowserManager",
]
