"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser instance per manager
    - Context isolation (one context per test)
    - Tracing with screenshots and DOM snapshots
    - Browser configuration from config.yaml / environment

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Playwright,
)

from .config_loader import ConfigLoader


# Default output directory for trace archives
TRACE_DIR = Path(__file__).parent.parent.parent.parent / "reports" / "traces"

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages browser instances and contexts for UI testing.

    Usage:
        manager = BrowserManager()
        await manager.start()
        context = await manager.new_context()
        await manager.start_tracing(context)
        page = await context.new_page()
        ...
        await manager.stop_tracing(context, "my_test")
        await manager.close()
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (defaults to `browser.headless`)
            browser_type: 'chromium', 'firefox' or 'webkit' (defaults to `browser.type`)
            config: Configuration loader
        """
        config = config or ConfigLoader()
        if headless is None:
            headless = config.get("browser.headless", True)
        if browser_type is None:
            browser_type = config.get("browser.type", "chromium")
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{browser_type}', expected one of {SUPPORTED_BROWSERS}"
            )

        self.headless = headless
        self.browser_type = browser_type
        self.viewport = {
            "width": config.get("browser.viewport_width", 1920),
            "height": config.get("browser.viewport_height", 1080),
        }

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: list[BrowserContext] = []

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }

        try:
            self._browser = await browser_launcher.launch(**launch_options)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(
        self,
        **options: Any,
    ) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": self.viewport,
            **options,
        }
        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)

        return context

    async def start_tracing(self, context: BrowserContext) -> None:
        """Start recording a trace with screenshots and DOM snapshots."""
        await context.tracing.start(screenshots=True, snapshots=True)
        logger.debug("Tracing started")

    async def stop_tracing(self, context: BrowserContext, name: str) -> Path:
        """
        Stop tracing and save the archive.

        Args:
            context: Context being traced
            name: Archive name (without extension)

        Returns:
            Path to the saved trace zip (open with `playwright show-trace`)
        """
        TRACE_DIR.mkdir(parents=True, exist_ok=True)
        path = TRACE_DIR / f"{name}.zip"
        await context.tracing.stop(path=str(path))
        logger.info(f"Trace saved to: {path}")
        return path


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
    "TRACE_DIR",
]
