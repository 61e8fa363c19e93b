"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation with explicit wait policies
    - Smart element location
    - Screenshot and debugging utilities
    - Wait strategies
    - Background response capture for failure diagnostics

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import Page, Response

from .config_loader import ConfigLoader
from .smart_locator import SmartLocator, LocatorStrategy


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"

# Keep only the most recent captured responses
MAX_CAPTURED_RESPONSES = 20


class BasePage:
    """
    Base class for all page objects.

    Provides common functionality for:
        - Navigation and URL handling
        - Smart element interaction
        - Screenshot capture
        - Response logging for debugging
        - Wait utilities

    Usage:
        class HomePage(BasePage):
            BASE_URL_KEY = "github.base_url"
            DEFAULT_BASE_URL = "https://github.com"
            URL_PATH = "/"

            async def open(self):
                await self.navigate(wait_for="networkidle")
    """

    # Override in subclasses
    BASE_URL_KEY: str = "ui.base_url"
    DEFAULT_BASE_URL: str = "http://localhost:3000"
    URL_PATH: str = "/"  # default for `self.url_path`

    # Responses whose URL contains this fragment are captured
    CAPTURE_URL_FRAGMENT: str = "/api/"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the site (defaults to config / env)
            config: Configuration loader (defaults to the shared instance)
        """
        self.page = page
        self.config = config or ConfigLoader()
        if not base_url:
            base_url = self.config.get(self.BASE_URL_KEY, self.DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")
        self.url_path = self.URL_PATH
        self.smart = SmartLocator(page)

        self._captured_responses: List[Dict[str, Any]] = []
        self._setup_response_capture()

    def _setup_response_capture(self) -> None:
        """Set up response capture for debugging."""

        async def capture_response(response: Response) -> None:
            if self.CAPTURE_URL_FRAGMENT not in response.url:
                return
            self._captured_responses.append({
                "timestamp": datetime.now().isoformat(),
                "url": response.url,
                "status": response.status,
            })
            if len(self._captured_responses) > MAX_CAPTURED_RESPONSES:
                self._captured_responses.pop(0)

        self.page.on("response", capture_response)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.url_path}"

    @property
    def captured_responses(self) -> List[Dict[str, Any]]:
        return list(self._captured_responses)

    async def navigate(
        self,
        wait_for: str = "networkidle",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
            timeout: Navigation timeout in milliseconds (Playwright default if None)
        """
        await self.navigate_to(self.url_path, wait_for=wait_for, timeout=timeout)

    async def navigate_to(
        self,
        path: str,
        wait_for: str = "networkidle",
        timeout: Optional[int] = None,
    ) -> None:
        """
        Navigate to specific path (or query string) under the base URL.

        Args:
            path: URL path to navigate to
            wait_for: Wait condition
            timeout: Navigation timeout in milliseconds
        """
        full_url = f"{self.base_url}{path}"
        options: Dict[str, Any] = {"wait_until": wait_for}
        if timeout is not None:
            options["timeout"] = timeout
        with allure.step(f"Navigate to {full_url}"):
            await self.page.goto(full_url, **options)
            logger.debug(f"Navigated to: {full_url} (wait_until={wait_for})")

    def smart_locator(
        self,
        primary: LocatorStrategy,
        fallbacks: Optional[List[LocatorStrategy]] = None,
        name: str = "custom_element",
    ) -> SmartLocator:
        """
        Build a SmartLocator in *element mode* with primary + fallback selectors.

        Args:
            primary: Primary strategy (selector string or locator builder)
            fallbacks: Fallback strategies tried in order when primary fails
            name: Human-readable element name for logging/Allure

        Returns:
            SmartLocator instance configured for a single element
        """
        locators: Dict[str, LocatorStrategy] = {"primary": primary}
        for i, fb in enumerate(fallbacks or [], start=1):
            locators[f"fallback_{i}"] = fb
        return SmartLocator(self.page, element_name=name, locators=locators)

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def settle(self, milliseconds: int) -> None:
        """Fixed pause for UI effects that expose no event to wait on."""
        if milliseconds > 0:
            await self.page.wait_for_timeout(milliseconds)

    async def wait_for_url(
        self,
        url_pattern: Any,
        timeout: int = 10000,
    ) -> None:
        """
        Wait for URL to match pattern.

        Args:
            url_pattern: URL glob, regex or predicate
            timeout: Timeout in milliseconds
        """
        with allure.step(f"Wait for URL: {url_pattern}"):
            await self.page.wait_for_url(url_pattern, timeout=timeout)

    async def wait_for_network_idle(self, timeout: int = 5000) -> None:
        """Wait for network to be idle."""
        await self.page.wait_for_load_state("networkidle", timeout=timeout)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def body_text_preview(self, limit: int = 500) -> str:
        """First `limit` characters of the page body text."""
        text = await self.page.locator("body").text_content() or ""
        return text[:limit]

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Screenshot
            - Current URL and body text preview
            - Recently captured responses
            - Locator health report (fallbacks used so far)
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", attach_to_allure=True)

            preview = await self.body_text_preview()
            logger.info(f"Current URL: {self.page.url}")
            logger.info(f"Page content after failure: {preview}")
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )
            allure.attach(
                preview,
                name="Body text preview",
                attachment_type=allure.attachment_type.TEXT,
            )

            if self._captured_responses:
                allure.attach(
                    json.dumps(self._captured_responses[-10:], indent=2),
                    name="Recent responses",
                    attachment_type=allure.attachment_type.JSON,
                )

            allure.attach(
                self.smart.get_health_report(),
                name="Locator health",
                attachment_type=allure.attachment_type.TEXT,
            )


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
