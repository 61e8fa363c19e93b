"""
================================================================================
Natural Gas Page Object (Async / Playwright)
================================================================================

Kleenheat natural gas landing page: open it and follow the "Residential"
link, role-based first and plain text second.

================================================================================
"""

from __future__ import annotations

import re
from typing import Optional

import allure
from playwright.async_api import Locator, Page

from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import ElementNotFoundError


RESIDENTIAL = re.compile("residential", re.I)


def residential_link_by_role(page: Page) -> Locator:
    return page.get_by_role("link", name=RESIDENTIAL)


class NaturalGasPage(PageBase):
    """Kleenheat natural gas page object (async)."""

    BASE_URL_KEY = "kleenheat.base_url"
    DEFAULT_BASE_URL = "https://www.kleenheat.com.au"
    URL_PATH = "/natural-gas"

    def __init__(self, page: Page, base_url: str = "", config=None):
        super().__init__(page, base_url=base_url, config=config)
        self.url_path = self.config.get("kleenheat.natural_gas_path", self.URL_PATH)
        self.residential_link = self.smart_locator(
            residential_link_by_role,
            fallbacks=["text=/Residential/i"],
            name="residential_link",
        )

    @allure.step("Open natural gas page")
    async def goto(self) -> "NaturalGasPage":
        await self.navigate(wait_for="networkidle")
        return self

    @allure.step("Click Residential link")
    async def click_residential(self, timeout: int = 10000) -> Optional[str]:
        """
        Click the Residential link.

        Returns:
            Name of the strategy that found the link ("primary" is role-based)

        Raises:
            ElementNotFoundError: Neither strategy found a visible link
        """
        result = await self.residential_link.resolve(timeout=timeout)
        if not result.found:
            raise ElementNotFoundError(
                "Residential link not found: " + "; ".join(result.errors)
            )
        await result.locator.click()
        return result.strategy_name

    async def wait_for_residential_url(self, timeout: int = 15000) -> None:
        await self.wait_for_url(RESIDENTIAL, timeout=timeout)


__all__ = ["NaturalGasPage", "RESIDENTIAL"]
