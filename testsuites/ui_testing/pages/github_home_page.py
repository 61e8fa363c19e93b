"""
================================================================================
GitHub Home Page Object (Async / Playwright)
================================================================================

Page object for the public GitHub homepage.

Locators are built with Playwright's role-based API (get_by_role), which
tracks what users and assistive technology see rather than markup details.

================================================================================
"""

from __future__ import annotations

import allure
from playwright.async_api import Locator, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.page_base import PageBase


class GitHubHomePage(PageBase):
    """GitHub homepage page object (async)."""

    BASE_URL_KEY = "github.base_url"
    DEFAULT_BASE_URL = "https://github.com"
    URL_PATH = "/"

    SEARCH_RESULTS = '[data-testid="search-results"]'
    SEARCH_RESULT_ITEM = '[data-testid="repository-list-item"]'

    @property
    def sign_in_link(self) -> Locator:
        return self.page.get_by_role("link", name="Sign in")

    @property
    def search_button(self) -> Locator:
        return self.page.get_by_role("button", name="Search or jump to…")

    @property
    def search_field(self) -> Locator:
        return self.page.get_by_role("combobox", name="Search")

    @allure.step("Open GitHub homepage")
    async def goto(self) -> "GitHubHomePage":
        await self.navigate(wait_for="networkidle")
        return self

    @allure.step("Click sign in")
    async def click_sign_in(self) -> None:
        await self.sign_in_link.click()

    @allure.step("Search for '{keyword}'")
    async def search(self, keyword: str) -> None:
        """Open the search dialog, type the keyword and submit."""
        await self.search_button.click()
        await self.search_field.fill(keyword)
        await self.search_field.press("Enter")
        await self.wait_for_network_idle(timeout=15000)

    async def is_sign_in_link_visible(self) -> bool:
        return await self.sign_in_link.is_visible()

    async def is_search_field_visible(self) -> bool:
        return await self.search_button.is_visible()

    async def expect_sign_in_visible(self) -> None:
        await expect(self.sign_in_link).to_be_visible()

    async def expect_search_field_editable(self) -> None:
        await self.search_button.click()
        await expect(self.search_field).to_be_editable()

    async def get_page_title(self) -> str:
        return await self.page.title()

    async def wait_for_search_results(self, timeout: int = 10000) -> None:
        """Wait for the results container, or network idle if it never shows."""
        try:
            await self.page.wait_for_selector(self.SEARCH_RESULTS, timeout=timeout)
        except PlaywrightTimeoutError:
            await self.wait_for_network_idle(timeout=timeout)

    async def get_search_result_count(self) -> int:
        return await self.page.locator(self.SEARCH_RESULT_ITEM).count()


__all__ = ["GitHubHomePage"]
