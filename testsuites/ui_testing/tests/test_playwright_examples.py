"""
================================================================================
Playwright Example Tests
================================================================================

Short, locator-first examples against playwright.dev and github.com:
  - role / label based locators
  - web-first assertions (`expect`) instead of fixed sleeps
  - soft checks collected and reported together

================================================================================
"""

import re

import allure
import pytest
from playwright.async_api import Page, expect


@allure.epic("UI Testing")
@allure.feature("Playwright Examples")
@pytest.mark.live
class TestPlaywrightDocs:
    """playwright.dev basics."""

    @allure.title("Docs site has Playwright in its title")
    @pytest.mark.smoke
    @pytest.mark.asyncio
    async def test_has_title(self, page: Page):
        await page.goto("https://playwright.dev/")
        await expect(page).to_have_title(re.compile("Playwright"))

    @allure.title("Get started link opens the installation page")
    @pytest.mark.asyncio
    async def test_get_started_link(self, page: Page):
        await page.goto("https://playwright.dev/")
        await page.get_by_role("link", name="Get started").click()
        await expect(page.get_by_role("heading", name="Installation")).to_be_visible()

    @allure.title("GitHub star button is reachable by its aria-label")
    @pytest.mark.asyncio
    async def test_click_github_star(self, page: Page):
        await page.goto("https://playwright.dev/")
        await page.get_by_label("Star microsoft/playwright on GitHub").click()


@allure.epic("UI Testing")
@allure.feature("Playwright Examples")
@pytest.mark.live
@pytest.mark.github
class TestGitHubExamples:
    """Direct-locator GitHub examples (no page object)."""

    @allure.title("Repository link on the repo page")
    @pytest.mark.asyncio
    async def test_repo_link(self, page: Page):
        await page.goto("https://github.com/microsoft/playwright")

        repo_link = page.locator('a[href="/microsoft/playwright"]').first
        await expect(repo_link).to_be_visible()
        await repo_link.click()

        await expect(page).to_have_url("https://github.com/microsoft/playwright")

    @allure.title("Search result links to microsoft/playwright")
    @pytest.mark.asyncio
    async def test_search_finds_repo(self, page: Page):
        await page.goto("https://github.com/")
        await page.get_by_role("button", name="Search or jump to…").click()
        search = page.get_by_role("combobox", name="Search")
        await search.fill("playwright")
        await search.press("Enter")

        link = page.get_by_role("link", name=re.compile(r"microsoft/playwright", re.I)).first
        await expect(link).to_be_visible()
        await expect(link).to_be_enabled()
        await expect(link).to_have_attribute("href", "/microsoft/playwright")
        await link.click()

    @allure.title("Soft checks: every failure is reported, not only the first")
    @pytest.mark.asyncio
    async def test_soft_checks(self, page: Page):
        await page.goto("https://github.com")

        failures = []
        checks = [
            ("title", expect(page).to_have_title(re.compile("GitHub"))),
            ("sign in", expect(page.get_by_role("link", name="Sign in")).to_be_visible()),
            ("homepage logo", expect(page.get_by_role("link", name="Homepage")).to_be_visible()),
        ]
        for name, check in checks:
            try:
                await check
            except AssertionError as e:
                failures.append(f"{name}: {e}")

        assert not failures, "\n".join(failures)
