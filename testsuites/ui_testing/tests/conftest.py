"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Browser and page lifecycle management (one context per test)
- Page Object fixtures
- Pages with mocked routes and with tracing
- A routed fake savings calculator site for browser tests without network
- Screenshot capture on failure

================================================================================
"""

import os
from typing import AsyncGenerator, Dict

import allure
import pytest
from loguru import logger
from playwright.async_api import BrowserContext, Page, Route
from playwright.async_api import Error as PlaywrightError

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.pages.github_home_page import GitHubHomePage
from testsuites.ui_testing.pages.natural_gas_page import NaturalGasPage
from testsuites.ui_testing.pages.savings_calculator_page import SavingsCalculatorPage
from testsuites.ui_testing.tests.fake_site import (
    RESULT_HTML,
    build_fake_site,
    install_fake_site,
)


# ================================================================================
# Fake savings calculator site
# ================================================================================

class TimingsConfig:
    """Config stub with short waits for the fake site."""

    def __init__(self, data: Dict[str, object]):
        self.data = data

    def get(self, key, default=None):
        return self.data.get(key, default)


@pytest.fixture
def fast_config() -> TimingsConfig:
    return TimingsConfig({
        "savings_calculator.goto_settle": 0,
        "savings_calculator.input_timeout": 2000,
        "savings_calculator.suggestion_api_wait": 100,
        "savings_calculator.suggestion_timeout": 3000,
        "savings_calculator.hover_settle": 50,
        "savings_calculator.navigation_timeout": 3000,
        "savings_calculator.navigation_settle": 100,
        "savings_calculator.outcome_timeout": 1000,
        "savings_calculator.outcome_poll_interval": 100,
    })


@pytest.fixture
def fake_site():
    """Factory installing the fake site on a page."""

    async def _install(page: Page, suggestions, result_html: str = RESULT_HTML) -> None:
        await install_fake_site(page, build_fake_site(suggestions, result_html))

    return _install


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Browser manager fixture.

    Skips the test when no Playwright browser can be launched
    (run `playwright install chromium`).
    """
    manager = BrowserManager()
    try:
        await manager.start()
    except PlaywrightError as e:
        pytest.skip(f"Playwright browser unavailable: {str(e).splitlines()[0]}")
    yield manager
    await manager.close()


@pytest.fixture
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """Fresh, isolated browser context per test."""
    context = await browser_manager.new_context()
    yield context


@pytest.fixture
async def page(context: BrowserContext, request) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches a full-page screenshot to Allure when the test body failed.
    """
    page = await context.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed and not page.is_closed():
        try:
            screenshot = await page.screenshot(full_page=True)
            allure.attach(
                screenshot,
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")
    await page.close()


@pytest.fixture
async def page_with_mocks(page: Page) -> AsyncGenerator[Page, None]:
    """
    Page with request interception.

    Search API calls are aborted; repository routes pass through.
    """
    logger.info("📡 Setting up mock interceptors...")

    async def abort(route: Route) -> None:
        await route.abort()

    async def passthrough(route: Route) -> None:
        await route.continue_()

    await page.route("**/api/search", abort)
    await page.route("**/repos/**", passthrough)

    yield page

    logger.info("🧹 Clearing mocks...")
    await page.unroute("**/api/search")
    await page.unroute("**/repos/**")


@pytest.fixture
async def traced_page(
    browser_manager: BrowserManager,
    context: BrowserContext,
    page: Page,
    request,
) -> AsyncGenerator[Page, None]:
    """Page whose context records a trace, saved as reports/traces/<test>.zip."""
    await browser_manager.start_tracing(context)
    yield page
    await browser_manager.stop_tracing(context, request.node.name)


@pytest.fixture
def base_url() -> str:
    return os.environ.get("BASE_URL", "https://github.com")


@pytest.fixture
def api_url() -> str:
    return os.environ.get("API_URL", "https://api.github.com")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def savings_calculator_page(page: Page) -> SavingsCalculatorPage:
    """Savings calculator against the live site configuration."""
    return SavingsCalculatorPage(page)


@pytest.fixture
def github_home_page(page: Page) -> GitHubHomePage:
    return GitHubHomePage(page)


@pytest.fixture
def natural_gas_page(page: Page) -> NaturalGasPage:
    return NaturalGasPage(page)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (`rep_setup`, `rep_call`, ...)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
