"""
In-memory stand-ins for the parts of the async Playwright Page/Locator API
used by the framework, for unit tests that need no browser.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Callable, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class DummyConfig:
    def __init__(self, data):
        self.data = data

    def get(self, key, default=None):
        return self.data.get(key, default)


FAST_TIMINGS = DummyConfig({
    "savings_calculator.goto_settle": 0,
    "savings_calculator.input_timeout": 500,
    "savings_calculator.suggestion_api_wait": 0,
    "savings_calculator.suggestion_timeout": 500,
    "savings_calculator.hover_settle": 0,
    "savings_calculator.navigation_timeout": 1000,
    "savings_calculator.navigation_settle": 0,
    "savings_calculator.outcome_timeout": 500,
    "savings_calculator.outcome_poll_interval": 250,
})


class FakeLocator:
    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        visible_after: int = 0,
        on_click: Optional[Callable[[], None]] = None,
        click_error: Optional[Exception] = None,
    ):
        self.text = text
        self.visible = visible
        # Number of is_visible() calls answered False before turning visible
        self.visible_after = visible_after
        self.on_click = on_click
        self.click_error = click_error
        self.value = ""
        self.clicks = 0
        self.hovered = False
        self.visibility_checks = 0
        self.events: List[str] = []

    @property
    def first(self) -> "FakeLocator":
        return self

    async def is_visible(self) -> bool:
        self.visibility_checks += 1
        if not self.visible:
            return False
        return self.visibility_checks > self.visible_after

    async def inner_text(self) -> str:
        return self.text

    async def text_content(self) -> str:
        return self.text

    async def input_value(self) -> str:
        return self.value

    async def fill(self, value: str) -> None:
        self.events.append("fill")
        self.value = value

    async def hover(self) -> None:
        self.events.append("hover")
        self.hovered = True

    async def click(self) -> None:
        self.events.append("click")
        if self.click_error is not None:
            raise self.click_error
        self.clicks += 1
        if self.on_click is not None:
            self.on_click()

    async def wait_for(self, state: str = "visible", timeout: int = 0) -> None:
        if not await self.is_visible():
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")


class FakePage:
    """Selector string -> FakeLocator; unknown selectors are never visible."""

    def __init__(self, elements: Optional[Dict[str, FakeLocator]] = None, url: str = "about:blank"):
        self.elements: Dict[str, FakeLocator] = dict(elements or {})
        self.url = url
        self.waits: List[float] = []
        self.gotos: List[Dict[str, object]] = []
        self.handlers: Dict[str, List[Callable]] = {}
        self._pending_url: Optional[str] = None
        # Raised by expect_navigation once its body completes (failed navigation)
        self.navigation_error: Optional[PlaywrightError] = None

    def locator(self, selector: str) -> FakeLocator:
        if selector not in self.elements:
            self.elements[selector] = FakeLocator(visible=False)
        return self.elements[selector]

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    async def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)
        await asyncio.sleep(timeout / 1000)

    async def goto(self, url: str, **kwargs) -> None:
        self.gotos.append({"url": url, **kwargs})
        self.url = url

    def navigate(self, url: str) -> None:
        """Schedule a navigation, as a clicked link would."""
        self._pending_url = url

    @asynccontextmanager
    async def expect_navigation(self, wait_until: str = "load", timeout: float = 30000):
        self._pending_url = None
        yield
        if self.navigation_error is not None:
            raise self.navigation_error
        if self._pending_url is None:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        self.url = self._pending_url
        self._pending_url = None
