"""
================================================================================
Savings Calculator Page Object (Async / Playwright)
================================================================================

Page object for the Kleenheat savings calculator address search.

Flow:
    goto -> enter_address -> wait_for_address_suggestions -> find_suggestion
         -> hover + click (navigation aware) -> read_outcome_text -> verify

Each best-effort step reports what happened (SelectionOutcome,
NavigationOutcome, FlowState trace) instead of only logging, so tests can
tell "matched and clicked" apart from "silently skipped".

NOTE:
  Selectors target a live third-party site. Any markup change there
  invalidates them; update `SmartLocator.LOCATORS` and the maps below.

================================================================================
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, expect
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.framework.outcomes import (
    AddressSelectionResult,
    FlowState,
    NavigationOutcome,
    OutcomeMissingError,
    SelectionOutcome,
    SuggestionNotMatchedError,
)
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import (
    ElementNotFoundError,
    LocateResult,
    LocatorMap,
    deadline_after,
    normalize_whitespace,
    remaining_ms,
)


# Wait policy defaults (ms), overridable under `savings_calculator.*`
DEFAULT_TIMINGS: Dict[str, int] = {
    "goto_timeout": 60000,
    "goto_settle": 2000,
    "input_timeout": 10000,
    "suggestion_api_wait": 500,
    "suggestion_timeout": 5000,
    "hover_settle": 300,
    "navigation_timeout": 10000,
    "navigation_settle": 1000,
    "outcome_timeout": 3000,
    "outcome_poll_interval": 250,
}

DEFAULT_FALLBACK_ANCHOR = "1/435b"


def quote_selector_text(text: str) -> str:
    """Quote text for use inside `:has-text("...")`."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class SavingsCalculatorPage(PageBase):
    """Kleenheat savings calculator page object (async)."""

    BASE_URL_KEY = "kleenheat.base_url"
    DEFAULT_BASE_URL = "https://www.kleenheat.com.au"
    URL_PATH = "/spark/savings-calculator"

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        config: Optional[ConfigLoader] = None,
        fallback_anchor: Optional[str] = None,
    ):
        """
        Args:
            page: Playwright Page object
            base_url: Site base URL (defaults to `kleenheat.base_url`)
            config: Configuration loader
            fallback_anchor: Partial suggestion text clicked when no
                suggestion contains the full address. None reads
                `savings_calculator.fallback_anchor`; "" disables the fallback.
        """
        super().__init__(page, base_url=base_url, config=config)
        self.url_path = self.config.get("savings_calculator.path", self.URL_PATH)
        self.timings = {
            key: int(self.config.get(f"savings_calculator.{key}", default))
            for key, default in DEFAULT_TIMINGS.items()
        }
        if fallback_anchor is None:
            fallback_anchor = self.config.get(
                "savings_calculator.fallback_anchor", DEFAULT_FALLBACK_ANCHOR
            )
        self.fallback_anchor = (fallback_anchor or "").strip()

    # =========================================================================
    # Navigator
    # =========================================================================

    @allure.step("Open savings calculator")
    async def goto(self) -> "SavingsCalculatorPage":
        """Load the calculator and give dynamic content a moment to render."""
        await self.navigate(
            wait_for="domcontentloaded",
            timeout=self.timings["goto_timeout"],
        )
        await self.settle(self.timings["goto_settle"])
        return self

    # =========================================================================
    # Input resolver
    # =========================================================================

    async def resolve_address_input(self) -> LocateResult:
        """Find the address field: placeholder, then id, then aria-label."""
        return await self.smart.resolve(
            "address_input", timeout=self.timings["input_timeout"]
        )

    @allure.step("Enter address: {address}")
    async def enter_address(self, address: str) -> Locator:
        """
        Type the address into the first visible address field.

        `fill()` replaces the current value, so repeating the call with the
        same address leaves exactly one copy in the field.

        Raises:
            ElementNotFoundError: No heuristic produced a visible field
        """
        result = await self.resolve_address_input()
        if not result.found:
            raise ElementNotFoundError(
                "Address input not found:\n" +
                "\n".join(f"  - {err}" for err in result.errors)
            )

        field = result.locator
        await field.click()
        await field.fill(address)
        logger.debug(f"Address entered via {result.strategy_name}: {address}")
        return field

    # =========================================================================
    # Suggestion matcher
    # =========================================================================

    @allure.step("Wait for address suggestions")
    async def wait_for_address_suggestions(self) -> bool:
        """
        Wait for the suggestion surface to show at least one option.

        Returns:
            True if a role- or class-based option became visible in time
        """
        await self.settle(self.timings["suggestion_api_wait"])
        result = await self.smart.resolve(
            "suggestion_option", timeout=self.timings["suggestion_timeout"]
        )
        if not result.found:
            logger.warning(
                f"No address suggestions visible after "
                f"{self.timings['suggestion_timeout']}ms"
            )
        return result.found

    def exact_match_locators(self, address: str) -> LocatorMap:
        """Role-based option before class-based option, both containing the address."""
        quoted = quote_selector_text(address)
        return {
            "primary": f'[role="option"]:has-text({quoted})',
            "fallback_1": f".address-suggestion:has-text({quoted})",
        }

    def fallback_locators(self) -> LocatorMap:
        if not self.fallback_anchor:
            return {}
        return {"anchor": f"text={self.fallback_anchor}"}

    async def find_suggestion(
        self,
        address: str,
    ) -> Tuple[SelectionOutcome, Optional[LocateResult]]:
        """
        Pick the suggestion to click, without clicking it.

        Returns:
            (MATCHED, result) for an exact match, (FALLBACK_USED, result) when
            only the anchor text matched, (NO_MATCH, None) otherwise
        """
        exact = await self.smart.resolve(
            self.exact_match_locators(address),
            timeout=0,
            element_name="exact_suggestion",
        )
        if exact.found:
            return SelectionOutcome.MATCHED, exact

        anchors = self.fallback_locators()
        if anchors:
            partial = await self.smart.resolve(
                anchors, timeout=0, element_name="anchor_suggestion"
            )
            if partial.found:
                logger.warning(
                    f"No exact suggestion for '{address}', "
                    f"using anchor '{self.fallback_anchor}'"
                )
                return SelectionOutcome.FALLBACK_USED, partial

        return SelectionOutcome.NO_MATCH, None

    async def click_and_wait_for_navigation(self, target: Locator) -> NavigationOutcome:
        """
        Click `target` and wait for the navigation it may trigger.

        Navigation problems after a successful click are reported, not
        raised: a timeout gives SETTLED (page treated as already settled),
        any other navigation error gives FAILED. Errors from the click
        itself propagate.
        """
        clicked = False
        try:
            async with self.page.expect_navigation(
                wait_until="domcontentloaded",
                timeout=self.timings["navigation_timeout"],
            ):
                await target.click()
                clicked = True
            outcome = NavigationOutcome.NAVIGATED
        except PlaywrightTimeoutError:
            if not clicked:
                raise
            logger.info("No navigation detected or navigation completed")
            outcome = NavigationOutcome.SETTLED
        except PlaywrightError as e:
            if not clicked:
                raise
            logger.warning(f"Navigation after click failed: {e.message}")
            outcome = NavigationOutcome.FAILED

        await self.settle(self.timings["navigation_settle"])
        logger.debug(f"After click: {outcome.value} ({self.page.url})")
        return outcome

    # =========================================================================
    # Workflow
    # =========================================================================

    @staticmethod
    def _transition(result: AddressSelectionResult, state: FlowState) -> None:
        logger.debug(f"Address flow: {result.state.value} -> {state.value}")
        result.states.append(state)

    @allure.step("Select address: {address}")
    async def select_address(
        self,
        address: str,
        strict: bool = False,
    ) -> AddressSelectionResult:
        """
        Type the address and click the matching suggestion.

        Args:
            address: Free-text address
            strict: Raise SuggestionNotMatchedError instead of returning NO_MATCH

        Returns:
            AddressSelectionResult; `state` is AWAITING_OUTCOME after a click
            or UNMATCHED when nothing could be selected
        """
        result = AddressSelectionResult(address=address)

        self._transition(result, FlowState.SEARCHING)
        try:
            await self.enter_address(address)
        except ElementNotFoundError:
            self._transition(result, FlowState.ELEMENT_NOT_FOUND)
            raise

        self._transition(result, FlowState.AWAITING_SUGGESTIONS)
        result.suggestions_visible = await self.wait_for_address_suggestions()

        selection, candidate = await self.find_suggestion(address)
        result.selection = selection
        if candidate is None:
            self._transition(result, FlowState.UNMATCHED)
            logger.warning(f"No suggestion selected for address: {address}")
            if strict:
                raise SuggestionNotMatchedError(
                    f"No suggestion matched '{address}'"
                    + (f" or anchor '{self.fallback_anchor}'" if self.fallback_anchor else "")
                )
            return result

        self._transition(result, FlowState.MATCHED)
        suggestion = candidate.locator
        result.suggestion_text = normalize_whitespace(await suggestion.inner_text())

        # Some autocomplete widgets only arm their click handler on hover
        await suggestion.hover()
        await self.settle(self.timings["hover_settle"])

        self._transition(result, FlowState.AWAITING_OUTCOME)
        result.navigation = await self.click_and_wait_for_navigation(suggestion)
        return result

    # =========================================================================
    # Outcome reader
    # =========================================================================

    async def read_outcome_text(self) -> str:
        """
        Poll the outcome selectors for the first visible non-empty text
        until `outcome_timeout` ms have passed.

        Returns:
            Whitespace-normalised message, or "" when nothing matched
        """
        interval = max(1, self.timings["outcome_poll_interval"])
        deadline = deadline_after(self.timings["outcome_timeout"])

        while True:
            outcome = await self.smart.first_visible_text("outcome_message")
            if outcome.found:
                logger.debug(f"Outcome text via {outcome.selector}: {outcome.text}")
                return outcome.text
            remaining = remaining_ms(deadline)
            if remaining <= 0:
                break
            await self.settle(min(interval, remaining))

        logger.warning(f"No outcome text found on {self.page.url}")
        return ""

    @allure.step("Verify outcome message")
    async def verify_outcome(
        self,
        expected_parts: Sequence[str] = (),
        result: Optional[AddressSelectionResult] = None,
    ) -> str:
        """
        Read the outcome message and check it contains every expected part.

        Args:
            expected_parts: Substrings the message must contain
            result: Selection result to record RESOLVED / EMPTY on

        Returns:
            The normalised outcome message

        Raises:
            OutcomeMissingError: No message found on the page
            AssertionError: An expected part is missing
        """
        message = await self.read_outcome_text()

        if result is not None:
            result.outcome_text = message
            self._transition(result, FlowState.RESOLVED if message else FlowState.EMPTY)

        if not message:
            raise OutcomeMissingError(f"No message found on the new page ({self.page.url})")

        for part in expected_parts:
            assert part in message, f"Expected '{part}' in outcome message: '{message}'"

        logger.info(f"✓ Outcome message: {message}")
        return message

    async def select_address_and_verify(
        self,
        address: str,
        expected_parts: Sequence[str] = (),
        strict: bool = True,
    ) -> AddressSelectionResult:
        """Full flow: select the address, then verify the outcome message."""
        result = await self.select_address(address, strict=strict)
        if result.succeeded:
            await self.verify_outcome(expected_parts, result=result)
        return result

    async def wait_for_outcome_heading(
        self,
        text: str,
        timeout: int = 10000,
    ) -> str:
        """
        Wait for an `h1` containing `text` and return its normalised text.

        Raises:
            playwright TimeoutError: Heading did not become visible
        """
        heading = self.page.locator(f"h1:has-text({quote_selector_text(text)})").first
        await heading.wait_for(state="visible", timeout=timeout)
        return normalize_whitespace(await heading.inner_text())

    async def get_success_message(self) -> str:
        """Text of the first visible success/alert message, or ""."""
        message = await self.smart.first_visible_text("success_message")
        return message.text

    @allure.step("Verify success message is displayed")
    async def verify_success_message_displayed(
        self,
        expected_message: Optional[str] = None,
    ) -> None:
        """Assert a success/alert message is visible (and contains text)."""
        message = await self.smart.locate(
            "success_message", timeout=self.timings["outcome_timeout"]
        )
        await expect(message).to_be_visible()
        if expected_message:
            await expect(message).to_contain_text(expected_message)


__all__ = [
    "SavingsCalculatorPage",
    "DEFAULT_TIMINGS",
    "DEFAULT_FALLBACK_ANCHOR",
    "quote_selector_text",
]
