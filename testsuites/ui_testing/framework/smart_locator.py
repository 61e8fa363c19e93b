"""
================================================================================
Smart Locator with Ordered Fallback Strategies
================================================================================

Element location system with:
    - Multiple fallback locator strategies per element
    - Deterministic priority order (declaration order, never document order)
    - Tagged FOUND / NOT_FOUND results instead of exception swallowing
    - Usage analytics for maintenance insights

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger
from playwright.async_api import Locator, Page


# A strategy is either a Playwright selector string or a callable
# building a Locator from the page (for get_by_role / get_by_label etc.)
LocatorStrategy = Union[str, Callable[[Page], Locator]]
LocatorMap = Dict[str, LocatorStrategy]

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _WHITESPACE.sub(" ", text or "").strip()


def deadline_after(timeout_ms: float) -> float:
    """Monotonic clock reading `timeout_ms` milliseconds from now."""
    return time.monotonic() + timeout_ms / 1000


def remaining_ms(deadline: float) -> float:
    """Milliseconds left until `deadline`, never negative."""
    return max(0.0, (deadline - time.monotonic()) * 1000)


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


class LocateStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass
class LocateResult:
    """
    Tagged result of a locator resolution.

    Attributes:
        status: FOUND or NOT_FOUND
        element_name: Human-readable element name
        strategy_name: Strategy that matched (FOUND only)
        selector: Description of the matching selector (FOUND only)
        locator: Resolved Playwright Locator (FOUND only)
        text: Normalised text, set by `first_visible_text`
        errors: Per-strategy notes collected while resolving
    """
    status: LocateStatus
    element_name: str
    strategy_name: Optional[str] = None
    selector: Optional[str] = None
    locator: Optional[Locator] = None
    text: str = ""
    errors: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status is LocateStatus.FOUND

    @classmethod
    def not_found(cls, element_name: str, errors: Optional[List[str]] = None) -> "LocateResult":
        return cls(status=LocateStatus.NOT_FOUND, element_name=element_name, errors=errors or [])


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


def describe_strategy(strategy: LocatorStrategy) -> str:
    """Printable form of a strategy for logs and reports."""
    if isinstance(strategy, str):
        return strategy
    return f"<{getattr(strategy, '__name__', type(strategy).__name__)}>"


class SmartLocator:
    """
    Smart element locator with ordered fallback strategies.

    Strategies are evaluated strictly in declaration order: the first
    strategy whose element is visible wins, even when a later strategy's
    element comes earlier in the document.

    Locator Priority Order (recommended):
        1. Role / accessibility based
        2. Placeholder / id / label attributes
        3. Visible text content
        4. CSS class selectors (last resort)

    Usage:
        >>> smart = SmartLocator(page)
        >>> await smart.fill("address_input", "1 Main St")
        >>> result = await smart.resolve("suggestion_option", timeout=5000)
        >>> if result.found:
        ...     await result.locator.click()

    Configuration:
        Locators are defined in the LOCATORS dictionary. Each element
        can have multiple fallback strategies.
    """

    # Locator definitions with fallback strategies
    # Format: element_name -> {strategy_name: selector}
    LOCATORS: Dict[str, LocatorMap] = {
        # Savings calculator address search
        "address_input": {
            "primary": 'input[placeholder*="address" i]',
            "fallback_1": 'input[id*="address" i]',
            "fallback_2": 'input[aria-label*="address" i]',
        },
        "suggestion_option": {
            "primary": '[role="listbox"] [role="option"]',
            "fallback_1": '[role="option"]',
            "fallback_2": ".autocomplete-suggestion",
            "fallback_3": ".address-suggestion",
            "fallback_4": ".MuiAutocomplete-option",
        },

        # Post-selection messages, explicit classes first, headings last
        "outcome_message": {
            "primary": ".success-message",
            "fallback_1": ".alert-success",
            "fallback_2": '[role="alert"]',
            "fallback_3": ".message-success",
            "fallback_4": ".confirmation-message",
            "fallback_5": "h1, h2, h3",
            "fallback_6": ".title",
            "fallback_7": ".status-message",
        },
        "success_message": {
            "primary": ".success-message",
            "fallback_1": ".alert-success",
            "fallback_2": '[role="alert"]',
            "fallback_3": ".message-success",
            "fallback_4": ".confirmation-message",
        },
    }

    # Delay between visibility polling rounds (ms)
    POLL_INTERVAL: int = 250

    def __init__(
        self,
        page: Page,
        element_name: Optional[str] = None,
        locators: Optional[LocatorMap] = None,
    ):
        """
        Initialize SmartLocator with Playwright page.

        This class supports two usage styles:
        1) **Library mode**: `SmartLocator(page)` then `await smart.click("address_input")`
           using the class-level `LOCATORS` map.
        2) **Element mode**: `SmartLocator(page, element_name="X", locators={...})`
           then `await element.locate()` to resolve a single element with fallbacks.

        Args:
            page: Playwright Page object
            element_name: Optional human-readable element name (element mode)
            locators: Optional locator map (element mode)
        """
        self.page = page
        self._element_name = element_name
        self._element_locators = locators
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def _locator_map(
        self,
        target: Optional[Union[str, LocatorMap]],
        element_name: Optional[str],
        custom_locators: Optional[LocatorMap],
    ) -> tuple[LocatorMap, str]:
        """Resolve locator map + display name depending on call style."""
        if isinstance(target, dict):
            return target, element_name or self._element_name or "custom_element"
        if isinstance(target, str):
            return custom_locators or self.LOCATORS.get(target, {}), target
        return (
            self._element_locators or {},
            element_name or self._element_name or "custom_element",
        )

    def build(self, strategy: LocatorStrategy) -> Locator:
        """Build the first-match Locator for a strategy."""
        if isinstance(strategy, str):
            return self.page.locator(strategy).first
        return strategy(self.page).first

    def _record(self, display_name: str, locators: LocatorMap, strategy_name: str) -> None:
        selector = describe_strategy(locators[strategy_name])
        primary = describe_strategy(locators.get("primary", locators[strategy_name]))
        is_primary = strategy_name == "primary"
        health = LocatorHealth(
            element_name=display_name,
            primary_selector=primary,
            used_fallback=not is_primary,
            fallback_name=None if is_primary else strategy_name,
            fallback_selector=None if is_primary else selector,
        )

        if is_primary:
            logger.debug(f"✅ Element '{display_name}' found: {selector}")
        else:
            logger.warning(
                f"⚠️ Element '{display_name}' used fallback: "
                f"{strategy_name} -> {selector}"
            )
            self._fallback_used[display_name] = health

    async def resolve(
        self,
        target: Optional[Union[str, LocatorMap]] = None,
        timeout: int = 5000,
        element_name: Optional[str] = None,
        custom_locators: Optional[LocatorMap] = None,
    ) -> LocateResult:
        """
        Resolve the first visible element in strategy priority order.

        Polls all strategies every POLL_INTERVAL ms until one is visible or
        `timeout` ms of wall-clock time have passed. Within a polling round
        strategies are checked in declaration order.

        Args:
            target: Either an element key (str) to look up in `LOCATORS`,
                a locator map (dict) with primary/fallback selectors, or None
                to use the instance's stored locator map (element mode).
            timeout: Total wait budget in milliseconds
            element_name: Optional human-readable name (used for logging/reporting).
            custom_locators: Override default locators when `target` is a string key.

        Returns:
            LocateResult tagged FOUND (with locator) or NOT_FOUND
        """
        locators, display_name = self._locator_map(target, element_name, custom_locators)
        if not locators:
            return LocateResult.not_found(
                display_name, [f"No locators defined for element: {display_name}"]
            )

        candidates = [(name, self.build(strategy)) for name, strategy in locators.items()]
        deadline = deadline_after(timeout)

        while True:
            for strategy_name, locator in candidates:
                if await locator.is_visible():
                    self._record(display_name, locators, strategy_name)
                    return LocateResult(
                        status=LocateStatus.FOUND,
                        element_name=display_name,
                        strategy_name=strategy_name,
                        selector=describe_strategy(locators[strategy_name]),
                        locator=locator,
                    )
            remaining = remaining_ms(deadline)
            if remaining <= 0:
                break
            await self.page.wait_for_timeout(min(self.POLL_INTERVAL, remaining))

        errors = [
            f"{name}: {describe_strategy(strategy)} -> not visible within {timeout}ms"
            for name, strategy in locators.items()
        ]
        return LocateResult.not_found(display_name, errors)

    async def locate(
        self,
        target: Optional[Union[str, LocatorMap]] = None,
        timeout: int = 5000,
        element_name: Optional[str] = None,
        custom_locators: Optional[LocatorMap] = None,
    ) -> Locator:
        """
        Locate element using smart fallback strategy.

        Same as `resolve()` but raises when nothing matched.

        Returns:
            Playwright Locator for the found element

        Raises:
            ElementNotFoundError: When all strategies fail
        """
        result = await self.resolve(
            target,
            timeout=timeout,
            element_name=element_name,
            custom_locators=custom_locators,
        )
        if result.found:
            return result.locator

        error_msg = (
            f"❌ All locators failed for '{result.element_name}':\n" +
            "\n".join(f"  - {err}" for err in result.errors)
        )
        logger.error(error_msg)
        raise ElementNotFoundError(error_msg)

    async def first_visible_text(
        self,
        target: Optional[Union[str, LocatorMap]] = None,
        element_name: Optional[str] = None,
    ) -> LocateResult:
        """
        Check strategies once, in order, for visible non-empty text.

        Unlike `resolve()`, a visible element with blank text does not win;
        the search moves on to the next strategy.

        Returns:
            FOUND result with normalised `text` (errors list the strategies
            skipped before it), or NOT_FOUND
        """
        locators, display_name = self._locator_map(target, element_name, None)
        errors: List[str] = []

        for strategy_name, strategy in locators.items():
            locator = self.build(strategy)
            if not await locator.is_visible():
                errors.append(f"{strategy_name}: not visible")
                continue
            text = normalize_whitespace(await locator.inner_text())
            if not text:
                errors.append(f"{strategy_name}: visible but empty")
                continue
            return LocateResult(
                status=LocateStatus.FOUND,
                element_name=display_name,
                strategy_name=strategy_name,
                selector=describe_strategy(strategy),
                locator=locator,
                text=text,
                errors=errors,
            )

        return LocateResult.not_found(display_name, errors)

    async def click(
        self,
        target: Union[str, LocatorMap],
        timeout: int = 5000,
        element_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Click element using smart location.

        Args:
            target: Element key (str) or locator map (dict)
            timeout: Timeout for element location
            **kwargs: Additional arguments passed to click()
        """
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        await locator.click(**kwargs)

    async def fill(
        self,
        target: Union[str, LocatorMap],
        value: str,
        timeout: int = 5000,
        element_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Fill input element using smart location.

        Args:
            target: Element key (str) or locator map (dict)
            value: Value to fill
            timeout: Timeout for element location
            **kwargs: Additional arguments passed to fill()
        """
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        await locator.fill(value, **kwargs)

    async def get_text(
        self,
        target: Union[str, LocatorMap],
        timeout: int = 5000,
        element_name: Optional[str] = None,
    ) -> str:
        """
        Get text content of element.

        Returns:
            Text content of element
        """
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        return await locator.text_content() or ""

    async def is_visible(
        self,
        target: Union[str, LocatorMap],
        timeout: int = 2000,
        element_name: Optional[str] = None,
    ) -> bool:
        """Check if element is visible within the timeout."""
        result = await self.resolve(target, timeout=timeout, element_name=element_name)
        return result.found

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Analyzes usage patterns and identifies locators that
        frequently require fallbacks (maintenance candidates).

        Returns:
            Formatted health report string
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "LocateResult",
    "LocateStatus",
    "LocatorHealth",
    "LocatorMap",
    "LocatorStrategy",
    "deadline_after",
    "describe_strategy",
    "normalize_whitespace",
    "remaining_ms",
]
