import asyncio
import time

import pytest

from testsuites.ui_testing.framework.smart_locator import (
    ElementNotFoundError,
    LocateStatus,
    SmartLocator,
    normalize_whitespace,
)
from testsuites.unit.fakes import FakeLocator, FakePage


LOCATORS = {
    "primary": "#preferred",
    "fallback_1": ".backup",
}


def test_normalize_whitespace():
    assert normalize_whitespace("  Great news!\n  We provide\tservices  ") == "Great news! We provide services"
    assert normalize_whitespace(None) == ""


async def test_resolve_prefers_declaration_order():
    preferred = FakeLocator(text="preferred")
    backup = FakeLocator(text="backup")
    page = FakePage({"#preferred": preferred, ".backup": backup})

    result = await SmartLocator(page).resolve(LOCATORS, timeout=0, element_name="thing")

    assert result.status is LocateStatus.FOUND
    assert result.strategy_name == "primary"
    assert result.locator is preferred


async def test_resolve_uses_fallback_and_reports_it():
    page = FakePage({".backup": FakeLocator(text="backup")})
    smart = SmartLocator(page)

    result = await smart.resolve(LOCATORS, timeout=0, element_name="thing")

    assert result.found
    assert result.strategy_name == "fallback_1"
    assert result.selector == ".backup"
    report = smart.get_health_report()
    assert "[thing]" in report
    assert "fallback_1 -> .backup" in report


async def test_resolve_waits_for_late_primary():
    # Within one polling round a visible fallback beats a primary that is still hidden
    preferred = FakeLocator(visible_after=1)
    page = FakePage({"#preferred": preferred, ".backup": FakeLocator()})

    result = await SmartLocator(page).resolve(LOCATORS, timeout=1000)

    assert result.strategy_name == "fallback_1"
    assert page.waits == []

    preferred.visibility_checks = 0
    page = FakePage({"#preferred": preferred})
    result = await SmartLocator(page).resolve(LOCATORS, timeout=1000)

    assert result.strategy_name == "primary"
    assert page.waits == [SmartLocator.POLL_INTERVAL]


async def test_resolve_not_found_lists_every_strategy():
    page = FakePage()

    result = await SmartLocator(page).resolve(LOCATORS, timeout=500, element_name="thing")

    assert result.status is LocateStatus.NOT_FOUND
    assert result.locator is None
    assert len(result.errors) == 2
    assert page.waits[0] == SmartLocator.POLL_INTERVAL
    assert sum(page.waits) <= 500


async def test_resolve_unknown_key():
    result = await SmartLocator(FakePage()).resolve("no_such_element", timeout=0)

    assert not result.found
    assert "No locators defined" in result.errors[0]


async def test_locate_raises_when_nothing_visible():
    with pytest.raises(ElementNotFoundError, match="thing"):
        await SmartLocator(FakePage()).locate(LOCATORS, timeout=0, element_name="thing")


async def test_element_mode_accepts_callables():
    by_role = FakeLocator(text="Residential")
    page = FakePage({"role=link": by_role})

    def residential(p):
        return p.locator("role=link")

    element = SmartLocator(page, element_name="residential", locators={
        "primary": residential,
        "fallback_1": "text=Residential",
    })
    result = await element.resolve(timeout=0)

    assert result.strategy_name == "primary"
    assert result.selector == "<residential>"
    assert await element.get_text(None, timeout=0) == "Residential"


async def test_first_visible_text_skips_blank_elements():
    page = FakePage({
        ".success-message": FakeLocator(text="   "),
        "h1, h2, h3": FakeLocator(text="Great news!\n We provide services in your area."),
    })

    outcome = await SmartLocator(page).first_visible_text("outcome_message")

    assert outcome.found
    assert outcome.strategy_name == "fallback_5"
    assert outcome.text == "Great news! We provide services in your area."
    assert outcome.errors[0] == "primary: visible but empty"


async def test_first_visible_text_not_found():
    message = await SmartLocator(FakePage()).first_visible_text("success_message")

    assert not message.found
    assert message.text == ""


async def test_fill_and_click_use_resolved_element():
    field = FakeLocator()
    page = FakePage({'input[placeholder*="address" i]': field})
    smart = SmartLocator(page)

    await smart.fill("address_input", "1 Main St", timeout=0)
    await smart.click("address_input", timeout=0)

    assert field.value == "1 Main St"
    assert field.clicks == 1
    assert await smart.is_visible("address_input", timeout=0)
    assert smart.get_health_report().startswith("✅")


class SlowHiddenLocator(FakeLocator):
    def __init__(self, delay: float):
        super().__init__(visible=False)
        self.delay = delay

    async def is_visible(self) -> bool:
        await asyncio.sleep(self.delay)
        return await super().is_visible()


async def test_resolve_budget_is_wall_clock_time():
    page = FakePage({"#preferred": SlowHiddenLocator(delay=0.3)})

    started = time.monotonic()
    result = await SmartLocator(page).resolve(LOCATORS, timeout=250)
    elapsed = time.monotonic() - started

    assert not result.found
    # The first round alone outlasted the budget, so no polling pause follows it
    assert page.waits == []
    assert elapsed < 0.6
