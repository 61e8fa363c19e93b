"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - smart_locator: Element location with ordered fallback strategies
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management and tracing
    - config_loader: YAML + environment configuration
    - outcomes: Explicit result types for multi-step flows

Author: Automation Team
License: MIT
================================================================================
"""

from .smart_locator import SmartLocator, ElementNotFoundError, LocateResult
from .page_base import BasePage
from .browser_manager import BrowserManager
from .config_loader import ConfigLoader, ConfigurationError
from .outcomes import (
    AddressSelectionResult,
    FlowState,
    NavigationOutcome,
    OutcomeMissingError,
    SelectionOutcome,
    SuggestionNotMatchedError,
)

__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "LocateResult",
    "BasePage",
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "AddressSelectionResult",
    "FlowState",
    "NavigationOutcome",
    "OutcomeMissingError",
    "SelectionOutcome",
    "SuggestionNotMatchedError",
]
