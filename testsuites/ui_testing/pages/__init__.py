"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the sites under test.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .github_home_page import GitHubHomePage
from .natural_gas_page import NaturalGasPage
from .savings_calculator_page import SavingsCalculatorPage

__all__ = [
    "GitHubHomePage",
    "NaturalGasPage",
    "SavingsCalculatorPage",
]
