"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and gates tests that hit live third-party sites.

================================================================================
"""

import os
from pathlib import Path

import pytest


LIVE_TESTS_ENV = "RUN_LIVE_TESTS"


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "live: Tests against live third-party websites (need RUN_LIVE_TESTS=1)"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests (need a Playwright browser)"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "address: Savings calculator address search"
    )
    config.addinivalue_line(
        "markers", "github: GitHub page object examples"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds directory-based markers and skips live-site tests unless
    RUN_LIVE_TESTS is enabled.
    """
    run_live = os.environ.get(LIVE_TESTS_ENV, "").lower() in ("1", "true", "yes", "on")
    skip_live = pytest.mark.skip(reason=f"live-site test, set {LIVE_TESTS_ENV}=1 to run")

    for item in items:
        parts = Path(str(item.fspath)).parts
        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)

        if "unit" in parts:
            item.add_marker(pytest.mark.unit)

        if "live" in item.keywords and not run_live:
            item.add_marker(skip_live)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Kleenheat / GitHub Playwright Test Suite",
        "=" * 60,
        "",
    ]
