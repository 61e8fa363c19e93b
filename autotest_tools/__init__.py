"""
================================================================================
Autotest Tools
================================================================================

Utilities around the test suites.

Modules:
    - report_tools: Allure attachment helpers and result summaries

Example:
    from autotest_tools.report_tools import attach_selection_result, summarize_results

    summary = summarize_results(Path("reports/allure-results"))

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "report_tools",
]
