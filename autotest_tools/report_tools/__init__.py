"""Allure reporting helpers."""

from .allure_utils import (
    TestResultSummary,
    attach_json,
    attach_selection_result,
    attach_text,
    log_summary,
    summarize_results,
)

__all__ = [
    "TestResultSummary",
    "attach_json",
    "attach_selection_result",
    "attach_text",
    "log_summary",
    "summarize_results",
]
