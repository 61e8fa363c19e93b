"""
================================================================================
Allure Report Utilities
================================================================================

This module provides helpers for enriching Allure reports and summarising
Allure result files after a run.

Features:
- Text / JSON attachment helpers
- Address flow result attachment
- Result summary from allure-results/*.json

================================================================================
"""

import json
from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return str(value)


def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (dataclasses are converted to dicts)
        name: Attachment name
    """
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    json_str = json.dumps(data, indent=2, default=_json_default)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_selection_result(result: Any, name: str = "Address selection"):
    """
    Attach an AddressSelectionResult with its state trace.

    Args:
        result: AddressSelectionResult
        name: Attachment name
    """
    payload = asdict(result)
    payload["final_state"] = result.state
    payload["succeeded"] = result.succeeded
    attach_json(payload, name=name)


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


def parse_results(results_dir: Path) -> List[Dict[str, Any]]:
    """
    Parse Allure result files.

    Returns:
        List of test result dictionaries
    """
    results = []

    for result_file in Path(results_dir).glob("*-result.json"):
        try:
            with open(result_file, encoding="utf-8") as f:
                results.append(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")

    return results


def summarize_results(results_dir: Path) -> TestResultSummary:
    """
    Generate summary from an allure-results directory.

    Returns:
        TestResultSummary object
    """
    results = parse_results(results_dir)
    summary = TestResultSummary(total=len(results))

    for result in results:
        status = result.get("status", "unknown")
        if status in ("passed", "failed", "broken", "skipped"):
            setattr(summary, status, getattr(summary, status) + 1)
        else:
            summary.unknown += 1

        summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

    return summary


def log_summary(summary: TestResultSummary) -> None:
    """Log a summary block."""
    logger.info("=" * 60)
    logger.info("TEST EXECUTION SUMMARY")
    logger.info("=" * 60)
    logger.info(f"Total Tests:    {summary.total}")
    logger.info(f"Passed:         {summary.passed} ✅")
    logger.info(f"Failed:         {summary.failed} ❌")
    logger.info(f"Broken:         {summary.broken} ⚠️")
    logger.info(f"Skipped:        {summary.skipped} ⏭️")
    logger.info(f"Pass Rate:      {summary.pass_rate:.2f}%")
    logger.info(f"Duration:       {summary.duration_ms / 1000:.2f}s")
    logger.info("=" * 60)


__all__ = [
    "attach_json",
    "attach_text",
    "attach_selection_result",
    "TestResultSummary",
    "parse_results",
    "summarize_results",
    "log_summary",
]
