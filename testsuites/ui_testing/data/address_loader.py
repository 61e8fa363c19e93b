"""
================================================================================
Address Case Loader
================================================================================

Loads savings calculator address cases from YAML.

The address list is owned outside the test code. A single ad-hoc address can
be supplied through `SAVINGS_CALCULATOR_ADDRESS`, which replaces the file
contents for the run.

================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import yaml
from loguru import logger


DEFAULT_ADDRESS_FILE = Path(__file__).parent / "addresses.yaml"

ADDRESS_ENV_VAR = "SAVINGS_CALCULATOR_ADDRESS"
EXPECTED_ENV_VAR = "SAVINGS_CALCULATOR_EXPECTED"

DEFAULT_EXPECTED_PARTS = ["Great news", "We provide services", "in your area"]


class AddressDataError(Exception):
    """Raised when the address file is malformed."""
    pass


@dataclass
class AddressCase:
    """One address to search for and the message parts expected afterwards."""
    name: str
    address: str
    expected_parts: List[str] = field(default_factory=list)
    description: str = ""
    tags: List[str] = field(default_factory=list)


def _parse_case(raw: dict, index: int) -> AddressCase:
    if not isinstance(raw, dict):
        raise AddressDataError(f"Address case #{index} must be a mapping, got {type(raw).__name__}")

    address = str(raw.get("address") or "").strip()
    if not address:
        raise AddressDataError(f"Address case #{index} has no address")

    expected = raw.get("expected_parts") or []
    if not isinstance(expected, list):
        raise AddressDataError(f"Address case #{index}: expected_parts must be a list")

    return AddressCase(
        name=str(raw.get("name") or f"case_{index}"),
        address=address,
        expected_parts=[str(part) for part in expected],
        description=str(raw.get("description") or ""),
        tags=[str(tag) for tag in raw.get("tags") or []],
    )


def load_address_cases(
    file_path: Optional[Union[str, Path]] = None,
    use_env: bool = True,
) -> List[AddressCase]:
    """
    Load address cases.

    Args:
        file_path: YAML file with an `address_cases` list
        use_env: Honour the SAVINGS_CALCULATOR_ADDRESS override

    Returns:
        List of AddressCase objects

    Raises:
        AddressDataError: File content is malformed
    """
    if use_env:
        override = os.environ.get(ADDRESS_ENV_VAR, "").strip()
        if override:
            expected_raw = os.environ.get(EXPECTED_ENV_VAR, "")
            expected = [p.strip() for p in expected_raw.split("|") if p.strip()]
            logger.info(f"Using address from {ADDRESS_ENV_VAR}: {override}")
            return [
                AddressCase(
                    name="env_override",
                    address=override,
                    expected_parts=expected or list(DEFAULT_EXPECTED_PARTS),
                    description=f"From {ADDRESS_ENV_VAR}",
                )
            ]

    path = Path(file_path) if file_path else DEFAULT_ADDRESS_FILE
    if not path.exists():
        logger.error(f"Address file not found: {path}")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise AddressDataError(f"Invalid YAML in address file {path}: {e}") from e

    if content is None:
        logger.warning(f"Empty address file: {path}")
        return []

    raw_cases = content.get("address_cases") if isinstance(content, dict) else content
    if not isinstance(raw_cases, list):
        raise AddressDataError(f"{path}: expected a list under 'address_cases'")

    cases = [_parse_case(raw, i) for i, raw in enumerate(raw_cases, start=1)]
    logger.debug(f"Loaded {len(cases)} address case(s) from {path}")
    return cases


__all__ = [
    "AddressCase",
    "AddressDataError",
    "load_address_cases",
    "ADDRESS_ENV_VAR",
    "EXPECTED_ENV_VAR",
    "DEFAULT_EXPECTED_PARTS",
]
