"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for local runs (no secrets embedded)
  - Keep behavior explicit and discoverable

Values set here only apply when the user/CI has not provided them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.

    BASE_URL / API_URL feed the `base_url` / `api_url` fixtures.
    """
    defaults = {
        "BASE_URL": "https://github.com",
        "API_URL": "https://api.github.com",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
