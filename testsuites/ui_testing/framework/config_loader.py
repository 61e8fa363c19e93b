"""
================================================================================
Configuration Loader
================================================================================

Settings for the UI suites: site URLs, browser options and the savings
calculator wait policy, read from `config/config.yaml`.

Lookup order for `get("section.key")`:
    1. Environment variable SECTION_KEY (string, coerced to the default's type)
    2. YAML value at section -> key
    3. The caller's default

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# <repo root>/config/config.yaml
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

_TRUTHY = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed."""
    pass


def env_key(key: str) -> str:
    """`savings_calculator.hover_settle` -> `SAVINGS_CALCULATOR_HOVER_SETTLE`."""
    return key.upper().replace(".", "_")


class ConfigLoader:
    """
    Process-wide configuration (singleton).

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("savings_calculator.fallback_anchor", "1/435b")
        '1/435b'

        # SAVINGS_CALCULATOR_HOVER_SETTLE=50 in the environment
        >>> config.get("savings_calculator.hover_settle", 300)
        50
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read; DEFAULT_CONFIG_PATH when omitted.
                Ignored once the singleton has been created (see `reset()`).
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e
        logger.debug(f"Loaded configuration from: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value for a dot-notation key (environment first, then YAML, then default).

        An empty environment value counts as set, so
        `SAVINGS_CALCULATOR_FALLBACK_ANCHOR=""` disables the anchor fallback.
        """
        raw = os.environ.get(env_key(key))
        if raw is not None:
            return self._coerce(raw, default)

        node: Any = self._config
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    def get_section(self, section: str) -> Dict[str, Any]:
        """Whole YAML section (no environment overrides), {} when absent."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Re-read the YAML file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    @staticmethod
    def _coerce(value: str, reference: Any) -> Any:
        """Convert an environment string to the type of `reference`."""
        if isinstance(reference, bool):
            return value.lower() in _TRUTHY
        for kind in (int, float):
            if isinstance(reference, kind):
                try:
                    return kind(value)
                except ValueError:
                    logger.warning(f"Cannot read '{value}' as {kind.__name__}, using it as text")
                    return value
        return value

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next `ConfigLoader()` reads config afresh."""
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "env_key",
]
