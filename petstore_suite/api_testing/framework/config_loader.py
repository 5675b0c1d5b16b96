"""
================================================================================
Configuration Loader
================================================================================

Petstore suite settings: a YAML file with per-key environment overrides.

Features:
    - Bundled defaults in petstore_suite/config/config.yaml
    - Derived variable names (api.base_url -> API_BASE_URL)
    - Short aliases kept for CI jobs (BASE_URL, API_KEY, TEST_TIMEOUT, ...)
    - Environment strings coerced to the type of the caller's default

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import yaml
from loguru import logger


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

# Short environment variable names accepted alongside the derived ones
ENV_ALIASES: Dict[str, str] = {
    "api.base_url": "BASE_URL",
    "api.base_path": "API_BASE_PATH",
    "api.key": "API_KEY",
    "api.timeout_ms": "TEST_TIMEOUT",
    "api.retry_count": "RETRY_COUNT",
    "credentials.user.username": "TEST_USER_USERNAME",
    "credentials.user.password": "TEST_USER_PASSWORD",
    "credentials.admin.username": "TEST_ADMIN_USERNAME",
    "credentials.admin.password": "TEST_ADMIN_PASSWORD",
}

TRUTHY = ("true", "1", "yes", "on")

_MISSING = object()


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def env_names(key: str) -> Iterator[str]:
    """Environment variables consulted for a key, highest priority first."""
    yield key.upper().replace(".", "_")
    alias = ENV_ALIASES.get(key)
    if alias:
        yield alias


def coerce(raw: str, reference: Any) -> Any:
    """
    Coerce an environment string to the type of ``reference``.

    Unparseable numbers are returned unchanged; consumers that need a number
    report the bad key themselves.
    """
    if isinstance(reference, bool):
        return raw.strip().lower() in TRUTHY
    for numeric in (int, float):
        if isinstance(reference, numeric):
            try:
                return numeric(raw)
            except ValueError:
                return raw
    return raw


class ConfigLoader:
    """
    Process-wide settings lookup.

    Priority for ``get(key, default)``:
        1. derived environment variable (API_TIMEOUT_MS)
        2. alias environment variable (TEST_TIMEOUT)
        3. YAML file
        4. ``default``

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base_path", "/v2")
        '/v2'
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        # One loader per process; the YAML file is read on first use only
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config = self._read_yaml(self._config_path)
        self._initialized = True

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.warning(f"No config file at {path}; using environment and defaults")
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        logger.debug(f"Loaded configuration from: {path}")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dot-notation key such as ``"credentials.user.password"``.

        Environment values are coerced to the type of ``default``.
        """
        for name in env_names(key):
            raw = os.environ.get(name)
            if raw is not None:
                return coerce(raw, default)

        value = self._from_file(key)
        return default if value is _MISSING else value

    def _from_file(self, key: str) -> Any:
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return _MISSING
            node = node[part]
        return node

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded instance so the next ConfigLoader() rereads the file."""
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "ENV_ALIASES",
    "coerce",
    "env_names",
]
