"""
Repository-level pytest configuration.

Why this exists:
  - Install the Loguru sinks before any test module logs
  - Keep the default target (the public Petstore demo API) explicit

Values below are the public demo defaults; point the suite elsewhere with
BASE_URL / API_BASE_PATH / API_KEY or the YAML config.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from petstore_suite.api_testing.framework.log_setup import init_logger


def pytest_configure(config):
    """Configure logging once per pytest process."""
    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
