"""
================================================================================
Suite Lifecycle
================================================================================

Run-once reporting around the API suite: a configuration banner and
connectivity probe before the first scenario, and a pointer to the result
artifacts after the last one. Nothing here can fail the run; skipping
the live scenarios on an unreachable API is opt-in.

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

import httpx
from loguru import logger


PROBE_TIMEOUT_SECONDS = 10.0


def _api_root(config: Any) -> str:
    base_url = str(config.get("api.base_url", "https://petstore.swagger.io")).rstrip("/")
    base_path = str(config.get("api.base_path", "/v2")).rstrip("/")
    return f"{base_url}{base_path}"


def log_suite_banner(config: Any, workers: Any = 1, groups: Iterable[str] = ()) -> None:
    """Log the settings the suite is about to run with."""
    logger.info("🚀 Starting Petstore API Test Suite")
    logger.info("📊 Test Configuration:")
    logger.info(f"   - Base URL: {config.get('api.base_url', 'https://petstore.swagger.io')}")
    logger.info(f"   - API Path: {config.get('api.base_path', '/v2')}")
    logger.info(f"   - Workers: {workers}")
    groups = list(groups)
    if groups:
        logger.info(f"   - Groups: {', '.join(groups)}")


def probe_connectivity(
    config: Any,
    transport: Optional[httpx.BaseTransport] = None,
) -> Optional[int]:
    """
    Check the API is reachable by fetching its swagger document.

    Returns:
        The HTTP status, or None when the request itself failed
    """
    url = f"{_api_root(config)}/swagger.json"
    try:
        with httpx.Client(timeout=PROBE_TIMEOUT_SECONDS, transport=transport) as client:
            response = client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"❌ Failed to connect to Petstore API: {e}")
        return None

    if response.status_code == 200:
        logger.info("✅ Petstore API is accessible")
    else:
        logger.warning(f"⚠️  Petstore API returned status: {response.status_code}")
    return response.status_code


def skip_when_unreachable(config: Any, status: Optional[int]) -> bool:
    """
    Whether live scenarios should be skipped after a failed probe.

    Opt-in via suite.skip_when_unreachable; by default the scenarios run
    and fail.
    """
    if status is not None:
        return False
    return bool(config.get("suite.skip_when_unreachable", False))


def log_suite_summary(report_dir: Union[str, Path] = "reports") -> None:
    """Log where the run's result artifacts are written."""
    report_dir = Path(report_dir)
    logger.info("🏁 Test Suite Completed")
    logger.info("📈 Check test results in:")
    logger.info(f"   - HTML Report: {report_dir / 'allure-report' / 'index.html'}")
    logger.info(f"   - JSON Results: {report_dir / 'allure-results'}")
    logger.info(f"   - JUnit XML: {report_dir / 'test-results.xml'}")


__all__ = [
    "log_suite_banner",
    "log_suite_summary",
    "probe_connectivity",
    "skip_when_unreachable",
]
