"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for Petstore API scenarios.

Fixtures:
    - config: Configuration loader instance
    - api_client: Initialized ApiClient, disposed after each test
    - data_factory: Payload factories
    - created_resources: Per-module tracker, cleaned up after the module
    - _suite_lifecycle: Banner + connectivity probe / summary, once per run

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Generator

import allure
import pytest
from loguru import logger

from petstore_suite.api_testing.framework import (
    ApiClient,
    ConfigLoader,
    PetStoreDataFactory,
    ResourceTracker,
)
from petstore_suite.api_testing.framework.lifecycle import (
    log_suite_banner,
    log_suite_summary,
    probe_connectivity,
    skip_when_unreachable,
)


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """
    Provide configuration loader instance.

    Session-scoped to ensure configuration is loaded only once.
    """
    return ConfigLoader()


@pytest.fixture(scope="session")
def data_factory() -> PetStoreDataFactory:
    """Provide the payload factories."""
    return PetStoreDataFactory()


@pytest.fixture(scope="session", autouse=True)
def _suite_lifecycle(request, config: ConfigLoader) -> Generator[None, None, None]:
    """Global setup/teardown: log settings, probe the API, point at reports."""
    workers = getattr(request.config.option, "numprocesses", None) or 1
    log_suite_banner(config, workers=workers, groups=["api", "e2e"])

    if config.get("suite.connectivity_check", True):
        status = probe_connectivity(config)
        if skip_when_unreachable(config, status):
            pytest.skip("Petstore API is unreachable")
    logger.info("🎯 Global setup completed")

    yield

    log_suite_summary(config.get("suite.report_dir", "reports"))


# =============================================================================
# Module-Scoped Fixtures
# =============================================================================

@pytest.fixture(scope="module")
def created_resources(config: ConfigLoader) -> Generator[ResourceTracker, None, None]:
    """
    Track resources created by the tests of one module.

    Everything registered here is deleted after the last test of the module,
    using a dedicated client. Failures are logged, never raised.

    Usage:
        def test_create_pet(api_client, created_resources):
            response = api_client.post("/pet", payload)
            created_resources.track_pet(response.data["id"])
    """
    tracker = ResourceTracker()
    yield tracker

    with ApiClient(config) as client:
        failures = tracker.cleanup(client)
    if failures:
        logger.warning(f"{failures} resources could not be cleaned up")


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture
def api_client(config: ConfigLoader) -> Generator[ApiClient, None, None]:
    """
    Provide an initialized Petstore client.

    Usage:
        def test_example(api_client):
            response = api_client.get("/store/inventory")
            assert response.status == 200
    """
    with ApiClient(config) as client:
        yield client


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )
