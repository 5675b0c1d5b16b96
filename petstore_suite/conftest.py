"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags collected items by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end workflows spanning several resources"
    )
    config.addinivalue_line(
        "markers", "mutation: Negative tests against missing or invalid resources"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework itself"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: Tests that call the live Petstore API"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "pet: Tests related to /pet"
    )
    config.addinivalue_line(
        "markers", "store: Tests related to /store"
    )
    config.addinivalue_line(
        "markers", "user: Tests related to /user"
    )
    config.addinivalue_line(
        "markers", "auth: Tests related to login and logout"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the 'api' marker to live scenarios and 'unit' to offline tests.
    """
    for item in items:
        if "api_testing" in item.path.parts:
            item.add_marker(pytest.mark.api)

        if "unit" in item.path.parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Petstore API Automation Suite",
        "=" * 60,
        "",
    ]
