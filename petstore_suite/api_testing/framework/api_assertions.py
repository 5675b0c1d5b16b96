"""
================================================================================
API Assertion Helpers
================================================================================

Small validation helpers shared by every scenario:

- expect_status: exact status code match
- expect_properties: keys present in a JSON object body
- expect_structure: keys present with the expected Python type
- expect_error_response: status match plus a loose error-shaped body

Each helper raises AssertionError with a readable message and records an
Allure step. There is no recovery: a mismatch fails the test.

================================================================================
"""

from typing import Any, Dict, Iterable, Optional

import allure
from loguru import logger

from .models import ApiResponse


def _describe(data: Any, limit: int = 300) -> str:
    text = repr(data)
    return text if len(text) <= limit else f"{text[:limit]}..."


def _matches_type(value: Any, expected_type: type) -> bool:
    # JSON true/false are not numbers, though bool subclasses int
    if isinstance(value, bool) and expected_type in (int, float):
        return False
    return isinstance(value, expected_type)


@allure.step("Expect status {expected_status}")
def expect_status(response: ApiResponse, expected_status: int) -> None:
    """Assert that the response has the expected status code."""
    if response.status != expected_status:
        logger.warning(
            f"Status mismatch: expected {expected_status}, got {response.status}"
        )
        raise AssertionError(
            f"Expected status {expected_status}, got {response.status}. "
            f"Body: {_describe(response.data)}"
        )


@allure.step("Expect response properties {properties}")
def expect_properties(response: ApiResponse, properties: Iterable[str]) -> None:
    """Assert that every listed property is present in the response body."""
    if not isinstance(response.data, dict):
        raise AssertionError(
            f"Expected a JSON object body, got {type(response.data).__name__}: "
            f"{_describe(response.data)}"
        )

    missing = [prop for prop in properties if prop not in response.data]
    if missing:
        raise AssertionError(
            f"Response is missing properties {missing}. Body: {_describe(response.data)}"
        )


@allure.step("Expect response structure")
def expect_structure(
    response: ApiResponse,
    expected_structure: Dict[str, Optional[type]],
) -> None:
    """
    Assert that the response body matches an expected shape.

    Args:
        response: Normalized API response
        expected_structure: Mapping of property name to expected type.
            ``None`` only checks presence.
    """
    expect_properties(response, expected_structure.keys())

    errors = []
    for key, expected_type in expected_structure.items():
        if expected_type is None:
            continue
        value = response.data[key]
        if not _matches_type(value, expected_type):
            errors.append(
                f"- {key}: expected {expected_type.__name__}, "
                f"got {type(value).__name__} ({_describe(value, 80)})"
            )

    if errors:
        raise AssertionError(
            f"Response structure mismatch ({len(errors)} fields):\n" + "\n".join(errors)
        )


def has_error_shape(data: Any) -> bool:
    """Error bodies vary: an object with message/error, or plain text."""
    if isinstance(data, str):
        return True
    if isinstance(data, dict):
        return bool(data.get("message") or data.get("error"))
    return False


@allure.step("Expect error response {expected_status}")
def expect_error_response(response: ApiResponse, expected_status: int) -> None:
    """Assert an error status and an error-shaped body."""
    expect_status(response, expected_status)
    if not has_error_shape(response.data):
        raise AssertionError(
            f"Expected an error body (message/error field or text), "
            f"got: {_describe(response.data)}"
        )


__all__ = [
    "expect_error_response",
    "expect_properties",
    "expect_status",
    "expect_structure",
    "has_error_shape",
]
