"""
================================================================================
Petstore HTTP Client with Allure Integration
================================================================================

Thin request wrapper over httpx featuring:
    - GET / POST / PUT / DELETE and url-encoded form POST
    - Base URL plus API path prefix (/v2) on every endpoint
    - Normalized responses (status, parsed body, headers)
    - Retry with exponential backoff on network errors (POST only when unsent)
    - Allure reporting with cURL command generation

HTTP error statuses are returned to the caller as data, never raised.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import time
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import allure
import httpx
from allure_commons.types import AttachmentType
from loguru import logger

from .config_loader import ConfigLoader, ConfigurationError
from .models import ApiResponse


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

DEFAULT_BASE_URL = "https://petstore.swagger.io"
DEFAULT_BASE_PATH = "/v2"
DEFAULT_API_KEY = "special-key"
DEFAULT_TIMEOUT_MS = 30000

# Default retry settings
DEFAULT_RETRY_COUNT = 3
DEFAULT_RETRY_BACKOFF = 0.5
DEFAULT_RETRY_MAX_WAIT = 5.0

# Methods that may be re-sent after the request reached the server
IDEMPOTENT_METHODS = {"GET", "HEAD", "OPTIONS", "PUT", "DELETE"}

# Failures that happen before a single byte is sent; safe for every method
UNSENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

SENSITIVE_HEADERS = {"authorization", "api_key", "x-api-key", "cookie", "set-cookie"}
SENSITIVE_BODY_TOKENS = ("password", "secret", "token", "api_key", "authorization", "session")


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class ClientNotInitializedError(HttpClientError):
    """Raised when a request is issued before the client session is opened."""
    pass


class ApiClient:
    """
    Petstore API client.

    Every verb returns an ApiResponse; 4xx/5xx statuses are data for the
    scenario to assert on. Only transport failures raise.

    Usage:
        >>> config = ConfigLoader()
        >>> with ApiClient(config) as client:
        ...     response = client.get("/pet/findByStatus", {"status": ["available", "sold"]})
        ...     print(response.status, len(response.data))
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize API client with configuration.

        Args:
            config: Configuration loader instance. Creates new one if None.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        if config is None:
            config = ConfigLoader()

        self.config = config
        self.base_url = str(config.get("api.base_url", DEFAULT_BASE_URL)).rstrip("/")
        self.api_base_path = str(config.get("api.base_path", DEFAULT_BASE_PATH)).rstrip("/")
        self.api_key = str(config.get("api.key", DEFAULT_API_KEY))
        self.timeout_ms = self._numeric(config, "api.timeout_ms", DEFAULT_TIMEOUT_MS, int)
        self.retry_count = max(
            1, self._numeric(config, "api.retry_count", DEFAULT_RETRY_COUNT, int)
        )
        self.retry_backoff = self._numeric(
            config, "api.retry_backoff", DEFAULT_RETRY_BACKOFF, float
        )
        self.retry_max_wait = self._numeric(
            config, "api.retry_max_wait", DEFAULT_RETRY_MAX_WAIT, float
        )

        self._transport = transport
        self.session: Optional[httpx.Client] = None

    @staticmethod
    def _numeric(config: Any, key: str, default: Any, cast: type) -> Any:
        value = config.get(key, default)
        try:
            return cast(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Configuration value '{key}' must be a number, got {value!r}"
            ) from e

    def init(self) -> "ApiClient":
        """Open the underlying HTTP session."""
        if self.session is None:
            self.session = httpx.Client(
                base_url=self.base_url,
                headers=self.default_headers,
                timeout=httpx.Timeout(self.timeout_ms / 1000.0),
                transport=self._transport,
            )
        return self

    def dispose(self) -> None:
        """Close the HTTP session. Safe to call more than once."""
        if self.session:
            self.session.close()
            self.session = None

    def __enter__(self) -> "ApiClient":
        return self.init()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    @property
    def default_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "api_key": self.api_key,
        }

    # =========================================================================
    # Public verbs
    # =========================================================================

    def get(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        """Execute GET request; list values in params become repeated keys."""
        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["params"] = self.build_query(params)
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, body: Any = None) -> ApiResponse:
        """Execute POST request with a JSON body."""
        return self.request("POST", endpoint, **self._json_kwargs(body))

    def put(self, endpoint: str, body: Any = None) -> ApiResponse:
        """Execute PUT request with a JSON body."""
        return self.request("PUT", endpoint, **self._json_kwargs(body))

    def delete(self, endpoint: str) -> ApiResponse:
        """Execute DELETE request."""
        return self.request("DELETE", endpoint)

    def post_form_data(self, endpoint: str, form_data: Mapping[str, Any]) -> ApiResponse:
        """Execute POST request with an url-encoded form body."""
        return self.request(
            "POST",
            endpoint,
            data={k: self._stringify(v) for k, v in form_data.items() if v is not None},
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    def request(self, method: str, endpoint: str, **kwargs: Any) -> ApiResponse:
        """
        Execute HTTP request with network retry and Allure logging.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: Endpoint relative to the API base path (e.g. "/pet/1")
            **kwargs: Additional arguments passed to httpx.Client.request

        Returns:
            Normalized ApiResponse

        Raises:
            ClientNotInitializedError: When called before init()
            httpx.HTTPError: When network retries are exhausted
        """
        if self.session is None:
            raise ClientNotInitializedError(
                "API client not initialized. "
                "Call init() or use 'with ApiClient(config) as client:'"
            )

        url = self.full_url(endpoint)

        for attempt in range(self.retry_count):
            try:
                response = self.session.request(method, url, **kwargs)
                break
            except (httpx.TimeoutException, httpx.NetworkError) as e:
                if not self._is_retryable(method, e):
                    logger.error(
                        f"{method} {url} failed after it may have reached the server: {e}. "
                        f"Not retrying"
                    )
                    raise
                if attempt < self.retry_count - 1:
                    wait_time = self._calculate_backoff(attempt)
                    logger.warning(
                        f"Network error: {e}. Retrying in {wait_time}s. "
                        f"Attempt {attempt + 1}/{self.retry_count}"
                    )
                    time.sleep(wait_time)
                else:
                    logger.error(f"All retries exhausted. Last error: {e}")
                    raise

        result = ApiResponse(
            status=response.status_code,
            data=self.parse_body(response.text),
            headers=dict(response.headers.items()),
        )
        logger.debug(f"{method} {url} -> {result.status}")
        self._log_to_allure(method, url, kwargs, result)
        return result

    # =========================================================================
    # Encoding / decoding
    # =========================================================================

    def full_url(self, endpoint: str) -> str:
        """Prefix the endpoint with the API base path."""
        return f"{self.api_base_path}{endpoint}"

    @classmethod
    def build_query(cls, params: Mapping[str, Any]) -> List[Tuple[str, str]]:
        """
        Flatten query parameters into (key, value) pairs.

        Sequences become repeated keys; None values are dropped.
        """
        pairs: List[Tuple[str, str]] = []
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                pairs.extend((key, cls._stringify(v)) for v in value if v is not None)
            else:
                pairs.append((key, cls._stringify(value)))
        return pairs

    @staticmethod
    def parse_body(text: str) -> Any:
        """Parse a body as JSON, falling back to the raw text."""
        try:
            return json.loads(text)
        except ValueError:
            return text

    @staticmethod
    def _stringify(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)

    @staticmethod
    def _json_kwargs(body: Any) -> Dict[str, Any]:
        if body is None:
            return {}
        return {"json": body}

    @staticmethod
    def _is_retryable(method: str, error: Exception) -> bool:
        """A POST is only re-sent when the first attempt never left the client."""
        if isinstance(error, UNSENT_ERRORS):
            return True
        return method.upper() in IDEMPOTENT_METHODS

    def _calculate_backoff(self, attempt: int) -> float:
        """
        Calculate exponential backoff wait time.

        Formula: base * (2 ^ attempt), capped at max_wait
        """
        wait_time = self.retry_backoff * (2 ** attempt)
        return min(wait_time, self.retry_max_wait)

    # =========================================================================
    # Reporting
    # =========================================================================

    def _log_to_allure(
        self,
        method: str,
        url: str,
        kwargs: Dict[str, Any],
        response: ApiResponse,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL with query parameters
            - Request headers (redacted)
            - Request body or form fields (redacted)
            - cURL command for reproduction
            - Response status
            - Response body (truncated if too long)
        """
        full_url = f"{self.base_url}{url}"
        params = kwargs.get("params")
        if params:
            query_string = "&".join(f"{k}={v}" for k, v in params)
            full_url = f"{full_url}?{query_string}"

        status_icon = "✅" if response.status < 400 else "❌"
        step_title = f"{status_icon} {method} {url} → {response.status}"

        headers = {**self.default_headers, **kwargs.get("headers", {})}
        safe_headers = self._redact_headers(headers)
        body = kwargs.get("json", kwargs.get("data"))
        safe_body = self._redact_body(body)

        with allure.step(step_title):
            allure.attach(
                full_url,
                name="🔗 Request URL",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                json.dumps(safe_headers, ensure_ascii=False, indent=2),
                name="📤 Request Headers",
                attachment_type=AttachmentType.JSON
            )

            if safe_body is not None:
                allure.attach(
                    json.dumps(safe_body, ensure_ascii=False, indent=2),
                    name="📤 Request Body",
                    attachment_type=AttachmentType.JSON
                )

            curl_cmd = self._build_curl(
                method, full_url, safe_headers, safe_body, form="data" in kwargs
            )
            allure.attach(
                curl_cmd,
                name="🔧 cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_icon} {response.status}",
                name="📥 Response Status",
                attachment_type=AttachmentType.TEXT
            )

            if isinstance(response.data, str):
                response_content = response.data or "<empty>"
                body_type = AttachmentType.TEXT
            else:
                response_content = json.dumps(response.data, ensure_ascii=False, indent=2)
                body_type = AttachmentType.JSON

            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="📥 Response Body",
                attachment_type=body_type
            )

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mask sensitive header values before logging.
        """
        masked = {}
        for key, value in headers.items():
            if key.lower() in SENSITIVE_HEADERS:
                masked[key] = "***MASKED***"
            else:
                masked[key] = value
        return masked

    def _redact_body(self, payload: Any) -> Any:
        """
        Recursively mask sensitive fields in request bodies.
        """
        if isinstance(payload, dict):
            redacted = {}
            for key, value in payload.items():
                if any(token in key.lower() for token in SENSITIVE_BODY_TOKENS):
                    redacted[key] = "***MASKED***"
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
        form: bool = False,
    ) -> str:
        """
        Build cURL command for request reproduction.

        Generates a copy-paste ready cURL command with:
            - HTTP method
            - Headers
            - JSON body or form fields (if present)
        """
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if form and body:
            for key, value in body.items():
                parts.append(f"--data-urlencode '{key}={value}'")
        elif body is not None:
            body_json = json.dumps(body, ensure_ascii=False)
            parts.append(f"-d '{body_json}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


__all__ = [
    "ApiClient",
    "ClientNotInitializedError",
    "HttpClientError",
]
