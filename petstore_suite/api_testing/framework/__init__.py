"""
================================================================================
API Testing Framework
================================================================================

Petstore API automation framework components.

Modules:
    - config_loader: YAML + environment configuration
    - log_setup: Loguru sink configuration
    - models: Resource records and the normalized ApiResponse
    - http_client: httpx wrapper with Allure logging
    - data_factory: Random payload factories and negative-test catalogs
    - api_assertions: Status / property / error-shape assertions
    - resource_tracker: Best-effort cleanup of created resources
    - lifecycle: Suite banner, connectivity probe, summary

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .http_client import ApiClient, ClientNotInitializedError, HttpClientError
from .log_setup import init_logger
from .models import ApiResponse, Category, Order, OrderStatus, Pet, PetStatus, Tag, User
from .data_factory import PetStoreDataFactory
from .resource_tracker import ResourceTracker

__all__ = [
    "ApiClient",
    "ApiResponse",
    "Category",
    "ClientNotInitializedError",
    "ConfigLoader",
    "ConfigurationError",
    "HttpClientError",
    "Order",
    "OrderStatus",
    "Pet",
    "PetStatus",
    "PetStoreDataFactory",
    "ResourceTracker",
    "Tag",
    "User",
    "init_logger",
]
