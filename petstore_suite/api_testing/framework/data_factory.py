"""
================================================================================
Petstore Test Data Factory
================================================================================

This module provides factory classes for generating Petstore payloads.
It supports creating valid, invalid, and boundary data for testing.

Features:
- Random payloads for pets, users, orders, categories and tags
- Field overrides on every valid payload
- Fixed catalogs of invalid and boundary values for negative testing

Generation is never seeded: every run exercises fresh names and ids.

================================================================================
"""

from typing import Dict, Any, List, Optional
from datetime import datetime, timezone
import random
import string

from .models import OrderStatus, PetStatus


# ================================================================================
# Factory Base
# ================================================================================

class DataFactoryBase:
    """
    Base class for Petstore data factories.

    Holds the random primitives shared by every resource factory.
    """

    ID_MIN = 1000
    ID_MAX = 10999
    STRING_CHARS = string.ascii_lowercase + string.digits

    def _random_id(self) -> int:
        """Generate a random resource id."""
        return random.randint(self.ID_MIN, self.ID_MAX)

    def _random_string(self, length: int = 8) -> str:
        """Generate random lowercase alphanumeric string."""
        return ''.join(random.choice(self.STRING_CHARS) for _ in range(length))

    def _random_choice(self, options: List[Any]) -> Any:
        """Select random item from list."""
        return random.choice(options)


# ================================================================================
# Category / Tag Factories
# ================================================================================

class CategoryFactory(DataFactoryBase):
    """Factory for pet categories."""

    def create_valid(self, **overrides) -> Dict[str, Any]:
        data = {
            "id": self._random_id(),
            "name": f"category_{self._random_string()}",
        }
        data.update(overrides)
        return data


class TagFactory(DataFactoryBase):
    """Factory for pet tags."""

    def create_valid(self, **overrides) -> Dict[str, Any]:
        data = {
            "id": self._random_id(),
            "name": f"tag_{self._random_string()}",
        }
        data.update(overrides)
        return data


# ================================================================================
# Pet Factory
# ================================================================================

class PetFactory(DataFactoryBase):
    """
    Factory for generating pet test data.

    Pets are created without an id; the server assigns one.
    """

    PHOTO_URLS = [
        "https://example.com/photo1.jpg",
        "https://example.com/photo2.jpg",
    ]

    def __init__(self):
        self._categories = CategoryFactory()
        self._tags = TagFactory()

    def create_valid(self, **overrides) -> Dict[str, Any]:
        """
        Create valid pet data.

        Args:
            **overrides: Field overrides (e.g. status="sold")

        Returns:
            Pet payload with name, photoUrls, category, tags and status
        """
        data = {
            "name": f"pet_{self._random_string()}",
            "photoUrls": list(self.PHOTO_URLS),
            "category": self._categories.create_valid(),
            "tags": [self._tags.create_valid()],
            "status": PetStatus.AVAILABLE.value,
        }
        data.update(overrides)
        return data

    def create_with_id(self, **overrides) -> Dict[str, Any]:
        """Create a full pet record including a client-chosen id."""
        return {"id": self._random_id(), **self.create_valid(**overrides)}

    @staticmethod
    def valid_statuses() -> List[str]:
        return [status.value for status in PetStatus]

    @staticmethod
    def invalid_payloads() -> Dict[str, Dict[str, Any]]:
        """Pet payloads that violate the resource schema."""
        return {
            "missing_name": {
                "photoUrls": ["https://example.com/photo.jpg"],
            },
            "missing_photo_urls": {
                "name": "TestPet",
            },
            "invalid_status": {
                "name": "TestPet",
                "photoUrls": ["https://example.com/photo.jpg"],
                "status": "invalid_status",
            },
        }


# ================================================================================
# User Factory
# ================================================================================

class UserFactory(DataFactoryBase):
    """
    Factory for generating user test data.

    Used for account CRUD and login testing.
    """

    def create_valid(self, **overrides) -> Dict[str, Any]:
        """
        Create valid user data.

        Args:
            **overrides: Additional field overrides

        Returns:
            Full user payload; email is derived from the username
        """
        username = overrides.pop("username", None) or f"user_{self._random_string()}"
        data = {
            "username": username,
            "firstName": f"FirstName_{self._random_string(5)}",
            "lastName": f"LastName_{self._random_string(5)}",
            "email": f"{username}@example.com",
            "password": f"password_{self._random_string()}",
            "phone": f"+1{random.randint(1000000000, 9999999999)}",
            "userStatus": 1,
        }
        data.update(overrides)
        return data

    def create_with_id(self, **overrides) -> Dict[str, Any]:
        return {"id": self._random_id(), **self.create_valid(**overrides)}

    def create_minimal(self) -> Dict[str, Any]:
        """Create user with only the username."""
        return {"username": f"minimal_user_{self._random_string()}"}

    def create_batch(self, count: int) -> List[Dict[str, Any]]:
        """Create several distinct users for the bulk endpoints."""
        return [self.create_valid() for _ in range(count)]

    @staticmethod
    def invalid_payloads() -> Dict[str, Dict[str, Any]]:
        """User payloads that violate the resource schema."""
        return {
            "missing_username": {
                "firstName": "Test",
                "lastName": "User",
                "email": "test@example.com",
            },
            "invalid_email": {
                "username": "testuser",
                "email": "invalid-email",
            },
        }

    @staticmethod
    def test_credentials(config: Optional[Any] = None) -> Dict[str, Dict[str, str]]:
        """
        Predefined accounts for login testing.

        Args:
            config: Object exposing ``get(key, default)``. Creates a ConfigLoader if None.
        """
        if config is None:
            from .config_loader import ConfigLoader
            config = ConfigLoader()

        return {
            "user": {
                "username": config.get("credentials.user.username", "user1"),
                "password": config.get("credentials.user.password", "password"),
            },
            "admin": {
                "username": config.get("credentials.admin.username", "admin"),
                "password": config.get("credentials.admin.password", "admin123"),
            },
        }


# ================================================================================
# Order Factory
# ================================================================================

class OrderFactory(DataFactoryBase):
    """
    Factory for generating store order data.

    Orders reference a pet; a random pet id is used when none is given.
    """

    def create_valid(self, pet_id: Optional[int] = None, **overrides) -> Dict[str, Any]:
        """
        Create valid order data.

        Args:
            pet_id: Pet being ordered
            **overrides: Additional field overrides

        Returns:
            Order payload with status "placed" and quantity 1-5
        """
        data = {
            "petId": pet_id if pet_id is not None else self._random_id(),
            "quantity": random.randint(1, 5),
            "status": OrderStatus.PLACED.value,
            "complete": False,
        }
        data.update(overrides)
        return data

    def create_with_id(self, pet_id: Optional[int] = None, **overrides) -> Dict[str, Any]:
        """Create a full order record with id and current ship date."""
        return {
            "id": self._random_id(),
            "shipDate": iso_timestamp(),
            **self.create_valid(pet_id, **overrides),
        }

    @staticmethod
    def valid_statuses() -> List[str]:
        return [status.value for status in OrderStatus]


# ================================================================================
# Composite Factory
# ================================================================================

class PetStoreDataFactory:
    """
    Composite factory providing access to all data factories.

    Usage:
        factory = PetStoreDataFactory()
        pet = factory.pet.create_valid(status="pending")
        order = factory.order.create_valid(pet_id=created_pet_id)
    """

    def __init__(self):
        self.category = CategoryFactory()
        self.tag = TagFactory()
        self.pet = PetFactory()
        self.user = UserFactory()
        self.order = OrderFactory()

    def random_string(self, length: int = 8) -> str:
        return self.pet._random_string(length)

    @staticmethod
    def boundary_payloads() -> Dict[str, Dict[str, str]]:
        """Edge-case name/username values."""
        return {
            "long_strings": {
                "name": "a" * 1000,
                "username": "u" * 500,
            },
            "special_characters": {
                "name": "Pet@#$%^&*()",
                "username": "user!@#$%",
            },
            "empty_strings": {
                "name": "",
                "username": "",
            },
        }


# ================================================================================
# Convenience Functions
# ================================================================================

def iso_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_test_pet(**kwargs) -> Dict[str, Any]:
    """Quick helper to create valid pet data."""
    return PetFactory().create_valid(**kwargs)


def create_test_user(**kwargs) -> Dict[str, Any]:
    """Quick helper to create valid user data."""
    return UserFactory().create_valid(**kwargs)


def create_test_order(pet_id: Optional[int] = None, **kwargs) -> Dict[str, Any]:
    """Quick helper to create valid order data."""
    return OrderFactory().create_valid(pet_id, **kwargs)
