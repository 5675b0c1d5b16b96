"""
================================================================================
Petstore Data Models
================================================================================

Plain value records mirroring the Petstore resources, plus the normalized
response returned by ApiClient.

Wire names are camelCase (photoUrls, petId, userStatus); ``to_dict`` keeps
them and drops unset optional fields so payloads match what the API expects.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class PetStatus(str, Enum):
    """Pet availability in the store."""
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


class OrderStatus(str, Enum):
    """Order processing state."""
    PLACED = "placed"
    APPROVED = "approved"
    DELIVERED = "delivered"


class _Record:
    """Shared dict conversion for the wire records below."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, _Record):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [v.to_dict() if isinstance(v, _Record) else v for v in value]
            result[f.name] = value
        return result


@dataclass
class Category(_Record):
    id: int
    name: str


@dataclass
class Tag(_Record):
    id: int
    name: str


@dataclass
class Pet(_Record):
    """A pet; ``id`` is assigned by the server on creation."""
    name: str
    photoUrls: List[str] = field(default_factory=list)
    id: Optional[int] = None
    category: Optional[Category] = None
    tags: List[Tag] = field(default_factory=list)
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pet":
        pet = super().from_dict(data)
        if isinstance(pet.category, dict):
            pet.category = Category.from_dict(pet.category)
        pet.tags = [Tag.from_dict(t) if isinstance(t, dict) else t for t in pet.tags or []]
        return pet


@dataclass
class Order(_Record):
    petId: int
    quantity: int
    id: Optional[int] = None
    shipDate: Optional[str] = None
    status: Optional[str] = None
    complete: Optional[bool] = None


@dataclass
class User(_Record):
    """A store user, addressed by ``username`` on the API."""
    username: str
    id: Optional[int] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    userStatus: Optional[int] = None


@dataclass
class ApiResponse:
    """
    Normalized HTTP response.

    Attributes:
        status: Numeric HTTP status code
        data: Parsed JSON body, or the raw text when the body is not JSON
        headers: Response headers with lowercase names
    """
    status: int
    data: Any
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json_dict(self) -> Dict[str, Any]:
        """Return the body when it is a JSON object, else an empty dict."""
        return self.data if isinstance(self.data, dict) else {}


__all__ = [
    "ApiResponse",
    "Category",
    "Order",
    "OrderStatus",
    "Pet",
    "PetStatus",
    "Tag",
    "User",
]
