"""
================================================================================
Resource Tracker
================================================================================

Bookkeeping for resources a scenario creates on the shared Petstore API.

Ids are registered right after creation and deleted once the owning test
module finishes. Cleanup is best effort: failures are logged and never
retried or raised.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union
from urllib.parse import quote

from loguru import logger

from .http_client import ApiClient


@dataclass
class ResourceTracker:
    """
    Created resources awaiting deletion.

    Usage:
        tracker = ResourceTracker()
        tracker.track_pet(response.data["id"])
        ...
        tracker.cleanup(client)
    """
    pets: List[int] = field(default_factory=list)
    orders: List[int] = field(default_factory=list)
    users: List[str] = field(default_factory=list)

    def track_pet(self, pet_id: Optional[int]) -> None:
        if pet_id is not None:
            self.pets.append(pet_id)

    def track_order(self, order_id: Optional[int]) -> None:
        if order_id is not None:
            self.orders.append(order_id)

    def track_user(self, username: Optional[str]) -> None:
        if username:
            self.users.append(username)

    @property
    def pending(self) -> int:
        return len(self.pets) + len(self.orders) + len(self.users)

    def cleanup(self, client: ApiClient) -> int:
        """
        Delete every tracked resource: orders, then pets, then users.

        Returns:
            Number of deletions that raised or returned an error status
        """
        if not self.pending:
            return 0

        logger.info(f"🧹 Cleaning up {self.pending} test resources...")
        failures = 0
        targets = (
            [("order", oid, f"/store/order/{oid}") for oid in self.orders]
            + [("pet", pid, f"/pet/{pid}") for pid in self.pets]
            + [("user", name, f"/user/{quote(name, safe='')}") for name in self.users]
        )
        for kind, resource_id, endpoint in targets:
            if not self._delete(client, kind, resource_id, endpoint):
                failures += 1

        self.pets.clear()
        self.orders.clear()
        self.users.clear()
        return failures

    @staticmethod
    def _delete(
        client: ApiClient,
        kind: str,
        resource_id: Union[int, str],
        endpoint: str,
    ) -> bool:
        try:
            response = client.delete(endpoint)
        except Exception as e:
            logger.warning(f"Failed to cleanup {kind} {resource_id}: {e}")
            return False

        if response.status >= 400:
            logger.warning(
                f"Failed to cleanup {kind} {resource_id}: status {response.status}"
            )
            return False

        logger.debug(f"Cleaned up {kind}: {resource_id}")
        return True


__all__ = ["ResourceTracker"]
