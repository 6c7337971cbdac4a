"""Abstract repository for the OrderRecord aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (key-value binding, JSON file)
live in the infrastructure layer and must be interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from kiosk.domain.model.order import OrderRecord


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> OrderRecord | None:
        """Return an order by its ID, or None if not found.

        Expired records are returned too; expiry is the caller's concern.
        Raises StorageError if the store cannot be read.
        """

    @abstractmethod
    def save(self, order: OrderRecord) -> None:
        """Persist a new order, atomically or not at all.

        Raises StorageError if the write fails.
        """
