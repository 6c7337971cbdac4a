"""Data Transfer Objects: plain containers that cross layer boundaries.

``to_json()`` renders the camelCase shape shared by the HTTP API and the
stored records, so a record read back over HTTP looks exactly like the
record that was persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kiosk.domain.model.order import OrderRecord


@dataclass(frozen=True)
class CreatedOrderDTO:
    """Output of create: deliberately without the normalized selection."""

    order_id: str
    price: int
    expires_at: int

    def to_json(self) -> dict[str, Any]:
        return {
            "orderId": self.order_id,
            "price": self.price,
            "expiresAt": self.expires_at,
        }


@dataclass(frozen=True)
class OrderDTO:
    """Output of show: the full stored record."""

    order_id: str
    cacao_normalized: str
    is_iced: bool
    size: str
    has_topping: bool
    shot_count: int
    price: int
    status: str
    created_at: int
    expires_at: int

    @staticmethod
    def from_record(order: OrderRecord) -> OrderDTO:
        return OrderDTO(
            order_id=order.order_id,
            cacao_normalized=order.cacao_normalized,
            is_iced=order.is_iced,
            size=order.size,
            has_topping=order.has_topping,
            shot_count=order.shot_count,
            price=order.price,
            status=order.status.value,
            created_at=order.created_at,
            expires_at=order.expires_at,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "orderId": self.order_id,
            "cacaoNormalized": self.cacao_normalized,
            "isIced": self.is_iced,
            "size": self.size,
            "hasTopping": self.has_topping,
            "shotCount": self.shot_count,
            "price": self.price,
            "status": self.status,
            "createdAt": self.created_at,
            "expiresAt": self.expires_at,
        }
