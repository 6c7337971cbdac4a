"""Serialization shared by both order repositories.

Records are stored in the same camelCase shape the HTTP API returns.
"""

from __future__ import annotations

from typing import Any

from kiosk.domain.exceptions import StorageError
from kiosk.domain.model.drink import DEFAULT_SHOT_COUNT
from kiosk.domain.model.order import OrderRecord, OrderStatus


def to_raw(order: OrderRecord) -> dict[str, Any]:
    return {
        "orderId": order.order_id,
        "cacaoNormalized": order.cacao_normalized,
        "isIced": order.is_iced,
        "size": order.size,
        "hasTopping": order.has_topping,
        "shotCount": order.shot_count,
        "price": order.price,
        "status": order.status.value,
        "createdAt": order.created_at,
        "expiresAt": order.expires_at,
    }


def to_domain(raw: Any) -> OrderRecord:
    try:
        return OrderRecord(
            order_id=str(raw["orderId"]),
            cacao_normalized=str(raw["cacaoNormalized"]),
            is_iced=bool(raw["isIced"]),
            size=str(raw["size"]),
            has_topping=bool(raw["hasTopping"]),
            # records written before shots were offered have no count
            shot_count=int(raw.get("shotCount", DEFAULT_SHOT_COUNT)),
            price=int(raw["price"]),
            created_at=int(raw["createdAt"]),
            expires_at=int(raw["expiresAt"]),
            status=OrderStatus(raw["status"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise StorageError("Invalid order data") from exc
