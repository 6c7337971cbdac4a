"""Order record: the only aggregate of the kiosk.

A record is created once, never mutated, and never deleted by this
package.  Expiry is not a stored state; it is derived from the clock on
every read.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from kiosk.domain.model.drink import DrinkSelection

ORDER_TTL_MS = 10 * 60 * 1000

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


class OrderStatus(Enum):
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"  # derived at read time, never persisted


@dataclass(frozen=True)
class OrderRecord:
    """A customer's drink configuration with its locked price and timing.

    Use ``OrderRecord.create()`` for new orders.  The constructor stays
    plain so repositories can reconstitute stored records as they are.
    """

    order_id: str
    cacao_normalized: str
    is_iced: bool
    size: str
    has_topping: bool
    shot_count: int
    price: int  # locked at creation time
    created_at: int
    expires_at: int
    status: OrderStatus = OrderStatus.PENDING

    @staticmethod
    def create(
        order_id: str,
        selection: DrinkSelection,
        cacao_normalized: str,
        price: int,
        created_at: int,
    ) -> OrderRecord:
        return OrderRecord(
            order_id=order_id,
            cacao_normalized=cacao_normalized,
            is_iced=selection.is_iced,
            size=selection.size,
            has_topping=selection.has_topping,
            shot_count=selection.shot_count,
            price=price,
            created_at=created_at,
            expires_at=created_at + ORDER_TTL_MS,
        )

    def is_expired(self, now: int) -> bool:
        return now > self.expires_at
