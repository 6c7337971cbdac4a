"""Application service: Create Order use case.

Orchestrates pricing, identifier generation and persistence.  The price
is computed exactly once, here, and stored with the record.
"""

from __future__ import annotations

import logging
from typing import Callable

from kiosk.application.dto import CreatedOrderDTO
from kiosk.domain.exceptions import StorageError
from kiosk.domain.model.drink import DrinkSelection
from kiosk.domain.model.order import Clock, OrderRecord, now_ms
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.service.order_id import generate_order_id
from kiosk.domain.service.pricing import DEFAULT_PRICE_TABLE, PriceTable, compute_price

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        price_table: PriceTable = DEFAULT_PRICE_TABLE,
        clock: Clock = now_ms,
        id_generator: Callable[[], str] = generate_order_id,
    ) -> None:
        self._order_repo = order_repo
        self._price_table = price_table
        self._clock = clock
        self._id_generator = id_generator

    def handle(self, selection: DrinkSelection) -> CreatedOrderDTO:
        """Create a new pending order.

        Steps:
        1. Price the selection against the active price table.
        2. Mint an identifier and stamp creation/expiry times.
        3. Persist; a failed write propagates and nothing is returned.
        """
        tier, price = compute_price(
            selection.cacao,
            selection.is_iced,
            selection.size,
            selection.has_topping,
            selection.shot_count,
            table=self._price_table,
        )

        order = OrderRecord.create(
            order_id=self._id_generator(),
            selection=selection,
            cacao_normalized=tier,
            price=price,
            created_at=self._clock(),
        )

        try:
            self._order_repo.save(order)
        except StorageError:
            logger.exception("Failed to store order %s", order.order_id)
            raise

        logger.info("Order %s created (tier=%s, price=%d)", order.order_id, tier, price)
        return CreatedOrderDTO(
            order_id=order.order_id,
            price=order.price,
            expires_at=order.expires_at,
        )
