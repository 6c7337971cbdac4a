"""Application service: Show Order use case (query)."""

from __future__ import annotations

import logging

from kiosk.application.dto import OrderDTO
from kiosk.domain.exceptions import EntityNotFoundError, OrderExpiredError, ValidationError
from kiosk.domain.model.order import Clock, now_ms
from kiosk.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, clock: Clock = now_ms) -> None:
        self._order_repo = order_repo
        self._clock = clock

    def handle(self, order_id: str) -> OrderDTO:
        """Return the stored order unless it is unknown or expired.

        Expiry is evaluated against the clock on every call; the stored
        status is never rewritten.
        """
        if not order_id or not order_id.strip():
            raise ValidationError("Order ID is required")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            logger.debug("Order %s not found", order_id)
            raise EntityNotFoundError(f"Order {order_id} not found")

        if order.is_expired(self._clock()):
            logger.info("Order %s looked up after expiry", order_id)
            raise OrderExpiredError(f"Order {order_id} has expired")

        return OrderDTO.from_record(order)
