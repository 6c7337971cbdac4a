"""Key-value-backed implementation of OrderRepository.

One key per order, the value being the JSON record.  Orders are
independent keys, so the binding's per-call atomicity is all the
coordination needed.
"""

from __future__ import annotations

import json
import logging

from kiosk.domain.exceptions import StorageError
from kiosk.domain.model.order import OrderRecord
from kiosk.domain.repository.key_value_store import KeyValueStore
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.infrastructure.persistence.record_codec import to_domain, to_raw

logger = logging.getLogger(__name__)


class KeyValueOrderRepository(OrderRepository):

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get_by_id(self, order_id: str) -> OrderRecord | None:
        try:
            raw = self._store.get(order_id)
        except Exception as exc:
            logger.error("Key-value read for %s failed: %s", order_id, exc)
            raise StorageError("Failed to read order") from exc

        if not raw:
            return None

        try:
            return to_domain(json.loads(raw))
        except ValueError as exc:
            raise StorageError("Invalid order data") from exc

    def save(self, order: OrderRecord) -> None:
        value = json.dumps(to_raw(order))
        try:
            self._store.put(order.order_id, value)
        except Exception as exc:
            logger.error("Key-value write for %s failed: %s", order.order_id, exc)
            raise StorageError("Failed to store order") from exc
