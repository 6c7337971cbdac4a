"""Tests for the key-value order repository."""

import json

import pytest

from kiosk.domain.exceptions import StorageError
from kiosk.domain.model.drink import DrinkSelection
from kiosk.domain.model.order import OrderRecord
from kiosk.infrastructure.persistence.in_memory_key_value_store import InMemoryKeyValueStore
from kiosk.infrastructure.persistence.kv_order_repository import KeyValueOrderRepository
from tests.fakes import BrokenKeyValueStore


def _order(order_id: str = "VG-ABCD1234") -> OrderRecord:
    return OrderRecord.create(
        order_id=order_id,
        selection=DrinkSelection.from_raw(cacao=40),
        cacao_normalized="MILK",
        price=6800,
        created_at=1_700_000_000_000,
    )


class TestKeyValueOrderRepository:

    def test_one_key_per_order(self):
        store = InMemoryKeyValueStore()
        repo = KeyValueOrderRepository(store)
        repo.save(_order("VG-AAAA0001"))
        repo.save(_order("VG-AAAA0002"))
        assert len(store) == 2
        assert json.loads(store.get("VG-AAAA0001"))["orderId"] == "VG-AAAA0001"

    def test_save_then_get(self):
        repo = KeyValueOrderRepository(InMemoryKeyValueStore())
        repo.save(_order())
        assert repo.get_by_id("VG-ABCD1234") == _order()

    def test_unknown_key(self):
        repo = KeyValueOrderRepository(InMemoryKeyValueStore())
        assert repo.get_by_id("VG-ABCD1234") is None

    def test_records_without_shot_count_read_as_one_shot(self):
        store = InMemoryKeyValueStore()
        raw = {
            "orderId": "VG-OLD00001",
            "cacaoNormalized": "70.5",
            "isIced": False,
            "size": "M",
            "hasTopping": True,
            "price": 7300,
            "status": "PENDING",
            "createdAt": 1,
            "expiresAt": 600_001,
        }
        store.put("VG-OLD00001", json.dumps(raw))
        order = KeyValueOrderRepository(store).get_by_id("VG-OLD00001")
        assert order.shot_count == 1
        assert order.has_topping is True

    def test_undecodable_value(self):
        store = InMemoryKeyValueStore()
        store.put("VG-ABCD1234", "not json")
        with pytest.raises(StorageError, match="Invalid order data"):
            KeyValueOrderRepository(store).get_by_id("VG-ABCD1234")

    def test_unreachable_binding_on_write(self):
        repo = KeyValueOrderRepository(BrokenKeyValueStore())
        with pytest.raises(StorageError, match="Failed to store order"):
            repo.save(_order())

    def test_unreachable_binding_on_read(self):
        repo = KeyValueOrderRepository(BrokenKeyValueStore())
        with pytest.raises(StorageError, match="Failed to read order"):
            repo.get_by_id("VG-ABCD1234")
