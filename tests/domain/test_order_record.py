"""Unit tests for the OrderRecord aggregate."""

import dataclasses

import pytest

from kiosk.domain.model.drink import DrinkSelection
from kiosk.domain.model.order import ORDER_TTL_MS, OrderRecord, OrderStatus


def _make_order(created_at: int = 1_000_000) -> OrderRecord:
    return OrderRecord.create(
        order_id="VG-ABCD1234",
        selection=DrinkSelection.from_raw(cacao=90, is_iced=True, size="L"),
        cacao_normalized="100",
        price=9500,
        created_at=created_at,
    )


class TestOrderCreation:

    def test_starts_pending(self):
        assert _make_order().status == OrderStatus.PENDING

    def test_expiry_is_ten_minutes_after_creation(self):
        order = _make_order(created_at=5_000)
        assert ORDER_TTL_MS == 600_000
        assert order.expires_at == 605_000

    def test_copies_normalized_selection(self):
        order = _make_order()
        assert order.is_iced is True
        assert order.size == "L"
        assert order.has_topping is False
        assert order.shot_count == 1

    def test_price_cannot_be_changed(self):
        order = _make_order()
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.price = 1  # type: ignore[misc]


class TestOrderExpiry:

    def test_not_expired_at_exact_deadline(self):
        order = _make_order(created_at=0)
        assert not order.is_expired(ORDER_TTL_MS)

    def test_expired_one_ms_after_deadline(self):
        order = _make_order(created_at=0)
        assert order.is_expired(ORDER_TTL_MS + 1)

    def test_expiry_does_not_change_stored_status(self):
        order = _make_order(created_at=0)
        order.is_expired(ORDER_TTL_MS * 2)
        assert order.status == OrderStatus.PENDING
