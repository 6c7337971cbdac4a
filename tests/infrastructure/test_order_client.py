"""Tests for the order API client, using a fake requests session."""

import pytest
import requests

from kiosk.domain.exceptions import EntityNotFoundError, OrderExpiredError
from kiosk.infrastructure.client.order_client import OrderApiClient, OrderApiError
from tests.fakes import FakeSession, make_response


def _client(*responses):
    session = FakeSession(*responses)
    return OrderApiClient("https://order.example/", session=session), session


class TestCreateOrder:

    def test_posts_selection_and_parses_reply(self):
        client, session = _client(
            make_response(200, {"orderId": "VG-ABCD1234", "price": 9500, "expiresAt": 123})
        )
        dto = client.create_order({"cacao": 90, "isIced": True, "size": "L"})

        assert dto.order_id == "VG-ABCD1234"
        assert dto.price == 9500
        assert dto.expires_at == 123
        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["url"] == "https://order.example/api/orders"
        assert call["json"] == {"cacao": 90, "isIced": True, "size": "L"}
        assert call["timeout"] == 8.0

    def test_rejects_non_dict_payload(self):
        client, session = _client()
        with pytest.raises(ValueError, match="selection is required"):
            client.create_order(None)
        assert session.calls == []

    def test_server_message_is_surfaced(self):
        client, _ = _client(make_response(500, {"message": " Failed to store order "}))
        with pytest.raises(OrderApiError, match="^Failed to store order$") as info:
            client.create_order({})
        assert info.value.status_code == 500

    def test_generic_message_without_json(self):
        client, _ = _client(make_response(502, text="<html>bad gateway</html>"))
        with pytest.raises(OrderApiError, match="Request failed with status 502"):
            client.create_order({})

    @pytest.mark.parametrize(
        "body",
        [
            {"price": 9500, "expiresAt": 1},
            {"orderId": "VG-ABCD1234", "price": "9500", "expiresAt": 1},
            {"orderId": "VG-ABCD1234", "price": 9500},
        ],
    )
    def test_incomplete_reply(self, body):
        client, _ = _client(make_response(200, body))
        with pytest.raises(OrderApiError, match="Invalid response from server"):
            client.create_order({})

    def test_timeout(self):
        client, _ = _client(requests.Timeout("slow"))
        with pytest.raises(OrderApiError, match="Request timed out"):
            client.create_order({})

    def test_connection_error(self):
        client, _ = _client(requests.ConnectionError("refused"))
        with pytest.raises(OrderApiError, match="Request failed"):
            client.create_order({})


class TestGetOrder:

    def test_returns_record(self):
        record = {"orderId": "VG-ABCD1234", "price": 9500, "status": "PENDING"}
        client, session = _client(make_response(200, record))
        assert client.get_order("VG-ABCD1234") == record
        assert session.calls[0]["url"] == "https://order.example/api/orders/VG-ABCD1234"

    def test_expired(self):
        client, _ = _client(make_response(410, {"status": "EXPIRED"}))
        with pytest.raises(OrderExpiredError):
            client.get_order("VG-ABCD1234")

    def test_not_found(self):
        client, _ = _client(make_response(404, {"message": "Order not found"}))
        with pytest.raises(EntityNotFoundError):
            client.get_order("VG-ABCD1234")

    def test_server_error(self):
        client, _ = _client(make_response(500, {"message": "Invalid order data"}))
        with pytest.raises(OrderApiError, match="Invalid order data"):
            client.get_order("VG-ABCD1234")
