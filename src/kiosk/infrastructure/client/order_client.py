"""HTTP client for the order API, used by the kiosk and POS collaborators.

Creating an order is not idempotent: every successful POST mints a new
identifier, so callers must not blindly retry ``create_order`` after an
ambiguous failure such as a timeout.  ``get_order`` is safe to retry.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from kiosk.application.dto import CreatedOrderDTO
from kiosk.domain.exceptions import DomainException, EntityNotFoundError, OrderExpiredError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0


class OrderApiError(DomainException):
    """The order API could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OrderApiClient:

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def create_order(self, selection: dict[str, Any]) -> CreatedOrderDTO:
        """Submit a drink selection; returns the id, price and expiry."""
        if not isinstance(selection, dict):
            raise ValueError("selection is required")

        response = self._request("POST", "/api/orders", json=selection)
        if not response.ok:
            raise OrderApiError(_error_message(response), response.status_code)

        data = _json_or_none(response) or {}
        order_id = data.get("orderId")
        price = data.get("price")
        expires_at = data.get("expiresAt")
        if (
            not order_id
            or isinstance(price, bool)
            or not isinstance(price, int)
            or not expires_at
        ):
            raise OrderApiError("Invalid response from server", response.status_code)

        return CreatedOrderDTO(order_id=order_id, price=price, expires_at=int(expires_at))

    def get_order(self, order_id: str) -> dict[str, Any]:
        """Fetch the stored record for *order_id*."""
        response = self._request("GET", f"/api/orders/{order_id}")
        if response.status_code == 410:
            raise OrderExpiredError(f"Order {order_id} has expired")
        if response.status_code == 404:
            raise EntityNotFoundError(f"Order {order_id} not found")
        if not response.ok:
            raise OrderApiError(_error_message(response), response.status_code)

        data = _json_or_none(response)
        if not isinstance(data, dict):
            raise OrderApiError("Invalid response from server", response.status_code)
        return data

    # --- Internal helpers -----------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._base_url + path
        try:
            return self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.Timeout as exc:
            logger.warning("%s %s timed out after %ss", method, url, self._timeout)
            raise OrderApiError("Request timed out") from exc
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise OrderApiError("Request failed") from exc


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(response: requests.Response) -> str:
    data = _json_or_none(response)
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return f"Request failed with status {response.status_code}"
