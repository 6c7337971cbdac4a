"""HTTP endpoints for orders."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import MethodNotAllowed

from kiosk.application.create_order import CreateOrderHandler
from kiosk.application.show_order import ShowOrderHandler
from kiosk.domain.exceptions import StorageError, ValidationError
from kiosk.domain.model.drink import DrinkSelection

logger = logging.getLogger(__name__)

bp = Blueprint("orders", __name__)

EXTENSION_KEY = "kiosk.orders"


@dataclass(frozen=True)
class OrderEndpoints:
    """Handlers the blueprint dispatches to; None when no store is bound."""

    create_handler: CreateOrderHandler | None
    show_handler: ShowOrderHandler | None
    backend: str


def _endpoints() -> OrderEndpoints:
    return current_app.extensions[EXTENSION_KEY]


def _parse_selection() -> DrinkSelection:
    try:
        payload = json.loads(request.get_data(as_text=True))
    except ValueError as exc:
        raise ValidationError("Invalid JSON body") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    return DrinkSelection.from_raw(
        cacao=payload.get("cacao"),
        is_iced=payload.get("isIced"),
        size=payload.get("size"),
        has_topping=payload.get("hasTopping"),
        shot_count=payload.get("shotCount"),
    )


@bp.route("/api/orders", methods=["GET", "POST"])
def orders_collection():
    if request.method != "POST":
        # GET is routed here so it is not redirected to the trailing-slash rule
        raise MethodNotAllowed(valid_methods=["POST"])

    handler = _endpoints().create_handler
    if handler is None:
        raise StorageError("Order store binding is missing")

    selection = _parse_selection()
    dto = handler.handle(selection)
    return jsonify(dto.to_json()), 200


@bp.get("/api/orders/")
def order_id_missing():
    raise ValidationError("Order ID is required")


@bp.get("/api/orders/<order_id>")
def get_order(order_id: str):
    handler = _endpoints().show_handler
    if handler is None:
        raise StorageError("Order store binding is missing")

    dto = handler.handle(order_id)
    return jsonify(dto.to_json()), 200


@bp.get("/api/health")
def health():
    return jsonify({"status": "healthy", "backend": _endpoints().backend}), 200
