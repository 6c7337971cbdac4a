"""Flask application factory.

Every response, errors included, is JSON.  Domain exceptions are mapped
to status codes here and nowhere else.
"""

from __future__ import annotations

import logging
from typing import Sequence

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed

from kiosk.application.create_order import CreateOrderHandler
from kiosk.application.show_order import ShowOrderHandler
from kiosk.domain.exceptions import (
    EntityNotFoundError,
    OrderExpiredError,
    StorageError,
    ValidationError,
)
from kiosk.domain.model.order import Clock, OrderStatus, now_ms
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.service.pricing import DEFAULT_PRICE_TABLE, PriceTable
from kiosk.infrastructure.http.order_routes import EXTENSION_KEY, OrderEndpoints, bp

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 50 * 1024


def create_app(
    order_repo: OrderRepository | None,
    price_table: PriceTable = DEFAULT_PRICE_TABLE,
    clock: Clock = now_ms,
    cors_origins: Sequence[str] = (),
    backend: str = "custom",
) -> Flask:
    """Build the order API around *order_repo*.

    Passing ``None`` models a deployment whose store binding is missing:
    the app still starts, and order endpoints answer 500.
    """
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = MAX_BODY_BYTES

    if cors_origins:
        CORS(app, resources={r"/api/*": {"origins": list(cors_origins)}})
    else:
        _reject_options(app)

    if order_repo is None:
        logger.warning("No order store bound; order endpoints will fail")
        endpoints = OrderEndpoints(None, None, backend)
    else:
        endpoints = OrderEndpoints(
            create_handler=CreateOrderHandler(order_repo, price_table=price_table, clock=clock),
            show_handler=ShowOrderHandler(order_repo, clock=clock),
            backend=backend,
        )
    app.extensions[EXTENSION_KEY] = endpoints

    app.register_blueprint(bp)
    _register_error_handlers(app)
    return app


def _reject_options(app: Flask) -> None:
    """Answer OPTIONS with 405; only CORS preflight gives it a meaning."""

    @app.before_request
    def options_not_allowed():
        if request.method != "OPTIONS" or request.url_rule is None:
            return None
        if request.endpoint == "orders.orders_collection":
            raise MethodNotAllowed(valid_methods=["POST"])
        raise MethodNotAllowed(
            valid_methods=sorted(request.url_rule.methods - {"HEAD", "OPTIONS"})
        )


def _register_error_handlers(app: Flask) -> None:

    @app.errorhandler(ValidationError)
    def bad_request(exc: ValidationError):
        return jsonify({"message": str(exc)}), 400

    @app.errorhandler(EntityNotFoundError)
    def not_found(exc: EntityNotFoundError):
        return jsonify({"message": "Order not found"}), 404

    @app.errorhandler(OrderExpiredError)
    def expired(exc: OrderExpiredError):
        return jsonify({"status": OrderStatus.EXPIRED.value}), 410

    @app.errorhandler(StorageError)
    def storage_failure(exc: StorageError):
        logger.error("Storage failure: %s", exc)
        return jsonify({"message": str(exc)}), 500

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        message = "Method not allowed" if exc.code == 405 else exc.name
        response = jsonify({"message": message})
        response.status_code = exc.code or 500
        if isinstance(exc, MethodNotAllowed) and exc.valid_methods:
            response.headers["Allow"] = ", ".join(exc.valid_methods)
        return response
