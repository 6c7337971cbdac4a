"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from flask import Flask

from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.domain.service.pricing import PriceTable
from kiosk.infrastructure.config import BACKEND_KV, Settings, load_price_table
from kiosk.infrastructure.http.app import create_app
from kiosk.infrastructure.persistence.in_memory_key_value_store import (
    InMemoryKeyValueStore,
)
from kiosk.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from kiosk.infrastructure.persistence.kv_order_repository import (
    KeyValueOrderRepository,
)


def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def key_value_store() -> InMemoryKeyValueStore:
    # One binding per process, like a platform-provided namespace.
    return InMemoryKeyValueStore()


def order_repository(cfg: Settings | None = None) -> OrderRepository:
    cfg = cfg or settings()
    if cfg.store_backend == BACKEND_KV:
        return KeyValueOrderRepository(key_value_store())
    return JsonOrderRepository(cfg.orders_file)


def price_table(cfg: Settings | None = None) -> PriceTable:
    cfg = cfg or settings()
    return load_price_table(cfg.price_table_path)


def web_app(cfg: Settings | None = None) -> Flask:
    cfg = cfg or settings()
    return create_app(
        order_repository(cfg),
        price_table=price_table(cfg),
        cors_origins=cfg.cors_origins,
        backend=cfg.store_backend,
    )
