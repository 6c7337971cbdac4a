"""Tests for settings and the composition root."""

from pathlib import Path

import pytest

from kiosk.domain.exceptions import ValidationError
from kiosk.domain.model.drink import DrinkSelection
from kiosk.domain.model.order import OrderRecord
from kiosk.domain.service.pricing import DEFAULT_PRICE_TABLE
from kiosk.infrastructure import bootstrap
from kiosk.infrastructure.config import DEFAULT_PORT, Settings, load_price_table
from kiosk.infrastructure.persistence.json_order_repository import JsonOrderRepository
from kiosk.infrastructure.persistence.kv_order_repository import KeyValueOrderRepository


class TestSettingsFromEnv:

    def test_defaults(self):
        cfg = Settings.from_env({})
        assert cfg.store_backend == "file"
        assert cfg.port == DEFAULT_PORT == 8787
        assert cfg.cors_origins == ()
        assert cfg.price_table_path is None
        assert cfg.orders_file.name == "orders.json"

    def test_overrides(self):
        cfg = Settings.from_env(
            {
                "KIOSK_STORE_BACKEND": " KV ",
                "KIOSK_DATA_DIR": "/var/lib/kiosk",
                "KIOSK_PRICE_TABLE": "/etc/kiosk/prices.json",
                "KIOSK_CORS_ORIGINS": "https://a.example, https://b.example,",
                "KIOSK_LOG_LEVEL": "debug",
                "KIOSK_PORT": "9000",
            }
        )
        assert cfg.store_backend == "kv"
        assert cfg.orders_file == Path("/var/lib/kiosk/orders.json")
        assert cfg.price_table_path == Path("/etc/kiosk/prices.json")
        assert cfg.cors_origins == ("https://a.example", "https://b.example")
        assert cfg.log_level == "DEBUG"
        assert cfg.port == 9000

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown store backend"):
            Settings.from_env({"KIOSK_STORE_BACKEND": "postgres"})

    def test_bad_port(self):
        with pytest.raises(ValidationError, match="KIOSK_PORT"):
            Settings.from_env({"KIOSK_PORT": "http"})


class TestLoadPriceTable:

    def test_default_when_unset(self):
        assert load_price_table(None) is DEFAULT_PRICE_TABLE

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Cannot read price table"):
            load_price_table(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "prices.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ValidationError, match="not valid JSON"):
            load_price_table(path)


class TestBootstrap:

    def test_file_backend(self, tmp_path):
        cfg = Settings(data_dir=tmp_path)
        assert isinstance(bootstrap.order_repository(cfg), JsonOrderRepository)

    def test_kv_backend_shares_one_binding(self):
        cfg = Settings(store_backend="kv")
        first = bootstrap.order_repository(cfg)
        second = bootstrap.order_repository(cfg)
        assert isinstance(first, KeyValueOrderRepository)

        order = OrderRecord.create(
            order_id="VG-SHARED01",
            selection=DrinkSelection.from_raw(),
            cacao_normalized="MILK",
            price=6800,
            created_at=0,
        )
        first.save(order)
        assert second.get_by_id("VG-SHARED01") == order

    def test_web_app_uses_settings(self, tmp_path):
        app = bootstrap.web_app(Settings(data_dir=tmp_path))
        response = app.test_client().get("/api/health")
        assert response.get_json()["backend"] == "file"
