"""Runtime settings read from the environment.

Values may also come from a ``.env`` file; the CLI loads it with
python-dotenv before settings are read.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from kiosk.domain.exceptions import ValidationError
from kiosk.domain.service.pricing import DEFAULT_PRICE_TABLE, PriceTable

BACKEND_FILE = "file"
BACKEND_KV = "kv"
BACKENDS = (BACKEND_FILE, BACKEND_KV)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_PORT = 8787


@dataclass(frozen=True)
class Settings:
    store_backend: str = BACKEND_FILE
    data_dir: Path = DEFAULT_DATA_DIR
    price_table_path: Path | None = None
    cors_origins: tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if self.store_backend not in BACKENDS:
            raise ValidationError(
                f"Unknown store backend {self.store_backend!r}; "
                f"expected one of {', '.join(BACKENDS)}"
            )

    @property
    def orders_file(self) -> Path:
        return self.data_dir / "orders.json"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        price_table = env.get("KIOSK_PRICE_TABLE", "").strip()
        origins = env.get("KIOSK_CORS_ORIGINS", "")
        port = env.get("KIOSK_PORT", "").strip()
        try:
            port_number = int(port) if port else DEFAULT_PORT
        except ValueError as exc:
            raise ValidationError(f"KIOSK_PORT must be an integer, got {port!r}") from exc

        return Settings(
            store_backend=env.get("KIOSK_STORE_BACKEND", BACKEND_FILE).strip().lower(),
            data_dir=Path(env["KIOSK_DATA_DIR"]) if env.get("KIOSK_DATA_DIR") else DEFAULT_DATA_DIR,
            price_table_path=Path(price_table) if price_table else None,
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            log_level=env.get("KIOSK_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            host=env.get("KIOSK_HOST", "127.0.0.1").strip() or "127.0.0.1",
            port=port_number,
        )


def load_price_table(path: Path | None) -> PriceTable:
    """Read a JSON price table, or fall back to the canonical one."""
    if path is None:
        return DEFAULT_PRICE_TABLE
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValidationError(f"Cannot read price table {path}: {exc}") from exc
    except ValueError as exc:
        raise ValidationError(f"Price table {path} is not valid JSON") from exc
    return PriceTable.from_dict(raw)
