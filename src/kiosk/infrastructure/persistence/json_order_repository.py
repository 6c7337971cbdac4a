"""JSON-file-backed implementation of OrderRepository.

All orders live in one JSON array.  Writes go through one single-worker
queue per file path, shared by every repository instance in the process,
so they run one at a time in submission order.  Each write replaces the
file atomically: the array is written to a sibling ``.tmp`` file, synced,
then renamed over the real file.  Readers take no lock and always see a
complete old or new file.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from kiosk.domain.exceptions import StorageError
from kiosk.domain.model.order import OrderRecord
from kiosk.domain.repository.order_repository import OrderRepository
from kiosk.infrastructure.persistence.record_codec import to_domain, to_raw

logger = logging.getLogger(__name__)

_write_queues: dict[Path, ThreadPoolExecutor] = {}
_write_queues_guard = threading.Lock()


def _write_queue_for(path: Path) -> ThreadPoolExecutor:
    with _write_queues_guard:
        queue = _write_queues.get(path)
        if queue is None:
            queue = ThreadPoolExecutor(max_workers=1, thread_name_prefix="order-writer")
            _write_queues[path] = queue
        return queue


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        self._tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        self._write_queue = _write_queue_for(self._file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> OrderRecord | None:
        for raw in self._load_raw():
            if isinstance(raw, dict) and raw.get("orderId") == order_id:
                return to_domain(raw)
        return None

    def save(self, order: OrderRecord) -> None:
        # blocks until this write, and every write queued before it, is done;
        # a StorageError raised by the writer is re-raised here
        self._write_queue.submit(self._append, to_raw(order)).result()

    def _append(self, raw: dict) -> None:
        orders = self._load_raw()
        orders.append(raw)
        self._persist_raw(orders)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.error("Cannot read order store %s: %s", self._file_path, exc)
            raise StorageError("Failed to read orders") from exc

        try:
            parsed = json.loads(text)
        except ValueError as exc:
            logger.error("Order store %s is not valid JSON", self._file_path)
            raise StorageError("Failed to read orders") from exc

        return parsed if isinstance(parsed, list) else []

    def _persist_raw(self, orders: list[dict]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._tmp_path, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(orders, indent=2) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(self._tmp_path, self._file_path)
        except OSError as exc:
            logger.error("Cannot write order store %s: %s", self._file_path, exc)
            self._discard_tmp()
            raise StorageError("Failed to store order") from exc

    def _discard_tmp(self) -> None:
        try:
            self._tmp_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove %s: %s", self._tmp_path, exc)
