"""JSON-file implementation of UnitOfWork.

Each collection lives in its own ``<name>.json`` file under the data
directory. Entering the unit of work takes an exclusive ``flock`` on
``<data_dir>/.lock`` and loads every collection into memory; the
repositories then work on those rows. ``commit()`` writes each
collection to a temporary file and swaps them all into place with
``os.replace``. Leaving the block releases the lock and forgets any
uncommitted rows.

The lock serializes whole use cases across processes, so a stock
check and the following decrement can never interleave with another
writer.
"""

from __future__ import annotations

import fcntl
import json
import os
from pathlib import Path
from typing import IO

import structlog

from procure.domain.repository.unit_of_work import UnitOfWork
from procure.infrastructure.persistence.json_movement_repository import (
    JsonMovementRepository,
)
from procure.infrastructure.persistence.json_order_detail_repository import (
    JsonOrderDetailRepository,
)
from procure.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from procure.infrastructure.persistence.json_purchase_order_repository import (
    JsonPurchaseOrderRepository,
)
from procure.infrastructure.persistence.json_receipt_repository import (
    JsonReceiptRepository,
)
from procure.infrastructure.persistence.json_supplier_repository import (
    JsonSupplierRepository,
)

logger = structlog.get_logger(__name__)

COLLECTIONS = (
    "products",
    "suppliers",
    "orders",
    "order_details",
    "movements",
    "receipts",
)


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._lock_handle: IO[str] | None = None
        self._rows: dict[str, list[dict]] = {}

    # --- UnitOfWork interface -------------------------------------------------

    def __enter__(self) -> JsonUnitOfWork:
        if self._lock_handle is not None:
            raise RuntimeError("JsonUnitOfWork is already active")
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._lock_handle = open(self._data_dir / ".lock", "a", encoding="utf-8")
        fcntl.flock(self._lock_handle.fileno(), fcntl.LOCK_EX)
        try:
            self._ensure_files()
            self._load()
        except Exception:
            self._release()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            logger.debug("unit_of_work.discarded", error=exc_type.__name__)
        self._rows = {}
        self._release()

    def commit(self) -> None:
        if self._lock_handle is None:
            raise RuntimeError("commit() called outside of a unit of work")
        staged: list[tuple[Path, Path]] = []
        for name in COLLECTIONS:
            target = self._path(name)
            tmp = target.with_suffix(".json.tmp")
            tmp.write_text(
                json.dumps(self._rows[name], indent=2) + "\n", encoding="utf-8"
            )
            staged.append((tmp, target))
        for tmp, target in staged:
            os.replace(tmp, target)

    def rollback(self) -> None:
        if self._lock_handle is not None:
            self._load()

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> None:
        self._rows = {
            name: json.loads(self._path(name).read_text(encoding="utf-8"))
            for name in COLLECTIONS
        }
        self.products = JsonProductRepository(self._rows["products"])
        self.suppliers = JsonSupplierRepository(self._rows["suppliers"])
        self.orders = JsonPurchaseOrderRepository(self._rows["orders"])
        self.order_details = JsonOrderDetailRepository(self._rows["order_details"])
        self.movements = JsonMovementRepository(self._rows["movements"])
        self.receipts = JsonReceiptRepository(self._rows["receipts"])

    def _release(self) -> None:
        if self._lock_handle is not None:
            fcntl.flock(self._lock_handle.fileno(), fcntl.LOCK_UN)
            self._lock_handle.close()
            self._lock_handle = None

    def _path(self, name: str) -> Path:
        return self._data_dir / f"{name}.json"

    def _ensure_files(self) -> None:
        for name in COLLECTIONS:
            path = self._path(name)
            if not path.exists():
                path.write_text("[]", encoding="utf-8")
