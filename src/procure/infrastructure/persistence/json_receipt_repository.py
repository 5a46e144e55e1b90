"""JSON-backed implementation of ReceiptRepository."""

from __future__ import annotations

from datetime import datetime

from procure.domain.exceptions import InvalidOrderOperationError
from procure.domain.model.receipt import ReceiptRecord
from procure.domain.repository.receipt_repository import ReceiptRepository


class JsonReceiptRepository(ReceiptRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def get_by_key(self, idempotency_key: str) -> ReceiptRecord | None:
        for raw in self._rows:
            if raw["idempotency_key"] == idempotency_key:
                return ReceiptRecord(
                    idempotency_key=raw["idempotency_key"],
                    order_id=raw["order_id"],
                    summary=raw["summary"],
                    created_at=datetime.fromisoformat(raw["created_at"]),
                )
        return None

    def add(self, record: ReceiptRecord) -> None:
        if self.get_by_key(record.idempotency_key) is not None:
            raise InvalidOrderOperationError(
                f"Idempotency key '{record.idempotency_key}' is already in use"
            )
        self._rows.append(
            {
                "idempotency_key": record.idempotency_key,
                "order_id": record.order_id,
                "summary": record.summary,
                "created_at": record.created_at.isoformat(),
            }
        )
