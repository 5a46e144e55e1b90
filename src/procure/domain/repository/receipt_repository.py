"""Abstract store for receiving batches submitted with an idempotency key."""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.model.receipt import ReceiptRecord


class ReceiptRepository(ABC):

    @abstractmethod
    def get_by_key(self, idempotency_key: str) -> ReceiptRecord | None:
        """Return the record stored under *idempotency_key*, or None."""

    @abstractmethod
    def add(self, record: ReceiptRecord) -> None:
        """Store a new record. Keys are never overwritten."""
