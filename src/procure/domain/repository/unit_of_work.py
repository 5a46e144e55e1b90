"""Abstract unit of work.

Every mutating use case runs inside ``with uow:`` and calls
``uow.commit()`` once its changes are complete. Leaving the block
without a commit, or through an exception, discards every change made
through the repositories, so a failed batch never leaves stock or order
lines half-written.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.repository.movement_repository import MovementRepository
from procure.domain.repository.order_detail_repository import OrderDetailRepository
from procure.domain.repository.product_repository import ProductRepository
from procure.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)
from procure.domain.repository.receipt_repository import ReceiptRepository
from procure.domain.repository.supplier_repository import SupplierRepository


class UnitOfWork(ABC):

    products: ProductRepository
    suppliers: SupplierRepository
    orders: PurchaseOrderRepository
    order_details: OrderDetailRepository
    movements: MovementRepository
    receipts: ReceiptRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Uncommitted work is always discarded; after commit() this is a no-op.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable in one step."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""
