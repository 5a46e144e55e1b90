"""Abstract repository for the PurchaseOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.model.purchase_order import OrderStatus, PurchaseOrder


class PurchaseOrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, order_number: str) -> PurchaseOrder | None:
        """Return an order by its unique order number, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[PurchaseOrder]:
        """Return every order ordered by ID."""

    def list_by_status(self, status: OrderStatus) -> list[PurchaseOrder]:
        return [o for o in self.list_all() if o.status == status]

    @abstractmethod
    def save(self, order: PurchaseOrder) -> None:
        """Persist a new or updated order. Assigns an ID to new orders."""
